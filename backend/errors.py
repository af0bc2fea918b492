"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class VehicleSearchError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code

    def to_dict(self) -> dict:
        return {"error": str(self)}


class ValidationError(VehicleSearchError):
    def __init__(self, missing: list[str]):
        super().__init__(f"Missing required parameters: {', '.join(missing)}", status_code=400)
        self.missing = missing


class ConfigurationError(VehicleSearchError):
    def __init__(self, message: str, hint: str):
        super().__init__(message, status_code=500)
        self.hint = hint

    def to_dict(self) -> dict:
        return {"error": str(self), "message": self.hint}


class UpstreamError(VehicleSearchError):
    """Non-success response from the listings provider, passed through as-is."""

    def __init__(self, status: int, details: str):
        super().__init__("Marketcheck API request failed", status_code=status)
        self.status = status
        self.details = details

    def to_dict(self) -> dict:
        return {"error": str(self), "status": self.status, "details": self.details}


class UnexpectedError(VehicleSearchError):
    def __init__(self, message: str):
        super().__init__("Internal server error", status_code=500)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": str(self), "message": self.message}


class RateLimitExceededError(VehicleSearchError):
    def __init__(self, retry_after: int):
        super().__init__("Too many requests, please try again later.", status_code=429)
        self.retry_after = retry_after


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(VehicleSearchError)
    async def handle_vehicle_search_error(_request: Request, exc: VehicleSearchError):
        return JSONResponse(exc.to_dict(), status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(_request: Request, exc: RequestValidationError):
        fields = sorted({str(err["loc"][-1]) for err in exc.errors()})
        return JSONResponse({"error": f"Invalid parameters: {', '.join(fields)}"}, status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(UnexpectedError(str(exc)).to_dict(), status_code=500)
