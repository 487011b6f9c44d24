"""Errors raised by the weather dashboard client."""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from weather_dashboard.client.models import ErrorResponse

logger = logging.getLogger(__name__)


class WeatherDashboardError(Exception):
    """Raised when the backend answers with a structured error body."""

    def __init__(
        self,
        message: str,
        code: int,
        details: Optional[str] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(f"{message} (Code: {code})")
        self.message = message
        self.code = code
        self.details = details
        self.status_code = status_code

    @classmethod
    def from_error_response(cls, body: ErrorResponse, status_code: Optional[int] = None) -> "WeatherDashboardError":
        return cls(
            message=body.error.message,
            code=body.error.code,
            details=body.error.details,
            status_code=status_code
        )


def parse_error_response(response: httpx.Response) -> Optional[ErrorResponse]:
    """Return the structured error body of a response, or None if it has none."""
    try:
        return ErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        return None


def raise_for_error(response: httpx.Response) -> None:
    """Normalize failed responses.

    Raises:
        WeatherDashboardError: If the body matches {"error": {"code", "message"}}
        httpx.HTTPStatusError: If the response failed without a structured body
    """
    if response.is_success:
        return

    body = parse_error_response(response)
    if body is None:
        logger.error(f"HTTP error from dashboard API: {response.status_code} - {response.text}")
        response.raise_for_status()

    error = WeatherDashboardError.from_error_response(body, status_code=response.status_code)
    logger.error(f"Dashboard API error on {response.request.method} {response.request.url.path}: {error}")
    raise error
