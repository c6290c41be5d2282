"""Exceptions raised by the forecast announcer pipeline."""

from typing import Optional


class ForecastAnnouncerError(Exception):
    """Base class for all service errors."""
    pass


class ConfigurationError(ForecastAnnouncerError):
    """Raised when a required setting is missing at startup."""
    pass


class ValidationError(ForecastAnnouncerError):
    """Raised when a forecast request is missing its location."""
    pass


class LocationNotFoundError(ForecastAnnouncerError):
    """Raised when the geocoding service returns no matches."""

    def __init__(self, message: str = "Location not found"):
        super().__init__(message)


class WeatherServiceError(ForecastAnnouncerError):
    """Raised when the weather service fails or answers with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @classmethod
    def from_response(cls, status_code: int, body: str) -> "WeatherServiceError":
        """Build an error for a non-success HTTP response."""
        return cls(f"Weather API error: {status_code} - {body}", status_code=status_code, body=body)


class ParseError(ForecastAnnouncerError):
    """Raised when model output does not match the expected structure."""

    def __init__(self, message: str, text: Optional[str] = None):
        super().__init__(message)
        self.text = text


def with_context(error: ForecastAnnouncerError, context: str) -> ForecastAnnouncerError:
    """Return a copy of ``error`` whose message is prefixed with ``context``.

    The error type and any status information are preserved.
    """
    message = f"{context}: {error}"
    if isinstance(error, WeatherServiceError):
        return WeatherServiceError(message, status_code=error.status_code, body=error.body)
    if isinstance(error, ParseError):
        return ParseError(message, text=error.text)
    return type(error)(message)
