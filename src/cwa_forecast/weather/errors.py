"""Error types raised while serving a city forecast."""

from typing import Any, Optional


class WeatherServiceError(Exception):
    """Base class for forecast failures that map to an HTTP response."""

    status_code: int = 500
    title: str = "server error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidCityError(WeatherServiceError):
    """Raised when the caller-supplied city token is malformed."""

    status_code = 400
    title = "invalid city parameter"


class ConfigurationError(WeatherServiceError):
    """Raised when the upstream credential is not configured."""

    status_code = 500
    title = "server configuration error"


class LocationNotFoundError(WeatherServiceError):
    """Raised when the provider recognizes no location for the resolved name."""

    status_code = 404
    title = "no data found"


class UpstreamError(WeatherServiceError):
    """Raised when the provider answers with a non-success status."""

    title = "CWA API error"

    def __init__(self, status_code: int, body: Any, message: Optional[str] = None):
        if message is None:
            message = _extract_message(body) or "unable to fetch weather data"
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class NetworkError(WeatherServiceError):
    """Raised on connection-level failures talking to the provider."""

    status_code = 500
    title = "network error"


def _extract_message(body: Any) -> Optional[str]:
    if isinstance(body, dict):
        message = body.get("message")
        if message:
            return str(message)
    return None
