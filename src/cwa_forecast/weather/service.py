"""Weather service orchestrating city lookup, fetch and reshape."""

import logging
import re
from typing import List, Optional

from cwa_forecast.config import UpstreamConfig, get_upstream_config
from cwa_forecast.weather.cities import CityDirectory, city_directory
from cwa_forecast.weather.client import CwaWeatherClient
from cwa_forecast.weather.errors import ConfigurationError, InvalidCityError
from cwa_forecast.weather.models import CityEntry, CityForecast
from cwa_forecast.weather.transform import transform

logger = logging.getLogger(__name__)

# ASCII letters, digits, hyphen and CJK unified ideographs
CITY_TOKEN_PATTERN = re.compile(r"[\u4e00-\u9fa5a-zA-Z0-9-]+")


def validate_city_token(token: Optional[str]) -> str:
    """Check a caller-supplied city token.

    Args:
        token: City ID or location name from the request path

    Returns:
        The token unchanged

    Raises:
        InvalidCityError: If the token is empty or has disallowed characters
    """
    if not token or not CITY_TOKEN_PATTERN.fullmatch(token):
        raise InvalidCityError(
            "City ID may only contain English letters, digits, hyphens or Chinese characters"
        )
    return token


class WeatherService:
    """Service producing city forecasts from the CWA API."""

    def __init__(
        self,
        client: Optional[CwaWeatherClient] = None,
        directory: Optional[CityDirectory] = None,
        config: Optional[UpstreamConfig] = None
    ):
        """Initialize the weather service.

        Args:
            client: CWA client instance (creates default if None)
            directory: City directory (uses the shared one if None)
            config: Upstream settings (taken from the client if None)
        """
        if client is None:
            client = CwaWeatherClient(config=config or get_upstream_config())
        self.client = client
        self.config = config or client.config
        self.directory = directory or city_directory

    def supported_cities(self) -> List[CityEntry]:
        return self.directory.list_all()

    async def get_city_forecast(self, token: str) -> CityForecast:
        """Get the 36-hour forecast for a city ID or location name.

        Args:
            token: City ID (e.g. 'taipei') or location name (e.g. '臺北市')

        Returns:
            CityForecast for the resolved location

        Raises:
            InvalidCityError: If the token is malformed
            ConfigurationError: If no API key is configured
            UpstreamError: If the CWA API answers with an error status
            NetworkError: If the CWA API cannot be reached
            LocationNotFoundError: If CWA knows no such location
        """
        validate_city_token(token)

        if not self.config.has_credential:
            raise ConfigurationError("CWA_API_KEY is not configured; set it in the .env file")

        location_name = self.directory.resolve(token)
        logger.info(f"Resolved city '{token}' to '{location_name}'")

        raw_data = await self.client.fetch(location_name)
        return transform(raw_data)

    async def aclose(self):
        """Close the weather client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
