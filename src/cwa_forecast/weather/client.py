"""HTTP client for the CWA open-data forecast API."""

import logging
from typing import Any, Dict, Optional

import httpx

from cwa_forecast.config import UpstreamConfig, get_upstream_config
from cwa_forecast.weather.errors import ConfigurationError, NetworkError, UpstreamError

logger = logging.getLogger(__name__)


class CwaWeatherClient:
    """Async client fetching the 36-hour forecast from the CWA datastore."""

    def __init__(
        self,
        config: Optional[UpstreamConfig] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        """Initialize the weather client.

        Args:
            config: Upstream settings (reads the environment if None)
            client: HTTP client to use (creates and owns one if None)
        """
        self.config = config or get_upstream_config()
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=self.config.timeout_seconds)

    async def fetch(self, location_name: str) -> Dict[str, Any]:
        """Fetch the raw forecast payload for a CWA location name.

        Args:
            location_name: Localized location name, e.g. '臺北市'

        Returns:
            Raw JSON document returned by the CWA API

        Raises:
            ConfigurationError: If no API key is configured
            UpstreamError: If the API answers with a non-success status
            NetworkError: If the API cannot be reached
        """
        if not self.config.has_credential:
            raise ConfigurationError("CWA_API_KEY is not configured; set it in the .env file")

        params = {"Authorization": self.config.api_key, "locationName": location_name}

        logger.info(f"Fetching {self.config.dataset_id} forecast for {location_name}")

        try:
            response = await self.client.get(self.config.forecast_url, params=params)
            response.raise_for_status()
            data = response.json()

        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from CWA API: {e.response.status_code} - {e.response.text}")
            raise UpstreamError(e.response.status_code, _response_body(e.response)) from e
        except httpx.RequestError as e:
            logger.error(f"Request error to CWA API: {type(e).__name__}: {e}")
            raise NetworkError(f"Unable to reach CWA API: {type(e).__name__}") from e

        logger.info(f"Successfully fetched forecast for {location_name}")
        return data

    async def aclose(self):
        """Close the async HTTP client if this instance created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
