"""Configuration settings for the CWA forecast gateway."""

import os
from typing import Final, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

# API Configuration
CWA_API_BASE_URL: str = os.getenv("CWA_API_BASE_URL", "https://opendata.cwa.gov.tw/api")
CWA_API_KEY: Optional[str] = os.getenv("CWA_API_KEY") or None
CWA_DATASET_ID: Final[str] = "F-C0032-001"  # General weather forecast, next 36 hours

# No timeout unless the operator sets one
_timeout = os.getenv("CWA_TIMEOUT_SECONDS")
CWA_TIMEOUT_SECONDS: Optional[float] = float(_timeout) if _timeout else None

# Server configuration
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "3000"))
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

SERVICE_NAME: Final[str] = "CWA Weather Forecast Service"
SERVICE_VERSION: Final[str] = "0.1.0"


class UpstreamConfig(BaseModel):
    """Settings needed to reach the CWA open-data API."""
    base_url: str = Field(CWA_API_BASE_URL, description="Base URL of the CWA API")
    api_key: Optional[str] = Field(None, description="CWA authorization key")
    dataset_id: str = Field(CWA_DATASET_ID, description="Forecast dataset identifier")
    timeout_seconds: Optional[float] = Field(None, gt=0, description="Request timeout, None for no timeout")

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)

    @property
    def forecast_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/v1/rest/datastore/{self.dataset_id}"


def get_upstream_config() -> UpstreamConfig:
    """Build the upstream configuration from environment settings."""
    return UpstreamConfig(
        base_url=CWA_API_BASE_URL,
        api_key=CWA_API_KEY,
        dataset_id=CWA_DATASET_ID,
        timeout_seconds=CWA_TIMEOUT_SECONDS,
    )
