"""Pytest configuration and fixtures for cwa_forecast tests."""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from cwa_forecast.config import UpstreamConfig
from cwa_forecast.weather.client import CwaWeatherClient

TEST_BASE_URL = "https://cwa.test/api"
TEST_API_KEY = "CWA-TEST-KEY"

TIME_SLOTS = [
    ("2024-05-01 18:00:00", "2024-05-02 06:00:00"),
    ("2024-05-02 06:00:00", "2024-05-02 18:00:00"),
    ("2024-05-02 18:00:00", "2024-05-03 06:00:00"),
]


def make_element(name: str, values: list[str]) -> dict[str, Any]:
    """Build a raw weather element using the first len(values) time slots."""
    return {
        "elementName": name,
        "time": [
            {
                "startTime": start,
                "endTime": end,
                "parameter": {"parameterName": value},
            }
            for (start, end), value in zip(TIME_SLOTS, values)
        ],
    }


def make_payload(
    elements: list[dict[str, Any]] | None = None,
    location_name: str = "臺北市",
    description: str = "三十六小時天氣預報",
) -> dict[str, Any]:
    """Build a raw F-C0032-001 payload with a single location.

    Args:
        elements: Weather elements; None for an empty location array

    Returns:
        Payload shaped like the CWA datastore response
    """
    locations = []
    if elements is not None:
        locations.append({"locationName": location_name, "weatherElement": elements})
    return {
        "success": "true",
        "records": {"datasetDescription": description, "location": locations},
    }


def full_payload(location_name: str = "臺北市") -> dict[str, Any]:
    """Payload carrying all six known elements plus an unknown one."""
    return make_payload(
        [
            make_element("Wx", ["多雲", "晴時多雲", "陰短暫雨"]),
            make_element("PoP", ["20", "10", "60"]),
            make_element("MinT", ["22", "23", "21"]),
            make_element("CI", ["舒適", "舒適至悶熱", "舒適"]),
            make_element("MaxT", ["26", "31", "25"]),
            make_element("WS", ["3", "2", "4"]),
            make_element("UVI", ["1", "8", "0"]),
        ],
        location_name=location_name,
    )


@pytest.fixture
def upstream_config() -> UpstreamConfig:
    """Configuration with a credential set."""
    return UpstreamConfig(base_url=TEST_BASE_URL, api_key=TEST_API_KEY)


@pytest.fixture
def unconfigured() -> UpstreamConfig:
    """Configuration without a credential."""
    return UpstreamConfig(base_url=TEST_BASE_URL, api_key=None)


class RecordingHandler:
    """httpx.MockTransport handler that records requests."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]):
        self.respond = respond
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)


def json_handler(payload: Any, status: int = 200) -> RecordingHandler:
    return RecordingHandler(lambda request: httpx.Response(status, json=payload))


def create_client(config: UpstreamConfig, handler: RecordingHandler) -> CwaWeatherClient:
    """Create a CWA client whose HTTP traffic goes to handler."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CwaWeatherClient(config=config, client=http_client)
