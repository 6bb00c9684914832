"""API endpoints for the CWA forecast gateway."""

import logging
from datetime import datetime, timezone
from typing import AsyncGenerator

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from cwa_forecast.config import UpstreamConfig, get_upstream_config
from cwa_forecast.weather.cities import city_directory
from cwa_forecast.weather.errors import (
    InvalidCityError, LocationNotFoundError, UpstreamError, WeatherServiceError
)
from cwa_forecast.weather.models import (
    CitiesResponse, ErrorResponse, ForecastResponse, HealthResponse
)
from cwa_forecast.weather.service import WeatherService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["weather"])

# Errors the caller can correct get the city list as a hint
_HINTED_ERRORS = (InvalidCityError, LocationNotFoundError)


async def get_weather_service(
    config: UpstreamConfig = Depends(get_upstream_config)
) -> AsyncGenerator[WeatherService, None]:
    """Dependency providing a per-request weather service."""
    async with WeatherService(config=config) as service:
        yield service


def error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


def service_error_response(error: WeatherServiceError) -> JSONResponse:
    """Render a domain error as a JSON response."""
    body = ErrorResponse(error=error.title, message=error.message)
    if isinstance(error, _HINTED_ERRORS):
        body.supported_cities = city_directory.list_all()
    if isinstance(error, UpstreamError):
        body.details = error.body
    return error_response(error.status_code, body)


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return HealthResponse(status="OK", timestamp=timestamp)


@router.get("/cities", response_model=CitiesResponse)
async def list_cities() -> CitiesResponse:
    """List all supported city IDs and their CWA location names."""
    return CitiesResponse(data=city_directory.list_all())


@router.get(
    "/weather/{city_id}",
    response_model=ForecastResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def get_city_weather(
    city_id: str,
    weather_service: WeatherService = Depends(get_weather_service)
):
    """Get the 36-hour forecast for a city.

    Args:
        city_id: City ID (e.g. 'kaohsiung') or CWA location name (e.g. '高雄市')

    Returns:
        ForecastResponse, or an ErrorResponse with a matching status code
    """
    try:
        forecast = await weather_service.get_city_forecast(city_id)

    except WeatherServiceError as e:
        logger.error(f"Error getting forecast for '{city_id}': {e.title}: {e.message}")
        return service_error_response(e)

    except ValidationError as e:
        logger.error(f"Data validation error for '{city_id}': {e}")
        return error_response(
            500, ErrorResponse(error="server error", message="data validation failed")
        )

    except Exception as e:
        logger.exception(f"Unexpected error getting forecast for '{city_id}': {e}")
        return error_response(
            500, ErrorResponse(error="server error", message="unable to fetch weather data, please try again later")
        )

    logger.info(f"Successfully retrieved forecast with {len(forecast.forecasts)} periods")
    return ForecastResponse(data=forecast)
