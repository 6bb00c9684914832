"""Reshape the CWA per-element time series into flat forecast periods."""

import logging
from typing import Any, Dict, List, Mapping, Tuple

from cwa_forecast.weather.errors import LocationNotFoundError
from cwa_forecast.weather.models import (
    CityForecast, CwaForecastResponse, CwaLocation, ForecastPeriod
)

logger = logging.getLogger(__name__)

# elementName -> (ForecastPeriod field, display suffix)
ELEMENT_FIELDS: Mapping[str, Tuple[str, str]] = {
    "Wx": ("weather_condition", ""),
    "PoP": ("precipitation_chance", "%"),
    "MinT": ("min_temp", "°C"),
    "MaxT": ("max_temp", "°C"),
    "CI": ("comfort_index", ""),
    "WS": ("wind_speed", ""),
}


def transform(raw_payload: Dict[str, Any]) -> CityForecast:
    """Convert a raw F-C0032-001 payload into a CityForecast.

    The first weather element sets the number of periods and their start and
    end times. Every element's value at the same index fills its mapped
    field; unknown elements are ignored. An element whose series is shorter
    than the first one leaves its field empty for the missing periods.

    Args:
        raw_payload: JSON document returned by the CWA API

    Returns:
        CityForecast with periods in upstream order

    Raises:
        LocationNotFoundError: If the payload contains no location
        pydantic.ValidationError: If the payload is malformed
    """
    response = CwaForecastResponse.model_validate(raw_payload)
    records = response.records

    if not records.location:
        raise LocationNotFoundError("CWA returned no location for this query")

    location = records.location[0]
    forecasts = _build_periods(location)

    logger.info(f"Transformed {len(forecasts)} forecast periods for {location.location_name}")
    return CityForecast(
        city=location.location_name,
        updateTime=records.dataset_description,
        forecasts=forecasts,
    )


def _build_periods(location: CwaLocation) -> List[ForecastPeriod]:
    elements = location.weather_element
    if not elements:
        logger.warning(f"No weather elements for {location.location_name}")
        return []

    canonical = elements[0].time
    for element in elements[1:]:
        if len(element.time) != len(canonical):
            logger.warning(
                f"Element {element.element_name} has {len(element.time)} periods, "
                f"expected {len(canonical)} for {location.location_name}"
            )

    periods = []
    for i, slot in enumerate(canonical):
        values = {"start_time": slot.start_time, "end_time": slot.end_time}
        for element in elements:
            mapping = ELEMENT_FIELDS.get(element.element_name)
            if mapping is None or i >= len(element.time):
                continue
            field, suffix = mapping
            values[field] = element.time[i].parameter.parameter_name + suffix
        periods.append(ForecastPeriod(**values))

    return periods
