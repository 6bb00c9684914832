"""Data models for the CWA forecast gateway."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CityEntry(BaseModel):
    """Supported city: short identifier and CWA location name."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Short city identifier, e.g. 'taipei'")
    localized_name: str = Field(..., alias="name", description="CWA location name")


class ForecastPeriod(BaseModel):
    """One flattened forecast time slot."""
    model_config = ConfigDict(populate_by_name=True)

    start_time: str = Field(..., alias="startTime", description="Period start as reported by CWA")
    end_time: str = Field(..., alias="endTime", description="Period end as reported by CWA")
    weather_condition: str = Field("", alias="weather", description="Weather phenomenon (Wx)")
    precipitation_chance: str = Field("", alias="rain", description="Probability of precipitation, e.g. '20%'")
    min_temp: str = Field("", alias="minTemp", description="Minimum temperature, e.g. '18°C'")
    max_temp: str = Field("", alias="maxTemp", description="Maximum temperature, e.g. '25°C'")
    comfort_index: str = Field("", alias="comfort", description="Comfort index description (CI)")
    wind_speed: str = Field("", alias="windSpeed", description="Wind speed (WS)")


class CityForecast(BaseModel):
    """36-hour forecast for a single city."""
    model_config = ConfigDict(populate_by_name=True)

    city_name: str = Field(..., alias="city", description="CWA location name")
    update_description: str = Field(..., alias="updateTime", description="Dataset description")
    forecasts: List[ForecastPeriod] = Field(default_factory=list, description="Periods in upstream order")


class ForecastResponse(BaseModel):
    """Successful forecast envelope."""
    success: bool = True
    data: CityForecast


class CitiesResponse(BaseModel):
    """Supported cities envelope."""
    success: bool = True
    data: List[CityEntry]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "OK"
    timestamp: str = Field(..., description="ISO 8601 UTC timestamp")


class ErrorResponse(BaseModel):
    """Error response model."""
    model_config = ConfigDict(populate_by_name=True)

    error: str = Field(..., description="Error title")
    message: Optional[str] = Field(None, description="Human readable explanation")
    details: Optional[Any] = Field(None, description="Upstream response body, if any")
    supported_cities: Optional[List[CityEntry]] = Field(
        None, alias="supportedCities", description="Hint listing the supported cities"
    )


# Raw CWA payload


class CwaParameter(BaseModel):
    """Value of one weather element in one time slot."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    parameter_name: str = Field(..., alias="parameterName")


class CwaTimeSlot(BaseModel):
    """Time-indexed entry of a weather element."""
    start_time: str = Field(..., alias="startTime")
    end_time: str = Field(..., alias="endTime")
    parameter: CwaParameter


class CwaWeatherElement(BaseModel):
    """Named forecast variable with its own time series."""
    element_name: str = Field(..., alias="elementName")
    time: List[CwaTimeSlot] = Field(default_factory=list)


class CwaLocation(BaseModel):
    """Location entry of the forecast dataset."""
    location_name: str = Field(..., alias="locationName")
    weather_element: List[CwaWeatherElement] = Field(default_factory=list, alias="weatherElement")


class CwaRecords(BaseModel):
    """Records section of the forecast dataset."""
    dataset_description: str = Field("", alias="datasetDescription")
    location: List[CwaLocation] = Field(default_factory=list)


class CwaForecastResponse(BaseModel):
    """Raw response from the CWA F-C0032-001 datastore endpoint."""
    records: CwaRecords
