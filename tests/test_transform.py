"""Tests for reshaping raw CWA payloads into forecast periods."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cwa_forecast.weather.errors import LocationNotFoundError
from cwa_forecast.weather.transform import ELEMENT_FIELDS, transform

from .conftest import TIME_SLOTS, full_payload, make_element, make_payload


class TestTransform:
    """Flattening of per-element time series."""

    def test_partial_elements(self) -> None:
        """Three elements of length 2 give two periods with the rest left empty."""
        payload = make_payload([
            make_element("Wx", ["多雲", "晴"]),
            make_element("MinT", ["18", "19"]),
            make_element("MaxT", ["25", "27"]),
        ])

        forecast = transform(payload)

        assert len(forecast.forecasts) == 2
        first = forecast.forecasts[0]
        assert first.weather_condition == "多雲"
        assert first.min_temp == "18°C"
        assert first.max_temp == "25°C"
        assert first.precipitation_chance == ""
        assert first.comfort_index == ""
        assert first.wind_speed == ""
        assert forecast.forecasts[1].max_temp == "27°C"

    def test_all_elements_mapped(self) -> None:
        forecast = transform(full_payload())

        assert forecast.city_name == "臺北市"
        assert forecast.update_description == "三十六小時天氣預報"
        period = forecast.forecasts[2]
        assert period.model_dump(by_alias=True) == {
            "startTime": "2024-05-02 18:00:00",
            "endTime": "2024-05-03 06:00:00",
            "weather": "陰短暫雨",
            "rain": "60%",
            "minTemp": "21°C",
            "maxTemp": "25°C",
            "comfort": "舒適",
            "windSpeed": "4",
        }

    def test_periods_keep_upstream_order(self) -> None:
        forecast = transform(full_payload())
        assert [(p.start_time, p.end_time) for p in forecast.forecasts] == TIME_SLOTS

    def test_times_come_from_first_element(self) -> None:
        payload = make_payload([make_element("PoP", ["30"]), make_element("Wx", ["晴"])])
        payload["records"]["location"][0]["weatherElement"][1]["time"][0]["startTime"] = "ignored"

        period = transform(payload).forecasts[0]

        assert period.start_time == TIME_SLOTS[0][0]
        assert period.precipitation_chance == "30%"

    def test_unknown_elements_ignored(self) -> None:
        payload = make_payload([make_element("Wx", ["晴"]), make_element("UVI", ["9"])])
        forecast = transform(payload)
        assert forecast.forecasts[0].weather_condition == "晴"

    def test_empty_location_array_is_not_found(self) -> None:
        with pytest.raises(LocationNotFoundError) as exc_info:
            transform(make_payload(None))
        assert exc_info.value.status_code == 404

    def test_location_without_elements(self) -> None:
        forecast = transform(make_payload([]))
        assert forecast.forecasts == []

    def test_malformed_payload(self) -> None:
        with pytest.raises(ValidationError):
            transform({"success": "true"})


class TestRaggedSeries:
    """Elements whose series length differs from the first element."""

    def test_shorter_element_leaves_tail_empty(self) -> None:
        payload = make_payload([
            make_element("Wx", ["多雲", "晴", "雨"]),
            make_element("MinT", ["18"]),
        ])

        forecast = transform(payload)

        assert len(forecast.forecasts) == 3
        assert forecast.forecasts[0].min_temp == "18°C"
        assert forecast.forecasts[1].min_temp == ""
        assert forecast.forecasts[2].min_temp == ""

    def test_longer_element_tail_ignored(self) -> None:
        payload = make_payload([
            make_element("Wx", ["多雲"]),
            make_element("MaxT", ["30", "31", "32"]),
        ])

        forecast = transform(payload)

        assert len(forecast.forecasts) == 1
        assert forecast.forecasts[0].max_temp == "30°C"


def test_element_table_covers_known_names() -> None:
    assert set(ELEMENT_FIELDS) == {"Wx", "PoP", "MinT", "MaxT", "CI", "WS"}


def test_numeric_values_are_displayed_as_text() -> None:
    payload = make_payload([make_element("PoP", ["0"]), make_element("MinT", ["18"])])
    elements = payload["records"]["location"][0]["weatherElement"]
    elements[0]["time"][0]["parameter"] = {"parameterName": 20, "parameterValue": 20, "parameterUnit": 1}
    elements[1]["time"][0]["parameter"]["parameterName"] = 18.5
    payload["success"] = True

    period = transform(payload).forecasts[0]

    assert period.precipitation_chance == "20%"
    assert period.min_temp == "18.5°C"
