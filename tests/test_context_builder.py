"""Perceived temperature and context derivation coverage."""

from datetime import date

import pytest

from logic.context_builder import FeelsLikeContextBuilder, feels_like, sensitivity_correction
from tools.weather_provider import PrecipitationType, WeatherObservation


def _observation(temperature=15.0, wind=0.0, humidity=50.0, precipitation=PrecipitationType.NONE):
    return WeatherObservation(
        temperature=temperature,
        wind_speed=wind,
        humidity=humidity,
        precipitation_type=precipitation,
        condition="clear",
    )


def test_sensitivity_correction_is_centred_and_clamped() -> None:
    assert sensitivity_correction(2.5) == 0.0
    assert sensitivity_correction(0.0) == -2.5
    assert sensitivity_correction(5.0) == 2.5
    assert sensitivity_correction(3.5) == 1.0
    assert sensitivity_correction(-4) == -2.5
    assert sensitivity_correction(10) == 2.5


def test_cold_calm_air_keeps_measured_temperature() -> None:
    assert feels_like(5.0, 0.5, 80.0) == 5.0


def test_wind_chill_lowers_cold_temperatures() -> None:
    perceived = feels_like(0.0, 5.0, 60.0)
    assert perceived == pytest.approx(-4.9, abs=0.2)
    assert feels_like(0.0, 10.0, 60.0) < perceived


def test_summer_index_raises_hot_humid_temperatures() -> None:
    assert feels_like(32.0, 1.0, 70.0) > 32.0


def test_apparent_temperature_in_mild_weather() -> None:
    perceived = feels_like(20.0, 0.0, 50.0)
    assert perceived == pytest.approx(19.85, abs=0.15)
    assert feels_like(20.0, 5.0, 50.0) < perceived


def test_feels_like_rounds_to_one_decimal() -> None:
    value = feels_like(18.3, 2.2, 63.0)
    assert round(value, 1) == value


def test_builder_combines_feels_like_sensitivity_and_month() -> None:
    builder = FeelsLikeContextBuilder()
    observation = _observation(temperature=5.0, wind=0.0, precipitation=PrecipitationType.SNOW)

    neutral = builder.build_context(observation, date(2024, 1, 15))
    cold_sensitive = builder.build_context(observation, date(2024, 1, 15), temperature_sensitivity=0.0)

    assert neutral.adjusted_temperature == 5.0
    assert neutral.is_precipitating is True
    assert neutral.current_month == 1
    assert cold_sensitive.adjusted_temperature == 2.5


def test_builder_marks_dry_days_and_explains() -> None:
    builder = FeelsLikeContextBuilder()
    observation = _observation(temperature=20.0)
    context = builder.build_context(observation, date(2024, 7, 1), temperature_sensitivity=4.5)
    explanation = builder.explain(observation, 4.5)

    assert context.is_precipitating is False
    assert context.season.value == "SUMMER"
    assert explanation["sensitivity_correction_c"] == 2.0
    assert context.adjusted_temperature == pytest.approx(explanation["feels_like_c"] + 2.0)
    assert "wind_chill" in explanation["thresholds"]
