"""Turn raw weather readings into a :class:`RecommendationContext`.

The engine never looks at wind, humidity or the calendar itself; this module
resolves them into a perceived temperature, a precipitation flag and a month.
Perceived temperature follows the Korea Meteorological Administration
guidance: wind chill in cold weather, the wet-bulb based summer index in hot
humid weather and Steadman's apparent temperature otherwise.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from datetime import date
from typing import Dict

from models.recommendation import RecommendationContext
from tools.weather_provider import PrecipitationType, WeatherObservation

SENSITIVITY_BASE = 2.5
CORRECTION_FACTOR = 1.0
MAX_CORRECTION_C = 2.5
MIN_SENSITIVITY = 0.0
MAX_SENSITIVITY = 5.0

WIND_CHILL_MIN_KMH = 4.8
WINTER_MAX_C = 10.0
SUMMER_MIN_C = 27.0
SUMMER_MIN_RH = 40.0


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def _round1(value: float) -> float:
    return math.floor(value * 10.0 + 0.5) / 10.0


def sensitivity_correction(sensitivity: float) -> float:
    """Shift applied to perceived temperature for a user's sensitivity (0 cold-sensitive, 5 heat-sensitive)."""

    clamped = _clamp(sensitivity, MIN_SENSITIVITY, MAX_SENSITIVITY)
    return _clamp((clamped - SENSITIVITY_BASE) * CORRECTION_FACTOR, -MAX_CORRECTION_C, MAX_CORRECTION_C)


def wet_bulb_temperature(temperature: float, humidity: float) -> float:
    """Stull (2011) wet-bulb approximation."""

    rh = _clamp(humidity, 0.0, 100.0)
    return (
        temperature * math.atan(0.151977 * math.sqrt(rh + 8.313659))
        + math.atan(temperature + rh)
        - math.atan(rh - 1.67633)
        + 0.00391838 * rh ** 1.5 * math.atan(0.023101 * rh)
        - 4.686035
    )


def feels_like(temperature: float, wind_speed: float, humidity: float) -> float:
    """Perceived temperature in °C; ``wind_speed`` in m/s, ``humidity`` in percent."""

    rh = _clamp(humidity, 0.0, 100.0)
    ws = max(0.0, wind_speed)

    if temperature <= WINTER_MAX_C:
        v_kmh = ws * 3.6
        if v_kmh >= WIND_CHILL_MIN_KMH:
            v_pow = v_kmh ** 0.16
            return _round1(13.12 + 0.6215 * temperature - 11.37 * v_pow + 0.3965 * v_pow * temperature)
        return _round1(temperature)

    if temperature >= SUMMER_MIN_C and rh >= SUMMER_MIN_RH:
        tw = wet_bulb_temperature(temperature, rh)
        return _round1(
            -0.2442 + 0.55399 * tw + 0.45535 * temperature - 0.0022 * tw * tw + 0.00278 * tw * temperature + 3.0
        )

    vapour_pressure = (rh / 100.0) * 6.105 * math.exp((17.27 * temperature) / (237.7 + temperature))
    return _round1(temperature + 0.33 * vapour_pressure - 0.70 * ws - 4.00)


class ContextBuilder(ABC):
    """Interface for collaborators that produce recommendation contexts."""

    @abstractmethod
    def build_context(
        self, observation: WeatherObservation, target_date: date, temperature_sensitivity: float = SENSITIVITY_BASE
    ) -> RecommendationContext:
        """Return the context for one request."""


class FeelsLikeContextBuilder(ContextBuilder):
    """Builds contexts from perceived temperature adjusted for user sensitivity."""

    def build_context(
        self, observation: WeatherObservation, target_date: date, temperature_sensitivity: float = SENSITIVITY_BASE
    ) -> RecommendationContext:
        perceived = feels_like(observation.temperature, observation.wind_speed, observation.humidity)
        adjusted = perceived + sensitivity_correction(temperature_sensitivity)
        return RecommendationContext(
            adjusted_temperature=adjusted,
            is_precipitating=observation.precipitation_type is not PrecipitationType.NONE,
            current_month=target_date.month,
        )

    def explain(
        self, observation: WeatherObservation, temperature_sensitivity: float = SENSITIVITY_BASE
    ) -> Dict[str, object]:
        """Return the intermediate values behind a context for debug summaries."""

        return {
            "feels_like_c": feels_like(observation.temperature, observation.wind_speed, observation.humidity),
            "sensitivity_correction_c": sensitivity_correction(temperature_sensitivity),
            "thresholds": {
                "wind_chill": f"T<={WINTER_MAX_C} and wind>={WIND_CHILL_MIN_KMH}km/h",
                "summer_index": f"T>={SUMMER_MIN_C} and RH>={SUMMER_MIN_RH}",
            },
        }


__all__ = [
    "ContextBuilder",
    "FeelsLikeContextBuilder",
    "feels_like",
    "sensitivity_correction",
    "wet_bulb_temperature",
]
