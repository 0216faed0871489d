"""Weather provider abstractions and implementations."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, List

import requests
from pydantic import BaseModel, ValidationError


LOGGER = logging.getLogger(__name__)


class PrecipitationType(str, Enum):
    NONE = "NONE"
    RAIN = "RAIN"
    RAIN_SNOW = "RAIN_SNOW"
    SNOW = "SNOW"
    SHOWER = "SHOWER"


_CONDITION_PRECIPITATION: Dict[str, PrecipitationType] = {
    "rain": PrecipitationType.RAIN,
    "drizzle": PrecipitationType.RAIN,
    "thunderstorm": PrecipitationType.SHOWER,
    "snow": PrecipitationType.SNOW,
}


class _WeatherCondition(BaseModel):
    main: str = "Clear"
    description: str = "unknown"


class _Wind(BaseModel):
    speed: float = 0.0


class _Main(BaseModel):
    temp: float
    humidity: float = 50.0


class _CurrentWeatherResponse(BaseModel):
    main: _Main
    wind: _Wind = _Wind()
    weather: List[_WeatherCondition] = []
    rain: Dict[str, float] | None = None
    snow: Dict[str, float] | None = None


@dataclass
class WeatherObservation:
    """Raw weather reading used to derive a recommendation context."""

    temperature: float
    wind_speed: float
    humidity: float
    precipitation_type: PrecipitationType
    condition: str


class WeatherProvider(ABC):
    """Abstract weather provider interface."""

    @abstractmethod
    def get_observation(self, location: str, date: date) -> WeatherObservation:
        """Return the weather reading for a location and date."""


class OpenWeatherProvider(WeatherProvider):
    """OpenWeather provider with schema validation and graceful fallbacks."""

    def __init__(self, api_key: str | None = None, timeout_seconds: float = 5.0, units: str = "metric") -> None:
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.units = units

    def _fallback_observation(self, reason: str) -> WeatherObservation:
        LOGGER.warning("Using fallback weather observation", extra={"reason": reason})
        return WeatherObservation(
            temperature=15.0,
            wind_speed=2.0,
            humidity=50.0,
            precipitation_type=PrecipitationType.NONE,
            condition="unknown",
        )

    @staticmethod
    def _precipitation(parsed: _CurrentWeatherResponse) -> PrecipitationType:
        if parsed.rain and parsed.snow:
            return PrecipitationType.RAIN_SNOW
        for condition in parsed.weather:
            mapped = _CONDITION_PRECIPITATION.get(condition.main.strip().lower())
            if mapped:
                return mapped
        if parsed.rain:
            return PrecipitationType.RAIN
        if parsed.snow:
            return PrecipitationType.SNOW
        return PrecipitationType.NONE

    def get_observation(self, location: str, date: date) -> WeatherObservation:
        if not location:
            raise ValueError("location is required for weather lookups")

        if not self.api_key:
            return self._fallback_observation("missing_api_key")

        LOGGER.info("Fetching current weather", extra={"date": str(date)})
        params = {
            "q": location,
            "appid": self.api_key,
            "units": self.units,
        }
        url = "https://api.openweathermap.org/data/2.5/weather"

        try:
            response = requests.get(url, params=params, timeout=self.timeout_seconds)
            response.raise_for_status()
            parsed = _CurrentWeatherResponse.model_validate(response.json())
            condition = parsed.weather[0].description if parsed.weather else "unknown"
            return WeatherObservation(
                temperature=parsed.main.temp,
                wind_speed=parsed.wind.speed,
                humidity=parsed.main.humidity,
                precipitation_type=self._precipitation(parsed),
                condition=condition,
            )
        except (requests.Timeout, requests.RequestException) as exc:
            LOGGER.error("Weather API unreachable", exc_info=exc)
            return self._fallback_observation("request_error")
        except ValidationError as exc:
            LOGGER.error("Weather payload schema validation failed", exc_info=exc)
            return self._fallback_observation("schema_validation")


class MockWeatherProvider(WeatherProvider):
    """Offline deterministic weather provider for tests."""

    def __init__(self, observation: WeatherObservation | None = None) -> None:
        self.observation = observation or WeatherObservation(
            temperature=15.0,
            wind_speed=2.0,
            humidity=50.0,
            precipitation_type=PrecipitationType.NONE,
            condition="clear",
        )

    def get_observation(self, location: str, date: date) -> WeatherObservation:
        LOGGER.info("Returning mock observation", extra={"date": str(date)})
        return self.observation


__all__ = [
    "PrecipitationType",
    "WeatherObservation",
    "WeatherProvider",
    "OpenWeatherProvider",
    "MockWeatherProvider",
]
