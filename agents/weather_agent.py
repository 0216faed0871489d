"""Weather agent that turns observations into recommendation contexts."""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Optional

from logic.context_builder import ContextBuilder, FeelsLikeContextBuilder
from logic.validation import WeatherToolInput
from recommender_app.config import RecommenderConfig
from recommender_app.logging_config import get_logger, log_event, operation_context
from tools.observability import instrument_tool
from tools.weather_provider import WeatherProvider


LOGGER = get_logger(__name__)


class WeatherAgent:
    """Fetches weather and resolves it into a :class:`RecommendationContext`."""

    def __init__(
        self,
        config: RecommenderConfig,
        provider: WeatherProvider,
        context_builder: Optional[ContextBuilder] = None,
    ) -> None:
        self.config = config
        self.provider = provider
        self.context_builder = context_builder or FeelsLikeContextBuilder()
        self._fetch_observation = instrument_tool("get_weather_observation", input_model=WeatherToolInput)(
            provider.get_observation
        )

    def get_recommendation_context(
        self,
        location: str,
        target_date: date,
        temperature_sensitivity: Optional[float] = None,
    ) -> Dict[str, object]:
        """Fetch weather and return the context with user-facing and debug summaries."""

        sensitivity = (
            self.config.default_temperature_sensitivity
            if temperature_sensitivity is None
            else temperature_sensitivity
        )
        with operation_context("agent:weather.get_recommendation_context") as correlation_id:
            observation = self._fetch_observation(location=location, date=target_date)
            context = self.context_builder.build_context(observation, target_date, sensitivity)

            debug_summary: Dict[str, object] = {
                "input_assumptions": {
                    "date": target_date.isoformat(),
                    "temperature_sensitivity": sensitivity,
                },
                "observation": {
                    "temperature_c": observation.temperature,
                    "wind_speed_ms": observation.wind_speed,
                    "humidity_pct": observation.humidity,
                    "precipitation_type": observation.precipitation_type.value,
                },
            }
            if isinstance(self.context_builder, FeelsLikeContextBuilder):
                debug_summary["classification_rationale"] = self.context_builder.explain(observation, sensitivity)

            rain_text = "precipitation expected" if context.is_precipitating else "dry"
            user_facing_summary = (
                f"{observation.condition.capitalize()} at {observation.temperature:.0f}°C, "
                f"feels like {context.adjusted_temperature:.1f}°C; {rain_text}; "
                f"{context.season.value.lower()} wardrobe."
            )

            log_event(
                LOGGER,
                level=logging.INFO,
                event="agent_call_completed",
                agent="weather",
                method="get_recommendation_context",
                correlation_id=correlation_id,
                location=location,
                adjusted_temperature=context.adjusted_temperature,
                is_precipitating=context.is_precipitating,
            )
            return {
                "location": location,
                "date": target_date.isoformat(),
                "observation": observation,
                "context": context,
                "user_facing_summary": user_facing_summary,
                "debug_summary": debug_summary,
            }


__all__ = ["WeatherAgent"]
