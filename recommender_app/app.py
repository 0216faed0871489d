"""Recommender app bootstrap."""

from __future__ import annotations

from datetime import date as dt_date
import logging

from agents.outfit_recommender_agent import OutfitRecommenderAgent
from agents.weather_agent import WeatherAgent
from recommender_app.config import RecommenderConfig
from recommender_app.logging_config import configure_logging, get_logger, log_event
from tools.wardrobe_store import SQLiteWardrobeStore, WardrobeStore
from tools.weather_provider import OpenWeatherProvider, WeatherProvider


LOGGER = get_logger(__name__)


class OutfitRecommenderApp:
    """Wires together configuration, storage, weather and the recommender agent."""

    def __init__(
        self,
        config: RecommenderConfig | None = None,
        wardrobe_store: WardrobeStore | None = None,
        weather_provider: WeatherProvider | None = None,
    ) -> None:
        self.config = config or RecommenderConfig.from_env()
        configure_logging()

        self.wardrobe_store = wardrobe_store or SQLiteWardrobeStore(
            self.config.wardrobe_db_path or "data/wardrobe.db"
        )
        self.weather_provider = weather_provider or OpenWeatherProvider(api_key=self.config.weather_api_key)
        self.weather_agent = WeatherAgent(config=self.config, provider=self.weather_provider)
        self.recommender = OutfitRecommenderAgent(
            config=self.config,
            wardrobe_store=self.wardrobe_store,
            weather_agent=self.weather_agent,
        )

    def recommend_for_user(
        self,
        user_id: str,
        target_date: str | dt_date,
        location: str | None = None,
        temperature_sensitivity: float | None = None,
        seed: int | None = None,
    ) -> dict:
        """Run the stored-wardrobe pipeline, resolving defaults from configuration."""

        resolved_date = dt_date.fromisoformat(target_date) if isinstance(target_date, str) else target_date
        resolved_location = location or self.config.default_location
        if not resolved_location:
            log_event(LOGGER, logging.WARNING, "missing_location", user_id=user_id)
            return {"status": "error", "user_id": user_id, "message": "A location is required"}
        return self.recommender.recommend_outfit(
            user_id=user_id,
            location=resolved_location,
            target_date=resolved_date,
            temperature_sensitivity=temperature_sensitivity,
            seed=seed,
        )


__all__ = ["OutfitRecommenderApp"]
