"""Outfit recommender agent wiring wardrobe storage, weather and the selection engine."""
from __future__ import annotations

import logging
import random
from datetime import date
from typing import Dict, Optional

from agents.weather_agent import WeatherAgent
from logic.recommendation_engine import recommend
from models.candidate_item import to_ootd_dict
from models.recommendation import RecommendationResult
from recommender_app.config import RecommenderConfig
from recommender_app.logging_config import get_logger, log_event, operation_context
from tools.observability import instrument_tool
from tools.wardrobe_store import WardrobeStore

logger = get_logger(__name__)


def summarize_result(result: RecommendationResult) -> str:
    """Plain-language description of a recommendation for end users."""

    if not result.items:
        return "No clothes available to recommend."
    names = ", ".join(f"{item.name} ({item.category.value.lower()})" for item in result.items)
    if result.used_fallback:
        return f"Suggested outfit: {names}. Some pieces were picked at random because nothing fit the weather well."
    return f"Suggested outfit: {names}."


class OutfitRecommenderAgent:
    """Builds weather-aware outfits for a user from their stored wardrobe."""

    def __init__(
        self,
        config: RecommenderConfig,
        wardrobe_store: WardrobeStore,
        weather_agent: WeatherAgent,
    ) -> None:
        self.config = config
        self.wardrobe_store = wardrobe_store
        self.weather_agent = weather_agent
        self._load_wardrobe = instrument_tool("list_items_for_user", kind="storage")(
            wardrobe_store.list_items_for_user
        )

    def recommend_outfit(
        self,
        user_id: str,
        location: str,
        target_date: date,
        temperature_sensitivity: Optional[float] = None,
        seed: Optional[int] = None,
    ) -> Dict[str, object]:
        """Return the recommended outfit, the context it was built for and diagnostics."""

        with operation_context("agent:recommender.recommend_outfit") as correlation_id:
            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_started",
                agent="recommender",
                method="recommend_outfit",
                correlation_id=correlation_id,
                user_id=user_id,
            )
            wardrobe = self._load_wardrobe(user_id)
            if not wardrobe:
                log_event(
                    logger,
                    level=logging.WARNING,
                    event="empty_wardrobe",
                    agent="recommender",
                    correlation_id=correlation_id,
                    user_id=user_id,
                )
                return {
                    "status": "error",
                    "user_id": user_id,
                    "message": "No clothes registered for this user",
                }

            weather = self.weather_agent.get_recommendation_context(
                location=location,
                target_date=target_date,
                temperature_sensitivity=temperature_sensitivity,
            )
            context = weather["context"]
            result = recommend(
                wardrobe,
                context,
                rng=random.Random(seed) if seed is not None else None,
                threshold=self.config.score_threshold,
                parallel=self.config.parallel_categories,
            )

            log_event(
                logger,
                level=logging.INFO,
                event="agent_call_completed",
                agent="recommender",
                method="recommend_outfit",
                correlation_id=correlation_id,
                item_count=len(result.items),
                used_fallback=result.used_fallback,
            )
            return {
                "status": "ok",
                "user_id": user_id,
                "location": location,
                "date": target_date.isoformat(),
                "context": {
                    "adjusted_temperature": context.adjusted_temperature,
                    "is_precipitating": context.is_precipitating,
                    "current_month": context.current_month,
                },
                "clothes": [to_ootd_dict(item) for item in result.items],
                "used_fallback": result.used_fallback,
                "user_facing_summary": f"{weather['user_facing_summary']} {summarize_result(result)}",
                "debug_summary": {
                    "weather": weather["debug_summary"],
                    "engine": result.diagnostics,
                },
            }


__all__ = ["OutfitRecommenderAgent", "summarize_result"]
