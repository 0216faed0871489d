"""Command line entrypoint to try the recommender against a demo wardrobe."""

import argparse
import json
import random

from evaluation.scenarios import SCENARIOS
from logic.recommendation_engine import recommend
from models.candidate_item import to_ootd_dict
from models.recommendation import RecommendationContext
from recommender_app.config import RecommenderConfig
from recommender_app.logging_config import configure_logging


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Recommend an outfit from the demo wardrobe.")
    parser.add_argument("--temperature", type=float, default=15.0, help="Adjusted temperature in °C")
    parser.add_argument("--precipitating", action="store_true", help="Treat the day as rainy or snowy")
    parser.add_argument("--month", type=int, default=4, help="Calendar month (1-12)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for fallback picks")
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    config = RecommenderConfig.from_env()
    configure_logging()

    wardrobe = {item.item_id: item for scenario in SCENARIOS for item in scenario.wardrobe}
    context = RecommendationContext(
        adjusted_temperature=args.temperature,
        is_precipitating=args.precipitating,
        current_month=args.month,
    )
    result = recommend(
        list(wardrobe.values()),
        context,
        rng=random.Random(args.seed) if args.seed is not None else None,
        threshold=config.score_threshold,
        parallel=config.parallel_categories,
    )
    print(
        json.dumps(
            {
                "clothes": [to_ootd_dict(item) for item in result.items],
                "used_fallback": result.used_fallback,
                "debug_summary": result.diagnostics,
            },
            indent=2,
            ensure_ascii=False,
        )
    )


if __name__ == "__main__":
    main()
