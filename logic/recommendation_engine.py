"""Assemble one weather-appropriate outfit from a wardrobe snapshot."""

from __future__ import annotations

import logging
import random
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Mapping, Optional

from logic.category_selection import DEFAULT_SCORE_THRESHOLD, select_for_category
from logic.item_scoring import CategoryScoringRules
from models.candidate_item import CandidateItem
from models.recommendation import CategorySelection, RecommendationContext, RecommendationResult
from models.taxonomy import ClothesType

logger = logging.getLogger(__name__)


def _group_by_category(wardrobe: Iterable[CandidateItem]) -> Dict[ClothesType, List[CandidateItem]]:
    grouped: Dict[ClothesType, List[CandidateItem]] = {category: [] for category in ClothesType}
    for item in wardrobe:
        grouped[item.category].append(item)
    return grouped


def recommend(
    wardrobe: Iterable[CandidateItem],
    context: Optional[RecommendationContext],
    *,
    rng: Optional[random.Random] = None,
    threshold: Optional[float] = None,
    rules: Optional[Mapping[ClothesType, CategoryScoringRules]] = None,
    parallel: bool = False,
) -> RecommendationResult:
    """Select one item per populated category for the given context.

    Categories are processed in :class:`ClothesType` declaration order. Every
    category gets its own random source seeded from ``rng`` in that order, so
    fallback draws are reproducible and never share state when ``parallel`` is
    enabled.
    """

    if context is None:
        raise ValueError("A recommendation context is required")

    limit = DEFAULT_SCORE_THRESHOLD if threshold is None else float(threshold)
    source = rng if rng is not None else random.Random()
    grouped = _group_by_category(wardrobe or [])
    populated = [category for category in ClothesType if grouped[category]]
    category_rngs = {category: random.Random(source.getrandbits(64)) for category in ClothesType}

    def run(category: ClothesType) -> CategorySelection:
        return select_for_category(
            category, grouped[category], context, rng=category_rngs[category], threshold=limit, rules=rules
        )

    if parallel and len(populated) > 1:
        with ThreadPoolExecutor(max_workers=len(populated)) as executor:
            selections = list(executor.map(run, populated))
    else:
        selections = [run(category) for category in populated]

    items = [selection.item for selection in selections if selection.item is not None]
    used_fallback = any(selection.used_fallback for selection in selections)
    diagnostics: Dict[str, object] = {
        "wardrobe_size": sum(len(group) for group in grouped.values()),
        "threshold": limit,
        "season": context.season.value,
        "categories": {
            selection.category.value: {
                "candidates": selection.candidate_count,
                "chosen_id": selection.item.item_id if selection.item else None,
                "score": selection.score,
                "reason": selection.reason,
            }
            for selection in selections
        },
        "fallback_categories": [
            selection.category.value for selection in selections if selection.used_fallback
        ],
    }
    logger.info(
        "Recommended %s items across %s categories (fallback=%s)", len(items), len(populated), used_fallback
    )
    return RecommendationResult(
        items=items, used_fallback=used_fallback, selections=selections, diagnostics=diagnostics
    )


__all__ = ["recommend"]
