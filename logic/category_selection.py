"""Pick the best item for one clothing category, falling back to a random pick."""

from __future__ import annotations

import logging
import random
from typing import List, Mapping, Optional, Sequence, Tuple

from logic.item_scoring import CategoryScoringRules, ItemScore, score_item
from models.candidate_item import CandidateItem
from models.recommendation import CategorySelection, RecommendationContext
from models.taxonomy import ClothesType

logger = logging.getLogger(__name__)

DEFAULT_SCORE_THRESHOLD = 40.0


def _best_by_score(scored: List[Tuple[CandidateItem, ItemScore]]) -> Tuple[CandidateItem, ItemScore]:
    """Return the highest-scoring pair; ties go to the smallest ``item_id``.

    Ids are strings and compare as text, so ``"10"`` sorts before ``"9"``.
    """

    return min(scored, key=lambda pair: (-pair[1].total, pair[0].item_id))


def select_for_category(
    category: ClothesType,
    candidates: Sequence[CandidateItem],
    context: RecommendationContext,
    rng: Optional[random.Random] = None,
    threshold: float = DEFAULT_SCORE_THRESHOLD,
    rules: Optional[Mapping[ClothesType, CategoryScoringRules]] = None,
) -> CategorySelection:
    """Select one item of ``category`` on merit, or at random when none qualifies.

    Candidates of other categories are ignored. An empty category yields no
    item and no fallback flag.
    """

    pool = sorted((item for item in candidates if item.category == category), key=lambda item: item.item_id)
    if not pool:
        logger.debug("No candidates for category=%s", category.value)
        return CategorySelection(
            category=category, item=None, score=None, used_fallback=False, reason="no_candidates"
        )

    scored = [(item, score_item(item, context, rules)) for item in pool]
    best_item, best_score = _best_by_score(scored)

    if not any(score.scorable for _, score in scored):
        reason = "no_scorable_candidates"
    elif best_score.total < threshold:
        reason = "below_threshold"
    else:
        logger.debug(
            "Selected %s for category=%s with score=%.2f", best_item.item_id, category.value, best_score.total
        )
        return CategorySelection(
            category=category,
            item=best_item,
            score=best_score.total,
            used_fallback=False,
            reason="best_score",
            candidate_count=len(pool),
        )

    source = rng if rng is not None else random.Random()
    picked = source.choice(pool)
    picked_score = next(score.total for item, score in scored if item is picked)
    logger.info(
        "Fallback pick %s for category=%s (%s, best=%.2f, threshold=%.2f)",
        picked.item_id,
        category.value,
        reason,
        best_score.total,
        threshold,
    )
    return CategorySelection(
        category=category,
        item=picked,
        score=picked_score,
        used_fallback=True,
        reason=reason,
        candidate_count=len(pool),
    )


__all__ = ["select_for_category", "DEFAULT_SCORE_THRESHOLD"]
