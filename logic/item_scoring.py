"""Deterministic suitability scoring for a single wardrobe item."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from models.candidate_item import CandidateItem
from models.recommendation import RecommendationContext
from models.taxonomy import AttributeKind, ClothesType, Thickness, Waterproof

HOT_ABOVE_C = 22.0
COLD_BELOW_C = 8.0
MAX_TIER_DISTANCE = len(Thickness) - 1


@dataclass(frozen=True)
class CategoryScoringRules:
    """Per-category attribute weights; they sum to the maximum achievable score."""

    warmth: float = 60.0
    water_resistance: float = 20.0
    season: float = 20.0

    @property
    def max_score(self) -> float:
        return self.warmth + self.water_resistance + self.season

    @property
    def water_penalty(self) -> float:
        return self.water_resistance / 2


DEFAULT_RULES = CategoryScoringRules()

CATEGORY_RULES: Dict[ClothesType, CategoryScoringRules] = {
    ClothesType.OUTER: CategoryScoringRules(warmth=55.0, water_resistance=25.0, season=20.0),
    ClothesType.SHOES: CategoryScoringRules(warmth=50.0, water_resistance=30.0, season=20.0),
    ClothesType.BAG: CategoryScoringRules(warmth=30.0, water_resistance=40.0, season=30.0),
    ClothesType.UNDERWEAR: CategoryScoringRules(warmth=70.0, water_resistance=10.0, season=20.0),
    ClothesType.SOCKS: CategoryScoringRules(warmth=70.0, water_resistance=10.0, season=20.0),
}


@dataclass(frozen=True)
class ItemScore:
    total: float
    contributions: Dict[str, float] = field(default_factory=dict)
    scorable: bool = False


def _clamp(value: float, upper: float) -> float:
    return max(0.0, min(upper, value))


def rules_for(
    category: ClothesType, rules: Optional[Mapping[ClothesType, CategoryScoringRules]] = None
) -> CategoryScoringRules:
    table = CATEGORY_RULES if rules is None else rules
    return table.get(category, DEFAULT_RULES)


def ideal_thickness(adjusted_temperature: float) -> Thickness:
    """Return the warmth tier the temperature calls for."""

    if adjusted_temperature > HOT_ABOVE_C:
        return Thickness.LIGHT
    if adjusted_temperature >= COLD_BELOW_C:
        return Thickness.MEDIUM
    return Thickness.HEAVY


def _warmth_contribution(thickness: Optional[Thickness], temperature: float, weight: float) -> float:
    if thickness is None:
        return 0.0
    distance = abs(thickness.tier - ideal_thickness(temperature).tier)
    return weight * (1 - distance / MAX_TIER_DISTANCE)


def _water_contribution(
    waterproof: Optional[Waterproof], is_precipitating: bool, rules: CategoryScoringRules
) -> float:
    if not is_precipitating or waterproof is None:
        return 0.0
    if waterproof is Waterproof.TRUE:
        return rules.water_resistance
    return -rules.water_penalty


def score_item(
    item: CandidateItem,
    context: RecommendationContext,
    rules: Optional[Mapping[ClothesType, CategoryScoringRules]] = None,
) -> ItemScore:
    """Score one item against the context.

    The total is the sum of per-attribute contributions clamped to
    ``[0, max_score]`` of the item's category rules. Missing attributes add
    nothing.
    """

    category_rules = rules_for(item.category, rules)
    traits = item.traits
    contributions = {
        AttributeKind.THICKNESS.value: _warmth_contribution(
            traits.thickness, context.adjusted_temperature, category_rules.warmth
        ),
        AttributeKind.WATERPROOF.value: _water_contribution(
            traits.waterproof, context.is_precipitating, category_rules
        ),
        AttributeKind.SEASON.value: (
            category_rules.season if traits.season is not None and traits.season is context.season else 0.0
        ),
    }
    total = _clamp(sum(contributions.values()), category_rules.max_score)
    return ItemScore(total=total, contributions=contributions, scorable=traits.is_scorable)


__all__ = [
    "CategoryScoringRules",
    "CATEGORY_RULES",
    "DEFAULT_RULES",
    "ItemScore",
    "ideal_thickness",
    "rules_for",
    "score_item",
]
