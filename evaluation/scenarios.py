"""Evaluation scenarios exercising warmth, rain, season and fallback behaviour."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from models.attributes import AttributeDefinition, ItemAttributeValue
from models.candidate_item import CandidateItem
from models.recommendation import RecommendationContext
from models.taxonomy import ClothesType

THICKNESS = AttributeDefinition("def-thickness", "thickness", ("LIGHT", "MEDIUM", "HEAVY"))
WATERPROOF = AttributeDefinition("def-waterproof", "waterproof", ("TRUE", "FALSE"))
SEASON = AttributeDefinition("def-season", "season", ("SPRING", "SUMMER", "FALL", "WINTER"))


@dataclass
class EvaluationScenario:
    name: str
    description: str
    context: RecommendationContext
    wardrobe: List[CandidateItem]
    expectations: Dict[str, object]
    seed: Optional[int] = 7


def _item(item_id: str, category: ClothesType, *attributes: Tuple[AttributeDefinition, str]) -> CandidateItem:
    return CandidateItem(
        item_id=item_id,
        name=item_id.replace("_", " "),
        category=category,
        image_url=f"https://example.com/{item_id}.jpg",
        attributes=[ItemAttributeValue(definition=definition, value=value) for definition, value in attributes],
    )


SCENARIOS: List[EvaluationScenario] = [
    EvaluationScenario(
        name="winter_heavy_coat",
        description="Heavy winter coat on a freezing dry January day scores high on merit.",
        context=RecommendationContext(adjusted_temperature=-5, is_precipitating=False, current_month=1),
        wardrobe=[
            _item("outer_parka", ClothesType.OUTER, (THICKNESS, "HEAVY"), (SEASON, "WINTER")),
            _item("outer_windbreaker", ClothesType.OUTER, (THICKNESS, "LIGHT"), (SEASON, "SUMMER")),
        ],
        expectations={"chosen": {"OUTER": "outer_parka"}, "used_fallback": False, "min_score": {"OUTER": 70.0}},
    ),
    EvaluationScenario(
        name="tied_outerwear",
        description="Two equally suitable coats resolve to the lowest id on every run.",
        context=RecommendationContext(adjusted_temperature=-5, is_precipitating=False, current_month=1),
        wardrobe=[
            _item("outer_b", ClothesType.OUTER, (THICKNESS, "HEAVY"), (SEASON, "WINTER")),
            _item("outer_a", ClothesType.OUTER, (THICKNESS, "HEAVY"), (SEASON, "WINTER")),
        ],
        expectations={"chosen": {"OUTER": "outer_a"}, "used_fallback": False},
    ),
    EvaluationScenario(
        name="hot_rainy_bottoms_fallback",
        description="Only winter-weight bottoms on a hot rainy July day force a random pick.",
        context=RecommendationContext(adjusted_temperature=30, is_precipitating=True, current_month=7),
        wardrobe=[
            _item("bottom_wool", ClothesType.BOTTOM, (THICKNESS, "HEAVY"), (SEASON, "WINTER"), (WATERPROOF, "FALSE")),
            _item("bottom_corduroy", ClothesType.BOTTOM, (THICKNESS, "HEAVY"), (SEASON, "FALL")),
            _item("bottom_fleece", ClothesType.BOTTOM, (THICKNESS, "HEAVY"), (WATERPROOF, "FALSE")),
        ],
        expectations={
            "used_fallback": True,
            "fallback_categories": ["BOTTOM"],
            "chosen_from": {"BOTTOM": ["bottom_wool", "bottom_corduroy", "bottom_fleece"]},
        },
    ),
    EvaluationScenario(
        name="no_accessories",
        description="A wardrobe without accessories omits the category without flagging a fallback.",
        context=RecommendationContext(adjusted_temperature=15, is_precipitating=False, current_month=4),
        wardrobe=[
            _item("top_shirt", ClothesType.TOP, (THICKNESS, "MEDIUM"), (SEASON, "SPRING")),
            _item("bottom_chinos", ClothesType.BOTTOM, (THICKNESS, "MEDIUM"), (SEASON, "SPRING")),
        ],
        expectations={"absent": ["ACCESSORY"], "used_fallback": False, "categories": ["TOP", "BOTTOM"]},
    ),
]


__all__ = ["EvaluationScenario", "SCENARIOS", "THICKNESS", "WATERPROOF", "SEASON"]
