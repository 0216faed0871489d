"""Item scorer coverage: warmth tiers, rain, season and bounded totals."""

from __future__ import annotations

import itertools
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.item_scoring import (
    CATEGORY_RULES,
    DEFAULT_RULES,
    CategoryScoringRules,
    ideal_thickness,
    rules_for,
    score_item,
)
from models.attributes import AttributeDefinition, ItemAttributeValue
from models.candidate_item import CandidateItem
from models.recommendation import RecommendationContext
from models.taxonomy import ClothesType, Thickness

THICKNESS = AttributeDefinition("d1", "두께", ("얇음", "보통", "두꺼움", "LIGHT", "MEDIUM", "HEAVY"))
WATERPROOF = AttributeDefinition("d2", "방수", ("TRUE", "FALSE", "가능", "불가능"))
SEASON = AttributeDefinition("d3", "season", ("SPRING", "SUMMER", "FALL", "WINTER"))
COLOR = AttributeDefinition("d4", "color", ("RED", "BLUE"))


def _item(category=ClothesType.TOP, item_id="item", **values) -> CandidateItem:
    definitions = {"thickness": THICKNESS, "waterproof": WATERPROOF, "season": SEASON, "color": COLOR}
    attributes = [ItemAttributeValue(definitions[key], value) for key, value in values.items()]
    return CandidateItem(item_id=item_id, name=item_id, category=category, attributes=attributes)


def _context(temperature: float, rain: bool = False, month: int = 4) -> RecommendationContext:
    return RecommendationContext(adjusted_temperature=temperature, is_precipitating=rain, current_month=month)


def test_ideal_thickness_bands():
    assert ideal_thickness(30) is Thickness.LIGHT
    assert ideal_thickness(22) is Thickness.MEDIUM
    assert ideal_thickness(8) is Thickness.MEDIUM
    assert ideal_thickness(7.9) is Thickness.HEAVY


def test_light_beats_heavy_on_hot_day():
    light = score_item(_item(thickness="LIGHT"), _context(30, month=7))
    heavy = score_item(_item(thickness="HEAVY"), _context(30, month=7))
    assert light.total > heavy.total


def test_heavy_beats_light_on_cold_day():
    light = score_item(_item(thickness="얇음"), _context(0, month=1))
    heavy = score_item(_item(thickness="두꺼움"), _context(0, month=1))
    assert heavy.total > light.total


def test_medium_is_best_on_mild_day():
    scores = {
        value: score_item(_item(thickness=value), _context(15, month=10)).total
        for value in ("LIGHT", "MEDIUM", "HEAVY")
    }
    assert scores["MEDIUM"] > scores["LIGHT"]
    assert scores["MEDIUM"] > scores["HEAVY"]


def test_warmth_penalty_is_proportional_to_tier_distance():
    context = _context(-5, month=1)
    heavy = score_item(_item(thickness="HEAVY"), context).contributions["THICKNESS"]
    medium = score_item(_item(thickness="MEDIUM"), context).contributions["THICKNESS"]
    light = score_item(_item(thickness="LIGHT"), context).contributions["THICKNESS"]
    assert heavy == DEFAULT_RULES.warmth
    assert heavy - medium == medium - light
    assert light == 0.0


def test_waterproof_bonus_and_smaller_penalty_when_raining():
    context = _context(15, rain=True)
    resistant = score_item(_item(waterproof="TRUE"), context).contributions["WATERPROOF"]
    not_resistant = score_item(_item(waterproof="불가능"), context).contributions["WATERPROOF"]
    unknown = score_item(_item(), context).contributions["WATERPROOF"]
    assert resistant > 0
    assert not_resistant < 0
    assert abs(not_resistant) < resistant
    assert unknown == 0.0


def test_waterproof_is_neutral_when_dry():
    context = _context(15, rain=False)
    assert score_item(_item(waterproof="TRUE"), context).contributions["WATERPROOF"] == 0.0
    assert score_item(_item(waterproof="FALSE"), context).contributions["WATERPROOF"] == 0.0


def test_season_match_is_bonus_and_mismatch_is_neutral():
    july = _context(25, month=7)
    assert score_item(_item(season="SUMMER"), july).contributions["SEASON"] == DEFAULT_RULES.season
    assert score_item(_item(season="WINTER"), july).contributions["SEASON"] == 0.0


def test_scenario_heavy_winter_item_scores_high():
    item = _item(thickness="HEAVY", season="WINTER")
    score = score_item(item, _context(-5, rain=False, month=1))
    assert score.total == DEFAULT_RULES.warmth + DEFAULT_RULES.season
    assert score.contributions["WATERPROOF"] == 0.0
    assert score.total >= 70


def test_missing_and_unrecognised_attributes_do_not_fail():
    bare = score_item(_item(), _context(10))
    assert bare.total == 0.0
    assert bare.scorable is False

    unknown = score_item(_item(color="RED"), _context(10))
    assert unknown.total == 0.0
    assert unknown.scorable is False

    odd = CandidateItem(
        item_id="odd",
        name="odd",
        category="TOP",
        attributes=[ItemAttributeValue(THICKNESS, "SUPER_HEAVY"), ItemAttributeValue(SEASON, None)],
    )
    assert score_item(odd, _context(10)).total == 0.0


def test_lone_penalty_never_pushes_score_below_zero():
    score = score_item(_item(waterproof="FALSE"), _context(15, rain=True))
    assert score.contributions["WATERPROOF"] < 0
    assert score.total == 0.0


def test_score_is_bounded_for_every_combination():
    temperatures = [-20, 0, 8, 15, 22, 23, 40]
    for category in ClothesType:
        upper = rules_for(category).max_score
        for thickness, waterproof, season, temperature, rain, month in itertools.product(
            ["LIGHT", "MEDIUM", "HEAVY", None],
            ["TRUE", "FALSE", None],
            ["SPRING", "SUMMER", "FALL", "WINTER", None],
            temperatures,
            [True, False],
            [1, 4, 7, 10],
        ):
            values = {
                key: value
                for key, value in (("thickness", thickness), ("waterproof", waterproof), ("season", season))
                if value is not None
            }
            total = score_item(_item(category=category, **values), _context(temperature, rain, month)).total
            assert 0.0 <= total <= upper


def test_score_is_deterministic_and_order_independent():
    attributes = [
        ItemAttributeValue(THICKNESS, "HEAVY"),
        ItemAttributeValue(WATERPROOF, "TRUE"),
        ItemAttributeValue(SEASON, "WINTER"),
    ]
    context = _context(-3, rain=True, month=12)
    baseline = score_item(CandidateItem("a", "a", ClothesType.OUTER, attributes=attributes), context)
    for permutation in itertools.permutations(attributes):
        item = CandidateItem("a", "a", ClothesType.OUTER, attributes=list(permutation))
        assert score_item(item, context) == baseline


def test_conflicting_duplicates_resolve_independently_of_order():
    forward = _item_with([("LIGHT",), ("HEAVY",)])
    backward = _item_with([("HEAVY",), ("LIGHT",)])
    context = _context(-5, month=1)
    assert score_item(forward, context).total == score_item(backward, context).total
    assert forward.traits.thickness is Thickness.LIGHT


def _item_with(thickness_values):
    return CandidateItem(
        item_id="dup",
        name="dup",
        category=ClothesType.TOP,
        attributes=[ItemAttributeValue(THICKNESS, value) for (value,) in thickness_values],
    )


def test_category_rules_lookup_and_override():
    assert rules_for(ClothesType.OUTER) is CATEGORY_RULES[ClothesType.OUTER]
    assert rules_for(ClothesType.HAT) is DEFAULT_RULES
    for rules in CATEGORY_RULES.values():
        assert rules.max_score == 100.0

    custom = {ClothesType.TOP: CategoryScoringRules(warmth=10.0, water_resistance=0.0, season=0.0)}
    score = score_item(_item(thickness="MEDIUM", season="SPRING"), _context(15, month=4), rules=custom)
    assert score.total == 10.0


def test_traits_follow_attribute_changes_after_construction():
    coat = CandidateItem("coat", "coat", ClothesType.OUTER)
    coat.attributes.append(ItemAttributeValue(THICKNESS, "HEAVY"))
    coat.attributes.append(ItemAttributeValue(SEASON, "WINTER"))
    fresh = CandidateItem("coat", "coat", ClothesType.OUTER, attributes=list(coat.attributes))
    context = _context(-5, month=1)

    assert coat == fresh
    assert coat.traits.thickness is Thickness.HEAVY
    assert score_item(coat, context).total == 75.0
    assert score_item(fresh, context).total == 75.0
