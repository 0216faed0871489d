"""Lightweight evaluation harness for deterministic scenarios."""

from __future__ import annotations

import random
from typing import Dict, List

from evaluation.scenarios import EvaluationScenario, SCENARIOS
from logic.recommendation_engine import recommend
from models.recommendation import RecommendationResult


def _evaluate_expectations(expectations: Dict[str, object], result: RecommendationResult) -> Dict[str, object]:
    chosen = {selection.category.value: selection for selection in result.selections if selection.item}
    checks: Dict[str, bool] = {}
    if "used_fallback" in expectations:
        checks["used_fallback"] = result.used_fallback is expectations["used_fallback"]
    for category, item_id in dict(expectations.get("chosen", {})).items():
        checks[f"chosen:{category}"] = category in chosen and chosen[category].item.item_id == item_id
    for category, minimum in dict(expectations.get("min_score", {})).items():
        checks[f"min_score:{category}"] = category in chosen and (chosen[category].score or 0.0) >= minimum
    for category, allowed in dict(expectations.get("chosen_from", {})).items():
        checks[f"chosen_from:{category}"] = category in chosen and chosen[category].item.item_id in allowed
    if "fallback_categories" in expectations:
        checks["fallback_categories"] = (
            result.diagnostics.get("fallback_categories") == expectations["fallback_categories"]
        )
    for category in expectations.get("absent", []):
        checks[f"absent:{category}"] = category not in chosen
    if "categories" in expectations:
        checks["categories"] = [item.category.value for item in result.items] == expectations["categories"]
    return {"passed": all(checks.values()), "checks": checks}


def run_scenario(scenario: EvaluationScenario) -> Dict[str, object]:
    rng = random.Random(scenario.seed) if scenario.seed is not None else None
    result = recommend(scenario.wardrobe, scenario.context, rng=rng)
    evaluation = _evaluate_expectations(scenario.expectations, result)
    return {
        "scenario": scenario.name,
        "passed": evaluation["passed"],
        "checks": evaluation["checks"],
        "item_count": len(result.items),
        "result": result,
    }


def run_evaluation_suite() -> List[Dict[str, object]]:
    return [run_scenario(scenario) for scenario in SCENARIOS]


def run_smoke_checks() -> List[str]:
    results = run_evaluation_suite()
    return [f"{result['scenario']}: {'passed' if result['passed'] else 'failed'}" for result in results]


__all__ = ["run_evaluation_suite", "run_scenario", "run_smoke_checks"]
