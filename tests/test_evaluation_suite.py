from evaluation.harness import run_evaluation_suite, run_scenario, run_smoke_checks
from evaluation.scenarios import SCENARIOS


def test_evaluation_scenarios_pass():
    results = run_evaluation_suite()
    assert results, "Expected evaluation scenarios to run"
    for result in results:
        assert result["passed"], f"Scenario {result['scenario']} failed checks: {result['checks']}"
        assert result["item_count"] >= 1


def test_fallback_scenario_is_stable_for_its_seed():
    scenario = next(item for item in SCENARIOS if item.name == "hot_rainy_bottoms_fallback")
    picks = {run_scenario(scenario)["result"].items[0].item_id for _ in range(5)}
    assert len(picks) == 1


def test_smoke_checks_report_every_scenario():
    lines = run_smoke_checks()
    assert len(lines) == len(SCENARIOS)
    assert all(line.endswith("passed") for line in lines)
