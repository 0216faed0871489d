"""HTTP surface tests using FastAPI's test client."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.validation import AttributeValuePayload, validation_failure
from models.attributes import ItemAttributeValue
from models.candidate_item import CandidateItem
from models.taxonomy import ClothesType
from recommender_app.app import OutfitRecommenderApp
from recommender_app.config import RecommenderConfig
from server import api
from tools.wardrobe_store import SQLiteWardrobeStore
from tools.weather_provider import MockWeatherProvider

THICKNESS = {"definition_id": "t", "name": "thickness", "selectable_values": ["LIGHT", "MEDIUM", "HEAVY"]}
SEASON = {"definition_id": "s", "name": "season", "selectable_values": ["SPRING", "SUMMER", "FALL", "WINTER"]}


@pytest.fixture()
def client(tmp_path: Path):
    store = SQLiteWardrobeStore(tmp_path / "wardrobe.db")
    thickness = store.create_definition("thickness", ["LIGHT", "MEDIUM", "HEAVY"])
    store.create_item(
        "user-1",
        CandidateItem("top-1", "Oxford shirt", ClothesType.TOP, attributes=[ItemAttributeValue(thickness, "MEDIUM")]),
    )
    recommender = OutfitRecommenderApp(
        config=RecommenderConfig(environment="test"),
        wardrobe_store=store,
        weather_provider=MockWeatherProvider(),
    )
    api.app.dependency_overrides[api.get_recommender_app] = lambda: recommender
    yield TestClient(api.app)
    api.app.dependency_overrides.clear()


def test_healthz_reports_environment(client: TestClient) -> None:
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "service": "outfit-recommender",
        "environment": "test",
        "score_threshold": 40.0,
    }


def test_snapshot_recommendation(client: TestClient) -> None:
    payload = {
        "context": {"adjusted_temperature": -3, "is_precipitating": False, "current_month": 1},
        "wardrobe": [
            {
                "item_id": "coat-b",
                "name": "Coat B",
                "category": "OUTER",
                "attributes": [{"definition": THICKNESS, "value": "HEAVY"}, {"definition": SEASON, "value": "WINTER"}],
            },
            {
                "item_id": "coat-a",
                "name": "Coat A",
                "category": "OUTER",
                "attributes": [{"definition": THICKNESS, "value": "HEAVY"}, {"definition": SEASON, "value": "WINTER"}],
            },
        ],
        "seed": 1,
    }

    response = client.post("/recommendations", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert [piece["clothes_id"] for piece in body["clothes"]] == ["coat-a"]
    assert body["used_fallback"] is False
    assert body["debug_summary"]["categories"]["OUTER"]["score"] == 75.0


def test_snapshot_with_empty_wardrobe(client: TestClient) -> None:
    response = client.post(
        "/recommendations", json={"context": {"adjusted_temperature": 20, "current_month": 6}, "wardrobe": []}
    )
    assert response.status_code == 200
    assert response.json()["clothes"] == []
    assert response.json()["used_fallback"] is False


def test_snapshot_rejects_invalid_payloads(client: TestClient) -> None:
    bad_month = {"context": {"adjusted_temperature": 20, "current_month": 13}, "wardrobe": []}
    assert client.post("/recommendations", json=bad_month).status_code == 422

    bad_value = {
        "context": {"adjusted_temperature": 20, "current_month": 6},
        "wardrobe": [
            {
                "item_id": "x",
                "name": "x",
                "category": "TOP",
                "attributes": [{"definition": THICKNESS, "value": "EXTRA"}],
            }
        ],
    }
    assert client.post("/recommendations", json=bad_value).status_code == 422

    bad_category = {
        "context": {"adjusted_temperature": 20, "current_month": 6},
        "wardrobe": [{"item_id": "x", "name": "x", "category": "CAPE"}],
    }
    assert client.post("/recommendations", json=bad_category).status_code == 422


def test_user_recommendation_uses_stored_wardrobe(client: TestClient) -> None:
    response = client.post(
        "/users/user-1/recommendations",
        json={"location": "Seoul", "date": "2025-04-10", "temperature_sensitivity": 2.5, "seed": 5},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert [piece["clothes_id"] for piece in body["clothes"]] == ["top-1"]
    assert body["context"]["current_month"] == 4


def test_user_recommendation_for_unknown_user_is_404(client: TestClient) -> None:
    response = client.post("/users/ghost/recommendations", json={"location": "Seoul", "date": "2025-04-10"})
    assert response.status_code == 404


def test_user_recommendation_validates_sensitivity(client: TestClient) -> None:
    response = client.post(
        "/users/user-1/recommendations",
        json={"location": "Seoul", "date": "2025-04-10", "temperature_sensitivity": 9},
    )
    assert response.status_code == 422


def test_invalid_payload_returns_needs_review_details(client: TestClient) -> None:
    response = client.post(
        "/recommendations", json={"context": {"adjusted_temperature": 20, "current_month": 13}, "wardrobe": []}
    )

    assert response.status_code == 422
    body = response.json()
    assert body["status"] == "needs_review"
    assert body["message"] == "Invalid request to /recommendations"
    assert any("current_month" in detail["loc"] for detail in body["details"])


def test_unselectable_value_error_is_serialised(client: TestClient) -> None:
    payload = {
        "context": {"adjusted_temperature": 20, "current_month": 6},
        "wardrobe": [
            {
                "item_id": "x",
                "name": "x",
                "category": "TOP",
                "attributes": [{"definition": THICKNESS, "value": "EXTRA"}],
            }
        ],
    }

    response = client.post("/recommendations", json=payload)

    assert response.status_code == 422
    details = response.json()["details"]
    assert any("not selectable" in detail["msg"] for detail in details)
    assert all(isinstance(value, str) for detail in details for value in detail.get("ctx", {}).values())


def test_snapshot_honours_parallel_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []
    real_recommend = api.recommend

    def recording_recommend(*args, **kwargs):
        calls.append(kwargs)
        return real_recommend(*args, **kwargs)

    monkeypatch.setattr(api, "recommend", recording_recommend)
    recommender = OutfitRecommenderApp(
        config=RecommenderConfig(environment="test", parallel_categories=True),
        wardrobe_store=SQLiteWardrobeStore(tmp_path / "wardrobe.db"),
        weather_provider=MockWeatherProvider(),
    )
    api.app.dependency_overrides[api.get_recommender_app] = lambda: recommender
    try:
        response = TestClient(api.app).post(
            "/recommendations",
            json={
                "context": {"adjusted_temperature": 5, "current_month": 1},
                "wardrobe": [
                    {"item_id": "top-1", "name": "Knit", "category": "TOP"},
                    {"item_id": "pants-1", "name": "Chinos", "category": "BOTTOM"},
                ],
                "seed": 3,
            },
        )
    finally:
        api.app.dependency_overrides.clear()

    assert response.status_code == 200
    assert calls and calls[0]["parallel"] is True
    assert sorted(piece["clothes_id"] for piece in response.json()["clothes"]) == ["pants-1", "top-1"]


def test_validation_failure_wraps_pydantic_errors() -> None:
    with pytest.raises(ValidationError) as excinfo:
        AttributeValuePayload.model_validate({"definition": THICKNESS, "value": "EXTRA"})

    payload = validation_failure("bad attribute", excinfo.value)

    assert payload["status"] == "needs_review"
    assert payload["message"] == "bad attribute"
    assert len(payload["details"]) == 1
    detail = payload["details"][0]
    assert detail["type"] == "value_error"
    assert "url" not in detail
    assert all(isinstance(value, str) for value in detail["ctx"].values())
