"""FastAPI server exposing recommendation endpoints for deployment."""

import random

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from logic.recommendation_engine import recommend
from logic.validation import RecommendationRequest, UserRecommendationRequest, validation_failure
from models.candidate_item import to_ootd_dict
from recommender_app.app import OutfitRecommenderApp
from recommender_app.logging_config import configure_logging

configure_logging()

app = FastAPI(title="Outfit Recommender", version="0.1.0")
_recommender_app: OutfitRecommenderApp | None = None


def get_recommender_app() -> OutfitRecommenderApp:
    """Lazily build the shared app so importing this module touches no storage."""

    global _recommender_app
    if _recommender_app is None:
        _recommender_app = OutfitRecommenderApp()
    return _recommender_app


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return rejected payloads in the needs_review shape used by the tools."""

    payload = validation_failure(f"Invalid request to {request.url.path}", exc)
    return JSONResponse(status_code=422, content=jsonable_encoder(payload))


@app.get("/healthz")
async def healthcheck(recommender: OutfitRecommenderApp = Depends(get_recommender_app)) -> dict:
    """Lightweight readiness check."""

    return {
        "status": "ok",
        "service": "outfit-recommender",
        "environment": recommender.config.environment or "local",
        "score_threshold": recommender.config.score_threshold,
    }


@app.post("/recommendations")
async def recommend_from_snapshot(
    request: RecommendationRequest, recommender: OutfitRecommenderApp = Depends(get_recommender_app)
) -> dict:
    """Run the engine over an explicit wardrobe snapshot and context."""

    result = recommend(
        [item.to_candidate() for item in request.wardrobe],
        request.context.to_context(),
        rng=random.Random(request.seed) if request.seed is not None else None,
        threshold=recommender.config.score_threshold,
        parallel=recommender.config.parallel_categories,
    )
    return {
        "clothes": [to_ootd_dict(item) for item in result.items],
        "used_fallback": result.used_fallback,
        "debug_summary": result.diagnostics,
    }


@app.post("/users/{user_id}/recommendations")
async def recommend_for_user(
    user_id: str,
    request: UserRecommendationRequest,
    recommender: OutfitRecommenderApp = Depends(get_recommender_app),
) -> dict:
    """Recommend from the user's stored wardrobe and the current weather."""

    response = recommender.recommend_for_user(
        user_id=user_id,
        target_date=request.date,
        location=request.location,
        temperature_sensitivity=request.temperature_sensitivity,
        seed=request.seed,
    )
    if response.get("status") != "ok":
        raise HTTPException(status_code=404, detail=response.get("message", "recommendation failed"))
    return response


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=int("8080"), reload=False)
