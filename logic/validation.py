"""Pydantic schemas and helpers for validating API and tool payloads."""

from __future__ import annotations

import datetime
from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, model_validator

from models.attributes import AttributeDefinition, ItemAttributeValue
from models.candidate_item import CandidateItem
from models.recommendation import RecommendationContext
from models.taxonomy import ClothesType


class WeatherToolInput(BaseModel):
    """Input contract for weather lookups."""

    location: str = Field(min_length=1)
    date: datetime.date


class AttributeDefinitionPayload(BaseModel):
    definition_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    selectable_values: List[str] = []

    def to_definition(self) -> AttributeDefinition:
        return AttributeDefinition(
            definition_id=self.definition_id,
            name=self.name,
            selectable_values=tuple(self.selectable_values),
        )


class AttributeValuePayload(BaseModel):
    """An item's value for one attribute; the value must be selectable."""

    definition: AttributeDefinitionPayload
    value: Optional[str] = None

    @model_validator(mode="after")
    def _value_is_selectable(self) -> "AttributeValuePayload":
        if self.value is not None and self.value not in self.definition.selectable_values:
            raise ValueError(
                f"value '{self.value}' is not selectable for attribute '{self.definition.name}'"
            )
        return self


class CandidateItemPayload(BaseModel):
    item_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    category: ClothesType
    image_url: Optional[str] = None
    attributes: List[AttributeValuePayload] = []

    def to_candidate(self) -> CandidateItem:
        return CandidateItem(
            item_id=self.item_id,
            name=self.name,
            category=self.category,
            image_url=self.image_url,
            attributes=[
                ItemAttributeValue(definition=attribute.definition.to_definition(), value=attribute.value)
                for attribute in self.attributes
            ],
        )


class ContextPayload(BaseModel):
    adjusted_temperature: float
    is_precipitating: bool = False
    current_month: int = Field(ge=1, le=12)

    def to_context(self) -> RecommendationContext:
        return RecommendationContext(
            adjusted_temperature=self.adjusted_temperature,
            is_precipitating=self.is_precipitating,
            current_month=self.current_month,
        )


class RecommendationRequest(BaseModel):
    """Explicit wardrobe snapshot plus context, scored without any lookups."""

    context: ContextPayload
    wardrobe: List[CandidateItemPayload] = []
    seed: Optional[int] = None


class UserRecommendationRequest(BaseModel):
    """Request payload for the stored-wardrobe recommendation pipeline."""

    location: str = Field(min_length=1)
    date: datetime.date
    temperature_sensitivity: Optional[float] = Field(None, ge=0.0, le=5.0)
    seed: Optional[int] = None


class ValidationResult(BaseModel):
    """Wrapper returned to callers when validation fails."""

    status: Literal["needs_review"] = "needs_review"
    message: str
    details: List[Dict[str, Any]]


def _plain_error(error: Mapping[str, Any]) -> Dict[str, Any]:
    detail = {key: value for key, value in error.items() if key not in {"ctx", "url"}}
    detail["loc"] = list(error.get("loc", ()))
    if error.get("ctx"):
        detail["ctx"] = {key: str(value) for key, value in error["ctx"].items()}
    return detail


def validation_failure(message: str, exc: ValidationError | Any) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent review payload.

    ``exc`` may be a Pydantic ``ValidationError`` or FastAPI's
    ``RequestValidationError``; error contexts are stringified so the payload
    serialises as JSON.
    """

    return ValidationResult(message=message, details=[_plain_error(error) for error in exc.errors()]).model_dump()


__all__ = [
    "WeatherToolInput",
    "AttributeDefinitionPayload",
    "AttributeValuePayload",
    "CandidateItemPayload",
    "ContextPayload",
    "RecommendationRequest",
    "UserRecommendationRequest",
    "ValidationResult",
    "validation_failure",
]
