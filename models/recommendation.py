"""Value types exchanged with the recommendation engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from models.candidate_item import CandidateItem
from models.taxonomy import ClothesType, Season, season_for_month


@dataclass(frozen=True)
class RecommendationContext:
    """Normalised weather and calendar signal for one recommendation request."""

    adjusted_temperature: float
    is_precipitating: bool
    current_month: int

    def __post_init__(self) -> None:
        month = int(self.current_month)
        if not 1 <= month <= 12:
            raise ValueError(f"current_month must be between 1 and 12, got {self.current_month}")
        object.__setattr__(self, "current_month", month)
        object.__setattr__(self, "adjusted_temperature", float(self.adjusted_temperature))
        object.__setattr__(self, "is_precipitating", bool(self.is_precipitating))

    @property
    def season(self) -> Season:
        return season_for_month(self.current_month)


@dataclass(frozen=True)
class CategorySelection:
    """Outcome of selecting one item for a single category."""

    category: ClothesType
    item: Optional[CandidateItem]
    score: Optional[float]
    used_fallback: bool
    reason: str
    candidate_count: int = 0


@dataclass(frozen=True)
class RecommendationResult:
    """One item per populated category plus whether any pick was a fallback."""

    items: List[CandidateItem]
    used_fallback: bool
    selections: List[CategorySelection] = field(default_factory=list)
    diagnostics: Dict[str, object] = field(default_factory=dict)


__all__ = ["RecommendationContext", "CategorySelection", "RecommendationResult"]
