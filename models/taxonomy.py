"""Canonical taxonomy definitions for clothes and their recommendation attributes.

This module centralises the closed label sets the recommender understands:
clothing categories, the attribute kinds that influence scoring and the values
each kind may take. Catalog data arrives with free-form names (English or
Korean); the helpers below map those names onto the canonical members so the
scorer never has to deal with raw strings.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, Optional, Type, TypeVar


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a taxonomy key."""

    return value.strip().lower().replace(" ", "_").replace("-", "_")


class ClothesType(str, Enum):
    """Closed set of clothing categories; declaration order is the output order."""

    TOP = "TOP"
    BOTTOM = "BOTTOM"
    DRESS = "DRESS"
    OUTER = "OUTER"
    UNDERWEAR = "UNDERWEAR"
    ACCESSORY = "ACCESSORY"
    SHOES = "SHOES"
    SOCKS = "SOCKS"
    HAT = "HAT"
    BAG = "BAG"
    SCARF = "SCARF"
    ETC = "ETC"


class AttributeKind(str, Enum):
    THICKNESS = "THICKNESS"
    WATERPROOF = "WATERPROOF"
    SEASON = "SEASON"
    STYLE = "STYLE"


class Thickness(str, Enum):
    """Warmth tiers, ordered from lightest to heaviest."""

    LIGHT = "LIGHT"
    MEDIUM = "MEDIUM"
    HEAVY = "HEAVY"

    @property
    def tier(self) -> int:
        return list(Thickness).index(self)


class Waterproof(str, Enum):
    TRUE = "TRUE"
    FALSE = "FALSE"


class Season(str, Enum):
    SPRING = "SPRING"
    SUMMER = "SUMMER"
    FALL = "FALL"
    WINTER = "WINTER"


class Style(str, Enum):
    CASUAL = "CASUAL"
    FORMAL = "FORMAL"
    SPORTY = "SPORTY"
    CHIC = "CHIC"
    VINTAGE = "VINTAGE"
    CLASSIC = "CLASSIC"
    MINIMAL = "MINIMAL"


ATTRIBUTE_NAME_ALIASES: Dict[str, AttributeKind] = {
    "thickness": AttributeKind.THICKNESS,
    "warmth": AttributeKind.THICKNESS,
    "두께": AttributeKind.THICKNESS,
    "waterproof": AttributeKind.WATERPROOF,
    "water_resistance": AttributeKind.WATERPROOF,
    "water_resistant": AttributeKind.WATERPROOF,
    "방수": AttributeKind.WATERPROOF,
    "season": AttributeKind.SEASON,
    "계절": AttributeKind.SEASON,
    "style": AttributeKind.STYLE,
    "스타일": AttributeKind.STYLE,
}

VALUE_ALIASES: Dict[AttributeKind, Dict[str, Enum]] = {
    AttributeKind.THICKNESS: {
        "light": Thickness.LIGHT,
        "thin": Thickness.LIGHT,
        "얇음": Thickness.LIGHT,
        "medium": Thickness.MEDIUM,
        "mid": Thickness.MEDIUM,
        "보통": Thickness.MEDIUM,
        "heavy": Thickness.HEAVY,
        "thick": Thickness.HEAVY,
        "두꺼움": Thickness.HEAVY,
    },
    AttributeKind.WATERPROOF: {
        "true": Waterproof.TRUE,
        "yes": Waterproof.TRUE,
        "가능": Waterproof.TRUE,
        "false": Waterproof.FALSE,
        "no": Waterproof.FALSE,
        "불가능": Waterproof.FALSE,
    },
    AttributeKind.SEASON: {
        "spring": Season.SPRING,
        "봄": Season.SPRING,
        "summer": Season.SUMMER,
        "여름": Season.SUMMER,
        "fall": Season.FALL,
        "autumn": Season.FALL,
        "가을": Season.FALL,
        "winter": Season.WINTER,
        "겨울": Season.WINTER,
    },
    AttributeKind.STYLE: {
        "casual": Style.CASUAL,
        "캐주얼": Style.CASUAL,
        "formal": Style.FORMAL,
        "포멀": Style.FORMAL,
        "sporty": Style.SPORTY,
        "스포티": Style.SPORTY,
        "chic": Style.CHIC,
        "시크": Style.CHIC,
        "vintage": Style.VINTAGE,
        "빈티지": Style.VINTAGE,
        "classic": Style.CLASSIC,
        "클래식": Style.CLASSIC,
        "minimal": Style.MINIMAL,
        "미니멀": Style.MINIMAL,
    },
}

MONTH_TO_SEASON: Dict[int, Season] = {
    3: Season.SPRING,
    4: Season.SPRING,
    5: Season.SPRING,
    6: Season.SUMMER,
    7: Season.SUMMER,
    8: Season.SUMMER,
    9: Season.FALL,
    10: Season.FALL,
    11: Season.WINTER,
    12: Season.WINTER,
    1: Season.WINTER,
    2: Season.WINTER,
}

E = TypeVar("E", bound=Enum)


def validate_clothes_type(value: str | ClothesType) -> ClothesType:
    """Validate and normalise a clothing category.

    Raises a :class:`ValueError` if the category is not part of the canonical
    taxonomy.
    """

    if isinstance(value, ClothesType):
        return value
    key = _normalize_key(str(value)).upper()
    try:
        return ClothesType(key)
    except ValueError:
        raise ValueError(
            f"Unsupported clothes type '{value}'. Allowed: {[member.value for member in ClothesType]}"
        ) from None


def attribute_kind_for(name: Optional[str]) -> Optional[AttributeKind]:
    """Map an attribute definition name onto a recognised kind, or ``None``."""

    if not name:
        return None
    return ATTRIBUTE_NAME_ALIASES.get(_normalize_key(name))


def parse_attribute_value(kind: AttributeKind, value: Optional[str]) -> Optional[Enum]:
    """Map a raw attribute value onto its canonical member, or ``None`` if unknown."""

    if value is None:
        return None
    return VALUE_ALIASES[kind].get(_normalize_key(str(value)))


def season_for_month(month: int) -> Season:
    """Return the season implied by a calendar month (1-12)."""

    try:
        return MONTH_TO_SEASON[int(month)]
    except KeyError:
        raise ValueError(f"Month must be between 1 and 12, got {month}") from None


def lowest_member(enum_type: Type[E], members: Iterable[E]) -> Optional[E]:
    """Return the member declared first in ``enum_type`` among ``members``."""

    order = list(enum_type)
    candidates = sorted(set(members), key=order.index)
    return candidates[0] if candidates else None


__all__ = [
    "ClothesType",
    "AttributeKind",
    "Thickness",
    "Waterproof",
    "Season",
    "Style",
    "ATTRIBUTE_NAME_ALIASES",
    "VALUE_ALIASES",
    "MONTH_TO_SEASON",
    "validate_clothes_type",
    "attribute_kind_for",
    "parse_attribute_value",
    "season_for_month",
    "lowest_member",
]
