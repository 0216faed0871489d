"""Attribute definitions, item attribute values and their resolved traits."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from models.taxonomy import (
    AttributeKind,
    Season,
    Style,
    Thickness,
    Waterproof,
    attribute_kind_for,
    lowest_member,
    parse_attribute_value,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AttributeDefinition:
    """Catalog entry describing one attribute and its closed set of values."""

    definition_id: str
    name: str
    selectable_values: Tuple[str, ...] = ()
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        name = str(self.name).strip()
        if not name:
            raise ValueError("Attribute definition name must not be empty")
        object.__setattr__(self, "name", name)
        object.__setattr__(
            self, "selectable_values", tuple(str(value).strip() for value in self.selectable_values)
        )

    @property
    def kind(self) -> Optional[AttributeKind]:
        return attribute_kind_for(self.name)


@dataclass(frozen=True)
class ItemAttributeValue:
    """The value one clothing item holds for an attribute definition."""

    definition: AttributeDefinition
    value: Optional[str] = None


def validate_attribute_value(definition: AttributeDefinition, value: Optional[str]) -> Optional[str]:
    """Check ``value`` against the definition's selectable values.

    ``None`` and empty strings are treated as unset. Raises :class:`ValueError`
    for values outside the closed set.
    """

    if value is None or not str(value).strip():
        return None
    cleaned = str(value).strip()
    if cleaned not in definition.selectable_values:
        raise ValueError(
            f"Value '{cleaned}' is not selectable for attribute '{definition.name}'. "
            f"Allowed: {list(definition.selectable_values)}"
        )
    return cleaned


@dataclass(frozen=True)
class ItemTraits:
    """Recognised recommendation attributes of one item, resolved to canonical members."""

    thickness: Optional[Thickness] = None
    waterproof: Optional[Waterproof] = None
    season: Optional[Season] = None
    style: Optional[Style] = None

    @property
    def is_scorable(self) -> bool:
        return any(value is not None for value in (self.thickness, self.waterproof, self.season))


_TRAIT_TYPES = {
    AttributeKind.THICKNESS: ("thickness", Thickness),
    AttributeKind.WATERPROOF: ("waterproof", Waterproof),
    AttributeKind.SEASON: ("season", Season),
    AttributeKind.STYLE: ("style", Style),
}


def resolve_traits(attributes: Iterable[ItemAttributeValue]) -> ItemTraits:
    """Resolve raw attribute values into :class:`ItemTraits`.

    Unknown definitions and unrecognised values are skipped. When an item
    carries conflicting values for the same kind, the lowest-ordered member
    wins so that the outcome never depends on attribute order.
    """

    collected: Dict[AttributeKind, List] = {}
    for attribute in attributes:
        if attribute is None or attribute.definition is None:
            continue
        kind = attribute.definition.kind
        if kind is None:
            continue
        parsed = parse_attribute_value(kind, attribute.value)
        if parsed is None:
            continue
        collected.setdefault(kind, []).append(parsed)

    resolved: Dict[str, object] = {}
    for kind, values in collected.items():
        field_name, enum_type = _TRAIT_TYPES[kind]
        resolved[field_name] = lowest_member(enum_type, values)
    return ItemTraits(**resolved)


__all__ = [
    "AttributeDefinition",
    "ItemAttributeValue",
    "ItemTraits",
    "resolve_traits",
    "validate_attribute_value",
]
