"""Candidate wardrobe item data model and helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from models.attributes import (
    AttributeDefinition,
    ItemAttributeValue,
    ItemTraits,
    resolve_traits,
    validate_attribute_value,
)
from models.taxonomy import ClothesType, validate_clothes_type


@dataclass
class CandidateItem:
    """One wardrobe entry offered to the recommendation engine."""

    item_id: str
    name: str
    category: ClothesType
    image_url: Optional[str] = None
    attributes: List[ItemAttributeValue] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.item_id = str(self.item_id)
        self.category = validate_clothes_type(self.category)
        self.attributes = list(self.attributes or [])

    @property
    def traits(self) -> ItemTraits:
        """Recognised attributes, resolved from the current attribute list on every access."""

        return resolve_traits(self.attributes)

    def attribute_map(self) -> Dict[str, Optional[str]]:
        """Return attribute values keyed by definition id."""

        return {attribute.definition.definition_id: attribute.value for attribute in self.attributes}


def from_raw_metadata(
    metadata: Dict[str, Any], definitions: Mapping[str, AttributeDefinition]
) -> CandidateItem:
    """Factory to build a :class:`CandidateItem` from loose catalog metadata.

    ``metadata["attributes"]`` is a list of ``{"definition_id", "value"}``
    mappings; each value is validated against its definition.
    """

    required_fields = ["item_id", "name", "category"]
    missing = [name for name in required_fields if not metadata.get(name)]
    if missing:
        raise ValueError(f"Missing required fields for CandidateItem: {missing}")

    attributes: List[ItemAttributeValue] = []
    for raw in metadata.get("attributes") or []:
        definition_id = str(raw.get("definition_id", ""))
        definition = definitions.get(definition_id)
        if definition is None:
            raise ValueError(f"Unknown attribute definition '{definition_id}'")
        value = validate_attribute_value(definition, raw.get("value"))
        attributes.append(ItemAttributeValue(definition=definition, value=value))

    return CandidateItem(
        item_id=str(metadata["item_id"]),
        name=str(metadata["name"]),
        category=validate_clothes_type(metadata["category"]),
        image_url=metadata.get("image_url"),
        attributes=attributes,
    )


def to_ootd_dict(item: CandidateItem) -> Dict[str, Any]:
    """Serialise an item into the outfit-of-the-day shape used by API responses."""

    return {
        "clothes_id": item.item_id,
        "name": item.name,
        "image_url": item.image_url,
        "type": item.category.value,
        "attributes": [
            {
                "definition_id": attribute.definition.definition_id,
                "definition_name": attribute.definition.name,
                "selectable_values": list(attribute.definition.selectable_values),
                "value": attribute.value,
            }
            for attribute in item.attributes
        ],
    }


__all__ = ["CandidateItem", "from_raw_metadata", "to_ootd_dict"]
