"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.attributes import AttributeDefinition, ItemAttributeValue, ItemTraits
from models.candidate_item import CandidateItem, from_raw_metadata, to_ootd_dict
from models.recommendation import CategorySelection, RecommendationContext, RecommendationResult

__all__ = [
    "AttributeDefinition",
    "ItemAttributeValue",
    "ItemTraits",
    "CandidateItem",
    "from_raw_metadata",
    "to_ootd_dict",
    "CategorySelection",
    "RecommendationContext",
    "RecommendationResult",
]
