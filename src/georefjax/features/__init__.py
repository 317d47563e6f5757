"""Per-vertex feature IDs of mesh primitives.

- :class:`FeatureId` -- a feature ID set with its source, count and
  property table
- :class:`FeatureIdAttribute`, :class:`FeatureIdTexture`,
  :class:`ImplicitFeatureId`, :class:`NoFeatureId` -- source variants
"""

from .feature_id import (
    FeatureId,
    FeatureIdAttribute,
    FeatureIdSource,
    FeatureIdTexture,
    FeatureIdType,
    ImplicitFeatureId,
    NoFeatureId,
    feature_id_type_of,
)

__all__ = [
    "FeatureId",
    "FeatureIdType",
    "FeatureIdSource",
    "FeatureIdAttribute",
    "FeatureIdTexture",
    "ImplicitFeatureId",
    "NoFeatureId",
    "feature_id_type_of",
]
