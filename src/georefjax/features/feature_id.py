"""Feature IDs of a mesh primitive.

A feature ID set tells which feature (building, tree, parcel...) each
vertex of a primitive belongs to.  The IDs come from exactly one source:

- :class:`FeatureIdAttribute` -- a per-vertex integer attribute
- :class:`FeatureIdTexture` -- a texture sampled at each vertex's texture
  coordinate
- :class:`ImplicitFeatureId` -- the vertex index is the feature ID
- :class:`NoFeatureId` -- no usable source

:data:`FeatureIdSource` is the tagged union of these variants.  Every
function that consumes it handles each variant explicitly and raises on
anything else, so adding a variant cannot silently fall through.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Union

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

_NO_FEATURE = -1


class FeatureIdType(enum.Enum):
    """Kind of source a :class:`FeatureId` reads from."""

    NONE = "none"
    ATTRIBUTE = "attribute"
    TEXTURE = "texture"
    IMPLICIT = "implicit"


@dataclass(frozen=True)
class FeatureIdAttribute:
    """Feature IDs stored as a per-vertex attribute.

    Args:
        feature_ids: Integer array of shape ``(n_vertices,)``.
    """

    feature_ids: Array

    def __post_init__(self) -> None:
        object.__setattr__(self, "feature_ids", jnp.asarray(self.feature_ids, dtype=jnp.int64))

    def feature_id_for_vertex(self, vertex_index: int) -> int:
        if vertex_index < 0 or vertex_index >= self.feature_ids.shape[0]:
            return _NO_FEATURE
        return int(self.feature_ids[vertex_index])


@dataclass(frozen=True)
class FeatureIdTexture:
    """Feature IDs stored in a texture.

    Each vertex looks up the texel nearest to its texture coordinate.
    Coordinates are clamped to ``[0, 1]``; ``(0, 0)`` is the first texel.

    Args:
        image: Integer texture of shape ``(height, width)`` or
            ``(height, width, channels)``.
        texcoords: Per-vertex ``(u, v)`` of shape ``(n_vertices, 2)``.
        channel: Channel holding the IDs for multi-channel images.
    """

    image: Array
    texcoords: Array
    channel: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "image", jnp.asarray(self.image, dtype=jnp.int64))
        object.__setattr__(self, "texcoords", jnp.asarray(self.texcoords))

    def feature_id_for_vertex(self, vertex_index: int) -> int:
        if vertex_index < 0 or vertex_index >= self.texcoords.shape[0]:
            return _NO_FEATURE
        height, width = self.image.shape[0], self.image.shape[1]
        uv = jnp.clip(self.texcoords[vertex_index], 0.0, 1.0)
        col = int(jnp.round(uv[0] * (width - 1)))
        row = int(jnp.round(uv[1] * (height - 1)))
        if self.image.ndim == 3:
            return int(self.image[row, col, self.channel])
        return int(self.image[row, col])


@dataclass(frozen=True)
class ImplicitFeatureId:
    """The feature ID of a vertex is its index."""

    def feature_id_for_vertex(self, vertex_index: int) -> int:
        return vertex_index


@dataclass(frozen=True)
class NoFeatureId:
    """No feature ID source is available."""

    def feature_id_for_vertex(self, vertex_index: int) -> int:
        return _NO_FEATURE


FeatureIdSource = Union[FeatureIdAttribute, FeatureIdTexture, ImplicitFeatureId, NoFeatureId]


def feature_id_type_of(source: FeatureIdSource) -> FeatureIdType:
    """Return the :class:`FeatureIdType` tag of a source.

    Raises:
        TypeError: If *source* is not one of the known variants.
    """
    if isinstance(source, FeatureIdAttribute):
        return FeatureIdType.ATTRIBUTE
    if isinstance(source, FeatureIdTexture):
        return FeatureIdType.TEXTURE
    if isinstance(source, ImplicitFeatureId):
        return FeatureIdType.IMPLICIT
    if isinstance(source, NoFeatureId):
        return FeatureIdType.NONE
    raise TypeError(f"Unknown feature ID source {type(source).__name__}")


@dataclass(frozen=True)
class FeatureId:
    """A feature ID set of a primitive.

    Args:
        source: Where the IDs come from.
        feature_count: Number of distinct features in the set.
        property_table_index: Index of the property table describing the
            features, if any.

    Examples:
        ```python
        from georefjax.features import FeatureId
        feature_id = FeatureId.from_extension(feature_count=4, attribute=[0, 0, 1, 3])
        feature_id.feature_id_for_vertex(3)  # 3
        ```
    """

    source: FeatureIdSource = field(default_factory=NoFeatureId)
    feature_count: int = 0
    property_table_index: int | None = None

    def __post_init__(self) -> None:
        # Validates the tag eagerly
        feature_id_type_of(self.source)

    @classmethod
    def from_extension(
        cls,
        feature_count: int,
        attribute: ArrayLike | None = None,
        texture: FeatureIdTexture | None = None,
        property_table: int | None = None,
    ) -> FeatureId:
        """Build a feature ID set from mesh-features extension fields.

        An attribute wins over a texture.  Without either, the set is
        implicit when ``feature_count > 0`` and empty otherwise.

        Args:
            feature_count: Declared number of features.
            attribute: Per-vertex feature ID values.
            texture: Feature ID texture.
            property_table: Index of the associated property table.

        Returns:
            FeatureId: New feature ID set.
        """
        if attribute is not None:
            source: FeatureIdSource = FeatureIdAttribute(jnp.asarray(attribute))
        elif texture is not None:
            source = texture
        elif feature_count > 0:
            source = ImplicitFeatureId()
        else:
            source = NoFeatureId()
        return cls(source=source, feature_count=feature_count, property_table_index=property_table)

    @property
    def feature_id_type(self) -> FeatureIdType:
        return feature_id_type_of(self.source)

    @property
    def property_table_index_or_default(self) -> int:
        """Property table index, or ``-1`` when the set has none."""
        return self.property_table_index if self.property_table_index is not None else -1

    def as_attribute(self) -> FeatureIdAttribute | None:
        return self.source if isinstance(self.source, FeatureIdAttribute) else None

    def as_texture(self) -> FeatureIdTexture | None:
        return self.source if isinstance(self.source, FeatureIdTexture) else None

    def feature_id_for_vertex(self, vertex_index: int) -> int:
        """Feature ID of a vertex, or ``-1`` when it has none.

        Raises:
            TypeError: If the source is not one of the known variants.
        """
        source = self.source
        if isinstance(source, (FeatureIdAttribute, FeatureIdTexture, ImplicitFeatureId, NoFeatureId)):
            return source.feature_id_for_vertex(vertex_index)
        raise TypeError(f"Unknown feature ID source {type(source).__name__}")
