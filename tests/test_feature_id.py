"""Tests for the georefjax.features module."""

import jax.numpy as jnp
import pytest

from georefjax.features import (
    FeatureId,
    FeatureIdAttribute,
    FeatureIdTexture,
    FeatureIdType,
    ImplicitFeatureId,
    NoFeatureId,
    feature_id_type_of,
)


@pytest.fixture
def texture():
    image = jnp.array([[1, 2], [3, 4]])
    texcoords = jnp.array(
        [[0.0, 0.0], [1.0, 0.0], [0.0, 1.0], [1.0, 1.0], [0.4, 0.6], [1.5, -0.2]]
    )
    return FeatureIdTexture(image, texcoords)


class TestFromExtension:
    def test_attribute_wins(self, texture):
        feature_id = FeatureId.from_extension(3, attribute=[0, 1, 2], texture=texture)
        assert feature_id.feature_id_type is FeatureIdType.ATTRIBUTE
        assert feature_id.as_attribute() is not None
        assert feature_id.as_texture() is None

    def test_texture(self, texture):
        feature_id = FeatureId.from_extension(4, texture=texture)
        assert feature_id.feature_id_type is FeatureIdType.TEXTURE
        assert feature_id.as_texture() is texture

    def test_implicit(self):
        feature_id = FeatureId.from_extension(10)
        assert feature_id.feature_id_type is FeatureIdType.IMPLICIT

    def test_none_without_features(self):
        feature_id = FeatureId.from_extension(0)
        assert feature_id.feature_id_type is FeatureIdType.NONE
        assert feature_id.as_attribute() is None
        assert feature_id.as_texture() is None

    def test_property_table(self):
        assert FeatureId.from_extension(2, property_table=3).property_table_index_or_default == 3
        assert FeatureId.from_extension(2).property_table_index_or_default == -1

    def test_feature_count(self):
        assert FeatureId.from_extension(7).feature_count == 7


class TestFeatureIdForVertex:
    def test_attribute(self):
        feature_id = FeatureId.from_extension(4, attribute=[0, 0, 1, 3])
        assert [feature_id.feature_id_for_vertex(i) for i in range(4)] == [0, 0, 1, 3]

    def test_attribute_out_of_range(self):
        feature_id = FeatureId.from_extension(4, attribute=[0, 0, 1, 3])
        assert feature_id.feature_id_for_vertex(4) == -1
        assert feature_id.feature_id_for_vertex(-1) == -1

    def test_texture_nearest_texel(self, texture):
        feature_id = FeatureId.from_extension(4, texture=texture)
        assert [feature_id.feature_id_for_vertex(i) for i in range(5)] == [1, 2, 3, 4, 3]

    def test_texture_clamps_coordinates(self, texture):
        assert FeatureId(texture, 4).feature_id_for_vertex(5) == 2

    def test_texture_out_of_range(self, texture):
        assert FeatureId(texture, 4).feature_id_for_vertex(6) == -1

    def test_texture_channel(self):
        image = jnp.array([[[7, 8, 9]]])
        texture = FeatureIdTexture(image, jnp.array([[0.5, 0.5]]), channel=2)
        assert FeatureId(texture, 10).feature_id_for_vertex(0) == 9

    def test_implicit(self):
        assert FeatureId(ImplicitFeatureId(), 100).feature_id_for_vertex(42) == 42

    def test_none(self):
        assert FeatureId().feature_id_for_vertex(0) == -1


class TestUnknownVariant:
    def test_type_of_raises(self):
        with pytest.raises(TypeError, match="Unknown feature ID source"):
            feature_id_type_of(object())

    def test_construction_raises(self):
        with pytest.raises(TypeError, match="Unknown feature ID source"):
            FeatureId(source="attribute", feature_count=1)

    def test_known_variants(self):
        assert feature_id_type_of(NoFeatureId()) is FeatureIdType.NONE
        assert feature_id_type_of(ImplicitFeatureId()) is FeatureIdType.IMPLICIT
        assert feature_id_type_of(FeatureIdAttribute(jnp.array([1]))) is FeatureIdType.ATTRIBUTE
