"""Tests for the georefjax.transforms module."""

import jax.numpy as jnp

from georefjax.constants import WGS84_a
from georefjax.transforms import (
    ENGINE_TO_OR_FROM_GEODETIC,
    SCALE_TO_ENGINE,
    SCALE_TO_GEODETIC,
    affine_inverse,
    basis_scale,
    get_translation,
    scale_matrix,
    translation_matrix,
    with_translation,
)


def _rotation_z(angle):
    c, s = jnp.cos(angle), jnp.sin(angle)
    return jnp.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


class TestConstructors:
    def test_translation_matrix(self):
        m = translation_matrix(jnp.array([1.0, 2.0, 3.0]))
        assert jnp.allclose(m @ jnp.array([1.0, 1.0, 1.0, 1.0]), jnp.array([2.0, 3.0, 4.0, 1.0]))

    def test_scale_matrix(self):
        m = scale_matrix(jnp.array([2.0, 3.0, 4.0]))
        assert jnp.allclose(jnp.diag(m), jnp.array([2.0, 3.0, 4.0, 1.0]))

    def test_get_translation(self):
        m = translation_matrix(jnp.array([-7.0, 8.0, 9.0]))
        assert jnp.allclose(get_translation(m), jnp.array([-7.0, 8.0, 9.0]))


class TestWithTranslation:
    def test_keeps_basis(self):
        m = jnp.eye(4).at[:3, :3].set(_rotation_z(0.3) * 2.0).at[:3, 3].set(jnp.array([1.0, 2.0, 3.0]))
        out = with_translation(m, jnp.array([WGS84_a, 0.0, 0.0]))
        assert jnp.array_equal(out[:3, :3], m[:3, :3])
        assert jnp.array_equal(out[:3, 3], jnp.array([WGS84_a, 0.0, 0.0]))


class TestBasisScale:
    def test_scaled_rotation(self):
        m = jnp.eye(4).at[:3, :3].set(_rotation_z(1.1) @ jnp.diag(jnp.array([2.0, 3.0, 0.5])))
        assert jnp.allclose(basis_scale(m), jnp.array([2.0, 3.0, 0.5]), atol=1e-12)


class TestAffineInverse:
    def test_far_translation(self):
        m = (
            jnp.eye(4)
            .at[:3, :3]
            .set(_rotation_z(0.7) * 0.01)
            .at[:3, 3]
            .set(jnp.array([WGS84_a, -1234567.0, 4321000.0]))
        )
        assert jnp.allclose(affine_inverse(m) @ m, jnp.eye(4), atol=1e-6)
        assert jnp.allclose(m @ affine_inverse(m), jnp.eye(4), atol=1e-6)

    def test_bottom_row(self):
        inv = affine_inverse(translation_matrix(jnp.array([1.0, 2.0, 3.0])))
        assert jnp.array_equal(inv[3], jnp.array([0.0, 0.0, 0.0, 1.0]))


class TestAxisConventions:
    def test_scales_are_inverse(self):
        assert jnp.allclose(SCALE_TO_GEODETIC @ SCALE_TO_ENGINE, jnp.eye(4))

    def test_flip_is_involution(self):
        assert jnp.array_equal(ENGINE_TO_OR_FROM_GEODETIC @ ENGINE_TO_OR_FROM_GEODETIC, jnp.eye(4))

    def test_flip_negates_y(self):
        p = ENGINE_TO_OR_FROM_GEODETIC @ jnp.array([1.0, 2.0, 3.0, 1.0])
        assert jnp.array_equal(p, jnp.array([1.0, -2.0, 3.0, 1.0]))

    def test_centimetres_to_metres(self):
        p = SCALE_TO_GEODETIC @ jnp.array([100.0, 250.0, -50.0, 1.0])
        assert jnp.allclose(p, jnp.array([1.0, 2.5, -0.5, 1.0]))
