"""Tests for the georefjax.config module."""

import jax.numpy as jnp
import pytest

from georefjax.config import get_dtype, get_transform_epsilon, set_dtype
from georefjax.constants import WGS84_a
from georefjax.coordinates import position_geodetic_to_ecef


@pytest.fixture(autouse=True)
def reset_dtype():
    """Switch to float32 for each test and restore float64 afterwards."""
    set_dtype(jnp.float32)
    yield
    set_dtype(jnp.float64)


class TestGetSetDtype:
    def test_set_float32(self):
        assert get_dtype() == jnp.float32

    def test_set_float64(self):
        set_dtype(jnp.float64)
        assert get_dtype() == jnp.float64

    def test_roundtrip(self):
        for dtype in (jnp.float32, jnp.float64):
            set_dtype(dtype)
            assert get_dtype() == dtype

    def test_invalid_dtype_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype(jnp.int32)

    def test_float16_rejected(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype(jnp.float16)

    def test_invalid_dtype_string_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype("float64")


class TestTransformEpsilon:
    def test_float32(self):
        assert get_transform_epsilon() == 1e-6

    def test_float64(self):
        set_dtype(jnp.float64)
        assert get_transform_epsilon() == 1e-12


class TestDtypePropagation:
    def test_float32_output(self):
        x_ecef = position_geodetic_to_ecef(jnp.array([0.0, 0.0, 0.0]))
        assert x_ecef.dtype == jnp.float32

    def test_float64_output(self):
        set_dtype(jnp.float64)
        x_ecef = position_geodetic_to_ecef(jnp.array([0.0, 0.0, 0.0]))
        assert x_ecef.dtype == jnp.float64
        assert float(x_ecef[0]) == WGS84_a
