import jax.numpy as jnp
import pytest

from georefjax.config import set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision before every test.

    test_config.py switches to float32 in its own autouse fixture; every
    other test relies on double precision for ECEF-scale coordinates.
    """
    set_dtype(jnp.float64)
