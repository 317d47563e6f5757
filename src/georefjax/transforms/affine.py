"""4x4 affine transform helpers.

Transforms are ``(4, 4)`` arrays in column-vector convention: columns 0-2
hold the (possibly scaled) basis vectors, column 3 holds the translation,
and the bottom row is ``[0, 0, 0, 1]``.

Also defines the fixed axis-convention matrices between the rendering
engine and the geodetic frame.  The engine works in centimetres with a
left-handed axis set; ECEF and ENU are metres and right-handed.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from georefjax.config import get_dtype


def translation_matrix(t: ArrayLike) -> Array:
    """Return the 4x4 transform translating by ``t``.

    Args:
        t: Translation ``[tx, ty, tz]``.

    Returns:
        4x4 affine transform.
    """
    t = jnp.asarray(t, dtype=get_dtype())
    return jnp.eye(4, dtype=t.dtype).at[:3, 3].set(t)


def scale_matrix(s: ArrayLike) -> Array:
    """Return the 4x4 transform scaling each axis by ``s``.

    Args:
        s: Per-axis scale ``[sx, sy, sz]``.

    Returns:
        4x4 affine transform.
    """
    s = jnp.asarray(s, dtype=get_dtype())
    return jnp.diag(jnp.concatenate([s, jnp.ones((1,), dtype=s.dtype)]))


def get_translation(m: ArrayLike) -> Array:
    """Return the translation column of an affine transform."""
    return jnp.asarray(m)[:3, 3]


def with_translation(m: ArrayLike, t: ArrayLike) -> Array:
    """Return a copy of ``m`` with its translation column replaced by ``t``.

    The basis columns (orientation and scale) are left untouched.
    """
    m = jnp.asarray(m, dtype=get_dtype())
    return m.at[:3, 3].set(jnp.asarray(t, dtype=m.dtype))


def basis_scale(m: ArrayLike) -> Array:
    """Return the lengths of the three basis columns of ``m``."""
    m = jnp.asarray(m, dtype=get_dtype())
    return jnp.linalg.norm(m[:3, :3], axis=0)


def affine_inverse(m: ArrayLike) -> Array:
    """Invert an affine transform.

    Only the 3x3 block is inverted; the translation of the inverse is
    ``-A^-1 t``.

    Args:
        m: 4x4 affine transform with bottom row ``[0, 0, 0, 1]``.

    Returns:
        4x4 affine transform such that ``affine_inverse(m) @ m == I``.
    """
    m = jnp.asarray(m, dtype=get_dtype())
    a_inv = jnp.linalg.inv(m[:3, :3])
    result = jnp.eye(4, dtype=m.dtype)
    result = result.at[:3, :3].set(a_inv)
    return result.at[:3, 3].set(-a_inv @ m[:3, 3])


# Axis conventions between the engine and the geodetic frame

"""
Scale from engine units (centimetres) to geodetic units (metres).
"""
SCALE_TO_GEODETIC = jnp.diag(jnp.array([0.01, 0.01, 0.01, 1.0], dtype=jnp.float64))

"""
Scale from geodetic units (metres) to engine units (centimetres).
"""
SCALE_TO_ENGINE = jnp.diag(jnp.array([100.0, 100.0, 100.0, 1.0], dtype=jnp.float64))

"""
Handedness flip between the engine's left-handed axes and the right-handed
geodetic axes.  Negates Y, so engine ``+Y`` points South in an ENU frame.
The matrix is its own inverse.
"""
ENGINE_TO_OR_FROM_GEODETIC = jnp.diag(jnp.array([1.0, -1.0, 1.0, 1.0], dtype=jnp.float64))
