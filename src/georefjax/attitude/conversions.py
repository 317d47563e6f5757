"""Quaternion kernels for re-orienting georeferenced objects.

All functions operate on raw JAX arrays.  They are the small subset of
attitude algebra the transform pipeline needs: the shortest-arc rotation
between two directions and its application to basis vectors.

Convention:
    Quaternion layout is scalar-first: ``[w, x, y, z]`` (shape ``(4,)``).
    Rotation matrices are *active*: ``R @ v`` rotates the vector ``v``.
    This is the transpose of the attitude (frame) matrix convention.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

from georefjax.config import get_transform_epsilon


# ---------------------------------------------------------------------------
# Quaternion -> Rotation Matrix
# ---------------------------------------------------------------------------

def quaternion_to_rotation_matrix(q: jax.Array) -> jax.Array:
    """Convert a unit quaternion to an active 3x3 rotation matrix.

    Args:
        q (jax.Array): Quaternion array of shape ``(4,)`` in scalar-first order ``[w, x, y, z]``.

    Returns:
        jnp.ndarray: Rotation matrix of shape ``(3, 3)`` that rotates column vectors.
    """
    qs, q1, q2, q3 = q[0], q[1], q[2], q[3]

    return jnp.array([
        [qs*qs + q1*q1 - q2*q2 - q3*q3,  2.0*q1*q2 - 2.0*qs*q3,          2.0*q1*q3 + 2.0*qs*q2],
        [2.0*q1*q2 + 2.0*qs*q3,           qs*qs - q1*q1 + q2*q2 - q3*q3,  2.0*q2*q3 - 2.0*qs*q1],
        [2.0*q1*q3 - 2.0*qs*q2,           2.0*q2*q3 + 2.0*qs*q1,          qs*qs - q1*q1 - q2*q2 + q3*q3],
    ])


# ---------------------------------------------------------------------------
# Vector rotation
# ---------------------------------------------------------------------------

def rotate_vector(q: jax.Array, v: jax.Array) -> jax.Array:
    """Rotate a 3-vector by a unit quaternion.

    Args:
        q (jax.Array): Unit quaternion of shape ``(4,)`` in scalar-first order.
        v (jax.Array): Vector of shape ``(3,)``.  Its length is preserved.

    Returns:
        jnp.ndarray: Rotated vector of shape ``(3,)``.
    """
    w, u = q[0], q[1:]
    t = 2.0 * jnp.cross(u, v)
    return v + w * t + jnp.cross(u, t)


# ---------------------------------------------------------------------------
# Shortest-arc rotation
# ---------------------------------------------------------------------------

def quaternion_rotation_between(u: jax.Array, v: jax.Array) -> jax.Array:
    """Shortest-arc rotation taking the direction of ``u`` onto ``v``.

    The rotation axis is ``u × v`` and the angle is the angle between the
    two vectors, which is the great-circle (spherical-linear) path between
    them.  When the vectors are anti-parallel the axis is not unique; a
    half-turn about an axis perpendicular to ``u`` is returned (``Z × u``,
    or ``X × u`` when ``u`` lies along ``Z``).

    Args:
        u (jax.Array): Start direction of shape ``(3,)``.  Need not be unit.
        v (jax.Array): Target direction of shape ``(3,)``.  Need not be unit.

    Returns:
        jnp.ndarray: Unit quaternion of shape ``(4,)`` in scalar-first order.
    """
    u = u / jnp.linalg.norm(u)
    v = v / jnp.linalg.norm(v)
    eps = get_transform_epsilon()

    cos_theta = jnp.dot(u, v)

    def _opposite(_):
        axis = jnp.cross(jnp.array([0.0, 0.0, 1.0], dtype=u.dtype), u)
        fallback = jnp.cross(jnp.array([1.0, 0.0, 0.0], dtype=u.dtype), u)
        axis = jnp.where(jnp.dot(axis, axis) < eps, fallback, axis)
        axis = axis / jnp.linalg.norm(axis)
        return jnp.concatenate([jnp.zeros((1,), dtype=u.dtype), axis])

    def _general(_):
        # Half-angle form: s = 2 cos(theta / 2)
        s = jnp.sqrt(jnp.maximum((1.0 + cos_theta) * 2.0, 0.0))
        axis = jnp.cross(u, v) / s
        return jnp.concatenate([jnp.array([0.5 * s]), axis])

    return jax.lax.cond(cos_theta < -1.0 + eps, _opposite, _general, None)
