"""Transform pipeline between engine space and ECEF.

Pure functions of their inputs.  The matrix functions are traceable by
``jax.jit``; :func:`is_near_pole` returns a Python ``bool`` for the
component's control flow.  The component feeds them the current state and
commits the results; nothing in here reads or mutates component state.

Notation: ``a_to_b`` (or ``b_from_a``) maps coordinates expressed in frame
``a`` into frame ``b``, so transforms compose right to left.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from georefjax.attitude import quaternion_rotation_between, quaternion_to_rotation_matrix
from georefjax.config import get_dtype
from georefjax.transforms import (
    ENGINE_TO_OR_FROM_GEODETIC,
    SCALE_TO_GEODETIC,
    affine_inverse,
    scale_matrix,
    translation_matrix,
    with_translation,
)


def compute_ecef_from_engine_space(
    engine_relative_transform: ArrayLike,
    absolute_location: ArrayLike,
    ecef_from_engine_world: ArrayLike,
) -> Array:
    """Build ``object_to_ecef`` from an engine-space transform.

    The engine supplies rotation and scale; the translation comes from the
    double-precision absolute location instead of the engine's
    single-precision relative translation.

    Args:
        engine_relative_transform: Object-to-engine-relative-world transform.
        absolute_location: Origin-independent engine location.
        ecef_from_engine_world: Registration of the un-rebased engine world.

    Returns:
        4x4 ``object_to_ecef`` transform.
    """
    object_to_absolute_world = with_translation(engine_relative_transform, absolute_location)
    return jnp.asarray(ecef_from_engine_world, dtype=get_dtype()) @ object_to_absolute_world


def compute_engine_relative_from_ecef(
    object_to_ecef: ArrayLike,
    origin_offset: ArrayLike,
    engine_world_from_ecef: ArrayLike,
) -> Array:
    """Express ``object_to_ecef`` in the rebased engine frame.

    Args:
        object_to_ecef: Authoritative ECEF pose.
        origin_offset: Current floating-origin offset.  Always pass the
            current value; a cached one drifts after a rebase.
        engine_world_from_ecef: Registration of the un-rebased engine world.

    Returns:
        4x4 transform to hand to the engine.
    """
    absolute_to_relative_world = translation_matrix(-jnp.asarray(origin_offset, dtype=get_dtype()))
    return (
        absolute_to_relative_world
        @ jnp.asarray(engine_world_from_ecef, dtype=get_dtype())
        @ jnp.asarray(object_to_ecef, dtype=get_dtype())
    )


def move_transform_to_ecef(
    object_to_ecef: ArrayLike,
    target_ecef: ArrayLike,
    current_enu_to_ecef: ArrayLike | None = None,
    target_enu_to_ecef: ArrayLike | None = None,
) -> Array:
    """Move a pose to a new ECEF position.

    Without ENU frames only the translation column changes and the basis
    (orientation and scale in ECEF) is kept bit for bit.  With both frames
    the orientation is re-expressed relative to the local tangent plane at
    the target:

    .. math::

        M' = E_{target} \\, E_{current}^{-1} \\, M

    so heading, pitch and roll with respect to the local horizon are
    preserved across the curved surface.  ``E_{target}`` carries the target
    translation, so the result lands exactly on ``target_ecef``.

    Args:
        object_to_ecef: Current pose.
        target_ecef: Target ECEF position [m].
        current_enu_to_ecef: ENU frame at the current position.
        target_enu_to_ecef: ENU frame at the target position.

    Returns:
        New 4x4 ``object_to_ecef``.
    """
    if current_enu_to_ecef is None or target_enu_to_ecef is None:
        return with_translation(object_to_ecef, target_ecef)

    dtype = get_dtype()
    current_ecef_to_enu = affine_inverse(current_enu_to_ecef)
    return (
        jnp.asarray(target_enu_to_ecef, dtype=dtype)
        @ current_ecef_to_enu
        @ jnp.asarray(object_to_ecef, dtype=dtype)
    )


def snap_up_to_normal(object_to_ecef: ArrayLike, surface_normal: ArrayLike) -> Array:
    """Rotate a pose so its local up axis follows the surface normal.

    The rotation is the shortest arc from the normalised local ``+Z`` basis
    vector to ``surface_normal``.  It is applied to the three basis
    columns only; the translation column is unchanged.

    Args:
        object_to_ecef: Current pose.
        surface_normal: Unit geodetic normal at the pose's position.

    Returns:
        New 4x4 ``object_to_ecef``.
    """
    object_to_ecef = jnp.asarray(object_to_ecef, dtype=get_dtype())
    up = object_to_ecef[:3, 2]
    q = quaternion_rotation_between(up, jnp.asarray(surface_normal, dtype=object_to_ecef.dtype))
    rotation = quaternion_to_rotation_matrix(q)
    return object_to_ecef.at[:3, :3].set(rotation @ object_to_ecef[:3, :3])


def east_south_up_transform(enu_to_ecef: ArrayLike, engine_scale: ArrayLike) -> Array:
    """Pose aligned with the local East-South-Up axes of the engine.

    Composes the ENU frame with the engine's unit scale and handedness
    flip, so engine ``+X`` points East, ``+Y`` South and ``+Z`` Up, then
    re-applies the object's own scale in engine space.  Any previous
    orientation is discarded; the translation is the ENU frame origin.

    Args:
        enu_to_ecef: ENU frame at the object's position.
        engine_scale: Per-axis object scale in engine space.

    Returns:
        New 4x4 ``object_to_ecef``.
    """
    return (
        jnp.asarray(enu_to_ecef, dtype=get_dtype())
        @ SCALE_TO_GEODETIC
        @ ENGINE_TO_OR_FROM_GEODETIC
        @ scale_matrix(engine_scale)
    )


def is_near_pole(x_ecef: ArrayLike, tolerance: float) -> bool:
    """Whether a point lies within ``tolerance`` metres of the polar axis."""
    x_ecef = jnp.asarray(x_ecef, dtype=get_dtype())
    return bool(jnp.hypot(x_ecef[0], x_ecef[1]) <= tolerance)
