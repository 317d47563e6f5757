"""East-North-Up (ENU) topocentric frames.

Builds the local tangent-plane frame at an ECEF location on the WGS84
ellipsoid.  The ENU frame is a right-handed coordinate system:

- **East** (E): tangent to the surface, pointing geographic east
- **North** (N): tangent to the surface, pointing geographic north
- **Up** (U): the geodetic surface normal, pointing outward

Unlike an observer frame built from ``[lon, lat, alt]``, these functions
take the ECEF point directly so that the frame can be evaluated wherever
the georeferenced object currently is.  At the poles East is undefined; a
fixed fallback frame is used there (East along ``+Y``, Up along ``±Z``).
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from georefjax.config import get_dtype
from georefjax.coordinates.geodetic import geodetic_surface_normal

# Distance from the polar axis below which the east direction is undefined
_POLE_EPSILON = 1e-14


def _enu_basis(x_ecef: Array) -> tuple[Array, Array, Array]:
    x = x_ecef[0]
    y = x_ecef[1]
    z = x_ecef[2]

    at_pole = (jnp.abs(x) < _POLE_EPSILON) & (jnp.abs(y) < _POLE_EPSILON)
    sign = jnp.where(z < 0.0, -1.0, 1.0)

    up = geodetic_surface_normal(x_ecef)
    # Guard the division so that the unused branch stays finite at the pole
    horizontal = jnp.where(at_pole, 1.0, jnp.sqrt(x * x + y * y))
    east = jnp.array([-y, x, 0.0]) / horizontal
    north = jnp.cross(up, east)

    zero = jnp.zeros_like(x)
    one = jnp.ones_like(x)
    east = jnp.where(at_pole, jnp.array([zero, one, zero]), east)
    north = jnp.where(at_pole, jnp.array([-sign, zero, zero]), north)
    up = jnp.where(at_pole, jnp.array([zero, zero, sign]), up)
    return east, north, up


def rotation_ecef_to_enu(x_ecef: ArrayLike) -> Array:
    """Compute the rotation matrix from ECEF to East-North-Up (ENU).

    Args:
        x_ecef: ECEF position ``[x, y, z]`` in *m* of the frame origin.

    Returns:
        3x3 rotation matrix (ECEF → ENU).  Rows are the E, N, U basis
        vectors expressed in ECEF.

    Examples:
        ```python
        from georefjax.constants import WGS84_a
        from georefjax.coordinates import rotation_ecef_to_enu
        rot = rotation_ecef_to_enu([WGS84_a, 0.0, 0.0])
        ```
    """
    x_ecef = jnp.asarray(x_ecef, dtype=get_dtype())
    east, north, up = _enu_basis(x_ecef)
    return jnp.stack([east, north, up])


def transform_enu_to_ecef(x_ecef: ArrayLike) -> Array:
    """Compute the 4x4 affine transform from the local ENU frame to ECEF.

    Columns 0-2 are the East, North and Up unit vectors in ECEF, column 3
    is the frame origin.  Multiplying a homogeneous ENU point by this
    matrix yields its ECEF position.

    Args:
        x_ecef: ECEF position ``[x, y, z]`` in *m* of the frame origin.

    Returns:
        4x4 affine transform (ENU → ECEF).

    Examples:
        ```python
        from georefjax.constants import WGS84_a
        from georefjax.coordinates import transform_enu_to_ecef
        enu_to_ecef = transform_enu_to_ecef([WGS84_a, 0.0, 0.0])
        enu_to_ecef[:3, 2]  # Up = [1, 0, 0]
        ```
    """
    x_ecef = jnp.asarray(x_ecef, dtype=get_dtype())
    east, north, up = _enu_basis(x_ecef)

    m = jnp.eye(4, dtype=x_ecef.dtype)
    m = m.at[:3, 0].set(east)
    m = m.at[:3, 1].set(north)
    m = m.at[:3, 2].set(up)
    m = m.at[:3, 3].set(x_ecef)
    return m


def relative_position_ecef_to_enu(
    location_ecef: ArrayLike,
    r_ecef: ArrayLike,
) -> Array:
    """Express ``r_ecef - location_ecef`` in the ENU frame at *location_ecef*.

    Args:
        location_ecef: ECEF position of the frame origin ``[x, y, z]`` in *m*.
        r_ecef: ECEF position of the target ``[x, y, z]`` in *m*.

    Returns:
        Relative position ``[east, north, up]`` in *m*.
    """
    location_ecef = jnp.asarray(location_ecef, dtype=get_dtype())
    r_ecef = jnp.asarray(r_ecef, dtype=get_dtype())
    return rotation_ecef_to_enu(location_ecef) @ (r_ecef - location_ecef)
