"""Geodetic (WGS84 ellipsoid) coordinate transformations.

Converts between geodetic coordinates ``[longitude, latitude, height]``
and Earth-Centered Earth-Fixed (ECEF) Cartesian coordinates ``[x, y, z]``,
and computes the geodetic surface normal of the ellipsoid.

The forward transformation is closed-form; the inverse uses Bowring's
iterative method implemented with ``jax.lax.while_loop`` for JAX
traceability.  Every array is created in the dtype returned by
:func:`georefjax.config.get_dtype` (``float64`` by default).

All inputs and outputs use SI base units (metres, radians) unless
``use_degrees=True`` is specified.

References:
    1. NIMA Technical Report TR8350.2, *Department of Defense World Geodetic
       System 1984*.
    2. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, Springer, 2012, Sec. 5.3.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from georefjax.config import get_dtype
from georefjax.constants import WGS84_ECC2, WGS84_a, WGS84_b

_MAX_BOWRING_ITERATIONS = 10


def position_geodetic_to_ecef(
    x_geod: ArrayLike,
    use_degrees: bool = False,
) -> Array:
    """Convert geodetic position to ECEF Cartesian coordinates.

    Uses the WGS84 prime vertical radius of curvature:

    .. math::

        N = \\frac{a}{\\sqrt{1 - e^2 \\sin^2 \\phi}}

    Args:
        x_geod: Geodetic coordinates ``[lon, lat, height]``.
            Longitude and latitude in *rad* (or *deg* if ``use_degrees=True``),
            height in *m* above the WGS84 ellipsoid.
        use_degrees: If ``True``, interpret longitude and latitude as degrees.

    Returns:
        jax.Array: ECEF position ``[x, y, z]`` in *m*.

    Example:
        >>> import jax.numpy as jnp
        >>> from georefjax.coordinates import position_geodetic_to_ecef
        >>> x_ecef = position_geodetic_to_ecef(jnp.array([0.0, 0.0, 0.0]))
        >>> float(x_ecef[0])  # WGS84_a on the equator
        6378137.0
    """
    x_geod = jnp.asarray(x_geod, dtype=get_dtype())

    lon = x_geod[0]
    lat = x_geod[1]
    height = x_geod[2]

    if use_degrees:
        lon = jnp.deg2rad(lon)
        lat = jnp.deg2rad(lat)

    sin_lat = jnp.sin(lat)
    cos_lat = jnp.cos(lat)

    N = WGS84_a / jnp.sqrt(1.0 - WGS84_ECC2 * sin_lat * sin_lat)

    x = (N + height) * cos_lat * jnp.cos(lon)
    y = (N + height) * cos_lat * jnp.sin(lon)
    z = ((1.0 - WGS84_ECC2) * N + height) * sin_lat

    return jnp.array([x, y, z])


def position_ecef_to_geodetic(
    x_ecef: ArrayLike,
    use_degrees: bool = False,
) -> Array:
    """Convert ECEF Cartesian coordinates to geodetic position.

    Uses Bowring's iterative method with convergence controlled by
    ``jax.lax.while_loop`` (max 10 iterations).  The convergence
    threshold is scaled to the machine epsilon of the active dtype.

    The result is undefined at the Earth's centre, where no geodetic
    latitude exists.

    Args:
        x_ecef: ECEF position ``[x, y, z]`` in *m*.
        use_degrees: If ``True``, return longitude and latitude in degrees.

    Returns:
        jax.Array: Geodetic coordinates ``[lon, lat, height]``.
            Longitude and latitude in *rad* (or *deg*), height in *m*
            above the WGS84 ellipsoid.

    Example:
        >>> import jax.numpy as jnp
        >>> from georefjax.constants import WGS84_a
        >>> from georefjax.coordinates import position_ecef_to_geodetic
        >>> geod = position_ecef_to_geodetic(jnp.array([WGS84_a, 0.0, 0.0]))
        >>> round(float(geod[2]), 6)  # height on the ellipsoid
        0.0
    """
    dtype = get_dtype()
    x_ecef = jnp.asarray(x_ecef, dtype=dtype)

    x = x_ecef[0]
    y = x_ecef[1]
    z = x_ecef[2]

    eps = 1.0e-3 * WGS84_a * jnp.finfo(dtype).eps
    rho2 = x * x + y * y

    # State: (dz, dz_prev, iteration_count)
    dz0 = WGS84_ECC2 * z

    def cond(state):
        dz, dz_prev, i = state
        return (jnp.abs(dz - dz_prev) > eps) & (i < _MAX_BOWRING_ITERATIONS)

    def body(state):
        dz, _, i = state
        zdz = z + dz
        Nh = jnp.sqrt(rho2 + zdz * zdz)
        sinphi = zdz / Nh
        N = WGS84_a / jnp.sqrt(1.0 - WGS84_ECC2 * sinphi * sinphi)
        dz_new = N * WGS84_ECC2 * sinphi
        return (dz_new, dz, i + 1)

    # Force the first iteration by starting dz_prev far from dz0
    init_state = (dz0, dz0 + jnp.asarray(1e10, dtype=dtype), jnp.int32(0))
    dz_final, _, _ = jax.lax.while_loop(cond, body, init_state)

    zdz = z + dz_final
    lon = jnp.arctan2(y, x)
    lat = jnp.arctan2(zdz, jnp.sqrt(rho2))

    sinphi = zdz / jnp.sqrt(rho2 + zdz * zdz)
    N = WGS84_a / jnp.sqrt(1.0 - WGS84_ECC2 * sinphi * sinphi)
    height = jnp.sqrt(rho2 + zdz * zdz) - N

    if use_degrees:
        lon = jnp.rad2deg(lon)
        lat = jnp.rad2deg(lat)

    return jnp.array([lon, lat, height])


def geodetic_surface_normal(x_ecef: ArrayLike) -> Array:
    """Compute the geodetic surface normal of the WGS84 ellipsoid.

    The normal is the gradient of the ellipsoid's implicit equation,
    normalized:

    .. math::

        \\hat{n} = \\frac{(x / a^2, y / a^2, z / b^2)}
                        {\\lVert (x / a^2, y / a^2, z / b^2) \\rVert}

    It is perpendicular to the ellipsoid surface through the point and
    differs from the geocentric direction everywhere except at the equator
    and the poles.

    Args:
        x_ecef: ECEF position ``[x, y, z]`` in *m*.  Need not lie on the
            surface.

    Returns:
        jax.Array: Unit normal ``[nx, ny, nz]``.

    Examples:
        ```python
        from georefjax.constants import WGS84_a
        from georefjax.coordinates import geodetic_surface_normal
        geodetic_surface_normal([WGS84_a, 0.0, 0.0])  # [1, 0, 0]
        ```
    """
    x_ecef = jnp.asarray(x_ecef, dtype=get_dtype())
    one_over_radii_squared = jnp.array(
        [1.0 / (WGS84_a * WGS84_a), 1.0 / (WGS84_a * WGS84_a), 1.0 / (WGS84_b * WGS84_b)],
        dtype=x_ecef.dtype,
    )
    n = x_ecef * one_over_radii_squared
    return n / jnp.linalg.norm(n)
