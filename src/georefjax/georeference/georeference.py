"""WGS84 geodetic service and ECEF ↔ engine-world registration.

:class:`Georeference` answers every geodetic question the transform
pipeline asks (ECEF ↔ LLH, surface normals, ENU frames) and owns the global
registration between ECEF and the engine's un-rebased world frame.

The registration is an explicit object handed to each georeferenced
component rather than a scene-wide singleton.  When it is reconfigured the
owner notifies the components it serves by calling their
``on_georeference_updated`` method.
"""

from __future__ import annotations

import logging

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from georefjax.config import get_dtype
from georefjax.constants import (
    DEFAULT_ORIGIN_HEIGHT,
    DEFAULT_ORIGIN_LATITUDE,
    DEFAULT_ORIGIN_LONGITUDE,
)
from georefjax.coordinates import (
    geodetic_surface_normal,
    position_ecef_to_geodetic,
    position_geodetic_to_ecef,
    transform_enu_to_ecef,
)
from georefjax.georeference._types import OriginPlacement
from georefjax.transforms import (
    ENGINE_TO_OR_FROM_GEODETIC,
    SCALE_TO_ENGINE,
    SCALE_TO_GEODETIC,
    affine_inverse,
)

logger = logging.getLogger(__name__)


def _transform_point(m: Array, p: ArrayLike) -> Array:
    p = jnp.asarray(p, dtype=m.dtype)
    return m[:3, :3] @ p + m[:3, 3]


class Georeference:
    """Geodetic service on the WGS84 ellipsoid with an engine registration.

    With a cartographic origin the engine world frame is centred on the
    origin location, ``+X`` points East, ``+Y`` South and ``+Z`` Up, and one
    engine unit is one centimetre.  With the true origin the engine frame is
    ECEF with the same unit and handedness conversion.

    Args:
        origin_longitude: Longitude of the cartographic origin [deg].
        origin_latitude: Latitude of the cartographic origin [deg].
        origin_height: Height of the cartographic origin above the
            ellipsoid [m].
        origin_placement: How the engine origin is registered.

    Examples:
        ```python
        from georefjax.georeference import Georeference
        georef = Georeference(origin_longitude=0.0, origin_latitude=0.0, origin_height=0.0)
        georef.transform_engine_position_to_longitude_latitude_height([0.0, 0.0, 0.0])
        ```
    """

    def __init__(
        self,
        origin_longitude: float = DEFAULT_ORIGIN_LONGITUDE,
        origin_latitude: float = DEFAULT_ORIGIN_LATITUDE,
        origin_height: float = DEFAULT_ORIGIN_HEIGHT,
        origin_placement: OriginPlacement = OriginPlacement.CARTOGRAPHIC_ORIGIN,
    ) -> None:
        self._origin_llh = jnp.array(
            [origin_longitude, origin_latitude, origin_height], dtype=get_dtype()
        )
        self._origin_placement = origin_placement
        self._update_registration()

    # Registration

    @property
    def origin_longitude_latitude_height(self) -> Array:
        """Cartographic origin ``[lon_deg, lat_deg, height_m]``."""
        return self._origin_llh

    @property
    def origin_placement(self) -> OriginPlacement:
        return self._origin_placement

    def set_origin_longitude_latitude_height(self, llh: ArrayLike) -> None:
        """Move the cartographic origin.

        Components using this georeference must be told afterwards through
        ``on_georeference_updated``.

        Args:
            llh: New origin ``[lon_deg, lat_deg, height_m]``.
        """
        self._origin_llh = jnp.asarray(llh, dtype=get_dtype())
        self._update_registration()

    def set_origin_placement(self, placement: OriginPlacement) -> None:
        """Switch between the true origin and a cartographic origin."""
        self._origin_placement = placement
        self._update_registration()

    def _update_registration(self) -> None:
        if self._origin_placement is OriginPlacement.TRUE_ORIGIN:
            georeferenced_to_ecef = jnp.eye(4, dtype=get_dtype())
        elif self._origin_placement is OriginPlacement.CARTOGRAPHIC_ORIGIN:
            origin_ecef = position_geodetic_to_ecef(self._origin_llh, use_degrees=True)
            georeferenced_to_ecef = transform_enu_to_ecef(origin_ecef)
        else:
            raise TypeError(f"Unknown origin placement {self._origin_placement!r}")

        self._ecef_from_engine_world = (
            georeferenced_to_ecef @ SCALE_TO_GEODETIC @ ENGINE_TO_OR_FROM_GEODETIC
        )
        self._engine_world_from_ecef = (
            ENGINE_TO_OR_FROM_GEODETIC @ SCALE_TO_ENGINE @ affine_inverse(georeferenced_to_ecef)
        )
        logger.debug(
            "Georeference registration updated: placement=%s origin=%s",
            self._origin_placement.value,
            self._origin_llh,
        )

    def ecef_from_engine_world_transform(self) -> Array:
        """Transform from the un-rebased engine world frame to ECEF."""
        return self._ecef_from_engine_world

    def engine_world_from_ecef_transform(self) -> Array:
        """Transform from ECEF to the un-rebased engine world frame."""
        return self._engine_world_from_ecef

    # Ellipsoid queries

    def ecef_from_longitude_latitude_height(self, llh: ArrayLike) -> Array:
        """Convert ``[lon_deg, lat_deg, height_m]`` to ECEF [m]."""
        return position_geodetic_to_ecef(llh, use_degrees=True)

    def longitude_latitude_height_from_ecef(self, ecef: ArrayLike) -> Array:
        """Convert ECEF [m] to ``[lon_deg, lat_deg, height_m]``."""
        return position_ecef_to_geodetic(ecef, use_degrees=True)

    def east_north_up_to_ecef(self, ecef: ArrayLike) -> Array:
        """4x4 East-North-Up to ECEF frame at an ECEF point."""
        return transform_enu_to_ecef(ecef)

    def geodetic_surface_normal(self, ecef: ArrayLike) -> Array:
        """Unit ellipsoid normal at an ECEF point."""
        return geodetic_surface_normal(ecef)

    # Engine positions

    def transform_engine_position_to_longitude_latitude_height(self, position: ArrayLike) -> Array:
        """Convert an absolute (un-rebased) engine position to LLH.

        Args:
            position: Engine-world position in engine units.

        Returns:
            ``[lon_deg, lat_deg, height_m]``.
        """
        ecef = _transform_point(self._ecef_from_engine_world, position)
        return self.longitude_latitude_height_from_ecef(ecef)

    def transform_longitude_latitude_height_to_engine_position(self, llh: ArrayLike) -> Array:
        """Convert LLH to an absolute (un-rebased) engine position.

        Args:
            llh: ``[lon_deg, lat_deg, height_m]``.

        Returns:
            Engine-world position in engine units.
        """
        ecef = self.ecef_from_longitude_latitude_height(llh)
        return _transform_point(self._engine_world_from_ecef, ecef)
