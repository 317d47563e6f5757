"""Type definitions for the geodetic service.

Provides :class:`GeodeticService`, the structural interface the transform
pipeline consumes, and :class:`OriginPlacement`, which selects how the
engine's un-rebased world frame is registered against ECEF.
"""

from __future__ import annotations

import enum
from typing import Protocol, runtime_checkable

from jax import Array
from jax.typing import ArrayLike


class OriginPlacement(enum.Enum):
    """Where the engine world origin sits on the globe."""

    TRUE_ORIGIN = "true_origin"
    """The engine origin is the Earth's centre; axes follow ECEF."""

    CARTOGRAPHIC_ORIGIN = "cartographic_origin"
    """The engine origin sits on a chosen longitude/latitude/height with
    axes aligned East-South-Up."""


@runtime_checkable
class GeodeticService(Protocol):
    """Ellipsoid conversions plus the ECEF ↔ engine-world registration.

    Longitude and latitude are in degrees, heights and positions in metres,
    engine-world quantities in engine units.  Transforms are 4x4 affine
    matrices in column-vector convention.
    """

    def ecef_from_longitude_latitude_height(self, llh: ArrayLike) -> Array: ...

    def longitude_latitude_height_from_ecef(self, ecef: ArrayLike) -> Array: ...

    def east_north_up_to_ecef(self, ecef: ArrayLike) -> Array: ...

    def geodetic_surface_normal(self, ecef: ArrayLike) -> Array: ...

    def ecef_from_engine_world_transform(self) -> Array: ...

    def engine_world_from_ecef_transform(self) -> Array: ...
