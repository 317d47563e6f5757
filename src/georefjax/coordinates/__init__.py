"""Coordinate transformations on the WGS84 ellipsoid.

This sub-module provides the geodetic functions consumed by the
georeference service:

- **Geodetic**: WGS84 ellipsoid model ``[lon, lat, height]`` ↔ ECEF
- **Surface normal**: outward geodetic normal at an ECEF point
- **Topocentric (ENU)**: East-North-Up local tangent frame at an ECEF point
"""

from .geodetic import (
    geodetic_surface_normal,
    position_ecef_to_geodetic,
    position_geodetic_to_ecef,
)
from .topocentric import (
    relative_position_ecef_to_enu,
    rotation_ecef_to_enu,
    transform_enu_to_ecef,
)

__all__ = [
    "position_geodetic_to_ecef",
    "position_ecef_to_geodetic",
    "geodetic_surface_normal",
    "rotation_ecef_to_enu",
    "transform_enu_to_ecef",
    "relative_position_ecef_to_enu",
]
