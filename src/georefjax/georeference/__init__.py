"""Geodetic service and ECEF ↔ engine-world registration.

- :class:`GeodeticService` -- the interface the transform pipeline consumes
- :class:`Georeference` -- WGS84 implementation with a configurable origin
- :class:`OriginPlacement` -- true (ECEF) or cartographic engine origin
"""

from .georeference import Georeference
from ._types import GeodeticService, OriginPlacement

__all__ = [
    "GeodeticService",
    "Georeference",
    "OriginPlacement",
]
