"""Human-readable projection of the ECEF pose.

The display fields mirror the translation column of ``object_to_ecef`` as
plain floats for inspectors and serialization.  They are derived, never
authoritative: editing them goes through
:meth:`~georefjax.component.GeoreferenceComponent.apply_display_edit`, which
moves the object and re-derives them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import jax.numpy as jnp
from jax.typing import ArrayLike

from georefjax.georeference import GeodeticService

logger = logging.getLogger(__name__)

LLH_FIELDS = ("longitude", "latitude", "height")
ECEF_FIELDS = ("ecef_x", "ecef_y", "ecef_z")


@dataclass
class DisplayFields:
    """Scalar mirrors of the object's ECEF position.

    Attributes:
        longitude: Longitude [deg].
        latitude: Latitude [deg].
        height: Height above the WGS84 ellipsoid [m].
        ecef_x: ECEF X [m].
        ecef_y: ECEF Y [m].
        ecef_z: ECEF Z [m].
        dirty: Set whenever any field is recomputed.  Consumers poll it and
            call :meth:`clear_dirty` once they have picked up the change.
    """

    longitude: float = 0.0
    latitude: float = 0.0
    height: float = 0.0
    ecef_x: float = 0.0
    ecef_y: float = 0.0
    ecef_z: float = 0.0
    dirty: bool = False

    def clear_dirty(self) -> None:
        self.dirty = False


class DisplayProjection:
    """Recomputes :class:`DisplayFields` after every pose change."""

    def __init__(self) -> None:
        self.fields = DisplayFields()

    def refresh(self, object_to_ecef: ArrayLike, service: GeodeticService | None) -> None:
        """Re-derive the display fields from ``object_to_ecef``.

        The ECEF fields come straight from the translation column.  The
        LLH fields need the geodetic service; without one they keep their
        previous values and a warning is logged.

        Args:
            object_to_ecef: Authoritative ECEF pose.
            service: Geodetic service for the ECEF → LLH conversion.
        """
        ecef = jnp.asarray(object_to_ecef)[:3, 3]
        self.fields.ecef_x = float(ecef[0])
        self.fields.ecef_y = float(ecef[1])
        self.fields.ecef_z = float(ecef[2])
        self.fields.dirty = True

        if service is None:
            logger.warning("No geodetic service bound; longitude/latitude/height not refreshed")
            return

        llh = service.longitude_latitude_height_from_ecef(ecef)
        self.fields.longitude = float(llh[0])
        self.fields.latitude = float(llh[1])
        self.fields.height = float(llh[2])

    def reset(self) -> None:
        self.fields = DisplayFields()
