"""Floating-origin tracking.

The engine periodically moves its world origin to stay close to the
camera.  :class:`OriginTracker` keeps the object's *absolute* location in
double precision and independent of those moves, together with the current
origin offset.  The engine-relative location is derived from the two on
demand instead of being read back from the engine, whose single-precision
value jitters far from the origin.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from georefjax.component.errors import MissingDependencyError
from georefjax.config import get_dtype


class OriginTracker:
    """Absolute location and world origin offset of one object.

    Examples:
        ```python
        from georefjax.component import OriginTracker
        tracker = OriginTracker()
        tracker.initialize([1000, 0, 0])
        tracker.record_movement([5.0, 0.0, 0.0], [1000, 0, 0])
        tracker.rebase([1000, 0, 0], [1000, 0, 0])
        tracker.relative_location()  # [1005, 0, 0]
        ```
    """

    __slots__ = ("_world_origin_location", "_absolute_location")

    def __init__(self) -> None:
        self._world_origin_location: Array | None = None
        self._absolute_location: Array | None = None

    @property
    def is_initialized(self) -> bool:
        return self._world_origin_location is not None

    @property
    def world_origin_location(self) -> Array:
        """Current floating-origin offset."""
        self._require_initialized()
        return self._world_origin_location

    @property
    def absolute_location(self) -> Array:
        """Origin-independent location of the object."""
        self._require_initialized()
        return self._absolute_location

    def initialize(self, current_engine_origin: ArrayLike) -> None:
        """Capture the engine's origin offset.

        The absolute location starts at the origin itself until the first
        :meth:`record_movement`.

        Args:
            current_engine_origin: Engine origin, typically integer valued.
        """
        self._world_origin_location = jnp.asarray(current_engine_origin, dtype=get_dtype())
        self._absolute_location = self._world_origin_location

    def record_movement(
        self,
        engine_relative_position: ArrayLike,
        current_engine_origin: ArrayLike,
    ) -> None:
        """Update the absolute location after the engine moved the object.

        Must not be called for origin rebases; use :meth:`rebase` instead.

        Args:
            engine_relative_position: Object position relative to the origin.
            current_engine_origin: Engine origin at the time of the move.

        Raises:
            MissingDependencyError: If :meth:`initialize` has not run.
        """
        self._require_initialized()
        dtype = get_dtype()
        self._absolute_location = jnp.asarray(current_engine_origin, dtype=dtype) + jnp.asarray(
            engine_relative_position, dtype=dtype
        )

    def rebase(self, old_origin_offset: ArrayLike, offset_delta: ArrayLike) -> None:
        """Apply an origin shift.

        Sets ``world_origin = old_origin_offset - offset_delta``.  The
        absolute location is unchanged and is never re-derived from the
        engine's relative position here.

        Raises:
            MissingDependencyError: If :meth:`initialize` has not run.
        """
        self._require_initialized()
        dtype = get_dtype()
        self._world_origin_location = jnp.asarray(old_origin_offset, dtype=dtype) - jnp.asarray(
            offset_delta, dtype=dtype
        )

    def relative_location(self) -> Array:
        """Return ``absolute_location - world_origin_location``."""
        self._require_initialized()
        return self._absolute_location - self._world_origin_location

    def set_relative_location(self, relative_location: ArrayLike) -> None:
        """Derive the absolute location from a trusted relative location.

        Used when the ECEF pose is the ground truth and the relative
        location was computed from it in double precision.
        """
        self._require_initialized()
        self._absolute_location = (
            jnp.asarray(relative_location, dtype=get_dtype()) + self._world_origin_location
        )

    def _require_initialized(self) -> None:
        if self._world_origin_location is None:
            raise MissingDependencyError("Origin tracker has not been initialized")
