"""Type definitions for the engine integration surface.

Provides :class:`EngineHost`, the structural interface a rendering engine
implements so a :class:`~georefjax.component.GeoreferenceComponent` can read
and write the object's engine-space transform, and :class:`ComponentState`,
the lifecycle of a component.
"""

from __future__ import annotations

import enum
from typing import Protocol, runtime_checkable

from jax import Array
from jax.typing import ArrayLike


class ComponentState(enum.Enum):
    """Lifecycle of a georeferenced component."""

    UNATTACHED = "unattached"
    """Not attached to an engine host; holds no state."""

    ATTACHED = "attached"
    """Origin tracking is running but no ECEF pose exists yet, because no
    geodetic service is bound."""

    TRACKING = "tracking"
    """Origin and ECEF pose are established; every operation is available."""


@runtime_checkable
class EngineHost(Protocol):
    """What the georeferencing core needs from the rendering engine.

    Transforms are 4x4 affine matrices in column-vector convention,
    expressed in the engine's rebased (origin-relative) world frame.
    """

    def origin_location(self) -> ArrayLike:
        """Current floating-origin offset of the engine world."""
        ...

    def get_component_to_world(self) -> ArrayLike:
        """Current object transform in the rebased world frame."""
        ...

    def set_world_transform(self, transform: Array, teleport: bool) -> None:
        """Replace the object transform.

        The host may notify the component of the change synchronously
        through ``on_engine_transform_changed``; the component ignores
        notifications caused by its own writes.
        """
        ...
