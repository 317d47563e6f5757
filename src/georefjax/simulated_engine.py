"""In-memory rendering engine host.

:class:`SimulatedEngine` implements :class:`~georefjax.component.EngineHost`
the way a single-precision game engine behaves: the object transform is
stored as ``float32``, the world origin is an integer vector, and every
transform write synchronously notifies the attached component.  It drives
the tests and the flight example.
"""

from __future__ import annotations

import logging

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from georefjax.component import GeoreferenceComponent

logger = logging.getLogger(__name__)


class SimulatedEngine:
    """Single-precision engine object with a floating integer origin.

    Args:
        origin: Initial world origin (integer engine units).
        transform: Initial object transform in the rebased world frame.
            Defaults to the identity.

    Attributes:
        transform_writes: Number of calls to :meth:`set_world_transform`.
        last_teleport: ``teleport`` flag of the most recent write.
    """

    def __init__(
        self,
        origin: ArrayLike = (0, 0, 0),
        transform: ArrayLike | None = None,
    ) -> None:
        self._origin = jnp.asarray(origin, dtype=jnp.int64)
        if transform is None:
            transform = jnp.eye(4)
        self._transform = jnp.asarray(transform, dtype=jnp.float32)
        self._component: GeoreferenceComponent | None = None
        self.transform_writes = 0
        self.last_teleport: bool | None = None

    @property
    def component(self) -> GeoreferenceComponent | None:
        return self._component

    def attach(self, component: GeoreferenceComponent) -> None:
        """Attach a georeference component to this object."""
        self._component = component
        component.attach(self)

    def detach(self) -> None:
        if self._component is not None:
            self._component.detach()
        self._component = None

    # EngineHost

    def origin_location(self) -> Array:
        return self._origin

    def get_component_to_world(self) -> Array:
        return self._transform

    def set_world_transform(self, transform: ArrayLike, teleport: bool = False) -> None:
        """Store a new transform (rounded to ``float32``) and notify."""
        self._transform = jnp.asarray(transform, dtype=jnp.float32)
        self.transform_writes += 1
        self.last_teleport = teleport
        if self._component is not None:
            self._component.on_engine_transform_changed(self._transform)

    # Engine-side movement

    def move_to(self, relative_position: ArrayLike) -> None:
        """Move the object to a position in the rebased world frame."""
        position = jnp.asarray(relative_position, dtype=jnp.float32)
        self.set_world_transform(self._transform.at[:3, 3].set(position))

    def translate(self, delta: ArrayLike) -> None:
        """Move the object by ``delta`` in the rebased world frame."""
        delta = jnp.asarray(delta, dtype=jnp.float32)
        self.set_world_transform(self._transform.at[:3, 3].add(delta))

    def shift_origin(self, new_origin: ArrayLike) -> None:
        """Rebase the world origin.

        The engine shifts its own copy of the transform by
        ``old_origin - new_origin`` without a movement notification, tells
        the component about the rebase while still reporting the old
        origin, and then commits the new origin.

        Args:
            new_origin: New world origin (integer engine units).
        """
        new_origin = jnp.asarray(new_origin, dtype=jnp.int64)
        offset = self._origin - new_origin
        self._transform = self._transform.at[:3, 3].add(offset.astype(jnp.float32))
        logger.debug("Shifting world origin from %s to %s", self._origin, new_origin)
        if self._component is not None:
            self._component.on_origin_rebase(offset)
        self._origin = new_origin
