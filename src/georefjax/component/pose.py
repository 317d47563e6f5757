"""Authoritative ECEF pose of a georeferenced object."""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from georefjax.component.errors import MissingDependencyError
from georefjax.config import get_dtype


class PoseState:
    """Holds ``object_to_ecef`` and its derived engine-relative transform.

    ``object_to_ecef`` is the single source of truth for the object's global
    position and orientation.  Both matrices are replaced as a whole, never
    edited in place, and JAX arrays are immutable, so the arrays handed out
    by the accessors are read-only snapshots.
    """

    __slots__ = ("_object_to_ecef", "_object_to_engine_relative")

    def __init__(self) -> None:
        self._object_to_ecef: Array | None = None
        self._object_to_engine_relative: Array | None = None

    @property
    def is_established(self) -> bool:
        return self._object_to_ecef is not None

    @property
    def object_to_ecef(self) -> Array:
        if self._object_to_ecef is None:
            raise MissingDependencyError("Pose has not been established")
        return self._object_to_ecef

    @property
    def object_to_engine_relative(self) -> Array:
        if self._object_to_engine_relative is None:
            raise MissingDependencyError("Engine-relative transform has not been computed")
        return self._object_to_engine_relative

    @property
    def ecef_position(self) -> Array:
        """Translation column of ``object_to_ecef``."""
        return self.object_to_ecef[:3, 3]

    def replace(
        self,
        object_to_ecef: ArrayLike,
        object_to_engine_relative: ArrayLike | None = None,
    ) -> None:
        """Commit a new pose.

        Args:
            object_to_ecef: New authoritative transform.
            object_to_engine_relative: Matching engine-relative transform,
                if already computed.  Passing ``None`` keeps the previous
                one until :meth:`set_engine_relative` is called.
        """
        dtype = get_dtype()
        self._object_to_ecef = jnp.asarray(object_to_ecef, dtype=dtype)
        if object_to_engine_relative is not None:
            self._object_to_engine_relative = jnp.asarray(object_to_engine_relative, dtype=dtype)

    def set_engine_relative(self, object_to_engine_relative: ArrayLike) -> None:
        self._object_to_engine_relative = jnp.asarray(object_to_engine_relative, dtype=get_dtype())

    def clear(self) -> None:
        self._object_to_ecef = None
        self._object_to_engine_relative = None
