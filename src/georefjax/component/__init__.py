"""Georeferenced transform maintenance.

Keeps an engine object's single-precision, origin-relative transform and
its double-precision ECEF pose consistent across movement, floating-origin
rebases and geodetic moves.

- :class:`GeoreferenceComponent` -- the engine-facing object
- :class:`OriginTracker` -- absolute location and origin offset
- :class:`PoseState` -- authoritative ``object_to_ecef``
- :class:`DisplayProjection` / :class:`DisplayFields` -- LLH/ECEF mirrors
- pipeline functions -- pure engine ↔ ECEF transform algebra
"""

from ._types import ComponentState, EngineHost
from .config import GeoreferenceComponentConfig
from .display import DisplayFields, DisplayProjection
from .errors import DegenerateGeometryError, GeoreferenceError, MissingDependencyError
from .georeference_component import GeoreferenceComponent
from .origin import OriginTracker
from .pipeline import (
    compute_ecef_from_engine_space,
    compute_engine_relative_from_ecef,
    east_south_up_transform,
    is_near_pole,
    move_transform_to_ecef,
    snap_up_to_normal,
)
from .pose import PoseState

__all__ = [
    # Component
    "ComponentState",
    "EngineHost",
    "GeoreferenceComponent",
    "GeoreferenceComponentConfig",
    # State
    "OriginTracker",
    "PoseState",
    "DisplayFields",
    "DisplayProjection",
    # Errors
    "GeoreferenceError",
    "MissingDependencyError",
    "DegenerateGeometryError",
    # Pipeline
    "compute_ecef_from_engine_space",
    "compute_engine_relative_from_ecef",
    "move_transform_to_ecef",
    "snap_up_to_normal",
    "east_south_up_transform",
    "is_near_pole",
]
