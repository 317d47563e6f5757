"""Configuration dataclass for georeferenced components.

Provides :class:`GeoreferenceComponentConfig`, the per-object options that
decide how a component reacts to origin rebases and how it pushes
transforms back into the engine.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GeoreferenceComponentConfig:
    """Options for a :class:`~georefjax.component.GeoreferenceComponent`.

    Args:
        fix_transform_on_origin_rebase: After an origin rebase, push the
            transform recomputed from the double-precision ECEF pose back to
            the engine instead of keeping the engine's own shifted
            single-precision transform.
        teleport_when_updating_transform: Passed to the engine with every
            pushed transform so that physics treats the change as a teleport
            rather than a sweep.
        auto_snap_to_east_south_up: Initial value of the auto-snap flag.
            When set, every move re-applies
            :meth:`~georefjax.component.GeoreferenceComponent.snap_to_east_south_up`.
        pole_tolerance: Distance from the Earth's rotation axis [m] below
            which an orientation-preserving move is treated as degenerate
            and falls back to a translation-only move.

    Examples:
        ```python
        from georefjax.component import GeoreferenceComponentConfig
        config = GeoreferenceComponentConfig(auto_snap_to_east_south_up=True)
        ```
    """

    fix_transform_on_origin_rebase: bool = True
    teleport_when_updating_transform: bool = True
    auto_snap_to_east_south_up: bool = False
    pole_tolerance: float = 1e-3

    def __post_init__(self) -> None:
        if self.pole_tolerance < 0.0:
            raise ValueError(
                f"pole_tolerance must be non-negative, got {self.pole_tolerance}"
            )
