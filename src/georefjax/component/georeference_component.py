"""Georeferenced object: keeps an engine object and its ECEF pose in sync.

:class:`GeoreferenceComponent` is the surface the engine integration layer
talks to.  The host calls it at well-defined points:

- :meth:`~GeoreferenceComponent.on_engine_transform_changed` when the engine
  moved the object,
- :meth:`~GeoreferenceComponent.on_origin_rebase` when the engine shifted its
  floating origin,
- :meth:`~GeoreferenceComponent.on_georeference_updated` when the ECEF ↔
  engine registration changed,

and user or editor code issues the geodetic commands (move to LLH/ECEF,
snaps).  Engine-space edits flow into ``object_to_ecef``; geodetic commands
compute ``object_to_ecef`` directly and push the derived engine transform
back into the host.

Every public operation runs to completion or degrades to a no-op with a
logged warning.  New values are computed before anything is committed, so
the pose is never left half updated.
"""

from __future__ import annotations

import functools
import logging

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from georefjax.component._types import ComponentState, EngineHost
from georefjax.component.config import GeoreferenceComponentConfig
from georefjax.component.display import (
    ECEF_FIELDS,
    LLH_FIELDS,
    DisplayFields,
    DisplayProjection,
)
from georefjax.component.errors import (
    DegenerateGeometryError,
    GeoreferenceError,
    MissingDependencyError,
)
from georefjax.component.origin import OriginTracker
from georefjax.component.pipeline import (
    compute_ecef_from_engine_space,
    compute_engine_relative_from_ecef,
    east_south_up_transform,
    is_near_pole,
    move_transform_to_ecef,
    snap_up_to_normal,
)
from georefjax.component.pose import PoseState
from georefjax.config import get_dtype
from georefjax.georeference import GeodeticService
from georefjax.transforms import basis_scale

logger = logging.getLogger(__name__)


def _skip_on_georeference_error(method):
    """Turn a :class:`GeoreferenceError` into a logged no-op."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except GeoreferenceError as exc:
            logger.warning("%s: %s skipped: %s", self.name, method.__name__, exc)
            return None

    return wrapper


class GeoreferenceComponent:
    """Maintains the precise global pose of one engine object.

    Args:
        georeference: Geodetic service and engine registration.  May be
            bound later with :meth:`set_georeference`.
        config: Per-object options.  Defaults to
            :class:`GeoreferenceComponentConfig()`.
        name: Label used in log messages.

    Examples:
        ```python
        from georefjax import Georeference, GeoreferenceComponent, SimulatedEngine
        engine = SimulatedEngine()
        component = GeoreferenceComponent(Georeference())
        engine.attach(component)
        component.move_to_longitude_latitude_height([-105.0, 40.0, 1600.0])
        component.display.latitude  # 40.0
        ```
    """

    def __init__(
        self,
        georeference: GeodeticService | None = None,
        config: GeoreferenceComponentConfig | None = None,
        name: str = "GeoreferenceComponent",
    ) -> None:
        self.name = name
        self._georeference = georeference
        self._config = config if config is not None else GeoreferenceComponentConfig()
        self._auto_snap_to_east_south_up = self._config.auto_snap_to_east_south_up
        self._host: EngineHost | None = None
        self._origin = OriginTracker()
        self._pose = PoseState()
        self._display = DisplayProjection()
        self._ignore_next_update = False

    # Lifecycle

    @property
    def state(self) -> ComponentState:
        if self._host is None:
            return ComponentState.UNATTACHED
        if not self._pose.is_established:
            return ComponentState.ATTACHED
        return ComponentState.TRACKING

    @property
    def config(self) -> GeoreferenceComponentConfig:
        return self._config

    @property
    def georeference(self) -> GeodeticService | None:
        return self._georeference

    def attach(self, host: EngineHost) -> None:
        """Attach to an engine object and start tracking it.

        Captures the engine origin and the object's current position.  With a
        geodetic service bound, also computes the first ``object_to_ecef`` and
        pushes the registered transform back to the host.

        Args:
            host: The engine object to georeference.
        """
        if self._host is not None:
            self.detach()

        self._host = host
        self._origin.initialize(host.origin_location())
        self._origin.record_movement(
            jnp.asarray(host.get_component_to_world())[:3, 3], host.origin_location()
        )
        logger.debug("%s: attached at origin %s", self.name, self._origin.world_origin_location)

        if self._georeference is None:
            logger.warning(
                "%s: no geodetic service bound; pose will be established once one is set",
                self.name,
            )
            return
        self._establish_pose()

    def detach(self) -> None:
        """Discard all origin, pose and display state."""
        self._host = None
        self._origin = OriginTracker()
        self._pose.clear()
        self._display.reset()
        self._ignore_next_update = False
        logger.debug("%s: detached", self.name)

    @_skip_on_georeference_error
    def set_georeference(self, georeference: GeodeticService) -> None:
        """Bind or replace the geodetic service.

        On an attached component the pose is recomputed from the engine
        transform under the new registration.
        """
        self._georeference = georeference
        if self._host is not None:
            self._establish_pose()

    def _establish_pose(self) -> None:
        host = self._require_host()
        self._update_object_to_ecef_from_engine(host.get_component_to_world())
        self._push_transform()

    # Host notifications

    @_skip_on_georeference_error
    def on_engine_transform_changed(self, new_relative_transform: ArrayLike | None = None) -> None:
        """The engine moved the object.

        Records the movement in the origin tracker and recomputes
        ``object_to_ecef`` from engine space.  Notifications caused by the
        component's own writes are ignored.

        Args:
            new_relative_transform: The new engine-relative transform.  Read
                from the host when omitted.
        """
        if self._ignore_next_update:
            self._ignore_next_update = False
            logger.debug("%s: ignoring transform notification for own write", self.name)
            return

        host = self._require_host()
        if new_relative_transform is None:
            new_relative_transform = host.get_component_to_world()
        new_relative_transform = jnp.asarray(new_relative_transform, dtype=get_dtype())

        self._origin.record_movement(new_relative_transform[:3, 3], host.origin_location())
        self._update_object_to_ecef_from_engine(new_relative_transform)

        if self._auto_snap_to_east_south_up:
            self._snap_to_east_south_up()
            self._refresh_display()

    @_skip_on_georeference_error
    def on_origin_rebase(self, offset_delta: ArrayLike) -> None:
        """The engine shifted its floating origin by ``-offset_delta``.

        Must be called while the host still reports the old origin.  Only
        the origin offset changes: the absolute location and
        ``object_to_ecef`` are untouched, and the engine-relative transform
        is re-derived from them.

        Args:
            offset_delta: Offset applied to world positions by the shift,
                ``old_origin - new_origin``.
        """
        host = self._require_host()
        self._origin.rebase(host.origin_location(), offset_delta)
        if not self._pose.is_established:
            return

        georeference = self._require_georeference()
        self._pose.set_engine_relative(
            compute_engine_relative_from_ecef(
                self._pose.object_to_ecef,
                self._origin.world_origin_location,
                georeference.engine_world_from_ecef_transform(),
            )
        )
        if self._config.fix_transform_on_origin_rebase:
            self._push_transform()

    @_skip_on_georeference_error
    def on_georeference_updated(self) -> None:
        """The ECEF ↔ engine registration changed.

        The object keeps its place on the globe; its engine transform is
        re-derived and pushed to the host.
        """
        self._require_tracking()
        self._apply_ecef_pose(self._pose.object_to_ecef)
        self._refresh_display()

    # Geodetic commands

    @_skip_on_georeference_error
    def move_to_longitude_latitude_height(
        self,
        target_llh: ArrayLike,
        maintain_relative_orientation: bool = True,
    ) -> None:
        """Move the object to a longitude/latitude/height.

        Args:
            target_llh: ``[lon_deg, lat_deg, height_m]``.
            maintain_relative_orientation: Keep the orientation relative to the
                local horizon rather than the raw ECEF orientation.
        """
        self._require_tracking()
        georeference = self._require_georeference()
        target_ecef = georeference.ecef_from_longitude_latitude_height(target_llh)
        self._move_to_ecef(target_ecef, maintain_relative_orientation)

    @_skip_on_georeference_error
    def move_to_ecef(
        self,
        target_ecef: ArrayLike,
        maintain_relative_orientation: bool = True,
    ) -> None:
        """Move the object to an ECEF position.

        Without ``maintain_relative_orientation`` only the translation of
        ``object_to_ecef`` changes.  With it, the orientation is carried
        from the local East-North-Up frame at the current position to the
        one at the target.  Near the poles that frame is ill-defined; the
        move then falls back to translation only and logs a warning.

        Args:
            target_ecef: ECEF position ``[x, y, z]`` [m].
            maintain_relative_orientation: Keep the orientation relative to the
                local horizon rather than the raw ECEF orientation.
        """
        self._require_tracking()
        self._move_to_ecef(target_ecef, maintain_relative_orientation)

    def _move_to_ecef(self, target_ecef: ArrayLike, maintain_relative_orientation: bool) -> None:
        georeference = self._require_georeference()
        target_ecef = jnp.asarray(target_ecef, dtype=get_dtype())
        object_to_ecef = self._pose.object_to_ecef

        current_frame = target_frame = None
        if maintain_relative_orientation:
            try:
                current_frame, target_frame = self._enu_frames_for_move(
                    georeference, object_to_ecef[:3, 3], target_ecef
                )
            except DegenerateGeometryError as exc:
                logger.warning("%s: %s; moving without preserving local orientation", self.name, exc)

        new_object_to_ecef = move_transform_to_ecef(
            object_to_ecef, target_ecef, current_frame, target_frame
        )
        self._apply_ecef_pose(new_object_to_ecef)

        if self._auto_snap_to_east_south_up:
            self._snap_to_east_south_up()
        self._refresh_display()

    def _enu_frames_for_move(
        self,
        georeference: GeodeticService,
        current_ecef: Array,
        target_ecef: Array,
    ) -> tuple[Array, Array]:
        tolerance = self._config.pole_tolerance
        for label, point in (("start", current_ecef), ("target", target_ecef)):
            if is_near_pole(point, tolerance):
                raise DegenerateGeometryError(
                    f"move {label} {point} is within {tolerance} m of the polar axis"
                )
        return (
            georeference.east_north_up_to_ecef(current_ecef),
            georeference.east_north_up_to_ecef(target_ecef),
        )

    @_skip_on_georeference_error
    def snap_local_up_to_ellipsoid_normal(self) -> None:
        """Align the local up axis with the ellipsoid normal.

        Applies the shortest rotation taking the object's ``+Z`` axis onto the
        geodetic surface normal at its position.  Translation is unchanged.
        """
        self._require_tracking()
        georeference = self._require_georeference()
        object_to_ecef = self._pose.object_to_ecef
        normal = georeference.geodetic_surface_normal(object_to_ecef[:3, 3])
        self._apply_ecef_pose(snap_up_to_normal(object_to_ecef, normal))
        self._refresh_display()

    @_skip_on_georeference_error
    def snap_to_east_south_up(self) -> None:
        """Replace the orientation with the local East-South-Up frame.

        Engine ``+X`` ends up pointing East, ``+Y`` South and ``+Z`` Up.  The
        object's scale and position are kept; its previous orientation is
        discarded.
        """
        self._require_tracking()
        self._snap_to_east_south_up()
        self._refresh_display()

    def _snap_to_east_south_up(self) -> None:
        georeference = self._require_georeference()
        object_to_ecef = self._pose.object_to_ecef
        engine_scale = basis_scale(georeference.engine_world_from_ecef_transform() @ object_to_ecef)
        enu_to_ecef = georeference.east_north_up_to_ecef(object_to_ecef[:3, 3])
        self._apply_ecef_pose(east_south_up_transform(enu_to_ecef, engine_scale))

    @_skip_on_georeference_error
    def set_auto_snap_to_east_south_up(self, value: bool) -> None:
        """Enable or disable snapping to East-South-Up after every move.

        Enabling it snaps immediately.
        """
        self._auto_snap_to_east_south_up = value
        if value:
            self.snap_to_east_south_up()

    def apply_display_edit(self, **fields: float) -> None:
        """Apply an inspector edit of the display fields.

        Editing any of ``longitude``, ``latitude`` or ``height`` moves the
        object to the edited LLH; editing any of ``ecef_x``, ``ecef_y`` or
        ``ecef_z`` moves it to the edited ECEF position.  Fields not named
        keep their current display value.

        Raises:
            ValueError: On unknown field names or when LLH and ECEF fields
                are mixed in one edit.
        """
        unknown = set(fields) - set(LLH_FIELDS) - set(ECEF_FIELDS)
        if unknown:
            raise ValueError(f"Unknown display fields: {sorted(unknown)}")

        edits_llh = any(name in fields for name in LLH_FIELDS)
        edits_ecef = any(name in fields for name in ECEF_FIELDS)
        if edits_llh and edits_ecef:
            raise ValueError("Cannot edit longitude/latitude/height and ECEF fields together")

        current = self._display.fields
        if edits_llh:
            self.move_to_longitude_latitude_height(
                [fields.get(name, getattr(current, name)) for name in LLH_FIELDS]
            )
        elif edits_ecef:
            self.move_to_ecef([fields.get(name, getattr(current, name)) for name in ECEF_FIELDS])

    # Accessors

    @property
    def auto_snap_to_east_south_up(self) -> bool:
        return self._auto_snap_to_east_south_up

    @property
    def object_to_ecef(self) -> Array | None:
        """Authoritative ECEF pose, or ``None`` before tracking starts."""
        return self._pose.object_to_ecef if self._pose.is_established else None

    @property
    def object_to_engine_relative(self) -> Array | None:
        return self._pose.object_to_engine_relative if self._pose.is_established else None

    @property
    def ecef(self) -> Array | None:
        return self._pose.ecef_position if self._pose.is_established else None

    @property
    def absolute_location(self) -> Array | None:
        return self._origin.absolute_location if self._origin.is_initialized else None

    @property
    def relative_location(self) -> Array | None:
        return self._origin.relative_location() if self._origin.is_initialized else None

    @property
    def world_origin_location(self) -> Array | None:
        return self._origin.world_origin_location if self._origin.is_initialized else None

    @property
    def display(self) -> DisplayFields:
        return self._display.fields

    @property
    def longitude(self) -> float:
        return self._display.fields.longitude

    @property
    def latitude(self) -> float:
        return self._display.fields.latitude

    @property
    def height(self) -> float:
        return self._display.fields.height

    # Internals

    def _require_host(self) -> EngineHost:
        if self._host is None:
            raise MissingDependencyError("component is not attached to an engine host")
        return self._host

    def _require_georeference(self) -> GeodeticService:
        if self._georeference is None:
            raise MissingDependencyError("no geodetic service is bound")
        return self._georeference

    def _require_tracking(self) -> None:
        self._require_host()
        self._require_georeference()
        if not self._pose.is_established:
            raise MissingDependencyError("pose has not been established")

    def _update_object_to_ecef_from_engine(self, engine_relative_transform: ArrayLike) -> None:
        georeference = self._require_georeference()
        object_to_ecef = compute_ecef_from_engine_space(
            engine_relative_transform,
            self._origin.absolute_location,
            georeference.ecef_from_engine_world_transform(),
        )
        object_to_engine_relative = compute_engine_relative_from_ecef(
            object_to_ecef,
            self._origin.world_origin_location,
            georeference.engine_world_from_ecef_transform(),
        )
        self._pose.replace(object_to_ecef, object_to_engine_relative)
        self._refresh_display()

    def _apply_ecef_pose(self, object_to_ecef: Array) -> None:
        """Commit a pose computed in ECEF and push it to the host.

        ECEF is the ground truth here, so the engine locations are derived
        from the new engine-relative translation rather than read back from
        the single-precision engine transform.
        """
        georeference = self._require_georeference()
        self._require_host()
        object_to_engine_relative = compute_engine_relative_from_ecef(
            object_to_ecef,
            self._origin.world_origin_location,
            georeference.engine_world_from_ecef_transform(),
        )
        self._pose.replace(object_to_ecef, object_to_engine_relative)
        self._push_transform()
        self._origin.set_relative_location(object_to_engine_relative[:3, 3])

    def _push_transform(self) -> None:
        host = self._require_host()
        # The host may call back into on_engine_transform_changed from inside
        # set_world_transform; that single notification is ours
        self._ignore_next_update = True
        try:
            host.set_world_transform(
                self._pose.object_to_engine_relative,
                teleport=self._config.teleport_when_updating_transform,
            )
        finally:
            self._ignore_next_update = False

    def _refresh_display(self) -> None:
        self._display.refresh(self._pose.object_to_ecef, self._georeference)
