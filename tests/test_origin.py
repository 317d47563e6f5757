"""Tests for floating-origin tracking and the pose store."""

import jax.numpy as jnp
import pytest

from georefjax.component import MissingDependencyError, OriginTracker, PoseState


class TestOriginTracker:
    def test_initialize(self):
        tracker = OriginTracker()
        assert not tracker.is_initialized
        tracker.initialize([1000, 0, 0])
        assert tracker.is_initialized
        assert jnp.array_equal(tracker.world_origin_location, jnp.array([1000.0, 0.0, 0.0]))
        assert jnp.array_equal(tracker.absolute_location, jnp.array([1000.0, 0.0, 0.0]))

    def test_record_movement(self):
        """Origin (1000, 0, 0) and relative (5, 0, 0) give absolute (1005, 0, 0)."""
        tracker = OriginTracker()
        tracker.initialize([1000, 0, 0])
        tracker.record_movement([5.0, 0.0, 0.0], [1000, 0, 0])
        assert jnp.array_equal(tracker.absolute_location, jnp.array([1005.0, 0.0, 0.0]))
        assert jnp.array_equal(tracker.relative_location(), jnp.array([5.0, 0.0, 0.0]))

    def test_rebase(self):
        tracker = OriginTracker()
        tracker.initialize([1000, 0, 0])
        tracker.record_movement([5.0, 0.0, 0.0], [1000, 0, 0])
        tracker.rebase([1000, 0, 0], [1000, 0, 0])
        assert jnp.array_equal(tracker.world_origin_location, jnp.zeros(3))
        assert jnp.array_equal(tracker.relative_location(), jnp.array([1005.0, 0.0, 0.0]))
        assert jnp.array_equal(tracker.absolute_location, jnp.array([1005.0, 0.0, 0.0]))

    def test_repeated_rebases_keep_absolute_location(self):
        tracker = OriginTracker()
        tracker.initialize([0, 0, 0])
        tracker.record_movement([123456.789, -42.5, 7.25], [0, 0, 0])
        absolute = tracker.absolute_location
        origin = jnp.zeros(3)
        for delta in ([100000, 0, 0], [-3, 7, 11], [25000, -25000, 1]):
            tracker.rebase(origin, delta)
            origin = origin - jnp.array(delta, dtype=origin.dtype)
        assert jnp.array_equal(tracker.absolute_location, absolute)
        assert jnp.allclose(tracker.relative_location(), absolute - origin, atol=1e-9)

    def test_set_relative_location(self):
        tracker = OriginTracker()
        tracker.initialize([500, 0, -500])
        tracker.set_relative_location([1.5, 2.5, 3.5])
        assert jnp.array_equal(tracker.absolute_location, jnp.array([501.5, 2.5, -496.5]))

    @pytest.mark.parametrize(
        "operation",
        [
            lambda t: t.world_origin_location,
            lambda t: t.absolute_location,
            lambda t: t.relative_location(),
            lambda t: t.record_movement([0.0, 0.0, 0.0], [0, 0, 0]),
            lambda t: t.rebase([0, 0, 0], [1, 0, 0]),
            lambda t: t.set_relative_location([0.0, 0.0, 0.0]),
        ],
    )
    def test_uninitialized_raises(self, operation):
        with pytest.raises(MissingDependencyError):
            operation(OriginTracker())


class TestPoseState:
    def test_empty(self):
        pose = PoseState()
        assert not pose.is_established
        with pytest.raises(MissingDependencyError):
            pose.object_to_ecef
        with pytest.raises(MissingDependencyError):
            pose.object_to_engine_relative

    def test_replace(self):
        pose = PoseState()
        m = jnp.eye(4).at[:3, 3].set(jnp.array([1.0, 2.0, 3.0]))
        pose.replace(m, jnp.eye(4))
        assert pose.is_established
        assert jnp.array_equal(pose.object_to_ecef, m)
        assert jnp.array_equal(pose.ecef_position, jnp.array([1.0, 2.0, 3.0]))
        assert pose.object_to_ecef.dtype == jnp.float64

    def test_replace_keeps_engine_relative(self):
        pose = PoseState()
        relative = jnp.eye(4) * 2.0
        pose.replace(jnp.eye(4), relative)
        pose.replace(jnp.eye(4) * 3.0)
        assert jnp.array_equal(pose.object_to_engine_relative, relative)
        pose.set_engine_relative(jnp.eye(4))
        assert jnp.array_equal(pose.object_to_engine_relative, jnp.eye(4))

    def test_clear(self):
        pose = PoseState()
        pose.replace(jnp.eye(4), jnp.eye(4))
        pose.clear()
        assert not pose.is_established
