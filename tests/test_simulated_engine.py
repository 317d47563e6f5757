"""Tests for the single-precision simulated engine host."""

import jax.numpy as jnp

from georefjax import EngineHost, SimulatedEngine


class _RecordingComponent:
    def __init__(self):
        self.host = None
        self.changes = []
        self.rebases = []

    def attach(self, host):
        self.host = host

    def detach(self):
        self.host = None

    def on_engine_transform_changed(self, transform):
        self.changes.append(transform)

    def on_origin_rebase(self, offset_delta):
        # Recorded together with the origin the host reports at that moment
        self.rebases.append((offset_delta, self.host.origin_location()))


class TestSimulatedEngine:
    def test_is_engine_host(self):
        assert isinstance(SimulatedEngine(), EngineHost)

    def test_defaults(self):
        engine = SimulatedEngine()
        assert jnp.array_equal(engine.origin_location(), jnp.zeros(3, dtype=jnp.int64))
        assert jnp.array_equal(engine.get_component_to_world(), jnp.eye(4))
        assert engine.get_component_to_world().dtype == jnp.float32
        assert engine.transform_writes == 0
        assert engine.last_teleport is None

    def test_single_precision_storage(self):
        engine = SimulatedEngine()
        engine.set_world_transform(jnp.eye(4).at[0, 3].set(123456789.123), teleport=True)
        assert engine.get_component_to_world().dtype == jnp.float32
        assert float(engine.get_component_to_world()[0, 3]) != 123456789.123
        assert engine.last_teleport is True

    def test_writes_notify_component(self):
        engine = SimulatedEngine()
        component = _RecordingComponent()
        engine.attach(component)
        assert component.host is engine
        engine.translate([1.0, 2.0, 3.0])
        engine.move_to([4.0, 5.0, 6.0])
        assert engine.transform_writes == 2
        assert len(component.changes) == 2
        assert jnp.array_equal(component.changes[-1][:3, 3], jnp.array([4.0, 5.0, 6.0]))

    def test_shift_origin(self):
        engine = SimulatedEngine(origin=(1000, 0, 0), transform=jnp.eye(4).at[0, 3].set(5.0))
        component = _RecordingComponent()
        engine.attach(component)
        engine.shift_origin((0, 0, 0))

        offset, origin_during_rebase = component.rebases[0]
        assert jnp.array_equal(offset, jnp.array([1000, 0, 0]))
        assert jnp.array_equal(origin_during_rebase, jnp.array([1000, 0, 0]))
        assert jnp.array_equal(engine.origin_location(), jnp.zeros(3, dtype=jnp.int64))
        assert float(engine.get_component_to_world()[0, 3]) == 1005.0
        # A rebase is not a movement
        assert component.changes == []
        assert engine.transform_writes == 0

    def test_detach(self):
        engine = SimulatedEngine()
        component = _RecordingComponent()
        engine.attach(component)
        engine.detach()
        assert engine.component is None
        assert component.host is None
        engine.translate([1.0, 0.0, 0.0])
        assert component.changes == []
