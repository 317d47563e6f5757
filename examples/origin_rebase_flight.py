# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "georefjax"]
#
# [tool.uv.sources]
# georefjax = { path = ".." }
# ///
"""Fly an object across the globe through a floating-origin engine.

Places a georeferenced object in a single-precision simulated engine, then
flies it through a sequence of random longitude/latitude/height waypoints.
Between waypoints the engine nudges the object along in engine space, and
whenever the object strays too far from the world origin the engine
rebases the origin onto it, as a game engine does to keep float32 precision
near the camera.

After every step the ECEF position the component reports is compared with
the position expected from the double-precision flight plan; the largest
East-North-Up error is printed at the end.

Requires georefjax to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/origin_rebase_flight.py [OPTIONS]

Examples:
    # Quick run
    uv run examples/origin_rebase_flight.py --waypoints 5 --steps 10

    # Rebase aggressively
    uv run examples/origin_rebase_flight.py --rebase-distance 1000
"""

import logging
import time
from typing import Annotated

import jax.numpy as jnp
import numpy as np
import typer

from georefjax import (
    Georeference,
    GeoreferenceComponent,
    SimulatedEngine,
    relative_position_ecef_to_enu,
    set_dtype,
)

set_dtype(jnp.float64)


def main(
    waypoints: Annotated[int, typer.Option(help="Number of random waypoints")] = 20,
    steps: Annotated[int, typer.Option(help="Engine-space nudges per waypoint")] = 25,
    step_size: Annotated[float, typer.Option(help="Engine-space nudge length in cm")] = 50.0,
    rebase_distance: Annotated[
        float, typer.Option(help="Origin rebase threshold in engine units (cm)")
    ] = 100000.0,
    max_height: Annotated[float, typer.Option(help="Maximum waypoint height in m")] = 10000.0,
    seed: Annotated[int, typer.Option(help="Random seed")] = 42,
    verbose: Annotated[bool, typer.Option(help="Show debug logging")] = False,
) -> None:
    """Fly a georeferenced object through random waypoints with origin rebasing."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    rng = np.random.default_rng(seed)

    georeference = Georeference()
    engine = SimulatedEngine()
    component = GeoreferenceComponent(georeference, name="flyer")
    engine.attach(component)

    print(f"Origin: {np.asarray(georeference.origin_longitude_latitude_height)}")
    print(f"Waypoints: {waypoints}, nudges per waypoint: {steps}")

    max_error = 0.0
    n_rebases = 0
    t0 = time.perf_counter()

    for i in range(waypoints):
        llh = np.array(
            [
                rng.uniform(-180.0, 180.0),
                rng.uniform(-85.0, 85.0),
                rng.uniform(0.0, max_height),
            ]
        )
        component.move_to_longitude_latitude_height(llh)

        for _ in range(steps):
            relative = np.asarray(component.relative_location)
            if np.linalg.norm(relative) > rebase_distance:
                engine.shift_origin(np.asarray(component.absolute_location).round().astype(np.int64))
                n_rebases += 1

            expected_ecef = np.asarray(component.ecef)
            direction = rng.normal(size=3)
            direction /= np.linalg.norm(direction)
            engine.translate(direction * step_size)

            # Expected position: start of the nudge plus the nudge mapped to ECEF
            ecef_from_engine = np.asarray(georeference.ecef_from_engine_world_transform())
            expected_ecef = expected_ecef + ecef_from_engine[:3, :3] @ (direction * step_size)

            error = relative_position_ecef_to_enu(expected_ecef, component.ecef)
            max_error = max(max_error, float(jnp.linalg.norm(error)))

        print(
            f"  Waypoint {i + 1}/{waypoints}: lon={component.longitude:9.4f} "
            f"lat={component.latitude:8.4f} h={component.height:9.1f} m"
        )

    elapsed = time.perf_counter() - t0
    print(f"\nOrigin rebases: {n_rebases}")
    print(f"Max position error: {max_error:.3e} m")
    print(f"Elapsed: {elapsed:.1f}s")


if __name__ == "__main__":
    typer.run(main)
