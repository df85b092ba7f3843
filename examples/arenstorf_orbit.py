"""Example script: three rotations of the Arenstorf orbit, with the state at
every period end and the trajectory exported to CSV.

Run with
    python examples/arenstorf_orbit.py
"""

import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), "..", "src"))

from orbiter import ArenstorfOrbit, SimulationSettings
from orbiter.utils.log_config import logger

_RESULTS_DIR = "results"


def main() -> None:
    orbit = ArenstorfOrbit()
    traj = orbit.calculate(SimulationSettings(tolerance=1e-9, time=3 * orbit.period))

    logger.info(f"Integrated {traj.step_count() - 1} steps")
    for rec in orbit.period_end_records():
        logger.info(f"period-end record {rec.index} at x = {rec.x:.11f}, state = {rec.state}")

    for i, points in enumerate(orbit.rotations()):
        logger.info(f"rotation {i}: {len(points)} points")

    traj.to_csv(os.path.join(_RESULTS_DIR, "arenstorf.csv"))


if __name__ == "__main__":
    main()
