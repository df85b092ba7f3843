"""Example script: solving ``y'' = c y'`` with ``y(0) = 1`` and ``y(1) = 0`` by
shooting on the initial slope.

Run with
    python examples/shooting.py [c] [tries]
"""

import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), "..", "src"))

from orbiter import SimulationSettings
from orbiter.problems import shoot
from orbiter.utils.log_config import logger


def main() -> None:
    c = float(sys.argv[1]) if len(sys.argv) > 1 else 5.0
    tries = int(sys.argv[2]) if len(sys.argv) > 2 else 10

    trials = shoot(c, tries, SimulationSettings(tolerance=1e-9, time=1.0))
    best = min(trials, key=lambda t: abs(t.final_value))
    logger.info(f"best slope after {tries} shots: {best.slope} (y1(1) = {best.final_value})")


if __name__ == "__main__":
    main()
