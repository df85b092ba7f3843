""" Public API for the :mod:`~orbiter.integrators` package.
"""

from .configs import (FIXED_STEP_CONFIG, GLOBAL_NORM_CONFIG, PERIODIC_CONFIG,
                      IntegratorConfig, SimulationSettings, StepControl)
from .rk import DormandPrince, FixedStepRK, PeriodicDormandPrince, RungeKutta
from .tableau import (DORMAND_PRINCE_45, EULER, HEUN, MIDPOINT, RK4,
                      EmbeddedTableau)
from .types import PeriodEndRecord, Trajectory

__all__ = [
    "RungeKutta",
    "DormandPrince",
    "PeriodicDormandPrince",
    "FixedStepRK",
    "EmbeddedTableau",
    "DORMAND_PRINCE_45",
    "EULER",
    "MIDPOINT",
    "HEUN",
    "RK4",
    "StepControl",
    "IntegratorConfig",
    "SimulationSettings",
    "GLOBAL_NORM_CONFIG",
    "PERIODIC_CONFIG",
    "FIXED_STEP_CONFIG",
    "Trajectory",
    "PeriodEndRecord",
]
