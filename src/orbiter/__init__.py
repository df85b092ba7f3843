"""orbiter: adaptive Runge-Kutta integration of periodic and boundary-value ODE problems.

The most frequently used classes are re-exported here so that client code can
write ``from orbiter import DormandPrince, create_ode``.
"""

from .dynamics import ODE, create_ode
from .integrators import (DORMAND_PRINCE_45, GLOBAL_NORM_CONFIG,
                          PERIODIC_CONFIG, DormandPrince, EmbeddedTableau,
                          FixedStepRK, IntegratorConfig, PeriodEndRecord,
                          PeriodicDormandPrince, RungeKutta,
                          SimulationSettings, StepControl, Trajectory)
from .linalg import Vector
from .problems import (ArenstorfOrbit, ShootingProblem, ShootingTrial,
                       harmonic_exact, harmonic_oscillator, integrate_harmonic)
from .utils.exceptions import (DimensionError, IntegrationError, OrbiterError,
                               TableauError)

__version__ = "0.1.0"

__all__ = [
    "Vector",
    "ODE",
    "create_ode",
    "EmbeddedTableau",
    "DORMAND_PRINCE_45",
    "RungeKutta",
    "DormandPrince",
    "PeriodicDormandPrince",
    "FixedStepRK",
    "StepControl",
    "IntegratorConfig",
    "SimulationSettings",
    "GLOBAL_NORM_CONFIG",
    "PERIODIC_CONFIG",
    "Trajectory",
    "PeriodEndRecord",
    "ArenstorfOrbit",
    "ShootingProblem",
    "ShootingTrial",
    "harmonic_oscillator",
    "harmonic_exact",
    "integrate_harmonic",
    "OrbiterError",
    "DimensionError",
    "TableauError",
    "IntegrationError",
]
