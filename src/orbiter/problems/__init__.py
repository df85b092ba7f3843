"""Ready-made problems: harmonic motion, the Arenstorf orbit and a shooting problem."""

from .arenstorf import (ARENSTORF_MU, ARENSTORF_PERIOD, ARENSTORF_STATE,
                        ArenstorfOrbit)
from .harmonic import (harmonic_exact, harmonic_oscillator, harmonic_radius,
                       integrate_harmonic)
from .shooting import ShootingProblem, ShootingTrial, initial_guess, shoot

__all__ = [
    "harmonic_oscillator",
    "harmonic_exact",
    "harmonic_radius",
    "integrate_harmonic",
    "ArenstorfOrbit",
    "ARENSTORF_MU",
    "ARENSTORF_STATE",
    "ARENSTORF_PERIOD",
    "ShootingProblem",
    "ShootingTrial",
    "initial_guess",
    "shoot",
]
