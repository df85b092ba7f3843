"""Provide configuration classes for the Runge-Kutta integrators.

:class:`IntegratorConfig` captures the structure of one integration run
(step-control policy, step bounds, divergence guard, period handling).
:class:`SimulationSettings` carries the per-run inputs supplied by client
code.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

import numpy as np

from orbiter.utils.config import MAX_STEPS, TOL


class StepControl(Enum):
    """Step-size control policy.

    - ``OFF``: fixed step of :attr:`IntegratorConfig.h_init`.
    - ``GLOBAL_NORM``: one scalar error, the Euclidean norm of the difference
      between the two candidate states, with an acceptance band
      ``(band_lower * tol, tol)`` and a force-accepted floor ``h_min``.
    - ``PER_COMPONENT``: per-component scaling factors, a fixed number of
      refinements per step and no acceptance test.
    """

    OFF = "off"
    GLOBAL_NORM = "global_norm"
    PER_COMPONENT = "per_component"


@dataclass(frozen=True)
class IntegratorConfig:
    """Configuration of an adaptive Runge-Kutta run.

    Parameters
    ----------
    step_control : :class:`StepControl`, default GLOBAL_NORM
        Step-size control policy.
    h_init : float, default 1/64
        Step size the run starts with (the fixed step when control is off).
    h_min : float or None, default 1/8192
        Floor on the step size.  Under the global-norm policy reaching the
        floor force-accepts the step.  ``None`` disables the floor.
    h_max : float, default inf
        Ceiling on the step size.
    max_adjustments : int, default 10
        Number of step refinements attempted per step.
    max_steps : int, default :data:`~orbiter.utils.config.MAX_STEPS`
        Step budget; exhausting it before reaching ``xn`` is an error.
    safety : float, default 0.8
        Safety factor applied to every step update.
    exponent : float, default 0.2
        Exponent of the tolerance ratio, ``1/5`` for a 4(5) pair.
    band_lower : float, default 0.25
        Lower edge of the global-norm acceptance band, relative to ``tol``.
    divergence_threshold : float or None, default None
        Stop the run early once the tracked component falls below this value.
    divergence_component : int, default 0
        Index of the state component watched by the divergence guard.
    period_correction : bool, default False
        Land exactly on every multiple of the problem period and record the
        state there.
    period_reset_step : float, default 1/256
        Step size the run restarts with after a period boundary.
    """

    step_control: StepControl = StepControl.GLOBAL_NORM
    h_init: float = 1.0 / 64
    h_min: Optional[float] = 1.0 / 8192
    h_max: float = np.inf
    max_adjustments: int = 10
    max_steps: int = MAX_STEPS
    safety: float = 0.8
    exponent: float = 0.2
    band_lower: float = 0.25
    divergence_threshold: Optional[float] = None
    divergence_component: int = 0
    period_correction: bool = False
    period_reset_step: float = 1.0 / 256

    def __post_init__(self):
        if not isinstance(self.step_control, StepControl):
            object.__setattr__(self, "step_control", StepControl(self.step_control))
        if not self.h_init > 0.0:
            raise ValueError(f"h_init must be positive, got {self.h_init}")
        if self.h_min is not None and not self.h_min > 0.0:
            raise ValueError(f"h_min must be positive or None, got {self.h_min}")
        if not self.h_max > 0.0:
            raise ValueError(f"h_max must be positive, got {self.h_max}")
        if self.h_min is not None and self.h_min > self.h_max:
            raise ValueError(f"h_min={self.h_min} exceeds h_max={self.h_max}")
        if self.max_adjustments < 1:
            raise ValueError(f"max_adjustments must be at least 1, got {self.max_adjustments}")
        if self.max_steps < 1:
            raise ValueError(f"max_steps must be at least 1, got {self.max_steps}")
        if not self.period_reset_step > 0.0:
            raise ValueError(f"period_reset_step must be positive, got {self.period_reset_step}")

    def with_options(self, **overrides) -> "IntegratorConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **overrides)


GLOBAL_NORM_CONFIG = IntegratorConfig()

PERIODIC_CONFIG = IntegratorConfig(
    step_control=StepControl.PER_COMPONENT,
    h_init=1.0 / 512,
    h_min=None,
    h_max=1.0 / 32,
    divergence_threshold=-10.0,
    divergence_component=0,
    period_correction=True,
    period_reset_step=1.0 / 256,
)

FIXED_STEP_CONFIG = IntegratorConfig(step_control=StepControl.OFF, h_min=None)


@dataclass(frozen=True)
class SimulationSettings:
    """Per-run inputs chosen by the caller.

    Parameters
    ----------
    tolerance : float, default :data:`~orbiter.utils.config.TOL`
        Local error tolerance passed to ``solve``.
    time : float, default 1.0
        Length of the integration domain, starting from ``x0``.
    """

    tolerance: float = TOL
    time: float = 1.0

    def __post_init__(self):
        if not self.tolerance > 0.0:
            raise ValueError(f"Tolerance must be positive, got {self.tolerance}")
        if not self.time > 0.0:
            raise ValueError(f"Time must be positive, got {self.time}")
