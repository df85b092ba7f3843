"""Provide the integral boundary-value problem solved by shooting.

The system ``y1' = y2``, ``y2' = c y2`` starts from ``y1(0) = start`` with an
unknown slope ``y2(0)``.  The slope is refined by bisection on the sign of
``y1(1)`` until the trajectory ends close to zero.
"""

from dataclasses import dataclass
from typing import List, Optional

from orbiter.dynamics.ode import ODE
from orbiter.integrators.configs import SimulationSettings
from orbiter.integrators.rk import PeriodicDormandPrince, RungeKutta
from orbiter.integrators.types import Trajectory
from orbiter.linalg.vector import Vector
from orbiter.utils.log_config import logger


@dataclass(frozen=True)
class ShootingTrial:
    """Outcome of one shot.

    Attributes
    ----------
    slope : float
        Initial slope ``y2(0)`` tried.
    final_value : float
        First component at the last recorded point.
    diverged : bool
        Whether the divergence guard stopped the run early.
    """
    slope: float
    final_value: float
    diverged: bool


def initial_guess(c: float) -> float:
    """First slope tried for coefficient *c*, ``-1 / c**3``."""
    if c == 0.0:
        raise ValueError("Coefficient c must be non-zero")
    return -1.0 / c / c / c


class ShootingProblem:
    """One shot of the boundary-value problem for a given initial slope.

    Parameters
    ----------
    c : float
        Growth coefficient of ``y2``.
    start : float, default 1.0
        Initial value ``y1(0)``.
    slope : float, optional
        Initial slope ``y2(0)``, :func:`initial_guess` by default.
    integrator : :class:`~orbiter.integrators.rk.RungeKutta`, optional
        Integrator to use, a fresh
        :class:`~orbiter.integrators.rk.PeriodicDormandPrince` by default.
    """

    period = 1.0

    def __init__(self, c: float, start: float = 1.0, slope: Optional[float] = None,
                 integrator: Optional[RungeKutta] = None):
        self.c = float(c)
        self.start = float(start)
        self.slope = initial_guess(self.c) if slope is None else float(slope)
        self._integrator = integrator if integrator is not None else PeriodicDormandPrince()
        self._trajectory: Optional[Trajectory] = None

    def __repr__(self):
        return f"ShootingProblem(c={self.c}, start={self.start}, slope={self.slope})"

    @property
    def trajectory(self) -> Trajectory:
        if self._trajectory is None:
            err = "Shot not computed. Please call calculate() first."
            logger.error(err)
            raise ValueError(err)
        return self._trajectory

    def ode(self, time: float) -> ODE:
        c = self.c

        def f(x, y):
            return [y[1], c * y[1]]

        return ODE(f, 0.0, time, Vector([self.start, self.slope]), period=self.period,
                   name="Shooting")

    def calculate(self, settings: SimulationSettings = SimulationSettings()) -> Trajectory:
        self._trajectory = self._integrator.solve(self.ode(settings.time), settings.tolerance)
        return self._trajectory

    def final_value(self) -> float:
        """First component at the last recorded point."""
        return self.trajectory.last_state()[0]

    def trial(self) -> ShootingTrial:
        traj = self.trajectory
        return ShootingTrial(self.slope, self.final_value(), traj.diverged)


def shoot(c: float, tries: int, settings: SimulationSettings = SimulationSettings(),
          start: float = 1.0) -> List[ShootingTrial]:
    """Refine the initial slope by bisection on the sign of the final value.

    The bracket starts as ``[2 g, 0]`` with ``g`` the :func:`initial_guess`.
    A positive final value means the slope was too shallow and moves the upper
    end of the bracket, otherwise the lower end moves.

    Returns
    -------
    list of :class:`ShootingTrial`
        One entry per shot, in the order they were taken.
    """
    if tries < 1:
        raise ValueError(f"Number of tries must be at least 1, got {tries}")
    guess = initial_guess(c)
    lower, upper = 2 * guess, 0.0
    trials: List[ShootingTrial] = []
    for i in range(tries):
        problem = ShootingProblem(c, start, guess)
        problem.calculate(settings)
        trial = problem.trial()
        trials.append(trial)
        logger.info(f"shot {i}: slope = {trial.slope}, y1(end) = {trial.final_value}"
                    + (" (diverged)" if trial.diverged else ""))
        if trial.final_value > 0:
            upper = guess
        else:
            lower = guess
        guess = (lower + upper) / 2
    return trials
