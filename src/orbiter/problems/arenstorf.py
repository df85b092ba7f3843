"""Provide the Arenstorf periodic orbit of the restricted three-body problem.

A light body moves in the plane of two primaries of mass ratio ``mu``
(Earth-Moon).  In the rotating frame the initial state below closes on itself
after one period, tracing the classical Arenstorf orbit.

References
----------
Arenstorf, R. F. (1963). "Periodic solutions of the restricted three body
problem representing analytic continuations of Keplerian elliptic motions".

Hairer, E., Norsett, S. P., & Wanner, G. (1993). "Solving Ordinary
Differential Equations I", section II.0.
"""

from typing import List, Optional, Sequence

import numba
import numpy as np

from orbiter.dynamics.ode import ODE
from orbiter.integrators.configs import SimulationSettings
from orbiter.integrators.rk import PeriodicDormandPrince, RungeKutta
from orbiter.integrators.types import PeriodEndRecord, Trajectory
from orbiter.linalg.vector import Vector
from orbiter.utils.config import FASTMATH
from orbiter.utils.exceptions import DimensionError
from orbiter.utils.log_config import logger

ARENSTORF_MU = 0.012277471

ARENSTORF_STATE = (0.994, 0.0, 0.0, -2.00158510637908252240537862224)

ARENSTORF_PERIOD = 17.06521656015


@numba.njit(fastmath=FASTMATH, cache=False)
def _arenstorf_accel(state, mu1):
    """
    Time derivative of the planar restricted three-body state.

    Parameters
    ----------
    state : numpy.ndarray
        State ``[y1, y2, y1', y2']`` in the rotating frame.
    mu1 : float
        Mass ratio of the smaller primary.

    Returns
    -------
    numpy.ndarray
        Derivative ``[y1', y2', y1'', y2'']``.
    """
    y1, y2, y3, y4 = state[0], state[1], state[2], state[3]
    mu2 = 1.0 - mu1

    d1 = ((y1 + mu1)**2 + y2**2)**1.5
    d2 = ((y1 - mu2)**2 + y2**2)**1.5

    dy3 = y1 + 2*y4 - mu2*(y1 + mu1) / d1 - mu1*(y1 - mu2) / d2
    dy4 = y2 - 2*y3 - mu2*y2 / d1 - mu1*y2 / d2

    return np.array([y3, y4, dy3, dy4], dtype=np.float64)


class ArenstorfOrbit:
    """Arenstorf orbit integrated with the period-aware Dormand-Prince method.

    Parameters
    ----------
    initial_state : sequence of float, optional
        State ``[y1, y2, y1', y2']`` at ``x = 0``.  Defaults to
        :data:`ARENSTORF_STATE`.
    mu : float, default :data:`ARENSTORF_MU`
        Mass ratio of the smaller primary.
    integrator : :class:`~orbiter.integrators.rk.RungeKutta`, optional
        Integrator to use, a fresh
        :class:`~orbiter.integrators.rk.PeriodicDormandPrince` by default.
    """

    period = ARENSTORF_PERIOD

    def __init__(self,
                 initial_state: Optional[Sequence[float]] = None,
                 mu: float = ARENSTORF_MU,
                 integrator: Optional[RungeKutta] = None):
        self._y0 = Vector(ARENSTORF_STATE if initial_state is None else initial_state)
        if self._y0.size != 4:
            raise DimensionError(f"Arenstorf state must have 4 components, got {self._y0.size}")
        if not 0.0 < mu < 1.0:
            raise ValueError(f"Mass ratio must lie in (0, 1), got {mu}")
        self._mu = float(mu)
        self._integrator = integrator if integrator is not None else PeriodicDormandPrince()
        self._trajectory: Optional[Trajectory] = None

    def __str__(self):
        return f"ArenstorfOrbit(mu={self._mu})"

    def __repr__(self):
        return f"ArenstorfOrbit(initial_state={self._y0!r}, mu={self._mu})"

    @property
    def initial_state(self) -> Vector:
        return self._y0

    @property
    def mu(self) -> float:
        return self._mu

    @property
    def integrator(self) -> RungeKutta:
        return self._integrator

    @property
    def trajectory(self) -> Trajectory:
        if self._trajectory is None:
            err = "Orbit not computed. Please call calculate() first."
            logger.error(err)
            raise ValueError(err)
        return self._trajectory

    def ode(self, time: float) -> ODE:
        """Return the problem integrated over ``[0, time]``."""
        mu = self._mu

        def f(x, y):
            return _arenstorf_accel(y, mu)

        return ODE(f, 0.0, time, self._y0, period=self.period, name="Arenstorf")

    def calculate(self, settings: SimulationSettings = SimulationSettings()) -> Trajectory:
        """Integrate the orbit over ``[0, settings.time]``."""
        logger.info(f"Integrating {self} over {settings.time} time units (tol={settings.tolerance:g})")
        self._trajectory = self._integrator.solve(self.ode(settings.time), settings.tolerance)
        return self._trajectory

    def rotations(self) -> List[np.ndarray]:
        """Split the computed positions into one ``(m, 2)`` array per period.

        Rotation ``r`` holds the points ``(y1, y2)`` recorded after the previous
        rotation and with ``x <= (r + 1) * period``.  Splitting stops at the
        first empty rotation.
        """
        traj = self.trajectory
        xs, positions = traj.xs, traj.states[:, :2]
        out: List[np.ndarray] = []
        start = 0
        rot = 0
        while True:
            end = int(np.searchsorted(xs, (rot + 1) * self.period, side="right"))
            if end <= start:
                break
            out.append(positions[start:end])
            start = end
            rot += 1
        return out

    def period_end_records(self) -> List[PeriodEndRecord]:
        return self.trajectory.period_end_records()
