"""Simple harmonic motion ``y1'' = -omega^2 y1`` written as a first order system.

Besides the problem definition for the Runge-Kutta integrators, the module
provides three fixed-step schemes that cannot be written as explicit
tableaux.  On this linear problem each implicit update has a closed form:

- ``"symplectic_euler"``: position advanced with the old velocity, velocity
  with the new position.  The orbit radius stays bounded.
- ``"backward_euler"``: implicit Euler.  The orbit spirals inward by a factor
  ``1 / sqrt(1 + (h omega)^2)`` per step.
- ``"trapezoidal"``: implicit trapezoidal rule.  The orbit radius is
  preserved up to round-off.
"""

from typing import Sequence

import numba
import numpy as np

from orbiter.dynamics.ode import ODE
from orbiter.integrators.types import Trajectory
from orbiter.linalg.vector import Vector
from orbiter.utils.config import FASTMATH
from orbiter.utils.exceptions import DimensionError
from orbiter.utils.log_config import logger


def harmonic_oscillator(omega: float = 1.0,
                        y0: Sequence[float] = (1.0, 0.0),
                        xn: float = 2 * np.pi) -> ODE:
    """Build the harmonic oscillator problem on ``[0, xn]``.

    The state is ``(position, velocity)`` and the problem declares its period
    ``2 pi / omega``.
    """
    _check_omega(omega)
    w2 = omega * omega

    def f(x, y):
        return [y[1], -w2 * y[0]]

    return ODE(f, 0.0, xn, y0, period=2 * np.pi / omega, name="HarmonicOscillator")


def harmonic_exact(x: float, omega: float = 1.0, y0: Sequence[float] = (1.0, 0.0)) -> Vector:
    """Closed-form state of :func:`harmonic_oscillator` at *x*."""
    a, b = float(y0[0]), float(y0[1])
    cos_wx, sin_wx = np.cos(omega * x), np.sin(omega * x)
    return Vector([a * cos_wx + b / omega * sin_wx,
                   -a * omega * sin_wx + b * cos_wx])


def harmonic_radius(states: np.ndarray, omega: float = 1.0) -> np.ndarray:
    """Return ``sqrt(q^2 + (p / omega)^2)`` for every row ``(q, p)`` of *states*.

    The radius is constant along exact solutions.
    """
    states = np.atleast_2d(np.asarray(states, dtype=np.float64))
    return np.hypot(states[:, 0], states[:, 1] / omega)


@numba.njit(fastmath=FASTMATH, cache=False)
def _symplectic_euler_kernel(q, p, w2, h, n):
    out = np.empty((n + 1, 2), dtype=np.float64)
    out[0, 0] = q
    out[0, 1] = p
    for i in range(n):
        q = q + h * p
        p = p - h * w2 * q
        out[i + 1, 0] = q
        out[i + 1, 1] = p
    return out


@numba.njit(fastmath=FASTMATH, cache=False)
def _backward_euler_kernel(q, p, w2, h, n):
    out = np.empty((n + 1, 2), dtype=np.float64)
    out[0, 0] = q
    out[0, 1] = p
    denom = 1.0 + h * h * w2
    for i in range(n):
        q = (q + h * p) / denom
        p = p - h * w2 * q
        out[i + 1, 0] = q
        out[i + 1, 1] = p
    return out


@numba.njit(fastmath=FASTMATH, cache=False)
def _trapezoidal_kernel(q, p, w2, h, n):
    out = np.empty((n + 1, 2), dtype=np.float64)
    out[0, 0] = q
    out[0, 1] = p
    quarter = 0.25 * h * h * w2
    for i in range(n):
        q_prev = q
        q = (q + h * p - quarter * q) / (1.0 + quarter)
        p = p - 0.5 * h * w2 * (q_prev + q)
        out[i + 1, 0] = q
        out[i + 1, 1] = p
    return out


_SCHEMES = {
    "symplectic_euler": _symplectic_euler_kernel,
    "backward_euler": _backward_euler_kernel,
    "trapezoidal": _trapezoidal_kernel,
}


def integrate_harmonic(scheme: str,
                       omega: float = 1.0,
                       y0: Sequence[float] = (1.0, 0.0),
                       h: float = 1.0 / 64,
                       xn: float = 2 * np.pi) -> Trajectory:
    """Integrate :func:`harmonic_oscillator` with a fixed-step implicit or symplectic scheme.

    Parameters
    ----------
    scheme : {"symplectic_euler", "backward_euler", "trapezoidal"}
        Update rule.
    omega : float, default 1.0
        Angular frequency.
    y0 : sequence of float, default (1.0, 0.0)
        Initial ``(position, velocity)`` at ``x = 0``.
    h : float, default 1/64
        Step size.
    xn : float, default 2 pi
        End of the domain.  Steps are taken until ``x >= xn``.

    Returns
    -------
    :class:`~orbiter.integrators.types.Trajectory`
        Trace with ``x_i = i * h``.

    Raises
    ------
    ValueError
        If *scheme* is unknown or *h*, *xn* or *omega* is not positive.
    """
    if scheme not in _SCHEMES:
        raise ValueError(f"Unknown harmonic scheme '{scheme}', expected one of {sorted(_SCHEMES)}")
    _check_omega(omega)
    if not h > 0.0:
        raise ValueError(f"Step size must be positive, got {h}")
    if not xn > 0.0:
        raise ValueError(f"Domain end must be positive, got {xn}")
    start = Vector(y0)
    if start.size != 2:
        raise DimensionError(f"Harmonic state must have 2 components, got {start.size}")
    q0, p0 = start

    n = int(np.ceil(xn / h))
    states = _SCHEMES[scheme](q0, p0, omega * omega, h, n)
    logger.debug(f"{scheme}: {n} steps of h={h} on the harmonic oscillator")
    return Trajectory(np.arange(n + 1) * h, states, np.full(n + 1, h))


def _check_omega(omega: float) -> None:
    if not omega > 0.0:
        raise ValueError(f"Angular frequency must be positive, got {omega}")
