"""Provide the ODE problem definition consumed by the integrators.

A problem couples an injected derivative function ``f(x, y)`` with its
initial state and the bounds of the independent variable.  Periodic problems
additionally declare the length of their period.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Union

import numpy as np

from orbiter.linalg.vector import Vector
from orbiter.utils.exceptions import DimensionError


@dataclass(frozen=True)
class ODE:
    """Initial value problem ``y' = f(x, y)``, ``y(x0) = y0`` on ``[x0, xn]``.

    Parameters
    ----------
    f : Callable[[float, numpy.ndarray], array_like]
        Derivative function.  It receives the independent variable and the
        state as a ``float64`` array and returns the derivative as any
        one-dimensional array-like of the same length.
    x0, xn : float
        Start and end of the domain of the independent variable.
    y0 : :class:`~orbiter.linalg.vector.Vector` or sequence of float
        Initial state.
    period : float or None, default None
        Known period length for periodic problems.
    name : str, default "ODE"
        Human readable identifier.

    Raises
    ------
    ValueError
        If ``xn <= x0`` or the period is not positive.
    """

    f: Callable[[float, np.ndarray], Sequence[float]]
    x0: float
    xn: float
    y0: Vector
    period: Optional[float] = None
    name: str = "ODE"

    def __post_init__(self):
        object.__setattr__(self, "y0", Vector(self.y0))
        object.__setattr__(self, "x0", float(self.x0))
        object.__setattr__(self, "xn", float(self.xn))
        if not self.xn > self.x0:
            raise ValueError(f"Domain end xn={self.xn} must lie above x0={self.x0}")
        if self.period is not None:
            object.__setattr__(self, "period", float(self.period))
            if not self.period > 0.0:
                raise ValueError(f"Period must be positive, got {self.period}")

    @property
    def dim(self) -> int:
        """Dimension of the state space."""
        return self.y0.size

    def rhs(self, x: float, y: np.ndarray) -> np.ndarray:
        """Evaluate the derivative and check its dimension.

        Returns
        -------
        numpy.ndarray
            Derivative as a ``float64`` array of length :attr:`dim`.

        Raises
        ------
        :class:`~orbiter.utils.exceptions.DimensionError`
            If *f* returns a derivative of the wrong shape.
        """
        dy = np.asarray(self.f(x, y), dtype=np.float64)
        if dy.shape != (self.dim,):
            raise DimensionError(
                f"Derivative of '{self.name}' has shape {dy.shape}, expected ({self.dim},)"
            )
        return dy

    def with_domain_end(self, xn: float) -> "ODE":
        """Return a copy of the problem integrated up to *xn*."""
        return ODE(self.f, self.x0, xn, self.y0, self.period, self.name)

    def __repr__(self) -> str:
        return (f"ODE(name='{self.name}', dim={self.dim}, x0={self.x0}, "
                f"xn={self.xn}, period={self.period})")


def create_ode(f: Callable[[float, np.ndarray], Sequence[float]],
               x0: float,
               xn: float,
               y0: Union[Vector, Sequence[float]],
               period: Optional[float] = None,
               name: str = "ODE") -> ODE:
    return ODE(f, x0, xn, y0, period, name)
