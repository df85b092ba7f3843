"""Provide the Butcher tableau value object for explicit Runge-Kutta methods.

An embedded method of ``s`` stages is described by a strictly lower
triangular stage matrix ``A`` (``s x s``), two weight vectors ``b4`` and
``b5`` yielding solution estimates of different order, and the node vector
``c``.  Non-embedded schemes are expressed with identical weight vectors.
"""

from dataclasses import dataclass, field

import numpy as np

from orbiter.integrators.coefficients import classic
from orbiter.integrators.coefficients import dopri45
from orbiter.utils.exceptions import TableauError


def _frozen(values, name: str) -> np.ndarray:
    try:
        arr = np.array(values, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise TableauError(f"Tableau entry '{name}' is not a numeric array: {exc}") from exc
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class EmbeddedTableau:
    """Coefficients of an explicit (embedded) Runge-Kutta method.

    Parameters
    ----------
    A : array_like of shape (s, s)
        Strictly lower triangular stage matrix.
    b4 : array_like of shape (s,)
        Weights of the lower order solution.
    b5 : array_like of shape (s,)
        Weights of the higher order solution, the one propagated.
    c : array_like of shape (s,)
        Nodes, as fractions of the step size.
    name : str, default "custom"
        Identifier of the method.
    order : int, default 5
        Formal order of the propagated solution.

    Raises
    ------
    :class:`~orbiter.utils.exceptions.TableauError`
        If ``A`` is not square, its size disagrees with ``c``, ``b4`` or
        ``b5``, or it has non-zero entries on or above the diagonal.
    """

    A: np.ndarray
    b4: np.ndarray
    b5: np.ndarray
    c: np.ndarray
    name: str = "custom"
    order: int = 5
    embedded: bool = field(init=False)

    def __post_init__(self):
        A = _frozen(self.A, "A")
        b4 = _frozen(self.b4, "b4")
        b5 = _frozen(self.b5, "b5")
        c = _frozen(self.c, "c")

        if A.ndim != 2 or A.shape[0] != A.shape[1]:
            raise TableauError(f"Stage matrix A must be square, got shape {A.shape}")
        s = A.shape[0]
        if s == 0:
            raise TableauError("Tableau must have at least one stage")
        if c.shape != (s,):
            raise TableauError(f"Node vector c has shape {c.shape}, expected ({s},)")
        if b4.shape != (s,) or b5.shape != (s,):
            raise TableauError(
                f"Weight vectors must have shape ({s},), got b4 {b4.shape} and b5 {b5.shape}"
            )
        if np.any(np.triu(A) != 0.0):
            raise TableauError("Stage matrix A must be strictly lower triangular (explicit method)")

        object.__setattr__(self, "A", A)
        object.__setattr__(self, "b4", b4)
        object.__setattr__(self, "b5", b5)
        object.__setattr__(self, "c", c)
        object.__setattr__(self, "embedded", not np.array_equal(b4, b5))

    @classmethod
    def fixed(cls, A, b, c, name: str = "custom", order: int = 4) -> "EmbeddedTableau":
        """Build a tableau for a non-embedded scheme (``b4 == b5 == b``)."""
        return cls(A, b, b, c, name=name, order=order)

    @property
    def stages(self) -> int:
        """Number of stages ``s``."""
        return self.A.shape[0]

    def __repr__(self) -> str:
        return f"EmbeddedTableau(name='{self.name}', stages={self.stages}, order={self.order})"


DORMAND_PRINCE_45 = EmbeddedTableau(
    dopri45.A, dopri45.B4, dopri45.B5, dopri45.C, name="DormandPrince45", order=5
)

EULER = EmbeddedTableau.fixed(classic.EULER_A, classic.EULER_B, classic.EULER_C, name="Euler", order=1)

MIDPOINT = EmbeddedTableau.fixed(
    classic.MIDPOINT_A, classic.MIDPOINT_B, classic.MIDPOINT_C, name="Midpoint", order=2
)

HEUN = EmbeddedTableau.fixed(classic.HEUN_A, classic.HEUN_B, classic.HEUN_C, name="Heun", order=2)

RK4 = EmbeddedTableau.fixed(classic.RK4_A, classic.RK4_B, classic.RK4_C, name="RK4", order=4)
