"""Result containers produced by the Runge-Kutta integrators."""

import os
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from orbiter.linalg.vector import Vector
from orbiter.utils.log_config import logger


@dataclass(frozen=True)
class PeriodEndRecord:
    """State snapshot taken exactly at a period boundary.

    Attributes
    ----------
    x : float
        Independent variable, an integer multiple of the period
        (``x0`` for the initial condition).
    state : :class:`~orbiter.linalg.vector.Vector`
        State at *x*.
    index : int
        Position in the sequence of records; the initial condition has index 0.
    """
    x: float
    state: Vector
    index: int


class Trajectory:
    """Ordered trace of ``(x, y, h)`` entries recorded by one integration run.

    Index 0 holds the initial condition.  The trace is read-only: the
    arrays exposed by :attr:`xs`, :attr:`states` and :attr:`steps` cannot be
    written to.

    Parameters
    ----------
    xs : sequence of float
        Values of the independent variable, strictly increasing.
    states : sequence of array_like
        States, one per entry of *xs*.
    steps : sequence of float
        Step size that produced each entry.  Entry 0 holds the step size the
        run started with.
    period_ends : sequence of :class:`PeriodEndRecord`, optional
        Snapshots taken at period boundaries.
    completed : bool, default True
        Whether the run reached the end of its domain.
    diverged : bool, default False
        Whether the run was stopped early by the divergence guard.
    floor_hits : int, default 0
        Number of steps force-accepted at the step-size floor.
    """

    def __init__(self,
                 xs: Sequence[float],
                 states: Sequence[np.ndarray],
                 steps: Sequence[float],
                 period_ends: Sequence[PeriodEndRecord] = (),
                 *,
                 completed: bool = True,
                 diverged: bool = False,
                 floor_hits: int = 0):
        self._xs = np.asarray(xs, dtype=np.float64)
        self._states = np.asarray(states, dtype=np.float64)
        self._steps = np.asarray(steps, dtype=np.float64)
        if self._states.ndim != 2:
            raise ValueError(f"States must form a 2-D array, got shape {self._states.shape}")
        if not (len(self._xs) == len(self._states) == len(self._steps)):
            raise ValueError(
                "xs, states and steps must have the same length: "
                f"{len(self._xs)}, {len(self._states)}, {len(self._steps)}"
            )
        for arr in (self._xs, self._states, self._steps):
            arr.flags.writeable = False
        self._period_ends: Tuple[PeriodEndRecord, ...] = tuple(period_ends)
        self.completed = completed
        self.diverged = diverged
        self.floor_hits = floor_hits

    @property
    def xs(self) -> np.ndarray:
        return self._xs

    @property
    def states(self) -> np.ndarray:
        return self._states

    @property
    def steps(self) -> np.ndarray:
        return self._steps

    @property
    def dim(self) -> int:
        return self._states.shape[1]

    def step_count(self) -> int:
        """Number of recorded entries, the initial condition included."""
        return len(self._xs)

    def x_at(self, i: int) -> float:
        return float(self._xs[self._check_index(i)])

    def state_at(self, i: int) -> Vector:
        return Vector(self._states[self._check_index(i)])

    def step_size_at(self, i: int) -> float:
        return float(self._steps[self._check_index(i)])

    def period_end_records(self) -> List[PeriodEndRecord]:
        """Return the period-end snapshots in order of increasing ``x``."""
        return list(self._period_ends)

    def last_state(self) -> Vector:
        return self.state_at(self.step_count() - 1)

    def _check_index(self, i: int) -> int:
        n = len(self._xs)
        if not 0 <= i < n:
            raise IndexError(f"Trace index {i} out of range [0, {n})")
        return i

    def __len__(self) -> int:
        return len(self._xs)

    def __iter__(self) -> Iterator[Tuple[float, Vector, float]]:
        for i in range(len(self._xs)):
            yield float(self._xs[i]), Vector(self._states[i]), float(self._steps[i])

    def to_df(self, columns: Optional[Sequence[str]] = None) -> pd.DataFrame:
        """Return the trace as a DataFrame with columns ``x``, ``y1..yn``, ``h``.

        Parameters
        ----------
        columns : sequence of str, optional
            Names of the state columns.  Defaults to ``y1`` ... ``yn``.
        """
        if columns is None:
            columns = [f"y{i + 1}" for i in range(self.dim)]
        if len(columns) != self.dim:
            raise ValueError(f"Expected {self.dim} state column names, got {len(columns)}")
        data = np.column_stack((self._xs, self._states, self._steps))
        return pd.DataFrame(data, columns=["x", *columns, "h"])

    def to_csv(self, filepath: str, **kwargs) -> None:
        """Export the trace to a CSV file.

        Parameters
        ----------
        filepath : str
            Path to save the CSV file.
        **kwargs
            Additional keyword arguments passed to pandas.DataFrame.to_csv.
        """
        directory = os.path.dirname(os.path.abspath(filepath))
        os.makedirs(directory, exist_ok=True)
        kwargs.setdefault("index", False)
        self.to_df().to_csv(filepath, **kwargs)
        logger.info(f"Trajectory successfully exported to {filepath}")

    def __repr__(self) -> str:
        return (f"Trajectory(entries={len(self)}, dim={self.dim}, "
                f"completed={self.completed}, diverged={self.diverged}, "
                f"period_ends={len(self._period_ends)})")
