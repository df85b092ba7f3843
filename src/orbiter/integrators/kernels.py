"""Numba kernels combining Runge-Kutta stage derivatives.

The derivative function itself is an arbitrary Python callable and is
evaluated outside these kernels; only the array arithmetic of a step is
compiled.
"""

import numba
import numpy as np

from orbiter.utils.config import FASTMATH


@numba.njit(cache=False, fastmath=FASTMATH)
def stage_state_kernel(y, k, a_row, i, h):
    """Return ``y + sum_{j<i} (h * a_row[j]) * k[j]``, the input state of stage *i*."""
    y_stage = y.copy()
    for j in range(i):
        a_ij = a_row[j]
        if a_ij != 0.0:
            y_stage += h * a_ij * k[j]
    return y_stage


@numba.njit(cache=False, fastmath=FASTMATH)
def weighted_advance_kernel(y, k, b, h):
    """Return ``y + sum_j (h * b[j]) * k[j]``, the state advanced with weights *b*."""
    y_new = y.copy()
    for j in range(b.size):
        b_j = b[j]
        if b_j != 0.0:
            y_new += h * b_j * k[j]
    return y_new


@numba.njit(cache=False, fastmath=FASTMATH)
def component_factors_kernel(y_low, y_high, tol, exponent):
    """Return ``(tol / |y_low_i - y_high_i|) ** exponent`` for every component.

    Components whose estimates agree exactly yield ``inf``.
    """
    n = y_low.size
    out = np.empty(n, dtype=np.float64)
    for i in range(n):
        diff = abs(y_low[i] - y_high[i])
        if diff == 0.0:
            out[i] = np.inf
        else:
            out[i] = (tol / diff) ** exponent
    return out
