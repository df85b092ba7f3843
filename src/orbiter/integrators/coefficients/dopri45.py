"""Dormand-Prince 4(5) coefficients.

Dormand, J. R.; Prince, P. J. (1980). "A family of embedded Runge-Kutta
formulae". Journal of Computational and Applied Mathematics 6 (1): 19-26.
"""

import numpy as np

N_STAGES = 7

C = np.array([0.0, 0.2, 0.3, 0.8, 8.0/9, 1.0, 1.0], dtype=np.float64)

A = np.array([
    [0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
    [1.0/5, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
    [3.0/40, 9.0/40, 0.0, 0.0, 0.0, 0.0, 0.0],
    [44.0/45, -56.0/15, 32.0/9, 0.0, 0.0, 0.0, 0.0],
    [19372.0/6561, -25360.0/2187, 64448.0/6561, -212.0/729, 0.0, 0.0, 0.0],
    [9017.0/3168, -355.0/33, 46732.0/5247, 49.0/176, -5103.0/18656, 0.0, 0.0],
    [35.0/384, 0.0, 500.0/1113, 125.0/192, -2187.0/6784, 11.0/84, 0.0],
], dtype=np.float64)

# 4th order weights (error estimate)
B4 = np.array([
    5179.0/57600, 0.0, 7571.0/16695, 393.0/640, -92097.0/339200, 187.0/2100, 1.0/40
], dtype=np.float64)

# 5th order weights (propagated solution), equal to the last row of A
B5 = np.array([
    35.0/384, 0.0, 500.0/1113, 125.0/192, -2187.0/6784, 11.0/84, 0.0
], dtype=np.float64)
