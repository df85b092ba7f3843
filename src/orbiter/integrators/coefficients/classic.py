"""Butcher tableaux of low order fixed-step explicit schemes."""

import numpy as np

# Explicit Euler, order 1
EULER_A = np.array([[0.0]], dtype=np.float64)
EULER_B = np.array([1.0], dtype=np.float64)
EULER_C = np.array([0.0], dtype=np.float64)

# Explicit midpoint, order 2
MIDPOINT_A = np.array([
    [0.0, 0.0],
    [0.5, 0.0],
], dtype=np.float64)
MIDPOINT_B = np.array([0.0, 1.0], dtype=np.float64)
MIDPOINT_C = np.array([0.0, 0.5], dtype=np.float64)

# Heun (improved Euler), order 2
HEUN_A = np.array([
    [0.0, 0.0],
    [1.0, 0.0],
], dtype=np.float64)
HEUN_B = np.array([0.5, 0.5], dtype=np.float64)
HEUN_C = np.array([0.0, 1.0], dtype=np.float64)

# Classical Runge-Kutta, order 4
RK4_A = np.array([
    [0.0, 0.0, 0.0, 0.0],
    [0.5, 0.0, 0.0, 0.0],
    [0.0, 0.5, 0.0, 0.0],
    [0.0, 0.0, 1.0, 0.0],
], dtype=np.float64)
RK4_B = np.array([1.0/6, 1.0/3, 1.0/3, 1.0/6], dtype=np.float64)
RK4_C = np.array([0.0, 0.5, 0.5, 1.0], dtype=np.float64)
