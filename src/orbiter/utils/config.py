"""Numeric defaults shared across the package."""

FASTMATH = False  # Global flag for Numba's fastmath option

TOL = 1e-9  # Default local error tolerance for adaptive integration

MAX_STEPS = 10_000_000  # Hard cap on the number of steps of a single run

LOG_LEVEL = "INFO"  # Level passed to logging.basicConfig on import
