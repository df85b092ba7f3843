"""Linear algebra primitives used by the integrators."""

from .vector import Vector

__all__ = ["Vector"]
