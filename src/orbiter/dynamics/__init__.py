"""Definitions of ODE problems consumed by the integrators."""

from .ode import ODE, create_ode

__all__ = ["ODE", "create_ode"]
