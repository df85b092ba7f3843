"""
Custom exceptions for the orbiter package.
"""


class OrbiterError(Exception):
    """Base exception for orbiter errors.

    Parameters
    ----------
    message : str
        The error message.
    """

    def __init__(self, message: str):
        super().__init__(message)


class DimensionError(OrbiterError, ValueError):
    """Raised when vectors or arrays of incompatible lengths are combined.

    Parameters
    ----------
    message : str
        The error message.
    """

    def __init__(self, message: str):
        super().__init__(message)


class TableauError(DimensionError):
    """Raised when a Runge-Kutta tableau has inconsistent coefficients.

    Parameters
    ----------
    message : str
        The error message.
    """

    def __init__(self, message: str):
        super().__init__(message)


class IntegrationError(OrbiterError):
    """Raised when an integration run stops before reaching the end of its domain.

    Parameters
    ----------
    message : str
        The error message.
    trajectory : :class:`~orbiter.integrators.types.Trajectory` or None, optional
        Partial trace recorded up to the failure.
    """

    def __init__(self, message: str, trajectory=None):
        super().__init__(message)
        self.trajectory = trajectory
