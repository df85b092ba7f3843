"""Provide the abstract interface for numerical ODE integrators.

References
----------
Hairer, E., Norsett, S. P., & Wanner, G. (1993). "Solving Ordinary
Differential Equations I: Non-stiff Problems".
"""

from abc import ABC, abstractmethod
from typing import Optional

from orbiter.dynamics.ode import ODE
from orbiter.integrators.types import Trajectory


class _Integrator(ABC):
    """Define the minimal interface that every concrete integrator must satisfy.

    Parameters
    ----------
    name : str
        Human-readable identifier of the method.
    **options
        Extra keyword arguments left untouched and stored in
        :attr:`~orbiter.integrators.base._Integrator.options` for later use by subclasses.

    Notes
    -----
    Subclasses *must* implement the abstract members
    :func:`~orbiter.integrators.base._Integrator.order` and
    :func:`~orbiter.integrators.base._Integrator.solve`.
    """

    def __init__(self, name: str, **options):
        self.name = name
        self.options = options

    @property
    @abstractmethod
    def order(self) -> Optional[int]:
        """Order of accuracy of the integrator.

        Returns
        -------
        int or None
            Order of the method, or None if not applicable
        """
        pass

    @abstractmethod
    def solve(self, ode: ODE, tol: float) -> Trajectory:
        """Integrate *ode* over its whole domain.

        Parameters
        ----------
        ode : :class:`~orbiter.dynamics.ode.ODE`
            Problem to integrate.
        tol : float
            Local error tolerance driving the step-size control.

        Returns
        -------
        :class:`~orbiter.integrators.types.Trajectory`
            Recorded trace of the run.
        """
        pass

    def validate_inputs(self, ode: ODE, tol: float) -> None:
        """Validate that the arguments form a consistent integration task.

        Raises
        ------
        ValueError
            If *ode* is not an :class:`~orbiter.dynamics.ode.ODE` or *tol*
            is not a positive number.
        """
        if not isinstance(ode, ODE):
            raise ValueError(f"{self.name} expects an ODE instance, got {type(ode).__name__}")
        if not tol > 0.0:
            raise ValueError(f"Tolerance must be positive, got {tol}")

    def __str__(self):
        return f"ORBITER-{self.name}"

    def __repr__(self):
        return f"{self.__class__.__name__}(name='{self.name}', options={self.options})"
