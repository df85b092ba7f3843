"""Provide the explicit Runge-Kutta integration engine.

One engine, :class:`RungeKutta`, drives every method of the package.  It is
parameterised by an :class:`~orbiter.integrators.tableau.EmbeddedTableau` and
an :class:`~orbiter.integrators.configs.IntegratorConfig` selecting the
step-size control policy, the step bounds, the divergence guard and the
period-end correction.  Small factories build the configurations used in
practice.

References
----------
Hairer, E.; Norsett, S.; Wanner, G. (1993). "Solving Ordinary Differential
Equations I".

Dormand, J. R.; Prince, P. J. (1980). "A family of embedded Runge-Kutta
formulae".
"""

from typing import Callable, List, Optional

import numpy as np

from orbiter.dynamics.ode import ODE
from orbiter.integrators.base import _Integrator
from orbiter.integrators.configs import (FIXED_STEP_CONFIG, GLOBAL_NORM_CONFIG,
                                         PERIODIC_CONFIG, IntegratorConfig,
                                         StepControl)
from orbiter.integrators.kernels import (component_factors_kernel,
                                         stage_state_kernel,
                                         weighted_advance_kernel)
from orbiter.integrators.tableau import (DORMAND_PRINCE_45, EULER, HEUN, RK4,
                                         EmbeddedTableau)
from orbiter.integrators.types import PeriodEndRecord, Trajectory
from orbiter.linalg.vector import Vector
from orbiter.utils.exceptions import (DimensionError, IntegrationError,
                                       TableauError)
from orbiter.utils.log_config import logger

StepHook = Callable[[float, Vector, float], None]


class RungeKutta(_Integrator):
    """Explicit Runge-Kutta integrator with optional adaptive step control.

    Parameters
    ----------
    tableau : :class:`~orbiter.integrators.tableau.EmbeddedTableau`, default DORMAND_PRINCE_45
        Coefficients of the method.  Step control requires an embedded
        tableau (``b4 != b5``).
    config : :class:`~orbiter.integrators.configs.IntegratorConfig`, default GLOBAL_NORM_CONFIG
        Run configuration.
    name : str, optional
        Identifier, defaults to the tableau name.
    **options
        Stored untouched in :attr:`options`.

    Notes
    -----
    Every step evaluates the stages at the current ``(x, y, h)``, lets the
    step-control policy adjust ``h`` (recomputing the stages after every
    change), then accepts the state advanced with the ``b5`` weights.

    The two adaptive policies differ on purpose.  The global-norm policy
    stops refining as soon as the error falls inside its acceptance band and
    force-accepts at the floor ``h_min``.  The per-component policy always
    performs ``max_adjustments`` refinements and accepts whatever step
    results, without any acceptance test.

    An instance keeps the state of its last run and must not be shared
    between threads.

    Examples
    --------
    >>> ode = create_ode(lambda x, y: [y[1], -y[0]], 0.0, 2 * np.pi, [1.0, 0.0])
    >>> traj = DormandPrince().solve(ode, 1e-8)
    >>> traj.x_at(traj.step_count() - 1) >= 2 * np.pi
    True
    """

    def __init__(self,
                 tableau: EmbeddedTableau = DORMAND_PRINCE_45,
                 config: IntegratorConfig = GLOBAL_NORM_CONFIG,
                 name: Optional[str] = None,
                 **options):
        if not isinstance(tableau, EmbeddedTableau):
            raise TableauError(f"Expected an EmbeddedTableau, got {type(tableau).__name__}")
        if config.step_control is not StepControl.OFF and not tableau.embedded:
            raise ValueError(
                f"Step control {config.step_control.value} requires an embedded tableau; "
                f"'{tableau.name}' has identical weight vectors"
            )
        super().__init__(name or tableau.name, **options)
        self._tableau = tableau
        self._config = config

        # Writable working copies of the coefficients for the kernels.
        self._A = np.array(tableau.A, dtype=np.float64)
        self._b4 = np.array(tableau.b4, dtype=np.float64)
        self._b5 = np.array(tableau.b5, dtype=np.float64)
        self._c = np.array(tableau.c, dtype=np.float64)
        self._s = tableau.stages

        self._hooks: List[StepHook] = []
        self._trajectory: Optional[Trajectory] = None

    @property
    def order(self) -> int:
        return self._tableau.order

    @property
    def tableau(self) -> EmbeddedTableau:
        return self._tableau

    @property
    def config(self) -> IntegratorConfig:
        return self._config

    @property
    def trajectory(self) -> Trajectory:
        """Trace of the last run."""
        return self._require_trajectory()

    def add_step_hook(self, hook: StepHook) -> None:
        """Register ``hook(x, state, h)``, called after every accepted step."""
        self._hooks.append(hook)

    def remove_step_hook(self, hook: StepHook) -> None:
        self._hooks.remove(hook)

    def solve(self, ode: ODE, tol: float) -> Trajectory:
        """Integrate *ode* from ``x0`` until ``x >= xn``.

        Parameters
        ----------
        ode : :class:`~orbiter.dynamics.ode.ODE`
            Problem to integrate.  Must declare a period when the
            configuration enables the period-end correction.
        tol : float
            Local error tolerance.

        Returns
        -------
        :class:`~orbiter.integrators.types.Trajectory`
            Trace of the run, also available through the accessors of this
            integrator until the next call.

        Raises
        ------
        :class:`~orbiter.utils.exceptions.IntegrationError`
            If the step budget is exhausted before reaching ``xn`` or the
            state or step size stops being finite.  The partial trace is
            attached to the exception.
        """
        self.validate_inputs(ode, tol)
        if self._config.period_correction and ode.period is None:
            raise ValueError(f"Period-end correction requires a period, '{ode.name}' declares none")
        component = self._config.divergence_component
        if self._config.divergence_threshold is not None and not 0 <= component < ode.dim:
            raise DimensionError(
                f"Divergence guard watches component {component}, '{ode.name}' has dimension {ode.dim}"
            )

        self._ode = ode
        self._tol = float(tol)
        self._prepare()
        logger.debug(
            f"{self.name}: integrating '{ode.name}' over [{ode.x0}, {ode.xn}] "
            f"(tol={self._tol:g}, control={self._config.step_control.value})"
        )
        self._run()
        logger.debug(f"{self.name}: finished after {self._trajectory.step_count() - 1} steps")
        return self._trajectory

    def step_count(self) -> int:
        return self._require_trajectory().step_count()

    def x_at(self, i: int) -> float:
        return self._require_trajectory().x_at(i)

    def state_at(self, i: int) -> Vector:
        return self._require_trajectory().state_at(i)

    def step_size_at(self, i: int) -> float:
        return self._require_trajectory().step_size_at(i)

    def period_end_records(self) -> List[PeriodEndRecord]:
        return self._require_trajectory().period_end_records()

    def _require_trajectory(self) -> Trajectory:
        if self._trajectory is None:
            err = "Trajectory not computed. Please call solve() first."
            logger.error(err)
            raise ValueError(err)
        return self._trajectory

    def _prepare(self) -> None:
        ode = self._ode
        self._x = ode.x0
        self._y = ode.y0.to_numpy()
        self._h = self._config.h_init
        self._k = np.zeros((self._s, ode.dim), dtype=np.float64)

        self._xs = [self._x]
        self._ys = [self._y]
        self._hs = [self._h]

        self._trajectory = None
        self._diverged = False
        self._floor_hits = 0
        self._period_nr = 1
        self._period_ends: List[PeriodEndRecord] = []
        if self._config.period_correction:
            # First multiple of the period strictly above x0
            self._period_nr = int(np.floor(ode.x0 / ode.period)) + 1
            if self._period_nr * ode.period <= ode.x0:
                self._period_nr += 1
            elif (self._period_nr - 1) * ode.period > ode.x0:
                self._period_nr -= 1
            self._period_ends.append(PeriodEndRecord(self._x, Vector(self._y), 0))

    def _run(self) -> None:
        cfg = self._config
        xn = self._ode.xn

        for _ in range(cfg.max_steps):
            x_prev, y_prev = self._x, self._y

            self._update_coefs()
            h_taken = self._h
            if not (np.isfinite(h_taken) and h_taken > 0.0):
                self._fail(f"step size collapsed to {h_taken} at x={x_prev}")

            y_new = self._advance(self._b5)
            if not np.all(np.isfinite(y_new)):
                self._fail(f"non-finite state reached at x={x_prev + h_taken}")

            if self._diverges(y_new):
                self._diverged = True
                logger.info(
                    f"{self.name}: component {cfg.divergence_component} fell below "
                    f"{cfg.divergence_threshold} at x={x_prev + h_taken}; stopping early"
                )
                self._finish(completed=False)
                return

            self._x = x_prev + h_taken
            self._y = y_new

            if cfg.period_correction and self._x >= self._next_boundary():
                h_taken = self._land_on_period_boundary(x_prev, y_prev, h_taken)

            self._record(h_taken)
            if self._x >= xn:
                self._finish(completed=True)
                return

        self._fail(f"step budget of {cfg.max_steps} exhausted at x={self._x} before reaching xn={xn}")

    def _fail(self, reason: str) -> None:
        self._finish(completed=False)
        msg = f"{self.name}: integration of '{self._ode.name}' incomplete, {reason}"
        logger.error(msg)
        raise IntegrationError(msg, trajectory=self._trajectory)

    def _finish(self, completed: bool) -> None:
        if self._floor_hits:
            logger.warning(
                f"{self.name}: {self._floor_hits} step(s) force-accepted at the "
                f"step-size floor h_min={self._config.h_min}"
            )
        self._trajectory = Trajectory(
            self._xs,
            self._ys,
            self._hs,
            self._period_ends,
            completed=completed,
            diverged=self._diverged,
            floor_hits=self._floor_hits,
        )

    def _record(self, h: float) -> None:
        self._xs.append(self._x)
        self._ys.append(self._y)
        self._hs.append(h)
        if self._hooks:
            state = Vector(self._y)
            for hook in self._hooks:
                hook(self._x, state, h)

    def _compute_stages(self, x: float, y: np.ndarray, h: float) -> None:
        A, c, k = self._A, self._c, self._k
        for i in range(self._s):
            y_stage = stage_state_kernel(y, k, A[i], i, h)
            k[i] = self._ode.rhs(x + c[i] * h, y_stage)

    def _advance(self, b: np.ndarray) -> np.ndarray:
        return weighted_advance_kernel(self._y, self._k, b, self._h)

    def _update_coefs(self) -> None:
        self._compute_stages(self._x, self._y, self._h)
        control = self._config.step_control
        if control is StepControl.GLOBAL_NORM:
            self._control_global_norm()
        elif control is StepControl.PER_COMPONENT:
            self._control_per_component()

    def _control_global_norm(self) -> None:
        cfg = self._config
        tol = self._tol
        for _ in range(cfg.max_adjustments):
            y4 = self._advance(self._b4)
            y5 = self._advance(self._b5)
            err = float(np.linalg.norm(y4 - y5))
            if cfg.band_lower * tol < err < tol:
                return
            if err == 0.0:
                # Both estimates agree exactly, nothing to scale against.
                return
            h = self._h * (cfg.safety * (tol / err) ** cfg.exponent)
            if cfg.h_min is not None and h < cfg.h_min:
                self._h = cfg.h_min
                self._compute_stages(self._x, self._y, self._h)
                self._floor_hits += 1
                logger.debug(f"{self.name}: step floor reached at x={self._x}, force-accepting")
                return
            self._h = min(h, cfg.h_max)
            self._compute_stages(self._x, self._y, self._h)

    def _control_per_component(self) -> None:
        cfg = self._config
        for _ in range(cfg.max_adjustments):
            y4 = self._advance(self._b4)
            y5 = self._advance(self._b5)
            factors = component_factors_kernel(y4, y5, self._tol, cfg.exponent)
            h = self._h * (cfg.safety * float(factors.min()))
            if h > cfg.h_max:
                h = cfg.h_max
            if not np.isfinite(h):
                # Estimates agree in every component and no ceiling is set.
                h = self._h
            if cfg.h_min is not None and h < cfg.h_min:
                h = cfg.h_min
            self._h = h
            self._compute_stages(self._x, self._y, self._h)

    def _diverges(self, y: np.ndarray) -> bool:
        threshold = self._config.divergence_threshold
        return threshold is not None and y[self._config.divergence_component] < threshold

    def _next_boundary(self) -> float:
        return self._period_nr * self._ode.period

    def _land_on_period_boundary(self, x_prev: float, y_prev: np.ndarray, h_taken: float) -> float:
        """Replace the step just taken by one ending exactly on the period boundary.

        Returns the landing step size.
        """
        boundary = self._next_boundary()
        if self._x == boundary:
            h_land = h_taken
        else:
            h_land = boundary - x_prev
            self._compute_stages(x_prev, y_prev, h_land)
            self._y = weighted_advance_kernel(y_prev, self._k, self._b5, h_land)
            self._x = boundary

        self._period_ends.append(PeriodEndRecord(float(boundary), Vector(self._y), len(self._period_ends)))
        logger.debug(f"{self.name}: period {self._period_nr} ends at x={boundary}")
        self._period_nr += 1
        self._h = self._config.period_reset_step
        return h_land


class DormandPrince:
    """Implement a factory for the Dormand-Prince 4(5) integrator with global-norm control.

    Keyword arguments override fields of
    :data:`~orbiter.integrators.configs.GLOBAL_NORM_CONFIG`.

    Examples
    --------
    >>> rk = DormandPrince()
    >>> strict = DormandPrince(h_min=1e-6, max_steps=100_000)
    """

    def __new__(cls, **overrides):
        config = GLOBAL_NORM_CONFIG.with_options(**overrides)
        return RungeKutta(DORMAND_PRINCE_45, config, name="DormandPrince45")


class PeriodicDormandPrince:
    """Implement a factory for the period-aware Dormand-Prince 4(5) integrator.

    Uses :data:`~orbiter.integrators.configs.PERIODIC_CONFIG`: per-component
    step control, divergence guard and period-end correction.  Keyword
    arguments override its fields.
    """

    def __new__(cls, **overrides):
        config = PERIODIC_CONFIG.with_options(**overrides)
        return RungeKutta(DORMAND_PRINCE_45, config, name="PeriodicDormandPrince45")


class FixedStepRK:
    """Implement a factory for fixed-step explicit Runge-Kutta schemes.

    The available orders are 1 (explicit Euler), 2 (Heun) and 4 (classical
    RK4).  Any other fixed tableau can be passed through *tableau*.

    Examples
    --------
    >>> rk4 = FixedStepRK(order=4, h=0.01)
    >>> midpoint = FixedStepRK(tableau=MIDPOINT, h=0.01)
    """
    _map = {1: EULER, 2: HEUN, 4: RK4}

    def __new__(cls, order: int = 4, h: float = 1.0 / 64,
                tableau: Optional[EmbeddedTableau] = None, **overrides):
        if tableau is None:
            if order not in cls._map:
                raise ValueError("Fixed-step RK order must be 1, 2, or 4")
            tableau = cls._map[order]
        config = FIXED_STEP_CONFIG.with_options(h_init=h, **overrides)
        return RungeKutta(tableau, config)
