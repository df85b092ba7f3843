import numpy as np
import pytest

from orbiter.integrators.rk import FixedStepRK
from orbiter.problems.harmonic import (harmonic_exact, harmonic_oscillator,
                                       harmonic_radius, integrate_harmonic)
from orbiter.utils.exceptions import DimensionError

TWO_PI = 2 * np.pi


def test_trace_layout():
    h = 1.0 / 32
    traj = integrate_harmonic("trapezoidal", h=h)
    assert traj.x_at(0) == 0.0
    assert traj.x_at(1) == h
    assert traj.xs[-1] >= TWO_PI
    assert traj.xs[-2] < TWO_PI
    assert np.all(traj.steps == h)
    assert traj.state_at(0) == harmonic_oscillator().y0


def test_backward_euler_spirals_inward():
    h = 1.0 / 32
    traj = integrate_harmonic("backward_euler", h=h)
    radius = harmonic_radius(traj.states)

    assert np.all(np.diff(radius) < 0.0)
    n = traj.step_count() - 1
    assert radius[-1] == pytest.approx((1.0 + h * h) ** (-n / 2), rel=1e-12)
    assert radius[-1] < 1.0


def test_trapezoidal_preserves_radius():
    traj = integrate_harmonic("trapezoidal", omega=2.0, y0=(0.5, 1.0), h=1.0 / 16, xn=10 * TWO_PI)
    radius = harmonic_radius(traj.states, omega=2.0)
    assert np.allclose(radius, radius[0], rtol=0.0, atol=1e-12)


def test_trapezoidal_is_accurate():
    traj = integrate_harmonic("trapezoidal", h=1.0 / 64)
    last = traj.step_count() - 1
    exact = harmonic_exact(traj.x_at(last))
    assert (traj.state_at(last) - exact).norm() < 1e-3


def test_symplectic_euler_first_step():
    h = 0.1
    traj = integrate_harmonic("symplectic_euler", h=h, xn=h)
    assert traj.step_count() == 2
    # Position moves with the old velocity, velocity with the new position
    assert np.allclose(traj.states[1], [1.0, -h])


def test_symplectic_euler_radius_stays_bounded():
    h = 1.0 / 32
    traj = integrate_harmonic("symplectic_euler", h=h, xn=20 * TWO_PI)
    radius = harmonic_radius(traj.states)
    assert radius.max() < 1.0 + h
    assert radius.min() > 1.0 - h


def test_explicit_euler_spirals_outward():
    h = 1.0 / 32
    traj = FixedStepRK(order=1, h=h).solve(harmonic_oscillator(), 1e-6)
    radius = harmonic_radius(traj.states)
    assert np.all(np.diff(radius) > 0.0)


def test_invalid_arguments():
    with pytest.raises(ValueError, match="Unknown"):
        integrate_harmonic("leapfrog")
    with pytest.raises(ValueError):
        integrate_harmonic("trapezoidal", h=0.0)
    with pytest.raises(ValueError):
        integrate_harmonic("trapezoidal", omega=-1.0)
    with pytest.raises(DimensionError):
        integrate_harmonic("trapezoidal", y0=(1.0, 0.0, 0.0))
