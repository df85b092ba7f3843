import numpy as np
import pytest
from scipy.integrate import solve_ivp

from orbiter.integrators.configs import SimulationSettings
from orbiter.integrators.rk import DormandPrince
from orbiter.problems.arenstorf import (ARENSTORF_MU, ARENSTORF_PERIOD,
                                        ARENSTORF_STATE, ArenstorfOrbit,
                                        _arenstorf_accel)
from orbiter.problems.harmonic import harmonic_exact, harmonic_oscillator
from orbiter.problems.shooting import (ShootingProblem, initial_guess,
                                       shoot)
from orbiter.utils.exceptions import DimensionError


@pytest.fixture(scope="module")
def arenstorf_orbit():
    orbit = ArenstorfOrbit()
    orbit.calculate(SimulationSettings(tolerance=1e-9, time=2 * ARENSTORF_PERIOD))
    return orbit


def test_harmonic_problem_definition():
    ode = harmonic_oscillator(omega=2.0, y0=(0.0, 1.0), xn=3.0)
    assert ode.period == pytest.approx(np.pi)
    assert np.allclose(ode.rhs(0.0, np.array([1.0, 2.0])), [2.0, -4.0])
    with pytest.raises(ValueError):
        harmonic_oscillator(omega=0.0)


def test_harmonic_exact_solution():
    assert np.allclose(np.asarray(harmonic_exact(0.0, 2.0, (0.5, 1.0))), [0.5, 1.0])
    # Quarter period of the unit oscillator
    assert np.allclose(np.asarray(harmonic_exact(np.pi / 2)), [0.0, -1.0], atol=1e-15)


def test_arenstorf_rhs_matches_reference():
    state = np.array(ARENSTORF_STATE, dtype=np.float64)
    mu1, mu2 = ARENSTORF_MU, 1.0 - ARENSTORF_MU
    y1, y2, y3, y4 = state
    d1 = ((y1 + mu1)**2 + y2**2)**1.5
    d2 = ((y1 - mu2)**2 + y2**2)**1.5
    expected = [y3, y4,
                y1 + 2*y4 - mu2*(y1 + mu1)/d1 - mu1*(y1 - mu2)/d2,
                y2 - 2*y3 - mu2*y2/d1 - mu1*y2/d2]
    assert np.allclose(_arenstorf_accel(state, mu1), expected, rtol=1e-14)


def test_arenstorf_rejects_bad_state():
    with pytest.raises(DimensionError):
        ArenstorfOrbit(initial_state=[1.0, 0.0])
    with pytest.raises(ValueError):
        ArenstorfOrbit(mu=1.5)


def test_arenstorf_requires_calculation():
    with pytest.raises(ValueError):
        ArenstorfOrbit().rotations()


def test_arenstorf_orbit_closes(arenstorf_orbit):
    records = arenstorf_orbit.period_end_records()
    assert [r.index for r in records] == [0, 1, 2]
    start = np.asarray(records[0].state)
    for rec in records[1:]:
        assert rec.x == pytest.approx(rec.index * ARENSTORF_PERIOD, abs=1e-9)
        assert np.allclose(np.asarray(rec.state)[:2], start[:2], atol=1e-2)


def test_arenstorf_matches_scipy(arenstorf_orbit):
    traj = arenstorf_orbit.trajectory
    mu = ARENSTORF_MU
    i = traj.step_count() // 4
    ref = solve_ivp(lambda t, y: _arenstorf_accel(y, mu), (0.0, traj.x_at(i)),
                    list(ARENSTORF_STATE), method="DOP853", rtol=1e-12, atol=1e-12)
    assert np.allclose(np.asarray(traj.state_at(i)), ref.y[:, -1], atol=1e-3)


def test_arenstorf_rotations(arenstorf_orbit):
    rotations = arenstorf_orbit.rotations()
    traj = arenstorf_orbit.trajectory

    assert len(rotations) == 2
    assert all(r.shape[1] == 2 for r in rotations)
    assert sum(len(r) for r in rotations) == traj.step_count()
    # Each rotation ends on its period boundary
    assert np.allclose(rotations[0][-1], np.asarray(traj.period_end_records()[1].state)[:2])


def test_arenstorf_with_custom_integrator():
    orbit = ArenstorfOrbit(integrator=DormandPrince())
    traj = orbit.calculate(SimulationSettings(tolerance=1e-8, time=ARENSTORF_PERIOD))
    assert traj.completed
    assert traj.period_end_records() == []
    assert traj.xs[-1] >= ARENSTORF_PERIOD


def test_initial_guess():
    assert initial_guess(2.0) == -0.125
    with pytest.raises(ValueError):
        initial_guess(0.0)


def test_shooting_problem_final_value():
    c, slope = 1.0, -0.5
    problem = ShootingProblem(c, start=1.0, slope=slope)
    traj = problem.calculate(SimulationSettings(tolerance=1e-9, time=1.0))

    exact = 1.0 + slope / c * (np.exp(c) - 1.0)
    assert traj.completed
    assert traj.xs[-1] == 1.0
    assert problem.final_value() == pytest.approx(exact, abs=1e-7)
    assert not problem.trial().diverged


def test_shooting_problem_diverges():
    problem = ShootingProblem(5.0, start=1.0, slope=-10.0)
    problem.calculate(SimulationSettings(tolerance=1e-9, time=1.0))
    trial = problem.trial()

    assert trial.diverged
    assert trial.final_value >= -10.0
    assert len(problem.trajectory.period_end_records()) == 1


def test_shoot_converges_on_slope():
    trials = shoot(1.0, 30, SimulationSettings(tolerance=1e-9, time=1.0))
    assert len(trials) == 30
    assert trials[0].slope == -1.0
    assert trials[1].slope == -0.5
    # y1(1) = 1 + s (e - 1) vanishes at s = 1 / (1 - e)
    assert trials[-1].slope == pytest.approx(1.0 / (1.0 - np.e), abs=1e-6)
    assert abs(trials[-1].final_value) < 1e-5


def test_shoot_rejects_no_tries():
    with pytest.raises(ValueError):
        shoot(1.0, 0)
