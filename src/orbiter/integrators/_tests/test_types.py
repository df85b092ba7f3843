import numpy as np
import pandas as pd
import pytest

from orbiter.integrators.types import PeriodEndRecord, Trajectory
from orbiter.linalg.vector import Vector


@pytest.fixture
def trajectory():
    xs = [0.0, 0.5, 1.0]
    states = [[1.0, 0.0], [0.9, -0.4], [0.5, -0.8]]
    steps = [0.5, 0.5, 0.5]
    records = [PeriodEndRecord(0.0, Vector([1.0, 0.0]), 0)]
    return Trajectory(xs, states, steps, records)


def test_accessors(trajectory):
    assert trajectory.step_count() == 3
    assert len(trajectory) == 3
    assert trajectory.dim == 2
    assert trajectory.x_at(1) == 0.5
    assert trajectory.state_at(2) == Vector([0.5, -0.8])
    assert trajectory.step_size_at(0) == 0.5
    assert trajectory.last_state() == Vector([0.5, -0.8])
    assert trajectory.period_end_records()[0].index == 0


@pytest.mark.parametrize("i", [-1, 3, 100])
def test_out_of_range_index(trajectory, i):
    with pytest.raises(IndexError):
        trajectory.x_at(i)
    with pytest.raises(IndexError):
        trajectory.state_at(i)
    with pytest.raises(IndexError):
        trajectory.step_size_at(i)


def test_arrays_are_read_only(trajectory):
    with pytest.raises(ValueError):
        trajectory.xs[0] = 1.0
    with pytest.raises(ValueError):
        trajectory.states[0, 0] = 1.0
    with pytest.raises(ValueError):
        trajectory.steps[0] = 1.0


def test_period_end_records_are_copied(trajectory):
    records = trajectory.period_end_records()
    records.clear()
    assert len(trajectory.period_end_records()) == 1


def test_length_mismatch():
    with pytest.raises(ValueError):
        Trajectory([0.0, 1.0], [[1.0], [2.0]], [0.1])


def test_iteration(trajectory):
    entries = list(trajectory)
    assert len(entries) == 3
    x, state, h = entries[1]
    assert x == 0.5 and h == 0.5
    assert state == Vector([0.9, -0.4])


def test_to_df(trajectory):
    df = trajectory.to_df()
    assert list(df.columns) == ["x", "y1", "y2", "h"]
    assert df["y2"].iloc[2] == -0.8

    named = trajectory.to_df(columns=["pos", "vel"])
    assert list(named.columns) == ["x", "pos", "vel", "h"]
    with pytest.raises(ValueError):
        trajectory.to_df(columns=["only_one"])


def test_to_csv(trajectory, tmp_path):
    path = tmp_path / "out" / "trace.csv"
    trajectory.to_csv(str(path))
    df = pd.read_csv(path)
    assert list(df.columns) == ["x", "y1", "y2", "h"]
    assert np.allclose(df["x"], [0.0, 0.5, 1.0])


def test_flags_and_repr(trajectory):
    assert trajectory.completed
    assert not trajectory.diverged
    assert trajectory.floor_hits == 0
    assert "entries=3" in repr(trajectory)
