import numpy as np
import pytest

from orbiter.integrators.coefficients import dopri45
from orbiter.integrators.configs import GLOBAL_NORM_CONFIG
from orbiter.integrators.rk import RungeKutta
from orbiter.integrators.tableau import (DORMAND_PRINCE_45, EULER, HEUN,
                                         MIDPOINT, RK4, EmbeddedTableau)
from orbiter.utils.exceptions import DimensionError, TableauError


def test_dormand_prince_structure():
    tab = DORMAND_PRINCE_45
    assert tab.stages == 7
    assert tab.order == 5
    assert tab.embedded
    # Row sums of A reproduce the nodes
    assert np.allclose(tab.A.sum(axis=1), tab.c, atol=1e-14)
    assert tab.b4.sum() == pytest.approx(1.0, abs=1e-14)
    assert tab.b5.sum() == pytest.approx(1.0, abs=1e-14)
    # FSAL: propagated weights equal the last row of A
    assert np.array_equal(tab.b5, tab.A[-1])


def test_dormand_prince_exact_values():
    tab = DORMAND_PRINCE_45
    assert tab.A[4, 1] == -25360.0 / 2187
    assert tab.A[5, 4] == -5103.0 / 18656
    assert tab.b4[4] == -92097.0 / 339200
    assert tab.b4[6] == 1.0 / 40
    assert tab.c[4] == 8.0 / 9
    assert np.array_equal(tab.A, dopri45.A)


@pytest.mark.parametrize("tab, order", [(EULER, 1), (MIDPOINT, 2), (HEUN, 2), (RK4, 4)])
def test_fixed_tableaux_are_consistent(tab, order):
    assert tab.order == order
    assert not tab.embedded
    assert np.array_equal(tab.b4, tab.b5)
    assert tab.b5.sum() == pytest.approx(1.0)
    assert np.allclose(tab.A.sum(axis=1), tab.c)


def test_arrays_are_read_only():
    with pytest.raises(ValueError):
        DORMAND_PRINCE_45.A[1, 0] = 0.0
    with pytest.raises(ValueError):
        DORMAND_PRINCE_45.b5[0] = 0.0


def test_non_square_matrix_rejected():
    with pytest.raises(TableauError):
        EmbeddedTableau(np.zeros((2, 3)), [0.5, 0.5], [0.5, 0.5], [0.0, 1.0])


def test_node_length_mismatch_rejected():
    A = [[0.0, 0.0], [1.0, 0.0]]
    with pytest.raises(TableauError):
        EmbeddedTableau(A, [0.5, 0.5], [0.5, 0.5], [0.0, 1.0, 1.0])


def test_weight_length_mismatch_rejected():
    A = [[0.0, 0.0], [1.0, 0.0]]
    with pytest.raises(TableauError):
        EmbeddedTableau(A, [1.0], [0.5, 0.5], [0.0, 1.0])


def test_implicit_matrix_rejected():
    A = [[0.5, 0.0], [0.5, 0.5]]
    with pytest.raises(TableauError, match="lower triangular"):
        EmbeddedTableau(A, [0.5, 0.5], [0.5, 0.5], [0.5, 1.0])


def test_non_numeric_entries_rejected():
    with pytest.raises(TableauError):
        EmbeddedTableau([["a"]], [1.0], [1.0], [0.0])


def test_tableau_error_hierarchy():
    assert issubclass(TableauError, DimensionError)
    assert issubclass(TableauError, ValueError)


def test_step_control_requires_embedded_tableau():
    with pytest.raises(ValueError, match="embedded"):
        RungeKutta(RK4, GLOBAL_NORM_CONFIG)


def test_rejects_non_tableau():
    with pytest.raises(TableauError):
        RungeKutta("dopri")
