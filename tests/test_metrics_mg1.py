"""Unit tests for the Pollaczek-Khinchine M/G/1 metrics."""

import math

import pytest

from qcalc.metrics import mm1_inf
from qcalc.metrics_mg1 import mg1_pk


def test_mg1_deterministic_service():
    result = mg1_pk(1.0, 0.5, 0.0)
    assert result.errors == ()
    assert math.isclose(result.p0, 0.5)
    assert math.isclose(result.Lq, 0.25)
    assert math.isclose(result.Wq, 0.25)
    assert math.isclose(result.Ws, result.Wq + 0.5)
    assert math.isclose(result.Ls, 0.75)
    assert math.isclose(result.c_bar, 0.5)
    assert math.isclose(result.Ls, 1.0 * result.Ws)  # Little's law


def test_mg1_exponential_service_matches_mm1():
    mg1 = mg1_pk(1.0, 0.5, 0.25)
    mm1 = mm1_inf(1.0, 2.0)
    for attr in ("p0", "Ls", "Lq", "Ws", "Wq", "c_bar"):
        assert math.isclose(getattr(mg1, attr), getattr(mm1, attr), rel_tol=1e-12)


def test_mg1_pn_is_geometric_approximation():
    result = mg1_pk(1.0, 0.5, 0.0)
    for term in result.pn:
        assert math.isclose(term.value, 0.5 * 0.5**term.n)


def test_mg1_unstable():
    result = mg1_pk(2.0, 0.5, 0.1)
    assert result.errors
    for value in (result.Ls, result.Lq, result.Ws, result.Wq):
        assert value == math.inf
    assert result.p0 == 0.0
    assert all(t.value == 0.0 for t in result.pn)


def test_mg1_invalid_mean_raises():
    with pytest.raises(ValueError):
        mg1_pk(1.0, 0.0, 0.0)


def test_mg1_pn_with_geometric_tail_sums_to_one():
    result = mg1_pk(1.0, 0.6, 0.1)
    r = 0.6
    tail = result.pn[-1].value * r / (1 - r)
    assert len(result.pn) == 21
    assert math.isclose(sum(term.value for term in result.pn) + tail, 1.0, abs_tol=1e-6)
