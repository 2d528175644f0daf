"""Unit tests for the single-server M/M/1 and M/M/1/N metrics."""

import math

import pytest

from qcalc.metrics import mm1_inf, mm1_n, relative_error, rho
from qcalc.result import NEAR_ZERO_THROUGHPUT


def test_rho_basic_value():
    assert math.isclose(rho(0.5, 1.0), 0.5)


def test_rho_requires_positive_mu():
    with pytest.raises(ValueError):
        rho(0.5, 0.0)


def test_relative_error_guard_zero_reference():
    assert relative_error(0.0, 0.0) == 0.0
    assert math.isinf(relative_error(1.0, 0.0))
    assert relative_error(math.inf, math.inf) == 0.0


def test_mm1_inf_matches_known_case():
    result = mm1_inf(1.0, 2.0)
    assert result.errors == ()
    assert math.isclose(result.p0, 0.5)
    assert math.isclose(result.Ls, 1.0)
    assert math.isclose(result.Lq, 0.5)
    assert math.isclose(result.Ws, 1.0)
    assert math.isclose(result.Wq, 0.5)
    assert math.isclose(result.c_bar, 0.5)
    assert result.pN is None
    assert result.lambda_eff == 1.0
    assert result.lambda_lost == 0.0
    assert math.isclose(result.Ls, 1.0 * result.Ws)  # Little's law


def test_mm1_inf_pn_is_geometric_and_truncated():
    result = mm1_inf(1.0, 2.0)
    assert [term.n for term in result.pn] == list(range(21))
    assert math.isclose(result.pn[3].value, 0.5 * 0.5**3)
    # Untruncated total: displayed mass plus the geometric tail beyond n = 20.
    tail = result.pn[-1].value * 0.5 / (1 - 0.5)
    assert math.isclose(sum(t.value for t in result.pn) + tail, 1.0, abs_tol=1e-6)


@pytest.mark.parametrize("lam, mu", [(3.0, 2.0), (2.0, 2.0)])
def test_mm1_inf_unstable_diverges(lam, mu):
    result = mm1_inf(lam, mu)
    assert result.errors
    for value in (result.Ls, result.Lq, result.Ws, result.Wq):
        assert value == math.inf
    assert math.isclose(result.p0, 1.0 - lam / mu)
    assert all(term.value == 0.0 for term in result.pn)


def test_mm1_n_critical_load_is_uniform():
    result = mm1_n(2.0, 2.0, 4)
    assert math.isclose(result.p0, 0.2)
    assert math.isclose(result.Ls, 2.0)
    assert math.isclose(result.pN, 0.2)
    assert math.isclose(result.lambda_eff, 1.6)
    assert math.isclose(result.lambda_lost, 0.4)
    assert math.isclose(result.Lq, 1.2)
    assert len(result.pn) == 5
    assert result.errors == ()


def test_mm1_n_light_load_matches_direct_sum():
    result = mm1_n(1.0, 2.0, 3)
    weights = [0.5**n for n in range(4)]
    probs = [w / sum(weights) for w in weights]
    assert math.isclose(result.p0, probs[0])
    assert math.isclose(result.pN, probs[3])
    assert math.isclose(result.Ls, sum(n * p for n, p in enumerate(probs)))
    assert math.isclose(result.c_bar, 1 - probs[0])
    assert math.isclose(result.Ls, result.lambda_eff * result.Ws)


@pytest.mark.parametrize("lam", [1 - 2e-9, 1 - 1e-8, 1 - 1e-6, 1 + 1e-8, 1 + 1e-6])
def test_mm1_n_near_critical_load_matches_direct_sum(lam):
    N = 4
    weights = [lam**n for n in range(N + 1)]
    probs = [w / sum(weights) for w in weights]
    expected_ls = sum(n * p for n, p in enumerate(probs))

    result = mm1_n(lam, 1.0, N)
    assert 0.0 <= result.Ls <= N
    assert math.isclose(result.Ls, expected_ls, rel_tol=1e-9)
    assert math.isclose(result.Lq, expected_ls - (1 - probs[0]), rel_tol=1e-9)
    assert math.isclose(result.Ws, result.Ls / result.lambda_eff, rel_tol=1e-12)


@pytest.mark.parametrize("lam, mu, N", [(1.0, 2.0, 5), (2.0, 2.0, 7), (5.0, 2.0, 20)])
def test_mm1_n_pn_sums_to_one(lam, mu, N):
    result = mm1_n(lam, mu, N)
    assert len(result.pn) == N + 1
    assert math.isclose(sum(term.value for term in result.pn), 1.0, abs_tol=1e-6)


def test_mm1_n_overloaded_matches_direct_sum():
    result = mm1_n(4.0, 2.0, 3)
    assert math.isclose(result.p0, 1 / 15)
    assert math.isclose(result.pN, 8 / 15)
    assert math.isclose(result.Ls, 34 / 15)
    assert math.isclose(result.lambda_lost, 4.0 * 8 / 15)


def test_mm1_n_aggregates_use_states_beyond_display():
    lam, mu, N = 1.9, 2.0, 60
    result = mm1_n(lam, mu, N)
    r = lam / mu
    weights = [r**n for n in range(N + 1)]
    probs = [w / sum(weights) for w in weights]

    assert len(result.pn) == 21
    assert math.isclose(sum(probs), 1.0, abs_tol=1e-9)
    assert math.isclose(result.Ls, sum(n * p for n, p in enumerate(probs)), rel_tol=1e-9)
    assert math.isclose(result.lambda_eff, lam * (1 - probs[N]), rel_tol=1e-9)
    assert math.isclose(result.c_bar, 1 - probs[0], rel_tol=1e-9)


def test_mm1_n_large_overloaded_capacity_stays_finite():
    result = mm1_n(4.0, 2.0, 5000)
    for value in (result.p0, result.pN, result.Ls, result.Lq, result.Ws, result.Wq, result.c_bar):
        assert math.isfinite(value)
    assert math.isclose(result.pN, 0.5, rel_tol=1e-9)
    assert math.isclose(result.Ls, 4999.0, rel_tol=1e-9)


def test_mm1_n_near_zero_throughput_is_a_warning():
    result = mm1_n(1e-7, 1.0, 5)
    assert result.errors == ()
    assert result.warnings == (NEAR_ZERO_THROUGHPUT,)


def test_mm1_n_rejects_huge_state_space():
    result = mm1_n(1.0, 2.0, 10**7)
    assert result.errors
    assert result.Ls == math.inf
    assert result.pn == ()
