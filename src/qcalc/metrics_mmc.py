"""Closed-form metrics for multi-server queues (M/M/c, M/M/c/N, M/M/∞)."""

from __future__ import annotations

import math

import numpy as np

from .distribution import (
    DISPLAY_CAP,
    birth_death_probabilities,
    display_sequence,
    full_range_aggregate,
    log_weights,
    server_log_ratios,
)
from .mathutils import factorial
from .metrics import per_customer, rho, state_space_error, throughput_warnings
from .result import ComputationResult, diverged_result, invalid_result


def mmc_inf(lam: float, mu: float, c: int) -> ComputationResult:
    """
    M/M/c with unlimited waiting room (Erlang-C).

    p0 = [Σ_{n<c} aⁿ/n! + aᶜ/c!·1/(1-ρ)]⁻¹ with a = λ/μ and ρ = a/c. The terms are
    evaluated in log space so large server counts do not overflow.
    """
    problem = state_space_error(c, "Servers c")
    if problem:
        return invalid_result(problem, bounded=False)

    a = rho(lam, mu)
    r = a / c
    if r >= 1.0:
        return diverged_result(
            p0=0.0,
            pn=display_sequence([0.0] * (DISPLAY_CAP + 1)),
            lambda_eff=lam,
            c_bar=a,
        )

    # States beyond c follow p_c·ρ^(n-c), the same ratio rule used by server_log_ratios.
    top = max(c, DISPLAY_CAP)
    weights = np.exp(log_weights(server_log_ratios(a, c, top)))
    norm = weights[:c].sum() + weights[c] / (1.0 - r)
    probabilities = weights / norm
    pc = float(probabilities[c])

    Lq = pc * r / (1.0 - r) ** 2
    Wq = Lq / lam if lam > 0 else 0.0
    return ComputationResult(
        p0=float(probabilities[0]),
        pN=None,
        pn=display_sequence(probabilities),
        lambda_eff=lam,
        lambda_lost=0.0,
        Ls=Lq + a,
        Lq=Lq,
        Ws=Wq + 1.0 / mu,
        Wq=Wq,
        c_bar=a,
    )


def mmc_n(lam: float, mu: float, c: int, N: int) -> ComputationResult:
    """
    M/M/c with room for N customers in total (N ≥ c).

    Aggregates always sum over the whole range 0..N; only the reported `pn`
    list stops at n = 20.
    """
    if N < c:
        return invalid_result("Capacity N must be ≥ c.")
    problem = state_space_error(N, "Capacity N")
    if problem:
        return invalid_result(problem)

    a = rho(lam, mu)
    probabilities = birth_death_probabilities(server_log_ratios(a, c, N))
    totals = full_range_aggregate(probabilities, c)
    pN = float(probabilities[N])
    lambda_eff = lam * (1.0 - pN)

    return ComputationResult(
        p0=float(probabilities[0]),
        pN=pN,
        pn=display_sequence(probabilities),
        lambda_eff=lambda_eff,
        lambda_lost=lam * pN,
        Ls=totals.Ls,
        Lq=totals.Lq,
        Ws=per_customer(totals.Ls, lambda_eff),
        Wq=per_customer(totals.Lq, lambda_eff),
        c_bar=totals.Ls - totals.Lq,
        warnings=throughput_warnings(lambda_eff),
    )


def mminf(lam: float, mu: float) -> ComputationResult:
    """M/M/∞: every customer is served at once, occupancy is Poisson(λ/μ)."""
    a = rho(lam, mu)
    p0 = math.exp(-a)
    if p0 > 0:
        values = [p0 * a**n / factorial(n) for n in range(DISPLAY_CAP + 1)]
    else:
        values = [0.0] * (DISPLAY_CAP + 1)

    return ComputationResult(
        p0=p0,
        pN=None,
        pn=display_sequence(values),
        lambda_eff=lam,
        lambda_lost=0.0,
        Ls=a,
        Lq=0.0,
        Ws=1.0 / mu,
        Wq=0.0,
        c_bar=a,
    )
