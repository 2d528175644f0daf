"""Finite-source repair model M/M/R with K units."""

from __future__ import annotations

import math

import numpy as np

from .distribution import birth_death_probabilities, display_sequence, full_range_aggregate
from .metrics import per_customer, rho, state_space_error, throughput_warnings
from .result import ComputationResult, invalid_result


def repair_log_ratios(r: float, R: int, K: int) -> np.ndarray:
    """
    log(p_n / p_{n-1}) for n = 1..K.

    With n units down, K-n+1 were running before the failure and min(n, R)
    repairers are busy, so p_n/p_{n-1} = (K-n+1)·ρ/min(n, R). This reproduces
    C(K,n)·ρⁿ below R and C(K,n)·n!/(R!·R^(n-R))·ρⁿ above it.
    """
    n = np.arange(1, K + 1)
    return np.log(K - n + 1) + math.log(r) - np.log(np.minimum(n, R))


def mmr_repair(lam: float, mu: float, R: int, K: int) -> ComputationResult:
    """
    Machine-repair queue: K units fail at rate λ each, R repairers fix them at rate μ.

    The effective failure rate λ(K - Ls) shrinks as more units are already down.
    """
    if R > K:
        return invalid_result("Servers R must be ≤ population size K.")
    problem = state_space_error(K, "Population K")
    if problem:
        return invalid_result(problem)

    probabilities = birth_death_probabilities(repair_log_ratios(rho(lam, mu), R, K))
    totals = full_range_aggregate(probabilities, R)
    lambda_eff = lam * (K - totals.Ls)

    return ComputationResult(
        p0=float(probabilities[0]),
        pN=float(probabilities[K]),
        pn=display_sequence(probabilities),
        lambda_eff=lambda_eff,
        lambda_lost=0.0,
        Ls=totals.Ls,
        Lq=totals.Lq,
        Ws=per_customer(totals.Ls, lambda_eff),
        Wq=per_customer(totals.Lq, lambda_eff),
        c_bar=totals.busy,
        warnings=throughput_warnings(lambda_eff),
    )
