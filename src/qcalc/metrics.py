"""Performance metrics for single-server Markovian queues."""

from __future__ import annotations

import math
from typing import Optional, Tuple

from .distribution import (
    birth_death_probabilities,
    display_sequence,
    full_range_aggregate,
    geometric_sequence,
    server_log_ratios,
)
from .result import NEAR_ZERO_THROUGHPUT, ComputationResult, diverged_result, invalid_result

MAX_STATES = 100_000
THROUGHPUT_FLOOR = 1e-6


def rho(lam: float, mu: float) -> float:
    """Return the traffic intensity λ/μ validating the input domain."""
    if lam < 0:
        raise ValueError("Arrival rate lam must be non-negative.")
    if mu <= 0:
        raise ValueError("Service rate mu must be strictly positive.")
    return lam / mu


def relative_error(value: float, reference_value: float) -> float:
    """Return |value-ref| / ref guarding division by zero."""
    if reference_value == 0:
        return 0.0 if value == 0 else float("inf")
    if math.isinf(value) or math.isinf(reference_value):
        return 0.0 if value == reference_value else float("inf")
    return abs(value - reference_value) / abs(reference_value)


def state_space_error(top: int, name: str) -> Optional[str]:
    """Message when a capacity/population would make the state space unreasonably large."""
    if top > MAX_STATES:
        return f"{name} exceeds the supported limit of {MAX_STATES} states."
    return None


def per_customer(total: float, lambda_eff: float) -> float:
    """Little's law time for a finite queue; infinite when nothing gets in."""
    return total / lambda_eff if lambda_eff > 0 else math.inf


def throughput_warnings(lambda_eff: float) -> Tuple[str, ...]:
    return (NEAR_ZERO_THROUGHPUT,) if lambda_eff < THROUGHPUT_FLOOR else ()


def mm1_inf(lam: float, mu: float) -> ComputationResult:
    """
    M/M/1 with unlimited capacity.

    An unstable system (ρ ≥ 1) still reports p0 = 1 - ρ, which may be negative;
    the `pn` list is then built from p0 clamped at zero.
    """
    r = rho(lam, mu)
    p0 = 1.0 - r
    pn = display_sequence(geometric_sequence(max(p0, 0.0), r))
    if r >= 1.0:
        return diverged_result(p0=p0, pn=pn, lambda_eff=lam, c_bar=r)

    return ComputationResult(
        p0=p0,
        pN=None,
        pn=pn,
        lambda_eff=lam,
        lambda_lost=0.0,
        Ls=r / p0,
        Lq=(r * r) / p0,
        Ws=1.0 / (mu - lam),
        Wq=lam / (mu * (mu - lam)),
        c_bar=r,
    )


def mm1_n(lam: float, mu: float, N: int) -> ComputationResult:
    """
    M/M/1 with room for at most N customers; arrivals finding it full are lost.

    The distribution is normalized in log space over 0..N, so loads at or near
    ρ = 1 and heavily overloaded chains need no special-case formulas.
    """
    problem = state_space_error(N, "Capacity N")
    if problem:
        return invalid_result(problem)

    r = rho(lam, mu)
    probabilities = birth_death_probabilities(server_log_ratios(r, 1, N))
    totals = full_range_aggregate(probabilities, 1)
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
        c_bar=totals.busy,
        warnings=throughput_warnings(lambda_eff),
    )
