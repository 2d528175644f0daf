"""Pollaczek-Khinchine metrics for the M/G/1 queue."""

from __future__ import annotations

from .distribution import display_sequence, geometric_sequence
from .result import ComputationResult, diverged_result

# The P-K formula gives means only; the reported pn is the M/M/1 geometric law.
PN_APPROXIMATION_NOTE = "pn uses the M/M/1 geometric approximation p0·ρⁿ, not the exact M/G/1 distribution."


def mg1_pk(lam: float, mean_service: float, var_service: float) -> ComputationResult:
    """
    M/G/1 with general service time of mean E{t} and variance Var{t}.

    Lq = (λ²·Var{t} + ρ²) / (2(1-ρ)) with ρ = λ·E{t}; Ls is the exact P-K mean and
    does not depend on the approximate `pn` list.
    """
    if lam < 0:
        raise ValueError("Arrival rate lam must be non-negative.")
    if mean_service <= 0:
        raise ValueError("Mean service time must be strictly positive.")

    r = lam * mean_service
    p0 = max(0.0, 1.0 - r)
    pn = display_sequence(geometric_sequence(p0, r))
    if r >= 1.0:
        return diverged_result(p0=p0, pn=pn, lambda_eff=lam, c_bar=r, message="System unstable (ρ ≥ 1).")

    gap = 2.0 * (1.0 - r)
    Lq = (lam**2 * var_service + r**2) / gap
    Wq = Lq / lam if lam > 0 else 0.0
    return ComputationResult(
        p0=p0,
        pN=None,
        pn=pn,
        lambda_eff=lam,
        lambda_lost=0.0,
        Ls=r + (lam**2 * (mean_service**2 + var_service)) / gap,
        Lq=Lq,
        Ws=Wq + mean_service,
        Wq=Wq,
        c_bar=r,
    )
