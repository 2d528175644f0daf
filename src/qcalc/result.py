"""Uniform result record returned by every queueing model."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

UNSTABLE = "System unstable (ρ ≥ 1). Metrics diverge."
NEAR_ZERO_THROUGHPUT = "λeff is near zero; results may be numerically unstable."

# Display key -> attribute name, in the order results are reported.
METRIC_FIELDS: Dict[str, str] = {
    "p0": "p0",
    "pN": "pN",
    "lambdaEff": "lambda_eff",
    "lambdaLost": "lambda_lost",
    "Ls": "Ls",
    "Lq": "Lq",
    "Ws": "Ws",
    "Wq": "Wq",
    "cBar": "c_bar",
}

METRIC_LABELS: Dict[str, str] = {
    "lambdaEff": "λeff",
    "lambdaLost": "λlost",
    "cBar": "c̄",
}


@dataclass(frozen=True)
class PnTerm:
    """Steady-state probability of exactly `n` customers in the system."""

    n: int
    value: float


@dataclass(frozen=True)
class ComputationResult:
    """
    Steady-state metrics of one model evaluation.

    Every model fills every field. When `errors` is non-empty the numbers are
    divergence markers (+inf) or boundary placeholders rather than physical
    steady-state quantities; `warnings` never invalidate the result.
    """

    p0: float
    pN: Optional[float]
    pn: Tuple[PnTerm, ...]
    lambda_eff: float
    lambda_lost: float
    Ls: float
    Lq: float
    Ws: float
    Wq: float
    c_bar: float
    warnings: Tuple[str, ...] = ()
    errors: Tuple[str, ...] = ()

    @property
    def stable(self) -> bool:
        return not self.errors

    def metrics(self) -> Dict[str, Optional[float]]:
        """Scalar metrics keyed by their display names."""
        return {key: getattr(self, attr) for key, attr in METRIC_FIELDS.items()}

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def metric_label(key: str) -> str:
    return METRIC_LABELS.get(key, key)


def diverged_result(
    *,
    p0: float,
    pn: Iterable[PnTerm],
    lambda_eff: float,
    c_bar: float,
    message: str = UNSTABLE,
    pN: Optional[float] = None,
) -> ComputationResult:
    """Result for an unstable infinite-capacity queue: waiting metrics diverge."""
    return ComputationResult(
        p0=p0,
        pN=pN,
        pn=tuple(pn),
        lambda_eff=lambda_eff,
        lambda_lost=0.0,
        Ls=math.inf,
        Lq=math.inf,
        Ws=math.inf,
        Wq=math.inf,
        c_bar=c_bar,
        errors=(message,),
    )


def invalid_result(message: str, bounded: bool = True) -> ComputationResult:
    """Result for a structurally invalid configuration (no distribution exists)."""
    return ComputationResult(
        p0=0.0,
        pN=0.0 if bounded else None,
        pn=(),
        lambda_eff=0.0,
        lambda_lost=0.0,
        Ls=math.inf,
        Lq=math.inf,
        Ws=math.inf,
        Wq=math.inf,
        c_bar=0.0,
        errors=(message,),
    )
