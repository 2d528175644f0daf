"""State distributions: full-range evaluation versus the truncated display list."""

from __future__ import annotations

from itertools import islice
from typing import Iterable, List, NamedTuple, Tuple

import numpy as np

from .result import PnTerm

DISPLAY_CAP = 20


class RangeAggregate(NamedTuple):
    """Expectations over the whole state space 0..top."""

    Ls: float
    Lq: float
    busy: float


def display_sequence(probabilities: Iterable[float], cap_at: int = DISPLAY_CAP) -> Tuple[PnTerm, ...]:
    """Return the `pn` list shown to users: states 0..cap_at (or fewer)."""
    return tuple(
        PnTerm(n=n, value=float(value))
        for n, value in enumerate(islice(probabilities, cap_at + 1))
    )


def geometric_sequence(p0: float, rho: float, max_n: int = DISPLAY_CAP) -> List[float]:
    """p0·ρⁿ for n = 0..max_n; all zeros when p0 has no mass."""
    if p0 <= 0:
        return [0.0] * (max_n + 1)
    return [p0 * rho**n for n in range(max_n + 1)]


def log_weights(log_ratios: np.ndarray) -> np.ndarray:
    """
    Unnormalized log-probabilities of a birth-death chain.

    `log_ratios[i]` is log(p_{i+1} / p_i). The result starts at state 0 and is
    shifted so that its maximum is zero, which keeps exp() finite for any N.
    """
    logs = np.concatenate(([0.0], np.cumsum(np.asarray(log_ratios, dtype=float))))
    return logs - logs.max()


def birth_death_probabilities(log_ratios: np.ndarray) -> np.ndarray:
    """Normalized stationary distribution over states 0..len(log_ratios)."""
    weights = np.exp(log_weights(log_ratios))
    return weights / weights.sum()


def server_log_ratios(offered: float, servers: int, top: int) -> np.ndarray:
    """log(p_n / p_{n-1}) = log(a / min(n, c)) for n = 1..top."""
    n = np.arange(1, top + 1)
    return np.log(offered) - np.log(np.minimum(n, servers))


def full_range_aggregate(probabilities: np.ndarray, servers: int) -> RangeAggregate:
    """Ls, Lq and expected busy servers using every state, never the display slice."""
    n = np.arange(len(probabilities))
    return RangeAggregate(
        Ls=float(np.dot(n, probabilities)),
        Lq=float(np.dot(np.maximum(n - servers, 0), probabilities)),
        busy=float(np.dot(np.minimum(n, servers), probabilities)),
    )
