"""Small numeric primitives shared by the queueing formulas."""

from __future__ import annotations

import math

NEAR_UNITY = 1e-9


def factorial(n: int) -> float:
    """Return n! as a float, or NaN when n is negative."""
    if n < 0:
        return math.nan
    res = 1.0
    for i in range(2, int(n) + 1):
        res *= i
    return res


def geometric_sum(r: float, terms: int) -> float:
    """
    Return 1 + r + r² + ... + r^(terms-1).

    The closed form divides by 1-r, so ratios within 1e-9 of one fall back to the
    limit value `terms`.
    """
    if terms <= 0:
        return 0.0
    if abs(r - 1.0) < NEAR_UNITY:
        return float(terms)
    return (1.0 - r**terms) / (1.0 - r)


def combination(n: int, k: int) -> float:
    """Binomial coefficient C(n, k) via the multiplicative formula."""
    if k < 0 or k > n:
        return 0.0
    if k == 0 or k == n:
        return 1.0
    k = min(k, n - k)
    num = 1.0
    den = 1.0
    for i in range(1, k + 1):
        num *= n - (k - i)
        den *= i
    return num / den
