"""Plain-text rendering of results (the copy/export payload)."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, TypeVar

from .distribution import DISPLAY_CAP
from .result import ComputationResult, metric_label

T = TypeVar("T")


def format_number(value: Optional[float]) -> str:
    """Four decimals, scientific for very small or very large magnitudes."""
    if value is None:
        return "—"
    if not math.isfinite(value):
        return "∞"
    magnitude = abs(value)
    if (magnitude != 0 and magnitude < 1e-4) or magnitude >= 1e5:
        return f"{value:.4e}"
    return f"{value:.4f}"


def format_probability(value: Optional[float]) -> str:
    if value is None:
        return "—"
    if not math.isfinite(value):
        return "∞"
    return f"{value:.6f}"


def chunk(items: Sequence[T], size: int) -> List[Sequence[T]]:
    return [items[i : i + size] for i in range(0, len(items), size)]


def results_lines(model_label: str, result: ComputationResult) -> List[str]:
    """Lines of the text export: model, scalar metrics, then pn for n ≤ 20."""
    lines = [f"Model: {model_label}"]
    for key, value in result.metrics().items():
        lines.append(f"{metric_label(key)}: {format_number(value)}")
    lines.append(f"pn (n≤{DISPLAY_CAP}):")
    lines.extend(f"p{term.n}: {format_probability(term.value)}" for term in result.pn[: DISPLAY_CAP + 1])
    return lines


def status_text(result: ComputationResult) -> str:
    if result.errors:
        return "Unstable / invalid"
    if result.warnings:
        return "Computed with warnings"
    return "Computed"
