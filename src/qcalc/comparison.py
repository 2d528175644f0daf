"""Side-by-side comparison of two computed models (slots A and B)."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

import pandas as pd

from .formatting import format_number
from .metrics import relative_error
from .result import METRIC_FIELDS, ComputationResult, metric_label

SLOTS = ("A", "B")
CHART_METRICS = ("Ls", "Lq", "Ws", "Wq", "cBar")


@dataclass(frozen=True)
class SavedResult:
    """A computed result together with the inputs that produced it."""

    model_id: str
    model_label: str
    params: Dict[str, float]
    result: ComputationResult


@dataclass(frozen=True)
class ComparisonSlots:
    """
    Holder for at most two saved results.

    Instances are immutable: `with_slot` and `cleared` return new holders, so the
    caller decides what state survives.
    """

    A: Optional[SavedResult] = None
    B: Optional[SavedResult] = None

    def with_slot(self, slot: str, saved: Optional[SavedResult]) -> "ComparisonSlots":
        if slot not in SLOTS:
            raise KeyError(f"Slot '{slot}' is not defined. Available: {list(SLOTS)}")
        if saved is None:
            raise ValueError(f"Compute first, then set {slot}.")
        return replace(self, **{slot: saved})

    def cleared(self) -> "ComparisonSlots":
        return ComparisonSlots()

    @property
    def complete(self) -> bool:
        return self.A is not None and self.B is not None

    def both(self) -> Tuple[SavedResult, SavedResult]:
        if self.A is None or self.B is None:
            raise ValueError("Set both Model A and Model B first.")
        return self.A, self.B

    def active(self, last: Optional[SavedResult] = None) -> Optional[SavedResult]:
        """Result used for single-model export: the latest, else B, else A."""
        return last or self.B or self.A

    def status(self) -> str:
        a = self.A.model_label if self.A else "—"
        b = self.B.model_label if self.B else "—"
        return f"Model A: {a} | Model B: {b}"


def comparison_frame(slots: ComparisonSlots) -> pd.DataFrame:
    """One row per metric with both values and the relative change from A to B."""
    a, b = slots.both()
    rows = []
    for key, attr in METRIC_FIELDS.items():
        value_a = getattr(a.result, attr)
        value_b = getattr(b.result, attr)
        if value_a is None or value_b is None:
            change = float("nan")
        else:
            change = relative_error(value_b, value_a)
        rows.append(
            {
                "metric": key,
                "label": metric_label(key),
                "A": value_a,
                "B": value_b,
                "relative_change": change,
            }
        )
    return pd.DataFrame(rows)


def comparison_lines(slots: ComparisonSlots) -> List[str]:
    """Text export of both slots, one block per model."""
    lines: List[str] = []
    for name, saved in zip(SLOTS, slots.both()):
        if lines:
            lines.append("")
        lines.append(f"Model {name}: {saved.model_label}")
        for key, value in saved.result.metrics().items():
            lines.append(f"{metric_label(key)}: {format_number(value)}")
    return lines
