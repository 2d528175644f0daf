"""Tests for the two-slot comparison holder and its exports."""

import math

import pytest

from qcalc.comparison import ComparisonSlots, SavedResult, comparison_frame, comparison_lines
from qcalc.registry import compute, get_model


def saved(model_id, values):
    spec = get_model(model_id)
    return SavedResult(model_id=spec.id, model_label=spec.label, params=values, result=compute(spec.kind, values))


@pytest.fixture
def slots():
    a = saved("mm1_inf", {"lambda": 1.0, "mu": 2.0})
    b = saved("mmc_inf", {"lambda": 1.0, "mu": 2.0, "c": 2})
    return ComparisonSlots().with_slot("A", a).with_slot("B", b)


def test_with_slot_returns_new_holder():
    empty = ComparisonSlots()
    filled = empty.with_slot("A", saved("mminf", {"lambda": 1.0, "mu": 1.0}))
    assert empty.A is None
    assert filled.A is not None and filled.B is None
    assert not filled.complete


def test_with_slot_requires_a_result():
    with pytest.raises(ValueError, match="Compute first, then set B."):
        ComparisonSlots().with_slot("B", None)


def test_unknown_slot():
    with pytest.raises(KeyError):
        ComparisonSlots().with_slot("C", saved("mminf", {"lambda": 1.0, "mu": 1.0}))


def test_both_requires_two_slots():
    with pytest.raises(ValueError, match="Set both Model A and Model B first."):
        ComparisonSlots().both()


def test_active_prefers_last_then_b_then_a(slots):
    last = saved("mminf", {"lambda": 1.0, "mu": 1.0})
    assert slots.active(last) is last
    assert slots.active() is slots.B
    assert ComparisonSlots(A=slots.A).active() is slots.A
    assert ComparisonSlots().active() is None


def test_cleared(slots):
    assert slots.complete
    assert slots.cleared() == ComparisonSlots()
    assert slots.status() == "Model A: M/M/1:GD/∞/∞ | Model B: M/M/c:GD/∞/∞"
    assert ComparisonSlots().status() == "Model A: — | Model B: —"


def test_comparison_frame(slots):
    df = comparison_frame(slots)
    assert df["metric"].tolist() == ["p0", "pN", "lambdaEff", "lambdaLost", "Ls", "Lq", "Ws", "Wq", "cBar"]
    ls = df.set_index("metric").loc["Ls"]
    assert math.isclose(ls["A"], 1.0)
    assert ls["B"] < ls["A"]
    assert math.isclose(ls["relative_change"], abs(ls["B"] - 1.0))
    assert math.isnan(df.set_index("metric").loc["pN", "relative_change"])


def test_comparison_lines(slots):
    lines = comparison_lines(slots)
    assert lines[0] == "Model A: M/M/1:GD/∞/∞"
    assert lines[10] == ""
    assert lines[11] == "Model B: M/M/c:GD/∞/∞"
    assert len(lines) == 21
    assert "λeff: 1.0000" in lines
