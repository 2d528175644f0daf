"""Tests for the model catalog and the dispatch contract shared by every model."""

import math

import pytest

from qcalc.metrics_mg1 import PN_APPROXIMATION_NOTE
from qcalc.registry import MODELS, ModelKind, compute, get_model, list_models
from qcalc.result import ComputationResult

CASES = [
    ("mm1_inf", {"lambda": 1.0, "mu": 2.0}),
    ("mm1_inf", {"lambda": 3.0, "mu": 2.0}),
    ("mm1_n", {"lambda": 2.0, "mu": 2.0, "N": 4}),
    ("mm1_n", {"lambda": 5.0, "mu": 2.0, "N": 30}),
    ("mmc_inf", {"lambda": 4.0, "mu": 2.0, "c": 3}),
    ("mmc_inf", {"lambda": 4.0, "mu": 1.0, "c": 3}),
    ("mmc_n", {"lambda": 4.0, "mu": 2.0, "c": 3, "N": 25}),
    ("mmc_n", {"lambda": 1.0, "mu": 2.0, "c": 3, "N": 2}),
    ("mminf", {"lambda": 2.0, "mu": 1.0}),
    ("mmr_repair", {"lambda": 0.2, "mu": 1.0, "R": 2, "K": 6}),
    ("mmr_repair", {"lambda": 0.2, "mu": 1.0, "R": 7, "K": 6}),
    ("mg1_pk", {"lambda": 1.0, "meanService": 0.5, "varService": 0.1}),
    ("mg1_pk", {"lambda": 3.0, "meanService": 0.5, "varService": 0.1}),
]


def test_catalog_order_and_ids():
    assert list(list_models()) == [
        "mm1_inf",
        "mm1_n",
        "mmc_inf",
        "mmc_n",
        "mminf",
        "mmr_repair",
        "mg1_pk",
    ]
    assert set(MODELS) == set(ModelKind)


def test_get_model_accepts_id_or_kind():
    assert get_model("mmc_n") is get_model(ModelKind.MMC_N)
    assert get_model("mmc_n").param_ids() == ("lambda", "mu", "c", "N")
    assert get_model("mg1_pk").label == "M/G/1:GD/∞/∞"


def test_get_model_unknown_raises():
    with pytest.raises(KeyError):
        get_model("mm2_weird")


def test_parameter_rules():
    spec = get_model("mmr_repair")
    rules = {p.id: p.rules for p in spec.parameters}
    assert rules["lambda"].positive
    assert rules["K"].integer and rules["K"].min == 1
    assert get_model("mg1_pk").parameters[2].rules.min == 0


def test_mg1_flags_pn_approximation():
    assert PN_APPROXIMATION_NOTE in get_model("mg1_pk").notes


@pytest.mark.parametrize("model_id, values", CASES)
def test_every_result_is_complete_and_nan_free(model_id, values):
    result = compute(model_id, values)
    assert isinstance(result, ComputationResult)
    assert set(result.metrics()) == {"p0", "pN", "lambdaEff", "lambdaLost", "Ls", "Lq", "Ws", "Wq", "cBar"}
    for key, value in result.metrics().items():
        if value is not None:
            assert not math.isnan(value), key
    for term in result.pn:
        assert not math.isnan(term.value)
    assert isinstance(result.warnings, tuple)
    assert isinstance(result.errors, tuple)


@pytest.mark.parametrize("model_id, values", CASES)
def test_compute_is_idempotent(model_id, values):
    assert compute(model_id, values) == compute(model_id, dict(values))


@pytest.mark.parametrize("model_id, values", [c for c in CASES if compute(*c).stable])
def test_stable_display_never_exceeds_unit_mass(model_id, values):
    result = compute(model_id, values)
    assert len(result.pn) <= 21
    assert sum(t.value for t in result.pn) <= 1.0 + 1e-12


def test_compute_casts_integer_parameters():
    as_floats = compute("mmc_n", {"lambda": 4.0, "mu": 2.0, "c": 3.0, "N": 5.0})
    as_ints = compute("mmc_n", {"lambda": 4, "mu": 2, "c": 3, "N": 5})
    assert as_floats == as_ints


def test_compute_missing_parameter_raises():
    with pytest.raises(KeyError):
        compute("mm1_n", {"lambda": 1.0, "mu": 2.0})
