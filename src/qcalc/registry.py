"""Catalog of the supported queueing models and dispatch to their formulas."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, Mapping, Optional, Tuple, Union

from .metrics import MAX_STATES, mm1_inf, mm1_n
from .metrics_mg1 import PN_APPROXIMATION_NOTE, mg1_pk
from .metrics_mmc import mmc_inf, mmc_n, mminf
from .metrics_mmr import mmr_repair
from .result import ComputationResult

logger = logging.getLogger(__name__)


class ModelKind(str, Enum):
    MM1_INF = "mm1_inf"
    MM1_N = "mm1_n"
    MMC_INF = "mmc_inf"
    MMC_N = "mmc_n"
    MMINF = "mminf"
    MMR_REPAIR = "mmr_repair"
    MG1_PK = "mg1_pk"


@dataclass(frozen=True)
class ParamRules:
    """Input rules: `positive` (> 0), `integer`, inclusive `min` / `max` bounds."""

    positive: bool = False
    integer: bool = False
    min: Optional[float] = None
    max: Optional[float] = None


@dataclass(frozen=True)
class ParamSpec:
    id: str
    label: str
    rules: ParamRules
    arg: str  # keyword of the compute function


@dataclass(frozen=True)
class ModelSpec:
    kind: ModelKind
    label: str
    parameters: Tuple[ParamSpec, ...]
    notes: Tuple[str, ...] = field(default=())

    @property
    def id(self) -> str:
        return self.kind.value

    def param_ids(self) -> Tuple[str, ...]:
        return tuple(p.id for p in self.parameters)


POSITIVE = ParamRules(positive=True)
COUNT = ParamRules(integer=True, min=1, max=MAX_STATES)

ARRIVAL = ParamSpec("lambda", "Arrival rate λ", POSITIVE, "lam")
SERVICE = ParamSpec("mu", "Service rate μ", POSITIVE, "mu")

MODELS: Dict[ModelKind, ModelSpec] = {
    ModelKind.MM1_INF: ModelSpec(ModelKind.MM1_INF, "M/M/1:GD/∞/∞", (ARRIVAL, SERVICE)),
    ModelKind.MM1_N: ModelSpec(
        ModelKind.MM1_N,
        "M/M/1:GD/N/∞",
        (ARRIVAL, SERVICE, ParamSpec("N", "System capacity N", COUNT, "N")),
    ),
    ModelKind.MMC_INF: ModelSpec(
        ModelKind.MMC_INF,
        "M/M/c:GD/∞/∞",
        (ARRIVAL, SERVICE, ParamSpec("c", "Servers c", COUNT, "c")),
    ),
    ModelKind.MMC_N: ModelSpec(
        ModelKind.MMC_N,
        "M/M/c:GD/N/∞",
        (
            ARRIVAL,
            SERVICE,
            ParamSpec("c", "Servers c", COUNT, "c"),
            ParamSpec("N", "System capacity N (≥ c)", COUNT, "N"),
        ),
    ),
    ModelKind.MMINF: ModelSpec(ModelKind.MMINF, "M/M/∞:GD/∞/∞", (ARRIVAL, SERVICE)),
    ModelKind.MMR_REPAIR: ModelSpec(
        ModelKind.MMR_REPAIR,
        "M/M/R:GD/K/K",
        (
            ParamSpec("lambda", "Failure/arrival rate λ", POSITIVE, "lam"),
            ParamSpec("mu", "Repair rate μ", POSITIVE, "mu"),
            ParamSpec("R", "Servers R (repairers)", COUNT, "R"),
            ParamSpec("K", "Population size K (units)", COUNT, "K"),
        ),
    ),
    ModelKind.MG1_PK: ModelSpec(
        ModelKind.MG1_PK,
        "M/G/1:GD/∞/∞",
        (
            ARRIVAL,
            ParamSpec("meanService", "E{t} (service mean)", POSITIVE, "mean_service"),
            ParamSpec("varService", "Var{t} (service variance)", ParamRules(min=0), "var_service"),
        ),
        notes=(PN_APPROXIMATION_NOTE,),
    ),
}

_COMPUTE: Dict[ModelKind, Callable[..., ComputationResult]] = {
    ModelKind.MM1_INF: mm1_inf,
    ModelKind.MM1_N: mm1_n,
    ModelKind.MMC_INF: mmc_inf,
    ModelKind.MMC_N: mmc_n,
    ModelKind.MMINF: mminf,
    ModelKind.MMR_REPAIR: mmr_repair,
    ModelKind.MG1_PK: mg1_pk,
}


def list_models() -> Iterable[str]:
    """Return model identifiers in catalog order."""
    return [kind.value for kind in MODELS]


def get_model(model_id: Union[str, ModelKind]) -> ModelSpec:
    """Return the `ModelSpec` registered under `model_id`."""
    try:
        kind = ModelKind(model_id)
    except ValueError:
        raise KeyError(f"Model '{model_id}' is not defined. Available: {list_models()}") from None
    return MODELS[kind]


def compute(model_id: Union[str, ModelKind], values: Mapping[str, float]) -> ComputationResult:
    """
    Evaluate a model from validated parameter values keyed by parameter id.

    Integer parameters are passed on as `int`; missing ids raise KeyError.
    """
    spec = get_model(model_id)
    kwargs = {
        p.arg: int(values[p.id]) if p.rules.integer else float(values[p.id])
        for p in spec.parameters
    }
    logger.debug("Computing %s with %s", spec.id, kwargs)
    return _COMPUTE[spec.kind](**kwargs)
