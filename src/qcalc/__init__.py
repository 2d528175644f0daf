"""Steady-state metrics for classical queueing models."""

from .comparison import ComparisonSlots, SavedResult, comparison_frame, comparison_lines
from .distribution import display_sequence, full_range_aggregate
from .formatting import format_number, format_probability, results_lines, status_text
from .formulas import get_formula
from .mathutils import combination, factorial, geometric_sum
from .metrics import mm1_inf, mm1_n, relative_error, rho
from .metrics_mg1 import mg1_pk
from .metrics_mmc import mmc_inf, mmc_n, mminf
from .metrics_mmr import mmr_repair
from .registry import MODELS, ModelKind, ModelSpec, ParamRules, ParamSpec, compute, get_model, list_models
from .result import ComputationResult, PnTerm
from .validation import ValidationError, hint_for_rules, validate_params

__all__ = [
    "ComparisonSlots",
    "ComputationResult",
    "MODELS",
    "ModelKind",
    "ModelSpec",
    "ParamRules",
    "ParamSpec",
    "PnTerm",
    "SavedResult",
    "ValidationError",
    "combination",
    "comparison_frame",
    "comparison_lines",
    "compute",
    "display_sequence",
    "factorial",
    "format_number",
    "format_probability",
    "full_range_aggregate",
    "geometric_sum",
    "get_formula",
    "get_model",
    "hint_for_rules",
    "list_models",
    "mg1_pk",
    "mm1_inf",
    "mm1_n",
    "mmc_inf",
    "mmc_n",
    "mminf",
    "mmr_repair",
    "relative_error",
    "results_lines",
    "rho",
    "status_text",
    "validate_params",
]
