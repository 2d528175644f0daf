"""Command line interface to evaluate one queueing model."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict, List

import pandas as pd

try:
    from qcalc import (
        ComputationResult,
        ModelSpec,
        ValidationError,
        compute,
        get_formula,
        get_model,
        hint_for_rules,
        list_models,
        results_lines,
        status_text,
        validate_params,
    )
except ModuleNotFoundError:  # pragma: no cover - fallback when executed as package
    from .qcalc import (
        ComputationResult,
        ModelSpec,
        ValidationError,
        compute,
        get_formula,
        get_model,
        hint_for_rules,
        list_models,
        results_lines,
        status_text,
        validate_params,
    )

logger = logging.getLogger(__name__)

# argparse destination -> model parameter id
PARAM_FLAGS: Dict[str, str] = {
    "lam": "lambda",
    "mu": "mu",
    "c": "c",
    "N": "N",
    "R": "R",
    "K": "K",
    "mean_service": "meanService",
    "var_service": "varService",
}

FLAG_NAMES: Dict[str, str] = {param_id: "--" + dest.replace("_", "-") for dest, param_id in PARAM_FLAGS.items()}


def param_hints(spec: ModelSpec) -> List[str]:
    """One usage line per parameter the model declares."""
    return [f"  {FLAG_NAMES[p.id]} ({p.label}): {hint_for_rules(p.rules)}" for p in spec.parameters]


def add_param_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--lam", type=str, help="Arrival (or failure) rate lambda.")
    parser.add_argument("--mu", type=str, help="Service (or repair) rate mu.")
    parser.add_argument("--c", type=str, help="Number of parallel servers c.")
    parser.add_argument("--N", type=str, help="System capacity N.")
    parser.add_argument("--R", type=str, help="Number of repairers R.")
    parser.add_argument("--K", type=str, help="Population size K.")
    parser.add_argument("--mean-service", type=str, dest="mean_service", help="Service time mean E{t}.")
    parser.add_argument("--var-service", type=str, dest="var_service", help="Service time variance Var{t}.")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute steady-state metrics for a queueing model.")
    parser.add_argument(
        "--model",
        type=str,
        required=True,
        choices=list(list_models()),
        help="Queueing model identifier.",
    )
    add_param_arguments(parser)
    parser.add_argument(
        "--formula",
        type=str,
        help="Also print the formula for this metric (p0, pN, Ls, Lq, Ws, Wq, cBar, lambdaEff, lambdaLost).",
    )
    parser.add_argument(
        "--outputs",
        type=Path,
        default=Path("outputs/model_summary.csv"),
        help="CSV where the scalar metrics will be written.",
    )
    parser.add_argument(
        "--pn-out",
        type=Path,
        default=Path("outputs/model_pn.csv"),
        dest="pn_out",
        help="CSV where the pn distribution (n <= 20) will be written.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args()


def collect_inputs(args: argparse.Namespace, spec: ModelSpec) -> Dict[str, str]:
    """Raw values for the parameters `spec` declares; others are ignored."""
    wanted = set(spec.param_ids())
    raw = {}
    for dest, param_id in PARAM_FLAGS.items():
        value = getattr(args, dest, None)
        if param_id in wanted and value is not None:
            raw[param_id] = value
    return raw


def summary_frame(spec: ModelSpec, values: Dict[str, float], result: ComputationResult) -> pd.DataFrame:
    rows = [{"metric": key, "value": value} for key, value in result.metrics().items()]
    df = pd.DataFrame(rows)
    df["model_id"] = spec.id
    df["model_label"] = spec.label
    df["params"] = ", ".join(f"{k}={v:g}" for k, v in values.items())
    df["status"] = status_text(result)
    return df


def pn_frame(result: ComputationResult) -> pd.DataFrame:
    return pd.DataFrame([{"n": term.n, "value": term.value} for term in result.pn], columns=["n", "value"])


def ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    spec = get_model(args.model)
    try:
        values = validate_params(spec, collect_inputs(args, spec))
    except ValidationError as exc:
        raise SystemExit("\n".join([*exc.messages, "", f"{spec.label} expects:", *param_hints(spec)])) from exc

    result = compute(spec.kind, values)

    print()
    for line in results_lines(spec.label, result):
        print(f"  {line}")
    print(f"\nEstado: {status_text(result)}")
    for note in spec.notes:
        print(f"Nota: {note}")
    for message in result.warnings:
        logger.warning(message)
    for message in result.errors:
        logger.error(message)

    if args.formula:
        print(f"\n{args.formula}: {get_formula(args.formula, spec.id)}")

    ensure_parent(args.outputs)
    ensure_parent(args.pn_out)
    summary_frame(spec, values, result).to_csv(args.outputs, index=False)
    pn_frame(result).to_csv(args.pn_out, index=False)
    print(f"\nResumen guardado en {args.outputs.resolve()}")
    print(f"Distribucion pn guardada en {args.pn_out.resolve()}")

    if result.errors:
        raise SystemExit(2)


if __name__ == "__main__":
    main()
