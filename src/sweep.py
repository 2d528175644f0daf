"""Evaluate one model across a range of values of a single parameter."""

from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path
from typing import Dict, List

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402
from tqdm import tqdm  # noqa: E402

try:
    from qcalc import ValidationError, compute, get_model, list_models, validate_params
    from qcalc.registry import ModelSpec
except ModuleNotFoundError:  # pragma: no cover
    from .qcalc import ValidationError, compute, get_model, list_models, validate_params
    from .qcalc.registry import ModelSpec

logger = logging.getLogger(__name__)

PLOTTED = ("Ls", "Lq", "Ws", "Wq")


def parse_values(spec: str) -> List[float]:
    """Accept ``1,2,3`` or ``start:stop:num`` (inclusive, evenly spaced)."""
    spec = spec.strip()
    if ":" in spec:
        parts = spec.split(":")
        if len(parts) != 3:
            raise argparse.ArgumentTypeError(f"Invalid range '{spec}'. Use start:stop:num.")
        try:
            start, stop = float(parts[0]), float(parts[1])
            num = int(parts[2])
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"Invalid range '{spec}'.") from exc
        if num < 1:
            raise argparse.ArgumentTypeError("The number of points must be >= 1.")
        return [float(v) for v in np.linspace(start, stop, num)]

    values = []
    for chunk in spec.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        try:
            values.append(float(chunk))
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"Invalid value '{chunk}'.") from exc
    if not values:
        raise argparse.ArgumentTypeError("Provide at least one value via --values.")
    return values


def parse_assignment(text: str) -> tuple[str, str]:
    name, eq, value = text.partition("=")
    if not eq or not name.strip():
        raise argparse.ArgumentTypeError(f"Invalid assignment '{text}'. Use name=value.")
    return name.strip(), value.strip()


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sweep one parameter of a queueing model.")
    parser.add_argument("--model", type=str, required=True, choices=list(list_models()))
    parser.add_argument(
        "--param",
        type=parse_assignment,
        action="append",
        default=[],
        help="Fixed parameter as id=value (repeatable), e.g. --param mu=2.",
    )
    parser.add_argument("--vary", type=str, required=True, help="Parameter id to sweep, e.g. c.")
    parser.add_argument(
        "--values",
        type=parse_values,
        required=True,
        help='Values for the swept parameter: "1,2,3" or "0.1:0.9:9".',
    )
    parser.add_argument(
        "--results-out",
        type=Path,
        default=Path("outputs/sweep_results.csv"),
        help="CSV with one row per evaluated value.",
    )
    parser.add_argument(
        "--reports-dir",
        type=Path,
        default=Path("reports"),
        help="Directory where the sweep figure will be written.",
    )
    return parser.parse_args()


def run_sweep(spec: ModelSpec, fixed: Dict[str, str], vary: str, values: List[float]) -> pd.DataFrame:
    """One row per swept value with every scalar metric and the diagnostics."""
    if vary not in spec.param_ids():
        raise KeyError(f"Parameter '{vary}' is not defined for {spec.id}. Available: {list(spec.param_ids())}")

    rows = []
    for value in tqdm(values, desc=f"{spec.id}:{vary}", unit="pt"):
        raw: Dict[str, object] = dict(fixed)
        raw[vary] = value
        params = validate_params(spec, raw)
        result = compute(spec.kind, params)
        row = {vary: value}
        row.update(result.metrics())
        row["stable"] = result.stable
        row["warnings"] = "; ".join(result.warnings)
        row["errors"] = "; ".join(result.errors)
        rows.append(row)
        if result.errors:
            logger.warning("%s=%g: %s", vary, value, "; ".join(result.errors))
    return pd.DataFrame(rows)


def plot_sweep(df: pd.DataFrame, vary: str, title: str, out: Path) -> None:
    """Ls, Lq, Ws, Wq against the swept parameter; diverging points leave gaps."""
    fig, axes = plt.subplots(2, 2, figsize=(10, 6), sharex=True)
    for ax, label in zip(axes.flatten(), PLOTTED):
        series = df[label].astype(float).map(lambda v: v if math.isfinite(v) else np.nan)
        ax.plot(df[vary], series, marker="o")
        ax.set_title(label)
        ax.set_xlabel(vary)
        ax.set_ylabel(label)
    fig.suptitle(title)
    fig.tight_layout()
    fig.savefig(out, dpi=150)
    plt.close(fig)


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    spec = get_model(args.model)
    try:
        df = run_sweep(spec, dict(args.param), args.vary, args.values)
    except KeyError as exc:
        raise SystemExit(str(exc)) from exc
    except ValidationError as exc:
        raise SystemExit("\n".join(exc.messages)) from exc

    args.results_out.parent.mkdir(parents=True, exist_ok=True)
    args.reports_dir.mkdir(parents=True, exist_ok=True)
    df.to_csv(args.results_out, index=False)

    figure = args.reports_dir / f"sweep_{spec.id}_{args.vary}.png"
    plot_sweep(df, args.vary, f"{spec.label}: metricas vs. {args.vary}", figure)

    unstable = int((~df["stable"]).sum())
    print(f"Puntos evaluados: {len(df)} (inestables: {unstable})")
    print(f"Resultados guardados en {args.results_out.resolve()}")
    print(f"Grafico guardado en {figure.resolve()}")


if __name__ == "__main__":
    main()
