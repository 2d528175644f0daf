"""Side-by-side comparison of two model configurations (slots A and B)."""

from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path
from typing import Dict, List, Tuple

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

try:
    from qcalc import (
        ComparisonSlots,
        SavedResult,
        ValidationError,
        comparison_frame,
        comparison_lines,
        compute,
        get_model,
        results_lines,
        status_text,
        validate_params,
    )
    from qcalc.comparison import CHART_METRICS
    from qcalc.result import METRIC_FIELDS, metric_label
except ModuleNotFoundError:  # pragma: no cover
    from .qcalc import (
        ComparisonSlots,
        SavedResult,
        ValidationError,
        comparison_frame,
        comparison_lines,
        compute,
        get_model,
        results_lines,
        status_text,
        validate_params,
    )
    from .qcalc.comparison import CHART_METRICS
    from .qcalc.result import METRIC_FIELDS, metric_label

logger = logging.getLogger(__name__)


def parse_config(spec: str) -> Tuple[str, Dict[str, str]]:
    """Parse ``model_id:name=value,name=value`` into its parts."""
    model_id, sep, assignments = spec.partition(":")
    model_id = model_id.strip()
    if not model_id or not sep:
        raise argparse.ArgumentTypeError(
            f"Invalid configuration '{spec}'. Expected model:name=value,name=value."
        )
    raw: Dict[str, str] = {}
    for chunk in assignments.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        name, eq, value = chunk.partition("=")
        if not eq or not name.strip():
            raise argparse.ArgumentTypeError(f"Invalid assignment '{chunk}' in '{spec}'.")
        raw[name.strip()] = value.strip()
    return model_id, raw


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compare two queueing model configurations.")
    parser.add_argument(
        "--a",
        type=parse_config,
        required=True,
        help='Model A, e.g. "mm1_inf:lambda=1,mu=2".',
    )
    parser.add_argument(
        "--b",
        type=parse_config,
        default=None,
        help='Model B, e.g. "mmc_inf:lambda=1,mu=2,c=2". Without it only model A is exported.',
    )
    parser.add_argument(
        "--summary-out",
        type=Path,
        default=Path("outputs/compare_summary.csv"),
        help="CSV with both models' metrics side by side.",
    )
    parser.add_argument(
        "--reports-dir",
        type=Path,
        default=Path("reports"),
        help="Directory where the comparison chart and text will be written.",
    )
    return parser.parse_args()


def evaluate(config: Tuple[str, Dict[str, str]]) -> SavedResult:
    """Validate and compute one slot; validation problems abort the run."""
    model_id, raw = config
    try:
        spec = get_model(model_id)
    except KeyError as exc:
        raise SystemExit(str(exc)) from exc
    try:
        values = validate_params(spec, raw)
    except ValidationError as exc:
        raise SystemExit(f"{spec.label}: " + "; ".join(exc.messages)) from exc
    result = compute(spec.kind, values)
    for message in result.warnings:
        logger.warning("%s: %s", spec.label, message)
    for message in result.errors:
        logger.error("%s: %s", spec.label, message)
    return SavedResult(model_id=spec.id, model_label=spec.label, params=values, result=result)


def plot_comparison(slots: ComparisonSlots, out: Path) -> None:
    """Grouped bars for Ls, Lq, Ws, Wq and c̄; diverging values are drawn as ∞ markers."""
    a, b = slots.both()
    labels = [metric_label(key) for key in CHART_METRICS]
    x = range(len(CHART_METRICS))
    width = 0.35

    fig, ax = plt.subplots(figsize=(8, 4))
    for offset, saved in ((-width / 2, a), (width / 2, b)):
        heights = [getattr(saved.result, METRIC_FIELDS[key]) for key in CHART_METRICS]
        finite = [h if math.isfinite(h) else 0.0 for h in heights]
        ax.bar([i + offset for i in x], finite, width=width, label=saved.model_label)
        for i, h in enumerate(heights):
            if not math.isfinite(h):
                ax.text(i + offset, 0, "∞", ha="center", va="bottom", fontsize=10)
    ax.set_xticks(list(x))
    ax.set_xticklabels(labels)
    ax.set_ylabel("Valor")
    ax.set_title("Comparacion de modelos")
    ax.legend()
    fig.tight_layout()
    fig.savefig(out, dpi=150)
    plt.close(fig)


def active_lines(slots: ComparisonSlots) -> List[str]:
    """Text export of the slot currently in focus (B when set, else A)."""
    saved = slots.active()
    if saved is None:
        raise ValueError("Compute first, then set A.")
    return [*results_lines(saved.model_label, saved.result), f"Parameters: {saved.params}"]


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    slots = ComparisonSlots().with_slot("A", evaluate(args.a))
    if args.b is not None:
        slots = slots.with_slot("B", evaluate(args.b))
    print(slots.status())

    args.reports_dir.mkdir(parents=True, exist_ok=True)
    active_path = args.reports_dir / "active.txt"
    active_path.write_text("\n".join(active_lines(slots)) + "\n", encoding="utf-8")

    if not slots.complete:
        print("\n".join(active_lines(slots)))
        print(f"\nTexto guardado en {active_path.resolve()}")
        return

    for name, saved in zip(("A", "B"), slots.both()):
        print(f"  {name}: {status_text(saved.result)}")
    print()
    print("\n".join(comparison_lines(slots)))

    args.summary_out.parent.mkdir(parents=True, exist_ok=True)
    comparison_frame(slots).to_csv(args.summary_out, index=False)
    text_path = args.reports_dir / "comparison.txt"
    text_path.write_text("\n".join(comparison_lines(slots)) + "\n", encoding="utf-8")
    chart_path = args.reports_dir / "comparison.png"
    plot_comparison(slots, chart_path)

    print(f"\nResumen comparativo: {args.summary_out.resolve()}")
    print(f"Texto guardado en {text_path.resolve()}")
    print(f"Modelo activo guardado en {active_path.resolve()}")
    print(f"Grafico guardado en {chart_path.resolve()}")


if __name__ == "__main__":
    main()
