"""Generate a printable markdown report from run_model outputs."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List

import pandas as pd

try:
    from qcalc import format_number, format_probability
    from qcalc.formatting import chunk
    from qcalc.result import metric_label
except ModuleNotFoundError:  # pragma: no cover
    from .qcalc import format_number, format_probability
    from .qcalc.formatting import chunk
    from .qcalc.result import metric_label

PN_COLUMNS = 7


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Write a markdown report for one model run.")
    parser.add_argument("--summary", type=Path, default=Path("outputs/model_summary.csv"))
    parser.add_argument("--pn", type=Path, default=Path("outputs/model_pn.csv"))
    parser.add_argument(
        "--out",
        type=Path,
        default=Path("reports/analysis/report.md"),
        help="Markdown file to write.",
    )
    return parser.parse_args()


def _value(raw: object) -> float | None:
    return None if pd.isna(raw) else float(raw)


def metrics_table(summary: pd.DataFrame) -> List[str]:
    lines = ["| Metric | Value |", "| --- | --- |"]
    for _, row in summary.iterrows():
        lines.append(f"| {metric_label(row['metric'])} | {format_number(_value(row['value']))} |")
    return lines


def pn_table(pn: pd.DataFrame) -> List[str]:
    """pn values laid out seven per row."""
    if pn.empty:
        return ["_No distribution available._"]
    cells = [f"**p{int(row.n)}** {format_probability(float(row.value))}" for row in pn.itertuples()]
    rows = chunk(cells, PN_COLUMNS)
    width = min(PN_COLUMNS, len(cells))
    lines = ["| " + " | ".join([" "] * width) + " |", "|" + " --- |" * width]
    for group in rows:
        padded = list(group) + [" "] * (width - len(group))
        lines.append("| " + " | ".join(padded) + " |")
    return lines


def build_report(summary: pd.DataFrame, pn: pd.DataFrame) -> str:
    first = summary.iloc[0]
    parts = [
        f"# {first['model_label']} Results",
        "",
        f"Parametros: {first['params']}",
        f"Estado: {first['status']}",
        "",
        *metrics_table(summary),
        "",
        "## pn (n ≤ 20)",
        "",
        *pn_table(pn),
    ]
    return "\n".join(parts) + "\n"


def main() -> None:
    args = parse_args()
    if not args.summary.exists():
        raise SystemExit(f"Resumen no encontrado: {args.summary}")

    summary = pd.read_csv(args.summary)
    if summary.empty:
        raise SystemExit(f"El archivo {args.summary} esta vacio.")
    pn = pd.read_csv(args.pn) if args.pn.exists() else pd.DataFrame(columns=["n", "value"])

    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_text(build_report(summary, pn), encoding="utf-8")
    print(f"Reporte guardado en {args.out.resolve()}")


if __name__ == "__main__":
    main()
