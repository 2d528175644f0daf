"""Utility to plot the pn distribution written by run_model."""

from __future__ import annotations

import argparse
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plot the steady-state distribution pn.")
    parser.add_argument(
        "--pn",
        type=Path,
        default=Path("outputs/model_pn.csv"),
        help="CSV produced by src.run_model (--pn-out).",
    )
    parser.add_argument(
        "--summary",
        type=Path,
        default=Path("outputs/model_summary.csv"),
        help="Summary CSV produced by src.run_model (used for the title).",
    )
    parser.add_argument(
        "--reports-dir",
        type=Path,
        default=Path("reports"),
        help="Directory where PNG files will be saved.",
    )
    return parser.parse_args()


def load_pn(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"pn file not found: {path}")
    df = pd.read_csv(path)
    if df.empty:
        raise ValueError("pn file is empty. The model reported no distribution.")
    return df


def model_title(summary_path: Path) -> str:
    if not summary_path.exists():
        return "Distribucion pn"
    summary = pd.read_csv(summary_path)
    if summary.empty:
        return "Distribucion pn"
    row = summary.iloc[0]
    return f"{row['model_label']} ({row['params']})"


def plot_distribution(df: pd.DataFrame, title: str, out: Path) -> None:
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.bar(df["n"], df["value"], color="#4c72b0", alpha=0.85, edgecolor="white")
    ax.set_xlabel("n")
    ax.set_ylabel("p_n")
    ax.set_xticks(df["n"].tolist())
    ax.set_title(title)
    fig.tight_layout()
    fig.savefig(out, dpi=150)
    plt.close(fig)


def plot_cumulative(df: pd.DataFrame, title: str, out: Path) -> None:
    """Cumulative mass of the displayed states; stays below one when truncated."""
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.step(df["n"], df["value"].cumsum(), where="post", marker="o")
    ax.axhline(1.0, color="gray", linestyle="--", linewidth=1)
    ax.set_xlabel("n")
    ax.set_ylabel("P(N <= n)")
    ax.set_ylim(0, 1.05)
    ax.set_title(title)
    fig.tight_layout()
    fig.savefig(out, dpi=150)
    plt.close(fig)


def main() -> None:
    args = parse_args()
    df = load_pn(args.pn)
    title = model_title(args.summary)

    args.reports_dir.mkdir(parents=True, exist_ok=True)
    plot_distribution(df, title, args.reports_dir / "pn.png")
    plot_cumulative(df, title, args.reports_dir / "pn_acumulada.png")

    print(f"Figuras guardadas en {args.reports_dir.resolve()}")


if __name__ == "__main__":
    main()
