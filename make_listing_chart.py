#!/usr/bin/env python3
"""
Listing Chart — CLI
Usage:
  python make_listing_chart.py [movies_listing.csv]

Draws rating per runtime as a box-plot, grouped by primary genre, into ./charts
"""

import os, sys
from pathlib import Path

import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns

CHART_DIR = os.environ.get("CHART_DIR", "charts")
CHART_FILE = "runtime_rating_boxplot.png"


def render_boxplot(df, x, y, group, out_path=None):
    for col in (x, y, group):
        if col not in df.columns:
            raise KeyError(f"column {col!r} not in dataset ({list(df.columns)})")
    out_path = Path(out_path or Path(CHART_DIR) / CHART_FILE)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    data = df.dropna(subset=[x, y])
    plt.figure(figsize=(12, 6))
    ax = sns.boxplot(data=data, x=x, y=y, hue=group)
    ax.set_title(f"{y.title()} by {x.title()} (grouped by {group})")
    ax.set_xlabel(x.title())
    ax.set_ylabel(y.title())
    plt.tight_layout()
    plt.savefig(out_path, dpi=150)
    plt.close()
    print("📈 Saved", out_path)
    return out_path


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    csv_path = argv[0] if argv else "movies_listing.csv"
    if not os.path.isfile(csv_path):
        print("❌ Missing", csv_path)
        return 1
    df = pd.read_csv(csv_path)
    render_boxplot(df, "runtime", "rating", "genre")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
