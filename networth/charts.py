"""
networth/charts.py
==================
Currency exposure and allocation-vs-target charts with matplotlib.
Each function saves a PNG and returns its filename (None if nothing to plot).
"""

from typing import List, Optional

import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
import numpy as np

from networth.analysis import allocation_frame, currency_frame
from networth.drift import DriftRow
from networth.models import ComputedPortfolio


# ── Dark theme ────────────────────────────────────────────────────────────────
BG      = "#0f0f0f"
SURFACE = "#1a1a1a"
BORDER  = "#2a2a2a"
TEXT    = "#cccccc"
MUTED   = "#666666"
GAIN    = "#4caf7d"
LOSS    = "#e05c5c"
BLUE    = "#5b9bd5"
# one colour per exposure bucket: Crypto, EUR, USD, RON, CHF, extras
BUCKET_COLOURS = [BLUE, GAIN, "#e8a838", "#b07fd4", LOSS, "#4db6ac", "#f06292", "#a1887f"]

STYLE = {
    "figure.facecolor":  BG,
    "figure.dpi":        120,
    "axes.facecolor":    SURFACE,
    "axes.edgecolor":    BORDER,
    "axes.titlecolor":   TEXT,
    "axes.titlesize":    12,
    "axes.grid":         True,
    "axes.axisbelow":    True,
    "grid.color":        BORDER,
    "xtick.color":       MUTED,
    "ytick.color":       MUTED,
    "legend.facecolor":  SURFACE,
    "legend.edgecolor":  BORDER,
    "legend.labelcolor": TEXT,
    "text.color":        TEXT,
}


def _save(fig: plt.Figure, filename: str, show: bool) -> str:
    fig.tight_layout()
    fig.savefig(filename, facecolor=BG, bbox_inches="tight")
    if show:
        plt.show()
    plt.close(fig)
    return filename


# ── Currency exposure donut ───────────────────────────────────────────────────

def show_currency_pie(snapshot: ComputedPortfolio,
                      filename: str = "networth_currency.png",
                      show: bool = True) -> Optional[str]:
    df = currency_frame(snapshot)
    if df.empty:
        return None

    codes  = df["Currency"].tolist()
    values = df["Value (€)"].tolist()
    with plt.rc_context(STYLE):
        fig, ax = plt.subplots(figsize=(6.5, 6))
        wedges, _, labels = ax.pie(
            values,
            colors=[BUCKET_COLOURS[i % len(BUCKET_COLOURS)] for i in range(len(values))],
            autopct=lambda p: f"{p:.0f}%" if p >= 5 else "",
            pctdistance=0.8,
            startangle=90,
            counterclock=False,
            wedgeprops={"width": 0.45, "edgecolor": BG},
        )
        for text in labels:
            text.set_fontsize(8)

        ax.text(0, 0, f"€{snapshot.total_assets:,.0f}\nassets",
                ha="center", va="center", fontsize=12, color=TEXT)
        ax.legend(wedges, [f"{c}  €{v:,.0f}" for c, v in zip(codes, values)],
                  loc="upper left", bbox_to_anchor=(1.0, 0.9), fontsize=8)
        ax.set_title("Currency Exposure (Assets)")
        return _save(fig, filename, show)


# ── Actual vs target bars ─────────────────────────────────────────────────────

def show_drift_bars(rows: List[DriftRow],
                    filename: str = "networth_allocation.png",
                    show: bool = True) -> Optional[str]:
    targeted = [r for r in rows if r.target_pct is not None]
    df = allocation_frame(targeted)
    if df.empty:
        return None

    pos = np.arange(len(df))
    bar = 0.4
    with plt.rc_context(STYLE):
        fig, ax = plt.subplots(figsize=(max(6.0, 1.3 * len(df)), 4.5))
        ax.bar(pos - bar / 2, df["Target (%)"], bar, label="Target", color=MUTED)
        ax.bar(pos + bar / 2, df["Actual (%)"], bar, label="Actual",
               color=[LOSS if r.is_flagged else GAIN for r in targeted])

        ax.set_xticks(pos)
        ax.set_xticklabels(df.index, rotation=25, ha="right", fontsize=8)
        ax.yaxis.set_major_formatter(mticker.PercentFormatter(decimals=0))
        for side in ("top", "right"):
            ax.spines[side].set_visible(False)
        ax.set_title("Allocation vs Target")
        ax.legend(fontsize=8)
        return _save(fig, filename, show)
