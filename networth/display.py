"""
networth/display.py
===================
Renders a computed portfolio in the terminal using the `rich` library.
Only reads ComputedPortfolio / DriftRow fields; no calculation happens here.
"""

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from networth.drift import DriftRow
from networth.models import ComputedPortfolio
from networth.returns import ReturnFigure


console = Console()

# ── Palette ─────────────────────────────────────────────────────────────────
GAIN   = "green"
LOSS   = "red"
MUTED  = "grey62"
ACCENT = "steel_blue1"
HEAD   = "bold white"


# ── Formatters ───────────────────────────────────────────────────────────────

def _colour(value: float, text: str) -> str:
    if value > 0:  return f"[{GAIN}]{text}[/{GAIN}]"
    if value < 0:  return f"[{LOSS}]{text}[/{LOSS}]"
    return f"[{MUTED}]{text}[/{MUTED}]"

def _cur(value: float) -> str:
    return f"€{value:,.0f}"

def _pct(value: float) -> str:
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.2f}%"

def _table() -> Table:
    return Table(box=box.SIMPLE, show_header=True, header_style=f"bold {ACCENT}",
                 show_edge=False, pad_edge=True)


def format_return(figure: Optional[ReturnFigure]) -> str:
    if figure is None:
        return f"[{MUTED}]n/a[/{MUTED}]"
    return f"{_cur(figure.abs)} ({_colour(figure.pct, _pct(figure.pct))})"


# ── Overview ─────────────────────────────────────────────────────────────────

def print_overview(s: ComputedPortfolio, period_label: str,
                   figure: Optional[ReturnFigure]) -> None:
    lines = [
        f"[{MUTED}]Total Net Worth[/{MUTED}]  [bold white]{_cur(s.net_worth)}[/bold white]",
        f"[{MUTED}]Return ({period_label})[/{MUTED}]     {format_return(figure)}",
        f"[{MUTED}]Cumulative[/{MUTED}]       {_cur(s.cum_abs)} ({_colour(s.cum_pct, _pct(s.cum_pct))})",
    ]
    console.print(Panel("\n".join(lines), border_style=ACCENT, padding=(1, 2)))


def print_breakdown(s: ComputedPortfolio) -> None:
    table = _table()
    table.add_column("Category", style=HEAD, min_width=22)
    table.add_column("EUR Value", justify="right", min_width=12)
    table.add_column("% of Net Worth", justify="right")
    table.add_column("Target", justify="right", style=MUTED)
    for b in s.breakdown:
        share = b.eur / s.net_worth * 100 if s.net_worth else 0.0
        target = f"{b.target:g}%" if b.target is not None else "–"
        table.add_row(b.name, _cur(b.eur), f"{share:.2f}%", target)
    console.print(table)


# ── Holdings ─────────────────────────────────────────────────────────────────

def print_holdings(s: ComputedPortfolio) -> None:
    if s.cash:
        table = _table()
        table.add_column("Currency", style=HEAD)
        table.add_column("Amount", justify="right", style=MUTED)
        table.add_column("EUR Value", justify="right")
        for c in s.cash:
            table.add_row(c.currency, f"{c.amount:,.2f} {c.currency}", _cur(c.eur))
        table.add_row(f"[{MUTED}]Total[/{MUTED}]", "", _cur(s.cash_total))
        console.print(f"[{ACCENT}]── Cash ──[/{ACCENT}]")
        console.print(table)

    if s.brokerage:
        table = _table()
        table.add_column("Ticker", style=HEAD)
        table.add_column("Category", style=MUTED)
        table.add_column("Amount", justify="right", style=MUTED)
        table.add_column("EUR Value", justify="right")
        table.add_column("% of Brokerage", justify="right")
        for p in s.brokerage:
            share = p.eur / s.brokerage_total * 100 if s.brokerage_total else 0.0
            table.add_row(p.name, p.label, f"{p.amount:,.2f} {p.currency}",
                          _cur(p.eur), f"{share:.2f}%")
        table.add_row(f"[{MUTED}]Total[/{MUTED}]", "", "", _cur(s.brokerage_total), "")
        console.print(f"[{ACCENT}]── Brokerage ──[/{ACCENT}]")
        console.print(table)

    if s.crypto:
        table = _table()
        table.add_column("Coin", style=HEAD)
        table.add_column("Amount", justify="right", style=MUTED)
        table.add_column("EUR Value", justify="right")
        table.add_column("% of Crypto", justify="right")
        for c in s.crypto:
            share = c.eur / s.crypto_total * 100 if s.crypto_total else 0.0
            table.add_row(c.coin, f"{c.amount:,.6f}", _cur(c.eur), f"{share:.2f}%")
        console.print(f"[{ACCENT}]── Crypto ──[/{ACCENT}]")
        console.print(table)

    if s.other_assets:
        table = _table()
        table.add_column("Name", style=HEAD)
        table.add_column("EUR Value", justify="right")
        for a in s.other_assets:
            table.add_row(a.name, _cur(a.eur))
        table.add_row(f"[{MUTED}]Total[/{MUTED}]", _cur(s.other_total))
        console.print(f"[{ACCENT}]── Other Assets ──[/{ACCENT}]")
        console.print(table)

    if not (s.cash or s.brokerage or s.crypto or s.other_assets):
        console.print(f"\n  [{MUTED}]No holdings yet. Add some from the menu.[/{MUTED}]\n")


# ── Allocation ───────────────────────────────────────────────────────────────

def _flag(row: DriftRow) -> str:
    if row.drift is None:
        return f"[{MUTED}]n/a[/{MUTED}]"
    colour = LOSS if row.is_flagged else GAIN
    return f"[{colour}]{row.flag}[/{colour}]"


def print_allocation(rows: List[DriftRow], split_rows: List[DriftRow]) -> None:
    table = _table()
    table.add_column("Sleeve", style=HEAD, min_width=24)
    table.add_column("Actual %", justify="right")
    table.add_column("Target %", justify="right", style=MUTED)
    table.add_column("Drift", min_width=22)
    for r in rows:
        target = f"{r.target_pct:g}%" if r.target_pct is not None else "–"
        table.add_row(r.sleeve, f"{r.actual_pct:.2f}%", target, _flag(r))
    if split_rows:
        table.add_row(f"[{MUTED}]Crypto internal split[/{MUTED}]", "", "", "")
        for r in split_rows:
            target = f"{r.target_pct:g}%" if r.target_pct is not None else "–"
            table.add_row(f"{r.sleeve} share", f"{r.actual_pct:.2f}%", target, _flag(r))
    console.print(table)


def print_currency_exposure(s: ComputedPortfolio) -> None:
    if not s.total_assets:
        return
    BAR_WIDTH = 28
    table = _table()
    table.add_column("Currency", min_width=8)
    table.add_column("EUR Value", justify="right", min_width=12)
    table.add_column("", min_width=36)
    for code, value in sorted(s.by_currency.items(), key=lambda x: -x[1]):
        pct  = value / s.total_assets * 100
        fill = max(0, min(BAR_WIDTH, round(pct / 100 * BAR_WIDTH)))
        bar  = (
            f"[{ACCENT}]{'█' * fill}[/{ACCENT}]"
            f"[{MUTED}]{'░' * (BAR_WIDTH - fill)}[/{MUTED}]"
            f"  [{MUTED}]{pct:.1f}%[/{MUTED}]"
        )
        table.add_row(code, _cur(value), bar)
    console.print(table)
