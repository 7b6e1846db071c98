"""
networth/exporter.py  —  Tabular export (CSV and Excel)

build_export_rows() flattens a computed portfolio into rows of plain strings.
Money is written with exactly 2 decimals and no symbol, percentages as bare
numbers, so the file reads the same in every locale. The CSV and Excel
writers both serialise those same rows.
"""

import csv
import io
from datetime import datetime
from typing import List, Optional, Sequence

import openpyxl
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from networth.drift import analyze_allocation, analyze_crypto_split
from networth.models import ComputedPortfolio, PortfolioInput

Row = List[str]

# ── Colour constants ──────────────────────────────────────────────────────────
HEADER_BG  = "1A237E"
HEADER_FG  = "FFFFFF"
SUBHEAD_BG = "283593"

SECTION_TITLES = (
    "Summary", "Cash Balances", "Brokerage Portfolio", "Crypto", "Other Assets",
    "Allocation vs Target", "Crypto Split vs Target", "Currency Exposure (Assets)",
)


def _money(value: float) -> str:
    return f"{value:.2f}"


def _plain(value) -> str:
    """Native amounts and rates as typed: 1000.0 → '1000', 0.2 → '0.2'."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _table(title: str, header: Row, body: Sequence[Row], total: float) -> List[Row]:
    total_row = ["Total"] + [""] * (len(header) - 2) + [_money(total)]
    return [[title], header, *body, total_row, []]


def _drift_rows(rows) -> List[Row]:
    return [[r.sleeve, _money(r.actual_pct), _plain(r.target_pct),
             "" if r.drift is None else _money(r.drift), r.flag]
            for r in rows]


# ── Public API ────────────────────────────────────────────────────────────────

def build_export_rows(snapshot: ComputedPortfolio, inp: PortfolioInput,
                      exported_at: str) -> List[Row]:
    fx = snapshot.fx
    rows: List[Row] = [
        ["Report Date", inp.date],
        ["Exported At", exported_at],
        ["FX Rates (to EUR)"] + [f"{code}:{_plain(fx.get(code))}" for code in ("USD", "CHF", "RON")],
        [],
        ["Summary"],
        ["Total Assets (EUR)", _money(snapshot.total_assets)],
        ["Net Worth (EUR)", _money(snapshot.net_worth)],
        ["MoM Change (EUR)", _money(snapshot.mom_abs), "MoM Change (%)", _money(snapshot.mom_pct)],
        ["Cumulative (EUR)", _money(snapshot.cum_abs), "Cumulative (%)", _money(snapshot.cum_pct)],
        [],
    ]

    rows += _table("Cash Balances",
                   ["Currency", "Original Amount", "EUR Value"],
                   [[c.currency, _plain(c.amount), _money(c.eur)] for c in snapshot.cash],
                   snapshot.cash_total)
    rows += _table("Brokerage Portfolio",
                   ["Ticker", "Category", "Currency", "Original Amount", "EUR Value"],
                   [[p.name, p.label, p.currency, _plain(p.amount), _money(p.eur)]
                    for p in snapshot.brokerage],
                   snapshot.brokerage_total)
    rows += _table("Crypto",
                   ["Coin", "Amount", "EUR Value"],
                   [[c.coin, _plain(c.amount), _money(c.eur)] for c in snapshot.crypto],
                   snapshot.crypto_total)
    rows += _table("Other Assets",
                   ["Name", "Currency", "Amount", "EUR Value"],
                   [[a.name, a.currency, _plain(a.amount), _money(a.eur)]
                    for a in snapshot.other_assets],
                   snapshot.other_total)

    rows.append(["Allocation vs Target"])
    rows.append(["Sleeve", "Actual % of Net Worth", "Target %", "Drift %", "Status"])
    rows += _drift_rows(analyze_allocation(snapshot, inp.targets))
    rows.append([])

    rows.append(["Crypto Split vs Target"])
    rows.append(["Coin", "Actual % of Crypto", "Target %", "Drift %", "Status"])
    rows += _drift_rows(analyze_crypto_split(snapshot, inp.crypto_split))
    rows.append([])

    rows.append(["Currency Exposure (Assets)"])
    rows.append(["Currency", "EUR Value", "% of Assets"])
    for code, eur in snapshot.by_currency.items():
        pct = eur / snapshot.total_assets * 100 if snapshot.total_assets else 0.0
        rows.append([code, _money(eur), _money(pct)])
    return rows


def rows_to_delimited_text(rows: Sequence[Sequence[str]], delimiter: str = ",") -> str:
    """
    Standard delimited text: cells holding the delimiter, a quote or a line
    break are quoted with inner quotes doubled. Rows joined by '\\n'.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, delimiter=delimiter, quotechar='"',
                        quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    for row in rows:
        writer.writerow(["" if v is None else str(v) for v in row])
    text = buf.getvalue()
    return text[:-1] if text.endswith("\n") else text


def default_filename(inp: PortfolioInput, ext: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"net-worth-{inp.date}-{now.strftime('%Y%m%d')}.{ext}"


def export_to_csv(snapshot: ComputedPortfolio, inp: PortfolioInput,
                  filename: Optional[str] = None) -> str:
    now = datetime.now()
    if filename is None:
        filename = default_filename(inp, "csv", now)
    rows = build_export_rows(snapshot, inp, now.strftime("%Y-%m-%d"))
    with open(filename, "w", newline="", encoding="utf-8") as f:
        f.write(rows_to_delimited_text(rows))
    return filename


def export_to_excel(snapshot: ComputedPortfolio, inp: PortfolioInput,
                    filename: Optional[str] = None) -> str:
    now = datetime.now()
    if filename is None:
        filename = default_filename(inp, "xlsx", now)
    rows = build_export_rows(snapshot, inp, now.strftime("%Y-%m-%d"))

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Net Worth"
    _write_sheet(ws, rows)
    wb.save(filename)
    return filename


# ── Excel sheet ───────────────────────────────────────────────────────────────

def _border():
    s = Side(style="thin", color="BDBDBD")
    return Border(left=s, right=s, top=s, bottom=s)


def _write_sheet(ws, rows: Sequence[Row]) -> None:
    title_font  = Font(name="Arial", size=11, bold=True, color=HEADER_FG)
    header_font = Font(name="Arial", size=10, bold=True, color=HEADER_FG)
    body_font   = Font(name="Arial", size=10)
    header_next = False
    widths: dict = {}

    for r, row in enumerate(rows, 1):
        is_title = len(row) == 1 and row[0] in SECTION_TITLES
        for c, value in enumerate(row, 1):
            cell = ws.cell(r, c, value)
            cell.font = body_font
            if is_title:
                cell.font = title_font
                cell.fill = PatternFill("solid", fgColor=HEADER_BG)
            elif header_next or (row and row[0] == "Total"):
                cell.font = header_font
                cell.fill = PatternFill("solid", fgColor=SUBHEAD_BG)
                cell.border = _border()
            elif row[0] not in ("Report Date", "Exported At", "FX Rates (to EUR)"):
                cell.border = _border()
                cell.alignment = Alignment(horizontal="right" if c > 1 else "left")
            widths[c] = max(widths.get(c, 0), len(str(value)))
        header_next = is_title

    for c, w in widths.items():
        ws.column_dimensions[get_column_letter(c)].width = min(max(w + 2, 10), 40)
    ws.freeze_panes = "A4"
