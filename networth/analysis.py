"""
networth/analysis.py  —  pandas views of a computed portfolio
"""

from typing import List

import pandas as pd

from networth.drift import DriftRow
from networth.models import ComputedPortfolio


def breakdown_frame(snapshot: ComputedPortfolio) -> pd.DataFrame:
    if not snapshot.net_worth:
        return pd.DataFrame()
    return pd.DataFrame([{"Category": b.name, "Value (€)": round(b.eur, 2),
                          "Weight (%)": round(b.eur / snapshot.net_worth * 100, 2),
                          "Target (%)": b.target}
                         for b in snapshot.breakdown])


def currency_frame(snapshot: ComputedPortfolio) -> pd.DataFrame:
    # pie wedges must be positive; an overdrawn bucket is left out
    rows = {k: v for k, v in snapshot.by_currency.items() if v > 0}
    total = snapshot.total_assets
    if not rows or not total:
        return pd.DataFrame()
    return pd.DataFrame([{"Currency": k, "Value (€)": round(v, 2),
                          "Weight (%)": round(v / total * 100, 2)}
                         for k, v in sorted(rows.items(), key=lambda x: -x[1])])


def allocation_frame(rows: List[DriftRow]) -> pd.DataFrame:
    if not rows:
        return pd.DataFrame()
    df = pd.DataFrame([{"Sleeve": r.sleeve, "Value (€)": round(r.eur, 2),
                        "Actual (%)": round(r.actual_pct, 2),
                        "Target (%)": r.target_pct, "Drift (%)": r.drift,
                        "Status": str(r.status)}
                       for r in rows])
    return df.set_index("Sleeve")
