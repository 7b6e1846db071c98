"""
networth/returns.py  —  Change in net worth over a period

History is a plain chronological list of snapshots without guaranteed monthly
spacing, so periods are resolved by position rather than by date:

    MoM, 3M, 6M, 1Y  →  last snapshot (closest prior entry)
    All              →  first snapshot (baseline)

3M / 6M / 1Y only become distinct once snapshots carry reliable spacing;
until then they compare against the same entry as MoM.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from networth.models import ComputedPortfolio, HistoryPoint


class Period(str, Enum):
    MOM       = "MoM"
    THREE_M   = "3M"
    SIX_M     = "6M"
    ONE_YEAR  = "1Y"
    ALL       = "All"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> "Period":
        t = text.strip().lower()
        for p in cls:
            if p.value.lower() == t:
                return p
        raise ValueError(f"Unknown period '{text}'. "
                         f"Choose one of {', '.join(p.value for p in cls)}.")


# TODO: resolve 3M / 6M / 1Y by snapshot date once history is monthly spaced
_FROM_BASELINE = {Period.ALL}


@dataclass(frozen=True)
class ReturnFigure:
    abs: float
    pct: float


def reference_value(history: Sequence[HistoryPoint], period: Period,
                    fallback: float) -> Optional[float]:
    """
    Net worth to compare against. Empty history gives `fallback` (the current
    net worth, so the change is zero), and so does a baseline without a
    value. Any other snapshot without a value gives None.
    """
    if not history:
        return fallback
    if Period(period) in _FROM_BASELINE:
        baseline = history[0].net_worth_eur
        return fallback if baseline is None else baseline
    return history[-1].net_worth_eur


def change(current: float, reference: float) -> ReturnFigure:
    delta = current - reference
    return ReturnFigure(abs=delta, pct=delta / reference * 100 if reference else 0.0)


def compute_return(snapshot: ComputedPortfolio, history: Sequence[HistoryPoint],
                   period: Period) -> Optional[ReturnFigure]:
    reference = reference_value(history, period, snapshot.net_worth)
    if reference is None:
        return None
    return change(snapshot.net_worth, reference)
