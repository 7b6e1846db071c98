"""
networth/drift.py  —  Allocation vs target

A sleeve drifts when its share of net worth moves away from its target.
Inside the ±BAND tolerance (inclusive) it is "Within band"; beyond it the
sleeve is flagged Overweight or Underweight. Crypto's BTC/ETH split is
checked the same way, but as shares of the crypto sleeve.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Dict, List, Mapping, Optional

from networth.defaults import BAND
from networth.models import ComputedPortfolio, Sleeve


class DriftStatus(str, Enum):
    OVERWEIGHT  = "Overweight"
    UNDERWEIGHT = "Underweight"
    WITHIN_BAND = "Within band"
    NO_TARGET   = "n/a"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DriftRow:
    sleeve:     str
    eur:        float
    actual_pct: float
    target_pct: Optional[float]
    drift:      Optional[float]
    status:     DriftStatus

    @property
    def is_flagged(self) -> bool:
        return self.status in (DriftStatus.OVERWEIGHT, DriftStatus.UNDERWEIGHT)

    @property
    def flag(self) -> str:
        """e.g. 'Overweight (+7.00%)', 'Within band (-1.25%)', 'n/a'."""
        if self.drift is None:
            return str(DriftStatus.NO_TARGET)
        sign = "+" if self.status is DriftStatus.OVERWEIGHT else ""
        return f"{self.status} ({sign}{self.drift:.2f}%)"


def round2(value: float) -> float:
    """Half-up rounding to 2 decimals on the decimal representation."""
    # + 0.0 turns -0.0 into 0.0
    return float(Decimal(repr(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)) + 0.0


def classify(drift: float, band: float = BAND) -> DriftStatus:
    if abs(drift) > band:
        return DriftStatus.OVERWEIGHT if drift > 0 else DriftStatus.UNDERWEIGHT
    return DriftStatus.WITHIN_BAND


def share(part: float, whole: float) -> float:
    return part / whole * 100 if whole else 0.0


def drift_row(sleeve: str, eur: float, whole: float,
              target: Optional[float], band: float = BAND) -> DriftRow:
    actual = share(eur, whole)
    if target is None:
        return DriftRow(sleeve, eur, actual, None, None, DriftStatus.NO_TARGET)
    drift = round2(actual - target)
    return DriftRow(sleeve, eur, actual, target, drift, classify(drift, band))


def sleeve_values(snapshot: ComputedPortfolio) -> Dict[str, float]:
    """EUR per sleeve: fixed sleeves first, then brokerage labels in first-seen order."""
    values: Dict[str, float] = {
        Sleeve.EMERGENCY_FUND.value: snapshot.cash_total,
        Sleeve.CRYPTO.value:         snapshot.crypto_total,
        Sleeve.FLEXIBLE.value:       snapshot.other_total,
    }
    for label, eur in snapshot.by_label.items():
        # a label that repeats a fixed sleeve keeps the fixed value
        values.setdefault(label, eur)
    return values


def analyze_allocation(snapshot: ComputedPortfolio, targets: Mapping[str, float],
                       band: float = BAND) -> List[DriftRow]:
    """
    One row per sleeve. Targeted sleeves with no holdings are listed last
    with a 0% actual share.
    """
    values = sleeve_values(snapshot)
    for sleeve in targets:
        values.setdefault(sleeve, 0.0)
    return [drift_row(sleeve, eur, snapshot.net_worth, targets.get(sleeve), band)
            for sleeve, eur in values.items()]


def analyze_crypto_split(snapshot: ComputedPortfolio, split: Mapping[str, float],
                         band: float = BAND) -> List[DriftRow]:
    """Coin share of the crypto sleeve vs its split target."""
    coin_eur: Dict[str, float] = {}
    for c in snapshot.crypto:
        coin_eur[c.coin] = coin_eur.get(c.coin, 0.0) + c.eur
    return [drift_row(coin, coin_eur.get(coin, 0.0), snapshot.crypto_total, target, band)
            for coin, target in split.items()]
