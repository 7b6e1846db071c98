"""
networth/fx.py  —  Currency conversion to EUR

Rates are expressed as EUR per one unit of the foreign currency.
"""

import logging
from typing import Dict, Mapping, Optional

from networth.models import FXOverride
from networth.validation import parse_rate

logger = logging.getLogger(__name__)

CONVERTED = ("USD", "CHF", "RON")


def to_eur(amount: float, currency: str, fx: Mapping[str, float]) -> float:
    """
    Convert `amount` in `currency` to EUR.

    EUR passes through. USD / CHF / RON are multiplied by their rate. Any
    other code is returned unchanged (treated as already EUR). Never raises:
    a zero or negative rate simply propagates.
    """
    if currency == "EUR":
        return amount
    if currency in CONVERTED:
        rate = fx.get(currency)
        if rate is None:
            logger.debug("No %s rate in FX table, passing %s through", currency, amount)
            return amount
        return amount * rate
    logger.debug("Unknown currency %r, treating %s as EUR", currency, amount)
    return amount


def effective_fx(base: Mapping[str, float],
                 override: Optional[FXOverride] = None) -> Dict[str, float]:
    """Base table with valid CHF / RON overrides applied. `base` is not modified."""
    fx = dict(base)
    if override is None:
        return fx
    for code, raw in (("CHF", override.chf), ("RON", override.ron)):
        rate = parse_rate(raw)
        if rate is not None:
            fx[code] = rate
        elif raw not in (None, ""):
            logger.debug("Ignoring %s override %r", code, raw)
    return fx
