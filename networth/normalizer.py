"""
networth/normalizer.py  —  Value each holding in EUR

Every function returns new records (the Valued* dataclasses) carrying all the
source fields plus `eur`; the caller's holdings are left untouched.
"""

import logging
from typing import Iterable, Mapping, Tuple

from networth.fx import to_eur
from networth.models import (
    BrokerageHolding, CashHolding, CryptoHolding, OtherAsset,
    ValuedBrokerage, ValuedCash, ValuedCrypto, ValuedOther, valued,
)

logger = logging.getLogger(__name__)


def normalize_cash(cash: Iterable[CashHolding],
                   fx: Mapping[str, float]) -> Tuple[ValuedCash, ...]:
    return tuple(valued(ValuedCash, c, to_eur(c.amount, c.currency, fx)) for c in cash)


def normalize_brokerage(positions: Iterable[BrokerageHolding],
                        fx: Mapping[str, float]) -> Tuple[ValuedBrokerage, ...]:
    return tuple(valued(ValuedBrokerage, p, to_eur(p.amount, p.currency, fx))
                 for p in positions)


def normalize_other(assets: Iterable[OtherAsset],
                    fx: Mapping[str, float]) -> Tuple[ValuedOther, ...]:
    return tuple(valued(ValuedOther, a, to_eur(a.amount, a.currency, fx)) for a in assets)


def normalize_crypto(coins: Iterable[CryptoHolding],
                     prices: Mapping[str, float]) -> Tuple[ValuedCrypto, ...]:
    """
    Value coins at their EUR spot price. Coins are checked upstream
    (validation.validate_coin); one without a price is valued at 0.
    """
    out = []
    for c in coins:
        price = prices.get(c.coin)
        if price is None:
            logger.warning("No EUR price for coin %r, valuing %s units at 0", c.coin, c.amount)
            price = 0.0
        out.append(valued(ValuedCrypto, c, c.amount * price))
    return tuple(out)
