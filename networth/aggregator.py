"""
networth/aggregator.py  —  Totals, groupings and the compute() entry point

compute() is a pure function of its input: it resolves the FX table,
values every holding, sums the categories and fills in the month-on-month
and cumulative change. Nothing is rounded here; rounding is for display.
"""

import logging
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from networth.fx import effective_fx
from networth.models import (
    BreakdownRow, ComputedPortfolio, PortfolioInput, Sleeve,
    ValuedBrokerage, ValuedCash, ValuedCrypto, ValuedOther,
)
from networth.normalizer import (
    normalize_brokerage, normalize_cash, normalize_crypto, normalize_other,
)
from networth.returns import Period, change, reference_value

logger = logging.getLogger(__name__)

CASH_AND_EMERGENCY = "Cash & Emergency Fund"
BROKERAGE_HOLDINGS = "Brokerage Holdings"
CRYPTO             = "Crypto"
OTHER_ASSETS       = "Other Assets"

# Fiat buckets always shown in the exposure view, in this order
EXPOSURE_CURRENCIES = ("EUR", "USD", "RON", "CHF")

# Cash in these currencies is left out of the exposure view
EXPOSURE_EXCLUDED_CASH = ("USD",)


def total(records: Iterable) -> float:
    return sum((r.eur for r in records), 0.0)


def by_label(positions: Iterable[ValuedBrokerage]) -> Dict[str, float]:
    """Brokerage value per sleeve label, in first-seen order."""
    out: Dict[str, float] = {}
    for p in positions:
        out[p.label] = out.get(p.label, 0.0) + p.eur
    return out


def by_currency(cash: Sequence[ValuedCash],
                brokerage: Sequence[ValuedBrokerage],
                crypto: Sequence[ValuedCrypto],
                other: Sequence[ValuedOther]) -> Dict[str, float]:
    """
    EUR value per currency exposure. Crypto is its own bucket; cash,
    brokerage and other assets add up per currency code, except cash in USD.
    """
    out: Dict[str, float] = {"Crypto": total(crypto)}
    for code in EXPOSURE_CURRENCIES:
        out[code] = 0.0
    for c in cash:
        if c.currency in EXPOSURE_EXCLUDED_CASH:
            continue
        out[c.currency] = out.get(c.currency, 0.0) + c.eur
    for r in (*brokerage, *other):
        out[r.currency] = out.get(r.currency, 0.0) + r.eur
    return out


def breakdown(cash_total: float, brokerage_total: float, crypto_total: float,
              other_total: float, targets: Mapping[str, float]) -> Tuple[BreakdownRow, ...]:
    """Fixed four rows. Brokerage has no single target; its labels are targeted individually."""
    return (
        BreakdownRow(CASH_AND_EMERGENCY, cash_total, targets.get(Sleeve.EMERGENCY_FUND.value)),
        BreakdownRow(BROKERAGE_HOLDINGS, brokerage_total, None),
        BreakdownRow(CRYPTO, crypto_total, targets.get(Sleeve.CRYPTO.value)),
        BreakdownRow(OTHER_ASSETS, other_total, targets.get(Sleeve.FLEXIBLE.value)),
    )


def _reference(inp: PortfolioInput, period: Period, net_worth: float) -> float:
    ref: Optional[float] = reference_value(inp.history, period, net_worth)
    return net_worth if ref is None else ref


def compute(inp: PortfolioInput) -> ComputedPortfolio:
    fx = effective_fx(inp.fx, inp.fx_override)

    cash      = normalize_cash(inp.cash, fx)
    brokerage = normalize_brokerage(inp.brokerage, fx)
    crypto    = normalize_crypto(inp.crypto, inp.crypto_prices)
    other     = normalize_other(inp.other_assets, fx)

    cash_total      = total(cash)
    brokerage_total = total(brokerage)
    crypto_total    = total(crypto)
    other_total     = total(other)
    liabilities_total = 0.0

    total_assets = cash_total + brokerage_total + crypto_total + other_total
    net_worth    = total_assets - liabilities_total

    last_month = _reference(inp, Period.MOM, net_worth)
    baseline   = _reference(inp, Period.ALL, net_worth)
    mom = change(net_worth, last_month)
    cum = change(net_worth, baseline)

    logger.debug("Net worth %.2f EUR (cash %.2f, brokerage %.2f, crypto %.2f, other %.2f)",
                 net_worth, cash_total, brokerage_total, crypto_total, other_total)

    return ComputedPortfolio(
        cash=cash, brokerage=brokerage, crypto=crypto, other_assets=other,
        cash_total=cash_total,
        brokerage_total=brokerage_total,
        crypto_total=crypto_total,
        other_total=other_total,
        liabilities_total=liabilities_total,
        total_assets=total_assets,
        net_worth=net_worth,
        last_month=last_month,
        baseline=baseline,
        mom_abs=mom.abs, mom_pct=mom.pct,
        cum_abs=cum.abs, cum_pct=cum.pct,
        breakdown=breakdown(cash_total, brokerage_total, crypto_total, other_total, inp.targets),
        by_label=by_label(brokerage),
        by_currency=by_currency(cash, brokerage, crypto, other),
        fx=fx,
    )
