"""
networth/portfolio.py  —  Edits to a PortfolioInput

Every edit returns a new PortfolioInput built with dataclasses.replace();
the one passed in is never modified, so a computed snapshot always matches
the input it was computed from.
"""

from dataclasses import replace
from datetime import datetime
from typing import Optional

from networth.models import (
    BrokerageHolding, CashHolding, ComputedPortfolio, CryptoHolding,
    FXOverride, HistoryPoint, OtherAsset, PortfolioInput,
)


# ── Brokerage ─────────────────────────────────────────────────────────────────

def add_brokerage(inp: PortfolioInput, name: str, label: str, currency: str,
                  amount: float) -> PortfolioInput:
    """Top up a position by name, or open it. Non-positive amounts are ignored."""
    name = name.strip()
    if not name or amount <= 0:
        return inp
    positions = list(inp.brokerage)
    for i, p in enumerate(positions):
        if p.name == name:
            positions[i] = replace(p, amount=p.amount + amount)
            break
    else:
        positions.append(BrokerageHolding(name=name, label=label.strip() or "Custom",
                                          currency=currency.upper(), amount=amount))
    return replace(inp, brokerage=positions)


def withdraw_brokerage(inp: PortfolioInput, name: str, currency: str,
                       amount: float) -> PortfolioInput:
    """
    Reduce the position matching name and currency, never below zero.
    A position that reaches zero is removed. No match: unchanged.
    """
    if amount <= 0:
        return inp
    currency = currency.upper()
    positions = list(inp.brokerage)
    for i, p in enumerate(positions):
        if p.name == name.strip() and p.currency == currency:
            remaining = max(0.0, p.amount - amount)
            if remaining == 0:
                del positions[i]
            else:
                positions[i] = replace(p, amount=remaining)
            return replace(inp, brokerage=positions)
    return inp


# ── Cash / crypto / other ─────────────────────────────────────────────────────

def set_cash(inp: PortfolioInput, currency: str, amount: float) -> PortfolioInput:
    """Set the balance held in `currency` (replaces, does not add)."""
    currency = currency.upper()
    cash = [c for c in inp.cash if c.currency != currency]
    index = next((i for i, c in enumerate(inp.cash) if c.currency == currency), len(cash))
    cash.insert(index, CashHolding(currency=currency, amount=amount))
    return replace(inp, cash=cash)


def add_crypto(inp: PortfolioInput, coin: str, amount: float) -> PortfolioInput:
    coin = coin.upper()
    coins = list(inp.crypto)
    for i, c in enumerate(coins):
        if c.coin == coin:
            coins[i] = replace(c, amount=c.amount + amount)
            break
    else:
        coins.append(CryptoHolding(coin=coin, amount=amount))
    return replace(inp, crypto=coins)


def add_other(inp: PortfolioInput, name: str, currency: str, amount: float) -> PortfolioInput:
    return replace(inp, other_assets=[*inp.other_assets,
                                      OtherAsset(name=name.strip(), currency=currency.upper(),
                                                 amount=amount)])


# ── Snapshots / settings ──────────────────────────────────────────────────────

def record_snapshot(inp: PortfolioInput, snapshot: ComputedPortfolio,
                    date: Optional[str] = None) -> PortfolioInput:
    """Append today's net worth to the history."""
    if date is None:
        date = datetime.today().strftime("%Y-%m-%d")
    point = HistoryPoint(date=date, net_worth_eur=round(snapshot.net_worth, 2))
    return replace(inp, history=[*inp.history, point])


def with_fx_override(inp: PortfolioInput, chf=None, ron=None) -> PortfolioInput:
    if chf in (None, "") and ron in (None, ""):
        return replace(inp, fx_override=None)
    return replace(inp, fx_override=FXOverride(chf=chf, ron=ron))


def set_target(inp: PortfolioInput, sleeve: str, pct: Optional[float]) -> PortfolioInput:
    """Set a sleeve target; None removes it."""
    targets = {k: v for k, v in inp.targets.items() if k != str(sleeve)}
    if pct is not None:
        targets[str(sleeve)] = pct
    return replace(inp, targets=targets)
