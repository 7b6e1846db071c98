"""
networth/models.py  —  Pure dataclasses, no dependencies on other networth modules.

Everything here is frozen: the engine builds new records instead of editing
the caller's input, and its result is immutable once produced.
"""

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union


# ── Sleeves ───────────────────────────────────────────────────────────────────

class Sleeve(str, Enum):
    """Known allocation buckets. Any other label is a custom sleeve."""
    EMERGENCY_FUND = "Emergency Fund"
    CRYPTO         = "Crypto"
    REGIONAL_ETFS  = "Equities – Regional ETFs"
    ASIA_ETFS      = "Equities – Asia ETFs"
    TECH_STOCKS    = "Individual Tech Stocks"
    ENERGY_STOCKS  = "Energy Stocks"
    HEALTHCARE     = "Healthcare Stocks"
    WATER_ETF      = "Water ETF"
    FLEXIBLE       = "Flexible / Open"

    def __str__(self) -> str:
        return self.value


# ── Raw holdings ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CashHolding:
    currency: str
    amount:   float   # may be negative (overdraft)


@dataclass(frozen=True)
class BrokerageHolding:
    name:     str      # ticker or account name
    label:    str      # sleeve, e.g. "Energy Stocks"
    currency: str
    amount:   float


@dataclass(frozen=True)
class CryptoHolding:
    coin:   str     # "BTC" or "ETH"
    amount: float   # native units


@dataclass(frozen=True)
class OtherAsset:
    name:     str
    currency: str
    amount:   float


# ── Normalized holdings (source fields + EUR value) ──────────────────────────

@dataclass(frozen=True)
class ValuedCash(CashHolding):
    eur: float = 0.0


@dataclass(frozen=True)
class ValuedBrokerage(BrokerageHolding):
    eur: float = 0.0


@dataclass(frozen=True)
class ValuedCrypto(CryptoHolding):
    eur: float = 0.0


@dataclass(frozen=True)
class ValuedOther(OtherAsset):
    eur: float = 0.0


def valued(cls, holding, eur: float):
    """Build a normalized record of type `cls` carrying the source fields of `holding`."""
    source = {f.name: getattr(holding, f.name) for f in fields(cls) if f.name != "eur"}
    return cls(**source, eur=eur)


# ── History / FX ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class HistoryPoint:
    date:          str              # "YYYY-MM-DD"
    net_worth_eur: Optional[float]


@dataclass(frozen=True)
class FXOverride:
    """User-entered CHF / RON rates. Raw values; parsed by fx.effective_fx."""
    chf: Union[str, float, None] = None
    ron: Union[str, float, None] = None


# ── Engine input ──────────────────────────────────────────────────────────────

def _raw(value, cls):
    """Coerce to exactly `cls`; a normalized record loses its eur value."""
    if type(value) is cls:
        return value
    if isinstance(value, cls):
        return cls(**{f.name: getattr(value, f.name) for f in fields(cls)})
    return cls(**value)


def _tuple(values, cls):
    return tuple(_raw(v, cls) for v in (values or ()))


@dataclass(frozen=True)
class PortfolioInput:
    date:          str
    fx:            Mapping[str, float]
    crypto_prices: Mapping[str, float]
    cash:          Tuple[CashHolding, ...]      = ()
    brokerage:     Tuple[BrokerageHolding, ...] = ()
    crypto:        Tuple[CryptoHolding, ...]    = ()
    other_assets:  Tuple[OtherAsset, ...]       = ()
    history:       Tuple[HistoryPoint, ...]     = ()
    targets:       Mapping[str, float]          = field(default_factory=dict)
    crypto_split:  Mapping[str, float]          = field(default_factory=dict)
    fx_override:   Optional[FXOverride]         = None

    def __post_init__(self) -> None:
        # Accept lists / dicts from callers, store tuples so edits must go
        # through dataclasses.replace().
        object.__setattr__(self, "cash",         _tuple(self.cash, CashHolding))
        object.__setattr__(self, "brokerage",    _tuple(self.brokerage, BrokerageHolding))
        object.__setattr__(self, "crypto",       _tuple(self.crypto, CryptoHolding))
        object.__setattr__(self, "other_assets", _tuple(self.other_assets, OtherAsset))
        object.__setattr__(self, "history",      _tuple(self.history, HistoryPoint))
        object.__setattr__(self, "fx",            dict(self.fx or {}))
        object.__setattr__(self, "crypto_prices", dict(self.crypto_prices or {}))
        object.__setattr__(self, "targets",       {str(k): v for k, v in (self.targets or {}).items()})
        object.__setattr__(self, "crypto_split",  dict(self.crypto_split or {}))
        if isinstance(self.fx_override, dict):
            object.__setattr__(self, "fx_override", FXOverride(**self.fx_override))

    def to_dict(self) -> dict:
        """Plain JSON-able shape, used by the store."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "PortfolioInput":
        """
        Rebuild an input from its dict form. Amounts and rates are parsed
        leniently: anything that is not a finite number becomes 0.
        """
        from networth.validation import parse_amount

        def num_map(d):
            return {str(k): parse_amount(v) for k, v in (d or {}).items()}

        def history(points):
            out = []
            for p in points or ():
                raw = p.get("net_worth_eur", p.get("netWorthEUR"))
                out.append(HistoryPoint(date=str(p.get("date", "")),
                                        net_worth_eur=None if raw is None else parse_amount(raw)))
            return out

        override = data.get("fx_override")
        return cls(
            date=str(data.get("date", "")),
            fx=num_map(data.get("fx")),
            crypto_prices=num_map(data.get("crypto_prices")),
            cash=[CashHolding(currency=str(c.get("currency", "EUR")).upper(),
                              amount=parse_amount(c.get("amount")))
                  for c in data.get("cash") or ()],
            brokerage=[BrokerageHolding(name=str(b.get("name", "")),
                                        label=str(b.get("label") or "Custom"),
                                        currency=str(b.get("currency", "EUR")).upper(),
                                        amount=parse_amount(b.get("amount")))
                       for b in data.get("brokerage") or ()],
            crypto=[CryptoHolding(coin=str(c.get("coin", "")).upper(),
                                  amount=parse_amount(c.get("amount")))
                    for c in data.get("crypto") or ()],
            other_assets=[OtherAsset(name=str(o.get("name", "")),
                                     currency=str(o.get("currency", "EUR")).upper(),
                                     amount=parse_amount(o.get("amount")))
                          for o in data.get("other_assets") or ()],
            history=history(data.get("history")),
            targets=num_map(data.get("targets")),
            crypto_split=num_map(data.get("crypto_split")),
            fx_override=FXOverride(**override) if override else None,
        )


# ── Engine output ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class BreakdownRow:
    name:   str
    eur:    float
    target: Optional[float]   # None: no single target (brokerage)


@dataclass(frozen=True)
class ComputedPortfolio:
    cash:              Tuple[ValuedCash, ...]
    brokerage:         Tuple[ValuedBrokerage, ...]
    crypto:            Tuple[ValuedCrypto, ...]
    other_assets:      Tuple[ValuedOther, ...]
    cash_total:        float
    brokerage_total:   float
    crypto_total:      float
    other_total:       float
    liabilities_total: float
    total_assets:      float
    net_worth:         float
    last_month:        float
    baseline:          float
    mom_abs:           float
    mom_pct:           float
    cum_abs:           float
    cum_pct:           float
    breakdown:         Tuple[BreakdownRow, ...]
    by_label:          Mapping[str, float]
    by_currency:       Mapping[str, float]
    fx:                Mapping[str, float]

    def __post_init__(self) -> None:
        for name in ("by_label", "by_currency", "fx"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))
