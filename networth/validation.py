"""
networth/validation.py  —  Input validation rules

All validators return a list of error strings (empty = valid).
Keeping rules here means the CLI just calls validate_*() and shows the
results; the engine itself never rejects input.

parse_amount / parse_rate are the lenient parsers used when reading user or
stored values: bad numbers become 0 (amounts) or None (rates).
"""

import math
import re
from typing import Dict, List, Optional

from networth.defaults import SUPPORTED_COINS, SUPPORTED_CURRENCIES

_CURRENCY_CODE = re.compile(r'^[A-Z]{3}$')

# Sanity bounds, "almost certainly a typo" guards
_MAX_AMOUNT = 1_000_000_000.0


def _to_float(raw) -> Optional[float]:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def parse_amount(raw) -> float:
    """Finite number or 0.0."""
    value = _to_float(raw)
    return 0.0 if value is None else value


def parse_rate(raw) -> Optional[float]:
    """Finite number > 0, otherwise None (keep the base rate)."""
    value = _to_float(raw)
    return value if value is not None and value > 0 else None


def validate_currency(currency: str) -> List[str]:
    errors = []
    c = (currency or "").strip().upper()
    if not c:
        errors.append("Currency cannot be empty.")
    elif not _CURRENCY_CODE.match(c):
        errors.append(f"Currency '{c}' must be a 3-letter code.")
    elif c not in SUPPORTED_CURRENCIES:
        errors.append(f"Currency '{c}' is not supported "
                      f"({', '.join(SUPPORTED_CURRENCIES)}).")
    return errors


def validate_coin(coin: str) -> List[str]:
    c = (coin or "").strip().upper()
    if c not in SUPPORTED_COINS:
        return [f"Coin '{c}' is not supported ({', '.join(SUPPORTED_COINS)})."]
    return []


def validate_amount(amount: float, allow_negative: bool = False) -> List[str]:
    errors = []
    if not math.isfinite(amount):
        errors.append("Amount must be a number.")
        return errors
    if amount < 0 and not allow_negative:
        errors.append("Amount cannot be negative.")
    elif amount == 0:
        errors.append("Amount must be different from zero.")
    if abs(amount) > _MAX_AMOUNT:
        errors.append(f"Amount {amount:,.2f} seems extremely large. Please double-check.")
    return errors


def validate_name(name: str) -> List[str]:
    errors = []
    n = (name or "").strip()
    if not n:
        errors.append("Please enter a name.")
    elif len(n) > 100:
        errors.append("Name is too long (max 100 characters).")
    return errors


def validate_targets(targets: Dict[str, float]) -> List[str]:
    """Each target must lie in 0–100. The sum is not required to be 100."""
    errors = []
    for sleeve, pct in targets.items():
        if not 0 <= pct <= 100:
            errors.append(f"Target for '{sleeve}' must be between 0 and 100, got {pct}.")
    total = sum(targets.values())
    if total > 100 + 1e-9:
        errors.append(f"Targets add up to {total:.2f}%, more than 100%.")
    return errors
