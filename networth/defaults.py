"""
networth/defaults.py  —  Configuration constants and the starter input

Update the rates and prices manually; nothing here is fetched live.
"""

import os
from datetime import date
from typing import Dict

from networth.models import PortfolioInput, Sleeve

DB_FILE = os.environ.get("NETWORTH_DB", "networth.db")

SUPPORTED_CURRENCIES = ("EUR", "USD", "CHF", "RON")
SUPPORTED_COINS      = ("BTC", "ETH")

# Rate to EUR for one unit of the currency. EUR is implicit (1).
DEFAULT_FX: Dict[str, float] = {"USD": 0.92, "CHF": 1.03, "RON": 0.20}

# EUR spot prices
DEFAULT_CRYPTO_PRICES: Dict[str, float] = {"BTC": 55000.0, "ETH": 2800.0}

# % of net worth. Need not sum to 100, Flexible / Open takes the residual.
DEFAULT_TARGETS: Dict[str, float] = {
    Sleeve.EMERGENCY_FUND.value: 10.0,
    Sleeve.CRYPTO.value:         10.0,
    Sleeve.REGIONAL_ETFS.value:  20.0,
    Sleeve.ASIA_ETFS.value:      10.0,
    Sleeve.TECH_STOCKS.value:    10.0,
    Sleeve.ENERGY_STOCKS.value:  20.0,
    Sleeve.HEALTHCARE.value:     10.0,
    Sleeve.WATER_ETF.value:       5.0,
    Sleeve.FLEXIBLE.value:        5.0,
}

# % of the crypto sleeve
DEFAULT_CRYPTO_SPLIT: Dict[str, float] = {"BTC": 80.0, "ETH": 20.0}

# Drift tolerance in percentage points
BAND = 5.0


def default_input() -> PortfolioInput:
    """Empty portfolio with the default rates, prices and targets."""
    return PortfolioInput(
        date=date.today().strftime("%Y-%m-%d"),
        fx=DEFAULT_FX,
        crypto_prices=DEFAULT_CRYPTO_PRICES,
        targets=DEFAULT_TARGETS,
        crypto_split=DEFAULT_CRYPTO_SPLIT,
    )
