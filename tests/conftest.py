import pytest

from networth.models import (
    BrokerageHolding, CashHolding, CryptoHolding, HistoryPoint, OtherAsset,
    PortfolioInput,
)

FX = {"USD": 0.92, "CHF": 1.03, "RON": 0.20}
PRICES = {"BTC": 55000.0, "ETH": 2800.0}


@pytest.fixture
def empty_input():
    return PortfolioInput(date="2025-09-01", fx=FX, crypto_prices=PRICES)


@pytest.fixture
def household():
    """A mixed portfolio touching every category and currency."""
    return PortfolioInput(
        date="2025-09-01",
        fx=FX,
        crypto_prices=PRICES,
        cash=[CashHolding("EUR", 1000), CashHolding("RON", 500),
              CashHolding("USD", 200), CashHolding("CHF", 100)],
        brokerage=[
            BrokerageHolding("VWCE", "Equities – Regional ETFs", "EUR", 2000),
            BrokerageHolding("XOM", "Energy Stocks", "USD", 1000),
            BrokerageHolding("CVX", "Energy Stocks", "USD", 500),
            BrokerageHolding("PHO", "Water ETF", "USD", 250),
        ],
        crypto=[CryptoHolding("BTC", 0.1), CryptoHolding("ETH", 1.0)],
        other_assets=[OtherAsset("Deposit", "EUR", 300), OtherAsset("Watch", "CHF", 100)],
        history=[HistoryPoint("2025-06-01", 10000.0), HistoryPoint("2025-07-01", 11000.0),
                 HistoryPoint("2025-08-01", 12000.0)],
        targets={"Emergency Fund": 10, "Crypto": 10, "Energy Stocks": 20,
                 "Water ETF": 5, "Flexible / Open": 5},
        crypto_split={"BTC": 80, "ETH": 20},
    )
