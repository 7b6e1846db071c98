from dataclasses import replace

import pytest

from networth.aggregator import compute
from networth.drift import (
    DriftStatus, analyze_allocation, analyze_crypto_split, classify, round2,
)
from networth.models import BrokerageHolding, CashHolding, CryptoHolding, OtherAsset


def _rows_by_sleeve(rows):
    return {r.sleeve: r for r in rows}


def test_overweight_scenario(empty_input):
    inp = replace(empty_input, cash=[CashHolding("EUR", 27)],
                  other_assets=[OtherAsset("Rest", "EUR", 73)],
                  targets={"Emergency Fund": 20})
    row = _rows_by_sleeve(analyze_allocation(compute(inp), inp.targets))["Emergency Fund"]

    assert row.drift == 7.00
    assert row.status is DriftStatus.OVERWEIGHT
    assert row.flag == "Overweight (+7.00%)"
    assert row.is_flagged


def test_underweight_flag_keeps_sign(empty_input):
    inp = replace(empty_input, cash=[CashHolding("EUR", 13)],
                  other_assets=[OtherAsset("Rest", "EUR", 87)],
                  targets={"Emergency Fund": 20})
    row = analyze_allocation(compute(inp), inp.targets)[0]
    assert row.status is DriftStatus.UNDERWEIGHT
    assert row.flag == "Underweight (-7.00%)"


@pytest.mark.parametrize("drift, status", [
    (5.0, DriftStatus.WITHIN_BAND),
    (-5.0, DriftStatus.WITHIN_BAND),
    (0.0, DriftStatus.WITHIN_BAND),
    (5.01, DriftStatus.OVERWEIGHT),
    (-5.01, DriftStatus.UNDERWEIGHT),
])
def test_band_boundary_is_inclusive(drift, status):
    assert classify(drift) is status


def test_drift_of_exactly_five_is_within_band(empty_input):
    inp = replace(empty_input, cash=[CashHolding("EUR", 25)],
                  other_assets=[OtherAsset("Rest", "EUR", 75)],
                  targets={"Emergency Fund": 20})
    row = analyze_allocation(compute(inp), inp.targets)[0]
    assert row.drift == 5.0
    assert row.flag == "Within band (5.00%)"
    assert not row.is_flagged


def test_round2_is_half_up():
    assert round2(2.675) == 2.68
    assert round2(-2.675) == -2.68
    assert round2(7.000000000000004) == 7.0


def test_sleeves_without_target_are_not_applicable(household):
    rows = _rows_by_sleeve(analyze_allocation(compute(household), household.targets))
    regional = rows["Equities – Regional ETFs"]
    assert regional.target_pct is None
    assert regional.drift is None
    assert regional.status is DriftStatus.NO_TARGET
    assert regional.flag == "n/a"


def test_sleeve_order(household):
    sleeves = [r.sleeve for r in analyze_allocation(compute(household), household.targets)]
    assert sleeves == [
        "Emergency Fund", "Crypto", "Flexible / Open",
        "Equities – Regional ETFs", "Energy Stocks", "Water ETF",
    ]


def test_targeted_sleeve_without_holdings_is_listed(household):
    targets = {**household.targets, "Healthcare Stocks": 10}
    rows = analyze_allocation(compute(household), targets)
    last = rows[-1]
    assert last.sleeve == "Healthcare Stocks"
    assert last.actual_pct == 0
    assert last.drift == -10
    assert last.status is DriftStatus.UNDERWEIGHT


def test_brokerage_label_matching_fixed_sleeve_is_not_duplicated(empty_input):
    inp = replace(empty_input, cash=[CashHolding("EUR", 50)],
                  brokerage=[BrokerageHolding("X", "Emergency Fund", "EUR", 50)])
    sleeves = [r.sleeve for r in analyze_allocation(compute(inp), {})]
    assert sleeves.count("Emergency Fund") == 1


def test_zero_net_worth_gives_zero_actual(empty_input):
    rows = analyze_allocation(compute(empty_input), {"Crypto": 10})
    crypto = _rows_by_sleeve(rows)["Crypto"]
    assert crypto.actual_pct == 0
    assert crypto.drift == -10


def test_empty_targets_mark_everything_not_applicable(household):
    rows = analyze_allocation(compute(household), {})
    assert all(r.status is DriftStatus.NO_TARGET for r in rows)


class TestCryptoSplit:
    def test_share_of_crypto_sleeve(self, empty_input):
        # 0.1 BTC = 5500, 1 ETH = 2800 → BTC 66.27%
        inp = replace(empty_input, crypto=[CryptoHolding("BTC", 0.1), CryptoHolding("ETH", 1)])
        rows = _rows_by_sleeve(analyze_crypto_split(compute(inp), {"BTC": 80, "ETH": 20}))

        assert rows["BTC"].actual_pct == pytest.approx(5500 / 8300 * 100)
        assert rows["BTC"].drift == round2(5500 / 8300 * 100 - 80)
        assert rows["BTC"].status is DriftStatus.UNDERWEIGHT
        assert rows["ETH"].status is DriftStatus.OVERWEIGHT

    def test_no_crypto_gives_zero_shares(self, empty_input):
        rows = analyze_crypto_split(compute(empty_input), {"BTC": 80, "ETH": 20})
        assert [r.actual_pct for r in rows] == [0, 0]

    def test_empty_split(self, household):
        assert analyze_crypto_split(compute(household), {}) == []


def test_tiny_negative_drift_is_not_signed_zero(empty_input):
    assert str(round2(-0.001)) == "0.0"
    # 33.333% actual vs a 33.334% target
    inp = replace(empty_input, cash=[CashHolding("EUR", 1)],
                  other_assets=[OtherAsset("Rest", "EUR", 2)],
                  targets={"Emergency Fund": 33.334})
    row = analyze_allocation(compute(inp), inp.targets)[0]
    assert row.flag == "Within band (0.00%)"
