import matplotlib
matplotlib.use("Agg")

from dataclasses import replace

import pytest

from networth import charts
from networth.aggregator import compute
from networth.analysis import allocation_frame, breakdown_frame, currency_frame
from networth.drift import analyze_allocation
from networth.models import CashHolding


def test_breakdown_frame(household):
    s = compute(household)
    df = breakdown_frame(s)
    assert list(df["Category"]) == [b.name for b in s.breakdown]
    assert df["Weight (%)"].sum() == pytest.approx(100, abs=0.05)


def test_currency_frame_drops_zeros_and_sorts(household, empty_input):
    df = currency_frame(compute(household))
    assert list(df["Value (€)"]) == sorted(df["Value (€)"], reverse=True)
    assert (df["Value (€)"] > 0).all()
    assert currency_frame(compute(empty_input)).empty


def test_allocation_frame_indexed_by_sleeve(household):
    rows = analyze_allocation(compute(household), household.targets)
    df = allocation_frame(rows)
    assert df.index.name == "Sleeve"
    assert df.loc["Energy Stocks", "Status"] == str(rows[4].status)
    assert allocation_frame([]).empty


def test_empty_portfolio_frames(empty_input):
    assert breakdown_frame(compute(empty_input)).empty


class TestCharts:
    def test_currency_pie_saves_png(self, household, tmp_path):
        path = str(tmp_path / "currency.png")
        assert charts.show_currency_pie(compute(household), filename=path, show=False) == path
        assert (tmp_path / "currency.png").stat().st_size > 0

    def test_drift_bars_saves_png(self, household, tmp_path):
        s = compute(household)
        path = str(tmp_path / "allocation.png")
        rows = analyze_allocation(s, household.targets)
        assert charts.show_drift_bars(rows, filename=path, show=False) == path

    def test_nothing_to_plot(self, empty_input, household, tmp_path):
        assert charts.show_currency_pie(compute(empty_input), str(tmp_path / "a.png"), False) is None
        rows = analyze_allocation(compute(household), {})
        assert charts.show_drift_bars(rows, str(tmp_path / "b.png"), False) is None


def test_overdrawn_currency_is_left_out_of_pie(empty_input, tmp_path):
    inp = replace(empty_input, cash=[CashHolding("EUR", 1000), CashHolding("RON", -500)])
    s = compute(inp)
    assert s.by_currency["RON"] < 0
    assert list(currency_frame(s)["Currency"]) == ["EUR"]
    path = str(tmp_path / "currency.png")
    assert charts.show_currency_pie(s, filename=path, show=False) == path
