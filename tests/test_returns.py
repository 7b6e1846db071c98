from dataclasses import replace

import pytest

from networth.aggregator import compute
from networth.models import CashHolding, HistoryPoint
from networth.returns import Period, ReturnFigure, compute_return, reference_value


def _history(*values):
    return [HistoryPoint(f"2025-{i + 1:02d}-01", v) for i, v in enumerate(values)]


@pytest.fixture
def worth_43630(empty_input):
    return replace(empty_input, cash=[CashHolding("EUR", 43630)])


@pytest.mark.parametrize("period", list(Period))
def test_empty_history_gives_zero_change(worth_43630, period):
    s = compute(worth_43630)
    assert compute_return(s, [], period) == ReturnFigure(abs=0, pct=0)


def test_all_compares_with_baseline(worth_43630):
    s = compute(worth_43630)
    r = compute_return(s, [HistoryPoint("2024-09-01", 30000)], Period.ALL)
    assert r.abs == pytest.approx(13630)
    assert r.pct == pytest.approx(45.4333, rel=1e-4)


def test_mom_compares_with_last_snapshot(worth_43630):
    s = compute(worth_43630)
    r = compute_return(s, _history(30000, 40000, 43000), Period.MOM)
    assert r.abs == pytest.approx(630)
    assert r.pct == pytest.approx(630 / 43000 * 100)


def test_zero_reference_gives_zero_pct(worth_43630):
    s = compute(worth_43630)
    r = compute_return(s, _history(0), Period.ALL)
    assert r.abs == 43630
    assert r.pct == 0


def test_missing_reference_value_returns_none(worth_43630):
    s = compute(worth_43630)
    assert compute_return(s, _history(None), Period.MOM) is None


class TestReferenceResolution:
    history = _history(*range(1, 13))   # 12 snapshots: 1 .. 12

    def test_mom_is_last_and_all_is_first(self):
        assert reference_value(self.history, Period.MOM, fallback=-1) == 12
        assert reference_value(self.history, Period.ALL, fallback=-1) == 1

    @pytest.mark.parametrize("period", [Period.THREE_M, Period.SIX_M, Period.ONE_YEAR])
    def test_longer_periods_match_mom(self, period):
        assert reference_value(self.history, period, fallback=-1) == 12

    @pytest.mark.parametrize("period", [Period.THREE_M, Period.SIX_M, Period.ONE_YEAR])
    def test_longer_period_returns_equal_mom(self, worth_43630, period):
        s = compute(worth_43630)
        assert compute_return(s, self.history, period) == compute_return(s, self.history, Period.MOM)

    def test_empty_history_uses_fallback(self):
        assert reference_value([], Period.SIX_M, fallback=7.5) == 7.5

    def test_baseline_without_value_uses_fallback(self):
        history = [HistoryPoint("2025-01-01", None), HistoryPoint("2025-02-01", 900.0)]
        assert reference_value(history, Period.ALL, fallback=1000) == 1000
        assert reference_value(history, Period.MOM, fallback=1000) == 900.0


def test_all_agrees_with_cumulative_when_baseline_is_missing(worth_43630):
    inp = replace(worth_43630, history=[HistoryPoint("2025-01-01", None)])
    s = compute(inp)
    r = compute_return(s, inp.history, Period.ALL)
    assert (r.abs, r.pct) == (s.cum_abs, s.cum_pct) == (0, 0)


@pytest.mark.parametrize("text, period", [
    ("MoM", Period.MOM), ("mom", Period.MOM), ("3m", Period.THREE_M),
    ("6M", Period.SIX_M), ("1y", Period.ONE_YEAR), (" All ", Period.ALL),
])
def test_period_parse(text, period):
    assert Period.parse(text) is period


def test_period_parse_rejects_unknown():
    with pytest.raises(ValueError):
        Period.parse("2W")


def test_history_is_not_reordered(worth_43630):
    # out-of-order dates: position decides, not date
    history = [HistoryPoint("2025-08-01", 40000), HistoryPoint("2025-01-01", 20000)]
    s = compute(worth_43630)
    assert compute_return(s, history, Period.ALL).abs == pytest.approx(3630)
    assert compute_return(s, history, Period.MOM).abs == pytest.approx(23630)
