import pytest

from networth import cli as cli_module
from networth.cli import CLI
from networth.store import Store


@pytest.fixture
def store(tmp_path):
    s = Store(str(tmp_path / "networth.db"))
    yield s
    s.close()


def _answers(monkeypatch, *answers):
    it = iter(answers)
    monkeypatch.setattr(cli_module.Prompt, "ask", lambda *a, **kw: next(it))


def test_starts_from_saved_input(store, household):
    store.save(household)
    assert CLI(store=store).input == household


def test_starts_from_defaults_without_store():
    app = CLI()
    assert app.input.cash == ()
    assert app.snapshot.net_worth == 0


def test_edit_is_saved(monkeypatch, store, empty_input):
    app = CLI(store=store, inp=empty_input)
    _answers(monkeypatch, "pg", "Custom", "USD", "100")
    app.add_brokerage()
    assert app.input.brokerage[0].name == "PG"
    assert store.load() == app.input


def test_invalid_amount_changes_nothing(monkeypatch, store, empty_input):
    app = CLI(store=store, inp=empty_input)
    _answers(monkeypatch, "Car", "EUR", "abc")
    app.add_other()
    assert app.input is empty_input
    assert store.load() is None


def test_unchanged_edit_is_not_saved(monkeypatch, store, household):
    app = CLI(store=store, inp=household)
    _answers(monkeypatch, "NOPE", "USD", "10")
    app.withdraw_brokerage()
    assert app.input is household
    assert store.load() is None


def test_choose_period(monkeypatch, household):
    app = CLI(inp=household)
    _answers(monkeypatch, "1y")
    app.choose_period()
    assert str(app.period) == "1Y"


def test_view_net_worth_renders(household):
    CLI(inp=household).view_net_worth()


def test_view_net_worth_renders_empty_portfolio(empty_input):
    CLI(inp=empty_input).view_net_worth()


def test_storage_label(store, household):
    assert CLI().storage_label() == "in memory only"
    app = CLI(store=store, inp=household)
    assert app.storage_label().endswith("(new)")
    store.save(household)
    assert "(saved " in app.storage_label()
