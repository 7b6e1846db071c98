"""
networth/cli.py
===============
The interactive command-line interface.

Holds the current PortfolioInput, recomputes after every edit and saves it
through the store when one is available. All numbers shown come from
aggregator.compute(); this file only asks questions and prints.
"""

from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt

from networth import charts, display, exporter, portfolio
from networth.aggregator import compute
from networth.defaults import SUPPORTED_COINS, SUPPORTED_CURRENCIES, default_input
from networth.drift import analyze_allocation, analyze_crypto_split
from networth.models import ComputedPortfolio, PortfolioInput
from networth.returns import Period, compute_return
from networth.store import Store, open_store
from networth.validation import (
    parse_amount, validate_amount, validate_coin, validate_currency, validate_name,
)

console = Console()


class CLI:
    """Main command-line interface class."""

    def __init__(self, store: Optional[Store] = None, inp: Optional[PortfolioInput] = None):
        self.store = store
        self.input = inp or (store.load() if store else None) or default_input()
        self.period = Period.MOM

    # -----------------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------------

    @property
    def snapshot(self) -> ComputedPortfolio:
        return compute(self.input)

    def _apply(self, new_input: PortfolioInput, message: str) -> None:
        if new_input is self.input:
            console.print("[yellow]Nothing changed.[/yellow]")
            return
        self.input = new_input
        if self.store is not None:
            self.store.save(self.input)
        console.print(f"[green]✓ {message}[/green]")

    def _errors(self, errors: List[str]) -> bool:
        for e in errors:
            console.print(f"[red]{e}[/red]")
        return bool(errors)

    def _prompt_amount(self, prompt: str, allow_negative: bool = False) -> Optional[float]:
        amount = parse_amount(Prompt.ask(prompt))
        if self._errors(validate_amount(amount, allow_negative=allow_negative)):
            return None
        return amount

    def _prompt_currency(self, default: str = "EUR") -> Optional[str]:
        currency = Prompt.ask("Currency", choices=list(SUPPORTED_CURRENCIES),
                              default=default).upper()
        if self._errors(validate_currency(currency)):
            return None
        return currency

    # -----------------------------------------------------------------------
    # Menu actions
    # -----------------------------------------------------------------------

    def view_net_worth(self):
        s = self.snapshot
        console.print()
        display.print_overview(s, str(self.period), compute_return(s, self.input.history, self.period))
        display.print_breakdown(s)
        display.print_holdings(s)
        display.print_allocation(analyze_allocation(s, self.input.targets),
                                 analyze_crypto_split(s, self.input.crypto_split))
        display.print_currency_exposure(s)

    def add_brokerage(self):
        console.print("\n[steel_blue1]── Add to Brokerage ──[/steel_blue1]")
        name = Prompt.ask("Ticker / name (e.g. VWCE, PG)").strip().upper()
        if self._errors(validate_name(name)):
            return
        label = Prompt.ask("Category", default="Custom")
        currency = self._prompt_currency()
        amount = self._prompt_amount("Amount")
        if currency is None or amount is None:
            return
        self._apply(portfolio.add_brokerage(self.input, name, label, currency, amount),
                    f"{name} +{amount:,.2f} {currency}")

    def withdraw_brokerage(self):
        console.print("\n[steel_blue1]── Withdraw from Brokerage ──[/steel_blue1]")
        if not self.input.brokerage:
            console.print("[yellow]No brokerage positions.[/yellow]")
            return
        console.print("Positions: " + ", ".join(
            f"[cyan]{p.name}[/cyan] ({p.currency})" for p in self.input.brokerage))
        name = Prompt.ask("Ticker / name").strip().upper()
        currency = self._prompt_currency()
        amount = self._prompt_amount("Amount")
        if currency is None or amount is None:
            return
        self._apply(portfolio.withdraw_brokerage(self.input, name, currency, amount),
                    f"{name} -{amount:,.2f} {currency}")

    def set_cash(self):
        console.print("\n[steel_blue1]── Set Cash Balance ──[/steel_blue1]")
        currency = self._prompt_currency()
        if currency is None:
            return
        amount = parse_amount(Prompt.ask("Balance", default="0"))
        self._apply(portfolio.set_cash(self.input, currency, amount),
                    f"Cash {currency} set to {amount:,.2f}")

    def add_crypto(self):
        console.print("\n[steel_blue1]── Add Crypto ──[/steel_blue1]")
        coin = Prompt.ask("Coin", choices=list(SUPPORTED_COINS)).upper()
        if self._errors(validate_coin(coin)):
            return
        amount = self._prompt_amount("Units", allow_negative=True)
        if amount is None:
            return
        self._apply(portfolio.add_crypto(self.input, coin, amount), f"{coin} {amount:+,.6f}")

    def add_other(self):
        console.print("\n[steel_blue1]── Add Other Asset ──[/steel_blue1]")
        name = Prompt.ask("Name (e.g. Car, Apartment deposit)")
        if self._errors(validate_name(name)):
            return
        currency = self._prompt_currency()
        amount = self._prompt_amount("Value")
        if currency is None or amount is None:
            return
        self._apply(portfolio.add_other(self.input, name, currency, amount), f"{name} added")

    def set_fx_override(self):
        fx = self.input.fx
        console.print("\n[steel_blue1]── FX Overrides ──[/steel_blue1]")
        console.print("[dim]Leave empty or enter 0 to keep the base rate.[/dim]")
        chf = Prompt.ask(f"CHF → EUR (base {fx.get('CHF')})", default="")
        ron = Prompt.ask(f"RON → EUR (base {fx.get('RON')})", default="")
        self._apply(portfolio.with_fx_override(self.input, chf=chf, ron=ron), "FX overrides updated")

    def choose_period(self):
        choice = Prompt.ask("Return period", choices=[p.value for p in Period],
                            default=str(self.period))
        self.period = Period.parse(choice)
        s = self.snapshot
        console.print(f"Return ({self.period}): "
                      f"{display.format_return(compute_return(s, self.input.history, self.period))}")

    def record_snapshot(self):
        s = self.snapshot
        if Confirm.ask(f"Record net worth €{s.net_worth:,.2f} as today's snapshot?"):
            self._apply(portfolio.record_snapshot(self.input, s), "Snapshot recorded")

    def export_data(self):
        s = self.snapshot
        console.print("\n  1. Export to CSV")
        console.print("  2. Export to Excel (.xlsx)")
        console.print("  3. Both")
        choice = Prompt.ask("Choose", choices=["1", "2", "3"])
        try:
            if choice in ("1", "3"):
                fname = exporter.export_to_csv(s, self.input)
                console.print(f"[green]✓ CSV saved:   {fname}[/green]")
            if choice in ("2", "3"):
                fname = exporter.export_to_excel(s, self.input)
                console.print(f"[green]✓ Excel saved: {fname}[/green]")
        except OSError as e:
            console.print(f"[red]Export failed: {e}[/red]")

    def show_charts(self):
        s = self.snapshot
        saved = [
            charts.show_currency_pie(s),
            charts.show_drift_bars(analyze_allocation(s, self.input.targets)),
        ]
        if not any(saved):
            console.print("[yellow]Nothing to chart yet.[/yellow]")
        for fname in filter(None, saved):
            console.print(f"  Saved: {fname}")

    # -----------------------------------------------------------------------
    # Main loop
    # -----------------------------------------------------------------------

    MENU = """
[grey39]┌─────────────────────────────────┐[/grey39]
[grey39]│[/grey39]  [steel_blue1]Net Worth[/steel_blue1]                       [grey39]│[/grey39]
[grey39]├─────────────────────────────────┤[/grey39]
[grey39]│[/grey39]  [white]1[/white]  [grey62]View net worth[/grey62]              [grey39]│[/grey39]
[grey39]│[/grey39]  [white]2[/white]  [grey62]Add to brokerage[/grey62]            [grey39]│[/grey39]
[grey39]│[/grey39]  [white]3[/white]  [grey62]Withdraw from brokerage[/grey62]     [grey39]│[/grey39]
[grey39]│[/grey39]  [white]4[/white]  [grey62]Set cash balance[/grey62]            [grey39]│[/grey39]
[grey39]│[/grey39]  [white]5[/white]  [grey62]Add crypto[/grey62]                  [grey39]│[/grey39]
[grey39]│[/grey39]  [white]6[/white]  [grey62]Add other asset[/grey62]             [grey39]│[/grey39]
[grey39]│[/grey39]  [white]7[/white]  [grey62]FX overrides (CHF / RON)[/grey62]    [grey39]│[/grey39]
[grey39]│[/grey39]  [white]8[/white]  [grey62]Return period[/grey62]               [grey39]│[/grey39]
[grey39]│[/grey39]  [white]9[/white]  [grey62]Record snapshot[/grey62]             [grey39]│[/grey39]
[grey39]│[/grey39]  [white]e[/white]  [grey62]Export  (CSV / Excel)[/grey62]       [grey39]│[/grey39]
[grey39]│[/grey39]  [white]c[/white]  [grey62]Charts[/grey62]                      [grey39]│[/grey39]
[grey39]│[/grey39]  [white]q[/white]  [grey62]Quit[/grey62]                        [grey39]│[/grey39]
[grey39]└─────────────────────────────────┘[/grey39]"""

    ACTIONS = {
        "1": "view_net_worth",
        "2": "add_brokerage",
        "3": "withdraw_brokerage",
        "4": "set_cash",
        "5": "add_crypto",
        "6": "add_other",
        "7": "set_fx_override",
        "8": "choose_period",
        "9": "record_snapshot",
        "e": "export_data",
        "c": "show_charts",
    }

    def storage_label(self) -> str:
        if self.store is None:
            return "in memory only"
        updated = self.store.updated_at()
        if updated is None:
            return f"{self.store.path} (new)"
        return f"{self.store.path} (saved {updated[:16].replace('T', ' ')})"

    def run(self):
        saved = self.storage_label()
        console.print(Panel(
            f"[bold white]Net Worth[/bold white]  [grey62]{self.input.date} · {saved}[/grey62]",
            border_style="grey39",
            padding=(0, 2),
        ))

        while True:
            console.print(self.MENU)
            choice = Prompt.ask("Choice", default="1").strip().lower()

            if choice == "q":
                console.print("[cyan]Goodbye! 👋[/cyan]")
                break
            action = self.ACTIONS.get(choice)
            if action is None:
                console.print("[red]Invalid choice. Please try again.[/red]")
                continue
            getattr(self, action)()


def main(db_path: Optional[str] = None) -> None:
    store = open_store(db_path) if db_path else open_store()
    try:
        CLI(store=store).run()
    finally:
        if store is not None:
            store.close()
