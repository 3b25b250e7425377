"""Forecast command — show the year → rate table the indexed regimes use."""

import typer
from rich.console import Console
from rich.table import Table

from ...core.exceptions import RateTableUnavailable
from ...external.rate_table import FocusRateTableProvider, Indicator

console = Console()


def forecast(
    indicator: Indicator = typer.Argument(Indicator.INFLATION, case_sensitive=False,
                                          help="IPCA or Selic"),
):
    """Show the latest market forecast per year (BCB Focus survey)."""
    provider = FocusRateTableProvider()
    try:
        table_data = provider.fetch_rate_table(indicator)
    except RateTableUnavailable as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    title = f"{indicator.value} forecast"
    if indicator == Indicator.BENCHMARK:
        title += f" (× {provider.benchmark_rate_factor} ≈ CDI)"
    table = Table(title=title, min_width=40)
    table.add_column("Year", style="bold")
    table.add_column("Rate (% p.a.)", justify="right")
    for year, rate in sorted(table_data.items()):
        table.add_row(str(year), f"{rate:.3f}")
    console.print(table)
