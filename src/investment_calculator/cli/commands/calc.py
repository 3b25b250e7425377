"""Projection command — ic calc."""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ...core.exceptions import InvestmentCalculatorError
from ...core.locale import ValidationReport, format_brl, parse_request
from ...core.models import PeriodUnit, ProjectionResult, RatePeriodUnit, Regime
from ...core.projection import ProjectionEngine

console = Console()

REGIME_LABELS = {
    Regime.FIXED: "Fixed rate (prefixado)",
    Regime.INFLATION_INDEXED: "IPCA + spread",
    Regime.BENCHMARK_INDEXED: "CDI",
}


def print_field_errors(report: ValidationReport) -> None:
    for err in report.errors:
        console.print(f"  [red]✗ {err.field}: {err.message}[/red]")


def render_result(result: ProjectionResult, regime: Regime, months: int, exempt: bool) -> None:
    table = Table(title=f"Projection — {REGIME_LABELS[regime]}, {months} month(s)", min_width=60)
    table.add_column("", style="dim")
    table.add_column("Amount", justify="right")

    if result.total_invested is not None:
        table.add_row("Total invested", format_brl(result.total_invested))
    if result.gain is not None:
        gain_color = "green" if result.gain >= 0 else "red"
        table.add_row("Gain", f"[{gain_color}]{format_brl(result.gain)}[/{gain_color}]")
    table.add_row("Gross amount", f"[bold]{format_brl(result.gross_amount)}[/bold]")
    table.add_row("Income tax", "exempt" if exempt else format_brl(result.tax))
    table.add_row("Net amount", f"[bold green]{format_brl(result.net_amount)}[/bold green]")
    console.print(table)


def calc(
    monthly: str = typer.Option(..., "--monthly", "-m", help="Monthly contribution, e.g. 100,00"),
    period: str = typer.Option(..., "--period", "-p", help="Number of months or years"),
    initial: str = typer.Option("0,00", "--initial", "-i", help="Initial deposit, e.g. 1.000,00"),
    period_unit: PeriodUnit = typer.Option(PeriodUnit.MONTH, "--period-unit", case_sensitive=False),
    regime: Regime = typer.Option(Regime.FIXED, "--regime", "-r", case_sensitive=False,
                                  help="fixed, ipca (IPCA + spread) or cdi"),
    rate: Optional[str] = typer.Option(None, "--rate", help="Rate in %, e.g. 12 or 6,5 (not used for cdi)"),
    rate_unit: RatePeriodUnit = typer.Option(RatePeriodUnit.ANNUAL, "--rate-unit", case_sensitive=False),
    exempt: bool = typer.Option(False, "--exempt/--taxed", help="Income tax exemption"),
):
    """Project the gross and net value of an investment plan."""
    report = parse_request(
        initial_deposit=initial,
        monthly_contribution=monthly,
        period=period,
        regime=regime,
        rate=rate,
        rate_period_unit=rate_unit,
        period_unit=period_unit,
        exempt=exempt,
    )
    if not report.ok:
        console.print("[red]Invalid input:[/red]")
        print_field_errors(report)
        raise typer.Exit(1)

    plan, rate_spec, duration, tax_policy = report.entities()
    if regime != Regime.FIXED:
        console.print("[dim]Fetching market forecasts (BCB Focus)...[/dim]")
    try:
        result = ProjectionEngine().project(plan, rate_spec, duration, tax_policy)
    except InvestmentCalculatorError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    render_result(result, regime, duration.total_months, exempt)
