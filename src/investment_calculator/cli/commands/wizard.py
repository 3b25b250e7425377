"""Interactive calculator — ic wizard."""

import re

import typer
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt

from ...core.contact import ContactInfo, format_phone_number
from ...core.exceptions import InvestmentCalculatorError
from ...core.locale import ValidationReport, format_rate_percent, parse_request
from ...core.models import PeriodUnit, RatePeriodUnit, Regime
from ...core.projection import ProjectionEngine
from ...core.stages import CalculationSession, CalculationStage
from .calc import print_field_errors, render_result

console = Console()

REGIMES = [
    ("Fixed rate (prefixado)", Regime.FIXED),
    ("IPCA + spread", Regime.INFLATION_INDEXED),
    ("CDI", Regime.BENCHMARK_INDEXED),
]


def _say(text: str, style: str = ""):
    console.print(f"\n  {text}" if not style else f"\n  [{style}]{text}[/{style}]")


def _ask(prompt: str, default: str = "") -> str:
    return Prompt.ask(f"  [cyan]>[/cyan] {prompt}", default=default, console=console)


def _pick(labels: list[str]) -> int:
    """Pick from numbered list. Returns 0-based index."""
    for i, label in enumerate(labels, 1):
        console.print(f"    [bold]{i}.[/bold] {label}")
    while True:
        raw = Prompt.ask("  [cyan]>[/cyan]", console=console)
        try:
            idx = int(raw) - 1
            if 0 <= idx < len(labels):
                return idx
        except ValueError:
            pass
        console.print("    [red]Enter a number from the list[/red]")


def _collect_info(session: CalculationSession) -> None:
    while session.stage == CalculationStage.IDLE:
        contact = ContactInfo(
            name=_ask("Name"),
            email=_ask("E-mail"),
            whatsapp=format_phone_number(_ask("WhatsApp (99) 9 1111-1111")),
            accept_terms=Confirm.ask(
                "  I agree to receive information at the contacts above",
                default=False,
                console=console,
            ),
        )
        report = session.collect_info(contact)
        if not report.ok:
            print_field_errors(report)


def _read_plan() -> ValidationReport:
    initial = _ask("Initial deposit (R$ 0,00)", default="0,00")
    monthly = _ask("Monthly contribution (R$ 0,00)")

    _say("Rate type:")
    regime = REGIMES[_pick([label for label, _ in REGIMES])][1]

    rate = None
    rate_unit = RatePeriodUnit.ANNUAL
    if regime != Regime.BENCHMARK_INDEXED:
        rate = format_rate_percent(_ask("Interest rate %"))
        rate_unit = [RatePeriodUnit.MONTHLY, RatePeriodUnit.ANNUAL][_pick(["monthly", "annual"])]

    period = re.sub(r"\D+", "", _ask("Period"))
    period_unit = [PeriodUnit.MONTH, PeriodUnit.YEAR][_pick(["month(s)", "year(s)"])]

    exempt = Confirm.ask("  Exempt from income tax?", default=True, console=console)
    return parse_request(
        initial_deposit=initial,
        monthly_contribution=monthly,
        period=period,
        regime=regime,
        rate=rate,
        rate_period_unit=rate_unit,
        period_unit=period_unit,
        exempt=exempt,
    )


def wizard():
    """Step-by-step investment calculator."""
    session = CalculationSession()

    console.print()
    console.print(Panel.fit(
        "[bold]Investment calculator[/bold]\n[dim]Takes about 1 minute[/dim]",
        border_style="blue",
        padding=(0, 4),
    ))

    _say("About you:")
    _collect_info(session)

    _say(f"Thanks, {session.contact.name}! Now the investment plan.")
    while session.stage == CalculationStage.INFO_COLLECTED:
        report = session.collect_plan(_read_plan())
        if not report.ok:
            print_field_errors(report)

    try:
        result = session.compute(ProjectionEngine())
    except InvestmentCalculatorError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    _, rate_spec, duration, tax_policy = session.plan_report.entities()
    console.print()
    render_result(result, rate_spec.regime, duration.total_months, tax_policy.exempt)
