"""Settings commands — view and edit config.json."""

import dataclasses
from decimal import Decimal, InvalidOperation

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from ...core.config import AppConfig, get_config, save_config

app = typer.Typer(help="View and edit settings")
console = Console()

_FIELDS = {f.name: f for f in dataclasses.fields(AppConfig)}


def _convert(name: str, raw: str):
    kind = type(getattr(AppConfig(), name))
    if kind is Decimal:
        return Decimal(raw)
    if kind is float:
        return float(raw)
    if kind is int:
        return int(raw)
    if name == "log_level":
        return raw.upper()
    return raw


@app.command("show")
def show():
    """Show the active settings."""
    cfg = get_config()
    table = Table(box=box.ROUNDED, border_style="cyan", show_header=False, padding=(0, 2))
    table.add_column(style="dim")
    table.add_column(style="bold")
    for name in _FIELDS:
        table.add_row(name, str(getattr(cfg, name)))
    console.print(table)


@app.command("set")
def set_value(
    key: str = typer.Argument(..., help="Setting name (see: ic config show)"),
    value: str = typer.Argument(..., help="New value"),
):
    """Change one setting and save config.json."""
    if key not in _FIELDS:
        console.print(f"[red]Unknown setting '{key}'[/red]")
        raise typer.Exit(1)
    try:
        converted = _convert(key, value)
    except (ValueError, InvalidOperation):
        console.print(f"[red]Invalid value for {key}: {value}[/red]")
        raise typer.Exit(1)

    save_config(dataclasses.replace(get_config(), **{key: converted}))
    console.print(f"[green]✓ {key} = {converted}[/green]")
