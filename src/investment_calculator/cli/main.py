"""Investment Calculator CLI — main entry point."""

import sys

import typer
from loguru import logger

from ..core.config import get_config
from .commands import calc, config_cmd, forecast, wizard

app = typer.Typer(
    name="ic",
    help="Investment projection calculator (fixed, IPCA+ and CDI, Brazil)",
    rich_markup_mode="rich",
    no_args_is_help=True,
)

app.command("calc")(calc.calc)
app.command("forecast")(forecast.forecast)
app.command("wizard")(wizard.wizard)
app.add_typer(config_cmd.app, name="config", help="View and edit settings")


@app.callback()
def startup(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs")):
    """Configure logging."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
        level="DEBUG" if verbose else get_config().log_level,
    )


if __name__ == "__main__":
    app()
