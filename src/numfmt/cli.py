"""Command-line interface for numfmt."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from numfmt.config import LOG_LEVELS, ConfigError, FormatterSettings, load_settings
from numfmt.formatting import format_number
from numfmt.intl import LocaleNumberFormat, NumberFormatOptions

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="numfmt",
    help="Locale-aware number formatting",
    add_completion=False,
)


def _parse_number(text: str) -> Decimal:
    try:
        return Decimal(text)
    except InvalidOperation:
        raise typer.BadParameter(f"Not a number: {text!r}", param_hint="NUMBER")


def _settings(ctx: typer.Context) -> FormatterSettings:
    return ctx.obj if isinstance(ctx.obj, FormatterSettings) else FormatterSettings()


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"),
    ] = None,
) -> None:
    """Format numbers with locale conventions."""
    try:
        settings = load_settings()
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    level = (log_level or settings.log_level).upper()
    if level not in LOG_LEVELS:
        typer.echo(f"Error: Unknown log level: {level}", err=True)
        raise typer.Exit(1)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    logger.debug("Loaded settings: %s", settings)
    ctx.obj = settings


@app.command(name="format")
def format_cmd(
    ctx: typer.Context,
    number: Annotated[str, typer.Argument(help="Number to format")],
    style: Annotated[
        Optional[str],
        typer.Option("--style", "-s", help="Style (decimal, currency, percent, unit)"),
    ] = None,
    decimals: Annotated[
        Optional[int],
        typer.Option("--decimals", "-d", help="Exact number of fraction digits"),
    ] = None,
    currency: Annotated[
        Optional[str],
        typer.Option("--currency", "-c", help="ISO 4217 currency code"),
    ] = None,
    lang: Annotated[
        Optional[str],
        typer.Option("--lang", "-l", help="Locale tag (e.g. en-US, de-DE)"),
    ] = None,
    unit: Annotated[
        Optional[str],
        typer.Option("--unit", "-u", help="CLDR unit (e.g. kilometer); implies the unit style"),
    ] = None,
    unit_display: Annotated[
        str,
        typer.Option("--unit-display", help="Unit display (short, long, narrow)"),
    ] = "short",
) -> None:
    """Format a single number."""
    settings = _settings(ctx)
    value = _parse_number(number)
    digits = settings.decimals if decimals is None else decimals
    locale = lang or settings.locale

    try:
        if unit:
            options = NumberFormatOptions(
                style="unit",
                unit=unit,
                unit_display=unit_display,
                minimum_fraction_digits=digits,
                maximum_fraction_digits=digits,
            )
            text = LocaleNumberFormat(locale, options).format(value)
        else:
            text = format_number(
                value,
                style or settings.style,
                digits,
                currency or settings.currency,
                locale,
            )
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(text)


@app.command(name="compare")
def compare_cmd(
    ctx: typer.Context,
    number: Annotated[str, typer.Argument(help="Number to format")],
    locales: Annotated[
        str,
        typer.Option("--locales", "-L", help="Comma-separated locale tags"),
    ] = "en-US,de-DE,fr-FR,ja-JP",
    style: Annotated[
        Optional[str],
        typer.Option("--style", "-s", help="Style (decimal, currency, percent)"),
    ] = None,
    decimals: Annotated[
        Optional[int],
        typer.Option("--decimals", "-d", help="Exact number of fraction digits"),
    ] = None,
    currency: Annotated[
        Optional[str],
        typer.Option("--currency", "-c", help="ISO 4217 currency code"),
    ] = None,
) -> None:
    """Format one number under several locales."""
    settings = _settings(ctx)
    value = _parse_number(number)
    tags = [tag.strip() for tag in locales.split(",") if tag.strip()]
    if not tags:
        typer.echo("Error: No locales given", err=True)
        raise typer.Exit(1)

    table = Table(title=f"{number} ({style or settings.style})")
    table.add_column("Locale", style="cyan")
    table.add_column("Formatted", justify="right")

    for tag in tags:
        try:
            text = format_number(
                value,
                style or settings.style,
                settings.decimals if decimals is None else decimals,
                currency or settings.currency,
                tag,
            )
        except Exception as e:
            typer.echo(f"Error: {tag}: {e}", err=True)
            raise typer.Exit(1)
        table.add_row(tag, text)

    Console().print(table)


if __name__ == "__main__":
    app()
