"""Command line interface for the Frankfurter API client."""

import datetime as dt
import logging
from typing import NoReturn

import typer

from frankfurter.config import config_cli
from frankfurter.currency_formatter import format_currency
from frankfurter.currency_registry import CurrencyRegistry
from frankfurter.services.available_currencies import get_currencies
from frankfurter.services.http_client import FrankfurterError
from frankfurter.services.latest_rates import LatestRates
from frankfurter.services.time_series import TimeSeries
from frankfurter.working_days import working_days

logger = logging.getLogger(__name__)

app = typer.Typer(help="Currency exchange rates from the Frankfurter API.", no_args_is_help=True)
app.command("config")(config_cli)


def _fail(message: str) -> NoReturn:
    typer.secho(f"Error: {message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(1)


def _split_symbols(symbols: str | None) -> tuple[str, ...]:
    if not symbols:
        return ()
    return tuple(symbol.strip() for symbol in symbols.split(",") if symbol.strip())


def _parse_date(value: str | None) -> dt.date | None:
    if value is None:
        return None
    try:
        return dt.date.fromisoformat(value)
    except ValueError as e:
        raise typer.BadParameter(f"Expected a YYYY-MM-DD date, got '{value}'") from e


@app.callback()
def main_callback(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@app.command()
def latest(
    amount: float = typer.Option(1.0, "--amount", "-a", help="Amount to convert"),
    base: str = typer.Option("EUR", "--base", "-b", help="Base currency"),
    date: str = typer.Option(None, "--date", "-d", help="Historical date (YYYY-MM-DD)"),
    symbols: str = typer.Option(None, "--symbols", "-s", help="Comma-separated target currencies"),
) -> None:
    """Show the latest (or historical) exchange rates."""
    try:
        request = LatestRates(amount=amount, base=base, date=_parse_date(date), symbols=_split_symbols(symbols))
        rates = request.exchange_rates()
    except (ValueError, FrankfurterError) as e:
        _fail(str(e))

    typer.echo(f"{rates.amount} {rates.base} on {rates.date}")
    for symbol in sorted(rates.rates):
        typer.echo(f"{symbol}\t{rates.rates[symbol]}")


@app.command()
def series(
    start: str = typer.Option(..., "--start", help="Start date (YYYY-MM-DD)"),
    end: str = typer.Option(None, "--end", help="End date (YYYY-MM-DD), defaults to the latest rates"),
    amount: float = typer.Option(1.0, "--amount", "-a", help="Amount to convert"),
    base: str = typer.Option("EUR", "--base", "-b", help="Base currency"),
    symbols: str = typer.Option(None, "--symbols", "-s", help="Comma-separated target currencies"),
) -> None:
    """Show the exchange rates for every working day of a period."""
    try:
        request = TimeSeries(
            amount=amount,
            base=base,
            start_date=_parse_date(start),
            end_date=_parse_date(end),
            symbols=_split_symbols(symbols),
        )
        rates = request.periodic_rates()
    except (ValueError, FrankfurterError) as e:
        _fail(str(e))

    typer.echo(f"{rates.amount} {rates.base} from {rates.start_date} to {rates.end_date}")
    for date in sorted(rates.dates()):
        day_rates = rates.rates_for(date)
        typer.echo(f"{date}\t" + " ".join(f"{symbol}={day_rates[symbol]}" for symbol in sorted(day_rates)))


@app.command()
def currencies() -> None:
    """List the currencies supported by the API."""
    try:
        available = get_currencies()
    except FrankfurterError as e:
        _fail(str(e))

    for symbol in sorted(available):
        typer.echo(f"{symbol}\t{available[symbol]}")


@app.command()
def search(
    pattern: str = typer.Argument(..., help="Regular expression matched against symbols and names"),
    refresh: bool = typer.Option(False, "--refresh", help="Update the registry from the API first"),
) -> None:
    """Search known currencies by symbol or name."""
    registry = CurrencyRegistry.get_instance()
    if refresh:
        try:
            registry.refresh()
        except FrankfurterError as e:
            _fail(str(e))

    results = sorted(registry.search(pattern), key=lambda currency: currency.symbol)
    if not results:
        typer.secho(f"No currency matches '{pattern}'", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(1)

    for currency in results:
        typer.echo(f"{currency.symbol}\t{currency.name}")


@app.command("format")
def format_amount(
    symbol: str = typer.Argument(..., help="Currency symbol"),
    amount: float = typer.Argument(..., help="Amount to format"),
    rounded: bool = typer.Option(False, "--rounded", help="Round to the currency's standard digits"),
) -> None:
    """Format an amount in the currency's home locale."""
    try:
        typer.echo(format_currency(symbol, amount, rounded=rounded))
    except ValueError as e:
        _fail(str(e))


@app.command("working-days")
def list_working_days(
    start: str = typer.Argument(..., help="Start date (YYYY-MM-DD)"),
    end: str = typer.Argument(..., help="End date (YYYY-MM-DD)"),
) -> None:
    """List the days on which rates are published."""
    for day in working_days(_parse_date(start), _parse_date(end)):
        typer.echo(day.isoformat())


def main():
    app()


if __name__ == "__main__":
    main()
