"""CLI entry point for the trade journal."""

import json
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from uuid import uuid4

import click

from trade_journal import __version__
from trade_journal.analytics.aggregation import (
    PROFIT_FACTOR_SATURATED,
    breakdown_as_rows,
    summary_as_row,
)
from trade_journal.analytics.calendar import day_of_week, format_duration, session_from_time
from trade_journal.analytics.outcome import classify_result, profit_and_loss
from trade_journal.analytics.risk import compute_risk_metrics, position_calculator
from trade_journal.config import get_settings
from trade_journal.errors import InvalidInputError
from trade_journal.journal.io import load_trades_csv
from trade_journal.journal.records import TradeRecord
from trade_journal.journal.service import (
    breakdown_records,
    build_weekly_review,
    enrich_trade,
    summarize_records,
)
from trade_journal.journal.store import JsonlTradeRepository
from trade_journal.types import DIRECTIONS, TradeInput, parse_direction
from trade_journal.utils.logging import get_logger, log_invalid_input, setup_logging

_DIRECTION_CHOICE = click.Choice([d.lower() for d in DIRECTIONS], case_sensitive=False)


@click.group(invoke_without_command=True)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """Trade journal - risk, P&L and performance analytics for logged trades."""
    if version:
        click.echo(f"trade-journal version {__version__}")
        return

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        return

    setup_logging()


@cli.command()
@click.option("--entry", type=float, required=True, help="Entry price")
@click.option("--stop", "stop_loss", type=float, required=True, help="Stop loss price")
@click.option("--direction", type=_DIRECTION_CHOICE, default="long", show_default=True)
@click.option("--balance", type=float, default=None, help="Account balance (defaults to settings)")
@click.option("--risk", "risk_percent", type=float, default=None, help="Risk percent of balance")
def size(
    entry: float,
    stop_loss: float,
    direction: str,
    balance: float | None,
    risk_percent: float | None,
) -> None:
    """Position size calculator."""
    settings = get_settings()
    balance = settings.account_balance if balance is None else balance
    risk_percent = settings.default_risk_percent if risk_percent is None else risk_percent

    with _input_errors():
        plan = position_calculator(balance, risk_percent, entry, stop_loss, direction)
    _warn_daily_limit(risk_percent)

    click.echo(f"Risk amount:    ${plan.risk_amount:,.2f}")
    if plan.position_size == 0:
        click.echo("Position size:  0 (stop loss is on the wrong side of entry)")
        return
    click.echo(f"Position size:  {plan.position_size:,.4f} units")
    click.echo(f"Position value: ${plan.position_value:,.2f}")
    click.echo(f"Leverage:       {plan.leverage:.2f}x")


@cli.command()
@click.option("--entry", type=float, required=True, help="Entry price")
@click.option("--stop", "stop_loss", type=float, required=True, help="Stop loss price")
@click.option("--take-profit", type=float, default=None, help="Take profit price")
@click.option("--direction", type=_DIRECTION_CHOICE, default="long", show_default=True)
@click.option("--balance", type=float, default=None, help="Account balance (defaults to settings)")
@click.option("--risk", "risk_percent", type=float, default=None, help="Risk percent of balance")
def risk(
    entry: float,
    stop_loss: float,
    take_profit: float | None,
    direction: str,
    balance: float | None,
    risk_percent: float | None,
) -> None:
    """Risk dollar, position size and reward/risk for a planned trade."""
    settings = get_settings()
    with _input_errors():
        trade = TradeInput(
            entry_price=entry,
            stop_loss=stop_loss,
            direction=parse_direction(direction),
            account_balance=settings.account_balance if balance is None else balance,
            risk_percent=settings.default_risk_percent if risk_percent is None else risk_percent,
            take_profit=take_profit,
        )
        metrics = compute_risk_metrics(trade)
    _warn_daily_limit(trade.risk_percent)

    rr_text = "n/a" if metrics.risk_reward_ratio is None else f"1:{metrics.risk_reward_ratio}"
    click.echo(f"Risk dollar:   ${metrics.risk_dollar:,.2f}")
    click.echo(f"Position size: {metrics.position_size:,.4f}")
    click.echo(f"Reward/risk:   {rr_text}")


@cli.command()
@click.option("--entry", type=float, required=True, help="Entry price")
@click.option("--exit", "exit_price", type=float, required=True, help="Exit price")
@click.option("--size", "quantity", type=float, required=True, help="Position size")
@click.option("--direction", type=_DIRECTION_CHOICE, default="long", show_default=True)
@click.option("--opened", default=None, help="Entry time HH:MM")
@click.option("--closed", default=None, help="Exit time HH:MM")
def pnl(
    entry: float,
    exit_price: float,
    quantity: float,
    direction: str,
    opened: str | None,
    closed: str | None,
) -> None:
    """Realized P&L and result of a closed trade."""
    with _input_errors():
        result = profit_and_loss(entry, exit_price, quantity, direction)
        label = classify_result(result.pl_dollar)
        duration = format_duration(opened, closed) if opened and closed else None

    percent_text = "n/a" if result.pl_percent is None else f"{result.pl_percent:+.2f}%"
    click.echo(f"P&L:    {result.pl_dollar:+,.2f} ({percent_text})")
    click.echo(f"Result: {label}")
    if duration is not None:
        click.echo(f"Held:   {duration}")


@cli.command()
@click.option(
    "--csv",
    "csv_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Exported trades CSV (defaults to the local journal)",
)
@click.option(
    "--by",
    "group_by",
    type=click.Choice(["session", "entry_type", "day_of_week"]),
    default=None,
    help="Also break results down by this field",
)
@click.option("--as-json", is_flag=True, default=False, help="Print JSON instead of text")
def stats(csv_path: Path | None, group_by: str | None, as_json: bool) -> None:
    """Performance summary over journal trades."""
    records = _load_records(csv_path)
    summary = summarize_records(records)
    rows = breakdown_as_rows(breakdown_records(records, group_by)) if group_by else []

    if as_json:
        payload: dict[str, object] = {"summary": summary_as_row(summary)}
        if group_by:
            payload["breakdown"] = rows
        click.echo(json.dumps(payload, indent=2))
        return

    if summary.profit_factor_saturated:
        pf_text = f"{PROFIT_FACTOR_SATURATED} (no losing trades)"
    else:
        pf_text = f"{summary.profit_factor}"
    click.echo("=" * 50)
    click.echo("Trade Journal - Performance")
    click.echo("=" * 50)
    click.echo(f"   Trades (closed/logged): {summary.total_trades}/{len(records)}")
    click.echo(f"   Wins / Losses / BE:     {summary.wins} / {summary.losses} / {summary.break_evens}")
    click.echo(f"   Win rate:               {summary.win_rate}%")
    click.echo(f"   Profit factor:          {pf_text}")
    click.echo(f"   Total P&L:              {summary.total_pl:+,.2f}")
    click.echo(f"   Average R:R:            1:{summary.average_rr}")
    click.echo(f"   Largest win / loss:     {summary.largest_win:+,.2f} / {summary.largest_loss:+,.2f}")
    click.echo(f"   Best streak:            {summary.best_streak}")
    click.echo(
        f"   Current streak:         {summary.current_streak.count}{summary.current_streak.kind}"
    )
    for row in rows:
        click.echo(
            f"   [{row['label']}] trades={row['trades']} win_rate={row['win_rate']}% pl={row['pl']}"
        )


@cli.command()
@click.option("--day", default=None, help="Any date in the week (YYYY-MM-DD), defaults to today")
@click.option(
    "--csv",
    "csv_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Exported trades CSV (defaults to the local journal)",
)
def review(day: str | None, csv_path: Path | None) -> None:
    """Weekly review figures."""
    records = _load_records(csv_path)
    with _input_errors():
        weekly = build_weekly_review(records, day or date.today())
    click.echo(weekly.model_dump_json(indent=2))


@cli.command()
@click.argument("trade_date")
@click.argument("trade_time")
def session(trade_date: str, trade_time: str) -> None:
    """Session bucket and weekday for a trade timestamp."""
    with _input_errors():
        label = session_from_time(trade_time)
        weekday = day_of_week(trade_date)
    click.echo(f"{weekday} {trade_time}: {label}")


@cli.command()
@click.option("--id", "trade_id", default=None, help="Trade id (generated when omitted)")
@click.option("--date", "trade_date", required=True, help="Trade date YYYY-MM-DD")
@click.option("--time", "trade_time", required=True, help="Entry time HH:MM")
@click.option("--direction", type=_DIRECTION_CHOICE, default="long", show_default=True)
@click.option("--entry", type=float, required=True, help="Entry price")
@click.option("--stop", "stop_loss", type=float, required=True, help="Stop loss price")
@click.option("--take-profit", type=float, default=None, help="Take profit price")
@click.option("--exit", "exit_price", type=float, default=None, help="Exit price if closed")
@click.option("--exit-time", default=None, help="Exit time HH:MM")
@click.option(
    "--size",
    "quantity",
    type=float,
    default=None,
    help="Position size (derived from risk when omitted)",
)
@click.option("--balance", type=float, default=None, help="Account balance (defaults to settings)")
@click.option("--risk", "risk_percent", type=float, default=None, help="Risk percent of balance")
@click.option("--entry-type", default=None, help="M1 entry type label")
@click.option("--exit-reason", default=None, help="Why the trade was closed")
@click.option("--break-even", is_flag=True, default=False, help="Stop was moved to break even")
def add(
    trade_id: str | None,
    trade_date: str,
    trade_time: str,
    direction: str,
    entry: float,
    stop_loss: float,
    take_profit: float | None,
    exit_price: float | None,
    exit_time: str | None,
    quantity: float | None,
    balance: float | None,
    risk_percent: float | None,
    entry_type: str | None,
    exit_reason: str | None,
    break_even: bool,
) -> None:
    """Log a trade in the local journal."""
    settings = get_settings()
    row = {
        "id": trade_id or uuid4().hex,
        "trade_date": trade_date,
        "trade_time": trade_time,
        "direction": direction,
        "entry_price": entry,
        "stop_loss": stop_loss,
        "take_profit": take_profit,
        "exit_price": exit_price,
        "exit_time": exit_time,
        "position_size": quantity,
        "account_balance": settings.account_balance if balance is None else balance,
        "risk_percent": settings.default_risk_percent if risk_percent is None else risk_percent,
        "m1_entry_type": entry_type,
        "exit_reason": exit_reason,
        "break_even_applied": break_even,
    }
    repo = _repository()
    with _input_errors():
        record = enrich_trade(
            TradeRecord.parse_row({key: value for key, value in row.items() if value is not None})
        )
        existing = repo.list_trades()
    with _journal_errors():
        repo.add_trade(record)

    same_day = [r.risk_percent for r in existing if r.trade_date[:10] == record.trade_date[:10]]
    _warn_daily_limit(sum(same_day) + record.risk_percent, scope=f"on {record.trade_date[:10]}")
    click.echo(
        f"Logged trade {record.id}: {record.direction} {record.session} {record.day_of_week}"
    )
    if record.trade_result is not None:
        click.echo(f"Result: {record.trade_result} ({record.pl_dollar:+,.2f})")


@cli.command()
@click.argument("trade_id")
@click.option(
    "--exit",
    "exit_price",
    type=click.FloatRange(min=0, min_open=True),
    required=True,
    help="Exit price",
)
@click.option("--exit-time", default=None, help="Exit time HH:MM")
@click.option("--exit-reason", default=None, help="Why the trade was closed")
def close(
    trade_id: str, exit_price: float, exit_time: str | None, exit_reason: str | None
) -> None:
    """Record the exit of a logged trade."""
    repo = _repository()
    with _input_errors():
        trades = {record.id: record for record in repo.list_trades()}
    if trade_id not in trades:
        raise click.ClickException(f"unknown_trade_id: {trade_id}")

    row = trades[trade_id].model_dump()
    row.update(exit_price=exit_price, exit_time=exit_time, exit_reason=exit_reason)
    # Outcome fields are derived again from the new exit.
    for derived in ("pl_dollar", "pl_percent", "trade_result", "trade_duration"):
        row[derived] = None
    with _input_errors():
        record = enrich_trade(TradeRecord.parse_row(row))
    with _journal_errors():
        repo.update_trade(record)
    click.echo(f"Closed trade {record.id}: {record.trade_result} ({record.pl_dollar:+,.2f})")


@cli.command()
@click.argument("trade_id")
def delete(trade_id: str) -> None:
    """Remove a trade from the local journal."""
    with _journal_errors():
        _repository().delete_trade(trade_id)
    click.echo(f"Deleted trade {trade_id}")


@cli.command()
def status() -> None:
    """Show configuration summary."""
    settings = get_settings()

    click.echo("=" * 50)
    click.echo("Trade Journal - Status")
    click.echo("=" * 50)
    click.echo()
    click.echo("[Account]")
    click.echo(f"   Balance: ${settings.account_balance:,.2f}")
    click.echo(f"   Default risk per trade: {settings.default_risk_percent}%")
    click.echo(f"   Daily risk limit: {settings.daily_risk_limit_pct}%")
    click.echo()
    click.echo("[Logging]")
    click.echo(f"   Log level: {settings.log_level}")
    click.echo(f"   Log format: {settings.log_format.value}")
    click.echo(f"   Journal file: {settings.journal_file}")
    click.echo()
    click.echo("=" * 50)


def _load_records(csv_path: Path | None) -> list[TradeRecord]:
    with _input_errors():
        if csv_path is not None:
            records = load_trades_csv(csv_path)
        else:
            records = _repository().list_trades()
    return records


def _repository() -> JsonlTradeRepository:
    return JsonlTradeRepository(get_settings().journal_file)


def _warn_daily_limit(risk_percent: float, scope: str = "for this trade") -> None:
    limit = get_settings().daily_risk_limit_pct
    if risk_percent > limit:
        click.echo(
            f"Warning: risk of {risk_percent:g}% {scope} exceeds the daily limit of {limit:g}%",
            err=True,
        )


@contextmanager
def _journal_errors() -> Iterator[None]:
    """Report journal store conflicts (duplicate or unknown ids)."""
    try:
        yield
    except KeyError as exc:
        raise click.ClickException(str(exc.args[0])) from exc
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc


@contextmanager
def _input_errors() -> Iterator[None]:
    """Report InvalidInputError as a usage error with exit code 2."""
    try:
        yield
    except InvalidInputError as exc:
        log_invalid_input(get_logger("trade_journal.main"), field=exc.field, reason=exc.reason)
        click.echo(f"Invalid input: {exc}", err=True)
        sys.exit(2)


# Support python -m trade_journal.main
if __name__ == "__main__":
    cli()
