"""Command-line interface for DebtTrack."""

from __future__ import annotations

import functools
from datetime import date
from pathlib import Path

import click
from pydantic import ValidationError

from .config import BaseConfig
from .context import AppContext, create_app_context
from .errors import DebtTrackError
from .logging_config import setup_logging
from .schemas import DebtCreate, DebtUpdate, PaymentCreate, PaymentUpdate
from .services.money import format_currency
from .services.monthly import aggregate_monthly, summarize_months
from .services.reports import default_report_filename

DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])


def _validation_message(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error.get("loc", ())) or "input"
        parts.append(f"{field}: {error.get('msg')}")
    return "; ".join(parts)


def handle_errors(func):
    """Turn domain and validation errors into click errors (exit code 1)."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ValidationError as exc:
            raise click.ClickException(_validation_message(exc)) from exc
        except DebtTrackError as exc:
            raise click.ClickException(str(exc)) from exc

    return wrapper


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Track repayments against a single debt."""

    config = BaseConfig()
    setup_logging(config)
    ctx.obj = create_app_context(config)


@cli.command("setup")
@click.option("--amount", type=float, required=True, help="Total amount owed")
@click.option("--description", default=None, help="What the debt is for")
@click.pass_obj
@handle_errors
def setup_debt(app: AppContext, amount: float, description: str | None) -> None:
    """Record the debt to track."""

    debt = app.tracker.setup_debt(DebtCreate(total_amount=amount, description=description))
    click.echo(f"Debt set up: {format_currency(debt.total_amount)}")


@cli.command("edit-debt")
@click.option("--amount", type=float, default=None, help="New total amount")
@click.option("--description", default=None, help="New description (empty string clears it)")
@click.pass_obj
@handle_errors
def edit_debt(app: AppContext, amount: float | None, description: str | None) -> None:
    """Change the debt's amount or description."""

    changes: dict[str, object] = {}
    if amount is not None:
        changes["total_amount"] = amount
    if description is not None:
        changes["description"] = description
    if not changes:
        raise click.UsageError("Nothing to change; pass --amount and/or --description")
    debt = app.tracker.edit_debt(DebtUpdate(**changes))
    click.echo(f"Debt updated: {format_currency(debt.total_amount)}")


@cli.command("add-payment")
@click.option("--amount", type=float, required=True)
@click.option("--date", "paid_on", type=DATE_TYPE, default=None, help="YYYY-MM-DD, defaults to today")
@click.option("--note", default=None)
@click.pass_obj
@handle_errors
def add_payment(app: AppContext, amount: float, paid_on, note: str | None) -> None:
    """Record a payment."""

    payment_date = paid_on.date() if paid_on else date.today()
    payment = app.tracker.add_payment(
        PaymentCreate(amount=amount, payment_date=payment_date, note=note)
    )
    click.echo(
        f"Payment #{payment.id} recorded: {format_currency(payment.amount)} on {payment.payment_date.isoformat()}"
    )


@cli.command("edit-payment")
@click.argument("payment_id", type=int)
@click.option("--amount", type=float, default=None)
@click.option("--date", "paid_on", type=DATE_TYPE, default=None)
@click.option("--note", default=None, help="New note (empty string clears it)")
@click.pass_obj
@handle_errors
def edit_payment(app: AppContext, payment_id: int, amount: float | None, paid_on, note: str | None) -> None:
    """Change a payment's amount, date or note."""

    changes: dict[str, object] = {}
    if amount is not None:
        changes["amount"] = amount
    if paid_on is not None:
        changes["payment_date"] = paid_on.date()
    if note is not None:
        changes["note"] = note
    if not changes:
        raise click.UsageError("Nothing to change; pass --amount, --date and/or --note")
    payment = app.tracker.edit_payment(payment_id, PaymentUpdate(**changes))
    click.echo(f"Payment #{payment.id} updated")


@cli.command("delete-payment")
@click.argument("payment_id", type=int)
@click.confirmation_option(prompt="Delete this payment?")
@click.pass_obj
@handle_errors
def delete_payment(app: AppContext, payment_id: int) -> None:
    """Delete a payment."""

    app.tracker.delete_payment(payment_id)
    click.echo(f"Payment #{payment_id} deleted")


@cli.command("payments")
@click.pass_obj
@handle_errors
def list_payments(app: AppContext) -> None:
    """List payments, newest first."""

    payments = app.tracker.list_payments()
    if not payments:
        click.echo("No payments recorded yet.")
        return
    for payment in payments:
        note = f"  {payment.note}" if payment.note else ""
        click.echo(
            f"#{payment.id:<5} {payment.payment_date.isoformat()}  {format_currency(payment.amount):>12}{note}"
        )


@cli.command("status")
@click.pass_obj
@handle_errors
def status(app: AppContext) -> None:
    """Show totals, progress and the payoff projection."""

    snap = app.tracker.snapshot()
    totals = snap.totals
    if snap.debt.description:
        click.echo(snap.debt.description)
    click.echo(f"Total debt:     {format_currency(totals.total_amount)}")
    click.echo(f"Already repaid: {format_currency(totals.total_paid)}")
    click.echo(f"Remaining:      {format_currency(totals.remaining_display)}")
    click.echo(f"Progress:       {totals.progress_display:.1f}%")

    if totals.is_paid_off:
        click.echo("Projected payoff: done! Congratulations.")
    elif snap.projection is None:
        click.echo("Projected payoff: N/A (not enough data for a projection)")
    elif snap.projection.far_future:
        click.echo(f"Projected payoff: {snap.projection.label}")
    else:
        click.echo(
            f"Projected payoff: {snap.projection.label} "
            f"(based on {format_currency(snap.projection.average_monthly_payment)} / month)"
        )

    summary = snap.monthly_summary
    noun = "payment" if summary.payments_this_month == 1 else "payments"
    click.echo(
        f"This month: {format_currency(summary.total_this_month)} "
        f"({summary.payments_this_month} {noun})"
    )
    click.echo(
        f"Monthly average: {format_currency(summary.average_monthly_payment)} "
        f"over {summary.active_months} active months"
    )
    if not snap.has_chart_data:
        click.echo("Not enough data to chart the remaining balance.")


@cli.command("monthly")
@click.option("--year", type=int, default=None, help="Calendar year, defaults to the current one")
@click.pass_obj
@handle_errors
def monthly(app: AppContext, year: int | None) -> None:
    """Show payment totals per month."""

    today = date.today()
    buckets = aggregate_monthly(app.tracker.list_payments(), year, today=today)
    summary = summarize_months(buckets, today=today)
    click.echo(f"Monthly payments ({summary.year})")
    for bucket in buckets:
        click.echo(f"{bucket.label:<4} {format_currency(bucket.total):>12}  ({bucket.count})")


@cli.command("chart")
@click.option("--kind", type=click.Choice(["balance", "monthly"]), default="balance")
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.pass_obj
@handle_errors
def chart(app: AppContext, kind: str, output: Path | None) -> None:
    """Render a PNG chart of the balance or the monthly payments."""

    target = output or (app.config.EXPORT_DIR / f"{kind}-{date.today().isoformat()}.png")
    if kind == "balance":
        path = app.tracker.export_balance_chart(target)
    else:
        path = app.tracker.export_monthly_chart(target)
    click.echo(f"Chart written: {path}")


@cli.command("export-pdf")
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.pass_obj
@handle_errors
def export_pdf(app: AppContext, output: Path | None) -> None:
    """Export the repayment summary as PDF."""

    target = output or (app.config.EXPORT_DIR / default_report_filename())
    path = app.tracker.export_report(target)
    click.echo(f"PDF exported: {path}")


def main() -> None:  # pragma: no cover - console entry
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
