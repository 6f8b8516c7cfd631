"""Command-line interface for CashCadence."""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from typing import Optional

import click

from .constants.categories import (
    EXPENSE_CATEGORIES,
    FREQUENCIES,
    INCOME_SOURCES,
    TransactionKind,
)
from .config import BaseConfig
from .context import AppContext, create_app_context
from .logging_config import get_logger, setup_logging
from .models.recurring import RecurringTransaction
from .models.transaction import Expense, Income
from .services import balances, insights, recurring, savings
from .services.occurrences import parse_iso_date

logger = get_logger(__name__)


class IsoDate(click.ParamType):
    """``YYYY-MM-DD`` parameter."""

    name = "date"

    def convert(self, value, param, ctx):
        if isinstance(value, date):
            return value
        try:
            return parse_iso_date(value)
        except ValueError:
            self.fail(f"{value!r} is not an ISO date (YYYY-MM-DD)", param, ctx)


class Month(click.ParamType):
    """``YYYY-MM`` parameter, converted to the month's first day."""

    name = "month"

    def convert(self, value, param, ctx):
        if isinstance(value, date):
            return value.replace(day=1)
        try:
            return datetime.strptime(value, "%Y-%m").date()
        except ValueError:
            self.fail(f"{value!r} is not a month (YYYY-MM)", param, ctx)


ISO_DATE = IsoDate()
MONTH = Month()


def _new_id() -> str:
    return str(uuid.uuid4())


def _today(value: Optional[date]) -> date:
    return value or date.today()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _money(value: float) -> str:
    return f"{value:,.2f}"


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Track income, expenses, recurring templates and savings goals."""

    if ctx.obj is None:
        config = BaseConfig()
        setup_logging(config)
        ctx.obj = create_app_context(config)


pass_app = click.make_pass_decorator(AppContext)


@cli.command("summary")
@click.option("--month", "month", type=MONTH, default=None, help="Month to summarise (YYYY-MM).")
@click.option("--today", "today", type=ISO_DATE, default=None, help="Override today's date.")
@pass_app
def summary(app: AppContext, month: Optional[date], today: Optional[date]) -> None:
    """Show carried-in balance, month totals and total balance."""

    today = _today(today)
    month = month or today.replace(day=1)
    overview = balances.month_overview(
        app.transaction_repo.list_incomes(),
        app.transaction_repo.list_expenses(),
        app.recurring_repo.list_all(),
        month,
        today=today,
    )
    click.echo(f"Month:            {month:%Y-%m}")
    click.echo(f"Previous balance: {_money(overview.previous_balance)}")
    click.echo(f"Income:           {_money(overview.summary.total_income)}")
    click.echo(f"Expenses:         {_money(overview.summary.total_expenses)}")
    click.echo(f"Month balance:    {_money(overview.summary.balance)}")
    click.echo(f"Total balance:    {_money(overview.total_balance)}")


@cli.command("categories")
@click.option("--month", "month", type=MONTH, default=None, help="Month to break down (YYYY-MM).")
@click.option("--today", "today", type=ISO_DATE, default=None, help="Override today's date.")
@pass_app
def categories(app: AppContext, month: Optional[date], today: Optional[date]) -> None:
    """Show expenses per category for a month."""

    today = _today(today)
    month = month or today.replace(day=1)
    period = balances.aggregate(
        app.transaction_repo.list_incomes(),
        app.transaction_repo.list_expenses(),
        app.recurring_repo.list_all(),
        month,
        today=today,
    )
    breakdown = insights.category_breakdown(period.expenses)
    if not breakdown:
        click.echo("No expenses.")
        return
    for entry in breakdown:
        click.echo(f"{entry.category:<14} {_money(entry.amount):>12} {entry.share:6.2f}%")


@cli.command("upcoming")
@click.option("--days", "days", type=click.IntRange(min=0), default=None, help="Lookahead window in days.")
@click.option("--today", "today", type=ISO_DATE, default=None, help="Override today's date.")
@pass_app
def upcoming_cmd(app: AppContext, days: Optional[int], today: Optional[date]) -> None:
    """List recurring transactions due soon."""

    today = _today(today)
    window = app.config.UPCOMING_DAYS if days is None else days
    due = recurring.upcoming(app.recurring_repo.list_all(), today, window)
    if not due:
        click.echo("Nothing due.")
        return
    for item in due:
        label = item.template.name or item.template.source or item.template.kind
        click.echo(
            f"{item.next_date.isoformat()}  in {item.days_until:>3} day(s)  "
            f"{item.template.kind:<7} {label:<20} {_money(item.template.amount)}"
        )


# --- incomes & expenses ---------------------------------------------------


@cli.group("income")
def income_group() -> None:
    """Manage hand-entered incomes."""


@income_group.command("add")
@click.option("--amount", type=click.FloatRange(min=0), required=True)
@click.option("--source", type=click.Choice(INCOME_SOURCES), default="other", show_default=True)
@click.option("--date", "occurred_on", type=ISO_DATE, default=None, help="Defaults to today.")
@click.option("--description", default=None)
@pass_app
def income_add(
    app: AppContext, amount: float, source: str, occurred_on: Optional[date], description: Optional[str]
) -> None:
    record = app.transaction_repo.add_income(
        Income(
            id=_new_id(),
            source=source,
            amount=amount,
            occurred_on=_today(occurred_on),
            description=description,
        )
    )
    logger.info("Income added", extra={"income_id": record.id})
    click.echo(record.id)


@income_group.command("delete")
@click.argument("income_id")
@pass_app
def income_delete(app: AppContext, income_id: str) -> None:
    try:
        app.transaction_repo.delete_income(income_id)
    except (ValueError, KeyError) as exc:
        raise click.ClickException(_reason(exc)) from exc
    click.echo(f"Deleted {income_id}")


@cli.group("expense")
def expense_group() -> None:
    """Manage hand-entered expenses."""


@expense_group.command("add")
@click.option("--amount", type=click.FloatRange(min=0), required=True)
@click.option("--name", required=True)
@click.option("--category", type=click.Choice(EXPENSE_CATEGORIES), default="other", show_default=True)
@click.option("--date", "occurred_on", type=ISO_DATE, default=None, help="Defaults to today.")
@click.option("--description", default=None)
@pass_app
def expense_add(
    app: AppContext,
    amount: float,
    name: str,
    category: str,
    occurred_on: Optional[date],
    description: Optional[str],
) -> None:
    record = app.transaction_repo.add_expense(
        Expense(
            id=_new_id(),
            name=name,
            category=category,
            amount=amount,
            occurred_on=_today(occurred_on),
            description=description,
        )
    )
    logger.info("Expense added", extra={"expense_id": record.id})
    click.echo(record.id)


@expense_group.command("delete")
@click.argument("expense_id")
@pass_app
def expense_delete(app: AppContext, expense_id: str) -> None:
    try:
        app.transaction_repo.delete_expense(expense_id)
    except (ValueError, KeyError) as exc:
        raise click.ClickException(_reason(exc)) from exc
    click.echo(f"Deleted {expense_id}")


# --- recurring templates --------------------------------------------------


@cli.group("recurring")
def recurring_group() -> None:
    """Manage recurring templates."""


@recurring_group.command("add")
@click.option("--type", "kind", type=click.Choice([k.value for k in TransactionKind]), required=True)
@click.option("--amount", type=click.FloatRange(min=0), required=True)
@click.option("--frequency", type=click.Choice(FREQUENCIES), default="monthly", show_default=True)
@click.option("--start", "start_date", type=ISO_DATE, required=True)
@click.option("--end", "end_date", type=ISO_DATE, default=None)
@click.option("--source", type=click.Choice(INCOME_SOURCES), default=None)
@click.option("--name", default=None)
@click.option("--category", type=click.Choice(EXPENSE_CATEGORIES), default=None)
@click.option("--description", default=None)
@pass_app
def recurring_add(app: AppContext, **fields) -> None:
    template = RecurringTransaction(id=_new_id(), is_paused=False, **fields)
    try:
        stored = app.recurring_repo.create(template)
    except recurring.InvalidTemplateError as exc:
        raise click.ClickException(str(exc)) from exc
    logger.info("Recurring template added", extra={"template_id": stored.id})
    click.echo(stored.id)


@recurring_group.command("list")
@pass_app
def recurring_list(app: AppContext) -> None:
    for template in app.recurring_repo.list_all():
        state = "paused" if template.is_paused else "active"
        label = template.name or template.source or ""
        end = template.end_date.isoformat() if template.end_date else "-"
        click.echo(
            f"{template.id}  {template.kind:<7} {template.frequency:<7} "
            f"{template.start_date.isoformat()}..{end:<10} {state:<6} {label} {_money(template.amount)}"
        )


def _set_paused(app: AppContext, template_id: str, paused: bool) -> None:
    try:
        app.recurring_repo.set_paused(template_id, paused)
    except KeyError as exc:
        raise click.ClickException(f"Unknown recurring template: {template_id}") from exc
    click.echo(f"{'Paused' if paused else 'Resumed'} {template_id}")


@recurring_group.command("pause")
@click.argument("template_id")
@pass_app
def recurring_pause(app: AppContext, template_id: str) -> None:
    _set_paused(app, template_id, True)


@recurring_group.command("resume")
@click.argument("template_id")
@pass_app
def recurring_resume(app: AppContext, template_id: str) -> None:
    _set_paused(app, template_id, False)


@recurring_group.command("delete")
@click.argument("template_id")
@pass_app
def recurring_delete(app: AppContext, template_id: str) -> None:
    try:
        app.recurring_repo.delete(template_id)
    except KeyError as exc:
        raise click.ClickException(f"Unknown recurring template: {template_id}") from exc
    click.echo(f"Deleted {template_id}")


# --- savings vault ----------------------------------------------------------


@cli.group("goal")
def goal_group() -> None:
    """Manage savings vault goals."""


@goal_group.command("add")
@click.argument("title")
@click.option("--target", type=float, required=True)
@click.option("--deadline", type=ISO_DATE, default=None)
@pass_app
def goal_add(app: AppContext, title: str, target: float, deadline: Optional[date]) -> None:
    try:
        goal = savings.create_goal(title, target, now=_utcnow(), deadline=deadline)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    stored = app.savings_repo.save(goal)
    click.echo(stored.id)


@goal_group.command("deposit")
@click.argument("goal_id")
@click.argument("amount", type=float)
@click.option("--note", default=None)
@pass_app
def goal_deposit(app: AppContext, goal_id: str, amount: float, note: Optional[str]) -> None:
    goal = app.savings_repo.get_by_id(goal_id)
    if goal is None:
        raise click.ClickException(f"Unknown goal: {goal_id}")
    try:
        result = savings.deposit(goal, amount, note, now=_utcnow())
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    stored = app.savings_repo.save(result.goal)
    progress = savings.goal_progress(stored)
    click.echo(f"{stored.title}: {_money(stored.current_amount)} / {_money(stored.target_amount)} ({progress.percent:.2f}%)")
    if result.completed:
        click.echo("Goal completed!")


@goal_group.command("list")
@click.option("--today", "today", type=ISO_DATE, default=None, help="Override today's date.")
@pass_app
def goal_list(app: AppContext, today: Optional[date]) -> None:
    today = _today(today)
    goals = app.savings_repo.list_goals()
    for goal in goals:
        progress = savings.goal_progress(goal)
        flags = []
        if goal.is_completed:
            flags.append("completed")
        if savings.is_overdue(goal, today):
            flags.append("overdue")
        click.echo(
            f"{goal.id}  {goal.title:<20} {_money(goal.current_amount)} / {_money(goal.target_amount)} "
            f"({progress.percent:.2f}%) {' '.join(flags)}".rstrip()
        )
    click.echo(f"Total saved: {_money(savings.total_saved(goals))}")


@goal_group.command("delete")
@click.argument("goal_id")
@pass_app
def goal_delete(app: AppContext, goal_id: str) -> None:
    try:
        app.savings_repo.delete(goal_id)
    except KeyError as exc:
        raise click.ClickException(f"Unknown goal: {goal_id}") from exc
    click.echo(f"Deleted {goal_id}")


def _reason(exc: Exception) -> str:
    if isinstance(exc, KeyError):
        return f"Unknown id: {exc.args[0]}"
    return str(exc)


def main() -> None:  # pragma: no cover - console entry point
    cli(obj=None)


if __name__ == "__main__":  # pragma: no cover
    main()
