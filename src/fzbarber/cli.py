"""Command line entry points for fzbarber."""

from __future__ import annotations

from datetime import date, datetime

import click

from .config import BaseConfig
from .constants.services import SERVICE_CATALOG, SERVICE_TYPES_BY_NAME
from .infra.database import bootstrap_database
from .infra.repositories import SQLModelServiceRecordRepository
from .services import auth, service_log
from .services.calendar_view import select_date
from .services.earnings import sum_and_count, to_viewing_time, window_totals
from .services.formatting import format_count, format_currency, format_long_date, format_time


def _session_factory(config: BaseConfig):
    _engine, session_factory = bootstrap_database(config)
    return session_factory


def _require_user(username: str, session_factory):
    user = auth.get_user_by_username(username, session_factory)
    if user is None or user.id is None:
        raise click.ClickException(f"Unknown user: {username}")
    return user


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Barbershop earnings dashboard."""

    ctx.obj = BaseConfig()


@cli.command("create-user")
@click.option("--username", prompt=True)
@click.password_option()
@click.pass_obj
def create_user(config: BaseConfig, username: str, password: str) -> None:
    """Create an operator account."""

    try:
        user = auth.create_user(
            username=username, password=password, session_factory=_session_factory(config)
        )
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Created user {user.username} (id={user.id})")


@cli.command("reset-password")
@click.option("--username", prompt=True)
@click.password_option()
@click.pass_obj
def reset_password(config: BaseConfig, username: str, password: str) -> None:
    """Set a new password for an existing account."""

    try:
        auth.reset_password(
            username=username, password=password, session_factory=_session_factory(config)
        )
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Password updated for {username}")


@cli.command("log-service")
@click.option("--username", required=True)
@click.option(
    "--service",
    "service_name",
    type=click.Choice([service.name for service in SERVICE_CATALOG]),
    required=True,
)
@click.option(
    "--at",
    "at",
    type=click.DateTime(formats=["%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M"]),
    default=None,
    help="Local time the service was done; defaults to now.",
)
@click.pass_obj
def log_service(config: BaseConfig, username: str, service_name: str, at: datetime | None) -> None:
    """Record one catalog service for a user."""

    session_factory = _session_factory(config)
    user = _require_user(username, session_factory)
    tz = config.viewing_timezone()
    timestamp = to_viewing_time(at, tz) if at is not None else None
    record = service_log.record_service(
        SQLModelServiceRecordRepository(session_factory),
        SERVICE_TYPES_BY_NAME[service_name],
        user_id=user.id,
        timestamp=timestamp,
    )
    click.echo(
        f"Recorded {record.name} ({format_currency(record.price)}) at {format_time(record.timestamp, tz)}"
    )


@cli.command("summary")
@click.option("--username", required=True)
@click.option(
    "--at",
    "at",
    type=click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M"]),
    default=None,
    help="Evaluate the windows at this local time instead of now.",
)
@click.option(
    "--day",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Also list the services logged on this date.",
)
@click.pass_obj
def summary(config: BaseConfig, username: str, at: datetime | None, day: datetime | None) -> None:
    """Print today/week/month/year earnings for a user."""

    session_factory = _session_factory(config)
    user = _require_user(username, session_factory)
    tz = config.viewing_timezone()
    records = SQLModelServiceRecordRepository(session_factory).list_all(user_id=user.id)

    now = to_viewing_time(at, tz) if at is not None else to_viewing_time(datetime.now().astimezone(), tz)
    windows = window_totals(records, now, tz)
    click.echo(format_long_date(now.date()))
    for label, totals in (
        ("Hoy", windows.today),
        ("Esta Semana", windows.week),
        ("Este Mes", windows.month),
        ("Este Año", windows.year),
    ):
        click.echo(f"{label:<12} {format_currency(totals.total):>14}  {format_count(totals.count)}")

    if day is not None:
        target: date = day.date()
        selected = select_date(records, target, tz)
        totals = sum_and_count(selected)
        click.echo("")
        click.echo(f"{format_long_date(target, with_weekday=False)}: {format_currency(totals.total)}")
        for record in selected:
            click.echo(f"  {format_time(record.timestamp, tz)}  {record.name:<26} {format_currency(record.price):>10}")


@cli.command("desktop")
def desktop() -> None:
    """Launch the desktop dashboard."""

    from .desktop.app import run

    run()


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
