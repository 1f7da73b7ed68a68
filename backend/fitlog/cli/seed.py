"""``flask seed``: load the exercise catalog and demo data."""

from __future__ import annotations

import logging
from collections.abc import Callable

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy.exc import SQLAlchemyError

from fitlog.core.extensions import db
from fitlog.seeds import seed_data

LOGGER = logging.getLogger(__name__)

Seeder = Callable[..., dict[str, dict[str, int]]]


def _echo_summary(summary: dict[str, dict[str, int]]) -> None:
    click.echo("Seed summary:")
    if not summary:
        click.echo("  (no changes)")
        return
    width = max(len(name) for name in summary)
    for table, counters in sorted(summary.items()):
        click.echo(
            f"  {table.ljust(width)}  created={counters.get('created', 0):>3}"
            f"  existing={counters.get('existing', 0):>3}"
        )


def _seed(seeder: Seeder, verbose: bool) -> None:
    """Run ``seeder`` and print its summary; database failures abort the command."""
    try:
        summary = seeder(db, verbose=verbose)
    except (SQLAlchemyError, RuntimeError) as exc:
        db.session.rollback()
        LOGGER.error("Seeding failed", exc_info=True)
        raise click.ClickException(f"Seeding failed: {exc}") from exc
    _echo_summary(summary)


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Log each seeding step.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Database seeding commands."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger(seed_data.__name__).setLevel(level)


@seed_cli.command("catalog")
@click.pass_context
@with_appcontext
def catalog_command(ctx: click.Context) -> None:
    """Load only the global exercise catalog (safe in every environment)."""
    _seed(seed_data.seed_exercise_catalog, ctx.obj["verbose"])


@seed_cli.command("run")
@click.pass_context
@with_appcontext
def run_command(ctx: click.Context) -> None:
    """Load the catalog, demo users, demo routines and their workouts."""
    _seed(seed_data.run_all, ctx.obj["verbose"])


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
@with_appcontext
def fresh_command(ctx: click.Context, yes: bool) -> None:
    """Drop every table, recreate the schema and run all seeders."""
    if current_app.config.get("ENV_NAME") == "production":
        raise click.UsageError("'flask seed fresh' is disabled in production.")
    if not yes:
        click.confirm("Drop all tables and reseed?", abort=True)
    LOGGER.info("Recreating database schema")
    db.session.remove()
    db.drop_all()
    db.create_all()
    _seed(seed_data.run_all, ctx.obj["verbose"])
