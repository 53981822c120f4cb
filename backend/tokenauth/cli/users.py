"""Flask CLI commands for managing the user store."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from tokenauth.core.extensions import db
from tokenauth.infra import get_adapters
from tokenauth.models.user import Role
from tokenauth.seeds import seed_data
from tokenauth.services._shared.errors import ConflictError
from tokenauth.services.users import UserCreateIn, UserService

LOGGER = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    """Raise logging verbosity for seed modules when requested."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger("tokenauth.seeds").setLevel(level)
    LOGGER.setLevel(level)


def _echo_summary(summary: dict[str, dict[str, int]]) -> None:
    """Pretty-print a tabular summary of seed results."""
    click.echo("Seed summary:")
    if not summary:
        click.echo("  (no changes)")
        return
    width = max(len(name) for name in summary)
    for table, counters in sorted(summary.items()):
        created = counters.get("created", 0)
        existing = counters.get("existing", 0)
        click.echo(f"  {table.ljust(width)}  created={created:>2}  existing={existing:>2}")


def _require_sql_backend() -> None:
    if current_app.config.get("USER_STORE_BACKEND") != "sqlalchemy":
        raise click.UsageError("This command requires USER_STORE_BACKEND=sqlalchemy.")


def _ensure_non_production() -> None:
    """Abort destructive commands when running in production."""
    config = current_app.config
    app_env = str(config.get("APP_ENV", "")).lower()
    is_debug = bool(config.get("DEBUG"))
    is_testing = bool(config.get("TESTING"))
    if app_env == "production" or not (is_debug or is_testing):
        raise click.UsageError(
            "The 'flask users reset-db' command is restricted to non-production environments."
        )


@click.group("users")
@click.option("--verbose", is_flag=True, help="Enable verbose logging.")
@click.pass_context
def users_cli(ctx: click.Context, verbose: bool) -> None:
    """Manage user accounts."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose)


@users_cli.command("init-db")
@with_appcontext
def init_db_command() -> None:
    """Create the users table if it does not exist."""
    _require_sql_backend()
    db.create_all()
    click.echo("Schema ready.")


@users_cli.command("reset-db")
@click.option("--yes", is_flag=True, help="Skip the destructive confirmation prompt.")
@with_appcontext
def reset_db_command(yes: bool) -> None:
    """Drop and recreate the users table."""
    _require_sql_backend()
    _ensure_non_production()
    if not yes:
        click.confirm("This will DROP every stored user. Continue?", abort=True)
    LOGGER.info("Dropping database schema...")
    db.session.remove()
    db.drop_all()
    LOGGER.info("Recreating database schema...")
    db.create_all()
    click.echo("Schema recreated.")


@users_cli.command("seed")
@click.pass_context
@with_appcontext
def seed_command(ctx: click.Context) -> None:
    """Create the demo accounts that do not exist yet."""
    verbose = bool(ctx.obj.get("verbose", False))
    summary = seed_data.run_all(get_adapters().users, verbose=verbose)
    _echo_summary(summary)


@users_cli.command("create")
@click.option("--email", required=True)
@click.option("--password", required=True, prompt=True, hide_input=True)
@click.option(
    "--role",
    type=click.Choice([r.value for r in Role], case_sensitive=False),
    default=Role.USER.value,
    show_default=True,
)
@with_appcontext
def create_command(email: str, password: str, role: str) -> None:
    """Create a single account with an explicit role."""
    service = UserService(users=get_adapters().users)
    granted = Role(role.upper())
    try:
        user = service.create_user(UserCreateIn(email=email, password=password), role=granted)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    except ConflictError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Created {granted.value} {user.email} ({user.uuid})")
