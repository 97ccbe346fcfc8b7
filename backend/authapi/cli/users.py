"""Flask CLI commands for administrative account-state changes."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from authapi.core.security import get_components
from authapi.services._shared.errors import NotFoundError
from authapi.services.auth import AuthService

LOGGER = logging.getLogger(__name__)


def _service() -> AuthService:
    components = get_components()
    return AuthService(
        passwords=components.passwords,
        tokens=components.tokens,
        blacklist=components.blacklist,
        password_min_length=components.password_min_length,
    )


def _apply(identifier: str, transition: str) -> None:
    try:
        user = _service().change_account_state(identifier, transition)
    except NotFoundError as exc:
        raise click.ClickException(f"No account matches {identifier!r}.") from exc
    LOGGER.info(
        "Account state changed",
        extra={
            "event": "users.account.state_changed",
            "context": {"user_id": user.id, "transition": transition},
        },
    )
    click.echo(
        f"{user.username}: confirmed={str(user.confirmed).lower()} "
        f"blocked={str(user.blocked).lower()}"
    )


@click.group("users")
def users_cli() -> None:
    """Administrative account commands."""


@users_cli.command("confirm")
@click.argument("identifier")
@with_appcontext
def confirm_command(identifier: str) -> None:
    """Mark the account IDENTIFIER (email or username) as confirmed."""
    _apply(identifier, "confirm")


@users_cli.command("block")
@click.argument("identifier")
@with_appcontext
def block_command(identifier: str) -> None:
    """Block the account IDENTIFIER; it can no longer log in."""
    _apply(identifier, "block")


@users_cli.command("unblock")
@click.argument("identifier")
@with_appcontext
def unblock_command(identifier: str) -> None:
    """Lift a block on the account IDENTIFIER."""
    _apply(identifier, "unblock")


__all__ = ["users_cli"]
