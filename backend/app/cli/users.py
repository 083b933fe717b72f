"""Flask CLI commands for bootstrapping user accounts."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from app.models.user import Role
from app.services._shared.errors import ServiceError
from app.services.users.dto import CreateUserIn

LOGGER = logging.getLogger(__name__)


@click.group("users")
def users_cli() -> None:
    """Account administration commands."""


@users_cli.command("create-admin")
@click.argument("username")
@click.option("--full-name", default=None, help="Display name stored on the account.")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Password for the new account (prompted when omitted).",
)
@with_appcontext
def create_admin_command(username: str, full_name: str | None, password: str) -> None:
    """Create USERNAME holding every administrative role.

    The first account of a fresh deployment has to come from here, since the
    HTTP endpoints that create privileged accounts require ``USER_ADMIN``.
    """
    service = current_app.extensions["user_service"]
    dto = CreateUserIn(
        username=username,
        password=password,
        re_password=password,
        full_name=full_name,
        authorities=tuple(role.value for role in Role),
    )
    try:
        view = service.create(dto)
    except ServiceError as exc:
        raise click.ClickException(f"Could not create {username!r}: {exc}") from exc
    LOGGER.info("cli.create_admin", extra={"user_id": view.id, "username": view.username})
    click.echo(f"Created admin {view.username} (id={view.id}) with {', '.join(view.authorities)}")
