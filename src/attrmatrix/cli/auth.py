"""
CLI: ``attrmatrix hash-password`` — produce ``ATTRMATRIX_ADMIN_PASSWORD_HASH``.
"""

from __future__ import annotations

import typer

from attrmatrix.api.auth import hash_password


def hash_password_command(
    password: str = typer.Option(
        ...,
        "--password",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Admin password (prompted when omitted)",
    ),
) -> None:
    """Print a bcrypt hash of the admin password."""
    if not password:
        typer.echo("Password must not be empty.", err=True)
        raise typer.Exit(code=1)
    typer.echo(hash_password(password))
