"""CLI commands: edgeform login / edgeform logout — manage the session token."""

from __future__ import annotations

import asyncio
import sys

import click

from edgeform.cli._common import console
from edgeform.client.session import SessionState, TokenStore
from edgeform.client.transport import Err, HttpTransport, Result
from edgeform.config import EdgeFormConfig


@click.command()
@click.argument("username")
@click.password_option(confirmation_prompt=False)
@click.pass_context
def login(ctx: click.Context, username: str, password: str) -> None:
    """Log in to the controller as USERNAME and keep the session token."""
    config: EdgeFormConfig = ctx.obj["config"]
    session = SessionState()

    async def _login() -> Result:
        async with HttpTransport(config.controller_url, session, config.timeout) as transport:
            return await transport.login(username, password)

    result = asyncio.run(_login())
    if isinstance(result, Err):
        console.print(f"[red]{result.message}[/red]")
        sys.exit(1)

    TokenStore(config.token_path).save(session)
    console.print(f"[green]Logged in to {config.controller_url}.[/green]")


@click.command()
@click.pass_context
def logout(ctx: click.Context) -> None:
    """Forget the stored session token."""
    config: EdgeFormConfig = ctx.obj["config"]
    TokenStore(config.token_path).clear()
    console.print("Logged out.")
