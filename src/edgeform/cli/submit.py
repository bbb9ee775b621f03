"""CLI command: edgeform submit <resource> <file> — create or update on the controller."""

from __future__ import annotations

import asyncio
import sys

import click

from edgeform.cli._common import RESOURCE_CHOICE, console, load_or_exit, print_violations
from edgeform.client.notify import ConsoleNotifier
from edgeform.client.session import TokenStore
from edgeform.client.transport import HttpTransport
from edgeform.config import EdgeFormConfig
from edgeform.form.editor import FormEditor, SubmitOutcome, SubmitStatus
from edgeform.form.wire import dump_model
from edgeform.schema.registry import get_schema


@click.command()
@click.argument("resource", type=RESOURCE_CHOICE)
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--id",
    "resource_id",
    default=None,
    help="Update the existing resource with this ID instead of creating one.",
)
@click.pass_context
def submit(ctx: click.Context, resource: str, path: str, resource_id: str | None) -> None:
    """Validate the RESOURCE model in PATH and send it to the controller."""
    config: EdgeFormConfig = ctx.obj["config"]
    definition = get_schema(resource)
    if not definition.endpoint:
        console.print(f"[red]Error:[/red] {definition.title} cannot be submitted directly.")
        sys.exit(2)

    model = load_or_exit(path)
    session = TokenStore(config.token_path).load()
    if not session.is_authenticated:
        console.print("[yellow]Not logged in; sending without a token.[/yellow]")

    endpoint = definition.endpoint
    if resource_id:
        endpoint = f"{endpoint}/{resource_id}"

    async def _send() -> SubmitOutcome:
        editor = FormEditor(definition, model=model, notifier=ConsoleNotifier(console))
        async with HttpTransport(config.controller_url, session, config.timeout) as transport:
            return await editor.submit(transport, endpoint, update=resource_id is not None)

    outcome = asyncio.run(_send())

    if outcome.status is SubmitStatus.INVALID:
        print_violations(outcome.violations)
        sys.exit(1)
    if outcome.status is not SubmitStatus.SAVED:
        sys.exit(1)
    if isinstance(outcome.model, dict):
        click.echo(dump_model(outcome.model), nl=False)
