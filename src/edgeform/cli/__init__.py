"""CLI entry point — Click group with global options."""

from __future__ import annotations

import logging

import click

from edgeform import __version__
from edgeform.config import EdgeFormConfig


@click.group()
@click.version_option(version=__version__, prog_name="edgeform")
@click.option(
    "--controller",
    "-c",
    default=None,
    help="Controller base URL (overrides EDGEFORM_CONTROLLER_URL).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, controller: str | None, verbose: bool) -> None:
    """edgeform — build, validate and submit edge controller resources."""
    config = EdgeFormConfig.load()
    if controller:
        config.controller_url = controller.rstrip("/")
    config.verbose = verbose

    ctx.ensure_object(dict)
    ctx.obj["config"] = config

    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _register_commands() -> None:
    from edgeform.cli.auth import login, logout  # noqa: F811
    from edgeform.cli.schema import new, schema  # noqa: F811
    from edgeform.cli.submit import submit  # noqa: F811
    from edgeform.cli.validate import validate  # noqa: F811

    main.add_command(schema)
    main.add_command(new)
    main.add_command(validate)
    main.add_command(submit)
    main.add_command(login)
    main.add_command(logout)


_register_commands()
