"""Root ``tcmctl`` command group: global flags, settings, and command registration."""

from __future__ import annotations

from typing import Any

import click
from pydantic import ValidationError

from tcmctl import __version__
from tcmctl.commands import register_commands
from tcmctl.commands._context import AppContext
from tcmctl.config.settings import TcmSettings


def _load_settings(config_path: str | None, **flags: Any) -> TcmSettings:
    """Build settings, turning validation failures into a readable CLI error."""
    try:
        return TcmSettings.from_cli(config_path=config_path, **flags)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        msg = f"Invalid configuration: {problems}"
        raise click.ClickException(msg) from exc


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="tcmctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output (ids only).")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with call timings.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--no-interact", is_flag=True, help="Never prompt; decline confirmations.")
@click.option("-y", "--yes", "assume_yes", is_flag=True, help="Confirm changes without prompting.")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Use this tcmctl.toml instead of searching for one.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, **flags: bool) -> None:
    """Tridion Core Service command line.

    Reads publications and items, creates and updates publications, and
    translates TCM URIs between publications.
    """
    ctx.obj = AppContext(_load_settings(config_path, **flags))
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
