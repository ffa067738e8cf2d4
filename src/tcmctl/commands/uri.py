"""Command group: inspect and translate TCM URIs."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tcmctl.commands._base import TcmGroup

if TYPE_CHECKING:
    from tcmctl.commands._context import AppContext


@click.group(
    cls=TcmGroup,
    examples="""\
  tcmctl uri translate tcm:2-500-16 tcm:0-123-1
  tcmctl uri translate tcm:2-500-16 123 --version 3
  tcmctl uri parse tcm:2-500-v3""",
)
def uri() -> None:
    """Inspect and translate TCM URIs."""


@uri.command(
    examples="""\
  tcmctl uri translate tcm:2-500-2 tcm:0-123-1
  tcmctl uri translate tcm:2-500-2 123
  tcmctl uri translate tcm:2-500-16 123 --version 3
  tcmctl -q uri translate tcm:2-500-16 123 --offline""",
)
@click.argument("item_id")
@click.argument("publication")
@click.option("--version", "version", type=click.IntRange(min=1), default=None, help="Version.")
@click.option("--offline", is_flag=True, help="Rewrite locally without calling the server.")
@click.pass_obj
def translate(
    app: AppContext,
    item_id: str,
    publication: str,
    version: int | None,
    offline: bool,
) -> None:
    """Translate ITEM_ID into PUBLICATION (a TCM URI or a bare publication id)."""
    from tcmctl.services.uri import UriService

    service = app.service(UriService, remote=not offline)
    app.emit(service.translate(item_id, publication, version, offline=offline))


@uri.command(
    "parse",
    examples="""\
  tcmctl uri parse tcm:2-500-16
  tcmctl --json uri parse tcm:2-500-v3""",
)
@click.argument("item_id")
@click.pass_obj
def parse_cmd(app: AppContext, item_id: str) -> None:
    """Show the components of ITEM_ID."""
    from tcmctl.services.uri import UriService

    app.emit(app.service(UriService, remote=False).describe(item_id))
