"""Command: read a single item."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tcmctl.commands._base import TcmCommand

if TYPE_CHECKING:
    from tcmctl.commands._context import AppContext


@click.command(
    cls=TcmCommand,
    examples="""\
  tcmctl item tcm:0-5-1
  tcmctl item tcm:5-120-16
  tcmctl --json item tcm:5-120-16""",
)
@click.argument("item_id")
@click.pass_obj
def item(app: AppContext, item_id: str) -> None:
    """Show the item ITEM_ID."""
    from tcmctl.services.item import ItemService

    app.emit(app.service(ItemService).get_item(item_id))
