"""Command: list business process types for a topology type."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tcmctl.commands._base import TcmCommand

if TYPE_CHECKING:
    from tcmctl.commands._context import AppContext


@click.command(
    "business-process-types",
    cls=TcmCommand,
    examples="""\
  tcmctl business-process-types tcm:0-1-65537
  tcmctl -q business-process-types tcm:0-1-65537""",
)
@click.argument("topology_type_id")
@click.pass_obj
def business_process_types(app: AppContext, topology_type_id: str) -> None:
    """List business process types for TOPOLOGY_TYPE_ID (Web 8.1 and later)."""
    from tcmctl.services.business_process import BusinessProcessService

    app.emit(app.service(BusinessProcessService).list_types(topology_type_id))
