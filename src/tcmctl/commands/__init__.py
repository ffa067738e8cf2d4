"""Subcommand modules for tcmctl.

Provides register_commands() which uses deferred imports to keep
``tcmctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from tcmctl.commands.publication import publication
    from tcmctl.commands.uri import uri

    cli.add_command(publication)
    cli.add_command(uri)

    # --- Standalone commands ---
    from tcmctl.commands.business_process import business_process_types
    from tcmctl.commands.item import item

    cli.add_command(item)
    cli.add_command(business_process_types)
