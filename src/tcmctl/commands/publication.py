"""Command group: list, create, and update publications."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import click

from tcmctl.commands._base import TcmGroup

if TYPE_CHECKING:
    from tcmctl.commands._context import AppContext
    from tcmctl.domain.records import PublicationFields


def _field_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by ``create`` and ``update``."""
    options = [
        click.option("--key", default=None, help="Publication key (defaults to the title)."),
        click.option("--publication-path", default=None, help="Publication path."),
        click.option("--publication-url", default=None, help="Publication URL."),
        click.option("--multimedia-path", default=None, help="Multimedia path."),
        click.option("--multimedia-url", default=None, help="Multimedia URL."),
        click.option(
            "--parent",
            "parents",
            multiple=True,
            help="Parent publication title or TCM URI (repeatable, replaces all parents).",
        ),
        click.option(
            "--no-parents",
            is_flag=True,
            help="Remove all parent publications.",
        ),
        click.option(
            "--business-process-type",
            default=None,
            help="Business process type TCM URI (Web 8.1 and later).",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_fields(title: str | None, **opts: Any) -> PublicationFields:
    from tcmctl.domain.records import PublicationFields

    no_parents = opts.pop("no_parents")
    supplied = opts.pop("parents")
    if no_parents and supplied:
        msg = "--parent and --no-parents are mutually exclusive."
        raise click.UsageError(msg)

    parents: list[str] | None = None
    if no_parents:
        parents = []
    elif supplied:
        parents = list(supplied)
    return PublicationFields(title=title, parents=parents, **opts)


@click.group(
    cls=TcmGroup,
    examples="""\
  tcmctl publication list
  tcmctl publication list --type Web
  tcmctl publication create "020 Content" --parent "010 Schemas"
  tcmctl publication update tcm:0-5-1 --publication-url /en""",
)
def publication() -> None:
    """List, create, and update publications."""


@publication.command(
    "list",
    examples="""\
  tcmctl publication list
  tcmctl publication list --type Web
  tcmctl -q publication list""",
)
@click.option("--type", "type_filter", default=None, help="Only publications of this type.")
@click.pass_obj
def list_publications(app: AppContext, type_filter: str | None) -> None:
    """List publications."""
    from tcmctl.services.publication import PublicationService

    app.emit(app.service(PublicationService).list_publications(type_filter))


@publication.command(
    examples="""\
  tcmctl publication create "030 Website"
  tcmctl publication create "030 Website" --key website --publication-url /
  tcmctl publication create "030 Website" --parent "020 Content" --parent tcm:0-2-1
  tcmctl -y publication create "030 Website" --business-process-type tcm:0-3-66570""",
)
@click.argument("title")
@_field_options
@click.pass_obj
def create(app: AppContext, title: str, **opts: Any) -> None:
    """Create a publication named TITLE."""
    from tcmctl.services.publication import PublicationService

    fields = _build_fields(title, **opts)
    app.emit(app.service(PublicationService).create_publication(fields))


@publication.command(
    examples="""\
  tcmctl publication update tcm:0-5-1 --title "030 Web Site"
  tcmctl publication update tcm:0-5-1 --parent "020 Content"
  tcmctl publication update tcm:0-5-1 --no-parents""",
)
@click.argument("publication_id")
@click.option("--title", default=None, help="New title.")
@_field_options
@click.pass_obj
def update(app: AppContext, publication_id: str, title: str | None, **opts: Any) -> None:
    """Update the publication PUBLICATION_ID."""
    from tcmctl.services.publication import PublicationService

    fields = _build_fields(title, **opts)
    if fields.is_empty():
        click.echo("No changes specified. Use --help for options.", err=True)
        raise SystemExit(1)

    app.emit(app.service(PublicationService).update_publication(publication_id, fields))
