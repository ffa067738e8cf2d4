"""Click base classes carrying usage examples.

Examples are declared once on the decorator (``examples="..."``) and shown
two ways: alone with ``--examples``, and as a trailing section of ``--help``.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click


class ExamplesMixin:
    """Adds the ``examples`` keyword and the eager ``--examples`` flag."""

    params: list[click.Parameter]

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = textwrap.dedent(examples).strip("\n") if examples else None
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(textwrap.indent(self.examples or "", "  "))
        ctx.exit(0)

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        super().format_epilog(ctx, formatter)  # type: ignore[misc]
        if not self.examples:
            return
        with formatter.section("Examples"):
            for line in self.examples.splitlines():
                formatter.write(f"{'':>{formatter.current_indent}}{line}\n")


class TcmCommand(ExamplesMixin, click.Command):
    """Command with ``--examples`` support."""


class TcmGroup(ExamplesMixin, click.Group):
    """Group whose subcommands default to :class:`TcmCommand`."""

    command_class = TcmCommand
