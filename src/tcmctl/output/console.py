"""Themed Rich console that renders into a string.

Renderers print into :func:`create_console` and read the text back with
:func:`get_output`; the CLI decides whether it goes to stdout or stderr.
Rich drops color codes by itself when the console is not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

from tcmctl.domain.uri import TCM_PREFIX

TCM_THEME = Theme(
    {
        "tcm.ok": "bold green",
        "tcm.error": "bold red",
        "tcm.op": "bold cyan",
        "tcm.key": "dim",
        "tcm.id": "bold blue",
        "tcm.publication": "bold magenta",
        "tcm.title": "bold",
        "tcm.path": "dim",
    }
)

DEFAULT_WIDTH = 120


def create_console(*, width: int | None = None) -> Console:
    """Console writing into an in-memory buffer."""
    return Console(
        file=StringIO(),
        theme=TCM_THEME,
        highlight=False,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    """Text written so far to a console made by :func:`create_console`."""
    buffer = console.file
    if not isinstance(buffer, StringIO):
        msg = "Console does not render into a string buffer"
        raise TypeError(msg)
    return buffer.getvalue()


def uri_text(value: str) -> Text:
    """Style a TCM URI with its publication segment highlighted.

    Values without the ``tcm:`` tag are styled as plain identifiers.
    """
    if not value.startswith(TCM_PREFIX):
        return Text(value, style="tcm.id")
    publication, sep, rest = value[len(TCM_PREFIX) :].partition("-")
    text = Text(TCM_PREFIX, style="tcm.key")
    text.append(publication, style="tcm.publication")
    text.append(sep + rest, style="tcm.id")
    return text
