"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tcmctl.output.console import create_console, get_output, uri_text

if TYPE_CHECKING:
    from rich.console import Console

    from tcmctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: ids for lists, the key value otherwise."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(i.get("id", "")) for i in items if isinstance(i, dict))
    if "translated" in result.data:
        return str(result.data["translated"])
    if "id" in result.data:
        return str(result.data["id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="tcm.ok"), Text(f"  {result.op}", style="tcm.op"))


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="tcm.key")
    if isinstance(value, (dict, list)):
        value = json.dumps(value, separators=(",", ":"))
    if key == "id" or key.endswith("_id") or key in ("translated", "publication"):
        v = uri_text(str(value))
    elif key == "title":
        v = Text(str(value), style="tcm.title")
    elif key.endswith("_path") or key.endswith("_url"):
        v = Text(str(value), style="tcm.path")
    else:
        v = Text(str(value))
    console.print(k, v)


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_span(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    duration = span.get("duration_ms", 0.0)
    style = "bold red" if duration > 1000 else "yellow" if duration > 100 else "dim"
    line = Text(" " * indent)
    line.append(f"{duration:>8.2f}ms", style=style)
    line.append(f"  {span.get('name', '?')}")
    if "remote_ms" in span:
        line.append(f"  remote {span['remote_ms']:.2f}ms", style="dim")
    annotations = span.get("annotations") or {}
    if annotations:
        line.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")")
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


def _link_text(link: dict[str, Any] | None) -> str:
    if not link:
        return ""
    title = link.get("title")
    return f"{link['id']} ({title})" if title else str(link["id"])


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    code = f" [{err.code}]" if err else ""
    console.print(
        Text("ERROR", style="tcm.error"),
        Text(f"  {result.op}{code}", style="tcm.op"),
        Text(" — "),
        Text(msg),
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_item(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a single item as a panel of its attributes."""
    item: dict[str, Any] = result.data.get("item", {})
    lines: list[str] = []
    for key, value in item.items():
        if key in ("id", "title") or value in (None, "", []):
            continue
        if key == "parents":
            value = ", ".join(_link_text(p) for p in value)
        elif key == "business_process_type":
            value = _link_text(value)
        elif isinstance(value, (dict, list)):
            value = json.dumps(value, separators=(",", ":"))
        lines.append(f"{key}: {value}")
    title = f"{item.get('id', '?')} — {item.get('title') or 'Untitled'}"
    body = Text("\n".join(lines) or "(no attributes)")
    console.print(Panel(body, title=title, expand=False))
    if verbose:
        _render_meta(console, result)


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    item: dict[str, Any] = result.data.get("item", {})
    _field(console, "id", result.data.get("id", item.get("id", "")))
    for key in ("title", "key"):
        if item.get(key):
            _field(console, key, item[key])
    if item.get("parents"):
        _field(console, "parents", ", ".join(_link_text(p) for p in item["parents"]))
    if item.get("business_process_type"):
        _field(console, "business_process_type", _link_text(item["business_process_type"]))
    if "fields_changed" in result.data:
        _field(console, "fields_changed", ", ".join(result.data["fields_changed"]))
    if verbose:
        _render_meta(console, result)


def _render_publications(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    items: list[dict[str, Any]] = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="tcm.id", no_wrap=True)
    table.add_column("Title", style="tcm.title")
    table.add_column("Key")
    table.add_column("Type")
    if verbose:
        table.add_column("Parents", style="dim")
    for item in items:
        row = [
            str(item.get("id", "")),
            str(item.get("title") or ""),
            str(item.get("key") or ""),
            str(item.get("publication_type") or ""),
        ]
        if verbose:
            row.append(", ".join(p["id"] for p in item.get("parents", [])))
        table.add_row(*row)
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} publications")
    if verbose:
        _render_meta(console, result)


def _render_business_process_types(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    items: list[dict[str, Any]] = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="tcm.id", no_wrap=True)
    table.add_column("Title", style="tcm.title")
    for item in items:
        table.add_row(str(item.get("id", "")), str(item.get("title") or ""))
    console.print(table)
    console.print(
        f"\n{result.data.get('count', len(items))} business process types "
        f"for {result.data.get('topology_type_id', '?')}"
    )
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if value is not None:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "get_item": _render_item,
    "list_publications": _render_publications,
    "create_publication": _render_mutation,
    "update_publication": _render_mutation,
    "list_business_process_types": _render_business_process_types,
    "translate_uri": _render_generic,
    "parse_uri": _render_generic,
}
