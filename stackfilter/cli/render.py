from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from itertools import zip_longest
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .results import CommandResult


@dataclass(frozen=True, slots=True)
class RenderSettings:
    output: str  # "table" | "json"
    quiet: bool
    verbosity: int


def _error_title(error_type: str) -> str:
    normalized = (error_type or "").strip()
    mapping = {
        "usage_error": "Usage error",
        "parse_error": "Invalid filter",
        "config_error": "Configuration error",
        "io_error": "I/O error",
        "internal_error": "Internal error",
    }
    return mapping.get(normalized, "Error")


def _render_error_details(
    *,
    stderr: Console,
    error_type: str,
    hint: str | None,
    details: dict[str, Any] | None,
    settings: RenderSettings,
) -> None:
    if settings.quiet:
        return

    if hint:
        stderr.print(f"Hint: {hint}", markup=False)

    # Point at the offending character of a single-line filter
    if error_type == "parse_error" and details:
        text = details.get("text")
        position = details.get("position")
        if isinstance(text, str) and isinstance(position, int) and "\n" not in text:
            # Tabs expanded up front and no wrapping, so the caret stays under the failing character
            pad = len(text[:position].expandtabs())
            stderr.print(f"  {text.expandtabs()}", markup=False, highlight=False, soft_wrap=True)
            stderr.print("  " + " " * pad + "^", markup=False, highlight=False, soft_wrap=True)

    if settings.verbosity >= 1 and details:
        stderr.print(json.dumps(details, ensure_ascii=False), markup=False)


def _terms_table(data: dict[str, Any]) -> Table | Text:
    includes = list(data.get("includes") or [])
    excludes = list(data.get("excludes") or [])
    if not includes and not excludes:
        return Text("No terms.")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Include")
    table.add_column("Exclude")
    for include, exclude in zip_longest(includes, excludes, fillvalue=None):
        # Text cells keep '[...]' in frame names from being read as markup
        table.add_row(
            Text(repr(include) if include == "" else (include or "")),
            Text(repr(exclude) if exclude == "" else (exclude or "")),
        )
    return table


def render_result(result: CommandResult, *, settings: RenderSettings) -> int:
    stdout = Console(file=sys.stdout, force_terminal=False)
    stderr = Console(file=sys.stderr, force_terminal=False)

    if settings.output == "json":
        payload = result.model_dump(by_alias=True, mode="json")
        sys.stdout.write(json.dumps(payload, ensure_ascii=False) + "\n")
        return 0

    if not result.ok:
        if result.error is not None:
            title = _error_title(result.error.type)
            stderr.print(f"{title}: {result.error.message}", markup=False)
            _render_error_details(
                stderr=stderr,
                error_type=result.error.type,
                hint=result.error.hint,
                details=result.error.details,
                settings=settings,
            )
        else:
            stderr.print("Error")
        return 0

    data = result.data if isinstance(result.data, dict) else {}
    renderable: Any
    if result.command == "parse":
        renderable = _terms_table(data)
    elif result.command == "params":
        renderable = Text(str(data.get("query", "")))
    elif result.command == "format":
        renderable = Text(str(data.get("text", "")))
    elif result.command == "version":
        renderable = Text(str(data.get("version", "")), style="bold")
    elif result.command == "config path":
        renderable = Text(str(data.get("path", "")))
    elif result.command == "config init":
        renderable = Panel.fit(Text(f"Initialized config at {data.get('path', '')}"))
    else:
        renderable = None

    if renderable is not None:
        stdout.print(renderable)
    return 0
