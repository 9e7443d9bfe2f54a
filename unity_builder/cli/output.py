"""Rich-based output formatting utilities for unity-builder.

Diagnostic lines go to stdout as plain text (no markup, no wrapping) so the
editor log stays greppable. Errors go to stderr.
"""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from unity_builder.targets import BuildTarget

console = Console()
err_console = Console(stderr=True)


def print_line(line: str) -> None:
    """Print a diagnostic line verbatim.

    Args:
        line: Untrusted text; never interpreted as markup or highlighted.
    """
    console.print(Text(line), soft_wrap=True)


def print_json(data: Any) -> None:
    """Print data as JSON.

    Args:
        data: Data to output
    """
    console.print_json(json.dumps(data, ensure_ascii=False))


def print_error(message: str, code: str | None = None) -> None:
    """Print error message to stderr.

    Args:
        message: Error message (will be escaped to prevent markup injection)
        code: Optional error code
    """
    text = Text()
    text.append("Error: ", style="bold red")
    text.append(escape(message))
    err_console.print(text, soft_wrap=True)

    if code:
        code_text = Text()
        code_text.append("Code: ", style="dim")
        code_text.append(escape(code), style="yellow")
        err_console.print(code_text)


def print_success(message: str) -> None:
    text = Text()
    text.append("[OK] ", style="bold green")
    text.append(message)
    console.print(text, soft_wrap=True)


def print_warning(message: str) -> None:
    text = Text()
    text.append("[WARN] ", style="bold yellow")
    text.append(message)
    console.print(text, soft_wrap=True)


def print_info(message: str) -> None:
    text = Text()
    text.append("[INFO] ", style="bold blue")
    text.append(message)
    console.print(text, soft_wrap=True)


def print_targets_table(targets: list[BuildTarget]) -> None:
    """Print build targets as a formatted table.

    Args:
        targets: Build targets to list, in display order
    """
    if not targets:
        console.print("No build targets", style="dim")
        return

    table = Table(title=f"Build Targets ({len(targets)})")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Standalone", justify="center")
    table.add_column("Status", style="yellow")

    for target in targets:
        standalone = "[green]*[/green]" if target.is_standalone else ""
        status = Text("legacy", style="dim") if target.is_legacy else Text("current", style="green")
        table.add_row(target.value, standalone, status)

    console.print(table)


def print_key_value(data: dict[str, Any], title: str | None = None) -> None:
    """Print dict as key-value pairs.

    Args:
        data: Dict to display
        title: Optional title
    """
    if title:
        console.print(f"[bold]{escape(title)}[/bold]")

    for key, value in data.items():
        shown = "[dim](not set)[/dim]" if value is None else escape(str(value))
        console.print(f"  [cyan]{escape(str(key))}:[/cyan] {shown}", soft_wrap=True)
