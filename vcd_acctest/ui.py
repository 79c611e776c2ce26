"""Console output for the suite bootstrap and the ``vcd-acctest`` CLI.

Thin wrapper around :mod:`rich`.  Status lines meant for the person
running the suite go through here; ``logger.*`` calls stay for file
logging.
"""

from __future__ import annotations

import json
from typing import Any, Dict

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

console = Console(stderr=False, force_terminal=None)
err_console = Console(stderr=True, force_terminal=None)

_PASS = "[bold green]✓[/]"
_WARN = "[bold yellow]⚠[/]"
_DOT = "[dim]·[/]"


def phase(title: str) -> None:
    """Print a bold section header."""
    console.print()
    console.print(f"[bold blue]── {title} ──[/]")


def ok(msg: str) -> None:
    console.print(f"  {_PASS} {msg}")


def warn(msg: str) -> None:
    console.print(f"  {_WARN} [yellow]{msg}[/]")


def info(msg: str) -> None:
    console.print(f"  {_DOT} [dim]{msg}[/]")


def detail(key: str, value: str) -> None:
    """Key-value pair, indented."""
    console.print(f"    [bold]{key}[/]: {value}")


def show_json(data: Dict[str, Any]) -> None:
    """Pretty-print *data* as highlighted JSON."""
    text = json.dumps(data, indent=2, sort_keys=True)
    console.print(Syntax(text, "json", background_color="default"))


def halt_panel(title: str, body: str) -> None:
    """Red-bordered panel on stderr, shown before the run is stopped."""
    err_console.print()
    err_console.print(
        Panel(
            body,
            title=f"[bold red]{title}[/]",
            border_style="red",
            padding=(1, 2),
        )
    )
