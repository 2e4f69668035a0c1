"""Rich consoles and error printing shared by the medviz CLI modules."""

from __future__ import annotations

import sys
import traceback

from rich.console import Console
from rich.markup import escape

# Rich's spinners are Unicode; Windows consoles default to a charmap codec.
for _stream in (sys.stdout, sys.stderr):
    try:
        _stream.reconfigure(encoding="utf-8", errors="replace")
    except (AttributeError, OSError):
        pass

console = Console()
err_console = Console(stderr=True)


def print_error(error: BaseException | str) -> None:
    """Print ``Error: <message>`` in red on stderr (markup in the message is escaped)."""
    err_console.print(f"[red]Error: {escape(str(error))}[/red]")


def print_traceback() -> None:
    """Print the exception being handled on stderr, for verbose runs."""
    err_console.print(escape(traceback.format_exc()), highlight=False)
