"""Central UI handler for decomment.

Single source of truth for Rich console styling. Import this instead of
instantiating Console() in every command file.

Usage:
    from decomment.pipeline.ui import console, print_warning

    console.print("[success]Nothing to remove[/success]")
    print_warning("Cannot stat src/big.go")
"""

import sys

from rich.console import Console
from rich.theme import Theme

DECOMMENT_THEME = Theme({
    "info": "bold cyan",
    "warning": "bold yellow",
    "error": "bold red",
    "success": "bold green",
    "action": "yellow",
    "removed": "red",
    "added": "green",
    "cmd": "bold magenta",
    "path": "bold",
    "dim": "dim white",
})

# Single console instance - import this, don't create your own
console = Console(
    theme=DECOMMENT_THEME,
    force_terminal=sys.stdout.isatty()
)


def make_console(file=None, color: bool | None = None) -> Console:
    """Console with the decomment theme writing to ``file`` (tests, redirects)."""
    if color is None:
        return Console(theme=DECOMMENT_THEME, file=file)
    return Console(
        theme=DECOMMENT_THEME,
        file=file,
        force_terminal=color,
        no_color=not color,
        highlight=False,
        width=200,
    )


def print_warning(msg: str) -> None:
    """Print a warning message in yellow."""
    console.print(f"[warning]WARNING:[/warning] {msg}")
