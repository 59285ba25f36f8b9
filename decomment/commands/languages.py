"""List supported languages.

Usage: decomment languages
"""

import click
from rich.table import Table

from decomment.languages import LANGUAGES, supported_extensions
from decomment.pipeline.ui import console


@click.command("languages")
def languages():
    """Show the supported languages and the file extensions mapped to each.

    \b
    EXAMPLES:
      decomment languages
      decomment strip src --lang python
    """
    table = Table(title="Supported languages", show_lines=False)
    table.add_column("Language", style="cmd")
    table.add_column("Grammar", style="dim")
    table.add_column("Extensions")

    for name in sorted(LANGUAGES):
        config = LANGUAGES[name]
        table.add_row(name, config.grammar, " ".join(supported_extensions(name)))

    console.print(table)
