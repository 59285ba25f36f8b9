"""decomment CLI - Main entry point and command registration hub."""
# ruff: noqa: E402 - Intentional lazy loading: commands imported after cli group definition

import click
from rich.table import Table

from decomment import __version__
from decomment.pipeline.ui import console


class CategorizedGroup(click.Group):
    """Help output that lists commands by category in a Rich table."""

    def format_commands(self, ctx, formatter):
        """Suppress the default listing; format_help prints the categorized one."""
        pass

    COMMAND_CATEGORIES = {
        "REMOVAL": {
            "title": "COMMENT REMOVAL",
            "description": "Find and strip comments from source files",
            "commands": ["strip"],
        },
        "INFO": {
            "title": "INFORMATION",
            "description": "What decomment understands",
            "commands": ["languages"],
        },
    }

    def format_help(self, ctx, formatter):
        """Generate Rich-styled categorized help."""
        super().format_help(ctx, formatter)

        registered = {
            name: cmd
            for name, cmd in self.commands.items()
            if not getattr(cmd, "hidden", False)
        }

        console.print()
        console.rule("[bold]COMMANDS[/bold]")

        for category_data in self.COMMAND_CATEGORIES.values():
            console.print(f"\n[bold cyan]{category_data['title']}[/bold cyan]")
            console.print(f"[dim]{category_data['description']}[/dim]")

            table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
            table.add_column("Command", style="cmd", width=14)
            table.add_column("Description", style="white")

            for cmd_name in category_data["commands"]:
                if cmd_name not in registered:
                    continue
                first_line = (registered[cmd_name].help or "").split("\n")[0].strip()
                table.add_row(cmd_name, first_line.rstrip("."))

            console.print(table)

        console.print()
        console.print("For detailed options: [cmd]decomment <command> --help[/cmd]")


@click.group(cls=CategorizedGroup)
@click.version_option(version=__version__, prog_name="decomment")
@click.help_option("-h", "--help")
def cli():
    """decomment - strip comments from source code using tree-sitter grammars

    \b
    QUICK START:
      decomment strip .              # Dry run: what would be removed
      decomment strip . --diff       # Show the unified diff
      decomment strip . --write      # Rewrite files in place

    \b
    For detailed options: decomment <command> --help"""
    pass


from decomment.commands.languages import languages
from decomment.commands.strip import strip

cli.add_command(strip)
cli.add_command(languages)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
