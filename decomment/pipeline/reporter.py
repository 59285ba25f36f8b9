"""Per-file and summary reporting on a Rich console.

The reporter is not thread-safe by itself; the orchestrator calls it while
holding its lock so lines from different workers never interleave.
"""

import json

from rich.console import Console
from rich.text import Text

from decomment.diff import TransformResult
from decomment.pipeline.structures import RunSummary
from decomment.pipeline.ui import console as default_console


class Reporter:
    """Prints what happened to each file and one final summary line.

    Args:
        console: Target console (defaults to the shared themed console)
        write: Apply mode; switches wording from "would remove" to "removed"
        quiet: Only errors and the summary
        verbose: Also list unchanged files
        show_diff: Print the unified diff after each changed file
        output_format: "text" or "json" (json prints only the summary document)
    """

    def __init__(
        self,
        console: Console | None = None,
        write: bool = False,
        quiet: bool = False,
        verbose: bool = False,
        show_diff: bool = False,
        output_format: str = "text",
    ):
        self.console = console or default_console
        self.write = write
        self.quiet = quiet
        self.verbose = verbose
        self.show_diff = show_diff
        self.output_format = output_format

    @property
    def _silent(self) -> bool:
        return self.quiet or self.output_format == "json"

    def file(self, result: TransformResult) -> None:
        """Report one processed file."""
        if self._silent:
            return

        if not result.changed:
            if self.verbose:
                self.console.print(Text.assemble(("  unchanged  ", "dim"), (result.path, "dim")))
            return

        action = "removed" if self.write else "would remove"
        removed = result.lines_removed
        noun = "line" if removed == 1 else "lines"
        self.console.print(
            Text.assemble(
                (f"  {action}  ", "action"),
                f"{removed} comment {noun} from ",
                (result.path, "path"),
            )
        )

        if self.show_diff:
            self.diff(result)

    def diff(self, result: TransformResult) -> None:
        """Print the unified diff of a changed file."""
        for line in result.unified_text().splitlines():
            if line.startswith(("---", "+++")):
                style = "bold"
            elif line.startswith("-"):
                style = "removed"
            elif line.startswith("+"):
                style = "added"
            else:
                style = ""
            self.console.print(Text(line, style=style))

    def error(self, path: str, err: Exception | str) -> None:
        """Errors are always printed, even in quiet mode."""
        if self.output_format == "json":
            return
        self.console.print(Text.assemble(("  error  ", "error"), f"{path}: {err}"))

    def summary(self, summary: RunSummary) -> None:
        """Print the final line (or JSON document)."""
        if self.output_format == "json":
            self.console.print_json(json.dumps(summary.to_dict()))
            return

        action = "modified" if self.write else "would be modified"
        line = Text.assemble(
            "\n",
            (f"{summary.changed}/{summary.total} files {action}", "bold"),
        )
        if summary.errors:
            line.append(f", {summary.errors} errors", style="error")
        self.console.print(line)
