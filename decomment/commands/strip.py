"""Strip comments from source files.

Usage: decomment strip [PATH] [--write] [--diff]
"""

import re
import sys

import click

from decomment.config_runtime import load_runtime_config
from decomment.languages import supported_languages
from decomment.pipeline import PipelineOptions, Reporter, run_pipeline
from decomment.pipeline.ui import print_warning
from decomment.retention import RetentionOptions, compile_patterns
from decomment.utils.error_handler import handle_exceptions
from decomment.utils.exit_codes import ExitCodes
from decomment.utils.logging import logger
from decomment.walker import FileWalker


def _validate_patterns(ctx, param, value):
    """Reject keep patterns that do not compile as regular expressions."""
    for pattern in value:
        try:
            re.compile(pattern)
        except re.error as e:
            raise click.BadParameter(f"invalid regular expression {pattern!r}: {e}") from None
    return value


@click.command("strip")
@click.argument("path", default=".", type=click.Path(exists=True))
@click.option("--write", "-w", is_flag=True, help="Rewrite files in place (default is a dry run)")
@click.option("--diff", "-d", "show_diff", is_flag=True, help="Show a unified diff for each changed file")
@click.option("--quiet", "-q", is_flag=True, help="Only print errors and the summary")
@click.option("--verbose", "-v", is_flag=True, help="Also list files with nothing to remove")
@click.option(
    "--lang",
    type=click.Choice(supported_languages()),
    help="Only process files of this language",
)
@click.option("--jobs", "-j", type=click.IntRange(min=0), help="Worker threads (0 = one per CPU)")
@click.option("--max-file-size", type=click.IntRange(min=0), help="Skip files larger than BYTES (0 = no limit)")
@click.option("--exclude", multiple=True, help="Glob of files or directories to skip (repeatable)")
@click.option(
    "--keep-shebang/--no-keep-shebang",
    default=None,
    help="Keep a #! interpreter line on the first row",
)
@click.option("--preserve-semantic", is_flag=True, help="Keep linter and type-checker directives")
@click.option("--preserve-copyright", is_flag=True, help="Keep copyright and license comments")
@click.option(
    "--keep-pattern",
    multiple=True,
    callback=_validate_patterns,
    help="Keep comments whose text matches REGEX (repeatable)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option("--check", is_flag=True, help="Exit 1 if any file has comments to remove")
@handle_exceptions
def strip(
    path,
    write,
    show_diff,
    quiet,
    verbose,
    lang,
    jobs,
    max_file_size,
    exclude,
    keep_shebang,
    preserve_semantic,
    preserve_copyright,
    keep_pattern,
    output_format,
    check,
):
    """Remove comments from every supported file under PATH.

    Comments are located by tree-sitter grammars, so comment-like text inside
    string literals is never touched. Whole-line and multi-line comments take
    their line with them; trailing comments are cut and the line is
    right-trimmed. Without --write nothing is modified.

    \b
    FILE SELECTION:
      - Extensions come from the language registry (see: decomment languages)
      - .gitignore and .ignore are honoured at every directory level
      - VCS metadata, node_modules, vendor and virtualenvs are always skipped
      - --exclude matches the file name or the path relative to PATH

    \b
    CONFIGURATION:
      Defaults are read from PATH/.decomment.json and DECOMMENT_<SECTION>_<KEY>
      environment variables. Flags given here override both.

    \b
    EXAMPLES:
      decomment strip src                         # Dry run
      decomment strip src --diff                  # Review every change
      decomment strip src --write                 # Apply
      decomment strip . --lang go --exclude 'gen/**'
      decomment strip . --preserve-semantic --keep-pattern 'TODO'
      decomment strip . --check --quiet           # CI gate

    \b
    EXIT CODES:
      0 = Success (per-file errors are reported but do not fail the run)
      1 = --check set and at least one file has comments to remove
      2 = Usage error (bad flag, missing PATH)
    """
    cfg = load_runtime_config(path)

    retention_cfg = cfg["retention"]
    try:
        compile_patterns(retention_cfg["keep_patterns"])
    except re.error as e:
        raise click.UsageError(f"invalid retention.keep_patterns in configuration: {e}") from None

    retention = RetentionOptions(
        keep_shebang=retention_cfg["keep_shebang"] if keep_shebang is None else keep_shebang,
        preserve_semantic=preserve_semantic or retention_cfg["preserve_semantic"],
        preserve_copyright=preserve_copyright or retention_cfg["preserve_copyright"],
        keep_patterns=tuple(retention_cfg["keep_patterns"]) + tuple(keep_pattern),
    )

    walker = FileWalker(
        path,
        language=lang,
        max_file_size=cfg["limits"]["max_file_size"] if max_file_size is None else max_file_size,
        exclude_patterns=list(cfg["walk"]["exclude"]) + list(exclude),
        follow_symlinks=cfg["walk"]["follow_symlinks"],
    )

    options = PipelineOptions(
        write=write,
        workers=cfg["limits"]["jobs"] if jobs is None else jobs,
        retention=retention,
    )
    reporter = Reporter(
        write=write,
        quiet=quiet,
        verbose=verbose,
        show_diff=show_diff,
        output_format=output_format,
    )

    summary = run_pipeline(walker.iter_jobs(), options, reporter)

    logger.debug(f"Walker stats: {walker.stats}")
    if output_format == "text":
        for err in walker.errors:
            print_warning(err)

    if check and summary.changed:
        logger.debug(ExitCodes.get_description(ExitCodes.CHANGES_FOUND))
        sys.exit(ExitCodes.CHANGES_FOUND)
