"""Retention policy: comments that survive removal.

Sits between the locator and the planner and only ever drops spans from
the list; span coordinates are never changed.

PRESERVES (always, unless disabled):
- Shebang lines (#!/usr/bin/env python) on the first row

PRESERVES (optional):
- Semantic comments (noqa, type:, pragma:, eslint-disable, nolint) - tool directives
- Copyright headers (copyright, license, SPDX, (c)) - legal requirements
- Anything matching a user-supplied regular expression
"""

import re
from dataclasses import dataclass, field

from decomment.locator import CommentSpan

# Tool directives. Removing these changes what linters, type checkers and
# coverage tools do, so they are code instructions rather than prose.
SEMANTIC_MARKERS = [
    "type:",          # mypy/pyright: # type: ignore
    "noqa",           # flake8/ruff
    "pylint:",
    "pragma:",        # coverage: # pragma: no cover
    "fmt:",           # black/ruff: # fmt: off
    "yapf:",
    "isort:",
    "nosec",          # bandit
    "pyright:",
    "mypy:",
    "ruff:",
    "eslint-disable",
    "eslint-enable",
    "prettier-ignore",
    "@ts-ignore",
    "@ts-expect-error",
    "@ts-nocheck",
    "nolint",         # golangci-lint, clang-tidy NOLINT
    "go:build",
    "go:generate",
    "go:embed",
    "+build",
    "shellcheck",
    "rubocop:",
    "clang-format",
]

# Copyright/license markers - legal headers that may be required
COPYRIGHT_MARKERS = [
    "copyright",
    "license",
    "licensed",
    "spdx-license-identifier",
    "(c)",
    "all rights reserved",
]


@dataclass(frozen=True)
class RetentionOptions:
    """Which comments to keep."""

    keep_shebang: bool = True
    preserve_semantic: bool = False
    preserve_copyright: bool = False
    keep_patterns: tuple[str, ...] = field(default_factory=tuple)

    @property
    def keeps_nothing(self) -> bool:
        """True when every located comment is removed."""
        return not (
            self.keep_shebang
            or self.preserve_semantic
            or self.preserve_copyright
            or self.keep_patterns
        )


def is_shebang(span: CommentSpan) -> bool:
    """Interpreter line on the first row."""
    return span.start_row == 0 and span.start_col == 0 and span.text.startswith(b"#!")


def is_semantic_comment(text: str) -> bool:
    """Check if comment is a tool directive."""
    lowered = text.lower()
    return any(marker in lowered for marker in SEMANTIC_MARKERS)


def is_copyright_comment(text: str) -> bool:
    """Check if comment is a copyright/license header."""
    lowered = text.lower()
    return any(marker in lowered for marker in COPYRIGHT_MARKERS)


def compile_patterns(patterns: tuple[str, ...] | list[str]) -> list[re.Pattern]:
    """Compile keep patterns. Raises re.error on a bad expression."""
    return [re.compile(p) for p in patterns]


def retain(spans: list[CommentSpan], options: RetentionOptions) -> list[CommentSpan]:
    """Return the spans that should actually be removed."""
    if not spans or options.keeps_nothing:
        return spans

    patterns = compile_patterns(options.keep_patterns)
    removable = []
    for span in spans:
        if options.keep_shebang and is_shebang(span):
            continue

        text = span.text.decode("utf-8", errors="replace")
        if options.preserve_semantic and is_semantic_comment(text):
            continue
        if options.preserve_copyright and is_copyright_comment(text):
            continue
        if any(p.search(text) for p in patterns):
            continue

        removable.append(span)
    return removable
