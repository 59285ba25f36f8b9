"""Tests for the retention policy (which comments survive)."""

import re

import pytest

from decomment.locator import classify
from decomment.retention import (
    RetentionOptions,
    compile_patterns,
    is_copyright_comment,
    is_semantic_comment,
    is_shebang,
    retain,
)


def span(row, text, col=0):
    """Single-line span on ``row`` starting at ``col``."""
    end = col + len(text)
    return classify(row, col, row, end, [end] * (row + 1), text=text)


SHEBANG = span(0, b"#!/usr/bin/env python3")
TYPE_IGNORE = span(3, b"# type: ignore", col=12)
COPYRIGHT = span(1, b"# Copyright 2024 Example Corp")
PLAIN = span(2, b"# increment the counter")


class TestMarkers:

    def test_shebang_only_on_first_row_at_column_zero(self):
        assert is_shebang(SHEBANG)
        assert not is_shebang(span(1, b"#!/bin/sh"))
        assert not is_shebang(span(0, b"#!/bin/sh", col=2))
        assert not is_shebang(span(0, b"# plain"))

    @pytest.mark.parametrize(
        "text",
        ["# noqa: E501", "# type: ignore", "// eslint-disable-next-line", "//nolint:errcheck", "// NOLINT"],
    )
    def test_semantic_directives(self, text):
        assert is_semantic_comment(text)

    def test_plain_comment_is_not_semantic(self):
        assert not is_semantic_comment("# just a note")

    def test_copyright(self):
        assert is_copyright_comment("// Copyright (c) 2020 Someone")
        assert is_copyright_comment("# SPDX-License-Identifier: MIT")
        assert not is_copyright_comment("# compute the total")

    def test_compile_patterns_rejects_bad_regex(self):
        with pytest.raises(re.error):
            compile_patterns(["(unclosed"])


class TestRetain:

    def test_defaults_keep_only_the_shebang(self):
        spans = [SHEBANG, COPYRIGHT, PLAIN, TYPE_IGNORE]
        assert retain(spans, RetentionOptions()) == [COPYRIGHT, PLAIN, TYPE_IGNORE]

    def test_keeps_nothing_returns_input(self):
        options = RetentionOptions(keep_shebang=False)
        assert options.keeps_nothing
        spans = [SHEBANG, PLAIN]
        assert retain(spans, options) == spans

    def test_preserve_semantic(self):
        options = RetentionOptions(preserve_semantic=True)
        assert retain([PLAIN, TYPE_IGNORE], options) == [PLAIN]

    def test_preserve_copyright(self):
        options = RetentionOptions(preserve_copyright=True)
        assert retain([COPYRIGHT, PLAIN], options) == [PLAIN]

    def test_keep_patterns(self):
        options = RetentionOptions(keep_patterns=(r"\bcounter\b",))
        assert retain([COPYRIGHT, PLAIN], options) == [COPYRIGHT]

    def test_coordinates_unchanged(self):
        removed = retain([PLAIN], RetentionOptions())
        assert removed[0] is PLAIN
