"""Tests for change detection and the unified diff text."""

from decomment.diff import count_lines, diff


class TestCountLines:

    def test_terminated(self):
        assert count_lines(b"a\nb\n") == 2

    def test_unterminated_final_line_counts(self):
        assert count_lines(b"a\nb") == 2

    def test_empty(self):
        assert count_lines(b"") == 0


class TestTransformResult:

    def test_unchanged(self):
        result = diff("a.go", b"x\n", b"x\n")
        assert not result.changed
        assert result.lines_removed == 0
        assert result.unified_text() == ""

    def test_lines_removed(self):
        before = b"package main\n// c\nfunc f(){}\n"
        after = b"package main\nfunc f(){}\n"
        result = diff("a.go", before, after)
        assert result.changed
        assert result.lines_removed == count_lines(before) - count_lines(after) == 1

    def test_inline_edit_changes_without_removing_lines(self):
        result = diff("a.go", b"x := 1 // c\n", b"x := 1\n")
        assert result.changed
        assert result.lines_removed == 0

    def test_unified_text_for_deleted_line(self):
        result = diff("a.go", b"a\n// c\nb\n", b"a\nb\n")
        lines = result.unified_text().splitlines()
        assert lines[0] == "--- a.go"
        assert lines[1] == "+++ a.go"
        assert "-// c" in lines
        assert "+a" not in lines

    def test_greedy_walk_does_not_resynchronise(self):
        result = diff("a.go", b"a\n// c\nb\n", b"a\nb\n")
        assert result.unified_text() == "--- a.go\n+++ a.go\n-// c\n+b\n-b\n"

    def test_unified_text_for_edited_line(self):
        result = diff("a.go", b"x := 1 // c\n", b"x := 1\n")
        assert result.unified_text() == "--- a.go\n+++ a.go\n-x := 1 // c\n+x := 1\n"

    def test_everything_removed(self):
        result = diff("a.py", b"# a\n# b\n", b"")
        assert result.lines_removed == 2
        assert result.unified_text() == "--- a.py\n+++ a.py\n-# a\n-# b\n"
