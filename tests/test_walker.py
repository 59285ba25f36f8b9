"""
File walker tests.

Builds small trees under tmp_path and checks which files come out as
jobs: ignore files, explicit excludes, language filter and size limit.
"""

import sys

import pytest

from decomment.errors import UnsupportedLanguageError
from decomment.walker import FileWalker, IgnoreRule, is_ignored


def walk(root, **kwargs):
    """Root-relative POSIX paths of the jobs the walker yields."""
    walker = FileWalker(root, **kwargs)
    return [job.path.relative_to(root).as_posix() for job in walker.iter_jobs()]


class TestIgnoreRules:

    def rules(self, *lines, base=""):
        return [r for r in (IgnoreRule.parse(line, base) for line in lines) if r is not None]

    def test_blank_and_comment_lines(self):
        assert self.rules("", "   ", "# comment") == []

    def test_basename_pattern_matches_at_any_depth(self):
        rules = self.rules("*.gen.go")
        assert is_ignored(rules, "a.gen.go", is_dir=False)
        assert is_ignored(rules, "pkg/deep/b.gen.go", is_dir=False)
        assert not is_ignored(rules, "pkg/b.go", is_dir=False)

    def test_negation_reincludes(self):
        rules = self.rules("*.gen.go", "!keep.gen.go")
        assert is_ignored(rules, "x.gen.go", is_dir=False)
        assert not is_ignored(rules, "keep.gen.go", is_dir=False)

    def test_directory_only(self):
        rules = self.rules("build/")
        assert is_ignored(rules, "build", is_dir=True)
        assert not is_ignored(rules, "build", is_dir=False)

    def test_anchored(self):
        rules = self.rules("/out")
        assert is_ignored(rules, "out", is_dir=True)
        assert not is_ignored(rules, "src/out", is_dir=True)

    def test_slash_pattern_is_relative_to_its_file(self):
        rules = self.rules("gen/*.go", base="pkg")
        assert is_ignored(rules, "pkg/gen/a.go", is_dir=False)
        assert not is_ignored(rules, "gen/a.go", is_dir=False)
        assert not is_ignored(rules, "pkg/gen/sub/a.go", is_dir=False)

    def test_double_star(self):
        rules = self.rules("docs/**/*.py")
        assert is_ignored(rules, "docs/conf.py", is_dir=False)
        assert is_ignored(rules, "docs/a/b/c.py", is_dir=False)
        assert not is_ignored(rules, "src/docs/conf.py", is_dir=False)

    def test_question_mark(self):
        rules = self.rules("v?.go")
        assert is_ignored(rules, "v1.go", is_dir=False)
        assert not is_ignored(rules, "v10.go", is_dir=False)


class TestFileWalker:

    def test_supported_files_sorted(self, make_tree):
        root = make_tree({
            "b.go": "package b\n",
            "a.py": "x = 1\n",
            "notes.txt": "hello\n",
            "sub/c.rs": "fn main() {}\n",
        })
        assert walk(root) == ["a.py", "b.go", "sub/c.rs"]

    def test_skip_dirs(self, make_tree):
        root = make_tree({
            "main.go": "package main\n",
            "node_modules/x/index.js": "module.exports = 1\n",
            "vendor/lib/lib.go": "package lib\n",
            ".git/hooks/pre-commit.sh": "exit 0\n",
            ".venv/lib/site.py": "x = 1\n",
        })
        assert walk(root) == ["main.go"]

    def test_gitignore(self, make_tree):
        root = make_tree({
            ".gitignore": "build/\n*.gen.go\n!keep.gen.go\n",
            "main.go": "package main\n",
            "api.gen.go": "package main\n",
            "keep.gen.go": "package main\n",
            "build/out.go": "package out\n",
        })
        assert walk(root) == ["keep.gen.go", "main.go"]

    def test_nested_ignore_files(self, make_tree):
        root = make_tree({
            "sub/.ignore": "local.py\n",
            "local.py": "x = 1\n",
            "sub/local.py": "x = 1\n",
            "sub/inner/local.py": "x = 1\n",
            "sub/kept.py": "x = 1\n",
        })
        assert walk(root) == ["local.py", "sub/kept.py"]

    def test_exclude_patterns(self, make_tree):
        root = make_tree({
            "main.go": "package main\n",
            "main_test.go": "package main\n",
            "docs/conf.py": "x = 1\n",
            "src/gen/api.py": "x = 1\n",
            "src/app.py": "x = 1\n",
        })
        excluded = walk(root, exclude_patterns=["*_test.go", "docs/**", "src/gen/"])
        assert excluded == ["main.go", "src/app.py"]

    def test_language_filter(self, make_tree):
        root = make_tree({"a.go": "package a\n", "b.py": "x = 1\n", "c.pyi": "x: int\n"})
        assert walk(root, language="python") == ["b.py", "c.pyi"]

    def test_unknown_language(self, tmp_path):
        with pytest.raises(UnsupportedLanguageError):
            FileWalker(tmp_path, language="cobol")

    def test_max_file_size(self, make_tree):
        root = make_tree({"small.go": "package a\n", "big.go": "package a\n" + "// x\n" * 100})
        walker = FileWalker(root, max_file_size=64)
        assert [j.path.name for j in walker.iter_jobs()] == ["small.go"]
        assert walker.stats["large_files"] == 1

    def test_zero_size_limit_means_unlimited(self, make_tree):
        root = make_tree({"big.go": "package a\n" + "// x\n" * 100})
        assert walk(root, max_file_size=0) == ["big.go"]

    def test_single_file_root(self, make_tree):
        root = make_tree({"a.go": "package a\n", "b.go": "package b\n"})
        jobs = list(FileWalker(root / "a.go").iter_jobs())
        assert [j.path for j in jobs] == [root / "a.go"]
        assert jobs[0].language.name == "go"

    def test_single_unsupported_file(self, make_tree):
        root = make_tree({"notes.txt": "hi\n"})
        assert list(FileWalker(root / "notes.txt").iter_jobs()) == []

    def test_missing_root_is_reported(self, tmp_path):
        walker = FileWalker(tmp_path / "nope")
        assert list(walker.iter_jobs()) == []
        assert walker.errors

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges")
    def test_symlink_root_skipped_with_warning(self, make_tree):
        root = make_tree({"real.go": "package a\n"})
        link = root / "link.go"
        link.symlink_to(root / "real.go")

        walker = FileWalker(link)
        assert list(walker.iter_jobs()) == []
        assert "symbolic link skipped" in walker.errors[0]

        followed = FileWalker(link, follow_symlinks=True)
        assert [j.path for j in followed.iter_jobs()] == [link]
        assert followed.errors == []

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges")
    def test_symlinks_inside_tree_skipped_silently(self, make_tree):
        root = make_tree({"real.go": "package a\n"})
        (root / "link.go").symlink_to(root / "real.go")

        walker = FileWalker(root)
        assert [j.path.name for j in walker.iter_jobs()] == ["real.go"]
        assert walker.errors == []
