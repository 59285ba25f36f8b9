"""File enumeration: turn a target path into FileJobs.

Filtering happens here and only here: language lookup by extension,
--lang, size limit, SKIP_DIRS, .gitignore/.ignore files and explicit
excludes.
The pipeline consumes whatever this yields without second-guessing it.
"""

import fnmatch
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from decomment.languages import get_language, language_for_path
from decomment.pipeline.structures import FileJob
from decomment.utils.logging import logger

# Directories to always skip: VCS metadata, dependencies, editor state
SKIP_DIRS: set[str] = {
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    "vendor",
    ".idea",
    ".vscode",
    "__pycache__",
    ".venv",
    "venv",
}

IGNORE_FILES = (".gitignore", ".ignore")


def _glob_to_regex(pattern: str) -> str:
    """Translate a gitignore glob to a regex over POSIX relative paths.

    ``**`` crosses directory boundaries, ``*`` and ``?`` do not.
    """
    out = []
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        if c == "*":
            if pattern.startswith("**/", i):
                out.append("(?:.*/)?")
                i += 3
                continue
            if pattern.startswith("**", i):
                out.append(".*")
                i += 2
                continue
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "[":
            end = pattern.find("]", i + 1)
            if end == -1:
                out.append(re.escape(c))
            else:
                body = pattern[i + 1 : end].replace("\\", "\\\\")
                if body.startswith("!"):
                    body = "^" + body[1:]
                out.append(f"[{body}]")
                i = end
        else:
            out.append(re.escape(c))
        i += 1
    return "".join(out)


@dataclass(frozen=True)
class IgnoreRule:
    """One line of an ignore file, bound to the directory that holds it."""

    base: str
    regex: re.Pattern
    negated: bool
    dir_only: bool
    basename_only: bool

    @classmethod
    def parse(cls, line: str, base: str) -> "IgnoreRule | None":
        """Parse an ignore-file line. Returns None for blanks and comments."""
        line = line.rstrip("\n").rstrip("\r")
        if not line.strip() or line.startswith("#"):
            return None
        line = line.rstrip(" ")

        negated = line.startswith("!")
        if negated:
            line = line[1:]
        if line.startswith("\\"):
            line = line[1:]

        dir_only = line.endswith("/")
        line = line.rstrip("/")
        if not line:
            return None

        anchored = line.startswith("/")
        line = line.lstrip("/")
        basename_only = not anchored and "/" not in line

        return cls(
            base=base,
            regex=re.compile(_glob_to_regex(line) + r"\Z"),
            negated=negated,
            dir_only=dir_only,
            basename_only=basename_only,
        )

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        """Does this rule match a root-relative POSIX path?"""
        if self.dir_only and not is_dir:
            return False
        if self.base:
            prefix = self.base + "/"
            if not rel_path.startswith(prefix):
                return False
            rel_path = rel_path[len(prefix):]
        if self.basename_only:
            return bool(self.regex.match(rel_path.rsplit("/", 1)[-1]))
        return bool(self.regex.match(rel_path))


def load_ignore_rules(directory: Path, base: str) -> list[IgnoreRule]:
    """Read .gitignore and .ignore from ``directory``."""
    rules = []
    for name in IGNORE_FILES:
        ignore_path = directory / name
        if not ignore_path.is_file():
            continue
        try:
            with open(ignore_path, encoding="utf-8", errors="replace") as f:
                for line in f:
                    rule = IgnoreRule.parse(line, base)
                    if rule is not None:
                        rules.append(rule)
        except OSError as e:
            logger.warning(f"Could not read {ignore_path}: {e}")
    return rules


def is_ignored(rules: list[IgnoreRule], rel_path: str, is_dir: bool) -> bool:
    """Last matching rule wins, so ``!pattern`` can re-include."""
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negated
    return ignored


class FileWalker:
    """Walks a file or directory and yields one FileJob per eligible file."""

    def __init__(
        self,
        root: str | Path,
        language: str | None = None,
        max_file_size: int = 0,
        exclude_patterns: list[str] | None = None,
        follow_symlinks: bool = False,
    ):
        """Initialize the file walker.

        Args:
            root: File or directory to process
            language: Only yield files of this registry key
            max_file_size: Skip files larger than this many bytes (0 = no limit)
            exclude_patterns: Globs matched against the file name and the
                root-relative path; "dir/" and "dir/**" prune directories
            follow_symlinks: Whether to follow symbolic links

        Raises:
            UnsupportedLanguageError: ``language`` is not registered
        """
        self.root = Path(root)
        self.language = get_language(language) if language else None
        self.max_file_size = max_file_size
        self.exclude_patterns = list(exclude_patterns or [])
        self.follow_symlinks = follow_symlinks
        self.errors: list[str] = []

        self.stats = {
            "total_files": 0,
            "jobs": 0,
            "unsupported": 0,
            "large_files": 0,
            "ignored": 0,
            "skipped_dirs": 0,
        }

    def _excluded(self, name: str, rel_path: str, is_dir: bool) -> bool:
        """Check explicit --exclude globs."""
        for pattern in self.exclude_patterns:
            if is_dir:
                stripped = pattern[:-3] if pattern.endswith("/**") else pattern.rstrip("/")
                if stripped in (name, rel_path) or fnmatch.fnmatch(rel_path, stripped):
                    return True
                if fnmatch.fnmatch(name, stripped) and "/" not in stripped:
                    return True
            elif fnmatch.fnmatch(name, pattern) or fnmatch.fnmatch(rel_path, pattern):
                return True
        return False

    def _job_for(self, file: Path) -> FileJob | None:
        """Apply language and size filters to one file."""
        config = language_for_path(file)
        if config is None:
            self.stats["unsupported"] += 1
            return None
        if self.language is not None and config.name != self.language.name:
            return None

        try:
            if not self.follow_symlinks and file.is_symlink():
                if file == self.root:
                    msg = f"{file}: symbolic link skipped (walk.follow_symlinks is off)"
                    logger.warning(msg)
                    self.errors.append(msg)
                return None
            size = file.stat().st_size
        except OSError as e:
            logger.warning(f"Cannot stat {file}: {e}")
            self.errors.append(f"{file}: {e}")
            return None

        if self.max_file_size > 0 and size > self.max_file_size:
            self.stats["large_files"] += 1
            logger.info(f"Skipping {file}: {size} bytes exceeds limit {self.max_file_size}")
            return None

        return FileJob(path=file, language=config)

    def _on_walk_error(self, err: OSError) -> None:
        logger.warning(f"Walk error: {err}")
        self.errors.append(str(err))

    def iter_jobs(self) -> Iterator[FileJob]:
        """Yield jobs lazily, in sorted order within each directory."""
        if not self.root.exists():
            self.errors.append(f"{self.root}: no such file or directory")
            return

        if not self.root.is_dir():
            self.stats["total_files"] += 1
            job = self._job_for(self.root)
            if job is not None:
                self.stats["jobs"] += 1
                yield job
            return

        rules_by_dir: dict[str, list[IgnoreRule]] = {}

        for dirpath, dirnames, filenames in os.walk(
            self.root, followlinks=self.follow_symlinks, onerror=self._on_walk_error
        ):
            current = Path(dirpath)
            rel_dir = current.relative_to(self.root).as_posix()
            rel_dir = "" if rel_dir == "." else rel_dir

            # Rules from every ancestor apply; this directory's come last
            parent_rules = rules_by_dir.get(rel_dir.rpartition("/")[0], []) if rel_dir else []
            rules = parent_rules + load_ignore_rules(current, rel_dir)
            rules_by_dir[rel_dir] = rules

            kept_dirs = []
            for name in sorted(dirnames):
                rel = f"{rel_dir}/{name}" if rel_dir else name
                if (
                    name in SKIP_DIRS
                    or is_ignored(rules, rel, is_dir=True)
                    or self._excluded(name, rel, is_dir=True)
                ):
                    self.stats["skipped_dirs"] += 1
                    continue
                kept_dirs.append(name)
            dirnames[:] = kept_dirs

            for name in sorted(filenames):
                self.stats["total_files"] += 1
                rel = f"{rel_dir}/{name}" if rel_dir else name
                if is_ignored(rules, rel, is_dir=False) or self._excluded(name, rel, is_dir=False):
                    self.stats["ignored"] += 1
                    continue

                job = self._job_for(current / name)
                if job is not None:
                    self.stats["jobs"] += 1
                    yield job
