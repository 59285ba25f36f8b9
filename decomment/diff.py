"""Change detection between the original and rewritten buffers."""

from dataclasses import dataclass
from functools import cached_property


def count_lines(buffer: bytes) -> int:
    """Number of ``\\n`` bytes, plus one for an unterminated final line."""
    if not buffer:
        return 0
    n = buffer.count(b"\n")
    if not buffer.endswith(b"\n"):
        n += 1
    return n


def _display_lines(buffer: bytes) -> list[str]:
    """Split for display; a trailing terminator does not open an extra line."""
    if not buffer:
        return []
    lines = buffer.decode("utf-8", errors="replace").split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


@dataclass(frozen=True)
class TransformResult:
    """Outcome of transforming one file.

    ``changed`` is exact byte inequality of ``before`` and ``after``.
    """

    path: str
    before: bytes
    after: bytes
    changed: bool

    @property
    def lines_removed(self) -> int:
        return count_lines(self.before) - count_lines(self.after)

    @cached_property
    def _unified(self) -> str:
        before = _display_lines(self.before)
        after = _display_lines(self.after)

        out = [f"--- {self.path}", f"+++ {self.path}"]

        # Greedy walk: fine for the sparse, isolated edits comment removal makes.
        bi, ai = 0, 0
        while bi < len(before) or ai < len(after):
            if bi < len(before) and ai < len(after) and before[bi] == after[ai]:
                bi += 1
                ai += 1
                continue
            if bi < len(before):
                out.append(f"-{before[bi]}")
                bi += 1
            if ai < len(after):
                out.append(f"+{after[ai]}")
                ai += 1

        return "\n".join(out) + "\n"

    def unified_text(self) -> str:
        """Line diff of the change, computed on first use. Empty when unchanged."""
        if not self.changed:
            return ""
        return self._unified


def diff(path: str, before: bytes, after: bytes) -> TransformResult:
    """Compare buffers and wrap them in a TransformResult."""
    return TransformResult(path=path, before=before, after=after, changed=before != after)
