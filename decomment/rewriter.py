"""Rewriter: apply an EditPlan to a byte buffer, line by line.

Whole-row deletions drop the terminator along with the row, so neighbours
become contiguous. Inline excisions keep the terminator, except when the
row has nothing left after trimming, in which case the row disappears
rather than turning into a blank line.
"""

from decomment.planner import EditPlan

_TRAILING_BLANKS = b" \t"


def split_lines(source: bytes) -> list[bytes]:
    """Split at ``\\n`` keeping each line's terminator.

    Unlike ``bytes.splitlines`` this never splits on a lone ``\\r`` or
    other separators, so row numbers match tree-sitter's.
    """
    lines = []
    start = 0
    while True:
        idx = source.find(b"\n", start)
        if idx == -1:
            break
        lines.append(source[start : idx + 1])
        start = idx + 1
    if start < len(source):
        lines.append(source[start:])
    return lines


def split_terminator(line: bytes) -> tuple[bytes, bytes]:
    """Separate line content from its terminator (``\\n``, ``\\r\\n`` or nothing)."""
    if line.endswith(b"\r\n"):
        return line[:-2], b"\r\n"
    if line.endswith(b"\n"):
        return line[:-1], b"\n"
    return line, b""


def trim_right(content: bytes) -> bytes:
    """Strip trailing spaces and tabs only. Indentation is left alone."""
    return content.rstrip(_TRAILING_BLANKS)


def excise(content: bytes, ranges: list[tuple[int, int]]) -> bytes:
    """Keep the bytes of ``content`` that fall outside every [start, end) range.

    Ranges may overlap; a byte covered twice is still removed once.
    """
    merged: list[list[int]] = []
    for start, end in sorted(ranges):
        start = max(start, 0)
        end = min(end, len(content))
        if end <= start:
            continue
        if merged and start <= merged[-1][1]:
            merged[-1][1] = max(merged[-1][1], end)
        else:
            merged.append([start, end])

    kept = []
    pos = 0
    for start, end in merged:
        kept.append(content[pos:start])
        pos = end
    kept.append(content[pos:])
    return b"".join(kept)


def rewrite(source: bytes, edit_plan: EditPlan) -> bytes:
    """Apply ``edit_plan`` to ``source`` and return the new buffer."""
    if edit_plan.is_empty:
        return source

    inline = edit_plan.edits_by_row()
    out = []
    for row, line in enumerate(split_lines(source)):
        if row in edit_plan.deleted_rows:
            continue

        ranges = inline.get(row)
        if not ranges:
            out.append(line)
            continue

        content, terminator = split_terminator(line)
        remaining = trim_right(excise(content, ranges))
        if not remaining:
            continue
        out.append(remaining + terminator)

    return b"".join(out)
