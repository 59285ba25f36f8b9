"""Line-edit planner: comment spans to whole-row deletions and inline excisions."""

from dataclasses import dataclass, field
from typing import Iterable

from decomment.locator import CommentSpan


@dataclass(frozen=True)
class InlineEdit:
    """Byte range [start_col, end_col) to cut out of one surviving row."""

    row: int
    start_col: int
    end_col: int


@dataclass(frozen=True)
class EditPlan:
    """Per-file edit plan.

    No row appears both in ``deleted_rows`` and in ``inline_edits``.
    """

    deleted_rows: frozenset[int] = field(default_factory=frozenset)
    inline_edits: tuple[InlineEdit, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.deleted_rows and not self.inline_edits

    def edits_by_row(self) -> dict[int, list[tuple[int, int]]]:
        """Group inline column ranges by row."""
        grouped: dict[int, list[tuple[int, int]]] = {}
        for edit in self.inline_edits:
            grouped.setdefault(edit.row, []).append((edit.start_col, edit.end_col))
        return grouped


def plan(spans: Iterable[CommentSpan]) -> EditPlan:
    """Turn comment spans into an EditPlan.

    Multi-line spans delete every row they touch, full-line spans delete
    their row, everything else becomes an inline edit. Inline edits that
    land on a deleted row are dropped, which makes the result independent
    of span order.
    """
    deleted: set[int] = set()
    inline: list[InlineEdit] = []

    for span in spans:
        if span.is_multi_line:
            deleted.update(range(span.start_row, span.end_row + 1))
        elif span.is_full_line:
            deleted.add(span.start_row)
        else:
            inline.append(InlineEdit(span.start_row, span.start_col, span.end_col))

    inline = sorted(
        {edit for edit in inline if edit.row not in deleted},
        key=lambda e: (e.row, e.start_col, e.end_col),
    )
    return EditPlan(deleted_rows=frozenset(deleted), inline_edits=tuple(inline))
