"""Data contracts for pipeline execution."""
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from decomment.diff import TransformResult
from decomment.languages import LanguageConfig
from decomment.retention import RetentionOptions


class FileStatus(Enum):
    """What happened to one file."""
    UNCHANGED = "unchanged"
    CHANGED = "changed"
    ERROR = "error"


@dataclass(frozen=True)
class FileJob:
    """One file to process, produced by the walker and consumed by one worker."""
    path: Path
    language: LanguageConfig


@dataclass
class FileOutcome:
    """Per-file record kept in the run summary.

    JSON-serializable through to_dict().
    """
    path: str
    status: FileStatus
    lines_removed: int = 0
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        d = asdict(self)
        d['status'] = self.status.value
        return d


@dataclass
class PipelineOptions:
    """Configuration that flows through the pipeline."""
    write: bool = False
    workers: int = 0
    retention: RetentionOptions = field(default_factory=RetentionOptions)
    keep_results: bool = False


@dataclass
class RunSummary:
    """Aggregate of a whole run."""
    total: int = 0
    changed: int = 0
    errors: int = 0
    written: bool = False
    outcomes: list[FileOutcome] = field(default_factory=list)
    results: list[TransformResult] = field(default_factory=list)

    @property
    def lines_removed(self) -> int:
        return sum(o.lines_removed for o in self.outcomes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary (results are left out)."""
        return {
            "total": self.total,
            "changed": self.changed,
            "errors": self.errors,
            "written": self.written,
            "lines_removed": self.lines_removed,
            "files": [o.to_dict() for o in self.outcomes if o.status != FileStatus.UNCHANGED],
        }
