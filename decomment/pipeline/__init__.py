"""Per-file pipeline: job contracts, worker pool, reporting."""

from .orchestrator import run_pipeline
from .reporter import Reporter
from .structures import FileJob, FileOutcome, FileStatus, PipelineOptions, RunSummary

__all__ = [
    "FileJob",
    "FileOutcome",
    "FileStatus",
    "PipelineOptions",
    "Reporter",
    "RunSummary",
    "run_pipeline",
]
