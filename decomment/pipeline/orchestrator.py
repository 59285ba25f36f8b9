"""Pipeline orchestrator: bounded queue feeding a fixed pool of worker threads.

One producer (the calling thread, iterating the walker) fills the queue
and closes it with one sentinel per worker. Every file is owned end to end
by a single worker, and every worker owns its own CommentLocator, so the
only shared state is the run summary and the reporter, both behind one lock.
"""

import os
import queue
import stat
import tempfile
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable

from decomment.diff import TransformResult, diff
from decomment.errors import DecommentError, ReadError, WriteError
from decomment.locator import CommentLocator
from decomment.pipeline.reporter import Reporter
from decomment.pipeline.structures import (
    FileJob,
    FileOutcome,
    FileStatus,
    PipelineOptions,
    RunSummary,
)
from decomment.planner import plan
from decomment.retention import RetentionOptions, retain
from decomment.rewriter import rewrite
from decomment.utils.constants import QUEUE_SLOTS_PER_WORKER
from decomment.utils.logging import logger

# Posted once per worker after the last job
_CLOSED = object()


def default_workers() -> int:
    """Pool size when none is configured: one worker per core."""
    return os.cpu_count() or 1


def read_source(path: Path) -> bytes:
    """Read a whole file into memory."""
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise ReadError(f"cannot read: {e.strerror or e}", path=str(path)) from e


def persist(path: Path, data: bytes) -> None:
    """Replace ``path`` with ``data`` keeping its permission bits.

    Writes to a temp file in the same directory and renames it over the
    original, so a failed write leaves the original untouched. A symlink
    is resolved first: the link stays, its target gets the new content.
    """
    path = Path(path).resolve()
    tmp_name = None
    try:
        mode = stat.S_IMODE(os.stat(path).st_mode)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        raise WriteError(f"cannot write: {e.strerror or e}", path=str(path)) from e
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                logger.warning(f"Could not remove temp file {tmp_name}")


def transform(
    path: str,
    source: bytes,
    job: FileJob,
    locator: CommentLocator,
    retention: RetentionOptions,
) -> TransformResult:
    """Locate -> retain -> plan -> rewrite -> diff for one buffer."""
    spans = locator.locate(source, job.language)
    removable = retain(spans, retention)
    logger.debug(f"{path}: {len(spans)} comments, {len(removable)} to remove")
    after = rewrite(source, plan(removable))
    return diff(path, source, after)


class _Run:
    """Shared state of one pipeline run."""

    def __init__(self, options: PipelineOptions, reporter: Reporter | None):
        self.options = options
        self.reporter = reporter
        self.lock = threading.Lock()
        self.summary = RunSummary(written=options.write)

    def record(self, outcome: FileOutcome, result: TransformResult | None = None) -> None:
        """Update counters and report, under the lock."""
        with self.lock:
            self.summary.total += 1
            self.summary.outcomes.append(outcome)
            if outcome.status == FileStatus.CHANGED:
                self.summary.changed += 1
            elif outcome.status == FileStatus.ERROR:
                self.summary.errors += 1
            if result is not None and self.options.keep_results:
                self.summary.results.append(result)

            if self.reporter is None:
                return
            if outcome.status == FileStatus.ERROR:
                self.reporter.error(outcome.path, outcome.error)
            elif result is not None:
                self.reporter.file(result)

    def process(self, job: FileJob, locator: CommentLocator) -> None:
        """Run one job. File-level failures become error outcomes."""
        path = str(job.path)
        try:
            source = read_source(job.path)
            result = transform(path, source, job, locator, self.options.retention)
            if result.changed and self.options.write:
                persist(job.path, result.after)
        except DecommentError as e:
            logger.debug(f"{type(e).__name__} on {path}: {e}")
            self.record(FileOutcome(path, FileStatus.ERROR, error=str(e)))
            return
        except Exception as e:
            logger.opt(exception=True).error(f"Unexpected failure on {path}: {e}")
            self.record(FileOutcome(path, FileStatus.ERROR, error=f"{type(e).__name__}: {e}"))
            return

        status = FileStatus.CHANGED if result.changed else FileStatus.UNCHANGED
        self.record(FileOutcome(path, status, lines_removed=result.lines_removed), result)

    def worker(self, jobs: queue.Queue) -> None:
        """Drain the queue until the close sentinel arrives.

        A failure while handling one job (a reporter hitting a closed pipe,
        say) is logged and the worker keeps draining, so the producer never
        blocks on a full queue.
        """
        locator = CommentLocator()
        while True:
            job = jobs.get()
            if job is _CLOSED:
                return
            try:
                self.process(job, locator)
            except Exception as e:
                logger.opt(exception=True).error(f"Worker failed on {job.path}: {e}")


def run_pipeline(
    jobs: Iterable[FileJob],
    options: PipelineOptions | None = None,
    reporter: Reporter | None = None,
) -> RunSummary:
    """Process every job on a bounded worker pool and return the run summary.

    The summary line is reported once, after all workers have drained the
    queue. Outcomes (and results, when kept) are sorted by path so the
    summary does not depend on scheduling.
    """
    options = options or PipelineOptions()
    workers = options.workers if options.workers > 0 else default_workers()
    run = _Run(options, reporter)

    work: queue.Queue = queue.Queue(maxsize=workers * QUEUE_SLOTS_PER_WORKER)

    logger.debug(f"Starting pipeline with {workers} workers (write={options.write})")

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="decomment") as executor:
        futures = [executor.submit(run.worker, work) for _ in range(workers)]
        try:
            for job in jobs:
                work.put(job)
        finally:
            for _ in range(workers):
                work.put(_CLOSED)

        for future in futures:
            future.result()

    run.summary.outcomes.sort(key=lambda o: o.path)
    run.summary.results.sort(key=lambda r: r.path)

    if reporter is not None:
        reporter.summary(run.summary)

    return run.summary
