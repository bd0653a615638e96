"""Parallel deletion of candidate directories.

Each candidate is sent to the OS trash first. If that fails it is
removed permanently with shutil.rmtree. Failures are contained to the
path they concern and reported as status messages.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import TYPE_CHECKING

from send2trash import send2trash

from devclean.filesystem.models import (
    DeletionFinished,
    DeletionOutcome,
    DeletionResult,
    DeletionStarted,
    DispatchSummary,
    MessageLevel,
    PathProcessed,
    ReportEvent,
    StatusMessage,
)

if TYPE_CHECKING:
    from devclean.core.reporter import EventReporter

logger = logging.getLogger(__name__)

RemoveFunc = Callable[[Path], object]


def _ignore_vanished(exc: BaseException) -> None:
    if not isinstance(exc, FileNotFoundError):
        raise exc


def force_remove(path: Path) -> None:
    """Remove a directory tree, ignoring entries that vanish meanwhile.

    A nested candidate may be removed by another worker at the same time,
    so entries disappearing under rmtree are not errors.
    """
    if sys.version_info >= (3, 12):
        shutil.rmtree(path, onexc=lambda _func, _path, exc: _ignore_vanished(exc))
    else:
        shutil.rmtree(path, onerror=lambda _func, _path, exc_info: _ignore_vanished(exc_info[1]))


class DeletionDispatcher:
    """Deletes candidate directories on a fixed-size thread pool.

    The completed count is aggregated on the calling thread from the
    results returned by workers, so workers share no mutable counters.

    Args:
        reporter: Optional event reporter for progress and outcomes.
        workers: Pool size. If None, uses the number of CPUs.
        trash: Callable moving a path to the trash. Defaults to send2trash.
        remove_tree: Callable removing a directory tree permanently.
            Defaults to force_remove.
    """

    def __init__(
        self,
        reporter: EventReporter | None = None,
        *,
        workers: int | None = None,
        trash: RemoveFunc | None = None,
        remove_tree: RemoveFunc | None = None,
    ) -> None:
        if workers is None:
            workers = os.cpu_count() or 1
        if workers < 1:
            msg = f"workers must be at least 1, got {workers}"
            raise ValueError(msg)
        self._reporter = reporter
        self._workers = workers
        self._trash = trash or send2trash
        self._remove_tree = remove_tree or force_remove

    @property
    def workers(self) -> int:
        """Size of the worker pool."""
        return self._workers

    def dispatch(self, paths: list[Path]) -> DispatchSummary:
        """Delete every path and return the aggregated outcome counts.

        Never returns before every path has been processed. Individual
        failures do not stop the run.

        Args:
            paths: Candidate directories to delete.

        Returns:
            DispatchSummary with per-outcome counts.
        """
        if not paths:
            self._send(StatusMessage(text="Nothing to delete.", level=MessageLevel.WARNING))
            return DispatchSummary()

        total = len(paths)
        self._send(DeletionStarted(total=total))
        logger.debug("Deleting %d paths with %d workers", total, self._workers)

        results: list[DeletionResult] = []
        with ThreadPoolExecutor(max_workers=self._workers, thread_name_prefix="devclean") as pool:
            futures = [pool.submit(self.delete_path, path) for path in paths]
            for future in as_completed(futures):
                result = future.result()
                results.append(result)
                self._send(PathProcessed(result=result))

        summary = DispatchSummary.from_results(results)
        self._send(DeletionFinished(removed=summary.removed, total=total))
        return summary

    def delete_path(self, path: Path) -> DeletionResult:
        """Delete a single candidate: trash first, then force delete.

        Args:
            path: Directory to delete.

        Returns:
            DeletionResult describing the outcome.
        """
        if not os.path.lexists(path):
            logger.debug("Already removed: %s", path)
            return DeletionResult(path=path, outcome=DeletionOutcome.ALREADY_REMOVED)

        try:
            self._trash(path)
        except OSError as e:
            trash_error = str(e)
            if not os.path.lexists(path):
                return self._vanished(path, trash_error)
            self._failure(f"Could not move '{path}' to trash: {trash_error}")
        else:
            self._success(f"Moved to trash: {path}")
            return DeletionResult(path=path, outcome=DeletionOutcome.TRASHED)

        try:
            self._remove_tree(path)
        except OSError as remove_error:
            if not os.path.lexists(path):
                return self._vanished(path, trash_error)
            self._failure(f"Could not delete '{path}': {remove_error}")
            return DeletionResult(
                path=path,
                outcome=DeletionOutcome.FAILED,
                errors=(trash_error, str(remove_error)),
            )

        self._success(f"Force deleted: {path}")
        return DeletionResult(
            path=path,
            outcome=DeletionOutcome.FORCE_DELETED,
            errors=(trash_error,),
        )

    def _vanished(self, path: Path, trash_error: str) -> DeletionResult:
        # Removed along with a parent candidate
        logger.debug("Removed with its parent: %s", path)
        return DeletionResult(
            path=path,
            outcome=DeletionOutcome.ALREADY_REMOVED,
            errors=(trash_error,),
        )

    def _success(self, text: str) -> None:
        self._send(StatusMessage(text=text, level=MessageLevel.SUCCESS))

    def _failure(self, text: str) -> None:
        logger.warning("%s", text)
        self._send(StatusMessage(text=text, level=MessageLevel.ERROR))

    def _send(self, event: ReportEvent) -> None:
        if self._reporter is not None:
            self._reporter.send(event)
