"""Filesystem domain models for scanning and deletion.

This module defines the data structures shared by the scanner, the
deletion dispatcher and the event reporter: deletion outcomes and
results, the dispatch summary, reporter events, and the validated
options for a cleaning run.
"""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PROGRESS_INTERVAL = 100


class DeletionOutcome(str, Enum):
    """Final state of a single candidate directory.

    Attributes:
        TRASHED: Moved to the OS trash.
        FORCE_DELETED: Trash failed, removed permanently instead.
        FAILED: Both trash and permanent removal failed; the path remains.
        ALREADY_REMOVED: Path vanished before or while it was deleted,
            typically because an enclosing candidate was removed first.
    """

    TRASHED = "trashed"
    FORCE_DELETED = "force_deleted"
    FAILED = "failed"
    ALREADY_REMOVED = "already_removed"

    @property
    def removed(self) -> bool:
        """Whether this outcome counts as a successful removal."""
        return self in (DeletionOutcome.TRASHED, DeletionOutcome.FORCE_DELETED)


class MessageLevel(str, Enum):
    """Severity of a status message sent to the reporter."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class DeletionResult:
    """Result of deleting one candidate path.

    Attributes:
        path: Candidate directory that was operated on.
        outcome: Final outcome for the path.
        errors: Error messages collected along the way, in order.
    """

    path: Path
    outcome: DeletionOutcome
    errors: tuple[str, ...] = ()

    @property
    def removed(self) -> bool:
        """Check if the path was trashed or force-deleted."""
        return self.outcome.removed


@dataclass(frozen=True, slots=True)
class DispatchSummary:
    """Aggregated counts for one dispatch run.

    Attributes:
        total: Number of candidate paths handed to the dispatcher.
        trashed: Paths moved to the trash.
        force_deleted: Paths removed permanently after the trash failed.
        failed: Paths left on disk.
        already_removed: Paths that were gone by the time they were processed.
    """

    total: int = 0
    trashed: int = 0
    force_deleted: int = 0
    failed: int = 0
    already_removed: int = 0

    @property
    def removed(self) -> int:
        """Total number of successfully removed paths."""
        return self.trashed + self.force_deleted

    @classmethod
    def from_results(cls, results: list[DeletionResult]) -> "DispatchSummary":
        """Build a summary by counting outcomes."""
        counts = dict.fromkeys(DeletionOutcome, 0)
        for result in results:
            counts[result.outcome] += 1
        return cls(
            total=len(results),
            trashed=counts[DeletionOutcome.TRASHED],
            force_deleted=counts[DeletionOutcome.FORCE_DELETED],
            failed=counts[DeletionOutcome.FAILED],
            already_removed=counts[DeletionOutcome.ALREADY_REMOVED],
        )


# =============================================================================
# Reporter events
# =============================================================================


@dataclass(frozen=True, slots=True)
class ScanProgress:
    """Periodic scan counters."""

    scanned: int
    matched: int


@dataclass(frozen=True, slots=True)
class ScanFinished:
    """Scan completed; the candidate list is final."""

    scanned: int
    matched: int


@dataclass(frozen=True, slots=True)
class DeletionStarted:
    """Deletion phase began with ``total`` candidates."""

    total: int


@dataclass(frozen=True, slots=True)
class PathProcessed:
    """One candidate finished processing, whatever the outcome."""

    result: DeletionResult


@dataclass(frozen=True, slots=True)
class StatusMessage:
    """Free-form line for the scrolling log."""

    text: str
    level: MessageLevel = MessageLevel.INFO


@dataclass(frozen=True, slots=True)
class DeletionFinished:
    """Deletion phase completed."""

    removed: int
    total: int


ReportEvent = (
    ScanProgress | ScanFinished | DeletionStarted | PathProcessed | StatusMessage | DeletionFinished
)


# =============================================================================
# Run options
# =============================================================================


class CleanOptions(BaseModel):
    """Options for a single cleaning run.

    Attributes:
        workers: Size of the deletion worker pool. If None, uses the CPU count.
        progress_interval: Scanned entries between two scan progress updates.
        descend_into_matches: Keep scanning inside matched directories.
        dry_run: Scan and list candidates without deleting anything.
        quiet: Hide per-path success lines.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    workers: Annotated[
        int | None,
        Field(ge=1, description="Deletion worker pool size (None = CPU count)"),
    ] = None
    progress_interval: Annotated[
        int,
        Field(ge=1, description="Entries between scan progress updates"),
    ] = DEFAULT_PROGRESS_INTERVAL
    descend_into_matches: bool = True
    dry_run: bool = False
    quiet: bool = False

    @property
    def effective_workers(self) -> int:
        """Get the effective worker count.

        Returns the configured count if set, otherwise the number of
        CPUs available (at least one).
        """
        if self.workers is not None:
            return self.workers
        return os.cpu_count() or 1
