"""Tree scanner for denylisted directories.

Walks a directory tree depth-first on the calling thread and collects
every directory whose basename is in the denylist. Hidden entries are
skipped entirely and symbolic links are never followed.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from devclean.filesystem.models import (
    DEFAULT_PROGRESS_INTERVAL,
    MessageLevel,
    ReportEvent,
    ScanFinished,
    ScanProgress,
    StatusMessage,
)

if TYPE_CHECKING:
    from collections.abc import Set

    from devclean.core.reporter import EventReporter

logger = logging.getLogger(__name__)


class TreeScanner:
    """Collects candidate directories below a root.

    The full candidate list is built before anything is deleted, so the
    walk never runs inside a tree that is being removed.

    Args:
        root: Directory to scan. Never reported as a candidate itself.
        denylist: Folder names to match against directory basenames.
        reporter: Optional event reporter for progress and warnings.
        progress_interval: Send a progress event every this many entries.
        descend_into_matches: If False, matched directories are not
            scanned further, so nested matches are not reported.
    """

    def __init__(
        self,
        root: Path,
        denylist: Set[str],
        reporter: EventReporter | None = None,
        *,
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
        descend_into_matches: bool = True,
    ) -> None:
        if progress_interval < 1:
            msg = f"progress_interval must be at least 1, got {progress_interval}"
            raise ValueError(msg)
        self._root = Path(root)
        self._denylist = denylist
        self._reporter = reporter
        self._progress_interval = progress_interval
        self._descend_into_matches = descend_into_matches
        self.scanned = 0

    def scan(self) -> list[Path]:
        """Walk the tree and return matched directories in visit order.

        Returns:
            List of candidate directory paths.
        """
        self.scanned = 0
        matches: list[Path] = []
        stack: list[Path] = [self._root]

        while stack:
            directory = stack.pop()
            subdirs: list[Path] = []

            for entry in self._list_directory(directory):
                if entry.name.startswith("."):
                    continue

                self.scanned += 1
                if self.scanned % self._progress_interval == 0:
                    self._send(ScanProgress(scanned=self.scanned, matched=len(matches)))

                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                except OSError as e:
                    self._warn(f"Cannot determine type of {entry.path}: {e}")
                    continue
                if not is_dir:
                    continue

                path = Path(entry.path)
                if entry.name in self._denylist:
                    matches.append(path)
                    if not self._descend_into_matches:
                        continue
                subdirs.append(path)

            # Reversed so the first entry in sorted order is visited next
            stack.extend(reversed(subdirs))

        logger.debug(
            "Scanned %d entries under %s, %d matched", self.scanned, self._root, len(matches)
        )
        self._send(ScanFinished(scanned=self.scanned, matched=len(matches)))
        return matches

    def _list_directory(self, directory: Path) -> list[os.DirEntry[str]]:
        """List a directory sorted by name, or return nothing on error."""
        try:
            with os.scandir(directory) as it:
                return sorted(it, key=lambda e: e.name)
        except OSError as e:
            self._warn(f"Cannot scan {directory}: {e.strerror or e}")
            return []

    def _warn(self, message: str) -> None:
        logger.warning("%s", message)
        self._send(StatusMessage(text=message, level=MessageLevel.WARNING))

    def _send(self, event: ReportEvent) -> None:
        if self._reporter is not None:
            self._reporter.send(event)
