"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from devclean.filesystem.models import MessageLevel, ReportEvent, StatusMessage


class RecordingReporter:
    """Stand-in for EventReporter that records every event it receives."""

    def __init__(self) -> None:
        self.events: list[ReportEvent] = []

    def send(self, event: ReportEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: type) -> list[ReportEvent]:
        """Return recorded events of the given type, in order."""
        return [e for e in self.events if isinstance(e, event_type)]

    def messages(self, level: MessageLevel | None = None) -> list[str]:
        """Return the text of recorded status messages, optionally by level."""
        return [
            e.text
            for e in self.events
            if isinstance(e, StatusMessage) and (level is None or e.level == level)
        ]


@pytest.fixture
def reporter() -> RecordingReporter:
    """Event reporter that records events instead of rendering them."""
    return RecordingReporter()


@pytest.fixture
def project_tree(tmp_path: Path) -> Path:
    """Create a small project tree.

    Layout::

        project/
            .git/objects/pack
            .git/node_modules        (hidden parent, never scanned)
            node_modules/left-pad/index.js
            src/main.py
            src/build/out.o
    """
    root = tmp_path / "project"
    (root / ".git" / "objects" / "pack").mkdir(parents=True)
    (root / ".git" / "node_modules").mkdir()
    (root / "node_modules" / "left-pad").mkdir(parents=True)
    (root / "node_modules" / "left-pad" / "index.js").write_text("module.exports = 1;\n")
    (root / "src").mkdir()
    (root / "src" / "main.py").write_text("print('hi')\n")
    (root / "src" / "build").mkdir()
    (root / "src" / "build" / "out.o").write_bytes(b"\x7fELF")
    return root


@pytest.fixture
def denylist_file(tmp_path: Path) -> Path:
    """Denylist file naming node_modules and build."""
    path = tmp_path / "denylist.txt"
    path.write_text("node_modules\nbuild\n")
    return path
