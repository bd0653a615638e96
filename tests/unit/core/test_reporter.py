"""Unit tests for EventReporter rendering."""

import io
import threading
from pathlib import Path

import pytest
from devclean.core.reporter import EventReporter
from devclean.core.theme import ThemeColors, get_rich_theme
from devclean.filesystem.models import (
    DeletionFinished,
    DeletionOutcome,
    DeletionResult,
    DeletionStarted,
    MessageLevel,
    PathProcessed,
    ScanFinished,
    ScanProgress,
    StatusMessage,
)
from rich.console import Console


@pytest.fixture
def buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(buffer: io.StringIO) -> Console:
    """Plain, wide console writing to a buffer."""
    return Console(
        file=buffer,
        width=200,
        force_terminal=False,
        color_system=None,
        theme=get_rich_theme(ThemeColors()),
    )


class TestLifecycle:
    """Tests for starting and stopping the consumer thread."""

    def test_context_manager_starts_and_stops(self, console: Console) -> None:
        """The consumer thread runs only inside the context."""
        reporter = EventReporter(console)
        assert reporter.running is False

        with reporter:
            assert reporter.running is True

        assert reporter.running is False

    def test_close_is_idempotent(self, console: Console) -> None:
        """close() may be called repeatedly, even before start()."""
        reporter = EventReporter(console)
        reporter.close()
        reporter.start()
        reporter.close()
        reporter.close()
        assert reporter.running is False

    def test_events_before_start_are_rendered(
        self, console: Console, buffer: io.StringIO
    ) -> None:
        """Events queued before start() are drained once running."""
        reporter = EventReporter(console)
        reporter.send(StatusMessage(text="queued early", level=MessageLevel.INFO))
        reporter.start()
        reporter.close()

        assert "queued early" in buffer.getvalue()


class TestRendering:
    """Tests for what ends up on the console."""

    def test_status_messages_printed(self, console: Console, buffer: io.StringIO) -> None:
        """Every status message level is printed to the log."""
        with EventReporter(console) as reporter:
            reporter.send(StatusMessage(text="moved a", level=MessageLevel.SUCCESS))
            reporter.send(StatusMessage(text="cannot read b", level=MessageLevel.WARNING))
            reporter.send(StatusMessage(text="failed c", level=MessageLevel.ERROR))

        output = buffer.getvalue()
        assert "✔ moved a" in output
        assert "! cannot read b" in output
        assert "✘ failed c" in output

    def test_quiet_hides_success_only(self, console: Console, buffer: io.StringIO) -> None:
        """Quiet mode drops success lines but keeps failures."""
        with EventReporter(console, quiet=True) as reporter:
            reporter.send(StatusMessage(text="moved a", level=MessageLevel.SUCCESS))
            reporter.send(StatusMessage(text="failed c", level=MessageLevel.ERROR))

        output = buffer.getvalue()
        assert "moved a" not in output
        assert "failed c" in output

    def test_markup_in_messages_is_escaped(self, console: Console, buffer: io.StringIO) -> None:
        """Paths containing square brackets are printed literally."""
        with EventReporter(console) as reporter:
            reporter.send(StatusMessage(text="Moved to trash: /tmp/[bold]x[/bold]"))

        assert "/tmp/[bold]x[/bold]" in buffer.getvalue()

    def test_full_run_summary(self, console: Console, buffer: io.StringIO) -> None:
        """Scan and deletion progress end in their final state."""
        result = DeletionResult(path=Path("/tmp/p/build"), outcome=DeletionOutcome.TRASHED)
        with EventReporter(console) as reporter:
            reporter.send(ScanProgress(scanned=100, matched=1))
            reporter.send(ScanFinished(scanned=150, matched=2))
            reporter.send(DeletionStarted(total=2))
            reporter.send(PathProcessed(result=result))
            reporter.send(PathProcessed(result=result))
            reporter.send(DeletionFinished(removed=1, total=2))

        output = buffer.getvalue()
        assert "Scan complete. Directories to delete: 2" in output
        assert "Done! Removed 1 of 2" in output
        assert "2/2" in output

    def test_progress_without_deletion_started(self, console: Console) -> None:
        """Stray progress events are ignored without an error."""
        result = DeletionResult(path=Path("/x"), outcome=DeletionOutcome.FAILED)
        with EventReporter(console) as reporter:
            reporter.send(PathProcessed(result=result))
            reporter.send(DeletionFinished(removed=0, total=0))
        assert reporter.running is False

    def test_many_producers(self, console: Console, buffer: io.StringIO) -> None:
        """Messages from several threads are all rendered."""

        def produce(reporter: EventReporter, worker: int) -> None:
            for i in range(20):
                reporter.send(StatusMessage(text=f"w{worker}-m{i}", level=MessageLevel.INFO))

        with EventReporter(console) as reporter:
            threads = [threading.Thread(target=produce, args=(reporter, w)) for w in range(4)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

        output = buffer.getvalue()
        for worker in range(4):
            for i in range(20):
                assert f"w{worker}-m{i}\n" in output
