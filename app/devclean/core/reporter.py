"""Asynchronous progress and event reporter.

Scanning and deletion code send events to an EventReporter. A single
consumer thread drains an unbounded queue and renders them with Rich,
so producers never wait on the terminal.

Two surfaces are rendered at once:
- a live region with the scan spinner and the deletion progress bar
- a scrolling log of per-path outcomes printed above the live region
"""

import logging
import queue
import threading
from types import TracebackType

from rich.console import Console, Group
from rich.live import Live
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

from devclean.filesystem.models import (
    DeletionFinished,
    DeletionStarted,
    MessageLevel,
    PathProcessed,
    ReportEvent,
    ScanFinished,
    ScanProgress,
    StatusMessage,
)

logger = logging.getLogger(__name__)

# Rich markup prefix per message level
_LEVEL_PREFIX: dict[MessageLevel, str] = {
    MessageLevel.INFO: "[info]•[/info]",
    MessageLevel.SUCCESS: "[success]✔[/success]",
    MessageLevel.WARNING: "[warning]![/warning]",
    MessageLevel.ERROR: "[error]✘[/error]",
}


class EventReporter:
    """Renders events from many producer threads on one consumer thread.

    Use as a context manager, or call start() and close() explicitly.
    send() is safe to call from any thread and never blocks.

    Args:
        console: Console to render on. Defaults to the shared stdout console.
        quiet: If True, success lines are not printed to the log.
    """

    def __init__(self, console: Console | None = None, *, quiet: bool = False) -> None:
        if console is None:
            from devclean.utils.formatting import console as default_console

            console = default_console
        self._console = console
        self._quiet = quiet
        self._queue: queue.SimpleQueue[ReportEvent | None] = queue.SimpleQueue()
        self._thread: threading.Thread | None = None

        self._scan_progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            console=console,
        )
        self._delete_progress = Progress(
            SpinnerColumn(),
            TimeElapsedColumn(),
            BarColumn(bar_width=40),
            MofNCompleteColumn(),
            TimeRemainingColumn(),
            TextColumn("{task.description}"),
            console=console,
        )
        self._scan_task: TaskID | None = None
        self._delete_task: TaskID | None = None

    def __enter__(self) -> "EventReporter":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def running(self) -> bool:
        """Check if the consumer thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the consumer thread."""
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="devclean-reporter", daemon=True)
        self._thread.start()

    def send(self, event: ReportEvent) -> None:
        """Queue an event for rendering."""
        self._queue.put(event)

    def close(self) -> None:
        """Stop accepting events, drain the queue and stop rendering.

        Safe to call more than once.
        """
        if self._thread is None:
            return
        self._queue.put(None)
        self._thread.join()
        self._thread = None

    def _run(self) -> None:
        live = Live(
            Group(self._scan_progress, self._delete_progress),
            console=self._console,
            refresh_per_second=10,
        )
        with live:
            while True:
                event = self._queue.get()
                if event is None:
                    break
                try:
                    self._handle(event)
                except Exception:
                    # Rendering must never take down the consumer thread
                    logger.exception("Failed to render event %r", event)
            live.refresh()

    def _handle(self, event: ReportEvent) -> None:
        """Apply a single event to the display."""
        if isinstance(event, ScanProgress):
            self._update_scan(event.scanned, event.matched)
        elif isinstance(event, ScanFinished):
            self._update_scan(event.scanned, event.matched, finished=True)
        elif isinstance(event, DeletionStarted):
            self._delete_task = self._delete_progress.add_task("Deleting...", total=event.total)
        elif isinstance(event, PathProcessed):
            if self._delete_task is not None:
                self._delete_progress.advance(self._delete_task)
        elif isinstance(event, StatusMessage):
            self._print_message(event)
        elif isinstance(event, DeletionFinished):
            if self._delete_task is not None:
                self._delete_progress.update(
                    self._delete_task,
                    description=f"[success]Done! Removed {event.removed} of {event.total}[/]",
                )
                self._delete_progress.stop_task(self._delete_task)

    def _update_scan(self, scanned: int, matched: int, *, finished: bool = False) -> None:
        if finished:
            description = (
                f"Scan complete. Directories to delete: [info]{matched}[/] "
                f"[muted](scanned {scanned})[/]"
            )
        else:
            description = f"Scanned: [info]{scanned}[/] | Found to delete: [warning]{matched}[/]"

        if self._scan_task is None:
            self._scan_task = self._scan_progress.add_task(description, total=None)
        else:
            self._scan_progress.update(self._scan_task, description=description)

        if finished:
            self._scan_progress.update(self._scan_task, total=1, completed=1)
            self._scan_progress.stop_task(self._scan_task)

    def _print_message(self, message: StatusMessage) -> None:
        if self._quiet and message.level == MessageLevel.SUCCESS:
            return
        text = escape(message.text)
        if message.level == MessageLevel.SUCCESS:
            text = f"[muted]{text}[/muted]"
        self._console.print(f"{_LEVEL_PREFIX[message.level]} {text}")
