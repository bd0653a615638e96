"""Shared Rich display functions for scan candidates and deletion results."""

from pathlib import Path

from rich.markup import escape
from rich.table import Table

from devclean.filesystem.models import DispatchSummary
from devclean.utils.formatting import console, print_info, print_success, print_warning


def create_candidates_table(candidates: list[Path], root: Path) -> Table:
    """Create a Rich table listing directories that would be deleted.

    Paths are shown relative to the scan root when possible.

    Args:
        candidates: Candidate directories in scan order.
        root: Scan root directory.

    Returns:
        Rich Table configured for candidate display.
    """
    table = Table(
        title="Directories to Delete (Dry Run)",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("#", justify="right", style="muted")
    table.add_column("Name", style="warning", no_wrap=True)
    table.add_column("Path")

    for index, path in enumerate(candidates, start=1):
        try:
            shown = path.relative_to(root)
        except ValueError:
            shown = path
        table.add_row(str(index), escape(path.name), escape(str(shown)))

    return table


def print_dry_run(candidates: list[Path], root: Path) -> None:
    """Print the dry-run listing and a one-line summary."""
    if not candidates:
        print_success("No matching directories found. Nothing to delete.")
        return
    console.print(create_candidates_table(candidates, root))
    print_info(f"Dry-run: {len(candidates)} director(ies) would be deleted.")


def print_summary(summary: DispatchSummary) -> None:
    """Print the final deletion summary.

    Shows the total removed count, then a breakdown of outcomes when
    anything was force deleted, skipped, or failed.

    Args:
        summary: Aggregated dispatch counts.
    """
    if summary.total == 0:
        return

    console.print(
        f"\nRemoved [success]{summary.removed}[/success] of {summary.total} director(ies)."
    )

    parts: list[str] = []
    if summary.trashed:
        parts.append(f"[trashed]{summary.trashed} trashed[/trashed]")
    if summary.force_deleted:
        parts.append(f"[force_deleted]{summary.force_deleted} force deleted[/force_deleted]")
    if summary.already_removed:
        parts.append(
            f"[already_removed]{summary.already_removed} already removed[/already_removed]"
        )
    if summary.failed:
        parts.append(f"[failed]{summary.failed} failed[/failed]")

    if summary.force_deleted or summary.already_removed or summary.failed:
        console.print(f"[muted]Breakdown:[/muted] {', '.join(parts)}")

    if summary.failed:
        print_warning(f"{summary.failed} director(ies) could not be removed.")
