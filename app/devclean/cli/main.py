"""Main CLI application entry point.

Defines the Typer application: load the denylist, scan the root,
then delete every match.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.logging import RichHandler
from rich.markup import escape

from devclean import __version__
from devclean.cli.display import print_dry_run, print_summary
from devclean.core.reporter import EventReporter
from devclean.filesystem.denylist import DenylistReadError, load_denylist
from devclean.filesystem.dispatcher import DeletionDispatcher
from devclean.filesystem.models import CleanOptions
from devclean.filesystem.scanner import TreeScanner
from devclean.utils.formatting import console, err_console, print_error, print_success

app = typer.Typer(
    name="devclean",
    help="Remove unwanted folders (node_modules, target, ...) from a directory tree.",
    no_args_is_help=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"devclean version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route devclean log records to stderr through Rich.

    Warnings are already shown by the reporter, so only errors are
    logged unless verbose output is requested.
    """
    pkg_logger = logging.getLogger("devclean")
    pkg_logger.handlers = [RichHandler(console=err_console, show_path=False)]
    pkg_logger.setLevel(logging.DEBUG if verbose else logging.ERROR)


@app.command()
def clean(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="File listing unwanted folder names, one per line.",
        ),
    ] = None,
    root: Annotated[
        Path | None,
        typer.Option(
            "--root",
            "-r",
            help="Root directory to clean.",
        ),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-w",
            help="Number of deletion workers. Defaults to the CPU count.",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="List matching directories without deleting."),
    ] = False,
    prune_nested: Annotated[
        bool,
        typer.Option("--prune-nested", help="Do not scan inside matched directories."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only show failures and the summary."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Move matching folders to the trash, deleting them permanently if that fails.

    Prompts for the denylist file and the root directory when they are
    not given as options.
    """
    configure_logging(verbose)

    try:
        options = CleanOptions(
            workers=workers,
            descend_into_matches=not prune_nested,
            dry_run=dry_run,
            quiet=quiet,
        )
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        print_error(f"Invalid options: {escape(problems)}")
        raise typer.Exit(code=1) from e

    if config is None:
        config = Path(typer.prompt("Path to the file with unwanted folder names"))

    try:
        denylist = load_denylist(config)
    except DenylistReadError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    if root is None:
        root = Path(typer.prompt("Path to the root folder to clean"))

    if not root.is_dir():
        print_error(f"Not a directory: {escape(str(root))}. Check the path and try again.")
        raise typer.Exit(code=1)

    with EventReporter(console, quiet=options.quiet) as reporter:
        scanner = TreeScanner(
            root,
            denylist,
            reporter,
            progress_interval=options.progress_interval,
            descend_into_matches=options.descend_into_matches,
        )
        candidates = scanner.scan()

        if options.dry_run:
            summary = None
        else:
            dispatcher = DeletionDispatcher(reporter, workers=options.effective_workers)
            summary = dispatcher.dispatch(candidates)

    if summary is None:
        print_dry_run(candidates, root)
        return

    print_summary(summary)
    print_success("Cleanup complete.")

    if summary.failed:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
