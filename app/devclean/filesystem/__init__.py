"""Filesystem scanning and deletion module.

This module provides denylist loading, the tree scanner that collects
matching directories, and the parallel deletion dispatcher.
"""

from devclean.filesystem.denylist import DenylistReadError, load_denylist, parse_denylist
from devclean.filesystem.dispatcher import DeletionDispatcher
from devclean.filesystem.models import (
    CleanOptions,
    DeletionOutcome,
    DeletionResult,
    DispatchSummary,
)
from devclean.filesystem.scanner import TreeScanner

__all__ = [
    "CleanOptions",
    "DeletionDispatcher",
    "DeletionOutcome",
    "DeletionResult",
    "DenylistReadError",
    "DispatchSummary",
    "TreeScanner",
    "load_denylist",
    "parse_denylist",
]
