"""Denylist loading.

A denylist is a plain text file with one folder name per line. Names
are matched exactly (case-sensitive) against directory basenames.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class DenylistReadError(Exception):
    """Raised when the denylist file cannot be opened or decoded."""


def parse_denylist(text: str) -> frozenset[str]:
    """Parse denylist text into a set of folder names.

    Lines end at "\n" only. Each line is stripped of surrounding
    whitespace, which also drops a "\r" left by CRLF endings.
    Blank lines yield the empty string, which never matches a real
    directory name.

    Args:
        text: Denylist file contents.

    Returns:
        Immutable set of folder names.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return frozenset(line.strip() for line in lines)


def load_denylist(path: Path | str) -> frozenset[str]:
    """Load a denylist file.

    Args:
        path: Path to the denylist file.

    Returns:
        Immutable set of folder names.

    Raises:
        DenylistReadError: If the file is missing, unreadable, or not UTF-8.
    """
    path = Path(path)
    try:
        text = path.read_bytes().decode("utf-8-sig")
    except FileNotFoundError as e:
        msg = f"Denylist file not found: {path}"
        raise DenylistReadError(msg) from e
    except PermissionError as e:
        msg = f"Cannot read denylist file {path}: Permission denied"
        raise DenylistReadError(msg) from e
    except UnicodeDecodeError as e:
        msg = f"Denylist file {path} is not valid UTF-8: {e}"
        raise DenylistReadError(msg) from e
    except OSError as e:
        msg = f"Cannot read denylist file {path}: {e}"
        raise DenylistReadError(msg) from e

    names = parse_denylist(text)
    logger.debug("Loaded %d folder names from %s", len(names), path)
    return names
