"""devclean - remove unwanted build and dependency folders from a tree.

Scans a directory tree for folders named in a denylist and sends them
to the trash, falling back to permanent deletion.
"""

__version__ = "0.1.0"
