"""
Hosts I/O: read a hosts file into HostLines, write rendered text back.

Load flow:
    file → read_text → parser.parse → list[HostLine]

Save flow:
    list[HostLine] → serializer.render → whole-file overwrite (mode 0644)

Errors from the file system are not wrapped; callers receive the
standard ``OSError`` subclasses (``FileNotFoundError``,
``PermissionError``, ...).
"""
from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from hostsdoc.core.host_line import HostLine
from hostsdoc.hostsfile import parser, serializer

logger = logging.getLogger(__name__)

# Hosts files must stay world-readable so unprivileged resolvers can use them.
HOSTS_FILE_MODE = 0o644


# ------------------------------------------------------------------
# File helpers
# ------------------------------------------------------------------

def read_text(file_path: str | Path) -> str:
    path = Path(file_path)
    # newline="" keeps "\r\n" intact; non-UTF-8 bytes round-trip as surrogates
    with path.open("r", encoding="utf-8", errors="surrogateescape", newline="") as f:
        return f.read()


def write_text(file_path: str | Path, content: str) -> None:
    """Overwrite *file_path* with *content* in a single write."""
    path = Path(file_path)
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, HOSTS_FILE_MODE)
    with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
        f.write(content)


# ------------------------------------------------------------------
# Load / save
# ------------------------------------------------------------------

def load_lines(file_path: str | Path) -> list[HostLine]:
    """Read and parse a hosts file."""
    lines = parser.parse(read_text(file_path))
    logger.debug("Parsed %d lines from %s", len(lines), file_path)
    return lines


def save_lines(lines: Iterable[HostLine], file_path: str | Path) -> str:
    """Render *lines* and write them to *file_path*.  Returns the text."""
    content = serializer.render(lines)
    write_text(file_path, content)
    logger.debug("Wrote %d bytes to %s", len(content), file_path)
    return content
