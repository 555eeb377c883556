"""
Parser for hosts files.

Line format: <address> <hostname> [<hostname> ...] [# comment]

Parsing is total: every input string produces a list of HostLines.
Addresses and hostnames are not validated here; a malformed address
still becomes an ADDRESS line.
"""
from __future__ import annotations

import re

from hostsdoc.core.host_line import HostLine
from hostsdoc.core.line_type import LineType

COMMENT_INDICATOR = "#"

# First '#' that is not escaped with a backslash
_INLINE_COMMENT_RE = re.compile(r"(?<!\\)#")


def is_comment(text: str) -> bool:
    return text.strip().startswith(COMMENT_INDICATOR)


def is_empty(text: str) -> bool:
    return not text.strip()


def split_lines(text: str) -> list[str]:
    """
    Split file content into raw lines.

    ``\\r\\n`` is normalised to ``\\n``.  A trailing newline does not
    produce an extra empty line, so ``"a\\n"`` and ``"a"`` both yield
    ``["a"]``.
    """
    lines = text.replace("\r\n", "\n").split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def parse_line(raw: str, index: int = -1) -> HostLine:
    """Classify a single raw line (without its line terminator)."""
    trimmed = raw.strip()

    if trimmed.startswith(COMMENT_INDICATOR):
        return HostLine(original_index=index, line_type=LineType.COMMENT, raw=raw)

    if not trimmed:
        return HostLine(original_index=index, line_type=LineType.EMPTY, raw=raw)

    content, comment = trimmed, ""
    parts = _INLINE_COMMENT_RE.split(trimmed, maxsplit=1)
    if len(parts) > 1:
        content, comment = parts[0], parts[1].strip()

    fields = content.split()
    if len(fields) > 1:
        return HostLine(
            original_index=index,
            line_type=LineType.ADDRESS,
            raw=raw,
            address=fields[0].lower(),
            hostnames=[f.lower() for f in fields[1:]],
            comment=comment,
        )

    # a lone token (or a lone token plus comment) is not an entry
    return HostLine(original_index=index, line_type=LineType.UNKNOWN, raw=raw)


def parse(text: str) -> list[HostLine]:
    """Parse hosts file content into an ordered list of HostLines."""
    return [parse_line(raw, i) for i, raw in enumerate(split_lines(text))]
