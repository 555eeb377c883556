"""
Serializer for hosts files.

Converts HostLines back to file text, and provides a JSON helper
(``to_json``) for the service and API layers.
"""
from __future__ import annotations

from collections.abc import Iterable

from hostsdoc.core.host_line import HostLine

# Hostnames start in column 16 for any address shorter than that.
ADDRESS_COLUMN_WIDTH = 15


def serialize(line: HostLine) -> str:
    """Serialize one HostLine (without the trailing newline)."""
    if not line.is_address:
        return line.raw

    text = f"{line.address:<{ADDRESS_COLUMN_WIDTH}} {' '.join(line.hostnames)}"
    if line.comment:
        text += f" # {line.comment}"
    return text


def render(lines: Iterable[HostLine]) -> str:
    """Render a whole document; every line is terminated by ``\\n``."""
    return "".join(serialize(line) + "\n" for line in lines)


def to_json(line: HostLine) -> dict:
    """Convert a HostLine to a JSON-safe dict (enum → string)."""
    return {
        "original_index": line.original_index,
        "line_type": line.line_type.value,
        "raw": line.raw,
        "address": line.address,
        "hostnames": list(line.hostnames),
        "comment": line.comment,
        "text": serialize(line),
    }
