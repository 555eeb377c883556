"""
HostLine: the unit of the in-memory hosts model.

Each line of a hosts file becomes one HostLine.  Non-address lines keep
their original text in ``raw`` and are rendered back verbatim; address
lines are rendered from ``address`` / ``hostnames`` / ``comment``.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from hostsdoc.core.line_type import LineType


@dataclass(slots=True)
class HostLine:
    """
    One line of a hosts file.

    Attributes:
        original_index: 0-based position in the text the line was parsed
                        from.  ``-1`` for lines created by the engine.
        line_type:      Classification (comment / empty / address / unknown).
        raw:            Original text, used verbatim for non-address lines.
        address:        Lowercased textual IP.  Empty for non-address lines.
        hostnames:      Lowercased hostnames in file order.  Never empty on
                        an address line that is still part of a document.
        comment:        Trimmed inline comment.  ``""`` means no comment.
    """
    original_index: int = -1
    line_type: LineType = LineType.UNKNOWN
    raw: str = ""
    address: str = ""
    hostnames: list[str] = field(default_factory=list)
    comment: str = ""

    @property
    def is_address(self) -> bool:
        return self.line_type is LineType.ADDRESS

    def copy(self) -> HostLine:
        """Return an independent copy (the hostname list is not shared)."""
        return HostLine(
            original_index=self.original_index,
            line_type=self.line_type,
            raw=self.raw,
            address=self.address,
            hostnames=list(self.hostnames),
            comment=self.comment,
        )
