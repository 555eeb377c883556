"""
Base error hierarchy for hosts-file management.

All library errors inherit from ``HostsError`` so callers can catch a
single base type.  Plain I/O failures are not wrapped: they surface as
the standard ``OSError`` family.
"""
from __future__ import annotations


class HostsError(Exception):
    """Base class for all hosts-file errors."""


class InvalidCIDRError(HostsError, ValueError):
    """Raised when a removal request contains a malformed CIDR range."""

    def __init__(self, cidr: str, reason: str = "") -> None:
        self.cidr = cidr
        self.reason = reason
        message = f"invalid CIDR address: {cidr!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class RawTextModeError(HostsError):
    """Raised when save / save_as / reload is called on a raw-text document."""


class NoResolverError(HostsError):
    """No supported local DNS resolver was found on this system."""


class FlushError(HostsError):
    """A DNS cache flush failed.

    Attributes:
        platform: Platform name the flush was attempted on (``"linux"``,
                  ``"darwin"``, ``"windows"``, ...).
        command:  Command line that failed; ``""`` when none was run.
        error:    The underlying exception.
    """

    def __init__(self, platform: str, command: str, error: BaseException) -> None:
        self.platform = platform
        self.command = command
        self.error = error
        super().__init__(f"flush DNS cache on {platform} ({command}): {error}")
