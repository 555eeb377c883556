"""
HostsConfig: how a :class:`~hostsdoc.hosts.Hosts` document is sourced,
persisted and packed.
"""
from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import Optional

DEFAULT_HOSTS_PATH = "/etc/hosts"
WINDOWS_FALLBACK_HOSTS_PATH = r"C:\Windows\System32\drivers\etc\hosts"

# The Windows resolver silently ignores hostnames past roughly nine per line.
DEFAULT_MAX_HOSTS_PER_LINE_WINDOWS = 9


def is_windows(platform: str) -> bool:
    return platform.startswith("win")


def default_hosts_path(platform: Optional[str] = None) -> str:
    """Platform hosts file: ``/etc/hosts``, or the one under ``%SystemRoot%``."""
    platform = platform or sys.platform
    if not is_windows(platform):
        return DEFAULT_HOSTS_PATH
    system_root = os.environ.get("SystemRoot", "")
    if system_root:
        return "\\".join([system_root.rstrip("\\"), "System32", "drivers", "etc", "hosts"])
    return WINDOWS_FALLBACK_HOSTS_PATH


def effective_max_hosts_per_line(configured: int, platform: Optional[str] = None) -> int:
    """
    Resolve the packing cap.  ``0`` in the result means unlimited.

    configured > 0  → explicit cap
    configured < 0  → unlimited
    configured == 0 → auto-detect (9 on Windows, unlimited elsewhere)
    """
    if configured > 0:
        return configured
    if configured < 0:
        return 0
    if is_windows(platform or sys.platform):
        return DEFAULT_MAX_HOSTS_PER_LINE_WINDOWS
    return 0


@dataclass(slots=True)
class HostsConfig:
    """
    Attributes:
        read_file_path:     File to parse.  Defaults to the platform hosts file.
        write_file_path:    File written by ``save()``.  Defaults to the read path.
        raw_text:           In-memory source.  When set, the paths are ignored
                            and the document can only be rendered, never saved.
        max_hosts_per_line: Packing cap (0 = auto, -1 = unlimited, >0 = cap).
        auto_flush:         Flush the OS DNS cache after every successful save.
        platform:           ``sys.platform``-style name used for the default
                            path, the auto packing cap and the flush command.
    """
    read_file_path: str = ""
    write_file_path: str = ""
    raw_text: Optional[str] = None
    max_hosts_per_line: int = 0
    auto_flush: bool = False
    platform: str = field(default_factory=lambda: sys.platform)

    @property
    def is_raw_text(self) -> bool:
        return self.raw_text is not None

    def resolved(self) -> HostsConfig:
        """Return a copy with default read / write paths filled in."""
        if self.is_raw_text:
            return HostsConfig(
                raw_text=self.raw_text,
                max_hosts_per_line=self.max_hosts_per_line,
                auto_flush=self.auto_flush,
                platform=self.platform,
            )
        read_path = self.read_file_path or default_hosts_path(self.platform)
        return HostsConfig(
            read_file_path=read_path,
            write_file_path=self.write_file_path or read_path,
            max_hosts_per_line=self.max_hosts_per_line,
            auto_flush=self.auto_flush,
            platform=self.platform,
        )
