"""
DNS cache flushing after a hosts file has been written.

The flush goes through an injectable :data:`CommandRunner` so tests (and
embedders) can substitute process execution.  The platform is a plain
``sys.platform``-style string; nothing here is imported per-OS.

Commands:
    linux   → ``resolvectl flush-caches`` (systemd 239+), falling back to
              ``systemd-resolve --flush-caches``.  Other local resolvers
              (dnsmasq, unbound, nscd) depend on site configuration and are
              not handled.
    darwin  → ``dscacheutil -flushcache`` then ``killall -HUP mDNSResponder``
              (the second step may fail when mDNSResponder is not running).
    windows → ``ipconfig /flushdns``
"""
from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from collections.abc import Callable, Sequence
from typing import Optional

from hostsdoc.core.config import is_windows
from hostsdoc.core.errors import FlushError, NoResolverError

logger = logging.getLogger(__name__)

CommandRunner = Callable[[Sequence[str]], None]
"""Runs a command; raises on failure (non-zero exit or missing binary)."""

Which = Callable[[str], Optional[str]]

NO_RESOLVER_MESSAGE = (
    "systemd-resolved not detected (tried resolvectl, systemd-resolve). "
    "If your system does not cache DNS locally, hosts file changes take "
    "effect immediately without flushing"
)


def run_command(argv: Sequence[str]) -> None:
    """Default runner: execute *argv* and raise ``CalledProcessError`` on failure."""
    subprocess.run(list(argv), check=True, capture_output=True)


def platform_name(platform: str) -> str:
    """Map ``sys.platform`` values to the names used in error messages."""
    if is_windows(platform):
        return "windows"
    if platform.startswith("linux"):
        return "linux"
    return platform


class DnsFlusher:
    """Flushes the operating system's DNS cache.

    Args:
        runner:   Command runner (defaults to :func:`run_command`).
        platform: ``sys.platform``-style name; defaults to the current one.
        which:    Executable lookup used on Linux (defaults to ``shutil.which``).
    """

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        platform: Optional[str] = None,
        which: Optional[Which] = None,
    ) -> None:
        self._runner: CommandRunner = runner or run_command
        self._platform = platform or sys.platform
        self._which: Which = which or shutil.which

    @property
    def platform(self) -> str:
        return platform_name(self._platform)

    def flush(self) -> None:
        """Flush the DNS cache.  Raises :class:`FlushError` on failure."""
        name = self.platform
        if name == "linux":
            self._flush_linux()
        elif name == "darwin":
            self._flush_darwin()
        elif name == "windows":
            self._run(["ipconfig", "/flushdns"])
        else:
            raise FlushError(name, "", NotImplementedError("unsupported platform"))
        logger.info("Flushed DNS cache on %s", name)

    # ------------------------------------------------------------------
    # Platforms
    # ------------------------------------------------------------------

    def _flush_linux(self) -> None:
        if self._which("resolvectl"):
            self._run(["resolvectl", "flush-caches"])
            return
        if self._which("systemd-resolve"):
            self._run(["systemd-resolve", "--flush-caches"])
            return
        raise FlushError(self.platform, "", NoResolverError(NO_RESOLVER_MESSAGE))

    def _flush_darwin(self) -> None:
        self._run(["dscacheutil", "-flushcache"])
        try:
            self._runner(["killall", "-HUP", "mDNSResponder"])
        except (OSError, subprocess.SubprocessError) as exc:
            logger.debug("mDNSResponder restart skipped: %s", exc)

    def _run(self, argv: list[str]) -> None:
        command = " ".join(argv)
        logger.debug("Running %s", command)
        try:
            self._runner(argv)
        except (OSError, subprocess.SubprocessError) as exc:
            raise FlushError(self.platform, command, exc) from exc


def flush_dns_cache(runner: Optional[CommandRunner] = None) -> None:
    """Flush the DNS cache of the current platform."""
    DnsFlusher(runner=runner).flush()
