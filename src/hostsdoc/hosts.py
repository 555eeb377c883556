"""
Hosts: the in-memory hosts document and its mutation engine.

The document is the **single in-memory representation** of a hosts file.
It is sourced either from a file (optionally written to a different file)
or from a raw string that can be rendered but never persisted.

Every public method takes the document lock for its whole duration,
including the render + write of ``save()``, so concurrent callers never
observe a half-applied mutation.  Snapshots handed out by :meth:`lines`
are deep copies.

Mutation rules:

- ``add_host`` ignores invalid IP literals (returns ``False``), moves a
  hostname away from other non-loopback addresses of the same IP family,
  and packs hostnames onto existing (address, comment) lines up to the
  effective ``max_hosts_per_line``.
- Lines that lose their last hostname are deleted.
- New lines are only ever appended at the end.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import NamedTuple, Optional

from hostsdoc.core.addresses import (
    IPFamily,
    address_in_network,
    ip_family,
    is_localhost,
    parse_cidr,
)
from hostsdoc.core.config import HostsConfig, effective_max_hosts_per_line
from hostsdoc.core.errors import RawTextModeError
from hostsdoc.core.host_line import HostLine
from hostsdoc.core.line_type import LineType
from hostsdoc.hostsfile import parser, serializer
from hostsdoc.infrastructure import hosts_io
from hostsdoc.infrastructure.flush import DnsFlusher

logger = logging.getLogger(__name__)


class HostLookup(NamedTuple):
    """Result of :meth:`Hosts.lookup`."""
    found: bool
    address: str = ""
    index: int = -1


def _normalize(value: str) -> str:
    return value.strip().lower()


class Hosts:
    """
    Thread-safe hosts document.

    Construct with a :class:`HostsConfig`, or use :meth:`from_text` /
    :meth:`from_file`.  Reading a missing or unreadable file raises the
    underlying ``OSError``.
    """

    __slots__ = ("_config", "_lines", "_lock", "_flusher")

    def __init__(
        self,
        config: Optional[HostsConfig] = None,
        *,
        flusher: Optional[DnsFlusher] = None,
    ) -> None:
        self._config: HostsConfig = (config or HostsConfig()).resolved()
        self._lock = threading.RLock()
        self._flusher: DnsFlusher = flusher or DnsFlusher(platform=self._config.platform)
        with self._lock:
            if self._config.is_raw_text:
                self._lines: list[HostLine] = parser.parse(self._config.raw_text or "")
            else:
                self._lines = hosts_io.load_lines(self._config.read_file_path)
        logger.debug("Loaded hosts document: %d lines", len(self._lines))

    @classmethod
    def from_text(cls, text: str, *, max_hosts_per_line: int = 0, **kwargs) -> Hosts:
        """Build a render-only document from an in-memory string."""
        flusher = kwargs.pop("flusher", None)
        config = HostsConfig(raw_text=text, max_hosts_per_line=max_hosts_per_line, **kwargs)
        return cls(config, flusher=flusher)

    @classmethod
    def from_file(
        cls,
        read_file_path: str,
        write_file_path: str = "",
        *,
        max_hosts_per_line: int = 0,
        **kwargs,
    ) -> Hosts:
        """Build a document backed by *read_file_path*."""
        flusher = kwargs.pop("flusher", None)
        config = HostsConfig(
            read_file_path=str(read_file_path),
            write_file_path=str(write_file_path) if write_file_path else "",
            max_hosts_per_line=max_hosts_per_line,
            **kwargs,
        )
        return cls(config, flusher=flusher)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def config(self) -> HostsConfig:
        return self._config

    @property
    def read_file_path(self) -> str:
        return self._config.read_file_path

    @property
    def write_file_path(self) -> str:
        return self._config.write_file_path

    @property
    def is_raw_text(self) -> bool:
        return self._config.is_raw_text

    @property
    def max_hosts_per_line(self) -> int:
        """Effective packing cap; ``0`` means unlimited."""
        return effective_max_hosts_per_line(
            self._config.max_hosts_per_line, self._config.platform,
        )

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)

    def lines(self) -> list[HostLine]:
        """Return a deep copy of every line; changes do not affect the document."""
        with self._lock:
            return [line.copy() for line in self._lines]

    def render(self) -> str:
        """Return the document as hosts file text."""
        with self._lock:
            return serializer.render(self._lines)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def reload(self) -> None:
        """Re-read the read path, discarding unsaved changes."""
        if self.is_raw_text:
            raise RawTextModeError("cannot call reload on a document created from raw text")
        with self._lock:
            self._lines = hosts_io.load_lines(self.read_file_path)
        logger.info("Reloaded %s (%d lines)", self.read_file_path, len(self._lines))

    def save(self) -> None:
        """Write the document to its write path (see :meth:`save_as`)."""
        self.save_as(self.write_file_path)

    def save_as(self, file_path: str) -> None:
        """
        Render and write the document to *file_path*.

        With ``auto_flush`` enabled the DNS cache is flushed afterwards; a
        flush failure raises :class:`~hostsdoc.core.errors.FlushError` but
        the file has already been written.
        """
        if self.is_raw_text:
            raise RawTextModeError(
                "cannot call save or save_as on a document created from raw text; "
                "use render() to get the content"
            )
        with self._lock:
            hosts_io.save_lines(self._lines, file_path)
        logger.info("Saved hosts file %s", file_path)
        if self._config.auto_flush:
            self._flusher.flush()

    # ------------------------------------------------------------------
    # Add / update
    # ------------------------------------------------------------------

    def add_host(self, address: str, hostname: str, comment: str = "") -> bool:
        """
        Map *hostname* to *address*.

        Returns ``True`` if the document changed.  Invalid IP literals and
        empty hostnames are ignored (``False``).  Hostname syntax is not
        checked: a name containing ``#`` or whitespace is stored as one
        token but re-parses differently once rendered.  Validate with
        :func:`hostsdoc.hostsfile.validator.is_valid_hostname` first.
        """
        with self._lock:
            return self._add_host_locked(address, hostname, comment)

    def add_host_with_comment(self, address: str, hostname: str, comment: str) -> bool:
        """Same as :meth:`add_host`; the comment selects which line groups the host."""
        return self.add_host(address, hostname, comment)

    def add_hosts(self, address: str, hostnames: Iterable[str], comment: str = "") -> bool:
        with self._lock:
            changed = False
            for hostname in hostnames:
                changed |= self._add_host_locked(address, hostname, comment)
            return changed

    def add_hosts_with_comment(self, address: str, hostnames: Iterable[str], comment: str) -> bool:
        return self.add_hosts(address, hostnames, comment)

    def update_hosts(
        self,
        old_address: str,
        new_address: str,
        hostnames: Iterable[str],
        comment: str = "",
    ) -> bool:
        """
        Move each of *hostnames* currently mapped at *old_address* to
        *new_address*.  Hostnames not found at *old_address* are skipped.
        """
        old_address = _normalize(old_address)
        with self._lock:
            if ip_family(new_address) is None:
                return False
            changed = False
            for hostname in hostnames:
                host = _normalize(hostname)
                if not self._remove_host_at_locked(host, old_address):
                    continue
                self._add_host_locked(new_address, host, comment)
                changed = True
            return changed

    def _add_host_locked(self, address_raw: str, host_raw: str, comment: str) -> bool:
        address = _normalize(address_raw)
        host = _normalize(host_raw)
        comment = " ".join(part.strip() for part in comment.strip().splitlines())

        family = ip_family(address)
        if family is None or not host:
            logger.debug("Ignoring add of %r to %r", host_raw, address_raw)
            return False

        # Move the hostname away from other addresses of the same family;
        # loopback mappings may coexist.
        changed = False
        for line in list(self._lines):
            if (
                line.is_address
                and line.address != address
                and host in line.hostnames
                and ip_family(line.address) is family
                and not is_localhost(line.address)
            ):
                self._remove_hostname_locked(line, host)
                changed = True
                logger.debug("Moved %s away from %s", host, line.address)

        if any(line.address == address and host in line.hostnames
               for line in self._lines if line.is_address):
            return changed

        cap = self.max_hosts_per_line
        for line in self._lines:
            if line.is_address and line.address == address and line.comment == comment:
                if cap <= 0 or len(line.hostnames) < cap:
                    line.hostnames.append(host)
                    return True

        self._lines.append(HostLine(
            line_type=LineType.ADDRESS,
            address=address,
            hostnames=[host],
            comment=comment,
        ))
        return True

    # ------------------------------------------------------------------
    # Remove by hostname
    # ------------------------------------------------------------------

    def remove_first_host(self, hostname: str) -> bool:
        """Remove the first occurrence of *hostname*.  Returns ``True`` if found."""
        host = _normalize(hostname)
        with self._lock:
            for line in self._lines:
                if line.is_address and host in line.hostnames:
                    self._remove_hostname_locked(line, host)
                    return True
            return False

    def remove_host(self, hostname: str) -> bool:
        """Remove every occurrence of *hostname*.  Returns ``True`` if any was found."""
        with self._lock:
            removed = False
            while self.remove_first_host(hostname):
                removed = True
            return removed

    def remove_hosts(self, hostnames: Iterable[str]) -> bool:
        with self._lock:
            removed = False
            for hostname in hostnames:
                removed |= self.remove_host(hostname)
            return removed

    # ------------------------------------------------------------------
    # Remove by address / CIDR / comment
    # ------------------------------------------------------------------

    def remove_first_address(self, address: str) -> bool:
        """Remove the first line whose address equals *address*."""
        with self._lock:
            for i, line in enumerate(self._lines):
                if line.is_address and line.address == address:
                    del self._lines[i]
                    return True
            return False

    def remove_address(self, address: str) -> bool:
        """Remove every line whose address equals *address*."""
        with self._lock:
            removed = False
            while self.remove_first_address(address):
                removed = True
            return removed

    def remove_addresses(self, addresses: Iterable[str]) -> bool:
        with self._lock:
            removed = False
            for address in addresses:
                removed |= self.remove_address(address)
            return removed

    def remove_cidrs(self, cidrs: Iterable[str]) -> bool:
        """
        Remove every line whose address falls inside any of *cidrs*.

        All ranges are parsed first; a malformed one raises
        :class:`~hostsdoc.core.errors.InvalidCIDRError` and nothing is removed.
        """
        networks = [parse_cidr(cidr) for cidr in cidrs]
        with self._lock:
            addresses: list[str] = []
            for line in self._lines:
                if not line.is_address or line.address in addresses:
                    continue
                if any(address_in_network(line.address, net) for net in networks):
                    addresses.append(line.address)
            logger.debug("CIDR removal matched %d address(es)", len(addresses))
            return self.remove_addresses(addresses)

    def remove_by_comment(self, comment: str) -> int:
        """Remove every address line tagged with *comment*.  Returns the line count."""
        comment = comment.strip()
        with self._lock:
            kept = [line for line in self._lines
                    if not (line.is_address and line.comment == comment)]
            removed = len(self._lines) - len(kept)
            self._lines = kept
            return removed

    def remove_by_comments(self, comments: Iterable[str]) -> int:
        with self._lock:
            return sum(self.remove_by_comment(comment) for comment in comments)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def lookup(self, hostname: str, family: IPFamily) -> HostLookup:
        """Find the first address line of *family* that carries *hostname*."""
        host = _normalize(hostname)
        with self._lock:
            for i, line in enumerate(self._lines):
                if not line.is_address or host not in line.hostnames:
                    continue
                if ip_family(line.address) is family:
                    return HostLookup(True, line.address, i)
            return HostLookup(False)

    def list_hosts_by_address(self, address: str) -> list[str]:
        address = _normalize(address)
        with self._lock:
            return [host for line in self._lines
                    if line.is_address and line.address == address
                    for host in line.hostnames]

    def list_addresses_by_host(self, hostname: str, exact: bool = False) -> list[tuple[str, str]]:
        """
        Return ``(address, hostname)`` pairs for *hostname*.

        Unless *exact*, hostnames that merely contain *hostname* match too.
        """
        query = _normalize(hostname)
        with self._lock:
            return [(line.address, host) for line in self._lines if line.is_address
                    for host in line.hostnames
                    if host == query or (not exact and query in host)]

    def list_hosts_by_cidr(self, cidr: str) -> list[tuple[str, str]]:
        """Return ``(address, hostname)`` pairs inside *cidr*; ``[]`` if it is malformed."""
        try:
            network = parse_cidr(cidr)
        except ValueError:
            return []
        with self._lock:
            return [(line.address, host) for line in self._lines
                    if line.is_address and address_in_network(line.address, network)
                    for host in line.hostnames]

    def list_hosts_by_comment(self, comment: str) -> list[str]:
        comment = comment.strip()
        with self._lock:
            return [host for line in self._lines
                    if line.is_address and line.comment == comment
                    for host in line.hostnames]

    def hostname_addresses(self) -> dict[str, list[str]]:
        """``hostname -> [addresses]`` view of every address line."""
        with self._lock:
            mapping: dict[str, list[str]] = {}
            for line in self._lines:
                if not line.is_address:
                    continue
                for host in line.hostnames:
                    mapping.setdefault(host, []).append(line.address)
            return mapping

    # ------------------------------------------------------------------
    # Internals (lock must be held)
    # ------------------------------------------------------------------

    def _remove_hostname_locked(self, line: HostLine, host: str) -> None:
        line.hostnames.remove(host)
        if not line.hostnames:
            # by identity: two lines may compare equal
            self._lines = [other for other in self._lines if other is not line]

    def _remove_host_at_locked(self, host: str, address: str) -> bool:
        removed = False
        for line in list(self._lines):
            if line.is_address and line.address == address and host in line.hostnames:
                self._remove_hostname_locked(line, host)
                removed = True
        return removed
