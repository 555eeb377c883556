"""
HostsService: the bridge between the CLI / HTTP layers and the engine.

Wraps one :class:`~hostsdoc.hosts.Hosts` document and provides:

- JSON-friendly line and summary dicts
- mutation helpers that return an updated summary
- ``commit()``: the dry-run / save / flush policy shared by every
  mutating command

A flush failure never turns a successful save into a failure: it is
reported on the :class:`SaveResult` instead of being raised.
"""
from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

from hostsdoc.core.errors import FlushError
from hostsdoc.hosts import Hosts
from hostsdoc.hostsfile import serializer

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SaveResult:
    """Outcome of :meth:`HostsService.commit`.

    Attributes:
        saved:       ``True`` if the file was written.
        rendered:    Rendered document (always set for dry runs).
        target:      Path written to (``""`` for dry runs).
        flushed:     ``True`` if a DNS flush ran and succeeded.
        flush_error: Message of a failed flush, else ``None``.
    """
    saved: bool
    rendered: str = ""
    target: str = ""
    flushed: bool = False
    flush_error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "saved": self.saved,
            "target": self.target,
            "flushed": self.flushed,
            "flush_error": self.flush_error,
        }


class HostsService:
    """
    Facade that the CLI and the API call.  One instance per document.
    """

    def __init__(self, hosts: Hosts):
        self._hosts = hosts

    @property
    def hosts(self) -> Hosts:
        return self._hosts

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def summary(self) -> dict:
        lines = self._hosts.lines()
        counts = Counter(line.line_type.value for line in lines)
        return {
            "read_file_path": self._hosts.read_file_path,
            "write_file_path": self._hosts.write_file_path,
            "raw_text": self._hosts.is_raw_text,
            "total_lines": len(lines),
            "type_counts": dict(counts),
            "max_hosts_per_line": self._hosts.max_hosts_per_line,
        }

    def get_lines(self, *, offset: int = 0, limit: Optional[int] = None) -> list[dict]:
        """Return lines as JSON-friendly dicts.

        Args:
            offset: 0-based start position (default 0).
            limit:  Maximum number of lines to return.  ``None`` returns all.
        """
        lines = self._hosts.lines()
        window = lines[offset : offset + limit if limit is not None else None]
        return [
            {"position": offset + i, **serializer.to_json(line)}
            for i, line in enumerate(window)
        ]

    def render(self) -> str:
        return self._hosts.render()

    def list_by_addresses(self, addresses: Iterable[str]) -> list[tuple[str, str]]:
        return [(address, host) for address in addresses
                for host in self._hosts.list_hosts_by_address(address)]

    def list_by_hostnames(self, hostnames: Iterable[str], exact: bool = False) -> list[tuple[str, str]]:
        return [pair for hostname in hostnames
                for pair in self._hosts.list_addresses_by_host(hostname, exact)]

    def list_by_cidrs(self, cidrs: Iterable[str]) -> list[tuple[str, str, str]]:
        return [(cidr, address, host) for cidr in cidrs
                for address, host in self._hosts.list_hosts_by_cidr(cidr)]

    def list_by_comment(self, comment: str) -> list[str]:
        return self._hosts.list_hosts_by_comment(comment)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, address: str, hostnames: Iterable[str], comment: str = "") -> dict:
        names = list(hostnames)
        changed = self._hosts.add_hosts(address, names, comment)
        logger.info("Add %s -> %s (comment=%r, changed=%s)", names, address, comment, changed)
        return self._mutation_response(changed)

    def update(self, old_address: str, new_address: str,
               hostnames: Iterable[str], comment: str = "") -> dict:
        names = list(hostnames)
        changed = self._hosts.update_hosts(old_address, new_address, names, comment)
        logger.info("Update %s: %s -> %s (changed=%s)", names, old_address, new_address, changed)
        return self._mutation_response(changed)

    def remove_hosts(self, hostnames: Iterable[str]) -> dict:
        names = list(hostnames)
        changed = self._hosts.remove_hosts(names)
        logger.info("Remove hosts %s (changed=%s)", names, changed)
        return self._mutation_response(changed)

    def remove_addresses(self, addresses: Iterable[str]) -> dict:
        values = list(addresses)
        changed = self._hosts.remove_addresses(values)
        logger.info("Remove addresses %s (changed=%s)", values, changed)
        return self._mutation_response(changed)

    def remove_cidrs(self, cidrs: Iterable[str]) -> dict:
        values = list(cidrs)
        changed = self._hosts.remove_cidrs(values)
        logger.info("Remove CIDRs %s (changed=%s)", values, changed)
        return self._mutation_response(changed)

    def remove_by_comments(self, comments: Iterable[str]) -> dict:
        values = list(comments)
        removed = self._hosts.remove_by_comments(values)
        logger.info("Remove by comments %s (%d lines)", values, removed)
        return self._mutation_response(removed > 0)

    def reload(self) -> dict:
        self._hosts.reload()
        return self.summary()

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def commit(self, *, dry_run: bool = False, file_path: Optional[str] = None) -> SaveResult:
        """
        Persist the document, or just render it when *dry_run*.

        Raises ``RawTextModeError`` for raw-text documents and ``OSError``
        when the write fails.
        """
        if dry_run:
            return SaveResult(saved=False, rendered=self._hosts.render())

        target = file_path or self._hosts.write_file_path
        flushed = False
        flush_error = None
        try:
            self._hosts.save_as(target)
            flushed = self._hosts.config.auto_flush
        except FlushError as exc:
            logger.warning("Hosts file saved but DNS cache flush failed: %s", exc)
            flush_error = str(exc)
        return SaveResult(
            saved=True,
            target=target,
            flushed=flushed,
            flush_error=flush_error,
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _mutation_response(self, changed: bool) -> dict:
        return {"changed": changed, **self.summary()}
