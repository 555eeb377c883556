"""
User-input validation for hosts entries.

Used by:
- the CLI (argument checks before any engine call)
- the HTTP API (422 responses)

The engine itself never rejects a hostname; everything here happens
before a request reaches it.
"""
from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from typing import Optional

from hostsdoc.core.addresses import is_localhost, parse_cidr, parse_ip
from hostsdoc.core.errors import InvalidCIDRError
from hostsdoc.core.validation_result import ValidationResult

# Underscores are allowed for service records; no leading, trailing or
# consecutive dots.
_HOSTNAME_RE = re.compile(r"[A-Za-z0-9_-]+(\.[A-Za-z0-9_-]+)*")


def is_valid_ip(text: str) -> bool:
    return parse_ip(text) is not None


def is_valid_cidr(text: str) -> bool:
    try:
        parse_cidr(text)
    except InvalidCIDRError:
        return False
    return True


def is_valid_hostname(text: str) -> bool:
    return _HOSTNAME_RE.fullmatch(text) is not None


def first_invalid(values: Iterable[str], check: Callable[[str], bool]) -> Optional[str]:
    """Return the first value that fails *check*, or ``None``."""
    for value in values:
        if not check(value):
            return value
    return None


def validate_entry(
    address: str,
    hostnames: Iterable[str],
    existing: Optional[dict[str, list[str]]] = None,
) -> ValidationResult:
    """
    Validate an address plus the hostnames to map to it.

    Args:
        address:   IP literal the hostnames will point at.
        hostnames: Hostnames to add.
        existing:  Optional ``hostname -> [addresses]`` view of the current
                   document.  When given, a warning is added for hostnames
                   that will stay mapped at another loopback address.
    """
    errors: list[str] = []
    warnings: list[str] = []
    names = list(hostnames)

    if not is_valid_ip(address):
        errors.append(f'"{address}" is not a valid ipv4 or ipv6 address')

    if not names:
        errors.append("At least one hostname is required.")

    for name in names:
        if not is_valid_hostname(name):
            errors.append(f'"{name}" is not a valid hostname')

    if errors or existing is None:
        return ValidationResult(errors=errors, warnings=warnings)

    for name in names:
        others = [a for a in existing.get(name.lower(), []) if a != address.lower()]
        kept = [a for a in others if is_localhost(a)]
        if kept:
            warnings.append(
                f'"{name}" stays mapped at loopback address(es) {", ".join(kept)}'
            )

    return ValidationResult(errors=errors, warnings=warnings)
