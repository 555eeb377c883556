from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class ValidationResult:
    """
    Outcome of validating user-supplied hosts input (addresses, CIDRs,
    hostnames) before it reaches the engine.

    Errors block the operation; warnings are informational (e.g. a
    hostname that will be duplicated across loopback addresses).
    """
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def __bool__(self) -> bool:
        return self.is_valid
