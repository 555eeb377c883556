from hostsdoc.core.line_type import LineType
from hostsdoc.core.host_line import HostLine
from hostsdoc.core.validation_result import ValidationResult
from hostsdoc.core.config import HostsConfig, DEFAULT_MAX_HOSTS_PER_LINE_WINDOWS
from hostsdoc.core.addresses import IPFamily, ip_family, is_localhost, parse_cidr, parse_ip
from hostsdoc.core.errors import (
    HostsError,
    InvalidCIDRError,
    RawTextModeError,
    NoResolverError,
    FlushError,
)

__all__ = [
    "LineType",
    "HostLine",
    "ValidationResult",
    "HostsConfig",
    "DEFAULT_MAX_HOSTS_PER_LINE_WINDOWS",
    "IPFamily",
    "ip_family",
    "is_localhost",
    "parse_cidr",
    "parse_ip",
    "HostsError",
    "InvalidCIDRError",
    "RawTextModeError",
    "NoResolverError",
    "FlushError",
]
