from hostsdoc.core import (
    FlushError,
    HostLine,
    HostsConfig,
    HostsError,
    InvalidCIDRError,
    IPFamily,
    LineType,
    NoResolverError,
    RawTextModeError,
)
from hostsdoc.hosts import HostLookup, Hosts
from hostsdoc.hostsfile import parse, render

__all__ = [
    "Hosts",
    "HostLookup",
    "HostsConfig",
    "HostLine",
    "LineType",
    "IPFamily",
    "HostsError",
    "InvalidCIDRError",
    "RawTextModeError",
    "NoResolverError",
    "FlushError",
    "parse",
    "render",
]
