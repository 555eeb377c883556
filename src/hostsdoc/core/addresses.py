"""
IP address helpers shared by the engine and the validator.

IPv4-mapped IPv6 addresses (``::ffff:a.b.c.d``) are treated as IPv4
everywhere: family detection, loopback checks and CIDR membership.
"""
from __future__ import annotations

import ipaddress
from enum import Enum
from typing import Optional, Union

from hostsdoc.core.errors import InvalidCIDRError

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]


class IPFamily(Enum):
    V4 = 4
    V6 = 6


def parse_ip(text: str) -> Optional[IPAddress]:
    """Parse an IP literal.  Returns ``None`` if *text* is not one."""
    try:
        ip = ipaddress.ip_address(text.strip())
    except ValueError:
        return None
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        return ip.ipv4_mapped
    return ip


def ip_family(text: str) -> Optional[IPFamily]:
    ip = parse_ip(text)
    if ip is None:
        return None
    return IPFamily.V4 if ip.version == 4 else IPFamily.V6


def is_localhost(address: str) -> bool:
    """True for 127.0.0.0/8 and ``::1``."""
    ip = parse_ip(address)
    return ip is not None and ip.is_loopback


def parse_cidr(cidr: str) -> IPNetwork:
    """
    Parse ``address/prefix`` notation.

    Host bits may be set (``10.0.0.7/24`` means ``10.0.0.0/24``), but the
    prefix is mandatory.  Raises :class:`InvalidCIDRError`.
    """
    text = cidr.strip()
    if "/" not in text:
        raise InvalidCIDRError(cidr, "missing prefix length")
    try:
        network = ipaddress.ip_network(text, strict=False)
    except ValueError as exc:
        raise InvalidCIDRError(cidr, str(exc)) from exc
    if isinstance(network, ipaddress.IPv6Network) and network.network_address.ipv4_mapped is not None \
            and network.prefixlen >= 96:
        # ::ffff:a.b.c.d/n addresses are matched in their IPv4 form
        mapped = network.network_address.ipv4_mapped
        network = ipaddress.ip_network(f"{mapped}/{network.prefixlen - 96}", strict=False)
    return network


def address_in_network(address: str, network: IPNetwork) -> bool:
    """True if *address* parses and falls inside *network*."""
    ip = parse_ip(address)
    if ip is None or ip.version != network.version:
        return False
    return ip in network
