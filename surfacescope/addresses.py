"""Parsing of IP address lists and ranges used to define network scope."""

from __future__ import annotations

import ipaddress
from collections.abc import Iterable

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


def _parse_ip(text: str) -> IPAddress | None:
    if "%" in text:
        return None
    try:
        return ipaddress.ip_address(text)
    except ValueError:
        return None


def range_hosts(start: IPAddress, end: IPAddress) -> list[IPAddress]:
    """Return every address from start to end inclusive, or nothing if the range is invalid."""
    if start.version != end.version or int(start) > int(end):
        return []
    cls = type(start)
    return [cls(value) for value in range(int(start), int(end) + 1)]


def parse_range(text: str) -> list[IPAddress]:
    """Parse a range such as ``192.168.1.1-192.168.1.9`` or ``192.168.1.1-9``."""
    parts = text.split("-")
    if len(parts) < 2:
        raise ValueError(f"{text} is not a valid IP range")

    start = _parse_ip(parts[0])
    end = _parse_ip(parts[1])
    if end is None and start is not None:
        try:
            last = int(parts[1])
        except ValueError:
            pass
        else:
            end = type(start)((int(start) & ~0xFF) | (last & 0xFF))

    if start is None or end is None:
        raise ValueError(f"{text} is not a valid IP range")

    hosts = range_hosts(start, end)
    if not hosts:
        raise ValueError(f"{text} is not a valid IP range")
    return hosts


def parse_ips(text: str) -> list[IPAddress]:
    """Parse comma separated addresses and ranges into a list of addresses."""
    if text == "":
        raise ValueError("IP address parsing failed")

    addresses: list[IPAddress] = []
    for item in text.split(","):
        try:
            addresses.extend(parse_range(item))
            continue
        except ValueError:
            pass
        addr = _parse_ip(item)
        if addr is None:
            raise ValueError(f"{item} is not a valid IP address or range")
        addresses.append(addr)
    return addresses


def format_ips(ips: Iterable[IPAddress] | None) -> str:
    """Join the addresses with commas."""
    if ips is None:
        return ""
    return ",".join(str(ip) for ip in ips)