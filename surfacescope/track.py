"""Differences between the findings of enumerations, for tracking changes over time."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from surfacescope.addresses import IPAddress
from surfacescope.catalog import domain_name_in_scope

TIME_FORMAT = "01/02 15:04:05 2006 MST"

_DATE_PART = "%m/%d %H:%M:%S %Y"
_ZONE = re.compile(r"[A-Z][A-Za-z]{2,4}")


@dataclass
class Output:
    """A discovered name together with its addresses and the sources that reported it."""

    name: str
    domain: str = ""
    addresses: list[IPAddress] = field(default_factory=list)
    tag: str = ""
    sources: list[str] = field(default_factory=list)


def line_of_addresses(addrs: Iterable[IPAddress]) -> str:
    """Join the addresses with commas."""
    return ",".join(str(addr) for addr in addrs)


def compare_addresses(addr1: Iterable[IPAddress], addr2: Iterable[IPAddress]) -> bool:
    """True if every address in addr1 also appears in addr2."""
    others = list(addr2)
    return all(addr in others for addr in addr1)


def diff_enum_output(older: Iterable[Output], newer: Iterable[Output]) -> list[str]:
    """Describe the names found, moved and removed between two sets of findings."""
    oldmap = {o.name: o for o in older}
    newmap = {o.name: o for o in newer}

    diff: list[str] = []
    for name, out in newmap.items():
        previous = oldmap.get(name)
        if previous is None:
            diff.append(f"Found: {name} {line_of_addresses(out.addresses)}")
            continue
        if not compare_addresses(out.addresses, previous.addresses):
            diff.append(
                f"Moved: {name}\n\t from \t{line_of_addresses(previous.addresses)}"
                f"\n\t to \t{line_of_addresses(out.addresses)}"
            )

    for name, out in oldmap.items():
        if name not in newmap:
            diff.append(f"Removed: {name} {line_of_addresses(out.addresses)}")
    return diff


def scoped_output(outputs: Iterable[Output], domains: Iterable[str]) -> list[Output]:
    """Keep the findings whose names fall under the domains; all of them if none are given."""
    scope = list(domains)
    return [out for out in outputs if not scope or domain_name_in_scope(out.name, scope)]


def parse_since(text: str) -> datetime:
    """Parse a date such as ``01/02 15:04:05 2006 MST`` into an aware datetime."""
    date_part, sep, zone = text.strip().rpartition(" ")
    if not sep or not _ZONE.fullmatch(zone):
        raise ValueError(f"{text} is not in the correct format: {TIME_FORMAT}")
    try:
        parsed = datetime.strptime(date_part, _DATE_PART)
    except ValueError as exc:
        raise ValueError(f"{text} is not in the correct format: {TIME_FORMAT}") from exc

    tz = timezone.utc if zone == "UTC" else timezone(timedelta(0), zone)
    return parsed.replace(tzinfo=tz)