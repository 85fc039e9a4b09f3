import ipaddress
from datetime import datetime, timezone

import pytest

from surfacescope.track import (
    Output,
    compare_addresses,
    diff_enum_output,
    line_of_addresses,
    parse_since,
    scoped_output,
)


def ip(text):
    return ipaddress.ip_address(text)


def test_line_of_addresses_joins_with_commas():
    addrs = [ip("192.0.2.1"), ip("2001:db8::1")]
    assert line_of_addresses(addrs) == "192.0.2.1,2001:db8::1"


def test_line_of_addresses_empty():
    assert line_of_addresses([]) == ""


def test_compare_addresses_subset_is_true():
    a = [ip("192.0.2.1")]
    b = [ip("192.0.2.2"), ip("192.0.2.1")]
    assert compare_addresses(a, b) is True
    assert compare_addresses(b, a) is False


def test_compare_addresses_empty_first_is_true():
    assert compare_addresses([], [ip("192.0.2.1")]) is True


def test_diff_found_and_removed():
    older = [Output(name="old.example.com", addresses=[ip("192.0.2.1")])]
    newer = [Output(name="new.example.com", addresses=[ip("192.0.2.2")])]
    diff = diff_enum_output(older, newer)
    assert diff == [
        "Found: new.example.com 192.0.2.2",
        "Removed: old.example.com 192.0.2.1",
    ]


def test_diff_moved():
    older = [Output(name="www.example.com", addresses=[ip("192.0.2.1")])]
    newer = [Output(name="www.example.com", addresses=[ip("192.0.2.2")])]
    diff = diff_enum_output(older, newer)
    assert diff == ["Moved: www.example.com\n\t from \t192.0.2.1\n\t to \t192.0.2.2"]


def test_diff_identical_is_empty():
    outs = [Output(name="www.example.com", addresses=[ip("192.0.2.1")])]
    assert diff_enum_output(outs, list(outs)) == []


def test_diff_against_nothing_reports_everything_found():
    newer = [Output(name=f"h{i}.example.com") for i in range(3)]
    diff = diff_enum_output([], newer)
    assert len(diff) == 3
    assert all(line.startswith("Found: ") for line in diff)


def test_scoped_output_filters_by_domain():
    outs = [
        Output(name="www.example.com"),
        Output(name="example.com"),
        Output(name="www.example.org"),
        Output(name="badexample.com"),
    ]
    kept = scoped_output(outs, ["example.com"])
    assert [o.name for o in kept] == ["www.example.com", "example.com"]


def test_scoped_output_without_domains_keeps_all():
    outs = [Output(name="a.example.com"), Output(name="b.example.org")]
    assert scoped_output(outs, []) == outs


def test_parse_since_utc():
    assert parse_since("01/02 15:04:05 2006 UTC") == datetime(
        2006, 1, 2, 15, 4, 5, tzinfo=timezone.utc
    )


def test_parse_since_named_zone_keeps_name():
    parsed = parse_since("01/02 15:04:05 2006 MST")
    assert parsed.tzname() == "MST"
    assert parsed.replace(tzinfo=None) == datetime(2006, 1, 2, 15, 4, 5)


@pytest.mark.parametrize(
    "text",
    ["", "2006-01-02 15:04:05", "01/02 15:04:05 2006", "13/02 15:04:05 2006 UTC"],
)
def test_parse_since_rejects_bad_format(text):
    with pytest.raises(ValueError):
        parse_since(text)