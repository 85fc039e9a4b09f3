from ipaddress import ip_address

import pytest

from surfacescope.addresses import format_ips, parse_ips, parse_range, range_hosts


def test_parse_range_full():
    assert parse_range("192.168.0.1-192.168.0.3") == [
        ip_address("192.168.0.1"),
        ip_address("192.168.0.2"),
        ip_address("192.168.0.3"),
    ]


def test_parse_range_short_hand():
    hosts = parse_range("192.168.0.1-4")
    assert [str(h) for h in hosts] == [
        "192.168.0.1",
        "192.168.0.2",
        "192.168.0.3",
        "192.168.0.4",
    ]


@pytest.mark.parametrize(
    "text",
    ["192.168.0.1", "192.168.0.255-192.168.0.260", "1.2.3.4-1.1.1.1"],
)
def test_parse_range_errors(text):
    with pytest.raises(ValueError):
        parse_range(text)


def test_range_hosts_reversed_is_empty():
    assert range_hosts(ip_address("10.0.0.5"), ip_address("10.0.0.1")) == []


def test_range_hosts_mixed_versions_is_empty():
    assert range_hosts(ip_address("10.0.0.1"), ip_address("::1")) == []


def test_range_hosts_single():
    assert range_hosts(ip_address("10.0.0.1"), ip_address("10.0.0.1")) == [ip_address("10.0.0.1")]


def test_format_ips():
    ips = [ip_address("192.168.0.1"), ip_address("192.168.0.2"), ip_address("192.168.0.3")]
    assert format_ips(ips) == "192.168.0.1,192.168.0.2,192.168.0.3"


def test_format_ips_empty_and_none():
    assert format_ips([]) == ""
    assert format_ips(None) == ""


def test_parse_ips_list():
    assert format_ips(parse_ips("192.168.0.1,192.168.0.2,192.168.0.3")) == (
        "192.168.0.1,192.168.0.2,192.168.0.3"
    )


@pytest.mark.parametrize("text", ["192.168.0.4-", "", "(invalid value)", "1.2.3.4-1.1.1.1"])
def test_parse_ips_errors(text):
    with pytest.raises(ValueError):
        parse_ips(text)


def test_parse_ips_ipv4_addresses():
    assert len(parse_ips("1.2.3.4,0.0.0.0,255.255.255.255")) == 3


def test_parse_ips_ipv6_addresses():
    ips = parse_ips("::,1111:2222:3333:4444:5555:6666:7777:8888,1:2:0001:deca:f000:00c0:ff:ee")
    assert len(ips) == 3
    assert ips[0] == ip_address("::")


def test_parse_ips_range():
    assert parse_ips("1.2.3.4-1.2.3.5") == [ip_address("1.2.3.4"), ip_address("1.2.3.5")]


def test_parse_ips_rejects_leading_zero_ipv4():
    with pytest.raises(ValueError):
        parse_ips("01.102.103.104")