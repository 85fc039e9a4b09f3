import pytest

from surfacescope.config import Config, ConfigError
from surfacescope.dnscmd import (
    DnsArgs,
    name_to_type,
    process_dns_input_files,
    type_to_name,
)

ALL_NAMES = ["CNAME", "A", "AAAA", "PTR", "NS", "MX", "TXT", "SOA", "SPF", "SRV"]


@pytest.mark.parametrize("name", ALL_NAMES)
def test_name_type_round_trip(name):
    assert type_to_name(name_to_type(name)) == name


def test_type_codes_are_distinct_and_nonzero():
    codes = [name_to_type(n) for n in ALL_NAMES]
    assert len(set(codes)) == len(codes)
    assert all(code > 0 for code in codes)


def test_pinned_type_codes():
    assert name_to_type("A") == 1
    assert name_to_type("AAAA") == 28
    assert type_to_name(5) == "CNAME"


def test_unknown_types():
    assert name_to_type("BOGUS") == 0
    assert name_to_type("a") == 0
    assert type_to_name(0) == ""


def test_override_defaults_record_type_to_a():
    conf = Config()
    DnsArgs().override_config(conf)
    assert conf.record_types == ["A"]


def test_override_moves_cname_first_and_uppercases():
    conf = Config()
    DnsArgs(record_types=["a", "mx", "cname"]).override_config(conf)
    assert conf.record_types[0] == "CNAME"
    assert sorted(conf.record_types) == ["A", "CNAME", "MX"]


def test_override_sets_scope_and_resolvers():
    conf = Config()
    args = DnsArgs(
        directory="outdir",
        names=["www.example.com"],
        blacklist=["bad.example.com"],
        resolvers=["8.8.8.8", "1.1.1.1"],
        domains=["example.com", "nolabel"],
        verbose=True,
    )
    args.override_config(conf)
    assert conf.dir == "outdir"
    assert conf.provided_names == ["www.example.com"]
    assert conf.blacklist == ["bad.example.com"]
    assert conf.verbose is True
    assert conf.resolvers == ["8.8.8.8", "1.1.1.1"]
    assert conf.max_dns_queries == 2 * conf.resolvers_qps
    assert conf.domains() == ["example.com"]


def test_override_max_dns_queries_wins():
    conf = Config()
    DnsArgs(resolvers=["8.8.8.8"], max_dns_queries=77).override_config(conf)
    assert conf.max_dns_queries == 77


def test_override_through_update_config():
    conf = Config()
    conf.update_config(DnsArgs(domains=["example.com"]))
    assert conf.is_domain_in_scope("www.example.com")


def test_process_input_files(tmp_path):
    names = tmp_path / "names.txt"
    names.write_text("www.example.com\nmail.example.com\nwww.example.com\n")
    domains = tmp_path / "domains.txt"
    domains.write_text("example.com\n")
    resolvers = tmp_path / "resolvers.txt"
    resolvers.write_text("8.8.8.8\n 1.1.1.1 \n")
    blacklist = tmp_path / "bl.txt"
    blacklist.write_text("bad.example.com\n")

    args = DnsArgs(
        names=["www.example.com"],
        name_files=[str(names)],
        domain_files=[str(domains)],
        resolver_files=[str(resolvers)],
        blacklist_file=str(blacklist),
    )
    process_dns_input_files(args)
    assert args.names == ["www.example.com", "mail.example.com"]
    assert args.domains == ["example.com"]
    assert args.resolvers == ["8.8.8.8", "1.1.1.1"]
    assert args.blacklist == ["bad.example.com"]


def test_process_input_files_missing(tmp_path):
    args = DnsArgs(domain_files=[str(tmp_path / "missing.txt")])
    with pytest.raises(ConfigError, match="domain names"):
        process_dns_input_files(args)