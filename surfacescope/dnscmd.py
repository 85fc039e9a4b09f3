"""Settings for the DNS resolution command and DNS record type names."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from surfacescope.config import Config, ConfigError
from surfacescope.wordlist import get_list_from_file

TYPE_NONE = 0

_RECORD_TYPES: dict[str, int] = {
    "CNAME": 5,
    "A": 1,
    "AAAA": 28,
    "PTR": 12,
    "NS": 2,
    "MX": 15,
    "TXT": 16,
    "SOA": 6,
    "SPF": 99,
    "SRV": 33,
}
_TYPE_NAMES: dict[int, str] = {code: name for name, code in _RECORD_TYPES.items()}


def type_to_name(qtype: int) -> str:
    """Return the mnemonic for a DNS record type code, or an empty string."""
    return _TYPE_NAMES.get(qtype, "")


def name_to_type(name: str) -> int:
    """Return the DNS record type code for a mnemonic, or zero if unknown."""
    return _RECORD_TYPES.get(name, TYPE_NONE)


def _insert_many(target: list[str], items: Iterable[str]) -> None:
    seen = set(target)
    for item in items:
        if item not in seen:
            seen.add(item)
            target.append(item)


@dataclass
class DnsArgs:
    """Command-line arguments of the DNS resolution command."""

    blacklist: list[str] = field(default_factory=list)
    domains: list[str] = field(default_factory=list)
    max_dns_queries: int = 0
    names: list[str] = field(default_factory=list)
    record_types: list[str] = field(default_factory=list)
    resolvers: list[str] = field(default_factory=list)
    timeout: int = 0
    demo_mode: bool = False
    ips: bool = False
    ipv4: bool = False
    ipv6: bool = False
    verbose: bool = False
    all_file_prefix: str = ""
    blacklist_file: str = ""
    config_file: str = ""
    directory: str = ""
    domain_files: list[str] = field(default_factory=list)
    json_output: str = ""
    log_file: str = ""
    name_files: list[str] = field(default_factory=list)
    resolver_files: list[str] = field(default_factory=list)
    term_out: str = ""

    def override_config(self, conf: Config) -> None:
        """Apply these arguments on top of the configuration."""
        if self.directory:
            conf.dir = self.directory
        if self.names:
            conf.provided_names = list(self.names)
        if self.blacklist:
            conf.blacklist = list(self.blacklist)
        if self.verbose:
            conf.verbose = True

        if self.record_types:
            types = [qtype.upper() for qtype in self.record_types]
            for i, qtype in enumerate(types):
                if qtype == "CNAME":
                    types[0], types[i] = types[i], types[0]
            conf.record_types = types
        else:
            conf.record_types = ["A"]

        if self.resolvers:
            conf.set_resolvers(*self.resolvers)
        if self.max_dns_queries > 0:
            conf.max_dns_queries = self.max_dns_queries

        conf.add_domains(*self.domains)


def _read_list(path: str, what: str) -> list[str]:
    try:
        return get_list_from_file(path)
    except (OSError, ValueError) as exc:
        raise ConfigError(f"failed to parse the {what} file: {exc}") from exc


def process_dns_input_files(args: DnsArgs) -> None:
    """Load the names listed in the files given on the command line into args."""
    if args.blacklist_file:
        _insert_many(args.blacklist, _read_list(args.blacklist_file, "blacklist"))
    for path in args.name_files:
        _insert_many(args.names, _read_list(path, "subdomain names"))
    for path in args.domain_files:
        _insert_many(args.domains, _read_list(path, "domain names"))
    for path in args.resolver_files:
        _insert_many(args.resolvers, _read_list(path, "resolver"))