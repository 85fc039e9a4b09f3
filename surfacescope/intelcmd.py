"""Settings for the intelligence collection command."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from surfacescope.addresses import IPAddress
from surfacescope.config import Config, ConfigError, IPNetwork
from surfacescope.wordlist import get_list_from_file


def _insert_many(target: list[str], items: Iterable[str]) -> None:
    seen = set(target)
    for item in items:
        if item not in seen:
            seen.add(item)
            target.append(item)


def _read_list(path: str, what: str) -> list[str]:
    try:
        return get_list_from_file(path)
    except (OSError, ValueError) as exc:
        raise ConfigError(f"failed to parse the {what} file: {exc}") from exc


@dataclass
class IntelArgs:
    """Command-line arguments of the intelligence collection command."""

    addresses: list[IPAddress] = field(default_factory=list)
    asns: list[int] = field(default_factory=list)
    cidrs: list[IPNetwork] = field(default_factory=list)
    organization_name: str = ""
    domains: list[str] = field(default_factory=list)
    excluded: list[str] = field(default_factory=list)
    included: list[str] = field(default_factory=list)
    max_dns_queries: int = 0
    ports: list[int] = field(default_factory=list)
    resolvers: list[str] = field(default_factory=list)
    timeout: int = 0
    active: bool = False
    demo_mode: bool = False
    ips: bool = False
    ipv4: bool = False
    ipv6: bool = False
    list_sources: bool = False
    reverse_whois: bool = False
    sources: bool = False
    verbose: bool = False
    config_file: str = ""
    directory: str = ""
    domain_files: list[str] = field(default_factory=list)
    excluded_file: str = ""
    included_file: str = ""
    log_file: str = ""
    resolver_files: list[str] = field(default_factory=list)
    term_out: str = ""

    def override_config(self, conf: Config) -> None:
        """Apply these arguments on top of the configuration."""
        if self.active:
            conf.active = True
        if self.addresses:
            conf.addresses = list(self.addresses)
        if self.asns:
            conf.asns = list(self.asns)
        if self.cidrs:
            conf.cidrs = list(self.cidrs)
        if self.ports:
            conf.ports = list(self.ports)
        if self.directory:
            conf.dir = self.directory
        if self.verbose:
            conf.verbose = True
        if self.resolvers:
            conf.set_resolvers(*self.resolvers)
        if self.max_dns_queries > 0:
            conf.max_dns_queries = self.max_dns_queries

        if self.included:
            conf.source_filter.include = True
            conf.source_filter.sources = list(self.included)
        elif self.excluded:
            conf.source_filter.include = False
            conf.source_filter.sources = list(self.excluded)

        conf.add_domains(*self.domains)


def process_intel_input_files(args: IntelArgs) -> None:
    """Load the names listed in the files given on the command line into args."""
    if args.excluded_file:
        _insert_many(args.excluded, _read_list(args.excluded_file, "exclude"))
    if args.included_file:
        _insert_many(args.included, _read_list(args.included_file, "include"))
    for path in args.domain_files:
        _insert_many(args.domains, _read_list(path, "domain names"))
    for path in args.resolver_files:
        _insert_many(args.resolvers, _read_list(path, "resolver"))