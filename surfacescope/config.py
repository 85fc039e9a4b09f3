"""Enumeration configuration: scope, resolvers, data sources and databases."""

from __future__ import annotations

import ipaddress
import logging
import os
import re
import sys
import threading
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from surfacescope.addresses import IPAddress
from surfacescope.datasources import DataSourceConfig
from surfacescope.wordlist import expand_mask_wordlist, read_word_list

OUTPUT_DIR_NAME = "amass"
DEFAULT_CONFIG_FILE = "config.ini"
CONFIG_ENVIRON_VAR = "AMASS_CONFIG"
SYSTEM_CONFIG_DIR = "/etc"

DEFAULT_QUERIES_PER_PUBLIC_RESOLVER = 5
DEFAULT_QUERIES_PER_BASELINE_RESOLVER = 10

DEFAULT_BASELINE_RESOLVERS = [
    "8.8.8.8",
    "1.1.1.1",
    "9.9.9.9",
    "208.67.222.222",
    "84.200.69.80",
    "64.6.64.6",
    "8.26.56.26",
    "205.171.3.65",
    "134.195.4.2",
    "185.228.168.9",
    "76.76.19.19",
    "37.235.1.177",
    "77.88.8.1",
    "94.140.14.140",
    "38.132.106.139",
    "74.82.42.42",
    "76.76.2.0",
]

_DEFAULT_RESOURCES = Path(__file__).with_name("resources")
_SUBDOMAIN_LABELS = r"(([a-zA-Z0-9]|[_a-zA-Z0-9][_a-zA-Z0-9-]{0,61}[a-zA-Z0-9])[.])+"

IPNetwork = ipaddress.IPv4Network | ipaddress.IPv6Network


class ConfigError(Exception):
    """Raised when the configuration is inconsistent or incomplete."""


class Updater(Protocol):
    def override_config(self, conf: Config) -> None: ...


@dataclass
class Database:
    """Values required for connecting with a graph database."""

    system: str = ""
    primary: bool = False
    url: str = ""
    username: str = ""
    password: str = ""
    db_name: str = ""
    options: str = ""


@dataclass
class SourceFilter:
    """Data sources to include (include=True) or exclude (include=False)."""

    include: bool = False
    sources: list[str] = field(default_factory=list)


def _user_config_dir() -> str:
    if sys.platform.startswith("win"):
        return os.environ.get("AppData", "")
    if sys.platform == "darwin":
        home = os.environ.get("HOME", "")
        return os.path.join(home, "Library", "Application Support") if home else ""
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg:
        return xdg
    home = os.environ.get("HOME", "")
    return os.path.join(home, ".config") if home else ""


def output_directory(directory: str | None = None) -> str:
    """Return the output directory: the one given, or one under the user's config directory."""
    if directory:
        return directory
    base = _user_config_dir()
    if base:
        return os.path.join(base, OUTPUT_DIR_NAME)
    return ""


def subdomain_regex(domain: str) -> re.Pattern[str]:
    """Return a pattern matching names that are subdomains of the domain."""
    return re.compile(_SUBDOMAIN_LABELS + re.escape(domain))


def has_path_suffix(path: str, suffix: str) -> bool:
    """True if path equals suffix or ends with it on a label boundary."""
    if not path.endswith(suffix):
        return False
    plen, slen = len(path), len(suffix)
    return plen == slen or path[plen - slen - 1] == "."


def _dedup(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


@dataclass
class Config:
    """Settings and options for an enumeration."""

    uuid: uuid.UUID = field(default_factory=uuid.uuid4)
    log: logging.Logger = field(default_factory=lambda: logging.getLogger("surfacescope"))
    dir: str = ""
    scripts_directory: str = ""
    resources_directory: str | None = None
    graph_dbs: list[Database] = field(default_factory=list)
    max_dns_queries: int = 0
    provided_names: list[str] = field(default_factory=list)
    addresses: list[IPAddress] = field(default_factory=list)
    cidrs: list[IPNetwork] = field(default_factory=list)
    asns: list[int] = field(default_factory=list)
    ports: list[int] = field(default_factory=lambda: [80, 443])
    wordlist: list[str] = field(default_factory=list)
    brute_forcing: bool = False
    recursive: bool = True
    min_for_recursive: int = 1
    max_depth: int = 0
    alterations: bool = False
    flip_words: bool = True
    flip_numbers: bool = True
    add_words: bool = True
    add_numbers: bool = True
    min_for_word_flip: int = 2
    edit_distance: int = 1
    alt_wordlist: list[str] = field(default_factory=list)
    passive: bool = False
    active: bool = False
    blacklist: list[str] = field(default_factory=list)
    source_filter: SourceFilter = field(default_factory=SourceFilter)
    minimum_ttl: int = 1440
    record_types: list[str] = field(default_factory=list)
    resolvers: list[str] = field(default_factory=list)
    resolvers_qps: int = DEFAULT_QUERIES_PER_PUBLIC_RESOLVER
    trusted_resolvers: list[str] = field(default_factory=list)
    trusted_qps: int = DEFAULT_QUERIES_PER_BASELINE_RESOLVER
    verbose: bool = False
    _domains: list[str] = field(default_factory=list, repr=False)
    _regexps: dict[str, re.Pattern[str]] = field(default_factory=dict, repr=False)
    _datasrc_configs: dict[str, DataSourceConfig] = field(default_factory=dict, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)
    _blacklist_lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def update_config(self, updater: Updater) -> None:
        """Let the updater override settings of this configuration."""
        updater.override_config(self)

    def _resource_words(self, name: str) -> list[str]:
        base = Path(self.resources_directory) if self.resources_directory else _DEFAULT_RESOURCES
        path = base / name
        try:
            with open(path, encoding="utf-8", errors="replace") as handle:
                return read_word_list(handle)
        except OSError as exc:
            raise ConfigError(f"failed to load the resource file {path}: {exc}") from exc

    def check_settings(self) -> None:
        """Check the selected options and load default wordlists where needed."""
        if self.brute_forcing:
            if self.passive:
                raise ConfigError("brute forcing cannot be performed without DNS resolution")
            if not self.wordlist:
                self.wordlist = self._resource_words("namelist.txt")
        if self.passive and self.active:
            raise ConfigError("active enumeration cannot be performed without DNS resolution")
        if self.alterations and not self.alt_wordlist:
            self.alt_wordlist = self._resource_words("alterations.txt")

        self.wordlist = expand_mask_wordlist(self.wordlist)
        self.alt_wordlist = expand_mask_wordlist(self.alt_wordlist)

    def domain_regex(self, domain: str) -> re.Pattern[str] | None:
        """Return the pattern for a root domain in the configuration, or None."""
        with self._lock:
            return self._regexps.get(domain)

    def add_domains(self, *args: str) -> None:
        """Add each of the root domain names."""
        for domain in args:
            self.add_domain(domain)

    def add_domain(self, domain: str) -> None:
        """Add a root domain name having at least two non-empty labels."""
        with self._lock:
            d = domain.strip()
            if not d:
                return
            labels = d.split(".")
            if len(labels) < 2 or any(label == "" for label in labels):
                return
            pattern = subdomain_regex(d)
            self._regexps[d] = pattern
            if pattern is not None:
                self._domains.append(d)
            self._domains = _dedup(self._domains)

    def domains(self) -> list[str]:
        """Return the root domain names in the configuration."""
        with self._lock:
            return list(self._domains)

    def is_domain_in_scope(self, name: str) -> bool:
        """True if the name falls under one of the root domains."""
        return self.which_domain(name) != ""

    def which_domain(self, name: str) -> str:
        """Return the root domain the name falls under, or an empty string."""
        n = name.strip().lower()
        for d in self.domains():
            if has_path_suffix(n, d):
                return d
        return ""

    def is_address_in_scope(self, addr: str) -> bool:
        """True if the address matches the network scope, or no scope has been set."""
        try:
            ip = ipaddress.ip_address(addr)
        except ValueError:
            return False
        if not self.addresses and not self.cidrs:
            return True
        if any(str(a) == str(ip) for a in self.addresses):
            return True
        return any(ip in cidr for cidr in self.cidrs)

    def blacklist_subdomain(self, name: str) -> None:
        """Add a subdomain name to the blacklist."""
        with self._blacklist_lock:
            self.blacklist = _dedup([*self.blacklist, name.strip()])

    def blacklisted(self, name: str) -> bool:
        """True if the name falls under a blacklisted subdomain."""
        with self._blacklist_lock:
            n = name.strip().lower()
            return any(has_path_suffix(n, bl) for bl in self.blacklist)

    def set_resolvers(self, *args: str) -> None:
        """Replace the untrusted resolvers with the ones given."""
        self.resolvers = []
        self.add_resolvers(*args)

    def add_resolvers(self, *args: str) -> None:
        """Add untrusted resolvers and recalculate the query rate."""
        for resolver in args:
            self.add_resolver(resolver)
        self.calc_max_qps()

    def add_resolver(self, resolver: str) -> None:
        """Add one untrusted resolver, ignoring blank entries."""
        with self._lock:
            if not resolver.strip():
                return
            self.resolvers = _dedup([*self.resolvers, resolver])

    def set_trusted_resolvers(self, *args: str) -> None:
        """Replace the resolver list with the ones given."""
        self.resolvers = []
        self.add_resolvers(*args)

    def add_trusted_resolvers(self, *args: str) -> None:
        """Add trusted resolvers and recalculate the query rate."""
        for resolver in args:
            self.add_trusted_resolver(resolver)
        self.calc_max_qps()

    def add_trusted_resolver(self, resolver: str) -> None:
        """Add one trusted resolver, ignoring blank entries."""
        with self._lock:
            if not resolver.strip():
                return
            self.trusted_resolvers = _dedup([*self.trusted_resolvers, resolver])

    def calc_max_qps(self) -> None:
        """Recompute max_dns_queries from the resolver counts and rates."""
        self.max_dns_queries = (
            len(self.resolvers) * self.resolvers_qps
            + len(self.trusted_resolvers) * self.trusted_qps
        )

    def get_data_source_config(self, source: str) -> DataSourceConfig | None:
        """Return the configuration for a data source, creating it when needed."""
        with self._lock:
            key = source.strip().lower()
            if not key:
                return None
            if key not in self._datasrc_configs:
                self._datasrc_configs[key] = DataSourceConfig(name=key)
            return self._datasrc_configs[key]

    def local_database_settings(self, dbs: list[Database]) -> Database:
        """Return the local database, primary unless another database is."""
        return Database(
            system="local",
            primary=not any(db.primary for db in dbs),
            url=output_directory(self.dir),
        )

    def _default_scripts(self) -> list[str]:
        base = Path(self.resources_directory) if self.resources_directory else _DEFAULT_RESOURCES
        return _read_scripts(str(base / "scripts"))

    def acquire_scripts(self) -> list[str]:
        """Return the default data source scripts and those supplied by the user."""
        scripts = self._default_scripts()
        directory = output_directory(self.dir)
        if not directory:
            return scripts
        if not os.path.isdir(directory):
            raise ConfigError("the output directory does not exist or is not a directory")

        paths = [os.path.join(directory, "scripts")]
        if self.scripts_directory:
            paths.append(self.scripts_directory)
        for path in paths:
            scripts.extend(_read_scripts(path))
        return scripts


def _read_scripts(root: str) -> list[str]:
    scripts: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for filename in sorted(filenames):
            if os.path.splitext(filename)[1] != ".ads":
                continue
            try:
                with open(os.path.join(dirpath, filename), encoding="utf-8") as handle:
                    scripts.append(handle.read())
            except OSError:
                return scripts
    return scripts