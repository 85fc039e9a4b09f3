"""INI configuration files and the loading of their settings into a Config."""

from __future__ import annotations

import ipaddress
import os
import sys
from collections.abc import Callable
from os import PathLike
from pathlib import Path

from surfacescope.addresses import parse_ips
from surfacescope.config import (
    CONFIG_ENVIRON_VAR,
    DEFAULT_CONFIG_FILE,
    OUTPUT_DIR_NAME,
    SYSTEM_CONFIG_DIR,
    Config,
    ConfigError,
    Database,
    output_directory,
)
from surfacescope.datasources import Credentials
from surfacescope.wordlist import get_list_from_file

DEFAULT_SECTION = "DEFAULT"
CHILD_DELIMITER = "."

_TRUE_WORDS = frozenset({"1", "t", "true", "y", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "f", "false", "n", "no", "off"})


class IniError(ConfigError):
    """Raised when an INI file cannot be read, parsed or mapped."""


def _parse_bool(value: str) -> bool:
    word = value.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"invalid boolean value: {value!r}")


def _parse_int(value: str) -> int:
    text = value.strip()
    try:
        return int(text, 0)
    except ValueError:
        return int(text)


def _dedup(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


class IniSection:
    """A named section holding keys, each with one or more (shadowed) values."""

    def __init__(self, name: str, insensitive: bool = False) -> None:
        self.name = name
        self._insensitive = insensitive
        self._entries: dict[str, list[str]] = {}

    def __repr__(self) -> str:
        return f"IniSection({self.name!r}, keys={list(self._entries)})"

    def _key(self, key: str) -> str:
        return key.lower() if self._insensitive else key

    def _add(self, key: str, value: str) -> None:
        self._entries.setdefault(self._key(key), []).append(value)

    def has_key(self, key: str) -> bool:
        """True if the key appears in the section."""
        return self._key(key) in self._entries

    def get(self, key: str, default: str = "") -> str:
        """Return the last value given for the key, or the default."""
        values = self._entries.get(self._key(key))
        return values[-1] if values else default

    def values(self, key: str) -> list[str]:
        """Return every value given for the key, in file order."""
        return list(self._entries.get(self._key(key), []))

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Return the key's value as a boolean, or the default if missing or invalid."""
        try:
            return _parse_bool(self.get(key))
        except ValueError:
            return default

    def get_int(self, key: str, default: int = 0) -> int:
        """Return the key's value as an integer, or the default if missing or invalid."""
        try:
            return _parse_int(self.get(key))
        except ValueError:
            return default


class IniFile:
    """A parsed INI document made of sections."""

    def __init__(self, insensitive: bool = False) -> None:
        self.insensitive = insensitive
        self._sections: dict[str, IniSection] = {}
        self._ensure(DEFAULT_SECTION)

    def _name(self, name: str) -> str:
        return name.lower() if self.insensitive else name

    def _ensure(self, name: str) -> IniSection:
        key = self._name(name)
        if key not in self._sections:
            self._sections[key] = IniSection(key, self.insensitive)
        return self._sections[key]

    def has_section(self, name: str) -> bool:
        """True if the section exists."""
        return self._name(name) in self._sections

    def section(self, name: str) -> IniSection:
        """Return the named section, raising IniError if it does not exist."""
        try:
            return self._sections[self._name(name)]
        except KeyError:
            raise IniError(f'section "{name}" does not exist') from None

    def child_sections(self, name: str) -> list[IniSection]:
        """Return every section nested below the named one, in file order."""
        prefix = self._name(name) + CHILD_DELIMITER
        return [sec for key, sec in self._sections.items() if key.startswith(prefix)]


def _clean_value(raw: str) -> str:
    value = raw.strip()
    if value.startswith("`"):
        end = value.find("`", 1)
        if end > 0:
            return value[1:end]
    cuts = [pos for pos in (value.find("#"), value.find(";")) if pos >= 0]
    if cuts:
        value = value[: min(cuts)].strip()
    if (
        len(value) >= 2
        and value[0] in "'\""
        and value[-1] == value[0]
        and value[0] not in value[1:-1]
    ):
        value = value[1:-1]
    return value


def _split_key_value(line: str, number: int) -> tuple[str, str]:
    positions = [pos for pos in (line.find("="), line.find(":")) if pos >= 0]
    if not positions:
        raise IniError(f"key-value delimiter not found at line {number}: {line}")
    idx = min(positions)
    key = line[:idx].strip()
    if not key:
        raise IniError(f"empty key name at line {number}: {line}")
    return key, _clean_value(line[idx + 1 :])


def parse_ini(text: str, insensitive: bool = False) -> IniFile:
    """Parse INI text; repeated keys keep all their values."""
    ini = IniFile(insensitive)
    current = ini.section(DEFAULT_SECTION)
    for number, raw in enumerate(text.lstrip("\ufeff").splitlines(), start=1):
        line = raw.strip()
        if not line or line[0] in "#;":
            continue
        if line.startswith("["):
            end = line.find("]")
            if end < 0:
                raise IniError(f"unclosed section at line {number}: {line}")
            name = line[1:end].strip()
            if not name:
                raise IniError(f"empty section name at line {number}")
            current = ini._ensure(name)
            continue
        key, value = _split_key_value(line, number)
        current._add(key, value)
    return ini


def load_ini(path: str | PathLike[str], insensitive: bool = False) -> IniFile:
    """Read and parse the INI file at path."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise IniError(f"failed to read {path!s}: {exc}") from exc
    return parse_ini(text, insensitive)


def _load_wordlists(section: IniSection, setting: str) -> list[str]:
    words: list[str] = []
    for wordlist in section.values("wordlist_file"):
        try:
            words.extend(get_list_from_file(wordlist))
        except (OSError, ValueError) as exc:
            raise ConfigError(
                f"Unable to load the file in the {setting} wordlist_file setting: "
                f"{wordlist}: {exc}"
            ) from exc
    return words


def load_brute_force_settings(cfg: Config, ini: IniFile) -> None:
    """Apply the [bruteforce] section, if present."""
    if not ini.has_section("bruteforce"):
        return
    sec = ini.section("bruteforce")

    cfg.brute_forcing = sec.get_bool("enabled", True)
    if not cfg.brute_forcing:
        return

    cfg.recursive = sec.get_bool("recursive", True)
    cfg.min_for_recursive = sec.get_int("minimum_for_recursive", 0)
    cfg.max_depth = sec.get_int("max_depth", 0)
    if sec.has_key("wordlist_file"):
        cfg.wordlist.extend(_load_wordlists(sec, "bruteforce"))
    cfg.wordlist = _dedup(cfg.wordlist)


def load_alteration_settings(cfg: Config, ini: IniFile) -> None:
    """Apply the [alterations] section, if present."""
    if not ini.has_section("alterations"):
        return
    sec = ini.section("alterations")

    cfg.alterations = sec.get_bool("enabled", True)
    if not cfg.alterations:
        return

    cfg.flip_words = sec.get_bool("flip_words", True)
    cfg.add_words = sec.get_bool("add_words", True)
    cfg.flip_numbers = sec.get_bool("flip_numbers", True)
    cfg.add_numbers = sec.get_bool("add_numbers", True)
    cfg.min_for_word_flip = sec.get_int("minimum_for_word_flip", 2)
    cfg.edit_distance = sec.get_int("edit_distance", 1)
    if sec.has_key("wordlist_file"):
        cfg.alt_wordlist.extend(_load_wordlists(sec, "alterations"))
    cfg.alt_wordlist = _dedup(cfg.alt_wordlist)


def load_resolver_settings(cfg: Config, ini: IniFile) -> None:
    """Apply the [resolvers] section, which must then list at least one resolver."""
    if not ini.has_section("resolvers"):
        return
    cfg.resolvers = _dedup(ini.section("resolvers").values("resolver"))
    if not cfg.resolvers:
        raise ConfigError("no resolver keys were found in the resolvers section")


def _unique_int_append(values: list[int], text: str) -> None:
    try:
        number = int(text)
    except ValueError:
        return
    if number not in values:
        values.append(number)


def load_scope_settings(cfg: Config, ini: IniFile) -> None:
    """Apply the [scope] section and its domains and blacklisted children."""
    if not ini.has_section("scope"):
        return
    scope = ini.section("scope")

    for addr in scope.values("address"):
        try:
            cfg.addresses.extend(parse_ips(addr))
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
    for cidr in scope.values("cidr"):
        try:
            cfg.cidrs.append(ipaddress.ip_network(cidr, strict=False))
        except ValueError as exc:
            raise ConfigError(f"invalid CIDR address: {cidr}") from exc
    for asn in scope.values("asn"):
        _unique_int_append(cfg.asns, asn)
    for port in scope.values("port"):
        _unique_int_append(cfg.ports, port)

    if ini.has_section("scope.domains"):
        for domain in ini.section("scope.domains").values("domain"):
            cfg.add_domain(domain)
    if ini.has_section("scope.blacklisted"):
        cfg.blacklist = _dedup(ini.section("scope.blacklisted").values("subdomain"))


def _map_database(sec: IniSection, system: str) -> Database:
    primary = False
    if sec.has_key("primary"):
        primary = _parse_bool(sec.get("primary"))
    return Database(
        system=system,
        primary=primary,
        url=sec.get("url"),
        username=sec.get("username"),
        password=sec.get("password"),
        db_name=sec.get("database"),
        options=sec.get("options"),
    )


def load_database_settings(cfg: Config, ini: IniFile) -> None:
    """Append a Database for each child of the [graphdbs] section."""
    if not ini.has_section("graphdbs"):
        return
    for child in ini.child_sections("graphdbs"):
        name = child.name.split(CHILD_DELIMITER)[1]
        try:
            cfg.graph_dbs.append(_map_database(child, name))
        except ValueError:
            continue


def load_data_source_settings(cfg: Config, ini: IniFile) -> None:
    """Apply the required [data_sources] section, its TTLs and credentials."""
    sec = ini.section("data_sources")

    if sec.has_key("minimum_ttl"):
        try:
            cfg.minimum_ttl = _parse_int(sec.get("minimum_ttl"))
        except ValueError:
            pass

    for child in ini.child_sections("data_sources"):
        name = child.name.split(CHILD_DELIMITER)[1]
        if name == "disabled":
            cfg.source_filter.sources = _dedup(child.values("data_source"))
            cfg.source_filter.include = False
            continue

        dsc = cfg.get_data_source_config(name)
        if dsc is None:
            continue
        if child.has_key("ttl"):
            try:
                dsc.ttl = _parse_int(child.get("ttl"))
            except ValueError:
                continue
        if cfg.minimum_ttl > dsc.ttl:
            dsc.ttl = cfg.minimum_ttl

        for cred_sec in ini.child_sections(child.name):
            set_name = cred_sec.name.split(CHILD_DELIMITER)[2]
            dsc.add_credentials(
                Credentials(
                    name=set_name,
                    username=cred_sec.get("username"),
                    password=cred_sec.get("password"),
                    key=cred_sec.get("apikey"),
                    secret=cred_sec.get("secret"),
                )
            )


def _map_general(cfg: Config, ini: IniFile) -> None:
    default = ini.section(DEFAULT_SECTION)
    if default.has_key("output_directory"):
        cfg.dir = default.get("output_directory")
    if default.has_key("scripts_directory"):
        cfg.scripts_directory = default.get("scripts_directory")
    if default.has_key("maximum_dns_queries"):
        try:
            cfg.max_dns_queries = _parse_int(default.get("maximum_dns_queries"))
        except ValueError as exc:
            raise IniError(
                f"error mapping configuration settings to internal values: {exc}"
            ) from exc


def load_settings(cfg: Config, path: str | PathLike[str]) -> None:
    """Parse the INI file at path and assign its settings to cfg."""
    try:
        ini = load_ini(path, insensitive=True)
    except IniError as exc:
        raise IniError(f"failed to load the configuration file: {exc}") from exc

    _map_general(cfg, ini)
    default = ini.section(DEFAULT_SECTION)
    if default.has_key("mode"):
        mode = default.get("mode")
        if mode == "passive":
            cfg.passive = True
        elif mode == "active":
            cfg.active = True

    loaders: tuple[Callable[[Config, IniFile], None], ...] = (
        load_resolver_settings,
        load_scope_settings,
        load_alteration_settings,
        load_brute_force_settings,
        load_database_settings,
        load_data_source_settings,
    )
    for load in loaders:
        load(cfg, ini)


def acquire_config(directory: str, file: str, cfg: Config) -> None:
    """Find the configuration file to use and load it into cfg."""
    dircfg = ""
    syscfg = ""

    d = output_directory(directory)
    if d and os.path.isdir(d):
        dircfg = os.path.join(d, DEFAULT_CONFIG_FILE)
    if not sys.platform.startswith("win"):
        syscfg = os.path.join(SYSTEM_CONFIG_DIR, OUTPUT_DIR_NAME, DEFAULT_CONFIG_FILE)

    if file:
        path = file
    elif CONFIG_ENVIRON_VAR in os.environ:
        path = os.environ[CONFIG_ENVIRON_VAR]
    elif dircfg and os.path.exists(dircfg):
        path = dircfg
    elif syscfg and os.path.exists(syscfg):
        path = syscfg
    else:
        path = ""

    load_settings(cfg, path)