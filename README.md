# surfacescope

Configuration, scope and wordlist handling for DNS-based attack surface
mapping. The package reads INI configuration files into a `Config`, keeps
track of which domains, addresses and CIDRs are in scope, manages resolver
lists and data source credentials, expands "hashcat-style" wordlist masks,
and compares the findings of successive enumerations.

It has no third-party dependencies and supports Python 3.10 and later.

## Wordlists and masks (`surfacescope.wordlist`)

A mask placeholder expands to a set of characters: `?a` (letters, digits and
`-`), `?d` (digits), `?l` and `?u` (lower-case letters) and `?s` (`-`). More
than three `?` in one word, or an unknown placeholder, raises `MaskError`.

```python
from surfacescope.wordlist import expand_mask, expand_mask_wordlist, get_list_from_file

expand_mask("dev?d")                     # ['dev0', 'dev1', ..., 'dev9']
expand_mask_wordlist(["www", "app?d"])   # invalid masks are silently dropped
words = get_list_from_file("names.txt")  # plain text or gzip; stripped, blank lines dropped, deduplicated
```

`get_list_from_file` raises `ValueError` for an empty file and `OSError` when
the file cannot be opened. `read_word_list(lines)` does the same cleaning on
any iterable of lines.

## Addresses (`surfacescope.addresses`)

Ranges can be written in full or with only the last octet after the dash:

```python
from surfacescope.addresses import parse_ips, format_ips

ips = parse_ips("192.168.0.1-3,10.0.0.1")
format_ips(ips)  # '192.168.0.1,192.168.0.2,192.168.0.3,10.0.0.1'
```

`parse_range` and `parse_ips` raise `ValueError` for anything that is not a
valid address or an ascending range; `range_hosts(start, end)` returns the
addresses between two `ipaddress` objects inclusive.

## Scope (`surfacescope.config`)

```python
from surfacescope.config import Config

cfg = Config()
cfg.add_domains("example.com", "example.org")
cfg.is_domain_in_scope("www.example.com")   # True
cfg.which_domain("mail.example.org")        # 'example.org'
cfg.domain_regex("example.com")             # compiled pattern for its subdomains

cfg.blacklist_subdomain("internal.example.com")
cfg.blacklisted("host.internal.example.com")  # True

cfg.is_address_in_scope("10.0.0.1")  # True while no addresses or CIDRs are set
```

Domains need at least two non-empty labels; anything else is ignored.
Resolvers are managed with `set_resolvers`, `add_resolvers`,
`add_trusted_resolvers` and friends; each call recomputes
`max_dns_queries` from the resolver counts and the per-resolver rates
(`resolvers_qps`, default 5, and `trusted_qps`, default 10).

`check_settings()` raises `ConfigError` when brute forcing is combined with
passive mode, or active with passive mode, then expands the masks in both
wordlists. When brute forcing or alterations are enabled with an empty
wordlist it reads `namelist.txt` or `alterations.txt` from
`resources_directory` (or a `resources` directory next to the module); the
package does not ship these files, so either fill `wordlist` /
`alt_wordlist` yourself or point `resources_directory` at your own.

`acquire_scripts()` collects the contents of `.ads` files from the default
scripts directory, `<output directory>/scripts` and `scripts_directory`.

## Configuration files (`surfacescope.settings`)

```python
from surfacescope.config import Config
from surfacescope.settings import load_settings, acquire_config

cfg = Config()
load_settings(cfg, "config.ini")
cfg.check_settings()
```

The reader keeps every value of a repeated key (`IniSection.values`), strips
`#` and `;` comments, and treats section and key names case-insensitively
when loading settings. Recognised content:

- top level: `output_directory`, `scripts_directory`, `maximum_dns_queries`,
  `mode = passive|active`
- `[resolvers]` with one or more `resolver` keys
- `[scope]` (`address`, `cidr`, `asn`, `port`), `[scope.domains]`
  (`domain`) and `[scope.blacklisted]` (`subdomain`)
- `[bruteforce]` and `[alterations]`, including `wordlist_file`
- `[graphdbs.<name>]` database entries
- `[data_sources]` (required by `load_settings`), `[data_sources.disabled]`,
  `[data_sources.<Name>]` with `ttl` and credential sub-sections
  `[data_sources.<Name>.<set>]`

Errors are raised as `IniError` / `ConfigError`. `acquire_config(directory,
file, cfg)` takes the configuration from `file`, else from the file named by
the `AMASS_CONFIG` environment variable, else from `config.ini` in the output
directory, else from the system-wide `/etc/amass/config.ini`.

## Data source credentials (`surfacescope.datasources`)

```python
from surfacescope.config import Config
from surfacescope.datasources import Credentials

cfg = Config()
source = cfg.get_data_source_config("SomeSource")
source.add_credentials(Credentials(name="account1", key="placeholder"))
source.get_credentials()  # a randomly chosen credential set, or None
```

## Command settings

`surfacescope.dnscmd.DnsArgs` and `surfacescope.intelcmd.IntelArgs` hold the
options of a DNS resolution run and an intelligence collection run; their
`override_config(conf)` applies them on top of a `Config` (use
`cfg.update_config(args)`), and `process_dns_input_files` /
`process_intel_input_files` load the names from the listed files.
`type_to_name` and `name_to_type` map DNS record type codes and mnemonics.

`surfacescope.catalog` provides `domain_name_in_scope`,
`generate_category_map`, `expand_category_names` and
`create_output_directory`.

## Comparing enumerations (`surfacescope.track`)

`diff_enum_output(older, newer)` returns lines describing names that were
found, removed, or moved to different addresses between two lists of
`Output` records. `scoped_output` filters records by domain and
`parse_since` reads dates such as `01/02 15:04:05 2006 UTC`.

## What this package does not do

It sends no DNS queries, queries no data sources, runs no enumeration and
stores nothing in a graph database; it also provides no command-line
program. It supplies the configuration, scope and comparison logic that such
tooling is built on.

## Running the tests

Install the `test` extra and run `pytest` from the project root.