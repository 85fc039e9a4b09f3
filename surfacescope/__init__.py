"""Configuration, scope, wordlist and comparison tooling for DNS-based attack surface mapping."""

__version__ = "0.1.0"

__all__ = [
    "addresses",
    "catalog",
    "config",
    "datasources",
    "dnscmd",
    "intelcmd",
    "settings",
    "track",
    "wordlist",
]