"""Helpers shared by the commands: scope checks, source categories and output paths."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping

from surfacescope.config import Config, ConfigError, output_directory


def domain_name_in_scope(name: str, scope: Iterable[str]) -> bool:
    """True if the name equals one of the domains or is a subdomain of one."""
    n = name.strip().lower()
    for domain in scope:
        d = domain.lower()
        if n == d or n.endswith("." + d):
            return True
    return False


def expand_category_names(
    names: Iterable[str], categories: Mapping[str, list[str]]
) -> list[str]:
    """Replace each category name with the data source names it groups."""
    expanded: list[str] = []
    for name in names:
        if name in categories:
            expanded.extend(categories[name])
        else:
            expanded.append(name)
    return expanded


def generate_category_map(sources: Iterable[tuple[str, str]]) -> dict[str, list[str]]:
    """Group (source name, category) pairs into a map from category to source names."""
    mapping: dict[str, list[str]] = {}
    for name, category in sources:
        mapping.setdefault(category, []).append(name)
    return mapping


def create_output_directory(cfg: Config) -> str:
    """Create the configuration's output directory if needed and return its path."""
    directory = output_directory(cfg.dir)
    if not directory:
        raise ConfigError("Failed to obtain the output directory")
    try:
        os.makedirs(directory, mode=0o755, exist_ok=True)
    except OSError as exc:
        raise ConfigError(f"Failed to create the directory: {exc}") from exc
    return directory