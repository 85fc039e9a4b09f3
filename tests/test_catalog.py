import os

import pytest

from surfacescope.catalog import (
    create_output_directory,
    domain_name_in_scope,
    expand_category_names,
    generate_category_map,
)
from surfacescope.config import Config, ConfigError


@pytest.mark.parametrize(
    ("name", "scope", "expected"),
    [
        ("www.owasp.org", ["OWASP.org"], True),
        ("  Owasp.Org ", ["owasp.org"], True),
        ("notowasp.org", ["owasp.org"], False),
        ("owasp.org", [], False),
        ("a.b.example.com", ["other.com", "example.com"], True),
    ],
)
def test_domain_name_in_scope(name, scope, expected):
    assert domain_name_in_scope(name, scope) is expected


def test_expand_category_names():
    categories = {"api": ["AlienVault", "BinaryEdge"]}
    result = expand_category_names(["api", "CommonCrawl"], categories)
    assert result == ["AlienVault", "BinaryEdge", "CommonCrawl"]


def test_expand_without_categories_is_identity():
    names = ["one", "two"]
    assert expand_category_names(names, {}) == names


def test_generate_category_map_groups_in_order():
    pairs = [("AlienVault", "api"), ("Crtsh", "cert"), ("BinaryEdge", "api")]
    mapping = generate_category_map(pairs)
    assert mapping == {"api": ["AlienVault", "BinaryEdge"], "cert": ["Crtsh"]}


def test_category_map_round_trip():
    pairs = [("A", "api"), ("B", "scrape"), ("C", "api")]
    mapping = generate_category_map(pairs)
    expanded = expand_category_names(list(mapping), mapping)
    assert sorted(expanded) == sorted(name for name, _ in pairs)


def test_create_output_directory(tmp_path):
    target = tmp_path / "out" / "nested"
    cfg = Config(dir=str(target))
    assert create_output_directory(cfg) == str(target)
    assert os.path.isdir(target)
    # Creating it a second time is harmless
    assert create_output_directory(cfg) == str(target)


def test_create_output_directory_over_file(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(ConfigError, match="Failed to create the directory"):
        create_output_directory(Config(dir=str(blocker)))


def test_create_output_directory_without_location(monkeypatch):
    for var in ("HOME", "XDG_CONFIG_HOME", "AppData"):
        monkeypatch.delenv(var, raising=False)
    with pytest.raises(ConfigError, match="Failed to obtain the output directory"):
        create_output_directory(Config(dir=""))