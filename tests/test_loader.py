"""Tests for YAML configuration files."""

from pathlib import Path

import pytest

from summitt.config import SortField
from summitt.errors import ConfigError
from summitt.loader import load_config_file, load_config_yaml

VALID = r"""
patterns:
  - '^\s*(?P<v>[0-9]+)\s+.+(?P<k>\.[A-Za-z0-9]{1,4})$'
factor: 1024
top: 5
sort_field: count
reverse: true
lower: true
"""


def test_load_valid_yaml() -> None:
    data = load_config_yaml(VALID)
    assert data["factor"] == 1024
    assert data["patterns"][0].startswith(r"^\s*")


def test_empty_document_is_empty_mapping() -> None:
    assert load_config_yaml("") == {}


def test_load_config_file(tmp_path: Path) -> None:
    path = tmp_path / "summitt.yaml"
    path.write_text(VALID)
    config = load_config_file(path)
    assert config.top == 5
    assert config.sort_field is SortField.COUNT
    assert config.reverse and config.lower
    assert config.sources == ["-"]


def test_sort_field_may_be_numeric() -> None:
    assert load_config_yaml("sort_field: 4") == {"sort_field": 4}


@pytest.mark.parametrize(
    "text,match",
    [
        ("- a\n- b\n", "dictionary"),
        ("bogus: 1\n", "bogus"),
        ("top: ten\n", "top"),
        ("factor: true\n", "factor"),
        ("patterns: []\n", "patterns"),
        ("sort_field: avg\n", "sort_field"),
        ("patterns: [unclosed\n", "Invalid YAML"),
    ],
)
def test_invalid_documents(text: str, match: str) -> None:
    with pytest.raises(ConfigError, match=match):
        load_config_yaml(text)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Cannot read"):
        load_config_file(tmp_path / "absent.yaml")
