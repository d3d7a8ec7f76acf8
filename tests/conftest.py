"""Shared fixtures: sample listings and small pattern sets."""

from __future__ import annotations

from pathlib import Path

import pytest

SAMPLE_DATA = Path(__file__).parent / "sample_data"

#: ``ls -s`` style line: block count then name, keyed by extension.
BLOCKS_BY_EXT = r"^\s*(?P<v>[0-9]+)\s+.+(?P<k>\.[A-Za-z0-9]{1,4})$"

#: Unnamed groups: value is group 1 and key is group 2.
PAIR_PATTERN = r"(\d+):(\w+)"


@pytest.fixture
def ls_long_path() -> Path:
    return SAMPLE_DATA / "ls_l.txt"


@pytest.fixture
def ls_blocks_path() -> Path:
    return SAMPLE_DATA / "ls_s.txt"


@pytest.fixture
def write_lines(tmp_path: Path):
    """Write lines to a temporary file and return its path."""

    def _write(lines, name: str = "input.txt") -> Path:
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path

    return _write
