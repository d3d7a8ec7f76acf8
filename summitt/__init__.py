"""summitt: sum numeric tags extracted from text lines.

Applies an ordered set of regular expressions to every input line, extracts a
key and an integer value from each match, and accumulates per-key sum, count
and maximum. Results are sorted and optionally cut to a top-N window.

Example:
    from summitt import Engine, RunConfig, build_report, render_report

    config = RunConfig(patterns=[r"^\\s*(?P<v>[0-9]+)\\s+.+(?P<k>\\.\\w+)$"])
    engine = Engine(config)
    engine.process_lines(["  4 readme.txt", "  8 readme.txt"])
    print(render_report(build_report(engine.boxes, config)))
"""

from __future__ import annotations

from summitt import cli, logging
from summitt._version import __version__
from summitt.box import Aggregate, Box
from summitt.config import DEFAULT_PATTERNS, KILO_FACTOR, RunConfig, SortField
from summitt.engine import Engine, IngestStats, parse_value
from summitt.errors import (
    ConfigError,
    PatternCompileError,
    SourceOpenError,
    SummittError,
    ValueParseError,
)
from summitt.loader import load_config_file, load_config_yaml
from summitt.matcher import Matcher
from summitt.report import (
    BoxReport,
    ReportRow,
    build_report,
    render_report,
    report_to_dataframe,
    report_to_dict,
    select_top,
)
from summitt.utils.humanize import human_bytes

__all__ = [
    # Version
    "__version__",
    # Configuration
    "RunConfig",
    "SortField",
    "DEFAULT_PATTERNS",
    "KILO_FACTOR",
    "load_config_file",
    "load_config_yaml",
    # Core
    "Matcher",
    "Aggregate",
    "Box",
    "Engine",
    "IngestStats",
    "parse_value",
    # Reporting
    "BoxReport",
    "ReportRow",
    "build_report",
    "select_top",
    "render_report",
    "report_to_dict",
    "report_to_dataframe",
    "human_bytes",
    # Errors
    "SummittError",
    "ConfigError",
    "PatternCompileError",
    "SourceOpenError",
    "ValueParseError",
    # Utilities
    "cli",
    "logging",
]
