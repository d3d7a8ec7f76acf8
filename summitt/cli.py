"""Command-line interface for summitt."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from summitt._version import __version__
from summitt.config import DEFAULT_PATTERNS, KILO_FACTOR, RunConfig, SortField
from summitt.engine import Engine
from summitt.errors import SummittError
from summitt.loader import load_config_file
from summitt.logging import LOG_LEVELS, get_logger, set_log_level_by_name
from summitt.report import (
    build_report,
    render_report,
    report_to_dataframe,
    report_to_dict,
)

logger = get_logger(__name__)


def _epilog(prog: str) -> str:
    lines = ["Default patterns (for 'ls -l' and 'ls -s' output):"]
    for i, pat in enumerate(DEFAULT_PATTERNS, start=1):
        lines.append(f"  {i}: {pat}")
    lines.append("")
    lines.append("Examples:")
    lines.append(f"  ls -l | {prog}")
    lines.append(f"  ls -Rs1 | {prog} -k")
    return "\n".join(lines)


def _build_parser() -> argparse.ArgumentParser:
    prog = "summitt"
    parser = argparse.ArgumentParser(
        prog=prog,
        description=(
            "Calculate sums of counters for tags, e.g. total sizes for file "
            "groups from 'ls' output.\n\n"
            "OUTPUT: [sum] [human readable size] [number of occurrences] [tag]"
        ),
        epilog=_epilog(prog),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    # Options default to None so that a --config file is only overridden by
    # flags that were actually given.
    parser.add_argument("files", nargs="*", help="Input files (default: stdin)")
    parser.add_argument(
        "-f", "--file", dest="extra_files", action="append", help="Input file"
    )
    parser.add_argument(
        "-p",
        "--pattern",
        dest="patterns",
        action="append",
        help="Parsing pattern with key/value groups (repeatable)",
    )
    parser.add_argument("--factor", type=int, default=None, help="Counter factor xF")
    parser.add_argument(
        "-k",
        dest="kilo",
        action="store_true",
        help=f"1K blocks, same as --factor={KILO_FACTOR}",
    )
    parser.add_argument("-t", "--top", type=int, default=None, help="N top lines")
    parser.add_argument(
        "-s",
        "--sort",
        dest="sort_field",
        choices=[f.name.lower() for f in SortField],
        default=None,
        help="Sort field (default: sum)",
    )
    parser.add_argument(
        "-r", "--reverse", action="store_true", default=None, help="Reverse sorting"
    )
    parser.add_argument(
        "-l",
        "--lower",
        action="store_true",
        default=None,
        help="Lower-case all tags for case-insensitive sums",
    )
    parser.add_argument(
        "--skip-empty",
        action="store_true",
        default=None,
        help="Do not report patterns that matched nothing",
    )
    errors = parser.add_mutually_exclusive_group()
    errors.add_argument(
        "-i",
        "--ignore",
        dest="ignore_errors",
        action="store_true",
        default=None,
        help="Ignore errors (default)",
    )
    errors.add_argument(
        "--strict",
        dest="ignore_errors",
        action="store_false",
        default=None,
        help="Abort on the first error",
    )
    headers = parser.add_mutually_exclusive_group()
    headers.add_argument(
        "--verbose",
        dest="verbose",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Print per-pattern headers (default)",
    )
    headers.add_argument(
        "-v",
        dest="verbose",
        action="store_true",
        default=None,
        help="Same as --verbose",
    )
    headers.add_argument(
        "-q",
        "--quiet",
        dest="verbose",
        action="store_false",
        default=None,
        help="Omit per-pattern headers, same as --no-verbose",
    )
    parser.add_argument("--config", type=Path, help="YAML run configuration")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument(
        "--csv", type=Path, default=None, help="Also write results to a CSV file"
    )
    parser.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        default="warning",
        help="Diagnostic log level (default: warning)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Collect the configuration fields explicitly set on the command line."""
    values: Dict[str, Any] = {}
    files = list(args.extra_files or []) + list(args.files or [])
    if files:
        values["sources"] = files
    if args.patterns:
        values["patterns"] = args.patterns
    if args.factor is not None:
        values["factor"] = args.factor
    if args.kilo:
        values["factor"] = KILO_FACTOR
    for name in (
        "top",
        "sort_field",
        "reverse",
        "lower",
        "skip_empty",
        "ignore_errors",
        "verbose",
    ):
        value = getattr(args, name)
        if value is not None:
            values[name] = value
    return values


def build_config(args: argparse.Namespace) -> RunConfig:
    """Merge a --config file (if any) with command-line flags.

    Raises:
        ConfigError: If the file or any value is invalid.
    """
    base: Dict[str, Any] = {}
    if args.config is not None:
        base = load_config_file(args.config).to_dict()
    base.update(_overrides(args))
    return RunConfig.from_dict(base)


def _run(config: RunConfig, as_json: bool, csv_path: Optional[Path]) -> None:
    engine = Engine(config)
    boxes = engine.run()
    reports = build_report(boxes, config)

    if as_json:
        payload = report_to_dict(reports)
        payload["config"] = config.to_dict()
        print(json.dumps(payload, indent=2))
    else:
        render_report(reports, verbose=config.verbose, out=sys.stdout)

    if csv_path is not None:
        report_to_dataframe(reports).to_csv(csv_path, index=False)
        logger.info("wrote %s", csv_path)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``summitt`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = _build_parser()
    effective_args = sys.argv[1:] if argv is None else argv
    args = parser.parse_args(effective_args)

    set_log_level_by_name(args.log_level)

    try:
        config = build_config(args)
        logger.debug("configuration: %s", config.to_dict())
        _run(config, args.json, args.csv)
    except SummittError as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
