"""Line-by-line ingestion of input sources into boxes.

The engine owns one box per configured pattern. ``run`` reads every source in
order and feeds each line to every box; afterwards the boxes are only read by
the reporter.
"""

from __future__ import annotations

import io
import re
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from time import perf_counter
from typing import IO, Iterable, Iterator, List, Optional

from summitt.box import Box
from summitt.config import STDIN_SOURCE, RunConfig
from summitt.errors import SourceOpenError, ValueParseError
from summitt.logging import get_logger
from summitt.matcher import Matcher

logger = get_logger(__name__)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def parse_value(text: str) -> int:
    """Parse a captured value as a signed decimal integer.

    Only an optional sign followed by ASCII digits is accepted; surrounding
    whitespace and digit separators are rejected.

    Raises:
        ValueParseError: If ``text`` is not an integer.
    """
    if not _INTEGER_RE.fullmatch(text):
        raise ValueParseError(text)
    return int(text)


def _strip_eol(line: str) -> str:
    """Drop one trailing ``"\\n"`` and then one trailing ``"\\r"``."""
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


@contextmanager
def open_source(name: str) -> Iterator[IO[str]]:
    """Open an input source by name; ``"-"`` or ``""`` yields standard input.

    Lines are split on ``"\\n"`` only; a bare ``"\\r"`` stays part of the line.
    Standard input is never closed.

    Raises:
        SourceOpenError: If the named file cannot be opened.
    """
    if name in (STDIN_SOURCE, ""):
        buffer = getattr(sys.stdin, "buffer", None)
        if buffer is None:
            yield sys.stdin
            return
        wrapper = io.TextIOWrapper(buffer, encoding="utf-8", newline="\n")
        try:
            yield wrapper
        finally:
            wrapper.detach()
        return
    try:
        handle = open(name, "r", encoding="utf-8", newline="\n")
    except OSError as exc:
        raise SourceOpenError(name, exc.strerror or str(exc)) from exc
    with handle:
        yield handle


@dataclass
class IngestStats:
    """Counters collected while ingesting."""

    sources: int = 0
    failed_sources: int = 0
    lines: int = 0
    matches: int = 0
    skipped: int = 0
    elapsed: float = 0.0


class Engine:
    """Applies every matcher to every line and accumulates into boxes.

    Args:
        config: Run configuration; its patterns define the boxes.

    Raises:
        PatternCompileError: On an invalid pattern when errors are not ignored.
    """

    def __init__(self, config: RunConfig) -> None:
        self.config = config
        self.boxes: List[Box] = [
            Box(Matcher.compile(pat, ignore_errors=config.ignore_errors))
            for pat in config.patterns
        ]
        self.stats = IngestStats()

    def process_line(
        self,
        line: str,
        source: Optional[str] = None,
        line_number: Optional[int] = None,
    ) -> int:
        """Feed one line to every box. Returns the number of accepted matches.

        Raises:
            ValueParseError: On a non-integer value when errors are not ignored.
        """
        factor = self.config.factor
        lower = self.config.lower
        accepted = 0
        for box in self.boxes:
            for key, raw in box.matcher.extract(line):
                try:
                    value = parse_value(raw)
                except ValueParseError:
                    err = ValueParseError(raw, box.pattern, source, line_number)
                    if not self.config.ignore_errors:
                        raise err from None
                    logger.warning("%s (skipped)", err)
                    self.stats.skipped += 1
                    continue
                if lower:
                    key = key.lower()
                box.add(key, value * factor)
                accepted += 1
        self.stats.lines += 1
        self.stats.matches += accepted
        return accepted

    def process_lines(self, lines: Iterable[str], source: str = STDIN_SOURCE) -> None:
        for number, line in enumerate(lines, start=1):
            self.process_line(_strip_eol(line), source, number)

    def process_source(self, name: str) -> None:
        """Read one source to exhaustion.

        Raises:
            SourceOpenError: If the source cannot be opened or decoded.
        """
        label = name or STDIN_SOURCE
        logger.debug("reading %s", label)
        with open_source(name) as handle:
            try:
                self.process_lines(handle, label)
            except (OSError, UnicodeDecodeError) as exc:
                raise SourceOpenError(label, str(exc)) from exc
        self.stats.sources += 1

    def run(self, sources: Optional[Iterable[str]] = None) -> List[Box]:
        """Ingest every source in order and return the boxes.

        Errors opening a source are logged and skipped in tolerant mode and
        raised in strict mode.
        """
        start = perf_counter()
        names = list(self.config.sources if sources is None else sources)
        for name in names:
            try:
                self.process_source(name)
            except SourceOpenError as exc:
                if not self.config.ignore_errors:
                    raise
                logger.warning("%s (skipped)", exc)
                self.stats.failed_sources += 1
        self.stats.elapsed = perf_counter() - start
        logger.info(
            "ingested %d lines from %d source(s): %d matches, %d skipped, %d failed source(s) in %.1f ms",
            self.stats.lines,
            self.stats.sources,
            self.stats.matches,
            self.stats.skipped,
            self.stats.failed_sources,
            self.stats.elapsed * 1000.0,
        )
        return self.boxes
