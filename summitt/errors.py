"""Exception hierarchy raised by the matching and aggregation core.

Library code raises these; only the CLI turns them into exit statuses.
"""

from __future__ import annotations

from typing import Optional


class SummittError(Exception):
    """Base class for all summitt errors."""


class ConfigError(SummittError, ValueError):
    """Invalid run configuration or configuration file."""


class PatternCompileError(SummittError):
    """A pattern is not a valid regular expression.

    Args:
        pattern: Source text of the offending pattern.
        reason: Message from the regex compiler.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"pattern error {pattern!r}: {reason}")


class SourceOpenError(SummittError):
    """An input source could not be opened or read."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"error at file {source}: {reason}")


class ValueParseError(SummittError):
    """A captured value is not a valid integer."""

    def __init__(
        self,
        value: str,
        pattern: Optional[str] = None,
        source: Optional[str] = None,
        line_number: Optional[int] = None,
    ) -> None:
        self.value = value
        self.pattern = pattern
        self.source = source
        self.line_number = line_number
        where = ""
        if source is not None and line_number is not None:
            where = f" at {source}:{line_number}"
        via = f" (pattern {pattern!r})" if pattern is not None else ""
        super().__init__(f"invalid integer value {value!r}{where}{via}")
