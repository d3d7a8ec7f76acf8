"""Run configuration for the matching and aggregation core.

A single ``RunConfig`` value is built once (by the CLI or a config file) and
passed explicitly to the engine and the reporter.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import IntEnum
from typing import Any, Dict, List, Mapping, Union

from summitt.errors import ConfigError

#: Multiplier for ``ls -s`` style 1K block counts (the ``-k`` shortcut).
KILO_FACTOR = 1024

#: Default patterns for ``ls -l`` and ``ls -s`` listings. Each captures the
#: size or block count into ``v`` and the extension or leading name into ``k``.
DEFAULT_PATTERNS: List[str] = [
    r"^[\-rwxds]{10}\s+[0-9]+\s+[^\s]+\s+[^\s]+\s+(?P<v>[0-9]+)\s+.+(?P<k>\.[A-Za-z0-9]{1,4})$",
    r"^[\-rwxds]{10}\s+[0-9]+\s+[^\s]+\s+[^\s]+\s+(?P<v>[0-9]+)\s+[^\s]+\s+[^\s]+\s+[^\s]+\s+(?P<k>[^\-#\.]+).*$",
    r"^\s*(?P<v>[0-9]+)\s+.+(?P<k>\.[A-Za-z0-9]{1,4})$",
    r"^\s*(?P<v>[0-9]+)\s+(?P<k>[^\-#\.]+).*$",
]

#: Source name meaning standard input.
STDIN_SOURCE = "-"


class SortField(IntEnum):
    """Record field used to order report rows."""

    #: Leave rows in key insertion order (first-seen order).
    NONE = 0
    SUM = 1
    COUNT = 2
    RATIO = 3
    MAX = 4

    @classmethod
    def from_string(cls, value: str) -> "SortField":
        """Parse a case-insensitive field name ("sum", "count", "ratio", "max", "none").

        Raises:
            ConfigError: If the string doesn't match any field.
        """
        try:
            return cls[value.strip().upper()]
        except KeyError:
            valid = ", ".join(e.name.lower() for e in cls)
            raise ConfigError(
                f"Invalid sort field '{value}'. Valid values are: {valid}"
            ) from None

    @classmethod
    def coerce(cls, value: Union["SortField", int, str]) -> "SortField":
        if isinstance(value, SortField):
            return value
        if isinstance(value, bool):
            raise ConfigError(f"Invalid sort field {value!r}")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ConfigError(
                    f"Invalid sort field {value}; expected 0..{len(cls) - 1}"
                ) from None
        if isinstance(value, str):
            return cls.from_string(value)
        raise ConfigError(f"Invalid sort field {value!r}")


@dataclass
class RunConfig:
    """Options shared by the engine and the reporter.

    Attributes:
        patterns: Ordered pattern texts; one box is created per pattern.
        sources: Ordered input names; ``"-"`` or ``""`` reads standard input.
        factor: Multiplier applied to every extracted value.
        top: Report window size; values <= 0 disable truncation.
        sort_field: Field used to order report rows.
        reverse: Sort descending and keep the head of the list when truncating.
        lower: Lower-case keys so that differently cased tags merge.
        skip_empty: Omit boxes that collected no keys from the report.
        ignore_errors: Log and continue on errors instead of aborting.
        verbose: Print a header and trailing blank line per box.
    """

    patterns: List[str] = field(default_factory=lambda: list(DEFAULT_PATTERNS))
    sources: List[str] = field(default_factory=lambda: [STDIN_SOURCE])
    factor: int = 1
    top: int = -1
    sort_field: SortField = SortField.SUM
    reverse: bool = False
    lower: bool = False
    skip_empty: bool = False
    ignore_errors: bool = True
    verbose: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.patterns, str) or not isinstance(self.patterns, list):
            raise ConfigError("patterns must be a list of strings")
        if not self.patterns:
            raise ConfigError("at least one pattern is required")
        for pat in self.patterns:
            if not isinstance(pat, str):
                raise ConfigError(f"pattern must be a string: {pat!r}")
        if isinstance(self.sources, str) or not isinstance(self.sources, list):
            raise ConfigError("sources must be a list of strings")
        if not self.sources:
            self.sources = [STDIN_SOURCE]
        for name in ("factor", "top"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer: {value!r}")
        self.sort_field = SortField.coerce(self.sort_field)

    @property
    def window(self) -> int:
        """Effective top-N window, or 0 when truncation is disabled."""
        return self.top if self.top > 0 else 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RunConfig":
        """Build a configuration from a plain mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        extra = set(data.keys()) - known
        if extra:
            raise ConfigError(
                f"Unrecognized configuration key(s): {', '.join(sorted(extra))}. "
                f"Allowed keys are {sorted(known)}"
            )
        return cls(**dict(data))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "patterns": list(self.patterns),
            "sources": list(self.sources),
            "factor": self.factor,
            "top": self.top,
            "sort_field": self.sort_field.name.lower(),
            "reverse": self.reverse,
            "lower": self.lower,
            "skip_empty": self.skip_empty,
            "ignore_errors": self.ignore_errors,
            "verbose": self.verbose,
        }
