"""Compiled pattern plus the positions of its key and value groups."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Pattern, Tuple

from summitt.errors import PatternCompileError
from summitt.logging import get_logger

logger = get_logger(__name__)

#: Group positions used when a pattern does not name its groups ``k``/``v``.
DEFAULT_KEY_GROUP = 2
DEFAULT_VALUE_GROUP = 1

#: Whole match plus key and value.
MIN_CAPTURES = 3


@dataclass(frozen=True)
class Matcher:
    """One pattern and the capture indices it aggregates on.

    Index 0 is the whole match, as with ``re.Match.group``. A matcher whose
    ``compiled`` is ``None`` failed to compile and never matches.

    Attributes:
        pattern: Source text of the pattern.
        compiled: Compiled regex, or ``None`` for an inert matcher.
        key_index: Capture index holding the aggregation key.
        value_index: Capture index holding the numeric value.
    """

    pattern: str
    compiled: Optional[Pattern[str]]
    key_index: int = DEFAULT_KEY_GROUP
    value_index: int = DEFAULT_VALUE_GROUP

    @classmethod
    def compile(cls, pattern: str, ignore_errors: bool = False) -> "Matcher":
        """Compile ``pattern`` and resolve the ``k``/``v`` group indices.

        Args:
            pattern: Regular expression text.
            ignore_errors: Return an inert matcher instead of raising.

        Raises:
            PatternCompileError: If the pattern is invalid and errors are not ignored.
        """
        try:
            compiled = re.compile(pattern)
        except re.error as exc:
            if not ignore_errors:
                raise PatternCompileError(pattern, str(exc)) from exc
            logger.warning("pattern error %r: %s (pattern disabled)", pattern, exc)
            return cls(pattern=pattern, compiled=None)

        key_index = compiled.groupindex.get("k", DEFAULT_KEY_GROUP)
        value_index = compiled.groupindex.get("v", DEFAULT_VALUE_GROUP)
        logger.debug(
            "compiled %r (groups=%d, key=%d, value=%d)",
            pattern,
            compiled.groups,
            key_index,
            value_index,
        )
        return cls(
            pattern=pattern,
            compiled=compiled,
            key_index=key_index,
            value_index=value_index,
        )

    @property
    def inert(self) -> bool:
        return self.compiled is None

    @property
    def usable(self) -> bool:
        """True when every match can supply both the key and the value."""
        if self.compiled is None:
            return False
        captures = self.compiled.groups + 1
        return (
            captures >= MIN_CAPTURES
            and self.key_index < captures
            and self.value_index < captures
        )

    def finditer(self, line: str) -> Iterator[re.Match[str]]:
        """Yield all non-overlapping matches in ``line``.

        An empty match starting where the previous match ended is dropped, so
        ``(\\d*)(x?)`` on ``"1x"`` yields one match, not two.
        """
        if self.compiled is None:
            return
        last_end = -1
        for match in self.compiled.finditer(line):
            if match.start() == match.end() == last_end:
                continue
            last_end = match.end()
            yield match

    def extract(self, line: str) -> Iterator[Tuple[str, str]]:
        """Yield ``(key_text, value_text)`` for each usable match in ``line``.

        Matches that cannot supply both groups are skipped silently; a group
        that did not take part in a match yields the empty string.
        """
        if not self.usable:
            return
        for match in self.finditer(line):
            key = match.group(self.key_index)
            value = match.group(self.value_index)
            yield (key or "", value or "")
