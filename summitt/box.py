"""Per-pattern accumulation of key statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Tuple

from summitt.matcher import Matcher


@dataclass(slots=True)
class Aggregate:
    """Running statistics for one key.

    Args:
        sum: Total of scaled values.
        count: Number of contributing matches (always >= 1).
        max: Largest single scaled value.
    """

    sum: int
    count: int
    max: int

    @classmethod
    def first(cls, value: int) -> "Aggregate":
        return cls(sum=value, count=1, max=value)

    def add(self, value: int) -> None:
        self.sum += value
        self.count += 1
        if value > self.max:
            self.max = value

    @property
    def ratio(self) -> int:
        """``sum / count`` truncated toward zero."""
        quotient = abs(self.sum) // self.count
        return -quotient if self.sum < 0 else quotient


@dataclass
class Box:
    """A matcher together with the key mapping it feeds.

    Keys keep first-seen order, which is the report order when sorting is
    disabled.
    """

    matcher: Matcher
    counters: Dict[str, Aggregate] = field(default_factory=dict)

    @property
    def pattern(self) -> str:
        return self.matcher.pattern

    def add(self, key: str, value: int) -> None:
        agg = self.counters.get(key)
        if agg is None:
            self.counters[key] = Aggregate.first(value)
        else:
            agg.add(value)

    def items(self) -> Iterator[Tuple[str, Aggregate]]:
        return iter(self.counters.items())

    def __len__(self) -> int:
        return len(self.counters)
