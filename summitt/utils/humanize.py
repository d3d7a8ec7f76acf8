"""Human-readable magnitudes for byte counts."""

from __future__ import annotations

_UNIT = 1024
_PREFIXES = "kMGTPE"


def human_bytes(value: int) -> str:
    """Return ``value`` as a short binary-prefixed size.

    Values below 1024 (including negatives) are printed as plain bytes.

    Examples:
        12 -> "12b"; 1536 -> "1.5kB"; 3 * 1024**3 -> "3.0GB".
    """
    if value < _UNIT:
        return f"{value}b"
    div, exp = _UNIT, 0
    n = value // _UNIT
    while n >= _UNIT and exp < len(_PREFIXES) - 1:
        div *= _UNIT
        exp += 1
        n //= _UNIT
    return f"{value / div:.1f}{_PREFIXES[exp]}B"
