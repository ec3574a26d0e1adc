"""Scaling of raw milli-unit integers from sysfs into fixed-precision strings."""

from __future__ import annotations

from typing import Optional

# Kernel drivers emit 64-bit integers; anything wider is a corrupt read.
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def scale_milli(raw: int, places: int) -> Optional[str]:
    """Return ``raw / 1000`` with ``places`` decimals, or ``None`` outside the int64 range."""
    if not INT64_MIN <= raw <= INT64_MAX:
        return None
    return f"{raw / 1000.0:.{places}f}"
