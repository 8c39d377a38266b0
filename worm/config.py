from __future__ import annotations

import re
from pathlib import Path

DEFAULT_SLEEP = 10      # seconds the top-level process stays alive
DEFAULT_DEPTH = 3       # each chain makes DEFAULT_DEPTH - 1 detach steps
DEFAULT_CHAINS = 2

INT_MAX = 2**31 - 1     # atoi(3) yields a C int

LOG_DIR = Path.home() / ".worm"

_ATOI_RE = re.compile(r"\s*([+-]?)([0-9]*)")


def parse_seconds(text: str) -> int:
    """Parse a duration the way C atoi(3) does.

    Leading whitespace and an optional sign are accepted, then digits up to
    the first non-digit. Anything unparseable is 0. Negative durations are
    clamped to 0 since there is nothing to sleep, and values past INT_MAX
    are clamped to INT_MAX.
    """
    m = _ATOI_RE.match(text)
    sign, digits = m.group(1), m.group(2).lstrip("0")
    if not digits or sign == "-":
        return 0
    # Anything over 10 digits is past INT_MAX; skip int() on huge strings.
    if len(digits) > 10:
        return INT_MAX
    return min(int(digits), INT_MAX)
