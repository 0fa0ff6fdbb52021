# gamelog/utils/date_utils.py

"""Utility functions for catalog release dates.

Catalog sources report release dates as ISO strings (``YYYY-MM-DD``),
sometimes as a bare year, and sometimes not at all. These helpers turn
whatever arrived into a ``date`` (or None) and compute ages for the
recency score and the retro check.

Accepted input formats: YYYY-MM-DD, DD.MM.YYYY, YYYY/MM/DD, YYYY, date,
datetime, raw Unix timestamp.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timezone

__all__ = ["parse_release_date", "years_since"]

_DAYS_PER_YEAR = 365.25

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_release_date(value) -> date | None:
    """Converts a catalog release value to a date.

    Accepted input (in order of priority):
        - date / datetime  -> date part
        - int / float      -> Unix timestamp (> 100 000 000) or bare year
        - YYYY-MM-DD       -> ISO (what RAWG sends)
        - DD.MM.YYYY, YYYY/MM/DD
        - YYYY             -> January 1st of that year

    Args:
        value: Raw release value from the catalog.

    Returns:
        The parsed date, or None when nothing matches.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        return _from_number(int(value))

    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    if text.isdigit():
        return _from_number(int(text))

    for fmt in ("%Y-%m-%d", "%d.%m.%Y", "%Y/%m/%d"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    return None


def years_since(released: date, today: date | None = None) -> float:
    """Age in (fractional) years between ``released`` and ``today``.

    Future release dates give a negative age.

    Args:
        released: Release date.
        today: Reference date, defaults to the current local date.

    Returns:
        Age in years.
    """
    today = today or date.today()
    return (today - released).days / _DAYS_PER_YEAR


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _from_number(number: int) -> date | None:
    if 1000 <= number <= 9999:
        return date(number, 1, 1)
    if number > 100_000_000:
        try:
            return datetime.fromtimestamp(number, tz=timezone.utc).date()
        except (OverflowError, OSError, ValueError):
            return None
    return None
