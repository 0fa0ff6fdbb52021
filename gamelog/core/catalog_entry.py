# gamelog/core/catalog_entry.py

"""CatalogEntry dataclass for third-party game catalog results.

Search results and detail responses from the catalog (RAWG) are parsed
into CatalogEntry objects once and never mutated afterwards. Every field
except ``id`` and ``name`` is optional in the source data; missing or
malformed values are coerced to empty/zero so the ranker and the platform
resolver can treat them as "no information" instead of failing.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Any

from gamelog.utils.date_utils import parse_release_date

__all__ = ["CatalogEntry"]


def _names(items: Any, nested_key: str | None = None) -> tuple[str, ...]:
    """Extracts display names from RAWG-style lists.

    RAWG nests names differently per field: genres are ``[{"name": ...}]``,
    platforms are ``[{"platform": {"name": ...}}]``. Plain strings are
    accepted too.
    """
    if not isinstance(items, (list, tuple)):
        return ()

    names: list[str] = []
    for item in items:
        if isinstance(item, str):
            names.append(item)
            continue
        if not isinstance(item, dict):
            continue
        if nested_key is not None and isinstance(item.get(nested_key), dict):
            item = item[nested_key]
        name = item.get("name")
        if isinstance(name, str) and name:
            names.append(name)
    return tuple(names)


def _as_int(value: Any) -> int:
    try:
        return max(int(value), 0)
    except (TypeError, ValueError, OverflowError):
        return 0


def _as_rating(value: Any) -> float:
    try:
        rating = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(rating):
        return 0.0
    return min(max(rating, 0.0), 5.0)


@dataclass(frozen=True)
class CatalogEntry:
    """A single game as reported by the catalog.

    Attributes:
        id: Catalog identifier (stringified).
        name: Display name.
        genres: Genre tags.
        platforms: Declared platform names, vendor spelling (e.g. "PlayStation 4").
        released: Release date, if known.
        popularity: Popularity count (RAWG ``added``), 0 if unknown.
        rating: User rating 0-5, 0 if unknown.
        description: Plain-text description (detail responses only).
        background_image: Cover/background URL.
    """

    id: str
    name: str
    genres: tuple[str, ...] = ()
    platforms: tuple[str, ...] = ()
    released: date | None = None
    popularity: int = 0
    rating: float = 0.0
    description: str = ""
    background_image: str = ""

    @classmethod
    def from_rawg(cls, data: dict[str, Any]) -> CatalogEntry:
        """Builds an entry from a RAWG search result or detail response.

        Args:
            data: Parsed JSON object for one game.

        Returns:
            The parsed CatalogEntry.
        """
        description = data.get("description_raw") or ""
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name") or ""),
            genres=_names(data.get("genres")),
            platforms=_names(data.get("platforms"), nested_key="platform"),
            released=parse_release_date(data.get("released")),
            popularity=_as_int(data.get("added")),
            rating=_as_rating(data.get("rating")),
            description=description if isinstance(description, str) else "",
            background_image=str(data.get("background_image") or ""),
        )

    @property
    def release_year(self) -> int | None:
        return self.released.year if self.released else None

    @property
    def genre_label(self) -> str:
        """Comma-joined genres for display, empty if none."""
        return ", ".join(self.genres)
