# gamelog/services/search_ranker.py

"""Relevance ranking for catalog search results.

The catalog returns results in its own order, which routinely puts DLC,
soundtracks and popular-but-unrelated titles above the game the user
typed. SearchRanker re-orders a result batch by a composite score:

- relevance (0.60): a ladder of exact > prefix > word-start > substring >
  partial word overlap, on normalized titles
- popularity (0.25): popularity relative to the batch maximum
- recency (0.10): step function of the age in years
- rating (0.05): rating / 5

Relevance is also the primary sort key, so a more specific title match
always outranks a less specific one; the weighted score orders titles of
equal relevance. Add-on titles (DLC, packs, seasons...) have their
relevance cut to 30% unless the query itself asks for add-on content.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from gamelog.utils.date_utils import years_since

if TYPE_CHECKING:
    from gamelog.core.catalog_entry import CatalogEntry

logger = logging.getLogger("gamelog.search_ranker")

__all__ = [
    "ADDON_PENALTY",
    "CLASSIC_EXPANSION_CUTOFF_YEAR",
    "RankedEntry",
    "SearchRanker",
    "SearchScore",
    "is_classic_expansion",
    "is_likely_addon",
    "is_strong_addon",
    "normalize_title",
]

RELEVANCE_WEIGHT = 0.60
POPULARITY_WEIGHT = 0.25
RECENCY_WEIGHT = 0.10
RATING_WEIGHT = 0.05

ADDON_PENALTY = 0.3

# Pre-2010 "expansions" were sold as standalone boxed products
CLASSIC_EXPANSION_CUTOFF_YEAR = 2010

# (max age in years, recency score), checked in order
_RECENCY_STEPS: tuple[tuple[float, float], ...] = (
    (1, 1.0),
    (3, 0.9),
    (5, 0.7),
    (10, 0.5),
    (20, 0.3),
)
_RECENCY_FLOOR = 0.1

_ROMAN_NUMERALS: dict[str, str] = {"1": "i", "2": "ii", "3": "iii", "4": "iv", "5": "v", "6": "vi"}
_SEQUEL_NUMBER_RE = re.compile(r"(?<![\w.])([1-6])(?![\w.])")
_WHITESPACE_RE = re.compile(r"\s+")

_ADDON_RE = re.compile(
    r"\b(?:pack|dlc|season|episode|bundle|expansion|toolkit|goodies?|add-on)\b",
    re.IGNORECASE,
)
_STRONG_ADDON_RE = re.compile(
    r"\b(?:dlc|add-?on|season pass|expansion pass|expansion|soundtrack|ost|costume pack"
    r"|skin pack|map pack|character pack|upgrade pack)\b",
    re.IGNORECASE,
)
_EPISODIC_RE = re.compile(r"\b(?:season|episode|vol\.?|volume)\b", re.IGNORECASE)
_EXPANSION_RE = re.compile(r"\bexpansion\b", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Title helpers
# ---------------------------------------------------------------------------


def normalize_title(title: str) -> str:
    """Case-folds a title, collapses whitespace and maps 1-6 to roman numerals.

    Sequels are numbered inconsistently across sources ("Zelda 2" vs
    "Zelda II"), so both sides of a comparison go through this.

    Args:
        title: Raw title or query.

    Returns:
        Normalized title.
    """
    text = _WHITESPACE_RE.sub(" ", title.casefold()).strip()
    return _SEQUEL_NUMBER_RE.sub(lambda m: _ROMAN_NUMERALS[m.group(1)], text)


def is_likely_addon(title: str) -> bool:
    """Whether the title contains an add-on keyword as a whole word."""
    return bool(_ADDON_RE.search(title))


def is_strong_addon(title: str) -> bool:
    """Whether the title almost certainly names downloadable add-on content."""
    return bool(_STRONG_ADDON_RE.search(title))


def is_classic_expansion(entry: CatalogEntry) -> bool:
    """Pre-2010 expansion catalogued as a standalone product.

    Season/episode/volume releases never qualify.
    """
    year = entry.release_year
    return (
        year is not None
        and year < CLASSIC_EXPANSION_CUTOFF_YEAR
        and bool(_EXPANSION_RE.search(entry.name))
        and not _EPISODIC_RE.search(entry.name)
    )


# ---------------------------------------------------------------------------
# Scores
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SearchScore:
    """Score breakdown for one candidate in one ranking pass.

    Attributes:
        relevance: Relevance component after any add-on penalty.
        popularity: Batch-relative popularity, 0-1.
        recency: Step score from release age, 0-1.
        rating: rating / 5, 0-1.
        final: Weighted sum of the four components.
        match: Which relevance rung matched ("exact", "prefix", "word",
            "substring", "partial", "none").
        addon_penalized: Whether the add-on penalty was applied.
    """

    relevance: float
    popularity: float
    recency: float
    rating: float
    final: float
    match: str = "none"
    addon_penalized: bool = False


@dataclass(frozen=True)
class RankedEntry:
    """A candidate paired with the score it was ranked by."""

    entry: CatalogEntry
    score: SearchScore


def _relevance(query: str, name: str) -> tuple[float, str]:
    """Relevance ladder on normalized strings."""
    if not query:
        return 0.0, "none"
    if name == query:
        return 1.0, "exact"
    if name.startswith(query):
        return 0.9, "prefix"
    if re.search(r"(?<!\w)" + re.escape(query), name):
        return 0.8, "word"
    if query in name:
        return 0.6, "substring"

    query_words = query.split(" ")
    name_words = name.split(" ")
    hits = sum(1 for qw in query_words if any(qw in nw for nw in name_words))
    if hits == 0:
        return 0.0, "none"
    return hits / len(query_words) * 0.4, "partial"


def _recency(released: date | None, today: date) -> float:
    if released is None:
        return 0.0
    age = years_since(released, today)
    for max_age, score in _RECENCY_STEPS:
        if age <= max_age:
            return score
    return _RECENCY_FLOOR


# ---------------------------------------------------------------------------
# Ranker
# ---------------------------------------------------------------------------


class SearchRanker:
    """Stateless ranking of catalog results against a free-text query.

    All methods are pure: inputs are never mutated and the same inputs
    always give the same output (``today`` pins the recency reference).
    """

    @staticmethod
    def score(
        query: str,
        entry: CatalogEntry,
        max_popularity: int,
        today: date | None = None,
        query_is_addon: bool | None = None,
    ) -> SearchScore:
        """Scores one candidate.

        Args:
            query: Raw user query.
            entry: Candidate to score.
            max_popularity: Highest popularity in the current batch.
            today: Reference date for recency.
            query_is_addon: Precomputed ``is_likely_addon(query)``.

        Returns:
            The SearchScore for this candidate.
        """
        today = today or date.today()
        if query_is_addon is None:
            query_is_addon = is_likely_addon(query)

        relevance, match = _relevance(normalize_title(query), normalize_title(entry.name))

        penalized = False
        if relevance > 0 and not query_is_addon and is_likely_addon(entry.name):
            relevance *= ADDON_PENALTY
            penalized = True

        popularity = entry.popularity / max_popularity if max_popularity > 0 else 0.0
        recency = _recency(entry.released, today)
        rating = entry.rating / 5 if entry.rating > 0 else 0.0

        final = (
            RELEVANCE_WEIGHT * relevance
            + POPULARITY_WEIGHT * popularity
            + RECENCY_WEIGHT * recency
            + RATING_WEIGHT * rating
        )

        return SearchScore(
            relevance=relevance,
            popularity=popularity,
            recency=recency,
            rating=rating,
            final=final,
            match=match,
            addon_penalized=penalized,
        )

    @staticmethod
    def rank_with_scores(
        query: str,
        candidates: list[CatalogEntry],
        today: date | None = None,
    ) -> list[RankedEntry]:
        """Scores and sorts candidates, keeping the score breakdown.

        Sorted by relevance, then final score, both descending. Ties keep
        their input order.

        Args:
            query: Raw user query.
            candidates: Catalog results in source order.
            today: Reference date for recency.

        Returns:
            A new list of RankedEntry, same length as ``candidates``.
        """
        if not candidates:
            return []

        today = today or date.today()
        max_popularity = max(c.popularity for c in candidates)
        query_is_addon = is_likely_addon(query)

        ranked = [
            RankedEntry(c, SearchRanker.score(query, c, max_popularity, today, query_is_addon)) for c in candidates
        ]
        ranked.sort(key=lambda r: (r.score.relevance, r.score.final), reverse=True)

        logger.debug(
            "Ranked %d candidates for %r (top: %r)",
            len(ranked),
            query,
            ranked[0].entry.name,
        )
        return ranked

    @staticmethod
    def rank(query: str, candidates: list[CatalogEntry], today: date | None = None) -> list[CatalogEntry]:
        """Returns ``candidates`` re-ordered by relevance to ``query``.

        The result is always a permutation of the input.

        Args:
            query: Raw user query.
            candidates: Catalog results in source order.
            today: Reference date for recency.

        Returns:
            A new, sorted list.
        """
        return [r.entry for r in SearchRanker.rank_with_scores(query, candidates, today)]

    @staticmethod
    def prefilter(candidates: list[CatalogEntry], query: str = "") -> list[CatalogEntry]:
        """Drops obvious downloadable add-ons before ranking.

        Classic (pre-2010) expansions survive. Nothing is dropped when the
        query itself asks for add-on content.

        Args:
            candidates: Catalog results.
            query: Raw user query.

        Returns:
            A new list with add-ons removed, input order preserved.
        """
        if query and is_strong_addon(query):
            return list(candidates)

        kept = [c for c in candidates if not is_strong_addon(c.name) or is_classic_expansion(c)]
        if len(kept) != len(candidates):
            logger.debug("Pre-filter dropped %d add-on results", len(candidates) - len(kept))
        return kept

    @staticmethod
    def search_results(
        query: str,
        candidates: list[CatalogEntry],
        limit: int | None = None,
        today: date | None = None,
    ) -> list[CatalogEntry]:
        """Pre-filters, ranks, then truncates a catalog response.

        Args:
            query: Raw user query.
            candidates: Raw catalog results.
            limit: Maximum number of results; None keeps all.
            today: Reference date for recency.

        Returns:
            The results to show, best first.
        """
        ranked = SearchRanker.rank(query, SearchRanker.prefilter(candidates, query), today)
        if limit is not None:
            ranked = ranked[: max(limit, 0)]
        return ranked
