"""Tests for SearchRanker and the title helpers."""

from __future__ import annotations

from datetime import date

import pytest

from gamelog.core.catalog_entry import CatalogEntry
from gamelog.services.search_ranker import (
    ADDON_PENALTY,
    SearchRanker,
    is_classic_expansion,
    is_likely_addon,
    is_strong_addon,
    normalize_title,
)

TODAY = date(2026, 6, 1)


def _entry(name: str, popularity: int = 0, rating: float = 0.0, released: date | None = None, id: str = "") -> CatalogEntry:
    return CatalogEntry(id=id or name, name=name, popularity=popularity, rating=rating, released=released)


# ---------------------------------------------------------------------------
# Title helpers
# ---------------------------------------------------------------------------


class TestNormalizeTitle:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Zelda 2", "zelda ii"),
            ("Half-Life 2", "half-life ii"),
            ("  Portal    2 ", "portal ii"),
            ("FINAL FANTASY 6", "final fantasy vi"),
            ("Final Fantasy 7", "final fantasy 7"),
            ("Area 51", "area 51"),
            ("Version 2.0", "version 2.0"),
        ],
    )
    def test_normalize(self, raw: str, expected: str) -> None:
        assert normalize_title(raw) == expected

    def test_arabic_and_roman_sequels_compare_equal(self) -> None:
        assert normalize_title("Zelda II") == normalize_title("zelda 2")


class TestAddonDetection:
    @pytest.mark.parametrize(
        "title",
        ["Skyrim - Dawnguard DLC", "Sims 4 Season Pack", "Hitman Episode 2", "Borderlands Bundle", "Add-On Stuff"],
    )
    def test_likely_addon(self, title: str) -> None:
        assert is_likely_addon(title)

    @pytest.mark.parametrize("title", ["Packman", "Seasonal Tales", "The Legend of Zelda"])
    def test_not_addon(self, title: str) -> None:
        assert not is_likely_addon(title)

    @pytest.mark.parametrize(
        "title",
        ["Portal 2 Soundtrack", "Elden Ring Season Pass", "Game - Costume Pack", "Witcher 3 Expansion Pass", "Doom OST"],
    )
    def test_strong_addon(self, title: str) -> None:
        assert is_strong_addon(title)

    def test_bundle_is_not_strong(self) -> None:
        assert not is_strong_addon("Borderlands Bundle")

    def test_classic_expansion(self) -> None:
        entry = _entry("Warcraft III Expansion: The Frozen Throne", released=date(2003, 7, 1))
        assert is_classic_expansion(entry)

    def test_modern_expansion_is_not_classic(self) -> None:
        assert not is_classic_expansion(_entry("Game Expansion", released=date(2019, 1, 1)))

    def test_episodic_expansion_is_not_classic(self) -> None:
        assert not is_classic_expansion(_entry("Game Expansion Season 1", released=date(2005, 1, 1)))

    def test_undated_expansion_is_not_classic(self) -> None:
        assert not is_classic_expansion(_entry("Game Expansion"))


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


class TestScore:
    @pytest.mark.parametrize(
        "query, name, relevance, match",
        [
            ("zelda ii", "Zelda 2", 1.0, "exact"),
            ("portal", "Portal 2", 0.9, "prefix"),
            ("zelda", "The Legend of Zelda", 0.8, "word"),
            ("elda", "The Legend of Zelda", 0.6, "substring"),
            ("zelda mario", "The Legend of Zelda", 0.2, "partial"),
            ("xyz", "The Legend of Zelda", 0.0, "none"),
            ("", "The Legend of Zelda", 0.0, "none"),
        ],
    )
    def test_relevance_ladder(self, query: str, name: str, relevance: float, match: str) -> None:
        score = SearchRanker.score(query, _entry(name), max_popularity=0, today=TODAY)
        assert score.relevance == pytest.approx(relevance)
        assert score.match == match

    def test_addon_penalty(self) -> None:
        score = SearchRanker.score("zelda", _entry("Zelda DLC Pack"), 0, TODAY)
        assert score.addon_penalized
        assert score.relevance == pytest.approx(0.9 * ADDON_PENALTY)

    def test_no_penalty_when_query_asks_for_addons(self) -> None:
        score = SearchRanker.score("zelda dlc", _entry("Zelda DLC Pack"), 0, TODAY)
        assert not score.addon_penalized
        assert score.relevance == pytest.approx(0.9)

    @pytest.mark.parametrize(
        "released, recency",
        [
            (date(2026, 1, 1), 1.0),
            (date(2024, 1, 1), 0.9),
            (date(2022, 1, 1), 0.7),
            (date(2018, 1, 1), 0.5),
            (date(2010, 1, 1), 0.3),
            (date(1990, 1, 1), 0.1),
            (date(2027, 3, 1), 1.0),
            (None, 0.0),
        ],
    )
    def test_recency_steps(self, released: date | None, recency: float) -> None:
        score = SearchRanker.score("x", _entry("x", released=released), 0, TODAY)
        assert score.recency == recency

    def test_popularity_relative_to_batch(self) -> None:
        score = SearchRanker.score("x", _entry("x", popularity=50), max_popularity=200, today=TODAY)
        assert score.popularity == pytest.approx(0.25)

    def test_zero_max_popularity(self) -> None:
        score = SearchRanker.score("x", _entry("x", popularity=0), max_popularity=0, today=TODAY)
        assert score.popularity == 0.0

    def test_final_is_weighted_sum(self) -> None:
        entry = _entry("Portal", popularity=100, rating=4.0, released=date(2025, 12, 1))
        score = SearchRanker.score("portal", entry, max_popularity=100, today=TODAY)
        assert score.final == pytest.approx(0.60 * 1.0 + 0.25 * 1.0 + 0.10 * 1.0 + 0.05 * 0.8)

    def test_components_in_unit_range(self, sample_entries: list[CatalogEntry]) -> None:
        ranked = SearchRanker.rank_with_scores("portal", sample_entries, TODAY)
        for r in ranked:
            for value in (r.score.relevance, r.score.popularity, r.score.recency, r.score.rating, r.score.final):
                assert 0.0 <= value <= 1.0


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------


class TestRank:
    def test_exact_match_first(self, sample_entries: list[CatalogEntry]) -> None:
        ranked = SearchRanker.rank("portal", sample_entries, TODAY)
        assert [e.name for e in ranked] == ["Portal", "Portal 2", "Portal Knights"]

    def test_result_is_permutation(self, sample_entries: list[CatalogEntry]) -> None:
        ranked = SearchRanker.rank("knights", sample_entries, TODAY)
        assert sorted(e.id for e in ranked) == sorted(e.id for e in sample_entries)

    def test_input_not_mutated(self, sample_entries: list[CatalogEntry]) -> None:
        before = list(sample_entries)
        SearchRanker.rank("knights", sample_entries, TODAY)
        assert sample_entries == before

    def test_empty_candidates(self) -> None:
        assert SearchRanker.rank("portal", [], TODAY) == []

    def test_popular_weak_match_does_not_beat_exact(self) -> None:
        exact = _entry("Celeste", popularity=10, id="1")
        popular = _entry("Celeste Classic Collection Deluxe", popularity=100000, rating=5.0, id="2")
        ranked = SearchRanker.rank("celeste", [popular, exact], TODAY)
        assert ranked[0] is exact

    def test_base_game_before_addon(self) -> None:
        base = _entry("The Legend of Zelda: Breath of the Wild", popularity=5000, id="base")
        pack = _entry("The Legend of Zelda: Breath of the Wild - Expansion Pass", popularity=9000, id="pack")
        ranked = SearchRanker.rank("zelda", [pack, base], TODAY)
        assert [e.id for e in ranked] == ["base", "pack"]

    def test_ties_keep_input_order(self) -> None:
        a = _entry("Doom", id="a")
        b = _entry("Doom", id="b")
        assert [e.id for e in SearchRanker.rank("doom", [a, b], TODAY)] == ["a", "b"]
        assert [e.id for e in SearchRanker.rank("doom", [b, a], TODAY)] == ["b", "a"]

    def test_deterministic(self, sample_entries: list[CatalogEntry]) -> None:
        first = SearchRanker.rank("portal 2", sample_entries, TODAY)
        second = SearchRanker.rank("portal 2", sample_entries, TODAY)
        assert first == second

    def test_rank_with_scores_sorted(self, sample_entries: list[CatalogEntry]) -> None:
        ranked = SearchRanker.rank_with_scores("portal", sample_entries, TODAY)
        keys = [(r.score.relevance, r.score.final) for r in ranked]
        assert keys == sorted(keys, reverse=True)


class TestPrefilterAndSearchResults:
    @pytest.fixture
    def noisy(self) -> list[CatalogEntry]:
        return [
            _entry("Portal 2 Soundtrack", id="ost"),
            _entry("Portal 2", popularity=100, id="p2"),
            _entry("Portal 2 - Season Pass", released=date(2021, 1, 1), id="pass"),
            _entry("Portal Expansion", released=date(2004, 1, 1), id="classic"),
            _entry("Portal", popularity=80, id="p1"),
        ]

    def test_prefilter_drops_strong_addons(self, noisy: list[CatalogEntry]) -> None:
        kept = SearchRanker.prefilter(noisy, "portal")
        assert [e.id for e in kept] == ["p2", "classic", "p1"]

    def test_prefilter_keeps_all_for_addon_query(self, noisy: list[CatalogEntry]) -> None:
        assert len(SearchRanker.prefilter(noisy, "portal soundtrack")) == len(noisy)

    def test_search_results_truncates_after_ranking(self, noisy: list[CatalogEntry]) -> None:
        results = SearchRanker.search_results("portal", noisy, limit=2, today=TODAY)
        assert [e.id for e in results] == ["p1", "p2"]

    def test_search_results_no_limit(self, noisy: list[CatalogEntry]) -> None:
        assert len(SearchRanker.search_results("portal", noisy, today=TODAY)) == 3

    def test_search_results_zero_limit(self, noisy: list[CatalogEntry]) -> None:
        assert SearchRanker.search_results("portal", noisy, limit=0, today=TODAY) == []


class TestScenarios:
    def test_sequel_beats_collectors_pack(self) -> None:
        game = _entry("The Legend of Zelda II: The Adventure of Link", popularity=100, id="game")
        pack = _entry("Zelda II Collector's Pack", popularity=900, id="pack")

        ranked = SearchRanker.rank("zelda 2", [pack, game], TODAY)

        assert [e.id for e in ranked] == ["game", "pack"]

    def test_addon_relevance_bounded_by_penalty(self) -> None:
        plain = SearchRanker.score("zelda 2", _entry("Zelda II Collector's"), 0, TODAY)
        penalized = SearchRanker.score("zelda 2", _entry("Zelda II Collector's Pack"), 0, TODAY)
        assert penalized.relevance <= ADDON_PENALTY * plain.relevance + 1e-9
