"""Tests for the ProtonDB API client and verdict helpers."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from gamelog.integrations.protondb_api import (
    CompatibilityVerdictCache,
    ProtonDBClient,
    ProtonDBResult,
    is_tier_acceptable,
)

ACCEPTED = ("native", "platinum", "gold", "silver")


class TestProtonDBResult:
    """Tests for the ProtonDBResult frozen dataclass."""

    def test_create(self) -> None:
        assert ProtonDBResult(tier="silver").tier == "silver"

    def test_frozen_immutability(self) -> None:
        result = ProtonDBResult(tier="gold")
        with pytest.raises(AttributeError):
            result.tier = "platinum"  # type: ignore[misc]


class TestIsTierAcceptable:
    @pytest.mark.parametrize(
        "tier, expected",
        [
            ("platinum", True),
            ("Gold", True),
            (" silver ", True),
            ("bronze", False),
            ("borked", False),
            ("pending", False),
            ("", False),
            (None, False),
        ],
    )
    def test_tiers(self, tier: str | None, expected: bool) -> None:
        assert is_tier_acceptable(tier, ACCEPTED) is expected


class TestProtonDBClientGetRating:
    """Tests for ProtonDBClient.get_rating()."""

    @patch("gamelog.integrations.protondb_api.requests.Session")
    def test_get_rating_success(self, mock_session_cls: MagicMock) -> None:
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.json.return_value = {
            "tier": "gold",
            "confidence": "strong",
            "trendingTier": "platinum",
            "score": 0.82,
            "bestReportedTier": "platinum",
        }
        mock_session = MagicMock()
        mock_session.get.return_value = mock_response
        mock_session_cls.return_value = mock_session

        result = ProtonDBClient().get_rating(292030)

        assert result == ProtonDBResult("gold")
        assert mock_session.get.call_args[0][0].endswith("/292030.json")

    @patch("gamelog.integrations.protondb_api.requests.Session")
    def test_get_rating_404_returns_none(self, mock_session_cls: MagicMock) -> None:
        mock_response = MagicMock()
        mock_response.status_code = 404
        mock_session = MagicMock()
        mock_session.get.return_value = mock_response
        mock_session_cls.return_value = mock_session

        assert ProtonDBClient().get_rating(99999999) is None

    @patch("gamelog.integrations.protondb_api.requests.Session")
    def test_get_rating_network_error_returns_none(self, mock_session_cls: MagicMock) -> None:
        mock_session = MagicMock()
        mock_session.get.side_effect = requests.ConnectionError("Connection refused")
        mock_session_cls.return_value = mock_session

        assert ProtonDBClient().get_rating(730) is None

    @patch("gamelog.integrations.protondb_api.requests.Session")
    def test_get_rating_bad_json_returns_none(self, mock_session_cls: MagicMock) -> None:
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.json.side_effect = ValueError("not json")
        mock_session = MagicMock()
        mock_session.get.return_value = mock_response
        mock_session_cls.return_value = mock_session

        assert ProtonDBClient().get_rating(730) is None

    @patch("gamelog.integrations.protondb_api.requests.Session")
    def test_get_rating_ignores_malformed_extra_fields(self, mock_session_cls: MagicMock) -> None:
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.json.return_value = {"tier": "gold", "score": "n/a", "confidence": None}
        mock_session = MagicMock()
        mock_session.get.return_value = mock_response
        mock_session_cls.return_value = mock_session

        client = ProtonDBClient()

        assert client.get_rating(292030) == ProtonDBResult("gold")
        assert client.runs_acceptably(292030, ACCEPTED)

    @pytest.mark.parametrize("payload", [{}, {"tier": None}, {"tier": 3}])
    @patch("gamelog.integrations.protondb_api.requests.Session")
    def test_get_rating_without_tier_is_unknown(self, mock_session_cls: MagicMock, payload: dict) -> None:
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.json.return_value = payload
        mock_session = MagicMock()
        mock_session.get.return_value = mock_response
        mock_session_cls.return_value = mock_session

        assert ProtonDBClient().get_rating(292030) == ProtonDBResult("unknown")


class TestRunsAcceptably:
    def test_acceptable_tier(self) -> None:
        client = ProtonDBClient()
        with patch.object(client, "get_rating", return_value=ProtonDBResult(tier="platinum")):
            assert client.runs_acceptably("620", ACCEPTED)

    def test_unacceptable_tier(self) -> None:
        client = ProtonDBClient()
        with patch.object(client, "get_rating", return_value=ProtonDBResult(tier="bronze")):
            assert not client.runs_acceptably("620", ACCEPTED)

    def test_missing_rating(self) -> None:
        client = ProtonDBClient()
        with patch.object(client, "get_rating", return_value=None):
            assert not client.runs_acceptably("620", ACCEPTED)


class TestCompatibilityVerdictCache:
    def test_computes_once(self) -> None:
        cache = CompatibilityVerdictCache()
        compute = MagicMock(return_value=True)

        assert cache.get_or_compute("3328", compute) is True
        assert cache.get_or_compute("3328", compute) is True
        compute.assert_called_once()
        assert "3328" in cache
        assert len(cache) == 1

    def test_negative_verdicts_cached(self) -> None:
        cache = CompatibilityVerdictCache()
        compute = MagicMock(return_value=False)
        cache.get_or_compute("1", compute)
        cache.get_or_compute("1", compute)
        compute.assert_called_once()

    def test_clear(self) -> None:
        cache = CompatibilityVerdictCache()
        cache.get_or_compute("1", lambda: True)
        cache.clear()
        assert len(cache) == 0
        assert "1" not in cache
