"""RAWG API client for the game catalog.

Searches the RAWG database by free text, fetches game details, and finds
the Steam app ID for a RAWG game through its store listings. Every method
degrades to an empty result on network or parse errors so the ranking and
platform engines never see a transport exception.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import requests

from gamelog.core.catalog_entry import CatalogEntry
from gamelog.version import __version__

logger = logging.getLogger("gamelog.rawg_api")

__all__ = ["RawgClient", "STEAM_STORE_ID", "extract_steam_app_id"]

# RAWG store id for Steam in /games/{id}/stores
STEAM_STORE_ID = 1

_STEAM_APP_RE = re.compile(r"/app/(\d+)")


def extract_steam_app_id(store_url: str | None) -> str | None:
    """Pulls the numeric app id out of a Steam store URL.

    Args:
        store_url: e.g. ``https://store.steampowered.com/app/620/Portal_2/``

    Returns:
        The app id as a string, or None.
    """
    if not store_url:
        return None
    match = _STEAM_APP_RE.search(store_url)
    return match.group(1) if match else None


class RawgClient:
    """Client for the RAWG public API.

    Requires an API key; without one every lookup returns nothing.
    """

    BASE_URL = "https://api.rawg.io/api"

    def __init__(self, api_key: str | None, timeout: float = 10) -> None:
        """Initializes the client with a configured session.

        Args:
            api_key: RAWG API key.
            timeout: Per-request timeout in seconds.
        """
        self.api_key = api_key
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({"User-Agent": f"GameLog/{__version__}"})

    def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any] | None:
        """GETs a RAWG endpoint and returns the parsed JSON object."""
        if not self.api_key:
            logger.debug("RAWG: no API key configured, skipping %s", path)
            return None

        query = {"key": self.api_key}
        query.update(params or {})

        try:
            response = self._session.get(f"{self.BASE_URL}{path}", params=query, timeout=self._timeout)

            if response.status_code == 404:
                logger.debug("RAWG: %s not found", path)
                return None

            if response.status_code != 200:
                logger.warning("RAWG: unexpected status %d for %s", response.status_code, path)
                return None

            data = response.json()
            return data if isinstance(data, dict) else None

        except requests.RequestException as exc:
            logger.warning("RAWG: network error for %s: %s", path, exc)
            return None
        except ValueError as exc:
            logger.warning("RAWG: parse error for %s: %s", path, exc)
            return None

    def search(self, query: str, page_size: int = 8) -> list[dict[str, Any]]:
        """Free-text search.

        Args:
            query: What the user typed.
            page_size: Number of results to request.

        Returns:
            Raw result objects, catalog order. Empty on any failure.
        """
        if not query.strip():
            return []

        data = self._get("/games", {"search": query, "page_size": page_size})
        if data is None:
            return []

        results = data.get("results") or []
        return [r for r in results if isinstance(r, dict)]

    def search_entries(self, query: str, page_size: int = 8) -> list[CatalogEntry]:
        """``search`` parsed into CatalogEntry objects."""
        return [CatalogEntry.from_rawg(r) for r in self.search(query, page_size)]

    def get_details(self, game_id: int | str) -> CatalogEntry | None:
        """Fetches the full detail record for one game.

        Args:
            game_id: RAWG game id.

        Returns:
            The CatalogEntry, or None on failure.
        """
        data = self._get(f"/games/{game_id}")
        if data is None:
            return None
        return CatalogEntry.from_rawg(data)

    def find_steam_app_id(self, game_id: int | str) -> str | None:
        """Looks up the Steam app id through the game's store listings.

        Args:
            game_id: RAWG game id.

        Returns:
            The Steam app id, or None if the game isn't on Steam.
        """
        data = self._get(f"/games/{game_id}/stores")
        if data is None:
            return None

        for store in data.get("results") or []:
            if isinstance(store, dict) and store.get("store_id") == STEAM_STORE_ID:
                return extract_steam_app_id(store.get("url"))
        return None
