# gamelog/services/game_creation_service.py

"""Coordinates the engines while the user builds a new game record.

Flow: catalog search -> SearchRanker -> user picks an entry ->
PlatformResolver (with a cached ProtonDB verdict) -> user confirms devices
and stores -> uploaded images -> ImageClassifier -> user resolves
conflicts. This service wires the integrations to the pure engines and
holds the little session state the flow needs (current results, selected
entry, verdict cache). Rendering is left to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

from gamelog.integrations.image_probe import probe_images
from gamelog.integrations.protondb_api import CompatibilityVerdictCache
from gamelog.services.image_classifier import ClassificationResult, ImageClassifier
from gamelog.services.platform_resolver import PlatformResolver
from gamelog.services.search_ranker import SearchRanker
from gamelog.services.store_service import StoreService
from gamelog.utils.selection import SelectionCursor
from gamelog.utils.text_utils import clean_description

if TYPE_CHECKING:
    from gamelog.core.catalog_entry import CatalogEntry
    from gamelog.core.device import Device
    from gamelog.integrations.protondb_api import ProtonDBClient
    from gamelog.integrations.rawg_api import RawgClient

logger = logging.getLogger("gamelog.game_creation_service")

__all__ = ["GameCreationService", "SEARCH_FETCH_SIZE"]

_WINDOWS_TAGS = frozenset({"Windows", "PC"})

# RAWG page size per search (API maximum); add-ons are dropped and the rest
# ranked before the list is cut to max_results
SEARCH_FETCH_SIZE = 40


class GameCreationService:
    """Session-scoped coordinator for one "new game" dialog.

    Attributes:
        results: Ranked results of the last search.
        selected: The chosen catalog entry, if any.
        search_cursor: Keyboard cursor over ``results``; choosing an
            index selects that entry.
    """

    def __init__(
        self,
        rawg: RawgClient,
        devices: list[Device],
        protondb: ProtonDBClient | None = None,
        accepted_tiers: tuple[str, ...] = ("native", "platinum", "gold", "silver"),
        max_results: int = 8,
        enabled_subscriptions: dict[str, bool] | None = None,
        resolver: PlatformResolver | None = None,
        classifier: ImageClassifier | None = None,
    ) -> None:
        self._rawg = rawg
        self._protondb = protondb
        self._devices = list(devices)
        self._accepted_tiers = accepted_tiers
        self._max_results = max_results
        self._enabled_subscriptions = enabled_subscriptions or {}
        self._resolver = resolver or PlatformResolver()
        self._classifier = classifier or ImageClassifier()
        self._verdicts = CompatibilityVerdictCache()

        self.results: list[CatalogEntry] = []
        self.selected: CatalogEntry | None = None
        self.search_cursor = SelectionCursor(on_select=self._select_index)

    @classmethod
    def from_config(cls, cfg) -> GameCreationService:
        """Builds a service with live clients from a Config."""
        from gamelog.integrations.protondb_api import ProtonDBClient
        from gamelog.integrations.rawg_api import RawgClient

        return cls(
            rawg=RawgClient(cfg.RAWG_API_KEY),
            devices=cfg.get_devices(),
            protondb=ProtonDBClient(),
            accepted_tiers=cfg.PROTON_ACCEPTED_TIERS,
            max_results=cfg.MAX_SEARCH_RESULTS,
            enabled_subscriptions=cfg.ENABLED_SUBSCRIPTIONS,
        )

    @property
    def devices(self) -> list[Device]:
        return list(self._devices)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search(self, query: str) -> list[CatalogEntry]:
        """Queries the catalog and ranks the response.

        Args:
            query: Debounced user input.

        Returns:
            Ranked, truncated results (also stored in ``results``).
        """
        page_size = max(SEARCH_FETCH_SIZE, self._max_results)
        entries = self._rawg.search_entries(query, page_size=page_size)
        self.results = SearchRanker.search_results(query, entries, limit=self._max_results)
        self.search_cursor.reset(len(self.results))
        logger.debug("Search %r: %d catalog results, %d shown", query, len(entries), len(self.results))
        return self.results

    def _select_index(self, index: int) -> None:
        self.select(self.results[index])

    # ------------------------------------------------------------------
    # Selection and devices
    # ------------------------------------------------------------------

    def select(self, entry: CatalogEntry) -> list[Device]:
        """Makes ``entry`` the selected entry and resolves its devices.

        Missing description or platforms are filled from the detail
        endpoint.

        Args:
            entry: A search result.

        Returns:
            Devices to offer for this entry.
        """
        if not entry.description or not entry.platforms:
            details = self._rawg.get_details(entry.id)
            if details is not None:
                entry = replace(
                    entry,
                    description=details.description or entry.description,
                    platforms=entry.platforms or details.platforms,
                    genres=entry.genres or details.genres,
                )

        self.selected = entry
        return self.compatible_devices()

    def clear_selection(self) -> None:
        self.selected = None
        self.search_cursor.clear()

    def compatibility_hint(self, entry: CatalogEntry) -> bool:
        """Whether a Windows-only entry runs acceptably under Proton.

        Only asked for entries whose declared platforms include Windows but
        no Linux-family platform; cached per catalog id.
        """
        if self._protondb is None:
            return False

        tags = self._resolver.compatible_tags(entry)
        if not tags & _WINDOWS_TAGS or tags & self._resolver.compatibility_map.linux_family:
            return False

        return self._verdicts.get_or_compute(entry.id, lambda: self._fetch_verdict(entry))

    def _fetch_verdict(self, entry: CatalogEntry) -> bool:
        app_id = self._rawg.find_steam_app_id(entry.id)
        if app_id is None:
            logger.debug("No Steam app id for %r, skipping ProtonDB", entry.name)
            return False
        return self._protondb.runs_acceptably(app_id, self._accepted_tiers)

    def compatible_devices(self) -> list[Device]:
        """Devices for the selected entry (all devices if none selected)."""
        if self.selected is None:
            return self._resolver.resolve_devices(None, self._devices)
        hint = self.compatibility_hint(self.selected)
        return self._resolver.resolve_devices(self.selected, self._devices, hint)

    def filtered_out_count(self) -> int:
        """How many devices the selected entry hides."""
        if self.selected is None:
            return 0
        hint = self.compatibility_hint(self.selected)
        return self._resolver.count_filtered_out(self.selected, self._devices, hint)

    def subscription_options(self, device: Device) -> list[str]:
        """Subscriptions to offer on ``device``.

        The device's own subscriptions if it declares any, otherwise every
        enabled subscription available on one of its platforms.
        """
        declared = device.all_subscriptions()
        if declared:
            return declared

        options: list[str] = []
        for platform in device.platforms:
            for sub in StoreService.subscriptions_for_platform(platform):
                if self._enabled_subscriptions.get(sub) is True and sub not in options:
                    options.append(sub)
        return options

    def summary_description(self) -> str:
        """Cleaned description of the selected entry for the record."""
        if self.selected is None:
            return ""
        return clean_description(self.selected.description)

    # ------------------------------------------------------------------
    # Artwork
    # ------------------------------------------------------------------

    def classify_files(self, paths: list[Path]) -> tuple[ClassificationResult, list[Path]]:
        """Measures and classifies uploaded image files.

        Args:
            paths: Uploaded files.

        Returns:
            Tuple of (classification result, skipped paths).
        """
        images, skipped = probe_images(paths)
        return self._classifier.classify_all(images), skipped
