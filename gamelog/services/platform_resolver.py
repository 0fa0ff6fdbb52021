# gamelog/services/platform_resolver.py

"""Decides which of the user's devices can plausibly run a catalog entry.

The catalog declares platforms in vendor spelling ("PlayStation 4",
"SEGA Saturn", "PC"); devices declare canonical tags ("PlayStation",
"Retro", "Windows"). PlatformCompatibilityMap translates between the two
using the versioned table in ``resources/platform_compatibility.json``;
PlatformResolver applies the translation plus two widening rules:

- retro entries (released before RETRO_YEAR_THRESHOLD) on a legacy console
  also match that vendor's current platform, since vendors re-release
  their back catalogue
- a positive compatibility-layer verdict adds the Linux-family tags

The resolver never leaves the user without options: when nothing matches,
every device is returned.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from gamelog.utils.paths import get_resources_dir

if TYPE_CHECKING:
    from gamelog.core.catalog_entry import CatalogEntry
    from gamelog.core.device import Device

logger = logging.getLogger("gamelog.platform_resolver")

__all__ = [
    "PlatformCompatibilityMap",
    "PlatformResolution",
    "PlatformResolver",
    "RETRO_YEAR_THRESHOLD",
    "load_default_map",
]

# Entries released before this year count as retro
RETRO_YEAR_THRESHOLD = 2000

_MAP_FILE = "platform_compatibility.json"


def _normalize_platform(name: str) -> str:
    return " ".join(name.lower().split())


@dataclass(frozen=True)
class PlatformCompatibilityMap:
    """Ordered lookup from catalog platform names to canonical device tags.

    Rows are evaluated top to bottom and the first matching pattern wins,
    so more specific spellings ("pc engine") must precede general ones
    ("pc").

    Attributes:
        version: Table version, bumped whenever rows change.
        rows: (compiled pattern, tags) pairs in priority order.
        successors: (compiled legacy family pattern, modern tag) pairs.
        linux_family: Tags added by a positive compatibility-layer verdict.
    """

    version: int
    rows: tuple[tuple[re.Pattern[str], frozenset[str]], ...]
    successors: tuple[tuple[re.Pattern[str], str], ...] = ()
    linux_family: frozenset[str] = frozenset({"Linux", "SteamOS"})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlatformCompatibilityMap:
        """Builds a map from its JSON representation.

        Args:
            data: Dict with ``version``, ``platforms`` and optionally
                ``legacy_successors`` and ``linux_family``.

        Returns:
            The compiled map.

        Raises:
            ValueError: If a pattern does not compile.
            KeyError: If a row lacks ``pattern`` or ``tags``.
        """
        try:
            rows = tuple(
                (re.compile(row["pattern"], re.IGNORECASE), frozenset(row["tags"])) for row in data.get("platforms", [])
            )
            successors = tuple(
                (re.compile(row["family"], re.IGNORECASE), str(row["successor"]))
                for row in data.get("legacy_successors", [])
            )
        except re.error as exc:
            raise ValueError(f"Invalid platform pattern: {exc}") from exc

        return cls(
            version=int(data.get("version", 0)),
            rows=rows,
            successors=successors,
            linux_family=frozenset(data.get("linux_family", ("Linux", "SteamOS"))),
        )

    @classmethod
    def load(cls, path: Path | None = None) -> PlatformCompatibilityMap:
        """Loads a map from a JSON file (default: the bundled table)."""
        path = path or get_resources_dir() / _MAP_FILE
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    def tags_for(self, platform_name: str) -> frozenset[str]:
        """Canonical tags for one declared platform name (empty if unknown)."""
        name = _normalize_platform(platform_name)
        for pattern, tags in self.rows:
            if pattern.search(name):
                return tags
        logger.debug("No compatibility row for platform %r", platform_name)
        return frozenset()

    def successor_for(self, platform_name: str) -> str | None:
        """Modern platform tag for a legacy console, if the vendor has one."""
        name = _normalize_platform(platform_name)
        for pattern, successor in self.successors:
            if pattern.search(name):
                return successor
        return None


_default_map: PlatformCompatibilityMap | None = None


def load_default_map() -> PlatformCompatibilityMap:
    """The bundled compatibility table, loaded once."""
    global _default_map
    if _default_map is None:
        _default_map = PlatformCompatibilityMap.load()
        logger.debug("Loaded platform compatibility table v%d (%d rows)", _default_map.version, len(_default_map.rows))
    return _default_map


@dataclass(frozen=True)
class PlatformResolution:
    """Outcome of one resolution, for callers that need to explain it.

    Attributes:
        devices: Devices to offer, in input order.
        compatible_tags: Canonical tags the entry was judged to run on.
        retro: Entry predates RETRO_YEAR_THRESHOLD.
        filtered: False when the full device list was returned unfiltered.
    """

    devices: list[Device]
    compatible_tags: frozenset[str]
    retro: bool
    filtered: bool


class PlatformResolver:
    """Filters user devices down to the ones that can run a catalog entry.

    Stateless apart from the compatibility table; safe to share.
    """

    def __init__(self, compatibility_map: PlatformCompatibilityMap | None = None) -> None:
        self._map = compatibility_map or load_default_map()

    @property
    def compatibility_map(self) -> PlatformCompatibilityMap:
        return self._map

    def compatible_tags(self, entry: CatalogEntry, compatibility_hint: bool = False) -> frozenset[str]:
        """Canonical tags for everything the entry declares, plus widening rules.

        Args:
            entry: Selected catalog entry.
            compatibility_hint: The title runs acceptably under a Linux
                compatibility layer.

        Returns:
            Union of tags.
        """
        tags: set[str] = set()
        for platform in entry.platforms:
            tags.update(self._map.tags_for(platform))

        if self.is_retro(entry):
            for platform in entry.platforms:
                successor = self._map.successor_for(platform)
                if successor:
                    tags.add(successor)

        if compatibility_hint:
            tags.update(self._map.linux_family)

        return frozenset(tags)

    @staticmethod
    def is_retro(entry: CatalogEntry) -> bool:
        year = entry.release_year
        return year is not None and year < RETRO_YEAR_THRESHOLD

    def resolve(
        self,
        entry: CatalogEntry | None,
        devices: list[Device],
        compatibility_hint: bool = False,
    ) -> PlatformResolution:
        """Resolves devices and reports how the decision was made.

        Args:
            entry: Selected entry, or None for "no entry, no filtering".
            devices: All of the user's devices.
            compatibility_hint: See ``compatible_tags``.

        Returns:
            The PlatformResolution.
        """
        all_devices = list(devices)

        if entry is None or not entry.platforms:
            return PlatformResolution(all_devices, frozenset(), False, filtered=False)

        retro = self.is_retro(entry)
        tags = self.compatible_tags(entry, compatibility_hint)
        matching = [d for d in all_devices if d.supports(tags)]

        if not matching:
            if retro:
                logger.debug("No device matches retro entry %r, offering all devices", entry.name)
            else:
                logger.debug("No device matches %r (%s), offering all devices", entry.name, sorted(tags))
            return PlatformResolution(all_devices, tags, retro, filtered=False)

        logger.debug("Entry %r: %d of %d devices compatible", entry.name, len(matching), len(all_devices))
        return PlatformResolution(matching, tags, retro, filtered=True)

    def resolve_devices(
        self,
        entry: CatalogEntry | None,
        devices: list[Device],
        compatibility_hint: bool = False,
    ) -> list[Device]:
        """Devices judged able to run ``entry``.

        Never empty when ``devices`` is non-empty: if no device matches,
        the full list comes back.

        Args:
            entry: Selected entry, or None to pass ``devices`` through.
            devices: All of the user's devices.
            compatibility_hint: The title runs under a Linux compatibility
                layer.

        Returns:
            A new list, in input order.
        """
        return self.resolve(entry, devices, compatibility_hint).devices

    def count_filtered_out(
        self,
        entry: CatalogEntry | None,
        devices: list[Device],
        compatibility_hint: bool = False,
    ) -> int:
        """How many devices the entry hides compared to the unfiltered list."""
        unfiltered = self.resolve_devices(None, devices)
        return len(unfiltered) - len(self.resolve_devices(entry, devices, compatibility_hint))
