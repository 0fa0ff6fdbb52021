"""ProtonDB API client for Linux compatibility ratings.

Queries the ProtonDB public API for the compatibility tier of a Steam
game. The platform resolver only needs a yes/no answer ("runs well
enough under Proton"), which ``is_tier_acceptable`` derives from a tier
allow-list. CompatibilityVerdictCache memoizes that answer per catalog
entry for the lifetime of one creation session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import requests

from gamelog.version import __version__

logger = logging.getLogger("gamelog.protondb_api")

__all__ = ["CompatibilityVerdictCache", "ProtonDBClient", "ProtonDBResult", "is_tier_acceptable"]


@dataclass(frozen=True)
class ProtonDBResult:
    """Immutable result from a ProtonDB rating lookup.

    Attributes:
        tier: Compatibility tier (platinum, gold, silver, bronze, borked, native, pending).
    """

    tier: str


def is_tier_acceptable(tier: str | None, accepted: tuple[str, ...] | frozenset[str]) -> bool:
    """Whether a tier is on the allow-list (case-insensitive)."""
    if not tier:
        return False
    return tier.strip().lower() in {a.lower() for a in accepted}


class ProtonDBClient:
    """Client for the ProtonDB public API.

    Fetches compatibility ratings for Steam games. The API has no
    authentication but should be queried respectfully.
    """

    BASE_URL = "https://www.protondb.com/api/v1/reports/summaries/"

    def __init__(self) -> None:
        """Initializes the ProtonDB client with a configured session."""
        self._session = requests.Session()
        self._session.headers.update({"User-Agent": f"GameLog/{__version__}"})

    def get_rating(self, app_id: int | str) -> ProtonDBResult | None:
        """Fetches a single ProtonDB rating.

        Args:
            app_id: Steam app ID.

        Returns:
            ProtonDBResult with the reported tier ("unknown" when the
            summary has none), or None on error/404.
        """
        try:
            url = f"{self.BASE_URL}{app_id}.json"
            response = self._session.get(url, timeout=10)

            if response.status_code == 404:
                logger.debug("ProtonDB: no data for app %s", app_id)
                return None

            if response.status_code != 200:
                logger.warning(
                    "ProtonDB: unexpected status %d for app %s",
                    response.status_code,
                    app_id,
                )
                return None

            tier = response.json().get("tier")
            return ProtonDBResult(tier=tier if isinstance(tier, str) and tier else "unknown")

        except requests.RequestException as exc:
            logger.warning("ProtonDB: network error for app %s: %s", app_id, exc)
            return None
        except (ValueError, KeyError, AttributeError) as exc:
            logger.warning("ProtonDB: parse error for app %s: %s", app_id, exc)
            return None

    def runs_acceptably(self, app_id: int | str, accepted: tuple[str, ...] | frozenset[str]) -> bool:
        """Fetches the tier and checks it against ``accepted``.

        A missing rating counts as "not verified".
        """
        result = self.get_rating(app_id)
        return result is not None and is_tier_acceptable(result.tier, accepted)


class CompatibilityVerdictCache:
    """In-memory memo of compatibility verdicts keyed by catalog id.

    Lives as long as its owner (one creation session); nothing is
    persisted.
    """

    def __init__(self) -> None:
        self._verdicts: dict[str, bool] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._verdicts

    def __len__(self) -> int:
        return len(self._verdicts)

    def get_or_compute(self, key: str, compute: Callable[[], bool]) -> bool:
        """Returns the cached verdict for ``key``, computing it on first use."""
        if key in self._verdicts:
            logger.debug("Compatibility verdict cache hit for %s", key)
            return self._verdicts[key]
        verdict = bool(compute())
        self._verdicts[key] = verdict
        return verdict

    def clear(self) -> None:
        self._verdicts.clear()
