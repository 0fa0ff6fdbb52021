# gamelog/services/store_constants.py

"""Store and subscription catalogues used by StoreService.

Maps every predefined store and subscription service to the canonical
platform tags it is available on.
"""

from __future__ import annotations

__all__ = [
    "PREDEFINED_STORES",
    "STORE_PLATFORMS",
    "SUBSCRIPTION_PLATFORMS",
]

_PC = frozenset({"PC", "Windows"})
_PC_MAC = _PC | {"Mac"}
_DESKTOP = _PC_MAC | {"Linux", "SteamOS"}

# Order is the order suggestions are shown in
STORE_PLATFORMS: dict[str, frozenset[str]] = {
    "Steam": _DESKTOP,
    "Epic Games Store": _PC_MAC,
    "GOG": _DESKTOP,
    "Xbox App": _PC,
    "Origin/EA App": _PC_MAC,
    "Ubisoft Connect": _PC,
    "Battle.net": _PC_MAC,
    "Itch.io": _DESKTOP,
    "Humble Store": _DESKTOP,
    "PlayStation Store": frozenset({"PlayStation"}),
    "Xbox Store": frozenset({"Xbox"}),
    "Nintendo eShop": frozenset({"Nintendo"}),
}

PREDEFINED_STORES: tuple[str, ...] = tuple(STORE_PLATFORMS)

SUBSCRIPTION_PLATFORMS: dict[str, frozenset[str]] = {
    "PlayStation Plus": frozenset({"PlayStation"}),
    "Xbox Game Pass": frozenset({"Xbox"}),
    "PC Game Pass": _PC,
    "EA Play": _PC | {"PlayStation", "Xbox"},
    "Ubisoft+": _PC | {"PlayStation", "Xbox"},
    "Nintendo Switch Online": frozenset({"Nintendo"}),
    "Apple Arcade": frozenset({"iOS", "Mac"}),
    "Google Play Pass": frozenset({"Android"}),
}
