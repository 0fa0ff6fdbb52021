# gamelog/core/device.py

"""Device dataclass and platform vocabulary for user-declared hardware.

A Device is something the user owns and plays on (a desktop, a Steam Deck,
a console). It declares the canonical platform tags it supports and, per
platform, the stores and subscription services the user has there. The
engines only ever read devices.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

__all__ = [
    "COMPUTER_PLATFORMS",
    "DEVICE_CATEGORY_PLATFORMS",
    "Device",
    "DeviceCategory",
]


class DeviceCategory(Enum):
    """Fixed set of device categories.

    Attributes:
        COMPUTER: Desktop or laptop.
        HANDHELD: Portable PC or dedicated handheld.
        CONSOLE: Home console.
        HYBRID: Docked/undocked hybrid (e.g. Switch).
        MOBILE: Phone or tablet.
        CUSTOM: Anything else, including retro/emulation boxes.
    """

    COMPUTER = "computer"
    HANDHELD = "handheld"
    CONSOLE = "console"
    HYBRID = "hybrid"
    MOBILE = "mobile"
    CUSTOM = "custom"


# Platform tags that count as "a PC" for store and label purposes
COMPUTER_PLATFORMS: frozenset[str] = frozenset({"PC", "Windows", "Mac", "Linux", "SteamOS"})

# Platforms a new device of each category may declare
DEVICE_CATEGORY_PLATFORMS: dict[DeviceCategory, tuple[str, ...]] = {
    DeviceCategory.COMPUTER: ("Windows", "Mac", "Linux", "SteamOS"),
    DeviceCategory.CONSOLE: ("PlayStation", "Xbox", "Nintendo", "Retro"),
    DeviceCategory.HANDHELD: ("Windows", "SteamOS", "Nintendo", "iOS", "Android"),
    DeviceCategory.HYBRID: ("Windows", "SteamOS", "Nintendo"),
    DeviceCategory.MOBILE: ("iOS", "Android"),
    DeviceCategory.CUSTOM: (
        "Windows",
        "Mac",
        "Linux",
        "PlayStation",
        "Xbox",
        "Nintendo",
        "Retro",
        "Emulation",
        "Other",
    ),
}


def _as_tuple(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value)


@dataclass(frozen=True)
class Device:
    """A user-declared gaming device.

    Attributes:
        id: Stable identifier.
        name: Display name.
        category: One of the DeviceCategory values.
        platforms: Canonical platform tags the device supports.
        platform_stores: Platform tag -> store names available there.
        platform_subscriptions: Platform tag -> subscription names.
        enabled: Disabled devices are hidden from the creation flow.
    """

    id: str
    name: str
    category: DeviceCategory = DeviceCategory.CUSTOM
    platforms: tuple[str, ...] = ()
    # Mappings stay out of the hash; equal devices still hash equal
    platform_stores: dict[str, tuple[str, ...]] = field(default_factory=dict, hash=False)
    platform_subscriptions: dict[str, tuple[str, ...]] = field(default_factory=dict, hash=False)
    enabled: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Device:
        """Builds a Device from its settings-file representation.

        Accepts both the camelCase keys written by older settings files
        and snake_case keys.

        Args:
            data: Raw device dict.

        Returns:
            The parsed Device.

        Raises:
            KeyError: If ``id`` is missing.
            ValueError: If the category is not a known DeviceCategory.
        """
        stores = data.get("platform_stores", data.get("platformStores")) or {}
        subs = data.get("platform_subscriptions", data.get("platformSubscriptions")) or {}
        category = data.get("category", data.get("type")) or DeviceCategory.CUSTOM.value

        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or data["id"]),
            category=DeviceCategory(category),
            platforms=_as_tuple(data.get("platforms")),
            platform_stores={str(k): _as_tuple(v) for k, v in stores.items()},
            platform_subscriptions={str(k): _as_tuple(v) for k, v in subs.items()},
            enabled=bool(data.get("enabled", data.get("isActive", True))),
        )

    def supports(self, tags: frozenset[str] | set[str]) -> bool:
        """Whether any of this device's platforms is in ``tags``."""
        return any(p in tags for p in self.platforms)

    def is_computer(self) -> bool:
        return any(p in COMPUTER_PLATFORMS for p in self.platforms)

    def unexpected_platforms(self) -> tuple[str, ...]:
        """Declared platforms that a device of this category does not offer."""
        allowed = DEVICE_CATEGORY_PLATFORMS[self.category]
        return tuple(p for p in self.platforms if p not in allowed)

    def stores_for(self, platform: str) -> tuple[str, ...]:
        return self.platform_stores.get(platform, ())

    def subscriptions_for(self, platform: str) -> tuple[str, ...]:
        return self.platform_subscriptions.get(platform, ())

    def all_stores(self) -> list[str]:
        """Every store across all platforms, first occurrence order."""
        seen: dict[str, None] = {}
        for platform in self.platforms:
            for store in self.stores_for(platform):
                seen.setdefault(store, None)
        return list(seen)

    def all_subscriptions(self) -> list[str]:
        seen: dict[str, None] = {}
        for platform in self.platforms:
            for sub in self.subscriptions_for(platform):
                seen.setdefault(sub, None)
        return list(seen)
