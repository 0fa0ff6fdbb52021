# gamelog/services/store_service.py

"""Store and subscription helpers for the device confirmation step.

After the platform resolver has narrowed the device list, the user picks
where they own the game on each device. StoreService supplies the store
suggestions for the per-device search field, the compact platform label
for computer devices, and the platform summary written into the record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from gamelog.core.device import COMPUTER_PLATFORMS
from gamelog.services.store_constants import PREDEFINED_STORES, STORE_PLATFORMS, SUBSCRIPTION_PLATFORMS
from gamelog.utils.i18n import t

if TYPE_CHECKING:
    from gamelog.core.device import Device

logger = logging.getLogger("gamelog.store_service")

__all__ = ["StoreService", "StoreSuggestion"]


@dataclass(frozen=True)
class StoreSuggestion:
    """One row of the store dropdown.

    Attributes:
        store: Store name to add.
        label: Text to display.
        custom: True for the free-text "add custom" row.
    """

    store: str
    label: str
    custom: bool = False


class StoreService:
    """Stateless store/subscription logic shared by the creation flow."""

    @staticmethod
    def is_store_compatible(store: str, platform: str) -> bool:
        """Whether a predefined store exists on a platform.

        Unknown (custom) stores are accepted everywhere.
        """
        platforms = STORE_PLATFORMS.get(store)
        return platforms is None or platform in platforms

    @staticmethod
    def is_store_compatible_with_device(store: str, device: Device) -> bool:
        return any(StoreService.is_store_compatible(store, p) for p in device.platforms)

    @staticmethod
    def subscriptions_for_platform(platform: str) -> list[str]:
        return [name for name, platforms in SUBSCRIPTION_PLATFORMS.items() if platform in platforms]

    @staticmethod
    def suggest_stores(query: str, device: Device, selected: list[str] | None = None) -> list[StoreSuggestion]:
        """Dropdown rows for the per-device store search field.

        Predefined stores matching ``query`` (case-insensitive substring)
        that run on the device and are neither selected nor already on
        the device, followed by an "add custom" row.

        Args:
            query: Text typed so far.
            device: Device the stores are for.
            selected: Stores already chosen for this game on the device.

        Returns:
            Suggestions; empty for a blank query.
        """
        text = query.strip()
        if not text:
            return []

        excluded = set(selected or ()) | set(device.all_stores())
        needle = text.lower()

        suggestions = [
            StoreSuggestion(store, store)
            for store in PREDEFINED_STORES
            if needle in store.lower()
            and store not in excluded
            and StoreService.is_store_compatible_with_device(store, device)
        ]
        suggestions.append(StoreSuggestion(text, t("store.add_custom", name=text), custom=True))
        return suggestions

    @staticmethod
    def smart_platform_label(devices: list[Device]) -> str:
        """Compact label for the user's computer platforms, e.g. "PC/Linux".

        PC (covering Windows) comes first, then Mac, then Linux; SteamOS
        is listed only when Linux isn't. Defaults to "PC".
        """
        platforms = {p for d in devices for p in d.platforms if p in COMPUTER_PLATFORMS}

        labels: list[str] = []
        if "PC" in platforms or "Windows" in platforms:
            labels.append("PC")
        if "Mac" in platforms:
            labels.append("Mac")
        if "Linux" in platforms:
            labels.append("Linux")
        elif "SteamOS" in platforms:
            labels.append("SteamOS")

        return "/".join(labels) if labels else "PC"

    @staticmethod
    def platform_summary(
        devices: list[Device],
        device_stores: dict[str, list[str]],
        subscriptions: list[str],
    ) -> str:
        """One-line "where do I own this" summary for the record.

        Example: ``Steam Deck (Steam, *PC Game Pass*), PlayStation 5``.

        Args:
            devices: Devices the user confirmed.
            device_stores: Device id -> stores chosen for this game.
            subscriptions: Subscriptions that provide this game.

        Returns:
            Comma-joined summary.
        """
        parts: list[str] = []
        for device in devices:
            device_subs = set(device.all_subscriptions())
            sources = list(device_stores.get(device.id, []))
            sources += [f"*{sub}*" for sub in subscriptions if sub in device_subs]
            parts.append(f"{device.name} ({', '.join(sources)})" if sources else device.name)
        return ", ".join(parts)
