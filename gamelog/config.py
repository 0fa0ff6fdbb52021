"""
Configuration - settings file and environment handling.
Holds the catalog API key, the user's declared devices and the
subscription toggles that the game creation flow reads.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from gamelog.core.device import Device

logger = logging.getLogger("gamelog.config")


__all__ = ["Config", "PROTON_TIER_ORDER", "config"]

# Best to worst, as reported by ProtonDB
PROTON_TIER_ORDER: tuple[str, ...] = ("native", "platinum", "gold", "silver", "bronze", "borked")


@dataclass
class Config:
    """
    Central configuration handling for the application.
    Manages paths, settings, API keys and the device list.
    """

    APP_DIR: Path = Path(__file__).parent.parent
    DATA_DIR: Path = APP_DIR / "data"

    SETTINGS_FILE: Path = DATA_DIR / "settings.json"

    UI_LANGUAGE: str = "en"

    # API KEYS
    RAWG_API_KEY: str | None = None

    # Length of the ranked result list
    MAX_SEARCH_RESULTS: int = 8

    PROTON_ACCEPTED_TIERS: tuple[str, ...] = PROTON_TIER_ORDER[:4]

    # Raw device dicts as stored in settings.json
    USER_DEVICES: list[dict] = None

    ENABLED_SUBSCRIPTIONS: dict[str, bool] = None

    def __post_init__(self):
        """Load settings and environment overrides after instantiation."""
        if self.USER_DEVICES is None:
            self.USER_DEVICES = []

        if self.ENABLED_SUBSCRIPTIONS is None:
            self.ENABLED_SUBSCRIPTIONS = {}

        self._load_settings()

        load_dotenv()
        env_key = os.getenv("RAWG_API_KEY")
        if env_key:
            self.RAWG_API_KEY = env_key

    def _load_settings(self) -> None:
        """Load settings from JSON file."""
        # Local import to avoid circular dependency
        from gamelog.utils.i18n import t

        if not self.SETTINGS_FILE.exists():
            return

        try:
            with open(self.SETTINGS_FILE, "r", encoding="utf-8") as f:
                data = json.load(f)

                self.UI_LANGUAGE = data.get("ui_language", self.UI_LANGUAGE)
                self.RAWG_API_KEY = data.get("rawg_api_key", self.RAWG_API_KEY)
                self.MAX_SEARCH_RESULTS = data.get("max_search_results", self.MAX_SEARCH_RESULTS)

                tiers = data.get("proton_accepted_tiers")
                if tiers:
                    self.PROTON_ACCEPTED_TIERS = tuple(str(tier).lower() for tier in tiers)

                self.USER_DEVICES = data.get("user_devices", [])
                self.ENABLED_SUBSCRIPTIONS = data.get("enabled_subscriptions", {})

        except (OSError, json.JSONDecodeError) as e:
            logger.error(t("logs.config.load_error", error=e))

    def save(self) -> None:
        """Save current configuration to JSON file."""
        from gamelog.utils.i18n import t

        data = {
            "ui_language": self.UI_LANGUAGE,
            "rawg_api_key": self.RAWG_API_KEY,
            "max_search_results": self.MAX_SEARCH_RESULTS,
            "proton_accepted_tiers": list(self.PROTON_ACCEPTED_TIERS),
            "user_devices": self.USER_DEVICES,
            "enabled_subscriptions": self.ENABLED_SUBSCRIPTIONS,
        }

        try:
            self.SETTINGS_FILE.parent.mkdir(parents=True, exist_ok=True)
            with open(self.SETTINGS_FILE, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.error(t("logs.config.save_error", error=e))

    def get_devices(self, active_only: bool = True) -> list[Device]:
        """Builds Device objects from the stored device dicts.

        Malformed entries are skipped with a warning. Devices that declare
        platforms their category does not offer are kept, and logged.

        Args:
            active_only: Skip devices the user has disabled.

        Returns:
            Devices in settings order.
        """
        from gamelog.utils.i18n import t

        devices: list[Device] = []
        for raw in self.USER_DEVICES:
            try:
                device = Device.from_dict(raw)
            except (TypeError, ValueError, KeyError) as e:
                logger.warning(t("logs.config.device_skipped", error=e))
                continue
            if active_only and not device.enabled:
                continue
            unexpected = device.unexpected_platforms()
            if unexpected:
                logger.warning(
                    t(
                        "logs.config.device_platforms",
                        device=device.name,
                        category=device.category.value,
                        platforms=", ".join(unexpected),
                    )
                )
            devices.append(device)
        return devices

    def is_subscription_enabled(self, name: str) -> bool:
        return self.ENABLED_SUBSCRIPTIONS.get(name) is True


# Global instance
config = Config()
