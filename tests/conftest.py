# tests/conftest.py
from datetime import date
from unittest.mock import MagicMock, patch

import pytest

from gamelog.core.artwork import UploadedImage
from gamelog.core.catalog_entry import CatalogEntry
from gamelog.core.device import Device, DeviceCategory
from gamelog.utils.i18n import init_i18n

# Fixed "today" so recency scores never drift
TODAY = date(2026, 6, 1)


@pytest.fixture(autouse=True)
def english_locale():
    """Every test sees English strings, whatever a previous test loaded."""
    init_i18n("en")
    yield


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def sample_devices() -> list[Device]:
    """A typical device shelf: desktop, Deck, three consoles, a phone."""
    return [
        Device(
            id="desktop",
            name="Gaming PC",
            category=DeviceCategory.COMPUTER,
            platforms=("Windows",),
            platform_stores={"Windows": ("Steam", "GOG")},
            platform_subscriptions={"Windows": ("PC Game Pass",)},
        ),
        Device(
            id="deck",
            name="Steam Deck",
            category=DeviceCategory.HANDHELD,
            platforms=("SteamOS",),
            platform_stores={"SteamOS": ("Steam",)},
        ),
        Device(
            id="ps5",
            name="PlayStation 5",
            category=DeviceCategory.CONSOLE,
            platforms=("PlayStation",),
            platform_stores={"PlayStation": ("PlayStation Store",)},
            platform_subscriptions={"PlayStation": ("PlayStation Plus",)},
        ),
        Device(
            id="switch",
            name="Nintendo Switch",
            category=DeviceCategory.HYBRID,
            platforms=("Nintendo",),
            platform_stores={"Nintendo": ("Nintendo eShop",)},
        ),
        Device(
            id="phone",
            name="Phone",
            category=DeviceCategory.MOBILE,
            platforms=("Android",),
        ),
    ]


@pytest.fixture
def sample_entries() -> list[CatalogEntry]:
    """Catalog results the way a RAWG search for "portal" comes back."""
    return [
        CatalogEntry(
            id="4200",
            name="Portal 2",
            genres=("Puzzle",),
            platforms=("PC", "PlayStation 3", "Xbox 360", "macOS", "Linux"),
            released=date(2011, 4, 18),
            popularity=19000,
            rating=4.6,
        ),
        CatalogEntry(
            id="4286",
            name="Portal",
            genres=("Puzzle",),
            platforms=("PC", "Xbox 360", "PlayStation 3", "Linux", "macOS", "Android"),
            released=date(2007, 10, 9),
            popularity=14000,
            rating=4.5,
        ),
        CatalogEntry(
            id="9999",
            name="Portal Knights",
            genres=("RPG",),
            platforms=("PC", "Nintendo Switch"),
            released=date(2017, 5, 18),
            popularity=3000,
            rating=3.4,
        ),
    ]


@pytest.fixture
def opaque_box_art() -> UploadedImage:
    return UploadedImage(name="cover.jpg", width=600, height=900)


@pytest.fixture
def transparent_logo() -> UploadedImage:
    return UploadedImage(name="logo.png", width=512, height=512, has_transparency=True)


@pytest.fixture
def mock_config():
    """Mock the global config object from gamelog.config.

    Provides a MagicMock that stands in for the Config singleton so tests
    never read a real settings file or .env.
    """
    fake_config = MagicMock()
    fake_config.RAWG_API_KEY = "test-key"
    fake_config.MAX_SEARCH_RESULTS = 8
    fake_config.PROTON_ACCEPTED_TIERS = ("native", "platinum", "gold", "silver")
    fake_config.ENABLED_SUBSCRIPTIONS = {}
    fake_config.get_devices.return_value = []
    with patch("gamelog.config.config", fake_config):
        yield fake_config
