from __future__ import annotations

__all__: list[str] = ["ProtonDBClient", "RawgClient"]

from gamelog.integrations.protondb_api import ProtonDBClient
from gamelog.integrations.rawg_api import RawgClient
