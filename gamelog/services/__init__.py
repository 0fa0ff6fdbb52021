from __future__ import annotations

from gamelog.services.image_classifier import ImageClassifier
from gamelog.services.platform_resolver import PlatformResolver
from gamelog.services.search_ranker import SearchRanker

__all__: list[str] = [
    "ImageClassifier",
    "PlatformResolver",
    "SearchRanker",
]
