# gamelog/core/artwork.py

"""Artwork slot configuration and image assignment records.

Defines the measured image (UploadedImage), the expected artwork targets
(ArtworkSlot, DEFAULT_ARTWORK_SLOTS) and the classifier output
(ImageAssignment). Slots are configuration, not user data.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

__all__ = [
    "ArtworkSlot",
    "AspectBand",
    "Confidence",
    "DEFAULT_ARTWORK_SLOTS",
    "ImageAssignment",
    "UploadedImage",
    "validate_slots",
]


class Confidence(Enum):
    """How sure the classifier is about an assignment."""

    HIGH = "high"
    LOW = "low"


class AspectBand(Enum):
    """Aspect-ratio band a slot claims when no dimension matches.

    Attributes:
        PORTRAIT: ratio < 0.8
        ULTRA_WIDE: ratio > 2.5
        WIDE: ratio > 1.5
    """

    PORTRAIT = "portrait"
    ULTRA_WIDE = "ultra_wide"
    WIDE = "wide"


@dataclass(frozen=True)
class UploadedImage:
    """An image file measured by the decoding collaborator.

    Attributes:
        name: File name, used in explanations and conflict reports.
        width: Pixel width.
        height: Pixel height.
        has_transparency: True if any sampled pixel is not fully opaque.
        path: Source file, if the image came from disk.
    """

    name: str
    width: int
    height: int
    has_transparency: bool = False
    path: Path | None = None

    @property
    def aspect_ratio(self) -> float | None:
        """Width / height, or None for degenerate sizes."""
        if self.width <= 0 or self.height <= 0:
            return None
        return self.width / self.height


@dataclass(frozen=True)
class ArtworkSlot:
    """A named artwork target.

    Exactly one slot in a slot set is transparency-defined; all others
    are matched by dimensions within ``tolerance`` pixels.

    Attributes:
        name: Slot key (also the record field prefix, e.g. "box_art").
        width: Target width (ignored for the transparency slot).
        height: Target height (ignored for the transparency slot).
        tolerance: Allowed deviation in pixels, per dimension.
        requires_transparency: Matched by alpha instead of size.
        aspect_band: Fallback band for images that match no size.
    """

    name: str
    width: int = 0
    height: int = 0
    tolerance: int = 0
    requires_transparency: bool = False
    aspect_band: AspectBand | None = None

    def __post_init__(self) -> None:
        if self.tolerance < 0:
            raise ValueError(f"Slot '{self.name}': tolerance must be >= 0, got {self.tolerance}")
        if not self.requires_transparency and (self.width <= 0 or self.height <= 0):
            raise ValueError(f"Slot '{self.name}': dimension slots need a positive width and height")

    def matches_dimensions(self, width: int, height: int) -> bool:
        if self.requires_transparency:
            return False
        return abs(width - self.width) <= self.tolerance and abs(height - self.height) <= self.tolerance


@dataclass(frozen=True)
class ImageAssignment:
    """Classifier verdict for one uploaded image.

    Attributes:
        image: The image this verdict is about.
        slot: Assigned slot name, or None if unclassified.
        confidence: HIGH for transparency/dimension matches, LOW otherwise.
        message: Human-readable explanation.
        conflict: True when another image claims the same slot.
    """

    image: UploadedImage
    slot: str | None
    confidence: Confidence
    message: str
    conflict: bool = False

    @property
    def is_auto_assignable(self) -> bool:
        """High confidence, a slot, and nobody else wants it."""
        return self.confidence is Confidence.HIGH and self.slot is not None and not self.conflict


# Priority order matters: the first dimension slot within tolerance wins.
DEFAULT_ARTWORK_SLOTS: tuple[ArtworkSlot, ...] = (
    ArtworkSlot("box_art", width=600, height=900, tolerance=50, aspect_band=AspectBand.PORTRAIT),
    ArtworkSlot("header", width=460, height=215, tolerance=30, aspect_band=AspectBand.WIDE),
    ArtworkSlot("hero", width=1920, height=620, tolerance=150, aspect_band=AspectBand.ULTRA_WIDE),
    ArtworkSlot("logo", requires_transparency=True),
)


def validate_slots(slots: tuple[ArtworkSlot, ...] | list[ArtworkSlot]) -> None:
    """Checks a slot set is usable by the classifier.

    Raises:
        ValueError: On duplicate names, or if the set does not contain
            exactly one transparency slot.
    """
    names = [s.name for s in slots]
    if len(names) != len(set(names)):
        raise ValueError(f"Duplicate artwork slot names: {names}")

    transparency_slots = [s for s in slots if s.requires_transparency]
    if len(transparency_slots) != 1:
        raise ValueError(f"Expected exactly one transparency slot, found {len(transparency_slots)}")
