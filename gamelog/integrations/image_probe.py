"""Image measurement for the artwork classifier.

Opens uploaded image files with Pillow and reports pixel width, height and
whether the image has any transparency. Transparency is decided once per
file by sampling the alpha channel on a fixed grid, so large images cost
the same as small ones.
"""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from gamelog.core.artwork import UploadedImage

logger = logging.getLogger("gamelog.image_probe")

__all__ = [
    "ACCEPTED_EXTENSIONS",
    "ALPHA_SAMPLE_GRID",
    "MAX_FILE_SIZE",
    "is_supported_file",
    "probe_image",
    "probe_images",
]

ACCEPTED_EXTENSIONS: frozenset[str] = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp"})

MAX_FILE_SIZE = 10 * 1024 * 1024

# Alpha is sampled on at most this many points per axis
ALPHA_SAMPLE_GRID = 64

_ALPHA_MODES: frozenset[str] = frozenset({"RGBA", "LA", "PA", "La", "RGBa"})


def is_supported_file(path: Path) -> bool:
    """Image extension and under MAX_FILE_SIZE."""
    if path.suffix.lower() not in ACCEPTED_EXTENSIONS:
        return False
    try:
        return path.stat().st_size < MAX_FILE_SIZE
    except OSError:
        return False


def _has_transparency(img: Image.Image) -> bool:
    """Samples the alpha channel; True if any sample is not fully opaque."""
    if img.mode not in _ALPHA_MODES and "transparency" not in img.info:
        return False

    alpha = img.convert("RGBA").getchannel("A")
    width, height = alpha.size
    sample_size = (min(width, ALPHA_SAMPLE_GRID), min(height, ALPHA_SAMPLE_GRID))
    if sample_size != alpha.size:
        alpha = alpha.resize(sample_size, Image.Resampling.NEAREST)

    lowest, _ = alpha.getextrema()
    return lowest < 255


def probe_image(path: Path) -> UploadedImage | None:
    """Measures one image file.

    Args:
        path: Image file.

    Returns:
        The UploadedImage, or None if the file can't be read as an image.
    """
    try:
        with Image.open(path) as img:
            width, height = img.size
            transparent = _has_transparency(img)
    except (OSError, UnidentifiedImageError, ValueError) as exc:
        logger.warning("Could not read image %s: %s", path.name, exc)
        return None

    return UploadedImage(
        name=path.name,
        width=width,
        height=height,
        has_transparency=transparent,
        path=path,
    )


def probe_images(paths: list[Path]) -> tuple[list[UploadedImage], list[Path]]:
    """Measures several files, skipping unsupported or unreadable ones.

    Args:
        paths: Candidate files, in upload order.

    Returns:
        Tuple of (measured images in input order, skipped paths).
    """
    images: list[UploadedImage] = []
    skipped: list[Path] = []

    for path in paths:
        if not is_supported_file(path):
            skipped.append(path)
            continue
        image = probe_image(path)
        if image is None:
            skipped.append(path)
        else:
            images.append(image)

    if skipped:
        logger.info("Skipped %d file(s) (invalid type, too large or unreadable)", len(skipped))
    return images, skipped
