#!/usr/bin/env python3
"""
Artwork Classifier Report - Game Log.

Runs the artwork classifier over every image in a folder and prints which
slot each file would be assigned to, how sure the classifier is, and
which slots have more than one candidate.

Usage:
    python scripts/classify_artwork.py path/to/images

Exit code 0 = every image auto-assigned, 1 = something needs review,
2 = bad usage or no images.
"""

from __future__ import annotations

import sys
from pathlib import Path

from gamelog.config import config
from gamelog.core.logging import setup_logging
from gamelog.integrations.image_probe import probe_images
from gamelog.services.image_classifier import ClassificationResult, ImageClassifier
from gamelog.utils.i18n import init_i18n, t

__all__ = ["main", "print_report"]


def print_report(result: ClassificationResult, skipped: list[Path]) -> None:
    """Prints one line per image, then conflicts and skipped files."""
    for assignment in result.assignments:
        slot = assignment.slot or "-"
        confidence = t(f"classifier.confidence.{assignment.confidence.value}")
        marker = "!" if not assignment.is_auto_assignable else " "
        print(f" {marker} {assignment.image.name:<32} {slot:<10} {confidence:<8} {assignment.message}")

    for slot, claimants in result.conflicts.items():
        names = ", ".join(a.image.name for a in claimants)
        print(f"\n  {t(f'artwork.slot_names.{slot}')}: {names}")

    for path in skipped:
        print(f"  {t('logs.artwork.skipped', name=path.name)}")


def main(argv: list[str] | None = None) -> int:
    """Entry point: probes the folder, classifies, prints a report."""
    args = sys.argv[1:] if argv is None else argv
    setup_logging()
    init_i18n(config.UI_LANGUAGE)

    if len(args) != 1:
        print(__doc__)
        return 2

    folder = Path(args[0])
    files = sorted(p for p in folder.iterdir() if p.is_file()) if folder.is_dir() else []
    images, skipped = probe_images(files)

    if not images:
        print(t("logs.artwork.no_images", folder=folder))
        return 2

    print("=" * 52)
    print(f"  {t('logs.artwork.report_header', folder=folder)}")
    print("=" * 52)

    result = ImageClassifier().classify_all(images)
    print_report(result, skipped)

    return 0 if not result.needs_review else 1


if __name__ == "__main__":
    sys.exit(main())
