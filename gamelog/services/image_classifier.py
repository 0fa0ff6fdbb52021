# gamelog/services/image_classifier.py

"""Guesses which artwork slot each uploaded image belongs to.

Classification is a fixed decision list evaluated top to bottom; the first
rule whose predicate holds decides the slot:

1. small transparent image -> the transparency slot (logo)
2. each dimension slot, in slot order -> within tolerance of its size
3. aspect-ratio bands -> portrait (< 0.8), ultra-wide (> 2.5), wide (> 1.5)
4. otherwise unclassified

Rules 1-2 give HIGH confidence, 3-4 LOW. Two HIGH verdicts for the same
slot are a conflict: both go to the user instead of being auto-assigned.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field, replace
from typing import Callable

from gamelog.core.artwork import (
    ArtworkSlot,
    AspectBand,
    Confidence,
    DEFAULT_ARTWORK_SLOTS,
    ImageAssignment,
    UploadedImage,
    validate_slots,
)
from gamelog.utils.i18n import t

logger = logging.getLogger("gamelog.image_classifier")

__all__ = [
    "ClassificationResult",
    "ClassificationRule",
    "ImageClassifier",
    "PORTRAIT_MAX_RATIO",
    "SMALL_IMAGE_THRESHOLD",
    "ULTRA_WIDE_MIN_RATIO",
    "WIDE_MIN_RATIO",
    "build_rules",
]

# Transparent images must be smaller than this in both dimensions to be a logo
SMALL_IMAGE_THRESHOLD = 1300

PORTRAIT_MAX_RATIO = 0.8
ULTRA_WIDE_MIN_RATIO = 2.5
WIDE_MIN_RATIO = 1.5

# Checked in this order; ultra-wide before wide since the ranges nest
_ASPECT_BANDS: tuple[tuple[AspectBand, Callable[[float], bool]], ...] = (
    (AspectBand.PORTRAIT, lambda r: r < PORTRAIT_MAX_RATIO),
    (AspectBand.ULTRA_WIDE, lambda r: r > ULTRA_WIDE_MIN_RATIO),
    (AspectBand.WIDE, lambda r: r > WIDE_MIN_RATIO),
)


@dataclass(frozen=True)
class ClassificationRule:
    """One step of the decision list.

    Attributes:
        slot: Slot assigned when the predicate holds.
        confidence: Confidence of that assignment.
        reason_key: i18n key for the explanation.
        predicate: Test on the measured image.
    """

    slot: str
    confidence: Confidence
    reason_key: str
    predicate: Callable[[UploadedImage], bool] = field(compare=False)


def _is_small_transparent(image: UploadedImage) -> bool:
    return (
        image.has_transparency
        and image.width < SMALL_IMAGE_THRESHOLD
        and image.height < SMALL_IMAGE_THRESHOLD
    )


def _dimension_predicate(slot: ArtworkSlot) -> Callable[[UploadedImage], bool]:
    return lambda image: slot.matches_dimensions(image.width, image.height)


def _aspect_predicate(test: Callable[[float], bool]) -> Callable[[UploadedImage], bool]:
    def predicate(image: UploadedImage) -> bool:
        ratio = image.aspect_ratio
        return ratio is not None and test(ratio)

    return predicate


def build_rules(slots: tuple[ArtworkSlot, ...] | list[ArtworkSlot]) -> list[ClassificationRule]:
    """Turns a slot set into the ordered decision list.

    Args:
        slots: Slot set in priority order.

    Returns:
        Rules in evaluation order.

    Raises:
        ValueError: If the slot set is invalid (see ``validate_slots``).
    """
    validate_slots(slots)

    transparency_slot = next(s for s in slots if s.requires_transparency)
    rules = [
        ClassificationRule(
            transparency_slot.name,
            Confidence.HIGH,
            "classifier.reason.transparent",
            _is_small_transparent,
        )
    ]

    for slot in slots:
        if slot.requires_transparency:
            continue
        rules.append(
            ClassificationRule(slot.name, Confidence.HIGH, "classifier.reason.dimensions", _dimension_predicate(slot))
        )

    for band, test in _ASPECT_BANDS:
        slot = next((s for s in slots if s.aspect_band is band), None)
        if slot is None:
            continue
        rules.append(ClassificationRule(slot.name, Confidence.LOW, "classifier.reason.aspect", _aspect_predicate(test)))

    return rules


@dataclass(frozen=True)
class ClassificationResult:
    """Classifier output split into what needs the user and what doesn't.

    Attributes:
        assignments: One per input image, input order, conflicts flagged.
        auto_assigned: High confidence and collision-free.
        conflicts: Slot name -> every image claiming it (2 or more).
        low_confidence: Aspect-ratio guesses and unclassified images.
    """

    assignments: list[ImageAssignment]
    auto_assigned: list[ImageAssignment]
    conflicts: dict[str, list[ImageAssignment]]
    low_confidence: list[ImageAssignment]

    @property
    def needs_review(self) -> list[ImageAssignment]:
        """Conflicts and low-confidence images, in input order."""
        return [a for a in self.assignments if not a.is_auto_assignable]

    @property
    def slot_map(self) -> dict[str, UploadedImage]:
        """Slot name -> image for the auto-assigned images."""
        return {a.slot: a.image for a in self.auto_assigned}


class ImageClassifier:
    """Assigns uploaded images to artwork slots.

    Pure and deterministic: the same images always get the same verdicts,
    independent of dict or set ordering.
    """

    def __init__(self, slots: tuple[ArtworkSlot, ...] | list[ArtworkSlot] = DEFAULT_ARTWORK_SLOTS) -> None:
        self._slots = tuple(slots)
        self._rules = build_rules(self._slots)

    @property
    def slots(self) -> tuple[ArtworkSlot, ...]:
        return self._slots

    @property
    def rules(self) -> list[ClassificationRule]:
        return list(self._rules)

    def classify_image(self, image: UploadedImage) -> ImageAssignment:
        """Runs the decision list for one image."""
        for rule in self._rules:
            if rule.predicate(image):
                return ImageAssignment(
                    image=image,
                    slot=rule.slot,
                    confidence=rule.confidence,
                    message=t(
                        rule.reason_key,
                        name=image.name,
                        width=image.width,
                        height=image.height,
                        slot=t(f"artwork.slot_names.{rule.slot}"),
                    ),
                )

        return ImageAssignment(
            image=image,
            slot=None,
            confidence=Confidence.LOW,
            message=t("classifier.reason.unclassified", name=image.name, width=image.width, height=image.height),
        )

    def classify(self, images: list[UploadedImage]) -> list[ImageAssignment]:
        """Classifies every image; exactly one assignment per input image.

        Args:
            images: Measured images.

        Returns:
            Assignments in input order (conflicts not yet flagged).
        """
        return [self.classify_image(image) for image in images]

    @staticmethod
    def _flag_conflicts(assignments: list[ImageAssignment]) -> list[ImageAssignment]:
        """Copy of ``assignments`` with every claimant of a contested slot flagged."""
        counts = Counter(a.slot for a in assignments if a.confidence is Confidence.HIGH and a.slot is not None)

        flagged: list[ImageAssignment] = []
        for assignment in assignments:
            if assignment.confidence is not Confidence.HIGH or counts.get(assignment.slot, 0) < 2:
                flagged.append(assignment)
                continue
            flagged.append(
                replace(
                    assignment,
                    conflict=True,
                    message=t(
                        "classifier.reason.conflict",
                        name=assignment.image.name,
                        slot=t(f"artwork.slot_names.{assignment.slot}"),
                        count=counts[assignment.slot],
                    ),
                )
            )
        return flagged

    @staticmethod
    def detect_conflicts(assignments: list[ImageAssignment]) -> list[ImageAssignment]:
        """Finds high-confidence assignments that share a slot.

        Every claimant of a contested slot is returned re-flagged as a
        conflict (confidence stays HIGH, message explains the tie).

        Args:
            assignments: Output of ``classify``.

        Returns:
            The conflicting assignments, input order.
        """
        return [a for a in ImageClassifier._flag_conflicts(assignments) if a.conflict]

    def partition(self, assignments: list[ImageAssignment]) -> ClassificationResult:
        """Splits assignments into auto-assigned, conflicts and low confidence.

        Args:
            assignments: Output of ``classify``.

        Returns:
            The ClassificationResult.
        """
        merged = self._flag_conflicts(assignments)

        conflicts: dict[str, list[ImageAssignment]] = {}
        for assignment in merged:
            if assignment.conflict:
                conflicts.setdefault(assignment.slot, []).append(assignment)

        result = ClassificationResult(
            assignments=merged,
            auto_assigned=[a for a in merged if a.is_auto_assignable],
            conflicts=conflicts,
            low_confidence=[a for a in merged if a.confidence is Confidence.LOW],
        )
        logger.debug(
            "Classified %d images: %d auto, %d conflicting slots, %d low confidence",
            len(merged),
            len(result.auto_assigned),
            len(conflicts),
            len(result.low_confidence),
        )
        return result

    def classify_all(self, images: list[UploadedImage]) -> ClassificationResult:
        """``classify`` followed by ``partition``."""
        return self.partition(self.classify(images))
