"""Confidence aggregation and tier classification."""

import math

from ...config.models import Config
from ..models import ConfidenceTier


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up (72.5 -> 73)."""
    return int(math.floor(value + 0.5))


class ConfidenceClassifier:
    """Merges per-field confidence and buckets it into tiers.

    ``overall >= high_threshold`` is high, ``overall >= medium_threshold`` is
    medium, anything else is low. The default thresholds (80 / 50) line up
    with the parser constants: exact ``[Studio][Model]Title`` matches land in
    high, single-field residual guesses land in low.
    """

    def __init__(self, config: Config):
        """Initialize classifier.

        Args:
            config: Application configuration.
        """
        self._high = config.tiers.high_threshold
        self._medium = config.tiers.medium_threshold

    def classify(self, overall: int) -> ConfidenceTier:
        """Classify an overall confidence score.

        Args:
            overall: Overall confidence (0-100).

        Returns:
            Confidence tier.
        """
        if overall >= self._high:
            return ConfidenceTier.HIGH
        if overall >= self._medium:
            return ConfidenceTier.MEDIUM
        return ConfidenceTier.LOW

    @staticmethod
    def overall(studio_confidence: int, model_confidence: int) -> int:
        """Merge field confidences into the overall score."""
        return round_half_up((studio_confidence + model_confidence) / 2)
