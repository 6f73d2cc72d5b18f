"""
Severity classification of numeric deviation scores.
"""

from quality_engine.core.config import SeverityThresholds
from quality_engine.core.models import Severity


class SeverityClassifier:
    """
    Maps a deviation score to a four-level severity.

    Boundaries are strict: a score equal to a threshold falls into the
    lower level.
    """

    def __init__(self, thresholds: SeverityThresholds | None = None):
        self.thresholds = thresholds or SeverityThresholds()

    def classify(self, score: float) -> Severity:
        if score > self.thresholds.critical:
            return Severity.CRITICAL
        if score > self.thresholds.major:
            return Severity.MAJOR
        if score > self.thresholds.minor:
            return Severity.MINOR
        return Severity.INFO
