"""
Statistical, pattern, temporal and business-rule anomaly detection.
"""

from .business import BusinessRuleDetector
from .detector import AnomalyDetector
from .patterns import PatternDetector, derive_pattern
from .statistical import StatisticalDetector
from .temporal import TemporalDetector

__all__ = [
    "AnomalyDetector",
    "StatisticalDetector",
    "PatternDetector",
    "TemporalDetector",
    "BusinessRuleDetector",
    "derive_pattern",
]
