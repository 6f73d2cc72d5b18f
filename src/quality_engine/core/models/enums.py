"""
Closed vocabularies shared by rules, checks and anomalies.
"""

from enum import Enum


class Severity(str, Enum):
    """
    Severity of a failed check or detected anomaly.

    Total order: CRITICAL > MAJOR > MINOR > INFO.
    """

    CRITICAL = "CRITICAL"
    MAJOR = "MAJOR"
    MINOR = "MINOR"
    INFO = "INFO"

    @property
    def rank(self) -> int:
        """Position in the severity order (higher is more severe)."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.CRITICAL: 3,
    Severity.MAJOR: 2,
    Severity.MINOR: 1,
    Severity.INFO: 0,
}


class RuleType(str, Enum):
    """The eight categories of data-quality rule."""

    COMPLETENESS = "COMPLETENESS"
    ACCURACY = "ACCURACY"
    CONSISTENCY = "CONSISTENCY"
    VALIDITY = "VALIDITY"
    UNIQUENESS = "UNIQUENESS"
    TIMELINESS = "TIMELINESS"
    REFERENTIAL_INTEGRITY = "REFERENTIAL_INTEGRITY"
    BUSINESS_RULE = "BUSINESS_RULE"


class AnomalyType(str, Enum):
    """Kinds of anomaly reported by the detector."""

    OUTLIER = "OUTLIER"
    ISOLATION = "ISOLATION"
    FORMAT = "FORMAT"
    LENGTH = "LENGTH"
    PATTERN = "PATTERN"
    TEMPORAL = "TEMPORAL"
    TEMPORAL_GAP = "TEMPORAL_GAP"
    INVALID_VALUE = "INVALID_VALUE"
    BUSINESS_RULE = "BUSINESS_RULE"


class QualityCheckStatus(str, Enum):
    """Lifecycle status of a data quality report."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"
