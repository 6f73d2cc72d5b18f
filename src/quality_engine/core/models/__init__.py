"""
Core data models for the quality engine.

All models use Pydantic for runtime validation and type safety.
"""

from .data_anomaly import DataAnomaly
from .data_profile import DataProfile, FieldProfile, NumericStatistics, StringStatistics
from .enums import AnomalyType, QualityCheckStatus, RuleType, Severity
from .quality_check import DataQualityCheck
from .quality_issue import QualityIssue
from .quality_metrics import QualityMetrics
from .quality_report import DataQualityReport
from .quality_rule import QualityRule

__all__ = [
    "Severity",
    "RuleType",
    "AnomalyType",
    "QualityCheckStatus",
    "QualityRule",
    "DataQualityCheck",
    "QualityMetrics",
    "QualityIssue",
    "DataAnomaly",
    "DataQualityReport",
    "DataProfile",
    "FieldProfile",
    "NumericStatistics",
    "StringStatistics",
]
