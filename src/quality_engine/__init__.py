"""
Data quality engine: rule evaluation, quality scoring, anomaly detection
and profiling for dataset records.
"""

from quality_engine.core.anomaly import AnomalyDetector
from quality_engine.core.collaborators import (
    Collaborators,
    ExpressionEvaluator,
    ReferenceStore,
    UniquenessStore,
)
from quality_engine.core.config import DetectionConfig, ScoringConfig, SeverityThresholds
from quality_engine.core.errors import (
    CollaboratorFailure,
    ConfigurationError,
    EvaluationError,
    QualityEngineError,
    RuleViolation,
)
from quality_engine.core.models import (
    AnomalyType,
    DataAnomaly,
    DataProfile,
    DataQualityCheck,
    DataQualityReport,
    QualityCheckStatus,
    QualityIssue,
    QualityMetrics,
    QualityRule,
    RuleType,
    Severity,
)
from quality_engine.core.profiling import DataProfiler
from quality_engine.core.reporting import IssueReporter
from quality_engine.core.rules import RuleConfigBuilder, RuleConfigLoader, RuleEngine
from quality_engine.core.scoring import ScoreAggregator
from quality_engine.core.severity import SeverityClassifier
from quality_engine.service import QualityService

__version__ = "0.1.0"

__all__ = [
    "QualityService",
    "RuleEngine",
    "RuleConfigLoader",
    "RuleConfigBuilder",
    "ScoreAggregator",
    "IssueReporter",
    "AnomalyDetector",
    "DataProfiler",
    "SeverityClassifier",
    "SeverityThresholds",
    "DetectionConfig",
    "ScoringConfig",
    "Collaborators",
    "UniquenessStore",
    "ReferenceStore",
    "ExpressionEvaluator",
    "QualityEngineError",
    "RuleViolation",
    "EvaluationError",
    "ConfigurationError",
    "CollaboratorFailure",
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
]
