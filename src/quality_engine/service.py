"""
Quality check orchestration.

Coordinates the flow: select rules → evaluate → aggregate → report
"""

from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from typing import Any

from quality_engine.core.anomaly import AnomalyDetector
from quality_engine.core.collaborators import Collaborators
from quality_engine.core.config import DetectionConfig, ScoringConfig
from quality_engine.core.models import (
    DataAnomaly,
    DataProfile,
    DataQualityReport,
    QualityCheckStatus,
    QualityRule,
)
from quality_engine.core.profiling import DataProfiler
from quality_engine.core.reporting import IssueReporter
from quality_engine.core.rules import RuleEngine
from quality_engine.core.scoring import ScoreAggregator
from quality_engine.observability.logger import get_logger, log_operation
from quality_engine.observability.metrics import (
    evaluation_duration_seconds,
    quality_score,
    set_gauge,
    track_duration,
)
from quality_engine.utils.validation import validate_dataset_id

logger = get_logger(__name__)


class QualityService:
    """
    Runs quality checks, anomaly detection and profiling for a dataset record.

    Flow of ``execute_quality_check``:
    1. Validate the dataset identifier
    2. Select active rules that apply to the dataset type
    3. Evaluate every rule against the record
    4. Aggregate metrics and the quality score
    5. Build issues and recommendations
    6. Return a COMPLETED report (FAILED if the run itself broke)
    """

    def __init__(
        self,
        collaborators: Collaborators | None = None,
        detection_config: DetectionConfig | None = None,
        scoring_config: ScoringConfig | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the service.

        Args:
            collaborators: Stores and evaluators used by rule evaluation
            detection_config: Anomaly detection thresholds
            scoring_config: Quality score penalties
            clock: Source of "now" for report timestamps and temporal checks
        """
        self.clock = clock

        # Initialize components
        self.rule_engine = RuleEngine(collaborators or Collaborators(clock=clock))
        self.aggregator = ScoreAggregator(scoring_config)
        self.reporter = IssueReporter()
        self.detector = AnomalyDetector(detection_config, clock=clock)
        self.profiler = DataProfiler(clock=clock)

    def execute_quality_check(
        self,
        dataset_id: str | int,
        dataset_type: str,
        record: Mapping[str, Any],
        rules: Iterable[QualityRule],
    ) -> DataQualityReport:
        """
        Run all applicable rules against a record and build the report.

        Args:
            dataset_id: Identifier of the dataset being checked
            dataset_type: Type used to select rules
            record: Field name -> value mapping
            rules: Candidate rules; inactive ones and those bound to another
                   dataset type are skipped

        Returns:
            DataQualityReport with checks, metrics, score, issues and recommendations

        Raises:
            ValidationError: If dataset_id is malformed
        """
        dataset_id = validate_dataset_id(dataset_id)
        report = DataQualityReport(
            dataset_id=dataset_id,
            dataset_type=dataset_type,
            status=QualityCheckStatus.IN_PROGRESS,
            check_date=self.clock(),
        )

        try:
            with log_operation(
                "Quality check", logger=logger, dataset_id=dataset_id, dataset_type=dataset_type
            ), track_duration(evaluation_duration_seconds, operation="report"):
                applicable = self.select_rules(rules, dataset_type)
                logger.info(f"Applying {len(applicable)} rules to dataset {dataset_id}")

                checks = self.rule_engine.evaluate(record, applicable)
                metrics = self.aggregator.compute_metrics(checks)
                score = self.aggregator.compute_score(metrics)
                issues = self.reporter.build_issues(checks)

                report.checks = checks
                report.metrics = metrics
                report.quality_score = score
                report.issues = issues
                report.recommendations = self.reporter.build_recommendations(issues)
                report.status = QualityCheckStatus.COMPLETED

            set_gauge(quality_score, score, dataset_type=dataset_type)
            logger.info(
                f"Quality check completed for dataset {dataset_id}: score {score}",
                extra={"dataset_id": dataset_id, "quality_score": score, "issues": len(issues)},
            )

        except Exception as e:
            report.status = QualityCheckStatus.FAILED
            report.error_message = str(e) or type(e).__name__

        report.completion_time = self.clock()
        return report

    def detect_anomalies(self, record: Mapping[str, Any]) -> list[DataAnomaly]:
        """Detect anomalies in a record, most severe first."""
        return self.detector.detect(record)

    def profile(self, record: Mapping[str, Any]) -> DataProfile:
        """Profile every field of a record."""
        return self.profiler.profile(record)

    @staticmethod
    def select_rules(rules: Iterable[QualityRule], dataset_type: str) -> list[QualityRule]:
        """Active rules bound to ``dataset_type`` or to no dataset type at all."""
        return [
            rule for rule in rules
            if rule.active and rule.dataset_type in (None, dataset_type)
        ]
