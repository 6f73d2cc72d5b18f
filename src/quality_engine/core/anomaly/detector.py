"""
Anomaly detection over a record of scalar and collection fields.

Each field is routed by the shape of its value: numeric collections to the
statistical methods, strings and string collections to pattern analysis,
timestamps and timestamp collections to temporal analysis. Business-rule
checks run once per record. The combined list is stably sorted by
descending severity.
"""

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from quality_engine.core.config import DetectionConfig
from quality_engine.core.models import DataAnomaly
from quality_engine.core.severity import SeverityClassifier
from quality_engine.observability.logger import get_logger
from quality_engine.observability.metrics import (
    evaluation_duration_seconds,
    record_anomaly,
    track_duration,
)
from quality_engine.utils.timestamps import is_timestamp

from .base import (
    as_collection,
    is_number,
    is_numeric_collection,
    is_string_collection,
    is_timestamp_collection,
)
from .business import BusinessRuleDetector
from .patterns import PatternDetector
from .statistical import StatisticalDetector
from .temporal import TemporalDetector

logger = get_logger(__name__)


class AnomalyDetector:
    """
    Scans per-field values for statistical, pattern, temporal and
    business-rule anomalies.

    Holds no state between calls; one instance can serve concurrent callers.
    """

    def __init__(
        self,
        config: DetectionConfig | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the detector.

        Args:
            config: Detection thresholds (defaults reproduce production values)
            clock: Source of "now" for temporal checks and detection times
        """
        self.config = config or DetectionConfig()
        self.classifier = SeverityClassifier(self.config.severity_thresholds)
        self.statistical = StatisticalDetector(self.config, self.classifier, clock)
        self.patterns = PatternDetector(self.config, self.classifier, clock)
        self.temporal = TemporalDetector(self.config, self.classifier, clock)
        self.business_rules = BusinessRuleDetector(self.config, self.classifier, clock)

    def detect(self, record: Mapping[str, Any]) -> list[DataAnomaly]:
        """
        Detect anomalies in a record.

        A field whose analysis fails is logged and skipped; this method
        does not raise for any record content.

        Args:
            record: Field name -> scalar or homogeneous collection

        Returns:
            Anomalies sorted by descending severity, detection order kept for ties
        """
        anomalies: list[DataAnomaly] = []

        with track_duration(evaluation_duration_seconds, operation="detect"):
            for field_name, value in record.items():
                try:
                    anomalies.extend(self.detect_field(str(field_name), value))
                except Exception as e:
                    logger.warning(
                        f"Anomaly detection failed for field '{field_name}': {e}",
                        extra={"field_name": str(field_name), "error_type": type(e).__name__},
                    )

            try:
                anomalies.extend(self.business_rules.detect(record))
            except Exception as e:
                logger.warning(
                    f"Business rule anomaly detection failed: {e}",
                    extra={"error_type": type(e).__name__},
                )

        # sorted() is stable, also with reverse=True
        anomalies = sorted(anomalies, key=lambda anomaly: anomaly.severity.rank, reverse=True)

        for anomaly in anomalies:
            record_anomaly(anomaly.anomaly_type.value, anomaly.severity.value)

        logger.info(f"Detected {len(anomalies)} anomalies in data with {len(record)} fields")
        return anomalies

    def detect_field(self, field_name: str, value: Any) -> list[DataAnomaly]:
        """Run the detectors that apply to the shape of one field value."""
        if value is None:
            return []

        if is_number(value):
            return self.statistical.detect_scalar(field_name, value)

        if isinstance(value, str):
            return self.patterns.detect_scalar(field_name, value)

        if is_timestamp(value):
            return self.temporal.detect_scalar(field_name, value)

        values = as_collection(value)
        if values is None:
            return []

        if is_numeric_collection(values):
            return self.statistical.detect_collection(field_name, values)

        if is_string_collection(values):
            return self.patterns.detect_collection(field_name, values)

        if is_timestamp_collection(values):
            return self.temporal.detect_collection(field_name, values)

        logger.debug(f"Field '{field_name}' has no detectable shape; skipped")
        return []
