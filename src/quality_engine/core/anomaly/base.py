"""
Shared plumbing for the field-level anomaly detectors.
"""

import numbers
from collections.abc import Callable, Collection, Mapping
from datetime import datetime
from decimal import Decimal
from typing import Any

from quality_engine.core.config import DetectionConfig
from quality_engine.core.models import AnomalyType, DataAnomaly, Severity
from quality_engine.core.severity import SeverityClassifier
from quality_engine.utils.timestamps import is_timestamp


def is_number(value: Any) -> bool:
    """Real numbers and Decimals; booleans are not numbers here."""
    if isinstance(value, bool):
        return False
    return isinstance(value, numbers.Real | Decimal)


def as_collection(value: Any) -> list | None:
    """The value as a list when it is a non-string collection, else None."""
    if isinstance(value, str | bytes | bytearray | Mapping):
        return None
    if isinstance(value, Collection):
        return list(value)
    return None


def is_numeric_collection(values: list) -> bool:
    return bool(values) and all(is_number(v) for v in values)


def is_string_collection(values: list) -> bool:
    return bool(values) and all(isinstance(v, str) for v in values)


def is_timestamp_collection(values: list) -> bool:
    return bool(values) and all(is_timestamp(v) for v in values)


class FieldDetector:
    """
    Base class for detectors that inspect one field value at a time.

    Holds the detection thresholds, the severity classifier and the clock
    used to stamp anomalies.
    """

    def __init__(
        self,
        config: DetectionConfig,
        classifier: SeverityClassifier,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.config = config
        self.classifier = classifier
        self.clock = clock

    def anomaly(
        self,
        field_name: str,
        anomaly_type: AnomalyType,
        value: Any,
        severity: Severity,
        description: str,
        detection_method: str,
        score: float | None = None,
        index: int | None = None,
    ) -> DataAnomaly:
        return DataAnomaly(
            field_name=field_name,
            anomaly_type=anomaly_type,
            value=value,
            score=score,
            severity=severity,
            description=description,
            detection_method=detection_method,
            detection_time=self.clock(),
            index=index,
        )
