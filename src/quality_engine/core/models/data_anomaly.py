"""
DataAnomaly model representing an unusual value found by the anomaly detector.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from .enums import AnomalyType, Severity


class DataAnomaly(BaseModel):
    """
    A statistically or structurally unusual value.

    Scores are specific to the detection method (z-score, IQR distance,
    isolation score) and are not comparable across methods.

    Attributes:
        field_name: Field the value came from
        anomaly_type: Kind of anomaly
        value: Offending value (truncated for LENGTH, day count for TEMPORAL_GAP)
        score: Method-specific score, None for rule-style detections
        severity: Severity of the anomaly
        description: Human-readable explanation
        detection_method: Name of the detection method
        detection_time: When the anomaly was detected
        index: Position in the source collection, None for scalar fields
    """

    field_name: str
    anomaly_type: AnomalyType
    value: Any = None
    score: float | None = None
    severity: Severity
    description: str
    detection_method: str
    detection_time: datetime = Field(default_factory=datetime.now)
    index: int | None = Field(None, ge=0)

    class Config:
        json_schema_extra = {
            "example": {
                "field_name": "amount",
                "anomaly_type": "OUTLIER",
                "value": 9800.0,
                "score": 4.12,
                "severity": "MAJOR",
                "description": "Value 9800.00 is 4.12 standard deviations from mean (132.50)",
                "detection_method": "Z-Score",
                "index": 17
            }
        }
