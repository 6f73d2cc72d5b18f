"""
Built-in business-rule anomalies on well-known field names.
"""

from collections.abc import Mapping
from typing import Any

from quality_engine.core.models import AnomalyType, DataAnomaly, Severity

from .base import FieldDetector, is_number


class BusinessRuleDetector(FieldDetector):
    """
    Checks common business invariants on top-level scalar fields.

    - ``price`` must not be negative (CRITICAL)
    - ``percentage`` must lie in [0, 100] (MAJOR)
    """

    def detect(self, record: Mapping[str, Any]) -> list[DataAnomaly]:
        anomalies = []

        price = record.get("price")
        if is_number(price) and float(price) < 0:
            anomalies.append(self.anomaly(
                field_name="price",
                anomaly_type=AnomalyType.BUSINESS_RULE,
                value=price,
                severity=Severity.CRITICAL,
                description="Negative price detected",
                detection_method="Business Rule",
            ))

        percentage = record.get("percentage")
        if is_number(percentage):
            pct = float(percentage)
            if pct < 0 or pct > 100:
                anomalies.append(self.anomaly(
                    field_name="percentage",
                    anomaly_type=AnomalyType.BUSINESS_RULE,
                    value=percentage,
                    severity=Severity.MAJOR,
                    description=f"Invalid percentage value: {pct}",
                    detection_method="Business Rule",
                ))

        return anomalies
