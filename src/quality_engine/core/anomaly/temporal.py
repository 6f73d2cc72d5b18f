"""
Timestamp anomalies: implausible dates and long gaps in a sequence.
"""

from datetime import date

from quality_engine.core.models import AnomalyType, DataAnomaly, Severity
from quality_engine.utils.timestamps import now_like, to_datetime, years_before

from .base import FieldDetector


class TemporalDetector(FieldDetector):
    """Flags future/ancient timestamps and gaps between consecutive timestamps."""

    def detect_scalar(self, field_name: str, value: date) -> list[DataAnomaly]:
        timestamp = to_datetime(value)
        now = now_like(timestamp, self.clock)

        if timestamp > now + self.config.future_tolerance:
            description = f"Future date detected: {timestamp.isoformat()}"
        elif timestamp < years_before(now, self.config.max_age_years):
            description = f"Unusually old date detected: {timestamp.isoformat()}"
        else:
            return []

        return [self.anomaly(
            field_name=field_name,
            anomaly_type=AnomalyType.TEMPORAL,
            value=value,
            severity=Severity.MAJOR,
            description=description,
            detection_method="Temporal Validation",
        )]

    def detect_collection(self, field_name: str, values: list[date]) -> list[DataAnomaly]:
        """
        Flag gaps longer than ``max_temporal_gap_days`` between sorted timestamps.

        The anomaly sits on the later timestamp and its value is the gap in
        whole days.
        """
        timestamps = [to_datetime(value) for value in values]
        order = sorted(range(len(timestamps)), key=timestamps.__getitem__)

        anomalies = []
        for previous, current in zip(order, order[1:]):
            days_between = (timestamps[current] - timestamps[previous]).days
            if days_between > self.config.max_temporal_gap_days:
                anomalies.append(self.anomaly(
                    field_name=field_name,
                    anomaly_type=AnomalyType.TEMPORAL_GAP,
                    value=days_between,
                    score=float(days_between),
                    severity=Severity.MINOR,
                    description=(
                        f"Large temporal gap: {days_between} days before "
                        f"{timestamps[current].isoformat()}"
                    ),
                    detection_method="Temporal Sequence",
                    index=current,
                ))
        return anomalies
