"""
Numeric outlier detection: Z-score, IQR fences and a neighbour-count isolation score.
"""

import math
from typing import Any

import numpy as np

from quality_engine.core.models import AnomalyType, DataAnomaly, Severity
from quality_engine.observability.logger import get_logger

from .base import FieldDetector

logger = get_logger(__name__)


def finite_float(value: Any) -> float | None:
    """The value as a finite float, or None when it has no finite float form."""
    try:
        number = float(value)
    except (OverflowError, TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def neighbour_counts(numbers: np.ndarray, radius: float) -> np.ndarray:
    """
    For each value, how many values (itself included) lie strictly within ``radius``.

    Counts against a sorted copy, so memory stays linear in the collection size.
    """
    ordered = np.sort(numbers)
    upper = np.searchsorted(ordered, numbers + radius, side="left")
    lower = np.searchsorted(ordered, numbers - radius, side="right")
    return upper - lower


class StatisticalDetector(FieldDetector):
    """
    Flags outliers in numeric collections and invalid single numbers.

    The three collection methods run independently on the same values, so
    one value can be reported by more than one method, and a method that
    fails is logged without discarding the others' results. Entries with no
    finite float form are left out of the statistics; indexes always point
    into the source collection.
    """

    def detect_collection(self, field_name: str, values: list[Any]) -> list[DataAnomaly]:
        converted = [(i, finite_float(v)) for i, v in enumerate(values)]
        positions = [i for i, number in converted if number is not None]
        if not positions:
            return []

        originals = [values[i] for i in positions]
        numbers = np.array([number for _, number in converted if number is not None], dtype=float)

        anomalies = []
        for method in (self.zscore_anomalies, self.iqr_anomalies, self.isolation_anomalies):
            try:
                anomalies.extend(method(field_name, numbers, originals, positions))
            except Exception as e:
                logger.warning(
                    f"{method.__name__} failed for field '{field_name}': {e}",
                    extra={"field_name": field_name, "error_type": type(e).__name__},
                )
        return anomalies

    def zscore_anomalies(
        self,
        field_name: str,
        numbers: np.ndarray,
        originals: list[Any],
        positions: list[int],
    ) -> list[DataAnomaly]:
        if len(numbers) < self.config.z_score_min_size:
            return []

        mean = float(numbers.mean())
        std_dev = float(numbers.std(ddof=1))
        if std_dev == 0:
            return []

        anomalies = []
        z_scores = np.abs(numbers - mean) / std_dev
        for k, z_score in enumerate(z_scores):
            z_score = float(z_score)
            if z_score > self.config.z_score_threshold:
                anomalies.append(self.anomaly(
                    field_name=field_name,
                    anomaly_type=AnomalyType.OUTLIER,
                    value=originals[k],
                    score=z_score,
                    severity=self.classifier.classify(z_score),
                    description=(
                        f"Value {numbers[k]:.2f} is {z_score:.2f} standard deviations "
                        f"from mean ({mean:.2f})"
                    ),
                    detection_method="Z-Score",
                    index=positions[k],
                ))
        return anomalies

    def iqr_anomalies(
        self,
        field_name: str,
        numbers: np.ndarray,
        originals: list[Any],
        positions: list[int],
    ) -> list[DataAnomaly]:
        n = len(numbers)
        if n < self.config.iqr_min_size:
            return []

        # Integer-index quartiles, no interpolation
        order = np.argsort(numbers, kind="stable")
        ordered = numbers[order]
        q1 = float(ordered[n // 4])
        q3 = float(ordered[3 * n // 4])
        iqr = q3 - q1

        lower_bound = q1 - self.config.iqr_multiplier * iqr
        upper_bound = q3 + self.config.iqr_multiplier * iqr

        anomalies = []
        for k in order:
            value = float(numbers[k])
            if lower_bound <= value <= upper_bound:
                continue

            excess = lower_bound - value if value < lower_bound else value - upper_bound
            distance = excess / iqr if iqr else math.inf
            anomalies.append(self.anomaly(
                field_name=field_name,
                anomaly_type=AnomalyType.OUTLIER,
                value=originals[k],
                score=distance,
                severity=self.classifier.classify(distance),
                description=(
                    f"Value {value:.2f} is outside IQR range "
                    f"[{lower_bound:.2f}, {upper_bound:.2f}]"
                ),
                detection_method="IQR",
                index=positions[k],
            ))
        return anomalies

    def isolation_anomalies(
        self,
        field_name: str,
        numbers: np.ndarray,
        originals: list[Any],
        positions: list[int],
    ) -> list[DataAnomaly]:
        """
        Neighbour-count isolation heuristic.

        A value whose neighbourhood (within a fraction of the range, itself
        included) holds few of the values is easy to isolate.
        """
        n = len(numbers)
        if n < self.config.isolation_min_size:
            return []

        value_range = float(numbers.max() - numbers.min())
        if value_range == 0:
            return []

        radius = value_range * self.config.isolation_neighbor_fraction
        isolation_scores = 1.0 - neighbour_counts(numbers, radius) / n

        anomalies = []
        for k, isolation_score in enumerate(isolation_scores):
            isolation_score = float(isolation_score)
            if isolation_score > self.config.isolation_threshold:
                anomalies.append(self.anomaly(
                    field_name=field_name,
                    anomaly_type=AnomalyType.ISOLATION,
                    value=originals[k],
                    score=isolation_score,
                    severity=self.classifier.classify(
                        isolation_score * self.config.isolation_severity_scale
                    ),
                    description=(
                        f"Value {numbers[k]:.2f} has high isolation score ({isolation_score:.2f})"
                    ),
                    detection_method="Isolation Score",
                    index=positions[k],
                ))
        return anomalies

    def detect_scalar(self, field_name: str, value: Any) -> list[DataAnomaly]:
        number = float(value)
        if math.isinf(number):
            description = "Infinite value detected"
        elif math.isnan(number):
            description = "NaN value detected"
        else:
            return []

        return [self.anomaly(
            field_name=field_name,
            anomaly_type=AnomalyType.INVALID_VALUE,
            value=value,
            severity=Severity.CRITICAL,
            description=description,
            detection_method="Value Validation",
        )]
