"""
String anomalies: well-known formats, excessive length and rare shapes.
"""

import re
from collections import Counter

from quality_engine.core.models import AnomalyType, DataAnomaly, Severity

from .base import FieldDetector

# Field-name token -> pattern the value must fully match, checked in order
FORMAT_PATTERNS: dict[str, re.Pattern] = {
    "email": re.compile(r"[A-Za-z0-9+_.-]+@(.+)"),
    "phone": re.compile(r"\+?[1-9]\d{1,14}"),
    "url": re.compile(r"(https?|ftp)://[^\s/$.?#].[^\s]*"),
    "ip": re.compile(r"(?:[0-9]{1,3}\.){3}[0-9]{1,3}"),
}


def derive_pattern(value: str) -> str:
    """
    Shape signature of a string.

    ASCII digits become ``N``, lowercase letters ``a``, uppercase letters
    ``A`` and everything else ``X``: ``"AB-12c"`` -> ``"AAXNNa"``.
    """
    signature = []
    for char in value:
        if "0" <= char <= "9":
            signature.append("N")
        elif "a" <= char <= "z":
            signature.append("a")
        elif "A" <= char <= "Z":
            signature.append("A")
        else:
            signature.append("X")
    return "".join(signature)


class PatternDetector(FieldDetector):
    """Flags malformed, overlong and unusually shaped strings."""

    def detect_scalar(self, field_name: str, value: str) -> list[DataAnomaly]:
        anomalies = []

        format_anomaly = self.format_anomaly(field_name, value)
        if format_anomaly is not None:
            anomalies.append(format_anomaly)

        length_anomaly = self.length_anomaly(field_name, value)
        if length_anomaly is not None:
            anomalies.append(length_anomaly)

        return anomalies

    def format_anomaly(self, field_name: str, value: str) -> DataAnomaly | None:
        """Check the value against the first format whose token appears in the field name."""
        lowered = field_name.lower()
        for token, pattern in FORMAT_PATTERNS.items():
            if token in lowered:
                if pattern.fullmatch(value):
                    return None
                return self.anomaly(
                    field_name=field_name,
                    anomaly_type=AnomalyType.FORMAT,
                    value=value,
                    severity=Severity.MAJOR,
                    description=f"Value doesn't match expected {token} format",
                    detection_method="Pattern Matching",
                )
        return None

    def length_anomaly(self, field_name: str, value: str) -> DataAnomaly | None:
        if len(value) <= self.config.max_string_length:
            return None

        return self.anomaly(
            field_name=field_name,
            anomaly_type=AnomalyType.LENGTH,
            value=value[:self.config.truncate_length] + "...",
            severity=Severity.MAJOR,
            description=f"Unusually long value ({len(value)} characters)",
            detection_method="Length Check",
        )

    def detect_collection(self, field_name: str, values: list[str]) -> list[DataAnomaly]:
        """
        Flag values whose shape signature is rare within the collection.

        Only collections larger than ``min_pattern_sample_size`` are analysed.
        """
        if len(values) <= self.config.min_pattern_sample_size:
            return []

        signatures = [derive_pattern(value) for value in values]
        frequency = Counter(signatures)

        anomalies = []
        for index, (value, signature) in enumerate(zip(values, signatures)):
            count = frequency[signature]
            if count < self.config.min_pattern_frequency:
                anomalies.append(self.anomaly(
                    field_name=field_name,
                    anomaly_type=AnomalyType.PATTERN,
                    value=value,
                    score=float(count),
                    severity=Severity.MINOR,
                    description=f"Rare pattern: {signature} (frequency: {count})",
                    detection_method="Pattern Analysis",
                    index=index,
                ))
        return anomalies
