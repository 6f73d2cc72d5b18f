"""
Data profiling and statistical summaries per field.
"""

from collections import Counter
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

import numpy as np

from quality_engine.core.anomaly.base import (
    as_collection,
    is_number,
    is_numeric_collection,
    is_string_collection,
)
from quality_engine.core.anomaly.patterns import derive_pattern
from quality_engine.core.models import (
    DataProfile,
    FieldProfile,
    NumericStatistics,
    StringStatistics,
)
from quality_engine.observability.logger import get_logger
from quality_engine.observability.metrics import evaluation_duration_seconds, track_duration
from quality_engine.utils.timestamps import is_timestamp

logger = get_logger(__name__)

PERCENTILES = (25, 50, 75, 90, 95, 99)
SAMPLE_SIZE = 10
TOP_PATTERNS = 10
MAX_AFFIX_LENGTH = 5
TOP_AFFIXES = 5


class DataProfiler:
    """
    Profiles a record to summarise its fields.

    Collections get counts, cardinality and samples; numeric collections add
    descriptive statistics and string collections add length and shape
    statistics.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self.clock = clock

    def profile(self, record: Mapping[str, Any]) -> DataProfile:
        """
        Profile every field of a record.

        Args:
            record: Field name -> scalar or collection

        Returns:
            DataProfile with per-field profiles and overall completeness/uniqueness
        """
        with track_duration(evaluation_duration_seconds, operation="profile"):
            field_profiles = {
                str(name): self.profile_field(str(name), value) for name, value in record.items()
            }

        collection_profiles = [
            p for p in field_profiles.values()
            if p.data_type == "collection" and p.count > 0
        ]
        non_null_fields = sum(1 for value in record.values() if value is not None)

        logger.debug(f"Profiled {len(field_profiles)} fields")
        return DataProfile(
            profile_date=self.clock(),
            record_count=max((p.count for p in field_profiles.values()), default=0),
            field_profiles=field_profiles,
            completeness=non_null_fields / len(field_profiles) if field_profiles else 0.0,
            uniqueness=(
                float(np.mean([p.cardinality for p in collection_profiles]))
                if collection_profiles else 0.0
            ),
        )

    def profile_field(self, field_name: str, value: Any) -> FieldProfile:
        if value is None:
            return FieldProfile(field_name=field_name, null_count=1, completeness=0.0)

        values = as_collection(value)
        if values is not None:
            return self._profile_collection(field_name, values)

        if isinstance(value, Mapping):
            return FieldProfile(
                field_name=field_name,
                data_type="object",
                count=1,
                unique_count=1,
                cardinality=1.0,
                empty_count=1 if not value else 0,
                sample_values=[str(key) for key in list(value)[:SAMPLE_SIZE]],
                nested_structure=True,
                nested_fields={
                    str(key): self.profile_field(str(key), entry) for key, entry in value.items()
                },
            )

        return FieldProfile(
            field_name=field_name,
            data_type=self._detect_type(value),
            count=1,
            unique_count=1,
            cardinality=1.0,
            empty_count=1 if isinstance(value, str) and not value.strip() else 0,
            sample_values=[str(value)],
        )

    def _profile_collection(self, field_name: str, values: list[Any]) -> FieldProfile:
        if not values:
            return FieldProfile(field_name=field_name, data_type="collection", empty_count=1)

        present = [v for v in values if v is not None]
        null_count = len(values) - len(present)
        unique_count = len({self._hashable(v) for v in values})

        profile = FieldProfile(
            field_name=field_name,
            data_type="collection",
            count=len(values),
            null_count=null_count,
            unique_count=unique_count,
            cardinality=unique_count / len(values),
            completeness=len(present) / len(values),
            sample_values=[str(v) for v in values[:SAMPLE_SIZE]],
        )

        if is_numeric_collection(present):
            profile.numeric_statistics = self._numeric_statistics(present)
        elif is_string_collection(present):
            profile.string_statistics = self._string_statistics(present)

        return profile

    @staticmethod
    def _numeric_statistics(values: list[Any]) -> NumericStatistics:
        numbers = np.array([float(v) for v in values], dtype=float)
        variance = float(numbers.var(ddof=1)) if len(numbers) > 1 else 0.0
        return NumericStatistics(
            min=float(numbers.min()),
            max=float(numbers.max()),
            mean=float(numbers.mean()),
            median=float(np.median(numbers)),
            standard_deviation=variance ** 0.5,
            variance=variance,
            percentiles={p: float(np.percentile(numbers, p)) for p in PERCENTILES},
        )

    @staticmethod
    def _string_statistics(values: list[str]) -> StringStatistics:
        lengths = [len(v) for v in values]
        patterns = Counter(derive_pattern(v) for v in values)
        return StringStatistics(
            min_length=min(lengths),
            max_length=max(lengths),
            avg_length=sum(lengths) / len(lengths),
            patterns=dict(patterns.most_common(TOP_PATTERNS)),
            common_prefixes=common_affixes(values, suffix=False),
            common_suffixes=common_affixes(values, suffix=True),
        )

    @staticmethod
    def _detect_type(value: Any) -> str:
        if isinstance(value, bool):
            return "boolean"
        if is_number(value):
            return "number"
        if isinstance(value, str):
            return "string"
        if is_timestamp(value):
            return "timestamp"
        return type(value).__name__

    @staticmethod
    def _hashable(value: Any) -> Any:
        try:
            hash(value)
            return value
        except TypeError:
            return repr(value)


def common_affixes(values: list[str], suffix: bool = False) -> list[str]:
    """
    Prefixes (or suffixes) of up to 5 characters shared by more than 10% of values.

    Returns at most 5, most frequent first.
    """
    counts: Counter[str] = Counter()
    for value in values:
        for length in range(1, min(MAX_AFFIX_LENGTH, len(value)) + 1):
            counts[value[-length:] if suffix else value[:length]] += 1

    minimum = len(values) // 10
    frequent = [(affix, count) for affix, count in counts.most_common() if count > minimum]
    return [affix for affix, _ in frequent[:TOP_AFFIXES]]
