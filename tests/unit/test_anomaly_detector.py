"""
Unit tests for anomaly detection.

Includes property-based testing with hypothesis for output ordering.
"""

import math
from datetime import date, datetime, timedelta, timezone

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from quality_engine.core.anomaly import AnomalyDetector, derive_pattern
from quality_engine.core.anomaly.statistical import neighbour_counts
from quality_engine.core.config import DetectionConfig
from quality_engine.core.models import AnomalyType, Severity

FIXED_NOW = datetime(2024, 6, 15, 12, 0, 0)

OUTLIER_SAMPLE = list(range(1, 20)) + [1000]


@pytest.fixture
def detector(fixed_clock) -> AnomalyDetector:
    return AnomalyDetector(clock=fixed_clock)


def by_method(anomalies, method):
    return [anomaly for anomaly in anomalies if anomaly.detection_method == method]


class TestStatisticalDetection:
    """Tests for numeric collections and single numbers"""

    def test_zscore_flags_extreme_value(self, detector):
        anomalies = by_method(detector.detect({"amount": OUTLIER_SAMPLE}), "Z-Score")

        assert len(anomalies) == 1
        outlier = anomalies[0]
        assert outlier.value == 1000
        assert outlier.index == 19
        assert outlier.anomaly_type is AnomalyType.OUTLIER
        assert outlier.score == pytest.approx(4.247, abs=1e-3)
        assert outlier.severity is Severity.MAJOR

    def test_zscore_small_sample_cannot_reach_default_threshold(self, detector):
        """Test six values cap |z| near 2.04, below the default 3.0"""
        assert by_method(detector.detect({"amount": [1, 2, 3, 4, 5, 100]}), "Z-Score") == []

    def test_zscore_tuned_threshold(self, fixed_clock):
        detector = AnomalyDetector(DetectionConfig(z_score_threshold=2.0), clock=fixed_clock)

        flagged = by_method(detector.detect({"amount": [1, 2, 3, 4, 5, 100]}), "Z-Score")
        assert [a.value for a in flagged] == [100]
        assert flagged[0].severity is Severity.MINOR

        assert by_method(detector.detect({"amount": [1, 2, 3, 4, 5]}), "Z-Score") == []

    def test_zscore_constant_values(self, detector):
        assert detector.detect({"amount": [7, 7, 7, 7]}) == []

    def test_iqr_flags_exactly_the_outlier(self, detector):
        """Test integer-index quartiles q1=sorted[5], q3=sorted[15] on 20 values"""
        anomalies = by_method(detector.detect({"amount": OUTLIER_SAMPLE}), "IQR")

        assert len(anomalies) == 1
        # q1=6, q3=16, iqr=10, upper bound 31
        assert anomalies[0].value == 1000
        assert anomalies[0].score == pytest.approx(96.9)
        assert anomalies[0].severity is Severity.CRITICAL

    def test_iqr_small_sample(self, detector):
        anomalies = by_method(detector.detect({"amount": [1, 2, 3, 4, 5, 100]}), "IQR")

        assert [a.value for a in anomalies] == [100]
        assert anomalies[0].index == 5
        assert anomalies[0].score == pytest.approx(90.5 / 3)

    def test_iqr_reports_source_index(self, detector):
        values = [100, 3, 1, 4, 2, 5]
        anomalies = by_method(detector.detect({"amount": values}), "IQR")
        assert [a.index for a in anomalies] == [0]

    def test_isolation_score(self, detector):
        anomalies = by_method(detector.detect({"amount": OUTLIER_SAMPLE}), "Isolation Score")

        assert len(anomalies) == 1
        assert anomalies[0].anomaly_type is AnomalyType.ISOLATION
        assert anomalies[0].score == pytest.approx(0.95)
        assert anomalies[0].severity is Severity.MAJOR

    def test_isolation_needs_ten_values(self, detector):
        assert by_method(detector.detect({"amount": [1, 2, 3, 4, 5, 100]}), "Isolation Score") == []

    def test_non_finite_entries_excluded(self, detector):
        anomalies = detector.detect({"amount": OUTLIER_SAMPLE + [float("nan")]})

        assert {a.index for a in anomalies} == {19}

    def test_unconvertible_integer_excluded(self, detector):
        """Test an int too large for a float is skipped without losing real outliers"""
        baseline = detector.detect({"amount": OUTLIER_SAMPLE})
        anomalies = detector.detect({"amount": OUTLIER_SAMPLE + [10**400]})

        assert len(anomalies) == len(baseline) == 3
        assert {a.index for a in anomalies} == {19}

    def test_failing_method_keeps_other_results(self, detector, monkeypatch):
        def broken(*args, **kwargs):
            raise RuntimeError("quartiles unavailable")

        monkeypatch.setattr(detector.statistical, "iqr_anomalies", broken)

        anomalies = detector.detect({"amount": OUTLIER_SAMPLE})

        assert {a.detection_method for a in anomalies} == {"Z-Score", "Isolation Score"}

    @pytest.mark.parametrize("values, radius", [
        ([0, 0, 1, 1, 2, 5, 5, 5, 9, 10], 1.0),
        ([0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10], 1.0),
        ([3, 1, 4, 1, 5, 9, 2, 6, 5, 3], 2.0),
    ])
    def test_neighbour_counts_exclude_values_at_radius(self, values, radius):
        expected = [sum(1 for other in values if abs(other - v) < radius) for v in values]

        counts = neighbour_counts(np.array(values, dtype=float), radius)

        assert counts.tolist() == expected

    def test_neighbour_counts_ties(self):
        counts = neighbour_counts(np.array([0.0, 1.0, 1.0, 2.0]), 1.0)
        assert counts.tolist() == [1, 2, 2, 1]

    def test_isolation_large_collection(self, detector):
        values = [i % 97 for i in range(4000)] + [1e6]

        anomalies = by_method(detector.detect({"amount": values}), "Isolation Score")

        assert [a.index for a in anomalies] == [4000]

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_invalid_single_number(self, detector, value):
        anomalies = detector.detect({"reading": value})

        assert len(anomalies) == 1
        assert anomalies[0].anomaly_type is AnomalyType.INVALID_VALUE
        assert anomalies[0].severity is Severity.CRITICAL
        assert anomalies[0].index is None

    def test_finite_single_number(self, detector):
        assert detector.detect({"reading": 42.0}) == []


class TestPatternDetection:
    """Tests for strings and string collections"""

    def test_derive_pattern(self):
        assert derive_pattern("AB-12c") == "AAXNNa"
        assert derive_pattern("") == ""
        assert derive_pattern("é1") == "XN"

    def test_invalid_email(self, detector):
        anomalies = detector.detect({"email": "not-an-email"})

        assert len(anomalies) == 1
        assert anomalies[0].anomaly_type is AnomalyType.FORMAT
        assert anomalies[0].severity is Severity.MAJOR
        assert "email" in anomalies[0].description

    @pytest.mark.parametrize("field_name,value", [
        ("Customer_Email", "user@example.com"),
        ("contact_phone", "+14155552671"),
        ("homepage_url", "https://example.com/path"),
        ("client_ip", "192.168.0.1"),
    ])
    def test_valid_formats(self, detector, field_name, value):
        assert detector.detect({field_name: value}) == []

    def test_field_without_format_token(self, detector):
        assert detector.detect({"name": "anything goes"}) == []

    def test_long_string_truncated(self, detector):
        anomalies = detector.detect({"notes": "x" * 1500})

        assert len(anomalies) == 1
        assert anomalies[0].anomaly_type is AnomalyType.LENGTH
        assert anomalies[0].value == "x" * 50 + "..."
        assert "1500" in anomalies[0].description

    def test_rare_pattern_in_collection(self, detector):
        values = ["ABC123"] * 20 + ["abc"]
        anomalies = detector.detect({"codes": values})

        assert len(anomalies) == 1
        assert anomalies[0].anomaly_type is AnomalyType.PATTERN
        assert anomalies[0].severity is Severity.MINOR
        assert anomalies[0].value == "abc"
        assert anomalies[0].index == 20
        assert anomalies[0].score == 1.0

    def test_small_collection_not_analysed(self, detector):
        values = ["ABC123"] * 19 + ["abc"]
        assert detector.detect({"codes": values}) == []


class TestTemporalDetection:
    """Tests for timestamps and timestamp collections"""

    def test_future_timestamp(self, detector):
        anomalies = detector.detect({"created_at": FIXED_NOW + timedelta(days=2)})

        assert len(anomalies) == 1
        assert anomalies[0].anomaly_type is AnomalyType.TEMPORAL
        assert anomalies[0].severity is Severity.MAJOR

    def test_now_is_not_anomalous(self, detector):
        assert detector.detect({"created_at": FIXED_NOW}) == []
        assert detector.detect({"created_at": FIXED_NOW + timedelta(hours=23)}) == []

    def test_ancient_timestamp(self, detector):
        anomalies = detector.detect({"born": date(1900, 1, 1)})

        assert len(anomalies) == 1
        assert "old" in anomalies[0].description

    def test_aware_timestamp(self, detector):
        assert detector.detect({"created_at": datetime(2024, 6, 1, tzinfo=timezone.utc)}) == []

    def test_temporal_gap(self, detector):
        anomalies = detector.detect({"events": [date(2020, 1, 1), date(2022, 1, 1)]})

        assert len(anomalies) == 1
        gap = anomalies[0]
        assert gap.anomaly_type is AnomalyType.TEMPORAL_GAP
        assert gap.severity is Severity.MINOR
        assert gap.value == 731
        assert gap.index == 1

    def test_temporal_gap_unsorted_input(self, detector):
        events = [datetime(2022, 1, 1), datetime(2020, 1, 1), datetime(2022, 3, 1)]
        anomalies = detector.detect({"events": events})

        assert [(a.value, a.index) for a in anomalies] == [(731, 0)]


class TestBusinessRules:
    """Tests for built-in business rules"""

    def test_negative_price(self, detector):
        anomalies = detector.detect({"price": -10.0})

        assert len(anomalies) == 1
        assert anomalies[0].anomaly_type is AnomalyType.BUSINESS_RULE
        assert anomalies[0].severity is Severity.CRITICAL

    def test_percentage_out_of_range(self, detector):
        anomalies = detector.detect({"percentage": 150})

        assert len(anomalies) == 1
        assert anomalies[0].anomaly_type is AnomalyType.BUSINESS_RULE
        assert anomalies[0].severity is Severity.MAJOR

    def test_valid_percentage(self, detector):
        assert detector.detect({"percentage": 50}) == []


class TestAnomalyDetector:
    """Tests for dispatch, ordering and error isolation"""

    def test_sorted_by_severity(self, detector):
        record = {
            "tags": ["ABC123"] * 20 + ["abc"],
            "notes": "x" * 1500,
            "price": -1,
        }

        anomalies = detector.detect(record)

        assert [a.severity for a in anomalies] == [Severity.CRITICAL, Severity.MAJOR, Severity.MINOR]

    def test_ties_keep_detection_order(self, detector):
        anomalies = detector.detect({"amount": OUTLIER_SAMPLE})

        majors = [a.detection_method for a in anomalies if a.severity is Severity.MAJOR]
        assert majors == ["Z-Score", "Isolation Score"]
        assert anomalies[0].detection_method == "IQR"

    def test_failing_field_is_skipped(self, detector):
        """Test a field that breaks analysis does not stop detection"""
        record = {
            "mixed": [datetime(2020, 1, 1), datetime(2021, 1, 1, tzinfo=timezone.utc)],
            "price": -1,
        }

        anomalies = detector.detect(record)

        assert [a.field_name for a in anomalies] == ["price"]

    def test_unsupported_shapes_ignored(self, detector):
        assert detector.detect({"items": [{"a": 1}], "flag": True, "nothing": None, "meta": {"x": 1}}) == []

    def test_detection_time_from_clock(self, detector):
        anomalies = detector.detect({"price": -1})
        assert anomalies[0].detection_time == FIXED_NOW

    @settings(max_examples=50, deadline=None)
    @given(st.dictionaries(
        st.sampled_from(["amount", "price", "percentage", "email", "codes", "events", "note"]),
        st.one_of(
            st.none(),
            st.integers(min_value=-10**6, max_value=10**6),
            st.floats(allow_nan=True, allow_infinity=True),
            st.text(max_size=30),
            st.lists(st.floats(min_value=-1e6, max_value=1e6), max_size=30),
            st.lists(st.sampled_from(["AB1", "ab", "A-1", "123"]), max_size=30),
            st.lists(st.dates(), max_size=10),
        ),
    ))
    def test_never_raises_and_no_inversions(self, record):
        """Property: detect() returns a list with no severity inversions"""
        detector = AnomalyDetector(clock=lambda: FIXED_NOW)

        anomalies = detector.detect(record)

        ranks = [a.severity.rank for a in anomalies]
        assert all(earlier >= later for earlier, later in zip(ranks, ranks[1:]))
        assert all(a.index is None or a.index >= 0 for a in anomalies)
        assert all(a.score is None or not math.isnan(a.score) for a in anomalies)
