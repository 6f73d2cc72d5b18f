"""
Prometheus metrics collection for quality-engine

This module provides metrics instrumentation for monitoring rule
evaluation, anomaly detection and quality scores.
"""
import time
from contextlib import contextmanager

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

REGISTRY = CollectorRegistry()


# =======================
# RULE EVALUATION METRICS
# =======================

# Checks evaluated counter
quality_checks_total = Counter(
    name="quality_checks_total",
    documentation="Total number of quality checks evaluated",
    labelnames=["rule_type", "status"],  # status: passed, failed, error
    registry=REGISTRY,
)

# Evaluation errors counter
quality_check_errors_total = Counter(
    name="quality_check_errors_total",
    documentation="Total number of quality checks whose evaluation errored",
    labelnames=["rule_type", "error_type"],
    registry=REGISTRY,
)

# Last computed quality score
quality_score = Gauge(
    name="quality_score",
    documentation="Most recent quality score (0-100) per dataset type",
    labelnames=["dataset_type"],
    registry=REGISTRY,
)

# =======================
# ANOMALY METRICS
# =======================

anomalies_detected_total = Counter(
    name="quality_anomalies_detected_total",
    documentation="Total number of anomalies detected",
    labelnames=["anomaly_type", "severity"],
    registry=REGISTRY,
)

# =======================
# DURATION METRICS
# =======================

evaluation_duration_seconds = Histogram(
    name="quality_evaluation_duration_seconds",
    documentation="Time spent in engine operations in seconds",
    labelnames=["operation"],  # operation: evaluate, detect, profile, report
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
    registry=REGISTRY,
)


# =======================
# RECORDING HELPERS
# =======================

def generate_metrics() -> bytes:
    """Render every engine metric in the Prometheus exposition format."""
    return generate_latest(REGISTRY)


@contextmanager
def track_duration(histogram: Histogram, **labels):
    """
    Observe the wall time of the enclosed block in ``histogram``

    The observation is made whether or not the block raises.

    Usage:
        with track_duration(evaluation_duration_seconds, operation="detect"):
            anomalies = detector.detect(record)
    """
    started = time.perf_counter()
    try:
        yield
    finally:
        histogram.labels(**labels).observe(time.perf_counter() - started)


def set_gauge(gauge: Gauge, value: float, **labels) -> None:
    """Publish ``value`` on the labelled child of ``gauge``."""
    gauge.labels(**labels).set(value)


def record_check(rule_type: str, passed: bool, error_type: str | None = None) -> None:
    """
    Count the outcome of a single quality check.

    Args:
        rule_type: Rule type value of the evaluated rule
        passed: Whether the check passed
        error_type: Exception class name when evaluation errored
    """
    if error_type is not None:
        status = "error"
        quality_check_errors_total.labels(rule_type=rule_type, error_type=error_type).inc()
    else:
        status = "passed" if passed else "failed"
    quality_checks_total.labels(rule_type=rule_type, status=status).inc()


def record_anomaly(anomaly_type: str, severity: str) -> None:
    """Count a detected anomaly."""
    anomalies_detected_total.labels(anomaly_type=anomaly_type, severity=severity).inc()
