"""
Integration tests for the quality service.

Runs rule evaluation, scoring, reporting, anomaly detection and profiling
together against realistic order records.
"""

from datetime import datetime, timedelta

import pytest

from quality_engine import QualityService
from quality_engine.core.models import QualityCheckStatus, QualityRule, RuleType, Severity
from quality_engine.core.rules import RuleConfigBuilder, RuleConfigLoader
from quality_engine.observability.metrics import REGISTRY
from quality_engine.utils.validation import ValidationError


@pytest.fixture
def service(collaborators, fixed_clock) -> QualityService:
    return QualityService(collaborators=collaborators, clock=fixed_clock)


@pytest.fixture
def order_rules():
    return RuleConfigBuilder(dataset_type="orders") \
        .add_completeness("order.id", severity=Severity.CRITICAL) \
        .add_uniqueness("order.id", scope="orders") \
        .add_validity("order.quantity", expected_data_type="integer", min_value=1) \
        .add_accuracy("order.currency", reference_data={"EUR", "USD"}) \
        .add_timeliness("order.updated_at", timedelta(days=7)) \
        .add_referential_integrity("order.customer_id", "customers", "id") \
        .add_business_rule("totals_match", "total == subtotal + tax") \
        .build()


def good_order() -> dict:
    return {
        "order": {
            "id": "ORD-10",
            "quantity": 3,
            "currency": "EUR",
            "updated_at": datetime(2024, 6, 14),
            "customer_id": "C-1",
        },
        "total": 110,
        "subtotal": 100,
        "tax": 10,
    }


@pytest.mark.integration
def test_clean_record_scores_100(service, order_rules, fixed_clock):
    """Test a record satisfying every rule gets a perfect report"""
    report = service.execute_quality_check("orders-2024-06", "orders", good_order(), order_rules)

    assert report.status == QualityCheckStatus.COMPLETED
    assert report.dataset_id == "orders-2024-06"
    assert len(report.checks) == 7
    assert all(check.passed for check in report.checks)
    assert report.metrics.pass_rate == 100.0
    assert report.quality_score == 100.0
    assert report.issues == []
    assert report.recommendations == []
    assert report.check_date == fixed_clock()
    assert report.completion_time == fixed_clock()
    assert REGISTRY.get_sample_value("quality_score", {"dataset_type": "orders"}) == 100.0


@pytest.mark.integration
def test_dirty_record_penalised(service, order_rules):
    """Test failures reduce the score and produce issues and recommendations"""
    record = good_order()
    record["order"]["id"] = "ORD-1"          # duplicate (MAJOR)
    record["order"]["currency"] = "GBP"      # not in reference data (MAJOR)
    record["order"]["customer_id"] = "C-9"   # dangling reference (CRITICAL)

    report = service.execute_quality_check("orders-2024-06", "orders", record, order_rules)

    assert report.status == QualityCheckStatus.COMPLETED
    metrics = report.metrics
    assert metrics.total_checks == 7
    assert metrics.failed_checks == 3
    assert metrics.pass_rate == 57.14
    assert (metrics.critical_issues, metrics.major_issues, metrics.minor_issues) == (1, 2, 0)
    # 57.14 - (10 + 2*5)
    assert report.quality_score == 37.14

    assert {issue.rule_type for issue in report.issues} == {
        RuleType.UNIQUENESS, RuleType.ACCURACY, RuleType.REFERENTIAL_INTEGRITY,
    }
    assert "Implement duplicate detection mechanisms" in report.recommendations
    assert len(report.recommendations) == len(set(report.recommendations))


@pytest.mark.integration
def test_errored_rule_does_not_abort_run(service):
    """Test a malformed rule becomes an errored check while others still run"""
    rules = [
        QualityRule(name="bad_pattern", rule_type=RuleType.ACCURACY,
                    field_path="code", format_pattern="(", severity=Severity.MINOR),
        QualityRule(name="code_present", rule_type=RuleType.COMPLETENESS,
                    field_path="code", required=True),
    ]

    report = service.execute_quality_check("codes", "codes", {"code": "A1"}, rules)

    assert report.status == QualityCheckStatus.COMPLETED
    errored, present = report.checks
    assert errored.passed is False
    assert errored.error_message is not None
    assert present.passed is True
    assert report.quality_score == 49.0


@pytest.mark.integration
def test_rule_selection_by_dataset_type(service):
    rules = [
        QualityRule(name="all_types", rule_type=RuleType.COMPLETENESS, field_path="id"),
        QualityRule(name="orders_only", rule_type=RuleType.COMPLETENESS, field_path="id",
                    dataset_type="orders"),
        QualityRule(name="customers_only", rule_type=RuleType.COMPLETENESS, field_path="id",
                    dataset_type="customers"),
        QualityRule(name="inactive", rule_type=RuleType.COMPLETENESS, field_path="id",
                    dataset_type="orders", active=False),
    ]

    report = service.execute_quality_check(1, "orders", {"id": 1}, rules)

    assert [check.rule.name for check in report.checks] == ["all_types", "orders_only"]
    assert report.dataset_id == "1"


@pytest.mark.integration
def test_no_applicable_rules(service):
    report = service.execute_quality_check("empty", "orders", {"id": 1}, [])

    assert report.status == QualityCheckStatus.COMPLETED
    assert report.metrics.total_checks == 0
    assert report.quality_score == 0.0


@pytest.mark.integration
def test_unexpected_failure_marks_report_failed(service, order_rules, monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("aggregator unavailable")

    monkeypatch.setattr(service.aggregator, "compute_metrics", broken)

    report = service.execute_quality_check("orders-2024-06", "orders", good_order(), order_rules)

    assert report.status == QualityCheckStatus.FAILED
    assert report.error_message == "aggregator unavailable"
    assert report.completion_time is not None


@pytest.mark.integration
def test_invalid_dataset_id_rejected(service):
    with pytest.raises(ValidationError):
        service.execute_quality_check("bad id!", "orders", {}, [])


@pytest.mark.integration
def test_rules_from_yaml(service, tmp_path):
    config_file = tmp_path / "orders.yaml"
    config_file.write_text("""
dataset_type: orders
rules:
  order.id:
    - type: COMPLETENESS
      required: true
  order.quantity:
    - type: VALIDITY
      expected_data_type: integer
      min_value: 1
""")
    rules = RuleConfigLoader(config_file).load_rules()

    report = service.execute_quality_check("orders-yaml", "orders", {"order": {"quantity": 0}}, rules)

    assert report.metrics.failed_checks == 2
    assert report.quality_score == 0.0


@pytest.mark.integration
def test_detect_anomalies_and_profile(service):
    record = {
        "amount": list(range(1, 20)) + [1000],
        "price": -5.0,
        "email": "broken",
    }

    anomalies = service.detect_anomalies(record)
    profile = service.profile(record)

    assert anomalies[0].severity is Severity.CRITICAL
    assert {a.field_name for a in anomalies} == {"amount", "price", "email"}
    assert profile.record_count == 20
    assert profile.field_profiles["amount"].numeric_statistics.max == 1000.0
    assert profile.field_profiles["email"].data_type == "string"
