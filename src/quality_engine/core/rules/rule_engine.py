"""
Rule engine for evaluating quality rules against data records.

The rule engine dispatches each active rule to the evaluator registered for
its rule type and turns the outcome into a DataQualityCheck. A single rule
failing to evaluate never aborts the batch.
"""

from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime
from typing import Any

from quality_engine.core.collaborators import Collaborators
from quality_engine.core.errors import QualityEngineError, RuleViolation
from quality_engine.core.evaluators import (
    AccuracyEvaluator,
    BaseEvaluator,
    BusinessRuleEvaluator,
    CompletenessEvaluator,
    ConsistencyEvaluator,
    ReferentialIntegrityEvaluator,
    TimelinessEvaluator,
    UniquenessEvaluator,
    ValidityEvaluator,
)
from quality_engine.core.models import DataQualityCheck, QualityRule, RuleType
from quality_engine.observability.logger import get_logger
from quality_engine.observability.metrics import (
    evaluation_duration_seconds,
    record_check,
    track_duration,
)

logger = get_logger(__name__)


class RuleEngine:
    """
    Evaluates quality rules on data records.

    Rules are applied in order; every active rule yields exactly one check.
    """

    EVALUATOR_REGISTRY: dict[RuleType, type[BaseEvaluator]] = {
        RuleType.COMPLETENESS: CompletenessEvaluator,
        RuleType.ACCURACY: AccuracyEvaluator,
        RuleType.CONSISTENCY: ConsistencyEvaluator,
        RuleType.VALIDITY: ValidityEvaluator,
        RuleType.UNIQUENESS: UniquenessEvaluator,
        RuleType.TIMELINESS: TimelinessEvaluator,
        RuleType.REFERENTIAL_INTEGRITY: ReferentialIntegrityEvaluator,
        RuleType.BUSINESS_RULE: BusinessRuleEvaluator,
    }

    def __init__(self, collaborators: Collaborators | None = None):
        """
        Initialize the rule engine.

        Args:
            collaborators: Uniqueness/reference stores, expression evaluator,
                           consistency predicate and clock used by evaluators
        """
        self.collaborators = collaborators or Collaborators()
        self.evaluators: dict[RuleType, BaseEvaluator] = {
            rule_type: evaluator_class(self.collaborators)
            for rule_type, evaluator_class in self.EVALUATOR_REGISTRY.items()
        }

    def evaluate(self, record: Mapping[str, Any], rules: Iterable[QualityRule]) -> list[DataQualityCheck]:
        """
        Evaluate a record against all active rules.

        Args:
            record: Field name -> value mapping (nested mappings allowed)
            rules: Rules to apply; inactive rules are skipped

        Returns:
            One DataQualityCheck per active rule, in rule order
        """
        with track_duration(evaluation_duration_seconds, operation="evaluate"):
            checks = [self.evaluate_rule(rule, record) for rule in rules if rule.active]

        failed = sum(1 for check in checks if not check.passed)
        logger.debug(f"Evaluated {len(checks)} rules: {len(checks) - failed} passed, {failed} failed")
        return checks

    def evaluate_rule(self, rule: QualityRule, record: Mapping[str, Any]) -> DataQualityCheck:
        """
        Evaluate a single rule, capturing failures and errors in the check.

        Never raises.
        """
        execution_time = datetime.now()
        error_type: str | None = None

        try:
            self.evaluators[rule.rule_type].evaluate(rule, record)
            check = DataQualityCheck(
                rule=rule,
                passed=True,
                severity=rule.severity,
                execution_time=execution_time,
            )

        except RuleViolation as violation:
            check = DataQualityCheck(
                rule=rule,
                passed=False,
                severity=rule.severity,
                failure_details=violation.message,
                execution_time=execution_time,
            )

        except Exception as e:
            error_type = type(e).__name__
            message = str(e) if isinstance(e, QualityEngineError) else f"{error_type}: {e}"
            logger.warning(
                f"Rule '{rule.name}' could not be evaluated: {message}",
                extra={"rule_name": rule.name, "rule_type": rule.rule_type.value, "error_type": error_type},
            )
            check = DataQualityCheck(
                rule=rule,
                passed=False,
                severity=rule.severity,
                failure_details=f"Evaluation error: {message}",
                error_message=message,
                execution_time=execution_time,
            )

        record_check(rule.rule_type.value, check.passed, error_type)
        return check

    def evaluate_batch(
        self,
        records: Sequence[Mapping[str, Any]],
        rules: Sequence[QualityRule],
    ) -> list[list[DataQualityCheck]]:
        """
        Evaluate a batch of records against the same rules.

        Args:
            records: Records to evaluate
            rules: Rules to apply to each record

        Returns:
            One list of checks per record, in record order
        """
        return [self.evaluate(record, rules) for record in records]

    def rule_summary(self, rules: Iterable[QualityRule]) -> dict[str, Any]:
        """
        Summarise the active rules in a rule set.

        Returns:
            Dictionary with rule counts by type and severity
        """
        active = [rule for rule in rules if rule.active]
        return {
            "total_rules": len(active),
            "rules_by_type": self._count_by(rule.rule_type.value for rule in active),
            "rules_by_severity": self._count_by(rule.severity.value for rule in active),
        }

    @staticmethod
    def _count_by(keys: Iterable[str]) -> dict[str, int]:
        counts: dict[str, int] = {}
        for key in keys:
            counts[key] = counts.get(key, 0) + 1
        return counts
