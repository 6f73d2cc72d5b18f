"""
ConsistencyEvaluator - validates cross-field consistency.
"""

from collections.abc import Mapping
from typing import Any

from quality_engine.core.errors import CollaboratorFailure
from quality_engine.core.models import QualityRule, RuleType
from quality_engine.utils.validation import resolve_field_path

from .base_evaluator import BaseEvaluator


class ConsistencyEvaluator(BaseEvaluator):
    """
    Validates that related values in a record agree with each other.

    A consistency expression is evaluated against the whole record by the
    expression evaluator. Without one, the values of ``related_fields`` are
    handed, in order, to the consistency predicate. A rule with neither
    passes.
    """

    def evaluate(self, rule: QualityRule, record: Mapping[str, Any]) -> None:
        if rule.consistency_expression:
            if not self.evaluate_expression(rule, rule.consistency_expression, record):
                raise self.violation(
                    rule,
                    f"Consistency expression '{rule.consistency_expression}' evaluated to false"
                )
            return

        if rule.related_fields:
            predicate = self.collaborators.consistency_predicate
            if predicate is None:
                raise CollaboratorFailure("ConsistencyPredicate", "no consistency predicate configured")

            values = [resolve_field_path(record, field) for field in rule.related_fields]
            if not self.call_collaborator("ConsistencyPredicate", predicate, values, rule):
                raise self.violation(
                    rule,
                    f"Related fields {', '.join(rule.related_fields)} are inconsistent"
                )

    @property
    def rule_type(self) -> RuleType:
        return RuleType.CONSISTENCY
