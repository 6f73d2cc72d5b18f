"""
BusinessRuleEvaluator - validates a record with a business rule expression.
"""

from collections.abc import Mapping
from typing import Any

from quality_engine.core.errors import ConfigurationError
from quality_engine.core.models import QualityRule, RuleType

from .base_evaluator import BaseEvaluator


class BusinessRuleEvaluator(BaseEvaluator):
    """
    Evaluates ``business_rule_expression`` against the whole record.

    The expression language belongs to the configured expression evaluator.
    """

    def evaluate(self, rule: QualityRule, record: Mapping[str, Any]) -> None:
        expression = (rule.business_rule_expression or "").strip()
        if not expression:
            raise ConfigurationError(f"Rule '{rule.name}' has no business_rule_expression")

        if not self.evaluate_expression(rule, expression, record):
            raise self.violation(rule, f"Business rule '{expression}' evaluated to false")

    @property
    def rule_type(self) -> RuleType:
        return RuleType.BUSINESS_RULE
