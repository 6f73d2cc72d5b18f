"""
CompletenessEvaluator - ensures a field is populated.
"""

from collections.abc import Collection, Mapping
from typing import Any

from quality_engine.core.models import QualityRule, RuleType

from .base_evaluator import BaseEvaluator


class CompletenessEvaluator(BaseEvaluator):
    """
    Validates that a field is populated.

    Fails if:
    - Field is missing or None and the rule is required
    - Field value is a blank string (after stripping whitespace)
    - Field value is an empty collection
    """

    def evaluate(self, rule: QualityRule, record: Mapping[str, Any]) -> None:
        value = self.field_value(rule, record)

        if not self.present_or_vacuous(rule, value):
            return

        if isinstance(value, str):
            if value.strip() == "":
                raise self.violation(rule, "Field value is empty string")
            return

        if isinstance(value, Collection) and len(value) == 0:
            raise self.violation(rule, "Field value is an empty collection")

    @property
    def rule_type(self) -> RuleType:
        return RuleType.COMPLETENESS
