"""
AccuracyEvaluator - validates values against reference data or a format pattern.
"""

import re
from collections.abc import Mapping
from typing import Any

from quality_engine.core.errors import EvaluationError
from quality_engine.core.models import QualityRule, RuleType

from .base_evaluator import BaseEvaluator


class AccuracyEvaluator(BaseEvaluator):
    """
    Validates that a value is accurate.

    Reference data takes precedence: when configured, the stringified value
    must be one of the reference values. Otherwise, when a format pattern is
    configured, the stringified value must fully match it.
    """

    def evaluate(self, rule: QualityRule, record: Mapping[str, Any]) -> None:
        value = self.field_value(rule, record)

        if not self.present_or_vacuous(rule, value):
            return

        value_str = str(value)

        if rule.reference_data is not None:
            if value_str not in rule.reference_data:
                raise self.violation(rule, f"Value '{value_str}' is not in reference data")
            return

        if rule.format_pattern is not None:
            pattern = self._compile(rule.format_pattern)
            if not pattern.fullmatch(value_str):
                raise self.violation(
                    rule,
                    f"Value '{value_str}' does not match pattern '{rule.format_pattern}'"
                )

    @staticmethod
    def _compile(pattern: str) -> re.Pattern:
        try:
            return re.compile(pattern)
        except re.error as e:
            raise EvaluationError(f"Invalid regex pattern '{pattern}': {e}") from e

    @property
    def rule_type(self) -> RuleType:
        return RuleType.ACCURACY
