"""
TimelinessEvaluator - validates that timestamps are recent enough.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from quality_engine.core.errors import ConfigurationError, EvaluationError
from quality_engine.core.models import QualityRule, RuleType
from quality_engine.utils.timestamps import is_timestamp, now_like, to_datetime

from .base_evaluator import BaseEvaluator


class TimelinessEvaluator(BaseEvaluator):
    """
    Validates that ``now - value <= timeliness_threshold``.

    Accepts date/datetime values and ISO-8601 strings. Future timestamps
    are always timely.
    """

    def evaluate(self, rule: QualityRule, record: Mapping[str, Any]) -> None:
        if rule.timeliness_threshold is None:
            raise ConfigurationError(f"Rule '{rule.name}' has no timeliness_threshold")

        value = self.field_value(rule, record)

        if not self.present_or_vacuous(rule, value):
            return

        timestamp = self._to_timestamp(value)
        age = now_like(timestamp, self.collaborators.clock) - timestamp

        if age > rule.timeliness_threshold:
            raise self.violation(
                rule,
                f"Timestamp {timestamp.isoformat()} is older than {rule.timeliness_threshold}"
            )

    @staticmethod
    def _to_timestamp(value: Any) -> datetime:
        if is_timestamp(value):
            return to_datetime(value)
        if isinstance(value, str):
            try:
                return datetime.fromisoformat(value.strip())
            except ValueError as e:
                raise EvaluationError(f"Cannot parse '{value}' as a timestamp") from e
        raise EvaluationError(f"Value of type {type(value).__name__} is not a timestamp")

    @property
    def rule_type(self) -> RuleType:
        return RuleType.TIMELINESS
