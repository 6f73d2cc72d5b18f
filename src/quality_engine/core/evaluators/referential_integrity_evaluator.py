"""
ReferentialIntegrityEvaluator - validates that referenced values exist.
"""

from collections.abc import Mapping
from typing import Any

from quality_engine.core.errors import CollaboratorFailure, ConfigurationError
from quality_engine.core.models import QualityRule, RuleType

from .base_evaluator import BaseEvaluator


class ReferentialIntegrityEvaluator(BaseEvaluator):
    """
    Validates that a value exists under ``reference_table.reference_column``.
    """

    def evaluate(self, rule: QualityRule, record: Mapping[str, Any]) -> None:
        if not rule.reference_table or not rule.reference_column:
            raise ConfigurationError(
                f"Rule '{rule.name}' requires both reference_table and reference_column"
            )

        value = self.field_value(rule, record)

        if not self.present_or_vacuous(rule, value):
            return

        store = self.collaborators.reference_store
        if store is None:
            raise CollaboratorFailure("ReferenceStore", "no reference store configured")

        if not self.call_collaborator(
            "ReferenceStore", store.exists, value, rule.reference_table, rule.reference_column
        ):
            raise self.violation(
                rule,
                f"Value '{value}' not found in {rule.reference_table}.{rule.reference_column}"
            )

    @property
    def rule_type(self) -> RuleType:
        return RuleType.REFERENTIAL_INTEGRITY
