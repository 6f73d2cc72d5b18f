"""
UniquenessEvaluator - rejects values already seen within a scope.
"""

from collections.abc import Mapping
from typing import Any

from quality_engine.core.errors import CollaboratorFailure
from quality_engine.core.models import QualityRule, RuleType

from .base_evaluator import BaseEvaluator


class UniquenessEvaluator(BaseEvaluator):
    """
    Validates that a value has not already occurred within the rule's scope.

    History lives in the uniqueness store; None values are never duplicates.
    """

    def evaluate(self, rule: QualityRule, record: Mapping[str, Any]) -> None:
        value = self.field_value(rule, record)

        if value is None:
            return

        store = self.collaborators.uniqueness_store
        if store is None:
            raise CollaboratorFailure("UniquenessStore", "no uniqueness store configured")

        if self.call_collaborator("UniquenessStore", store.exists, value, rule.field_path, rule.scope):
            scope = f" within scope '{rule.scope}'" if rule.scope else ""
            raise self.violation(rule, f"Duplicate value '{value}'{scope}")

    @property
    def rule_type(self) -> RuleType:
        return RuleType.UNIQUENESS
