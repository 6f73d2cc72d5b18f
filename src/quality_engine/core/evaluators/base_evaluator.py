"""
Base evaluator interface for all rule types.

All evaluators inherit from BaseEvaluator and implement evaluate(). An
evaluator returns None when the record satisfies the rule and raises
RuleViolation when it does not; any other QualityEngineError means the rule
could not be evaluated.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from quality_engine.core.collaborators import Collaborators
from quality_engine.core.errors import (
    CollaboratorFailure,
    ConfigurationError,
    QualityEngineError,
    RuleViolation,
)
from quality_engine.core.models import QualityRule, RuleType
from quality_engine.utils.validation import resolve_field_path


class BaseEvaluator(ABC):
    """
    Abstract base class for all rule evaluators.

    Each evaluator implements one RuleType. Evaluators are stateless apart
    from the collaborators they are constructed with, so one instance can
    serve any number of records and rules.
    """

    def __init__(self, collaborators: Collaborators | None = None):
        """
        Initialize evaluator.

        Args:
            collaborators: External services available to the evaluator
        """
        self.collaborators = collaborators or Collaborators()

    @abstractmethod
    def evaluate(self, rule: QualityRule, record: Mapping[str, Any]) -> None:
        """
        Evaluate a rule against a record.

        Args:
            rule: The rule to evaluate
            record: The entire record (field name -> value, possibly nested)

        Raises:
            RuleViolation: If the record does not satisfy the rule
            QualityEngineError: If the rule could not be evaluated
        """
        pass

    @property
    @abstractmethod
    def rule_type(self) -> RuleType:
        """Return the rule type this evaluator handles."""
        pass

    def field_value(self, rule: QualityRule, record: Mapping[str, Any]) -> Any:
        """Resolve the rule's field path against the record."""
        if not rule.field_path:
            raise ConfigurationError(f"Rule '{rule.name}' of type {self.rule_type.value} has no field_path")
        return resolve_field_path(record, rule.field_path)

    def present_or_vacuous(self, rule: QualityRule, value: Any) -> bool:
        """
        Handle absent values uniformly.

        Returns True when the value is present and should be checked,
        False when it is absent and the rule passes by vacuity.

        Raises:
            RuleViolation: If the value is absent and the rule is required
        """
        if value is not None:
            return True
        if rule.required:
            raise self.violation(rule, "Required field is missing or null")
        return False

    def violation(self, rule: QualityRule, message: str) -> RuleViolation:
        return RuleViolation(rule_name=rule.name, field_path=rule.field_path, message=message)

    def evaluate_expression(self, rule: QualityRule, expression: str, record: Mapping[str, Any]) -> bool:
        """
        Evaluate an expression through the configured expression evaluator.

        Raises:
            CollaboratorFailure: If no evaluator is configured or it raised
        """
        evaluator = self.collaborators.expression_evaluator
        if evaluator is None:
            raise CollaboratorFailure("ExpressionEvaluator", "no expression evaluator configured")

        return self.call_collaborator("ExpressionEvaluator", evaluator.evaluate, expression, record)

    @staticmethod
    def call_collaborator(name: str, func, *args) -> bool:
        """
        Call a collaborator, converting unexpected exceptions to CollaboratorFailure.

        Engine errors raised by the collaborator (e.g. EvaluationError for a
        malformed expression) propagate unchanged.
        """
        try:
            return bool(func(*args))
        except QualityEngineError:
            raise
        except Exception as e:
            raise CollaboratorFailure(name, f"{type(e).__name__}: {e}") from e

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(rule_type={self.rule_type.value})"
