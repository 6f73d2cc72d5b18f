"""
Call contracts for the external services the rule engine depends on.

The engine treats every collaborator as a blocking call with no retries of
its own; retry and backoff belong to the implementation.
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from quality_engine.core.models import QualityRule


@runtime_checkable
class UniquenessStore(Protocol):
    """Answers whether a value was already seen for a field within a scope."""

    def exists(self, value: Any, field_path: str, scope: str | None) -> bool:
        ...


@runtime_checkable
class ReferenceStore(Protocol):
    """Answers whether a value exists under table.column."""

    def exists(self, value: Any, table: str, column: str) -> bool:
        ...


@runtime_checkable
class ExpressionEvaluator(Protocol):
    """Evaluates a boolean expression against a record."""

    def evaluate(self, expression: str, context: Mapping[str, Any]) -> bool:
        ...


# Decides whether the values of a rule's related fields are mutually consistent.
ConsistencyPredicate = Callable[[Sequence[Any], QualityRule], bool]


@dataclass(frozen=True)
class Collaborators:
    """
    Bundle of collaborators handed to every evaluator.

    Any collaborator may be None; rules that need a missing collaborator
    fail with a CollaboratorFailure instead of passing.
    """

    uniqueness_store: UniquenessStore | None = None
    reference_store: ReferenceStore | None = None
    expression_evaluator: ExpressionEvaluator | None = None
    consistency_predicate: ConsistencyPredicate | None = None
    clock: Callable[[], datetime] = field(default=datetime.now)
