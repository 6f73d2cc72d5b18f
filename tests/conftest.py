"""
Pytest configuration and fixtures for quality-engine tests

This module provides shared fixtures for unit and integration tests.
"""
from collections.abc import Mapping
from datetime import datetime
from typing import Any

import pytest

from quality_engine.core.collaborators import Collaborators

FIXED_NOW = datetime(2024, 6, 15, 12, 0, 0)


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that exercise a single component"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that run the full quality service"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take more than 5 seconds to run"
    )


# =======================
# FAKE COLLABORATORS
# =======================

class InMemoryUniquenessStore:
    """Uniqueness store backed by a set of (field_path, scope, value) keys"""

    def __init__(self, existing: dict[tuple[str, str | None], set] | None = None):
        self.existing = existing or {}
        self.calls: list[tuple[Any, str, str | None]] = []

    def exists(self, value: Any, field_path: str, scope: str | None) -> bool:
        self.calls.append((value, field_path, scope))
        return value in self.existing.get((field_path, scope), set())


class InMemoryReferenceStore:
    """Reference store backed by {(table, column): values}"""

    def __init__(self, tables: dict[tuple[str, str], set] | None = None):
        self.tables = tables or {}

    def exists(self, value: Any, table: str, column: str) -> bool:
        return value in self.tables.get((table, column), set())


class LookupExpressionEvaluator:
    """
    Expression evaluator backed by a dict of expression -> predicate.

    Unknown expressions raise KeyError, which the engine reports as a
    collaborator failure.
    """

    def __init__(self, predicates: dict[str, Any] | None = None):
        self.predicates = predicates or {}

    def evaluate(self, expression: str, context: Mapping[str, Any]) -> bool:
        return self.predicates[expression](context)


class FailingStore:
    """Store whose lookups always raise, like a dropped connection"""

    def exists(self, *args) -> bool:
        raise ConnectionError("store unavailable")


# =======================
# FIXTURES
# =======================

@pytest.fixture
def fixed_clock():
    """Clock frozen at 2024-06-15 12:00 (naive local time)"""
    return lambda: FIXED_NOW


@pytest.fixture
def uniqueness_store() -> InMemoryUniquenessStore:
    return InMemoryUniquenessStore({("order.id", "orders"): {"ORD-1", "ORD-2"}})


@pytest.fixture
def reference_store() -> InMemoryReferenceStore:
    return InMemoryReferenceStore({("customers", "id"): {"C-1", "C-2"}})


@pytest.fixture
def expression_evaluator() -> LookupExpressionEvaluator:
    return LookupExpressionEvaluator({
        "total == subtotal + tax": lambda r: r["total"] == r["subtotal"] + r["tax"],
        "quantity > 0": lambda r: r["quantity"] > 0,
    })


@pytest.fixture
def collaborators(uniqueness_store, reference_store, expression_evaluator, fixed_clock) -> Collaborators:
    """Collaborators wired to in-memory fakes and the fixed clock"""
    return Collaborators(
        uniqueness_store=uniqueness_store,
        reference_store=reference_store,
        expression_evaluator=expression_evaluator,
        consistency_predicate=lambda values, rule: len(set(values)) == 1,
        clock=fixed_clock,
    )


@pytest.fixture
def failing_store() -> FailingStore:
    return FailingStore()
