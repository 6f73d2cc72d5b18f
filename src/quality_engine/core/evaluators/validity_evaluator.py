"""
ValidityEvaluator - validates type, range and allowed values.
"""

import math
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from quality_engine.core.errors import ConfigurationError, EvaluationError
from quality_engine.core.models import QualityRule, RuleType

from .base_evaluator import BaseEvaluator


class ValidityEvaluator(BaseEvaluator):
    """
    Validates that a value is valid for its field.

    All configured conditions must hold:
    - runtime type matches ``expected_data_type``
    - value lies in ``[min_value, max_value]`` (either bound optional)
    - stringified value is one of ``allowed_values``

    Supported type names:
    - integer, int, long
    - decimal, float, double, number, numeric
    - string, str, text
    - boolean, bool
    - date, datetime, timestamp
    - list, array, object, map, dict
    """

    TYPE_MAPPING: dict[str, tuple[type, ...]] = {
        "integer": (int,),
        "int": (int,),
        "long": (int,),
        "decimal": (int, float, Decimal),
        "float": (int, float, Decimal),
        "double": (int, float, Decimal),
        "number": (int, float, Decimal),
        "numeric": (int, float, Decimal),
        "string": (str,),
        "str": (str,),
        "text": (str,),
        "boolean": (bool,),
        "bool": (bool,),
        "date": (date,),
        "datetime": (datetime,),
        "timestamp": (datetime,),
        "list": (list, tuple),
        "array": (list, tuple),
        "object": (Mapping,),
        "map": (Mapping,),
        "dict": (Mapping,),
    }

    def evaluate(self, rule: QualityRule, record: Mapping[str, Any]) -> None:
        value = self.field_value(rule, record)

        if not self.present_or_vacuous(rule, value):
            return

        if rule.expected_data_type:
            self._check_type(rule, value)

        if rule.min_value is not None or rule.max_value is not None:
            self._check_range(rule, value)

        if rule.allowed_values is not None and str(value) not in rule.allowed_values:
            raise self.violation(rule, f"Value '{value}' is not one of the allowed values")

    def _check_type(self, rule: QualityRule, value: Any) -> None:
        type_name = rule.expected_data_type.strip().lower()
        expected = self.TYPE_MAPPING.get(type_name)
        if expected is None:
            raise ConfigurationError(f"Unsupported expected_data_type: {rule.expected_data_type}")

        # bool is an int subclass; only boolean rules accept it
        if isinstance(value, bool) and bool not in expected:
            matches = False
        else:
            matches = isinstance(value, expected)

        if not matches:
            raise self.violation(
                rule,
                f"Expected {rule.expected_data_type}, got {type(value).__name__}"
            )

    def _check_range(self, rule: QualityRule, value: Any) -> None:
        if (
            rule.min_value is not None
            and rule.max_value is not None
            and rule.min_value > rule.max_value
        ):
            raise ConfigurationError(
                f"Impossible range: min_value {rule.min_value} exceeds max_value {rule.max_value}"
            )

        number = self._as_number(value)

        if math.isnan(number):
            raise self.violation(rule, "Value is NaN")

        if rule.min_value is not None and number < rule.min_value:
            raise self.violation(rule, f"Value {value} is less than minimum {rule.min_value}")

        if rule.max_value is not None and number > rule.max_value:
            raise self.violation(rule, f"Value {value} exceeds maximum {rule.max_value}")

    @staticmethod
    def _as_number(value: Any) -> float:
        if isinstance(value, bool):
            raise EvaluationError("Cannot compare boolean value against a numeric range")
        if isinstance(value, int | float):
            return float(value)
        if isinstance(value, Decimal):
            return float(value)
        if isinstance(value, str):
            try:
                return float(Decimal(value.strip()))
            except InvalidOperation as e:
                raise EvaluationError(f"Cannot cast '{value}' to a number") from e
        raise EvaluationError(f"Cannot cast {type(value).__name__} to a number")

    @property
    def rule_type(self) -> RuleType:
        return RuleType.VALIDITY
