"""
Rule evaluator implementations, one per rule type.
"""

from .accuracy_evaluator import AccuracyEvaluator
from .base_evaluator import BaseEvaluator
from .business_rule_evaluator import BusinessRuleEvaluator
from .completeness_evaluator import CompletenessEvaluator
from .consistency_evaluator import ConsistencyEvaluator
from .referential_integrity_evaluator import ReferentialIntegrityEvaluator
from .timeliness_evaluator import TimelinessEvaluator
from .uniqueness_evaluator import UniquenessEvaluator
from .validity_evaluator import ValidityEvaluator

__all__ = [
    "BaseEvaluator",
    "CompletenessEvaluator",
    "AccuracyEvaluator",
    "ConsistencyEvaluator",
    "ValidityEvaluator",
    "UniquenessEvaluator",
    "TimelinessEvaluator",
    "ReferentialIntegrityEvaluator",
    "BusinessRuleEvaluator",
]
