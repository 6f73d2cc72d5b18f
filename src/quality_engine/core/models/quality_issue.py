"""
QualityIssue model derived from a failed check.
"""

from pydantic import BaseModel

from .enums import RuleType, Severity


class QualityIssue(BaseModel):
    """
    A reportable problem, one per failed check.

    Attributes:
        rule_name: Name of the failed rule
        rule_type: Type of the failed rule
        severity: Severity of the failed check
        field_path: Field the rule applies to
        description: Rule description
        failure_details: Failure details of the check
        impact: Business impact heuristic for the rule type
    """

    rule_name: str
    rule_type: RuleType
    severity: Severity
    field_path: str | None = None
    description: str | None = None
    failure_details: str | None = None
    impact: str
