"""
QualityRule model representing a typed data-quality constraint.
"""

from datetime import timedelta

from pydantic import BaseModel, Field

from .enums import RuleType, Severity


class QualityRule(BaseModel):
    """
    A typed data-quality constraint evaluated against a record.

    Only the attributes relevant to ``rule_type`` are consulted during
    evaluation; the rest stay None.

    Attributes:
        rule_id: Identifier assigned by the rule store
        name: Human-readable name ("customer_email_present")
        description: Free-text description copied onto issues
        rule_type: One of the eight RuleType categories
        severity: Severity of a failed check
        field_path: Dot-separated path of the evaluated field ("customer.email")
        required: Whether an absent/None value fails the rule
        format_pattern: Regex the value must fully match (ACCURACY)
        reference_data: Accepted values, compared as strings (ACCURACY)
        consistency_expression: Expression evaluated against the record (CONSISTENCY)
        related_fields: Field paths checked together (CONSISTENCY)
        expected_data_type: Type name the value must have (VALIDITY)
        min_value: Inclusive lower bound (VALIDITY)
        max_value: Inclusive upper bound (VALIDITY)
        allowed_values: Accepted values, compared as strings (VALIDITY)
        timeliness_threshold: Maximum age of a timestamp value (TIMELINESS)
        reference_table: Lookup table (REFERENTIAL_INTEGRITY)
        reference_column: Lookup column (REFERENTIAL_INTEGRITY)
        business_rule_expression: Expression evaluated against the record (BUSINESS_RULE)
        scope: Uniqueness scope passed to the uniqueness store (UNIQUENESS)
        dataset_type: Dataset type the rule applies to (None means all)
        active: Whether the rule is evaluated at all
    """

    rule_id: int | None = None
    name: str = Field(..., min_length=1)
    description: str | None = None
    rule_type: RuleType
    severity: Severity = Severity.MAJOR
    field_path: str | None = None
    required: bool = False
    format_pattern: str | None = None
    reference_data: frozenset[str] | None = None
    consistency_expression: str | None = None
    related_fields: tuple[str, ...] | None = None
    expected_data_type: str | None = None
    min_value: float | None = None
    max_value: float | None = None
    allowed_values: frozenset[str] | None = None
    timeliness_threshold: timedelta | None = None
    reference_table: str | None = None
    reference_column: str | None = None
    business_rule_expression: str | None = None
    scope: str | None = None
    dataset_type: str | None = None
    active: bool = True

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "rule_id": 1,
                "name": "order_status_allowed",
                "rule_type": "VALIDITY",
                "severity": "MAJOR",
                "field_path": "order.status",
                "required": True,
                "expected_data_type": "string",
                "allowed_values": ["NEW", "SHIPPED", "CANCELLED"],
                "active": True
            }
        }
