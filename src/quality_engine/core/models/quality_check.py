"""
DataQualityCheck model representing the outcome of one rule on one record (ephemeral).
"""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from .enums import Severity
from .quality_rule import QualityRule


class DataQualityCheck(BaseModel):
    """
    Pass/fail result of evaluating one rule against one record.

    A check that errored during evaluation is failed: it carries both
    ``failure_details`` and ``error_message``.

    Attributes:
        rule: The evaluated rule
        passed: Whether the rule was satisfied
        severity: Severity copied from the rule
        failure_details: Why the rule failed (present iff not passed)
        error_message: Why evaluation itself errored (None otherwise)
        execution_time: When the check was evaluated
    """

    rule: QualityRule
    passed: bool
    severity: Severity
    failure_details: str | None = None
    error_message: str | None = None
    execution_time: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def check_passed_consistency(self) -> "DataQualityCheck":
        """Validate that exactly one of passed / failure_details holds."""
        if self.passed == (self.failure_details is not None):
            raise ValueError("passed must be True iff failure_details is None")
        if self.passed and self.error_message is not None:
            raise ValueError("passed=True but error_message is set")
        return self

    @property
    def errored(self) -> bool:
        """Whether evaluation itself failed (as opposed to the rule failing)."""
        return self.error_message is not None
