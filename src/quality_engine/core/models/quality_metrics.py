"""
QualityMetrics model summarising a set of checks.
"""

from pydantic import BaseModel, Field, model_validator

from .enums import RuleType


class QualityMetrics(BaseModel):
    """
    Aggregate counts over the checks of one evaluation.

    Attributes:
        total_checks: Number of checks
        passed_checks: Number of passed checks
        failed_checks: Number of failed checks
        pass_rate: passed / total * 100, rounded to 2 decimals (0 when no checks)
        critical_issues: Failed checks with CRITICAL severity
        major_issues: Failed checks with MAJOR severity
        minor_issues: Failed checks with MINOR severity
        checks_by_type: Count of all checks (passed and failed) per rule type
    """

    total_checks: int = Field(0, ge=0)
    passed_checks: int = Field(0, ge=0)
    failed_checks: int = Field(0, ge=0)
    pass_rate: float = Field(0.0, ge=0.0, le=100.0)
    critical_issues: int = Field(0, ge=0)
    major_issues: int = Field(0, ge=0)
    minor_issues: int = Field(0, ge=0)
    checks_by_type: dict[RuleType, int] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_totals(self) -> "QualityMetrics":
        if self.total_checks != self.passed_checks + self.failed_checks:
            raise ValueError("total_checks must equal passed_checks + failed_checks")
        return self
