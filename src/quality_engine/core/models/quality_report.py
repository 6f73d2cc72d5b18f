"""
DataQualityReport model representing the outcome of a quality check run.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from .enums import QualityCheckStatus
from .quality_check import DataQualityCheck
from .quality_issue import QualityIssue
from .quality_metrics import QualityMetrics


class DataQualityReport(BaseModel):
    """
    Full result of running the active rule set against a dataset record.

    Attributes:
        dataset_id: Identifier of the checked dataset
        dataset_type: Dataset type used to select rules
        status: Lifecycle status of the run
        check_date: When the run started
        completion_time: When the run finished (None until completed)
        checks: One check per evaluated rule
        metrics: Aggregate counts over the checks
        quality_score: Penalised 0-100 score
        issues: One issue per failed check
        recommendations: Deduplicated remediation advice
        error_message: Why the run failed (FAILED status only)
    """

    dataset_id: str
    dataset_type: str
    status: QualityCheckStatus = QualityCheckStatus.PENDING
    check_date: datetime = Field(default_factory=datetime.now)
    completion_time: datetime | None = None
    checks: list[DataQualityCheck] = Field(default_factory=list)
    metrics: QualityMetrics | None = None
    quality_score: float | None = Field(None, ge=0.0, le=100.0)
    issues: list[QualityIssue] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    error_message: str | None = None
