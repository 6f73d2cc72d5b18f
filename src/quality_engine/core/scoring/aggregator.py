"""
Reduction of quality checks into metrics and a single 0-100 score.
"""

import math
from collections.abc import Sequence

from quality_engine.core.config import ScoringConfig
from quality_engine.core.models import DataQualityCheck, QualityMetrics, Severity


def round_half_up(value: float, digits: int = 2) -> float:
    """Round half away from zero for non-negative values (``Math.round`` semantics)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


class ScoreAggregator:
    """
    Computes quality metrics and the penalised quality score.

    The score is a penalty model, not a weighted average:
    ``max(0, pass_rate - (critical*10 + major*5 + minor*1))``, so a single
    critical failure can dominate an otherwise high pass rate.
    """

    def __init__(self, config: ScoringConfig | None = None):
        self.config = config or ScoringConfig()

    def compute_metrics(self, checks: Sequence[DataQualityCheck]) -> QualityMetrics:
        """
        Count checks by outcome, failed severity and rule type.

        Args:
            checks: Checks from one evaluation

        Returns:
            QualityMetrics with pass_rate rounded to 2 decimals
        """
        total = len(checks)
        passed = sum(1 for check in checks if check.passed)
        pass_rate = round_half_up(passed / total * 100) if total else 0.0

        failed_by_severity: dict[Severity, int] = {}
        checks_by_type = {}
        for check in checks:
            rule_type = check.rule.rule_type
            checks_by_type[rule_type] = checks_by_type.get(rule_type, 0) + 1
            if not check.passed:
                failed_by_severity[check.severity] = failed_by_severity.get(check.severity, 0) + 1

        return QualityMetrics(
            total_checks=total,
            passed_checks=passed,
            failed_checks=total - passed,
            pass_rate=pass_rate,
            critical_issues=failed_by_severity.get(Severity.CRITICAL, 0),
            major_issues=failed_by_severity.get(Severity.MAJOR, 0),
            minor_issues=failed_by_severity.get(Severity.MINOR, 0),
            checks_by_type=checks_by_type,
        )

    def compute_score(self, metrics: QualityMetrics) -> float:
        """
        Compute the quality score from metrics.

        Returns:
            Score in [0, 100], rounded to 2 decimals
        """
        penalty = (
            metrics.critical_issues * self.config.critical_penalty
            + metrics.major_issues * self.config.major_penalty
            + metrics.minor_issues * self.config.minor_penalty
        )
        score = max(0.0, metrics.pass_rate - penalty)
        return round_half_up(score)
