"""
Conversion of failed checks into issues and remediation recommendations.
"""

from collections.abc import Sequence

from quality_engine.core.models import DataQualityCheck, QualityIssue, RuleType

IMPACT_BY_TYPE: dict[RuleType, str] = {
    RuleType.COMPLETENESS: "Missing data may lead to incomplete reporting and failed downstream processing",
    RuleType.ACCURACY: "Inaccurate values may produce incorrect analytics and business decisions",
    RuleType.CONSISTENCY: "Inconsistent fields undermine trust in related records and reconciliations",
    RuleType.VALIDITY: "Invalid values may be rejected or misinterpreted by consuming systems",
    RuleType.UNIQUENESS: "Duplicate records may inflate counts and cause double processing",
    RuleType.TIMELINESS: "Stale data may drive decisions on outdated information",
    RuleType.REFERENTIAL_INTEGRITY: "Broken references may orphan records and break joins",
    RuleType.BUSINESS_RULE: "Business rule violations may indicate process or compliance failures",
}

RECOMMENDATIONS_BY_TYPE: dict[RuleType, tuple[str, ...]] = {
    RuleType.COMPLETENESS: (
        "Implement mandatory field validation at data entry",
        "Set up default values for optional fields",
    ),
    RuleType.ACCURACY: (
        "Implement data validation rules at source",
        "Set up reference data management",
    ),
    RuleType.CONSISTENCY: (
        "Implement cross-field validation",
        "Standardize data formats across systems",
    ),
    RuleType.VALIDITY: (
        "Implement data type validation",
        "Set up allowed value lists",
    ),
    RuleType.UNIQUENESS: (
        "Implement duplicate detection mechanisms",
        "Set up unique constraints in database",
    ),
    RuleType.TIMELINESS: (
        "Implement data refresh schedules",
        "Set up data aging alerts",
    ),
    RuleType.REFERENTIAL_INTEGRITY: (
        "Enforce foreign key constraints between related datasets",
        "Reconcile orphaned records against master data",
    ),
    RuleType.BUSINESS_RULE: (
        "Review business rule definitions with data owners",
        "Add business rule checks to upstream processes",
    ),
}


class IssueReporter:
    """Builds QualityIssues from failed checks and recommendations from issues."""

    def build_issues(self, checks: Sequence[DataQualityCheck]) -> list[QualityIssue]:
        """One issue per failed check, in check order."""
        return [self._create_issue(check) for check in checks if not check.passed]

    def build_recommendations(self, issues: Sequence[QualityIssue]) -> list[str]:
        """
        Union of the recommendations for every rule type with issues.

        Duplicates are removed; first-seen order is kept.
        """
        recommendations: dict[str, None] = {}
        for rule_type in dict.fromkeys(issue.rule_type for issue in issues):
            for recommendation in RECOMMENDATIONS_BY_TYPE.get(rule_type, ()):
                recommendations.setdefault(recommendation, None)
        return list(recommendations)

    @staticmethod
    def _create_issue(check: DataQualityCheck) -> QualityIssue:
        rule = check.rule
        return QualityIssue(
            rule_name=rule.name,
            rule_type=rule.rule_type,
            severity=check.severity,
            field_path=rule.field_path,
            description=rule.description,
            failure_details=check.failure_details,
            impact=IMPACT_BY_TYPE[rule.rule_type],
        )
