"""
Loading quality rules from YAML and building them in code.
"""

from datetime import timedelta
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from quality_engine.core.models import QualityRule, RuleType, Severity


class RuleConfigLoader:
    """
    Loads quality rules from YAML configuration files.

    Files look like:
    ```yaml
    dataset_type: orders
    rules:
      order.id:
        - type: COMPLETENESS
          required: true
          severity: CRITICAL
        - type: UNIQUENESS
          scope: orders

      order.status:
        - type: VALIDITY
          expected_data_type: string
          allowed_values: [NEW, SHIPPED, CANCELLED]

      order.updated_at:
        - type: TIMELINESS
          timeliness_threshold: P7D

    record_rules:
      - name: totals_match
        type: BUSINESS_RULE
        business_rule_expression: "order.total == order.subtotal + order.tax"
    ```

    ``rules`` is keyed by field path; ``record_rules`` holds rules that
    span the whole record (CONSISTENCY, BUSINESS_RULE). A top-level
    ``dataset_type`` is applied to every rule that does not set its own.
    """

    def __init__(self, config_path: str | Path):
        """
        Point the loader at a YAML rule file.

        Args:
            config_path: Location of the rule file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule configuration file not found: {config_path}")

    def load_rules(self) -> list[QualityRule]:
        """
        Load and parse quality rules from the YAML file.

        Returns:
            List of QualityRule objects

        Raises:
            ValueError: If YAML is invalid or a rule definition is malformed
        """
        with open(self.config_path) as f:
            config = yaml.safe_load(f)

        if not isinstance(config, dict):
            raise ValueError(
                f"Configuration file must contain a mapping at the top level, got {type(config).__name__}"
            )
        if "rules" not in config and "record_rules" not in config:
            raise ValueError("Configuration file must contain a 'rules' or 'record_rules' section")

        dataset_type = config.get("dataset_type")
        rules = []

        for field_path, field_rule_list in (config.get("rules") or {}).items():
            if not isinstance(field_rule_list, list):
                raise ValueError(f"Rules for field '{field_path}' must be a list")

            for idx, rule_def in enumerate(field_rule_list):
                rules.append(self._parse_rule(rule_def, idx, field_path, dataset_type))

        for idx, rule_def in enumerate(config.get("record_rules") or []):
            rules.append(self._parse_rule(rule_def, idx, None, dataset_type))

        return rules

    def _parse_rule(
        self,
        rule_def: dict[str, Any],
        idx: int,
        field_path: str | None,
        dataset_type: str | None,
    ) -> QualityRule:
        """
        Turn one YAML rule entry into a QualityRule.

        Args:
            rule_def: Mapping read from the file
            idx: Index of this rule within its section (for naming)
            field_path: The field this rule applies to (None for record rules)
            dataset_type: Default dataset type from the file

        Returns:
            Parsed QualityRule

        Raises:
            ValueError: If the entry has no known type or fails model validation
        """
        if not isinstance(rule_def, dict) or "type" not in rule_def:
            raise ValueError(f"Rule {idx} for '{field_path or 'record_rules'}' is missing 'type'")

        definition = dict(rule_def)
        raw_type = str(definition.pop("type")).upper()
        try:
            rule_type = RuleType(raw_type)
        except ValueError:
            raise ValueError(f"Unknown rule type '{raw_type}' for '{field_path or 'record_rules'}'")

        prefix = field_path or "record"
        definition.setdefault("name", f"{prefix}_{rule_type.value.lower()}_{idx}")
        if field_path is not None:
            definition.setdefault("field_path", field_path)
        if dataset_type is not None:
            definition.setdefault("dataset_type", dataset_type)
        if "severity" in definition:
            definition["severity"] = str(definition["severity"]).upper()

        try:
            return QualityRule(rule_type=rule_type, **definition)
        except ValidationError as e:
            raise ValueError(f"Invalid rule '{definition['name']}': {e}") from e


class RuleConfigBuilder:
    """
    Fluent construction of rule lists, used by tests and callers that define rules in code.
    """

    def __init__(self, dataset_type: str | None = None):
        """Start with no rules; dataset_type is stamped on every rule added."""
        self.dataset_type = dataset_type
        self.rules: list[QualityRule] = []

    def _add(self, name: str, rule_type: RuleType, severity: Severity, **attributes: Any) -> "RuleConfigBuilder":
        self.rules.append(QualityRule(
            name=name,
            rule_type=rule_type,
            severity=severity,
            dataset_type=self.dataset_type,
            **attributes,
        ))
        return self

    def add_completeness(
        self,
        field_path: str,
        required: bool = True,
        severity: Severity = Severity.MAJOR,
    ) -> "RuleConfigBuilder":
        """Add a completeness rule."""
        return self._add(
            f"{field_path}_completeness", RuleType.COMPLETENESS, severity,
            field_path=field_path, required=required,
        )

    def add_accuracy(
        self,
        field_path: str,
        format_pattern: str | None = None,
        reference_data: set[str] | None = None,
        severity: Severity = Severity.MAJOR,
    ) -> "RuleConfigBuilder":
        """Add an accuracy rule (reference data or format pattern)."""
        return self._add(
            f"{field_path}_accuracy", RuleType.ACCURACY, severity,
            field_path=field_path, format_pattern=format_pattern, reference_data=reference_data,
        )

    def add_consistency(
        self,
        name: str,
        expression: str | None = None,
        related_fields: list[str] | None = None,
        severity: Severity = Severity.MAJOR,
    ) -> "RuleConfigBuilder":
        """Add a cross-field consistency rule."""
        return self._add(
            name, RuleType.CONSISTENCY, severity,
            consistency_expression=expression, related_fields=related_fields,
        )

    def add_validity(
        self,
        field_path: str,
        expected_data_type: str | None = None,
        min_value: float | None = None,
        max_value: float | None = None,
        allowed_values: set[str] | None = None,
        severity: Severity = Severity.MAJOR,
    ) -> "RuleConfigBuilder":
        """Add a validity rule (type, range, allowed values)."""
        return self._add(
            f"{field_path}_validity", RuleType.VALIDITY, severity,
            field_path=field_path, expected_data_type=expected_data_type,
            min_value=min_value, max_value=max_value, allowed_values=allowed_values,
        )

    def add_uniqueness(
        self,
        field_path: str,
        scope: str | None = None,
        severity: Severity = Severity.MAJOR,
    ) -> "RuleConfigBuilder":
        """Add a uniqueness rule."""
        return self._add(
            f"{field_path}_uniqueness", RuleType.UNIQUENESS, severity,
            field_path=field_path, scope=scope,
        )

    def add_timeliness(
        self,
        field_path: str,
        threshold: timedelta,
        severity: Severity = Severity.MINOR,
    ) -> "RuleConfigBuilder":
        """Add a timeliness rule."""
        return self._add(
            f"{field_path}_timeliness", RuleType.TIMELINESS, severity,
            field_path=field_path, timeliness_threshold=threshold,
        )

    def add_referential_integrity(
        self,
        field_path: str,
        table: str,
        column: str,
        severity: Severity = Severity.CRITICAL,
    ) -> "RuleConfigBuilder":
        """Add a referential integrity rule."""
        return self._add(
            f"{field_path}_reference", RuleType.REFERENTIAL_INTEGRITY, severity,
            field_path=field_path, reference_table=table, reference_column=column,
        )

    def add_business_rule(
        self,
        name: str,
        expression: str,
        severity: Severity = Severity.MAJOR,
    ) -> "RuleConfigBuilder":
        """Add a business rule evaluated against the whole record."""
        return self._add(name, RuleType.BUSINESS_RULE, severity, business_rule_expression=expression)

    def build(self) -> list[QualityRule]:
        """Return a copy of the accumulated rules."""
        return list(self.rules)
