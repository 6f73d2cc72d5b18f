"""
Exception hierarchy for rule evaluation.

None of these escape ``RuleEngine.evaluate``: a RuleViolation becomes the
failure details of a check, every other QualityEngineError becomes its
error message.
"""


class QualityEngineError(Exception):
    """Base class for engine errors."""


class RuleViolation(QualityEngineError):
    """Raised by an evaluator when the record does not satisfy the rule."""

    def __init__(self, rule_name: str, field_path: str | None, message: str):
        self.rule_name = rule_name
        self.field_path = field_path
        self.message = message
        super().__init__(f"[{rule_name}] {field_path or '<record>'}: {message}")


class EvaluationError(QualityEngineError):
    """The rule could not be evaluated (bad regex, type-cast failure, malformed expression)."""


class ConfigurationError(QualityEngineError):
    """The rule is misconfigured (unknown field path, impossible range, missing parameter)."""


class CollaboratorFailure(QualityEngineError):
    """An external collaborator is missing, raised, or timed out."""

    def __init__(self, collaborator: str, message: str):
        self.collaborator = collaborator
        super().__init__(f"{collaborator}: {message}")
