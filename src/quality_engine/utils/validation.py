"""
Input validation utilities for the quality engine.

Provides reusable validation functions for dataset identifiers and rule
field paths, plus dot-path resolution against nested records.
"""

import re
from collections.abc import Mapping
from typing import Any

from quality_engine.core.errors import ConfigurationError

_IDENTIFIER_RE = re.compile(r'^[a-zA-Z0-9_\-\.]+$')

_MISSING = object()


class ValidationError(ValueError):
    """Raised when input validation fails."""
    pass


def validate_dataset_id(dataset_id: str | int, field_name: str = "dataset_id") -> str:
    """
    Validate a dataset ID.

    Dataset IDs must be non-empty and contain only alphanumeric characters,
    hyphens, underscores and dots. Integer IDs are accepted and stringified.

    Args:
        dataset_id: The dataset ID to validate
        field_name: Name of the field (for error messages)

    Returns:
        The validated dataset ID (stripped of whitespace)

    Raises:
        ValidationError: If validation fails

    Examples:
        >>> validate_dataset_id("orders-2024")
        'orders-2024'
        >>> validate_dataset_id(42)
        '42'
    """
    if isinstance(dataset_id, bool):
        raise ValidationError(f"{field_name} must be a string or integer")
    if isinstance(dataset_id, int):
        dataset_id = str(dataset_id)

    if not dataset_id or not isinstance(dataset_id, str):
        raise ValidationError(f"{field_name} must be a non-empty string")

    dataset_id = dataset_id.strip()

    if not dataset_id:
        raise ValidationError(f"{field_name} cannot be empty or whitespace-only")

    if not _IDENTIFIER_RE.match(dataset_id):
        raise ValidationError(
            f"{field_name} contains invalid characters. "
            "Only alphanumeric, hyphens, underscores, and dots are allowed."
        )

    if len(dataset_id) > 255:
        raise ValidationError(f"{field_name} exceeds maximum length of 255 characters")

    return dataset_id


def validate_field_path(field_path: str) -> str:
    """
    Validate a dot-separated field path such as ``customer.address.zip``.

    Every segment must be non-blank.

    Raises:
        ValidationError: If the path is empty or a segment is malformed
    """
    if not field_path or not isinstance(field_path, str):
        raise ValidationError("field_path must be a non-empty string")

    if any(not segment.strip() for segment in field_path.split(".")):
        raise ValidationError(f"field_path '{field_path}' contains an empty segment")

    return field_path


def resolve_field_path(record: Mapping[str, Any], field_path: str | None) -> Any:
    """
    Resolve a dot-separated path against nested mappings.

    An absent key resolves to None. A path that is not a valid dot path, or
    that walks into a non-mapping value, is a rule configuration problem.

    Raises:
        ConfigurationError: If the path is malformed or unreachable
    """
    try:
        validate_field_path(field_path)
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e

    current: Any = record
    walked: list[str] = []
    for part in field_path.split("."):
        if not isinstance(current, Mapping):
            raise ConfigurationError(
                f"Field path '{field_path}' cannot be resolved: "
                f"'{'.'.join(walked)}' is a {type(current).__name__}, not a mapping"
            )
        current = current.get(part, _MISSING)
        if current is _MISSING:
            return None
        walked.append(part)

    return current
