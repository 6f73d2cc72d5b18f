"""
Profile models produced by the data profiler.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class NumericStatistics(BaseModel):
    """Descriptive statistics of a numeric collection."""

    min: float
    max: float
    mean: float
    median: float
    standard_deviation: float
    variance: float
    percentiles: dict[int, float] = Field(default_factory=dict)


class StringStatistics(BaseModel):
    """Length and shape statistics of a string collection."""

    min_length: int
    max_length: int
    avg_length: float
    patterns: dict[str, int] = Field(default_factory=dict)
    common_prefixes: list[str] = Field(default_factory=list)
    common_suffixes: list[str] = Field(default_factory=list)


class FieldProfile(BaseModel):
    """
    Profile of a single field.

    Attributes:
        field_name: Name of the field
        data_type: Detected type name ("number", "string", "timestamp", ...)
        count: Number of values (1 for scalars)
        null_count: Number of None values
        empty_count: 1 when the field is an empty collection or blank string
        unique_count: Number of distinct values
        cardinality: unique_count / count
        completeness: Share of non-null values (0.0-1.0)
        sample_values: Up to 10 values rendered as strings
        numeric_statistics: Present for numeric collections
        string_statistics: Present for string collections
        nested_structure: True when the field is a mapping
        nested_fields: Profiles of a mapping's entries keyed by entry name
    """

    field_name: str
    data_type: str | None = None
    count: int = 0
    null_count: int = 0
    empty_count: int = 0
    unique_count: int = 0
    cardinality: float = 0.0
    completeness: float = Field(1.0, ge=0.0, le=1.0)
    sample_values: list[str] = Field(default_factory=list)
    numeric_statistics: NumericStatistics | None = None
    string_statistics: StringStatistics | None = None
    nested_structure: bool = False
    nested_fields: dict[str, "FieldProfile"] = Field(default_factory=dict)


class DataProfile(BaseModel):
    """
    Profile of a whole record/dataset snapshot.

    Attributes:
        profile_date: When the profile was computed
        record_count: Largest collection size across fields (1 for scalar-only records)
        field_profiles: Per-field profiles keyed by field name
        completeness: Share of fields with a non-null value (0.0-1.0)
        uniqueness: Mean cardinality across profiled collections (0.0-1.0)
    """

    profile_date: datetime = Field(default_factory=datetime.now)
    record_count: int = 0
    field_profiles: dict[str, FieldProfile] = Field(default_factory=dict)
    completeness: float = Field(0.0, ge=0.0, le=1.0)
    uniqueness: float = Field(0.0, ge=0.0, le=1.0)
