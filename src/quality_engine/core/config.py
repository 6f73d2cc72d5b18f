"""
Tunable thresholds for severity classification, anomaly detection and scoring.

Defaults reproduce the production thresholds. Every value can be overridden
per engine instance, or from ``DQ_``-prefixed environment variables via
``from_env()``.
"""

import os
from datetime import timedelta
from typing import Any

from pydantic import BaseModel, Field, model_validator

ENV_PREFIX = "DQ_"


def _env_overrides(model: type[BaseModel], prefix: str) -> dict[str, Any]:
    """Collect ``<prefix><FIELD>`` environment variables for a model's scalar fields."""
    overrides: dict[str, Any] = {}
    for field_name in model.model_fields:
        raw = os.getenv(f"{prefix}{field_name.upper()}")
        if raw is not None:
            overrides[field_name] = raw
    return overrides


class SeverityThresholds(BaseModel):
    """
    Score cut-offs for severity classification (strictly greater than).

    score > critical -> CRITICAL, > major -> MAJOR, > minor -> MINOR, else INFO.
    """

    critical: float = 5.0
    major: float = 3.0
    minor: float = 1.0

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_ordering(self) -> "SeverityThresholds":
        if not self.critical >= self.major >= self.minor:
            raise ValueError("Severity thresholds must satisfy critical >= major >= minor")
        return self

    @classmethod
    def from_env(cls) -> "SeverityThresholds":
        return cls(**_env_overrides(cls, f"{ENV_PREFIX}SEVERITY_"))


class DetectionConfig(BaseModel):
    """
    Thresholds used by the anomaly detector.

    Attributes:
        z_score_threshold: Flag values whose |z| exceeds this
        z_score_min_size: Minimum numeric collection size for Z-score
        iqr_multiplier: Fence width in IQRs
        iqr_min_size: Minimum numeric collection size for IQR
        isolation_threshold: Flag values whose isolation score exceeds this
        isolation_neighbor_fraction: Neighbour radius as a fraction of the range
        isolation_severity_scale: Isolation score multiplier before classification
        isolation_min_size: Minimum numeric collection size for isolation scoring
        max_string_length: Strings longer than this are LENGTH anomalies
        truncate_length: Characters kept when reporting long strings
        min_pattern_frequency: Signatures seen fewer times than this are rare
        min_pattern_sample_size: Pattern analysis needs more values than this
        future_tolerance: How far in the future a timestamp may be
        max_age_years: How far in the past a timestamp may be
        max_temporal_gap_days: Larger consecutive gaps are TEMPORAL_GAP anomalies
    """

    z_score_threshold: float = Field(3.0, gt=0)
    z_score_min_size: int = Field(3, ge=2)
    iqr_multiplier: float = Field(1.5, gt=0)
    iqr_min_size: int = Field(4, ge=4)
    isolation_threshold: float = Field(0.6, ge=0, le=1)
    isolation_neighbor_fraction: float = Field(0.1, gt=0, le=1)
    isolation_severity_scale: float = Field(5.0, gt=0)
    isolation_min_size: int = Field(10, ge=2)
    max_string_length: int = Field(1000, gt=0)
    truncate_length: int = Field(50, gt=0)
    min_pattern_frequency: int = Field(5, ge=1)
    min_pattern_sample_size: int = Field(20, ge=0)
    future_tolerance: timedelta = timedelta(days=1)
    max_age_years: int = Field(100, gt=0)
    max_temporal_gap_days: int = Field(365, gt=0)
    severity_thresholds: SeverityThresholds = Field(default_factory=SeverityThresholds)

    class Config:
        frozen = True

    @classmethod
    def from_env(cls) -> "DetectionConfig":
        """
        Build a config from environment variables.

        Example: ``DQ_Z_SCORE_THRESHOLD=2.5`` or ``DQ_SEVERITY_CRITICAL=6``.
        """
        overrides = _env_overrides(cls, ENV_PREFIX)
        overrides.pop("severity_thresholds", None)
        return cls(severity_thresholds=SeverityThresholds.from_env(), **overrides)


class ScoringConfig(BaseModel):
    """Penalty points subtracted from the pass rate per failed check severity."""

    critical_penalty: float = Field(10.0, ge=0)
    major_penalty: float = Field(5.0, ge=0)
    minor_penalty: float = Field(1.0, ge=0)

    class Config:
        frozen = True

    @classmethod
    def from_env(cls) -> "ScoringConfig":
        return cls(**_env_overrides(cls, f"{ENV_PREFIX}SCORING_"))
