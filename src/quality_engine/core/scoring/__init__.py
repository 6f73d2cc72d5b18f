"""
Quality metrics and score aggregation.
"""

from .aggregator import ScoreAggregator, round_half_up

__all__ = ["ScoreAggregator", "round_half_up"]
