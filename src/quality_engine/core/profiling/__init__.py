"""
Field profiling.
"""

from .profiler import DataProfiler, common_affixes

__all__ = ["DataProfiler", "common_affixes"]
