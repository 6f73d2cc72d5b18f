"""
Issue and recommendation reporting.
"""

from .issue_reporter import IssueReporter

__all__ = ["IssueReporter"]
