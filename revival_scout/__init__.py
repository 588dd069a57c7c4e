"""
Revival Scout: find abandoned repositories worth reviving.
"""

from revival_scout.core import Analyzer, analyze, analyze_records, degraded_analysis
from revival_scout.errors import (
    ComputationFault,
    DataUnavailable,
    MalformedTimestamp,
    RevivalScoutError,
)
from revival_scout.models import AnalysisResult, Commit, Issue, Repository

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "Analyzer",
    "Commit",
    "ComputationFault",
    "DataUnavailable",
    "Issue",
    "MalformedTimestamp",
    "Repository",
    "RevivalScoutError",
    "analyze",
    "analyze_records",
    "degraded_analysis",
]
