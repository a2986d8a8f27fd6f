from .analysis import (
    AnalysisSession,
    Memo,
    build_analysis_view,
    build_issue_row,
    filter_issues,
    severity_counts,
)
from .common import SCORE_BANDS, issue_key, score_band, score_rating

__all__ = [
    "AnalysisSession",
    "Memo",
    "SCORE_BANDS",
    "build_analysis_view",
    "build_issue_row",
    "filter_issues",
    "issue_key",
    "score_band",
    "score_rating",
    "severity_counts",
]
