"""Security-analysis report rendering for scanned network device configurations."""

from .normalization.analysis import normalize_analysis, normalize_report
from .view_models.analysis import AnalysisSession, build_analysis_view

__all__ = [
    "AnalysisSession",
    "build_analysis_view",
    "normalize_analysis",
    "normalize_report",
]
