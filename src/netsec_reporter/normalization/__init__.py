from .analysis import (
    normalize_analysis,
    normalize_issues,
    normalize_report,
    normalize_score,
)

__all__ = [
    "normalize_analysis",
    "normalize_issues",
    "normalize_report",
    "normalize_score",
]
