from .analysis import (
    AnalysisBody,
    AnalysisReport,
    ConfigSummary,
    IssueRecord,
    PasswordAnalysis,
    PasswordIssue,
)
from .reporter_config import ReporterConfig, SeverityFilter

__all__ = [
    "AnalysisBody",
    "AnalysisReport",
    "ConfigSummary",
    "IssueRecord",
    "PasswordAnalysis",
    "PasswordIssue",
    "ReporterConfig",
    "SeverityFilter",
]
