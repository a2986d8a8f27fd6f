"""Normalization of raw security-analysis payloads into typed report models."""

import logging
from collections.abc import Mapping
from typing import Any

from netsec_reporter.models.analysis import (
    AnalysisBody,
    AnalysisReport,
    ConfigSummary,
    PasswordAnalysis,
    PasswordIssue,
)
from netsec_reporter.primitives import (
    clamp,
    is_finite_number,
    safe_list,
    to_count,
    to_float,
    to_text,
)

logger = logging.getLogger(__name__)

# Shared, immutable stand-in for a missing issue list.
EMPTY_ISSUES: tuple[Any, ...] = ()

_COUNT_FIELDS = (
    ("totalIssues", "total_issues"),
    ("critical", "critical"),
    ("high", "high"),
    ("medium", "medium"),
    ("low", "low"),
)


def normalize_score(value: Any) -> float:
    """Clamp a security score into [0, 100]; anything non-finite scores 0."""
    if not is_finite_number(value):
        if value is not None:
            logger.debug("normalize_score: non-finite score %r replaced with 0", value)
        return 0.0
    return float(clamp(value, 0, 100))


def normalize_issues(value: Any) -> Any:
    """
    Return the raw issue sequence untouched, or the shared empty sequence.

    Entries are not coerced here: a list may legitimately hold nulls and the
    caller relies on the sequence keeping its identity between renders.
    """
    if isinstance(value, (list, tuple)):
        return value
    if value is not None:
        logger.debug("normalize_issues: expected a sequence, got %s", type(value).__name__)
    return EMPTY_ISSUES


def normalize_recommendations(value: Any) -> list[str]:
    if value is not None and not isinstance(value, (list, tuple)):
        logger.debug("normalize_recommendations: expected a sequence, got %s", type(value).__name__)
    # Null entries stay as blank placeholders so rec-<i> keys follow the raw index.
    return ["" if rec is None else str(rec) for rec in safe_list(value)]


def normalize_config_summary(value: Any) -> ConfigSummary | None:
    if not isinstance(value, Mapping):
        return None
    return ConfigSummary(
        total_interfaces=to_count(value.get("totalInterfaces") or 0),
        total_vty_lines=to_count(value.get("totalVTYLines") or 0),
        total_acls=to_count(value.get("totalACLs") or 0),
    )


def normalize_password_analysis(value: Any) -> PasswordAnalysis | None:
    if not isinstance(value, Mapping):
        return None
    issues = []
    for item in safe_list(value.get("issues")):
        title = to_text(item.get("title")) if isinstance(item, Mapping) else None
        issues.append(PasswordIssue(title=title))
    return PasswordAnalysis(
        strength=to_text(value.get("strength")) or "UNKNOWN",
        score=to_float(value.get("score"), 0.0),
        issues=issues,
    )


def normalize_analysis(raw_body: Any) -> AnalysisBody:
    """
    Build a fully-defaulted AnalysisBody from whatever the analyzer produced.

    Never raises. Non-mapping input yields the all-defaults body.
    """
    if not isinstance(raw_body, Mapping):
        if raw_body is not None:
            logger.debug("normalize_analysis: body is %s, using defaults", type(raw_body).__name__)
        raw_body = {}

    fields: dict[str, Any] = {
        name: to_count(raw_body.get(key)) for key, name in _COUNT_FIELDS
    }
    fields["security_score"] = normalize_score(raw_body.get("securityScore"))
    fields["issues"] = normalize_issues(raw_body.get("issues"))
    # Absent total means 0; an explicit null falls back to the issue list length.
    if "totalIssues" in raw_body and raw_body["totalIssues"] is None:
        fields["total_issues"] = len(fields["issues"])
    fields["recommendations"] = normalize_recommendations(raw_body.get("recommendations"))
    fields["config_summary"] = normalize_config_summary(raw_body.get("configSummary"))
    fields["password_analysis"] = normalize_password_analysis(raw_body.get("passwordAnalysis"))

    # model_construct keeps the issues sequence as the same object.
    return AnalysisBody.model_construct(**fields)


def normalize_report(raw_report: Any) -> AnalysisReport | None:
    """Normalize a top-level report; None means there is nothing to render."""
    if not isinstance(raw_report, Mapping):
        logger.debug("normalize_report: report is %s, nothing to render", type(raw_report).__name__)
        return None

    return AnalysisReport.model_construct(
        filename=to_text(raw_report.get("filename")),
        analysis_time=to_text(raw_report.get("analysisTime")),
        analysis=normalize_analysis(raw_report.get("analysis")),
    )
