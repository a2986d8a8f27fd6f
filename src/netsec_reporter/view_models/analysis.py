"""Security-analysis report view-model builders."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from ..models.analysis import AnalysisReport, IssueRecord
from ..normalization.analysis import EMPTY_ISSUES, normalize_report
from ..primitives import CVE_NOT_APPLICABLE, SEVERITY_FILTERS, SEVERITY_LEVELS, format_number
from .common import (
    build_meta,
    issue_key,
    password_strength_classes,
    score_band,
    severity_classes,
)

logger = logging.getLogger(__name__)

DEFAULT_EMPTY_MESSAGE = "No issues found for this filter."

_SEVERITY_TILES = (
    ("CRITICAL", "critical", "Critical", "red", "\U0001F534"),
    ("HIGH", "high", "High", "orange", "\U0001F7E0"),
    ("MEDIUM", "medium", "Medium", "yellow", "\U0001F7E1"),
    ("LOW", "low", "Low", "green", "\U0001F7E2"),
)

_CONFIG_TILES = (
    ("total_interfaces", "Total Interfaces", "blue"),
    ("total_vty_lines", "VTY Lines", "purple"),
    ("total_acls", "Access Lists", "indigo"),
)


# ---------------------------------------------------------------------------
# Pure derivations
# ---------------------------------------------------------------------------


def severity_counts(issues: Sequence[Any]) -> dict[str, int]:
    """Count issues per severity bucket; unrecognised severities only count toward ALL."""
    counts = {"ALL": len(issues), "CRITICAL": 0, "HIGH": 0, "MEDIUM": 0, "LOW": 0}
    for issue in issues:
        if not isinstance(issue, Mapping):
            continue
        sev = issue.get("severity")
        if isinstance(sev, str) and sev in SEVERITY_LEVELS:
            counts[sev] += 1
    return counts


def filter_issues(issues: Sequence[Any], severity_filter: str) -> Sequence[Any]:
    """
    Subset issues by exact severity, preserving order.
    ALL returns the input sequence itself so downstream caches keyed on it stay valid.
    """
    if severity_filter == "ALL":
        return issues
    return [
        issue
        for issue in issues
        if isinstance(issue, Mapping) and issue.get("severity") == severity_filter
    ]


def coerce_issue(raw: Any) -> IssueRecord | None:
    if not isinstance(raw, Mapping):
        return None
    return IssueRecord.model_validate(dict(raw))


# ---------------------------------------------------------------------------
# Memoization
# ---------------------------------------------------------------------------

_UNSET = object()


class Memo:
    """Holds one derived value, recomputed only when its token changes."""

    def __init__(self) -> None:
        self._token: Any = _UNSET
        self._value: Any = None

    def get(self, token: Any, compute: Callable[[], Any]) -> Any:
        if self._token is _UNSET or token != self._token:
            self._value = compute()
            self._token = token
        return self._value

    def clear(self) -> None:
        self._token = _UNSET
        self._value = None


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


class AnalysisSession:
    """
    Rendering session for a single analysis report.

    Owns the severity filter and the cached derivations. Counts are keyed on
    the issues revision alone, the filtered subset on (revision, filter), so
    switching filters never recounts and reloading the same issues sequence
    recomputes nothing.
    """

    def __init__(self, report: Any = None, filter_value: str = "ALL") -> None:
        self._check_filter(filter_value)
        self._filter = filter_value
        self._report: AnalysisReport | None = None
        self._issues: Sequence[Any] = EMPTY_ISSUES
        self._revision = 0
        self._counts_memo = Memo()
        self._filtered_memo = Memo()
        self.load(report)

    @staticmethod
    def _check_filter(value: str) -> None:
        if value not in SEVERITY_FILTERS:
            raise ValueError(f"Unknown severity filter {value!r}; expected one of {', '.join(SEVERITY_FILTERS)}")

    @property
    def report(self) -> AnalysisReport | None:
        return self._report

    @property
    def issues(self) -> Sequence[Any]:
        return self._issues

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def filter(self) -> str:
        return self._filter

    def load(self, raw_report: Any) -> AnalysisReport | None:
        """Normalize a new payload; bumps the revision only if the issues sequence changed."""
        self._report = normalize_report(raw_report)
        issues = self._report.analysis.issues if self._report is not None else EMPTY_ISSUES
        if issues is not self._issues:
            self._issues = issues
            self._revision += 1
            logger.debug("AnalysisSession: issues revision %d (%d issues)", self._revision, len(issues))
        return self._report

    def select_filter(self, value: str) -> None:
        self._check_filter(value)
        self._filter = value

    @property
    def counts(self) -> dict[str, int]:
        return self._counts_memo.get((self._revision,), lambda: severity_counts(self._issues))

    @property
    def filtered_issues(self) -> Sequence[Any]:
        return self._filtered_memo.get(
            (self._revision, self._filter),
            lambda: filter_issues(self._issues, self._filter),
        )

    def view(
        self,
        report_stamp: str | None = None,
        report_date: str | None = None,
        report_id: str | None = None,
        filter_links: Mapping[str, str] | None = None,
        empty_message: str = DEFAULT_EMPTY_MESSAGE,
    ) -> dict[str, Any] | None:
        if self._report is None:
            return None
        return _assemble_view(
            self._report,
            counts=self.counts,
            filtered=self.filtered_issues,
            active_filter=self._filter,
            meta=build_meta(report_stamp, report_date, report_id),
            filter_links=filter_links,
            empty_message=empty_message,
        )


# ---------------------------------------------------------------------------
# View assembly
# ---------------------------------------------------------------------------


def _score_view(score: float) -> dict[str, Any]:
    band = score_band(score)
    return {
        "value": score,
        "display": format_number(score),
        "rating": band.rating,
        "text_class": band.text_class,
        "bar_class": band.bar_class,
    }


def _password_view(report: AnalysisReport) -> dict[str, Any] | None:
    pwd = report.analysis.password_analysis
    if pwd is None:
        return None
    return {
        "strength": pwd.strength,
        "score": pwd.score,
        "classes": password_strength_classes(pwd.strength),
        "issues": [issue.title or "" for issue in pwd.issues],
    }


def _severity_tiles(report: AnalysisReport) -> list[dict[str, Any]]:
    body = report.analysis
    return [
        {"severity": sev, "label": label, "count": getattr(body, attr), "color": color, "icon": icon}
        for sev, attr, label, color, icon in _SEVERITY_TILES
    ]


def _config_view(report: AnalysisReport) -> list[dict[str, Any]] | None:
    summary = report.analysis.config_summary
    if summary is None:
        return None
    return [
        {"label": label, "value": getattr(summary, attr), "color": color}
        for attr, label, color in _CONFIG_TILES
    ]


def build_filter_selectors(
    counts: Mapping[str, int],
    active_filter: str,
    filter_links: Mapping[str, str] | None = None,
) -> list[dict[str, Any]]:
    links = dict(filter_links or {})
    return [
        {
            "value": sev,
            "label": f"{sev} ({counts.get(sev, 0)})",
            "count": counts.get(sev, 0),
            "active": sev == active_filter,
            "href": links.get(sev),
        }
        for sev in SEVERITY_FILTERS
    ]


def build_issue_row(raw: Any, index: int) -> dict[str, Any]:
    """Render-ready row for one issue; null or malformed entries get placeholder text."""
    issue = coerce_issue(raw) or IssueRecord()
    severity = issue.severity if issue.severity is not None else "UNKNOWN"
    reference = issue.cve if issue.cve and issue.cve != CVE_NOT_APPLICABLE else None
    return {
        "key": issue_key(raw, index),
        "index": index,
        "title_id": f"issue-title-{index}",
        "severity": severity,
        "classes": severity_classes(severity),
        "category": issue.category if issue.category is not None else "General",
        "title": issue.title if issue.title is not None else "Untitled issue",
        "description": issue.description if issue.description is not None else "No description provided.",
        "location": issue.location or None,
        "recommendation": issue.recommendation or None,
        "reference": reference,
    }


def _assemble_view(
    report: AnalysisReport,
    *,
    counts: Mapping[str, int],
    filtered: Sequence[Any],
    active_filter: str,
    meta: dict[str, Any],
    filter_links: Mapping[str, str] | None,
    empty_message: str,
) -> dict[str, Any]:
    body = report.analysis
    rows = [build_issue_row(issue, index) for index, issue in enumerate(filtered)]
    return {
        "meta": meta,
        "summary": {
            "filename": "—" if report.filename is None else report.filename,
            "analysis_time": "—" if report.analysis_time is None else report.analysis_time,
            "total_issues": body.total_issues,
            "score": _score_view(body.security_score),
        },
        "password": _password_view(report),
        "severity_tiles": _severity_tiles(report),
        "config_summary": _config_view(report),
        "recommendations": [
            {"key": f"rec-{i}", "text": rec} for i, rec in enumerate(body.recommendations)
        ],
        "filters": build_filter_selectors(counts, active_filter, filter_links),
        "active_filter": active_filter,
        "counts": dict(counts),
        "issues": rows,
        "empty_message": empty_message if not rows else None,
    }


def build_analysis_view(
    raw_report: Any,
    filter_value: str = "ALL",
    report_stamp: str | None = None,
    report_date: str | None = None,
    report_id: str | None = None,
) -> dict[str, Any] | None:
    """One-shot view build; returns None when the report is absent or not an object."""
    session = AnalysisSession(raw_report, filter_value=filter_value)
    return session.view(report_stamp=report_stamp, report_date=report_date, report_id=report_id)
