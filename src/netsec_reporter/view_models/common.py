"""Shared helpers for template-facing analysis view-model builders."""

from collections.abc import Mapping
from typing import Any, NamedTuple

from ..primitives import CVE_NOT_APPLICABLE, to_float


class ScoreBand(NamedTuple):
    floor: float
    rating: str
    text_class: str
    bar_class: str


# Ordered high to low; each floor is inclusive.
SCORE_BANDS: tuple[ScoreBand, ...] = (
    ScoreBand(90.0, "Excellent", "text-green-600", "bg-green-500"),
    ScoreBand(75.0, "Good", "text-blue-600", "bg-blue-500"),
    ScoreBand(50.0, "Fair", "text-yellow-600", "bg-yellow-500"),
    ScoreBand(25.0, "Poor", "text-orange-600", "bg-orange-500"),
    ScoreBand(0.0, "Critical", "text-red-600", "bg-red-500"),
)

_SEVERITY_CLASSES: dict[str, dict[str, str]] = {
    "CRITICAL": {"bg": "bg-red-100", "border": "border-red-300", "badge_bg": "bg-red-700"},
    "HIGH": {"bg": "bg-orange-100", "border": "border-orange-300", "badge_bg": "bg-orange-700"},
    "MEDIUM": {"bg": "bg-yellow-100", "border": "border-yellow-300", "badge_bg": "bg-yellow-700"},
    "LOW": {"bg": "bg-green-100", "border": "border-green-300", "badge_bg": "bg-green-700"},
}
_UNKNOWN_SEVERITY_CLASSES = {"bg": "bg-gray-100", "border": "border-gray-300", "badge_bg": "bg-gray-700"}

_PASSWORD_STRENGTH_CLASSES: dict[str, dict[str, str]] = {
    "CRITICAL": {"panel": "bg-red-50 border-red-300", "badge": "bg-red-200 text-red-800"},
    "WEAK": {"panel": "bg-orange-50 border-orange-300", "badge": "bg-orange-200 text-orange-800"},
    "MODERATE": {"panel": "bg-yellow-50 border-yellow-300", "badge": "bg-yellow-200 text-yellow-800"},
}
_STRONG_PASSWORD_CLASSES = {"panel": "bg-green-50 border-green-300", "badge": "bg-green-200 text-green-800"}


def score_band(score: Any) -> ScoreBand:
    """Single lookup for every score-derived label and colour."""
    value = to_float(score, 0.0)
    for band in SCORE_BANDS:
        if value >= band.floor:
            return band
    return SCORE_BANDS[-1]


def score_rating(score: Any) -> str:
    return score_band(score).rating


def score_text_class(score: Any) -> str:
    return score_band(score).text_class


def score_bar_class(score: Any) -> str:
    return score_band(score).bar_class


def severity_classes(severity: Any) -> dict[str, str]:
    """
    Badge and card classes for an issue severity.
    Unrecognised severities (including lowercase variants) get the gray style.
    """
    classes = _SEVERITY_CLASSES.get(severity, _UNKNOWN_SEVERITY_CLASSES) if isinstance(severity, str) else _UNKNOWN_SEVERITY_CLASSES
    return {**classes, "badge_text": "text-white"}


def password_strength_classes(strength: Any) -> dict[str, str]:
    if isinstance(strength, str) and strength in _PASSWORD_STRENGTH_CLASSES:
        return dict(_PASSWORD_STRENGTH_CLASSES[strength])
    return dict(_STRONG_PASSWORD_CLASSES)


def issue_key(issue: Any, index: int) -> str:
    """
    Derive a list key for an issue row.

    Keys only need to be distinct within one rendered list. Title-derived keys
    carry the row index because titles repeat; id and CVE keys do not.
    """
    fallback = f"issue-{index}"
    if not isinstance(issue, Mapping):
        return fallback

    issue_id = issue.get("id")
    if issue_id:
        return str(issue_id)

    cve = issue.get("cve")
    if cve and cve != CVE_NOT_APPLICABLE:
        return str(cve)

    title = issue.get("title")
    if title:
        return f"{'-'.join(str(title).split())}-{index}"

    return fallback


def build_meta(
    report_stamp: str | None = None,
    report_date: str | None = None,
    report_id: str | None = None,
) -> dict[str, str | None]:
    """Standard meta block shared across view-model builders."""
    return {
        "report_stamp": report_stamp,
        "report_date": report_date,
        "report_id": report_id,
    }
