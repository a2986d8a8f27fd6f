"""Tests for analysis payload normalization, including missing or malformed input.

Analyzers regularly hand over incomplete data: a check crashes leaving keys
absent, a field arrives as null, or a list arrives as a string. These tests
assert that normalization never raises under such conditions and always
returns a fully-defaulted body.
"""

from __future__ import annotations

import copy
import math
import unittest
from typing import Any

from fixtures.example_data import analysis_report, minimal_report

from netsec_reporter.models.analysis import AnalysisBody
from netsec_reporter.normalization.analysis import (
    EMPTY_ISSUES,
    normalize_analysis,
    normalize_issues,
    normalize_report,
    normalize_score,
)


def _assert_defaulted(tc: unittest.TestCase, body: Any, label: str) -> None:
    tc.assertIsInstance(body, AnalysisBody, f"{label}: not an AnalysisBody")
    for name in ("total_issues", "critical", "high", "medium", "low"):
        value = getattr(body, name)
        tc.assertIsInstance(value, int, f"{label}: {name} must be an int")
        tc.assertGreaterEqual(value, 0, f"{label}: {name} must be >= 0")
    tc.assertTrue(0 <= body.security_score <= 100, f"{label}: score out of range")
    tc.assertIsInstance(body.issues, (list, tuple), f"{label}: issues must be a sequence")
    tc.assertIsInstance(body.recommendations, list, f"{label}: recommendations must be a list")


class NormalizeScoreTests(unittest.TestCase):

    def test_in_range_passthrough(self):
        self.assertEqual(normalize_score(62), 62.0)
        self.assertEqual(normalize_score(89.99), 89.99)

    def test_clamped(self):
        self.assertEqual(normalize_score(-5), 0.0)
        self.assertEqual(normalize_score(250), 100.0)
        self.assertEqual(normalize_score(10**400), 100.0)

    def test_non_finite_is_zero(self):
        for value in (math.nan, math.inf, -math.inf):
            self.assertEqual(normalize_score(value), 0.0, value)

    def test_non_numbers_are_zero(self):
        for value in (None, "85", True, [85], {"score": 85}):
            self.assertEqual(normalize_score(value), 0.0, value)


class NormalizeIssuesTests(unittest.TestCase):

    def test_list_identity_preserved(self):
        issues = [{"severity": "LOW"}, None]
        self.assertIs(normalize_issues(issues), issues)

    def test_non_sequence_becomes_empty(self):
        for value in (None, "issues", {"0": {}}, 3):
            out = normalize_issues(value)
            self.assertIs(out, EMPTY_ISSUES)
            self.assertEqual(len(out), 0)


class NormalizeAnalysisBadInputTests(unittest.TestCase):
    """normalize_analysis must not raise on malformed or sparse bodies."""

    def _ok(self, raw: Any, label: str) -> AnalysisBody:
        try:
            body = normalize_analysis(raw)
        except Exception as exc:
            self.fail(f"normalize_analysis raised {type(exc).__name__} on {label!r}: {exc}")
        _assert_defaulted(self, body, label)
        return body

    def test_none(self):
        body = self._ok(None, "None")
        self.assertEqual(body.total_issues, 0)
        self.assertIsNone(body.config_summary)
        self.assertIsNone(body.password_analysis)

    def test_not_a_mapping(self):
        self._ok("garbage", "string body")
        self._ok([1, 2, 3], "list body")

    def test_empty_mapping(self):
        body = self._ok({}, "empty body")
        self.assertEqual(body.security_score, 0.0)
        self.assertEqual(list(body.issues), [])
        self.assertEqual(body.recommendations, [])

    def test_wrong_shapes(self):
        body = self._ok(
            {
                "totalIssues": "lots",
                "critical": -3,
                "high": None,
                "medium": math.nan,
                "low": True,
                "securityScore": "high",
                "issues": "none",
                "recommendations": "disable telnet",
                "configSummary": "yes",
                "passwordAnalysis": 12,
            },
            "wrong shapes",
        )
        self.assertEqual(
            (body.total_issues, body.critical, body.high, body.medium, body.low),
            (0, 0, 0, 0, 0),
        )
        self.assertEqual(len(body.issues), 0)
        self.assertEqual(body.recommendations, [])
        self.assertIsNone(body.config_summary)
        self.assertIsNone(body.password_analysis)

    def test_numeric_string_counts_accepted(self):
        body = self._ok({"critical": "4", "totalIssues": 9.0}, "numeric strings")
        self.assertEqual(body.critical, 4)
        self.assertEqual(body.total_issues, 9)

    def test_issue_entries_not_coerced(self):
        issues = [None, "junk", {"severity": "HIGH"}]
        body = self._ok({"issues": issues}, "null issue entries")
        self.assertIs(body.issues, issues)

    def test_recommendations_keep_positions(self):
        body = self._ok({"recommendations": ["a", None, 3]}, "mixed recommendations")
        self.assertEqual(body.recommendations, ["a", "", "3"])

    def test_null_total_falls_back_to_issue_count(self):
        body = self._ok({"totalIssues": None, "issues": [{}, {}, {}]}, "null total")
        self.assertEqual(body.total_issues, 3)

    def test_null_total_without_issues(self):
        body = self._ok({"totalIssues": None}, "null total, no issues")
        self.assertEqual(body.total_issues, 0)

    def test_absent_total_is_zero(self):
        body = self._ok({"issues": [{}, {}]}, "absent total")
        self.assertEqual(body.total_issues, 0)

    def test_config_summary_defaults(self):
        body = self._ok({"configSummary": {"totalInterfaces": 8, "totalACLs": None}}, "partial config")
        self.assertEqual(body.config_summary.total_interfaces, 8)
        self.assertEqual(body.config_summary.total_vty_lines, 0)
        self.assertEqual(body.config_summary.total_acls, 0)

    def test_password_analysis_defaults(self):
        body = self._ok({"passwordAnalysis": {"issues": [{"title": "reuse"}, None, "x"]}}, "partial password")
        pwd = body.password_analysis
        self.assertEqual(pwd.strength, "UNKNOWN")
        self.assertEqual(pwd.score, 0.0)
        self.assertEqual([i.title for i in pwd.issues], ["reuse", None, None])

    def test_counts_not_reconciled_with_issues(self):
        body = self._ok({"totalIssues": 10, "critical": 7, "issues": []}, "inconsistent counts")
        self.assertEqual(body.total_issues, 10)
        self.assertEqual(body.critical, 7)


class NormalizeReportTests(unittest.TestCase):

    def test_non_object_report_is_none(self):
        for value in (None, "report", 42, [analysis_report()]):
            self.assertIsNone(normalize_report(value), value)

    def test_full_report(self):
        report = normalize_report(analysis_report())
        assert report is not None
        self.assertEqual(report.filename, "edge-router-01.cfg")
        self.assertEqual(report.analysis_time, "2026-10-01T08:30:00Z")
        self.assertEqual(report.analysis.security_score, 62.0)
        self.assertEqual(len(report.analysis.issues), 5)
        self.assertEqual(report.analysis.config_summary.total_vty_lines, 5)
        self.assertEqual(report.analysis.password_analysis.strength, "WEAK")

    def test_missing_analysis_section(self):
        report = normalize_report(minimal_report())
        assert report is not None
        self.assertIsNone(report.analysis_time)
        self.assertEqual(report.analysis.total_issues, 0)
        self.assertEqual(len(report.analysis.issues), 0)

    def test_input_not_mutated(self):
        raw = analysis_report(securityScore=400, issues=[None, {"title": "t"}])
        before = copy.deepcopy(raw)
        normalize_report(raw)
        self.assertEqual(raw, before)
