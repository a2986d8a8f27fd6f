from typing import Any, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator

from netsec_reporter.primitives import to_text


class IssueRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: Optional[str] = None
    cve: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    severity: Optional[str] = None
    category: Optional[str] = None
    location: Optional[str] = None
    recommendation: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _scalar_text(cls, value: Any) -> Optional[str]:
        return to_text(value)


class ConfigSummary(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    total_interfaces: int = 0
    total_vty_lines: int = 0
    total_acls: int = 0


class PasswordIssue(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    title: Optional[str] = None


class PasswordAnalysis(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    strength: str = "UNKNOWN"
    score: float = 0.0
    issues: list[PasswordIssue] = Field(default_factory=list)


class AnalysisBody(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    total_issues: int = 0
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    security_score: float = 0.0
    # Raw issue entries; coerced per row at render time since any entry may be null.
    issues: list[Any] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    config_summary: Optional[ConfigSummary] = None
    password_analysis: Optional[PasswordAnalysis] = None


class AnalysisReport(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    filename: Optional[str] = None
    analysis_time: Optional[str] = None
    analysis: AnalysisBody = Field(default_factory=AnalysisBody)
