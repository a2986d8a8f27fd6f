from typing import Literal

from pydantic import BaseModel, ConfigDict

SeverityFilter = Literal["ALL", "CRITICAL", "HIGH", "MEDIUM", "LOW"]


class ReporterConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    title: str = "Security Analysis Report"
    default_filter: SeverityFilter = "ALL"
    output_name: str = "analysis_report.html"
    write_stamped: bool = True
    empty_message: str = "No issues found for this filter."
