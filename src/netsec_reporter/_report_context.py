"""Shared CLI helpers for report generation commands."""

from __future__ import annotations

import functools
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml
from jinja2 import Environment, FileSystemLoader

from .primitives import format_number

logger = logging.getLogger(__name__)

_VIEW_MODEL_KEYS = {"report_stamp", "report_date", "report_id"}


# ---------------------------------------------------------------------------
# Cached Jinja environment
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=1)
def get_jinja_env() -> Environment:
    """Return a cached Jinja2 Environment configured for report templates."""
    template_dir = Path(__file__).parent / "templates"
    env = Environment(
        loader=FileSystemLoader(template_dir),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["format_score"] = format_number
    return env


def render_analysis_report(view: dict[str, Any] | None, title: str = "Security Analysis Report", **common_vars: Any) -> str:
    """Render the analysis report page; an absent view renders nothing."""
    if view is None:
        return ""
    tpl = get_jinja_env().get_template("analysis_report.html.j2")
    return tpl.render(analysis_view=view, report_title=title, **common_vars)


# ---------------------------------------------------------------------------
# Payload loading
# ---------------------------------------------------------------------------


def load_payload(input_file: str | Path) -> Any:
    """Load an analysis payload from JSON or YAML. The parsed value is not shape-checked."""
    path = Path(input_file)
    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            return json.load(f)
        return yaml.safe_load(f)


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------


def generate_timestamps(report_stamp: str | None = None) -> dict[str, Any]:
    """Build the full set of timestamp strings used by report commands."""
    now = datetime.now(tz=timezone.utc)
    stamp = report_stamp or now.strftime("%Y%m%d")
    date_str = now.strftime("%Y-%m-%d %H:%M:%S")
    rid = now.strftime("%Y%m%dT%H%M%SZ")
    return {
        "report_stamp": stamp,
        "report_date": date_str,
        "report_id": rid,
    }


def vm_kwargs(common_vars: dict[str, Any]) -> dict[str, Any]:
    """Extract only the keys accepted by view-model builder functions."""
    return {k: v for k, v in common_vars.items() if k in _VIEW_MODEL_KEYS}


# ---------------------------------------------------------------------------
# Report writing
# ---------------------------------------------------------------------------


def write_report(output_path: Path, base_name: str, content: str, stamp: str, stamped: bool = True) -> list[Path]:
    """Write a 'latest' report and, optionally, a stamped copy alongside it."""
    stem, ext = base_name.rsplit(".", 1) if "." in base_name else (base_name, "html")
    targets = [output_path / f"{stem}.{ext}"]
    if stamped:
        targets.append(output_path / f"{stem}_{stamp}.{ext}")
    for target in targets:
        with open(target, "w", encoding="utf-8") as f:
            f.write(content)
        logger.debug("Wrote %s", target)
    return targets
