import json
import logging
from pathlib import Path
from typing import Any

import click
import yaml
from pydantic import ValidationError

from ._report_context import (
    generate_timestamps,
    load_payload,
    render_analysis_report,
    vm_kwargs,
    write_report,
)
from .config import CONFIG_ENV_VAR, load_reporter_config
from .models.reporter_config import ReporterConfig
from .primitives import SEVERITY_FILTERS
from .view_models.analysis import AnalysisSession

logger = logging.getLogger("netsec_reporter")

_FILTER_CHOICE = click.Choice(list(SEVERITY_FILTERS))


def _load_config_or_exit(config_file: str | None) -> ReporterConfig:
    try:
        return load_reporter_config(config_file)
    except (OSError, yaml.YAMLError, ValueError, ValidationError) as exc:
        logger.error("Invalid config %s: %s", config_file, exc)
        click.echo(f"ERROR: invalid config {config_file}: {exc}", err=True)
        raise SystemExit(1)


def _load_payload_or_exit(input_file: str) -> Any:
    try:
        return load_payload(input_file)
    except (OSError, json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as exc:
        logger.error("Failed to read %s: %s", input_file, exc)
        click.echo(f"ERROR: could not read analysis payload {input_file}: {exc}", err=True)
        raise SystemExit(1)


def filter_page_name(output_name: str, severity_filter: str) -> str:
    """Sibling page name for a filter, e.g. ``analysis_report_critical.html``."""
    stem, ext = output_name.rsplit(".", 1) if "." in output_name else (output_name, "html")
    return f"{stem}_{severity_filter.lower()}.{ext}"


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug-level logging.")
def main(verbose: bool) -> None:
    """NetSec Reporter: render security-analysis reports for scanned configurations."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )


# ---------------------------------------------------------------------------
# render command
# ---------------------------------------------------------------------------

@main.command()
@click.option("--input", "-i", "input_file", required=True, type=click.Path(exists=True), help="Path to analysis payload (JSON or YAML).")
@click.option("--output-dir", "-o", required=True, type=click.Path(), help="Output directory for HTML reports.")
@click.option("--filter", "-f", "severity_filter", type=_FILTER_CHOICE, help="Severity filter for the main page. Defaults to the configured filter.")
@click.option("--all-filters", is_flag=True, default=False, help="Also write one linked page per severity filter.")
@click.option("--report-stamp", help="Report timestamp (YYYYMMDD). Defaults to today.")
@click.option("--config", "config_file", type=click.Path(exists=True), envvar=CONFIG_ENV_VAR, help=f"Reporter config YAML (env: {CONFIG_ENV_VAR}).")
def render(
    input_file: str,
    output_dir: str,
    severity_filter: str | None,
    all_filters: bool,
    report_stamp: str | None,
    config_file: str | None,
) -> None:
    """Render the HTML analysis report for a single payload."""
    config = _load_config_or_exit(config_file)
    payload = _load_payload_or_exit(input_file)

    session = AnalysisSession(payload, filter_value=severity_filter or config.default_filter)
    if session.report is None:
        click.echo(f"No analysis data in {input_file}; nothing rendered.")
        return

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    common_vars = generate_timestamps(report_stamp)
    kw = vm_kwargs(common_vars)
    stamp = common_vars["report_stamp"]

    links: dict[str, str] | None = None
    if all_filters:
        links = {sev: filter_page_name(config.output_name, sev) for sev in SEVERITY_FILTERS}

    view = session.view(filter_links=links, empty_message=config.empty_message, **kw)
    content = render_analysis_report(view, title=config.title, **common_vars)
    written = write_report(output_path, config.output_name, content, stamp, stamped=config.write_stamped)

    if all_filters:
        main_filter = session.filter
        for sev in SEVERITY_FILTERS:
            session.select_filter(sev)
            page_view = session.view(filter_links=links, empty_message=config.empty_message, **kw)
            page = render_analysis_report(page_view, title=config.title, **common_vars)
            target = output_path / filter_page_name(config.output_name, sev)
            with open(target, "w", encoding="utf-8") as f:
                f.write(page)
            written.append(target)
        session.select_filter(main_filter)

    logger.info("Rendered %d file(s) for %s", len(written), input_file)
    click.echo(f"Done! Report generated at {written[0]}")


# ---------------------------------------------------------------------------
# summary command
# ---------------------------------------------------------------------------

@main.command()
@click.option("--input", "-i", "input_file", required=True, type=click.Path(exists=True), help="Path to analysis payload (JSON or YAML).")
@click.option("--filter", "-f", "severity_filter", type=_FILTER_CHOICE, default="ALL", show_default=True, help="Severity filter for the issue listing.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit the summary as JSON.")
def summary(input_file: str, severity_filter: str, as_json: bool) -> None:
    """Print score, counts and filtered issue keys for a payload."""
    payload = _load_payload_or_exit(input_file)
    view = AnalysisSession(payload, filter_value=severity_filter).view()
    if view is None:
        click.echo(f"No analysis data in {input_file}.")
        return

    score = view["summary"]["score"]
    data = {
        "filename": view["summary"]["filename"],
        "security_score": score["value"],
        "rating": score["rating"],
        "reported_counts": {tile["severity"]: tile["count"] for tile in view["severity_tiles"]},
        "counts": view["counts"],
        "filter": view["active_filter"],
        "issues": [row["key"] for row in view["issues"]],
    }
    if as_json:
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    click.echo(f"File: {data['filename']}")
    click.echo(f"Security Score: {score['display']}/100 ({score['rating']})")
    click.echo("Filters: " + " | ".join(f["label"] for f in view["filters"]))
    if not view["issues"]:
        click.echo(view["empty_message"])
    for row in view["issues"]:
        click.echo(f"  [{row['severity']}] {row['key']}: {row['title']}")


# ---------------------------------------------------------------------------
# config command group
# ---------------------------------------------------------------------------

@main.group()
def config() -> None:
    """Inspect the reporter configuration."""


@config.command("show")
@click.option("--config", "config_file", type=click.Path(exists=True), envvar=CONFIG_ENV_VAR, help=f"Reporter config YAML (env: {CONFIG_ENV_VAR}).")
def config_show(config_file: str | None) -> None:
    """Print the effective configuration as YAML."""
    cfg = _load_config_or_exit(config_file)
    click.echo(yaml.safe_dump(cfg.model_dump(), sort_keys=False).rstrip())


if __name__ == "__main__":
    main()
