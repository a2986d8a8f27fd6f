"""Loading of the optional reporter configuration file."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from netsec_reporter.models.reporter_config import ReporterConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "NETSEC_REPORTER_CONFIG"


def load_reporter_config(path: str | Path | None = None) -> ReporterConfig:
    """
    Load and validate a reporter config YAML file.

    No path means built-in defaults. An empty file is treated the same way.
    Raises ValueError for a non-mapping document and pydantic.ValidationError
    for unknown keys or bad values.
    """
    if path is None:
        return ReporterConfig()

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.info("Config %s is empty, using defaults", path)
        return ReporterConfig()
    if not isinstance(data, dict):
        raise ValueError(f"{path}: config must be a YAML mapping")

    config = ReporterConfig.model_validate(data)
    logger.debug("Loaded config from %s: %s", path, config.model_dump())
    return config
