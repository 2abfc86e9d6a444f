"""Configuration parsing and validation for the PR cycle-time metrics generator."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple

from .errors import ConfigurationError

OUTPUT_FORMATS = ("text", "json")
LOG_LEVEL_ENV_VAR = "PR_METRICS_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Config:
    """Validated runtime settings used by the metrics generator."""

    input_paths: Tuple[Path, ...]
    output_format: str
    log_level: str


def load_config(
    input_paths: Sequence[str],
    output_format: str = "text",
    log_level: Optional[str] = None,
) -> Config:
    """Build and validate application configuration.

    Args:
        input_paths: Paths of exported pull request search results.
        output_format: Report format, ``"text"`` or ``"json"``.
        log_level: Logging level name. Falls back to ``PR_METRICS_LOG_LEVEL``
            and then to ``WARNING``.

    Returns:
        A validated ``Config`` instance.

    Raises:
        ConfigurationError: If no input is given, an input file does not exist,
            or the output format or log level is unknown.
    """
    if not input_paths:
        raise ConfigurationError("At least one pull request export file is required.")

    paths = tuple(Path(path) for path in input_paths)
    missing = [str(path) for path in paths if not path.is_file()]
    if missing:
        raise ConfigurationError(f"Pull request export file(s) not found: {', '.join(missing)}")

    if output_format not in OUTPUT_FORMATS:
        raise ConfigurationError(
            f"Invalid value for 'format': expected one of {', '.join(OUTPUT_FORMATS)}."
        )

    level: str = (log_level or os.getenv(LOG_LEVEL_ENV_VAR, "") or DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"Invalid log level '{level}'.")

    return Config(
        input_paths=paths,
        output_format=output_format,
        log_level=level,
    )
