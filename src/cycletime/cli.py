"""Command-line argument parsing for the PR cycle-time metrics generator."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from .config import OUTPUT_FORMATS


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for metrics generation.

    Returns:
        Parsed CLI arguments containing input paths, output format and
        log level.
    """
    parser = argparse.ArgumentParser(
        prog="pr-cycle-time",
        description=(
            "Compute business-day cycle-time metrics (first review, rework, "
            "waiting to deploy, cycle time) from exported GitHub pull request "
            "search results."
        ),
    )

    parser.add_argument(
        "--input",
        dest="inputs",
        action="append",
        required=True,
        metavar="FILE",
        help="Exported GraphQL search result JSON file (repeatable).",
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="text",
        help="Report format (default: text).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level, e.g. INFO or DEBUG (default: $PR_METRICS_LOG_LEVEL or WARNING).",
    )

    return parser.parse_args(argv)
