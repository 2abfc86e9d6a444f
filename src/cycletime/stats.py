"""Statistics and formatting helpers for PR cycle-time reporting.

This module provides utilities for:
- Computing linear-interpolation percentiles of business-day samples.
- Aggregating per-metric summary statistics (P50, P75, P90, mean, count).
- Formatting business-day values for display.
- Building human-readable and JSON reports from per-PR key metrics.
"""

from __future__ import annotations

import json
from dataclasses import asdict, fields
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from .models import MetricStats, PullRequestKeyMetrics

METRIC_LABELS: Dict[str, str] = {
    "days_to_first_review": "Days to First Review",
    "rework_time_in_days": "Rework Time",
    "waiting_to_deploy": "Waiting to Deploy",
    "cycle_time": "Cycle Time",
}


def calculate_percentile(samples: Sequence[float], p: float) -> Optional[float]:
    """Return the ``p``-th percentile of business-day samples, or ``None`` if there are none.

    Values between ranks are linearly interpolated, so the median of
    ``[1, 2, 3, 4]`` is ``2.5`` days.

    Raises:
        ValueError: If ``p`` is outside ``[0, 100]``.
    """
    if not 0 <= p <= 100:
        raise ValueError("Percentile 'p' must be in the range [0, 100].")

    if len(samples) == 0:
        return None

    return float(np.percentile(samples, p))


def compute_statistics(metric: str, samples: Sequence[Optional[float]]) -> MetricStats:
    """Compute P50, P75, P90, mean and sample count for one metric.

    ``None`` samples are metrics that could not be computed and are excluded.
    Negative business-day values are kept: a review submitted on a weekend
    before a Monday creation date is a legitimate, if unusual, sample.

    Args:
        metric: Metric field name, used as the summary label key.
        samples: Per-PR metric values in business days.

    Returns:
        A populated :class:`MetricStats`. Percentiles and mean are ``None``
        when no samples exist.
    """
    clean_samples = [float(sample) for sample in samples if sample is not None]

    return MetricStats(
        metric=metric,
        count=len(clean_samples),
        p50=calculate_percentile(clean_samples, 50),
        p75=calculate_percentile(clean_samples, 75),
        p90=calculate_percentile(clean_samples, 90),
        mean=sum(clean_samples) / len(clean_samples) if clean_samples else None,
    )


def summarize_key_metrics(key_metrics: Sequence[PullRequestKeyMetrics]) -> List[MetricStats]:
    """Compute statistics for every published metric across pull requests."""
    return [
        compute_statistics(metric, [getattr(item, metric) for item in key_metrics])
        for metric in METRIC_LABELS
    ]


def format_days(days: Optional[float]) -> str:
    """Format a business-day value, or ``"n/a"`` when it is ``None``."""
    if days is None:
        return "n/a"

    rounded = round(days, 1)
    if rounded == int(rounded):
        return f"{int(rounded)}d"
    return f"{rounded:.1f}d"


def generate_report(key_metrics: Sequence[PullRequestKeyMetrics]) -> str:
    """Generate a human-readable cycle-time report.

    Args:
        key_metrics: Per-PR key metrics.

    Returns:
        Formatted multi-line text report.
    """
    merged = sum(1 for item in key_metrics if item.merged_at is not None)
    uncertain = sum(1 for item in key_metrics if item.history_uncertain)

    lines = [
        "PR Cycle-Time Report (business days)",
        f"Pull requests: {len(key_metrics)} (merged: {merged}, uncertain history: {uncertain})",
    ]

    for index, stats in enumerate(summarize_key_metrics(key_metrics), start=1):
        lines.extend(
            [
                "",
                f"{index}) {METRIC_LABELS[stats.metric]}",
                f"   Samples: {stats.count}",
                f"   P50: {format_days(stats.p50)}",
                f"   P75: {format_days(stats.p75)}",
                f"   P90: {format_days(stats.p90)}",
                f"   Mean: {format_days(stats.mean)}",
            ]
        )

    return "\n".join(lines)


def _json_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat().replace("+00:00", "Z")
    if isinstance(value, Enum):
        return value.value
    return value


def key_metrics_to_dict(metrics: PullRequestKeyMetrics) -> Dict[str, Any]:
    """Convert a key-metrics record into JSON-compatible values."""
    return {item.name: _json_value(getattr(metrics, item.name)) for item in fields(metrics)}


def generate_json_report(key_metrics: Sequence[PullRequestKeyMetrics]) -> str:
    """Generate a JSON document with per-PR metrics and the aggregated summary."""
    document = {
        "pullRequests": [key_metrics_to_dict(item) for item in key_metrics],
        "summary": [asdict(stats) for stats in summarize_key_metrics(key_metrics)],
    }
    return json.dumps(document, indent=2)
