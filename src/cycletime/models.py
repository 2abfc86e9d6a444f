"""Domain models for GitHub pull request cycle-time processing.

These dataclasses intentionally model only the subset of GraphQL payload fields
that are required for metric computation. Field names on payload-backed models
follow the GraphQL schema so they read the same as the exported JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional, Tuple, Union


class PullRequestState(str, Enum):
    """GitHub pull request lifecycle state."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"
    MERGED = "MERGED"


@dataclass(frozen=True, slots=True)
class CommitRef:
    """Represents a commit referenced by a force-push timeline event."""

    oid: str


@dataclass(frozen=True, slots=True)
class ReviewEvent:
    """Represents one submitted review on a pull request."""

    author: str
    submittedAt: datetime


@dataclass(frozen=True, slots=True)
class ForcePush:
    """Force-push timeline event.

    Either commit reference may be ``None`` when GitHub could not resolve it,
    which is what marks a pull request's history as uncertain.
    """

    beforeCommit: Optional[CommitRef]
    afterCommit: Optional[CommitRef]


@dataclass(frozen=True, slots=True)
class LabelApplied:
    """Label-application timeline event."""

    labelName: str
    createdAt: datetime


@dataclass(frozen=True, slots=True)
class OtherEvent:
    """Any timeline event kind this package does not interpret.

    The raw payload is kept as-is so unknown kinds survive a parse unchanged.
    """

    kind: str
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False)


TimelineEvent = Union[ForcePush, LabelApplied, OtherEvent]


@dataclass(frozen=True, slots=True)
class PullRequest:
    """Represents the pull request data required for cycle-time calculations."""

    id: str
    author: str
    createdAt: datetime
    state: PullRequestState
    mergedAt: Optional[datetime] = None
    reviews: Tuple[ReviewEvent, ...] = ()
    timelineItems: Tuple[TimelineEvent, ...] = ()
    title: str = ""
    url: str = ""
    additions: int = 0
    deletions: int = 0


@dataclass(frozen=True, slots=True)
class PullRequestKeyMetrics:
    """Represents the per-PR metrics record consumed by reporting code.

    Every metric is measured in business days and is ``None`` when it cannot be
    computed for the pull request.
    """

    id: str
    title: str
    url: str
    author: str
    state: PullRequestState
    created_at: datetime
    merged_at: Optional[datetime]
    review_count: int
    changes: int
    deployed_at: Optional[datetime]
    history_uncertain: bool
    days_to_first_review: Optional[int]
    rework_time_in_days: Optional[int]
    waiting_to_deploy: Optional[int]
    cycle_time: Optional[int]


@dataclass(slots=True)
class MetricStats:
    """Represents aggregated percentile statistics for one metric."""

    metric: str
    count: int
    p50: Optional[float]
    p75: Optional[float]
    p90: Optional[float]
    mean: Optional[float]
