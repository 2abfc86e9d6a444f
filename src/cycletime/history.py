"""Detection of pull requests whose commit history cannot be trusted."""

from __future__ import annotations

from .models import ForcePush, LabelApplied, OtherEvent, PullRequest, TimelineEvent


def _is_unresolved_force_push(event: TimelineEvent) -> bool:
    if isinstance(event, ForcePush):
        return event.beforeCommit is None or event.afterCommit is None
    if isinstance(event, (LabelApplied, OtherEvent)):
        return False
    raise TypeError(f"Unsupported timeline event type: {type(event).__name__}")


def is_history_uncertain(pull_request: PullRequest) -> bool:
    """Return ``True`` if any force push is missing its before or after commit.

    A force push GitHub could not fully resolve breaks the commit chain that
    cycle-time boundaries rely on. Only ``cycle_time`` is gated on this check.
    """
    return any(_is_unresolved_force_push(event) for event in pull_request.timelineItems)
