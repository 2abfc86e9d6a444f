"""Event lookup over a pull request's review and timeline sequences.

All lookups go through :func:`locate`, which searches a sequence in either its
natural (chronological) order or reversed order and returns the first match.
Searching reversed order is how "latest matching" lookups are expressed; the
source sequence itself is never copied into a new order or mutated.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Callable, Iterable, Optional, Sequence, TypeVar

from .models import LabelApplied, PullRequest, ReviewEvent

T = TypeVar("T")

DEPLOYMENT_LABEL = "deployed-PROD"

ReviewPredicate = Callable[[ReviewEvent, PullRequest], bool]


class SearchOrder(Enum):
    """Direction in which :func:`locate` walks a sequence."""

    NATURAL = "natural"
    REVERSED = "reversed"


def locate(
    events: Sequence[T],
    order: SearchOrder,
    predicate: Callable[[T], bool],
) -> Optional[T]:
    """Return the first event matching ``predicate`` in the given search order.

    Args:
        events: Chronologically ordered events.
        order: ``SearchOrder.NATURAL`` for earliest-first, ``SearchOrder.REVERSED``
            for latest-first.
        predicate: Match condition evaluated per event.

    Returns:
        The first matching event, or ``None`` if nothing matches.
    """
    candidates: Iterable[T] = reversed(events) if order is SearchOrder.REVERSED else events
    return next((event for event in candidates if predicate(event)), None)


def locate_review(
    pull_request: PullRequest,
    order: SearchOrder,
    predicate: ReviewPredicate,
) -> Optional[ReviewEvent]:
    """Locate a review, passing the owning pull request to ``predicate``."""
    return locate(pull_request.reviews, order, lambda review: predicate(review, pull_request))


def _is_peer_review(review: ReviewEvent, pull_request: PullRequest) -> bool:
    return review.author != pull_request.author


def _is_peer_review_before_merge(review: ReviewEvent, pull_request: PullRequest) -> bool:
    if pull_request.mergedAt is None:
        return False
    return _is_peer_review(review, pull_request) and review.submittedAt < pull_request.mergedAt


def find_initial_review_time(pull_request: PullRequest) -> Optional[datetime]:
    """Return when the earliest review by someone other than the author was submitted."""
    review = locate_review(pull_request, SearchOrder.NATURAL, _is_peer_review)
    return review.submittedAt if review is not None else None


def find_last_review_time(pull_request: PullRequest) -> Optional[datetime]:
    """Return when the latest non-author review before the merge was submitted.

    Pull requests without a merge timestamp never have a last review.
    """
    if pull_request.mergedAt is None:
        return None

    review = locate_review(pull_request, SearchOrder.REVERSED, _is_peer_review_before_merge)
    return review.submittedAt if review is not None else None


def find_deployment_event(pull_request: PullRequest) -> Optional[LabelApplied]:
    """Return the earliest ``deployed-PROD`` label event on the timeline.

    The label name comparison is exact and case-sensitive.
    """
    event = locate(
        pull_request.timelineItems,
        SearchOrder.NATURAL,
        lambda item: isinstance(item, LabelApplied) and item.labelName == DEPLOYMENT_LABEL,
    )
    return event if isinstance(event, LabelApplied) else None
