"""Tests for review and timeline event lookup."""

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cycletime.locator import (
    SearchOrder,
    find_deployment_event,
    find_initial_review_time,
    find_last_review_time,
    locate,
    locate_review,
)
from cycletime.models import (
    CommitRef,
    ForcePush,
    LabelApplied,
    OtherEvent,
    PullRequest,
    PullRequestState,
    ReviewEvent,
)


def _day(day: int, hour: int = 12) -> datetime:
    return datetime(2024, 1, day, hour, tzinfo=timezone.utc)


def _make_pr(
    reviews: Sequence[ReviewEvent] = (),
    timeline=(),
    author: str = "alice",
    state: PullRequestState = PullRequestState.MERGED,
    merged: Optional[datetime] = None,
) -> PullRequest:
    return PullRequest(
        id="PR_1",
        author=author,
        createdAt=_day(1, 9),
        state=state,
        mergedAt=merged,
        reviews=tuple(reviews),
        timelineItems=tuple(timeline),
    )


def test_locate_natural_order_returns_first_match():
    """Verify natural-order search returns the earliest matching element."""
    assert locate([1, 2, 3, 4], SearchOrder.NATURAL, lambda value: value % 2 == 0) == 2


def test_locate_reversed_order_returns_last_match():
    """Verify reversed-order search returns the latest matching element."""
    assert locate([1, 2, 3, 4], SearchOrder.REVERSED, lambda value: value % 2 == 1) == 3


def test_locate_returns_none_for_empty_or_unmatched_sequences():
    """Verify lookups return None when nothing matches."""
    assert locate([], SearchOrder.NATURAL, lambda value: True) is None
    assert locate([1, 3], SearchOrder.REVERSED, lambda value: value > 5) is None


def test_locate_reversed_first_match_equals_natural_last_match():
    """Verify reversed search equals the last natural-order match for fixed predicates."""
    events = [5, 8, 2, 9, 4, 7, 6]
    predicates = [lambda v: v > 4, lambda v: v % 2 == 0, lambda v: v < 3, lambda v: v > 100]

    for predicate in predicates:
        natural_matches = [event for event in events if predicate(event)]
        expected = natural_matches[-1] if natural_matches else None
        assert locate(events, SearchOrder.REVERSED, predicate) == expected


def test_locate_does_not_mutate_source_sequence():
    """Verify the searched sequence keeps its original order after a reversed search."""
    events = [1, 2, 3]
    locate(events, SearchOrder.REVERSED, lambda value: value == 1)
    assert events == [1, 2, 3]


def test_locate_review_passes_owning_pull_request_to_predicate():
    """Verify review predicates receive both the review and its pull request."""
    pr = _make_pr(reviews=[ReviewEvent("alice", _day(2)), ReviewEvent("bob", _day(3))])
    seen = []

    def _predicate(review, pull_request):
        seen.append(pull_request)
        return review.author != pull_request.author

    review = locate_review(pr, SearchOrder.NATURAL, _predicate)

    assert review == ReviewEvent("bob", _day(3))
    assert seen == [pr, pr]


def test_find_initial_review_time_skips_author_reviews():
    """Verify the initial review is the earliest review by a non-author."""
    pr = _make_pr(
        reviews=[
            ReviewEvent("alice", _day(2)),
            ReviewEvent("bob", _day(3)),
            ReviewEvent("carol", _day(4)),
        ]
    )

    assert find_initial_review_time(pr) == _day(3)


def test_find_initial_review_time_only_author_reviews_returns_none():
    """Verify self-reviews never count as an initial review."""
    pr = _make_pr(reviews=[ReviewEvent("alice", _day(2))])

    assert find_initial_review_time(pr) is None


def test_find_last_review_time_returns_latest_peer_review_before_merge():
    """Verify the last review is the latest non-author review strictly before merge."""
    pr = _make_pr(
        reviews=[
            ReviewEvent("bob", _day(2)),
            ReviewEvent("carol", _day(3)),
            ReviewEvent("alice", _day(4)),
            ReviewEvent("bob", _day(5, 15)),
        ],
        merged=_day(5, 10),
    )

    assert find_last_review_time(pr) == _day(3)


def test_find_last_review_time_excludes_review_at_merge_instant():
    """Verify a review submitted exactly at merge time is not before the merge."""
    pr = _make_pr(
        reviews=[ReviewEvent("bob", _day(2)), ReviewEvent("carol", _day(5, 10))],
        merged=_day(5, 10),
    )

    assert find_last_review_time(pr) == _day(2)


def test_find_last_review_time_without_merge_returns_none():
    """Verify unmerged pull requests have no last review."""
    pr = _make_pr(
        reviews=[ReviewEvent("bob", _day(2))],
        state=PullRequestState.OPEN,
        merged=None,
    )

    assert find_last_review_time(pr) is None


def test_find_deployment_event_returns_earliest_exact_label():
    """Verify the first deployed-PROD label wins and other labels are ignored."""
    first = LabelApplied("deployed-PROD", _day(8))
    pr = _make_pr(
        timeline=[
            OtherEvent("PullRequestCommit"),
            LabelApplied("deployed-STAGING", _day(3)),
            ForcePush(CommitRef("a"), CommitRef("b")),
            first,
            LabelApplied("deployed-PROD", _day(9)),
        ]
    )

    assert find_deployment_event(pr) is first


def test_find_deployment_event_label_match_is_case_sensitive():
    """Verify label names differing only in case are not deployments."""
    pr = _make_pr(timeline=[LabelApplied("deployed-prod", _day(8))])

    assert find_deployment_event(pr) is None
