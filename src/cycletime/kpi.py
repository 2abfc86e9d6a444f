"""Cycle-time metric derivation for GitHub pull requests.

This module computes PR-level business-day metrics:
- days to first review (creation to first non-author review)
- rework time (first non-author review to last pre-merge review)
- waiting to deploy (last pre-merge review to ``deployed-PROD`` label)
- cycle time (creation to deployment, falling back to merge)

Every metric is ``None`` when its inputs are not available. Absence means the
value cannot be computed and is never coerced to zero.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, List, Optional

from .business_days import business_days_between
from .history import is_history_uncertain
from .locator import find_deployment_event, find_initial_review_time, find_last_review_time
from .models import PullRequest, PullRequestKeyMetrics, PullRequestState

logger = logging.getLogger(__name__)


def find_deployment_time(pull_request: PullRequest) -> Optional[datetime]:
    """Return when the pull request was labelled ``deployed-PROD``, if ever."""
    event = find_deployment_event(pull_request)
    return event.createdAt if event is not None else None


def days_to_first_review(pull_request: PullRequest) -> Optional[int]:
    """Compute business days from PR creation to the first non-author review."""
    initial_review_time = find_initial_review_time(pull_request)
    if initial_review_time is None:
        return None

    return business_days_between(initial_review_time, pull_request.createdAt)


def rework_time_in_days(pull_request: PullRequest) -> Optional[int]:
    """Compute business days between the first and the last pre-merge peer review.

    Returns ``None`` when either review is missing.
    """
    initial_review_time = find_initial_review_time(pull_request)
    last_review_time = find_last_review_time(pull_request)

    if initial_review_time is None or last_review_time is None:
        return None

    return business_days_between(last_review_time, initial_review_time)


def waiting_to_deploy(pull_request: PullRequest) -> Optional[int]:
    """Compute business days from the last pre-merge peer review to deployment."""
    last_review_time = find_last_review_time(pull_request)
    deployment_time = find_deployment_time(pull_request)

    if deployment_time is None or last_review_time is None:
        return None

    return business_days_between(deployment_time, last_review_time)


def cycle_time(pull_request: PullRequest) -> Optional[int]:
    """Compute business days from creation to deployment, or to merge if never deployed.

    Business logic:
    - Only merged pull requests are eligible.
    - Pull requests with an unresolved force push are skipped because their
      history cannot be trusted.
    - The end of the cycle is the first ``deployed-PROD`` label event when
      present, otherwise ``mergedAt``.
    """
    if pull_request.state is not PullRequestState.MERGED:
        return None

    if is_history_uncertain(pull_request):
        logger.debug(
            "Skipping cycle time computation due to uncertain history",
            extra={"pr_id": pull_request.id},
        )
        return None

    end_time = find_deployment_time(pull_request) or pull_request.mergedAt
    if end_time is None:
        logger.debug(
            "Skipping cycle time computation due to missing mergedAt",
            extra={"pr_id": pull_request.id},
        )
        return None

    return business_days_between(end_time, pull_request.createdAt)


def transform_pull_request(pull_request: PullRequest) -> PullRequestKeyMetrics:
    """Derive the full key-metrics record for one pull request."""
    uncertain = is_history_uncertain(pull_request)
    if uncertain:
        logger.warning(
            "Pull request history contains an unresolved force push",
            extra={"pr_id": pull_request.id},
        )

    return PullRequestKeyMetrics(
        id=pull_request.id,
        title=pull_request.title,
        url=pull_request.url,
        author=pull_request.author,
        state=pull_request.state,
        created_at=pull_request.createdAt,
        merged_at=pull_request.mergedAt,
        review_count=len(pull_request.reviews),
        changes=pull_request.additions + pull_request.deletions,
        deployed_at=find_deployment_time(pull_request),
        history_uncertain=uncertain,
        days_to_first_review=days_to_first_review(pull_request),
        rework_time_in_days=rework_time_in_days(pull_request),
        waiting_to_deploy=waiting_to_deploy(pull_request),
        cycle_time=cycle_time(pull_request),
    )


def collect_key_metrics(pull_requests: Iterable[PullRequest]) -> List[PullRequestKeyMetrics]:
    """Transform every pull request and log how many produced each metric."""
    results = [transform_pull_request(pull_request) for pull_request in pull_requests]

    logger.info(
        "Collected pull request key metrics",
        extra={
            "prs_total": len(results),
            "prs_merged": sum(1 for item in results if item.state is PullRequestState.MERGED),
            "prs_uncertain_history": sum(1 for item in results if item.history_uncertain),
            "first_review_samples": sum(1 for item in results if item.days_to_first_review is not None),
            "rework_samples": sum(1 for item in results if item.rework_time_in_days is not None),
            "waiting_to_deploy_samples": sum(1 for item in results if item.waiting_to_deploy is not None),
            "cycle_time_samples": sum(1 for item in results if item.cycle_time is not None),
        },
    )

    return results
