"""Conversion of exported GitHub GraphQL search results into domain models.

The input is JSON that was already fetched from the GitHub GraphQL ``search``
query. This module only reads it; fetching and pagination belong elsewhere.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional

from .errors import DataValidationError, InputError
from .models import (
    CommitRef,
    ForcePush,
    LabelApplied,
    OtherEvent,
    PullRequest,
    PullRequestState,
    ReviewEvent,
    TimelineEvent,
)

logger = logging.getLogger(__name__)

GHOST_LOGIN = "ghost"

_FORCE_PUSH_TYPENAMES = frozenset({"HeadRefForcePushedEvent", "BaseRefForcePushedEvent"})
_LABEL_TYPENAME = "LabeledEvent"


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse GitHub ISO8601 timestamps into timezone-aware UTC datetimes.

    Raises:
        DataValidationError: If ``value`` is not a valid ISO8601 timestamp.
    """
    if value is None or value == "":
        return None

    if not isinstance(value, str):
        raise DataValidationError(f"Invalid timestamp in pull request payload: {value!r}")

    normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        parsed = datetime.fromisoformat(normalized)
    except (TypeError, ValueError) as exc:
        raise DataValidationError(f"Invalid timestamp in pull request payload: {value!r}") from exc

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _login(actor: Any) -> str:
    # GitHub returns a null actor for deleted accounts
    if not isinstance(actor, Mapping):
        return GHOST_LOGIN
    return str(actor.get("login") or GHOST_LOGIN)


def _edge_nodes(connection: Any, field_name: str, pr_id: str) -> List[Mapping[str, Any]]:
    if not isinstance(connection, Mapping) or not isinstance(connection.get("edges"), list):
        raise DataValidationError(
            f"Pull request payload is missing the '{field_name}' connection: pr_id={pr_id}"
        )
    # timeline kinds no query fragment selects come back as empty nodes
    return [
        edge["node"]
        for edge in connection["edges"]
        if isinstance(edge, Mapping) and isinstance(edge.get("node"), Mapping)
    ]


def _count(node: Mapping[str, Any], field_name: str, pr_id: str) -> int:
    value = node.get(field_name) or 0
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise DataValidationError(
            f"Pull request payload has a non-numeric '{field_name}': pr_id={pr_id}, value={value!r}"
        ) from exc


def _commit_ref(value: Any) -> Optional[CommitRef]:
    if not isinstance(value, Mapping) or not value.get("oid"):
        return None
    return CommitRef(oid=str(value["oid"]))


def parse_review(node: Mapping[str, Any], pr_id: str) -> ReviewEvent:
    """Parse one review node."""
    submitted_at = parse_datetime(node.get("submittedAt"))
    if submitted_at is None:
        raise DataValidationError(f"Review payload is missing 'submittedAt': pr_id={pr_id}, payload={node}")

    return ReviewEvent(author=_login(node.get("author")), submittedAt=submitted_at)


def parse_timeline_event(node: Mapping[str, Any], pr_id: str) -> TimelineEvent:
    """Parse one timeline node into its tagged event variant.

    Nodes exported without ``__typename`` are classified by the fields they carry.
    """
    typename = node.get("__typename")

    is_force_push = typename in _FORCE_PUSH_TYPENAMES or (
        typename is None and ("beforeCommit" in node or "afterCommit" in node)
    )
    if is_force_push:
        return ForcePush(
            beforeCommit=_commit_ref(node.get("beforeCommit")),
            afterCommit=_commit_ref(node.get("afterCommit")),
        )

    is_label = typename == _LABEL_TYPENAME or (typename is None and "label" in node)
    if is_label:
        label = node.get("label")
        created_at = parse_datetime(node.get("createdAt"))
        if not isinstance(label, Mapping) or not label.get("name") or created_at is None:
            raise DataValidationError(
                f"Label event payload is missing required fields: pr_id={pr_id}, payload={node}"
            )
        return LabelApplied(labelName=str(label["name"]), createdAt=created_at)

    return OtherEvent(kind=str(typename or "Unknown"), raw=dict(node))


def parse_pull_request(node: Mapping[str, Any]) -> PullRequest:
    """Parse one pull request node from a search result.

    Raises:
        DataValidationError: If required fields are missing or malformed. An
            empty ``reviews`` or ``timelineItems`` connection is valid; a
            missing one is not.
    """
    pr_id = node.get("id")
    created_at = parse_datetime(node.get("createdAt"))
    raw_state = node.get("state")

    if not pr_id or created_at is None or not raw_state:
        raise DataValidationError(f"Pull request payload is missing required fields: payload={node}")

    pr_id = str(pr_id)
    try:
        state = PullRequestState(str(raw_state).upper())
    except ValueError as exc:
        raise DataValidationError(f"Unknown pull request state {raw_state!r}: pr_id={pr_id}") from exc

    merged_at = parse_datetime(node.get("mergedAt")) if state is PullRequestState.MERGED else None

    reviews = tuple(parse_review(item, pr_id) for item in _edge_nodes(node.get("reviews"), "reviews", pr_id))
    timeline_items = tuple(
        parse_timeline_event(item, pr_id)
        for item in _edge_nodes(node.get("timelineItems"), "timelineItems", pr_id)
    )

    return PullRequest(
        id=pr_id,
        author=_login(node.get("author")),
        createdAt=created_at,
        state=state,
        mergedAt=merged_at,
        reviews=reviews,
        timelineItems=timeline_items,
        title=str(node.get("title") or ""),
        url=str(node.get("url") or ""),
        additions=_count(node, "additions", pr_id),
        deletions=_count(node, "deletions", pr_id),
    )


def _search_nodes(document: Any) -> Iterable[Mapping[str, Any]]:
    """Yield pull request nodes from any supported document root, in order."""
    if isinstance(document, list):
        for item in document:
            yield from _search_nodes(item)
        return

    if not isinstance(document, Mapping):
        raise DataValidationError(f"Unsupported payload root type: {type(document).__name__}")

    if "data" in document:
        yield from _search_nodes(document["data"])
    elif "search" in document:
        yield from _search_nodes(document["search"])
    elif "edges" in document:
        for edge in document["edges"] or []:
            node = edge.get("node") if isinstance(edge, Mapping) else None
            # non-PR search hits come back as empty nodes
            if node:
                yield node
    elif "id" in document and "createdAt" in document:
        yield document
    else:
        raise DataValidationError("Payload does not contain a pull request search result.")


def parse_pull_requests(document: Any) -> List[PullRequest]:
    """Parse every pull request in a search document, preserving order."""
    return [parse_pull_request(node) for node in _search_nodes(document)]


def load_pull_requests(paths: Iterable[Path]) -> List[PullRequest]:
    """Read and parse exported search results from one or more JSON files.

    Raises:
        InputError: If a file cannot be read or is not valid JSON.
        DataValidationError: If a file's contents do not match the expected shape.
    """
    pull_requests: List[PullRequest] = []

    for path in paths:
        try:
            with open(path, encoding="utf-8") as handle:
                document = json.load(handle)
        except OSError as exc:
            raise InputError(f"Unable to read pull request export '{path}': {exc}") from exc
        except ValueError as exc:
            raise InputError(f"Pull request export '{path}' is not valid JSON") from exc

        parsed = parse_pull_requests(document)
        logger.debug("Loaded pull request export", extra={"path": str(path), "prs": len(parsed)})
        pull_requests.extend(parsed)

    return pull_requests
