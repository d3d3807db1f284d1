"""Helpers shared by the CRUD routers."""
from typing import Any, Iterable

from database import UpdateOutcome
from exceptions import InvalidRequestError, NotFoundError


def drop_fields(body: dict[str, Any], fields: Iterable[str]) -> dict[str, Any]:
    """
    Copy of body without the given keys (server-owned or immutable fields).

    Dotted paths are matched on their first segment, so `paymentDetails.amount`
    is dropped along with `paymentDetails`. Operator keys (`$set`, ...) are
    refused outright.
    """
    skip = set(fields)
    operators = [k for k in body if k.startswith("$")]
    if operators:
        raise InvalidRequestError(f"Field names may not start with '$': {', '.join(sorted(operators))}")
    return {k: v for k, v in body.items() if k.split(".", 1)[0] not in skip}


def require_fields(updates: dict[str, Any]) -> dict[str, Any]:
    if not updates:
        raise InvalidRequestError("No fields to update")
    return updates


def ensure_matched(outcome: UpdateOutcome, message: str) -> None:
    """Turn a zero matched-count into a 404 that still reports the counters."""
    if outcome.matched_count == 0:
        raise NotFoundError(
            message,
            counters={"matchedCount": outcome.matched_count, "modifiedCount": outcome.modified_count},
        )


def ensure_deleted(deleted_count: int, message: str) -> None:
    if deleted_count == 0:
        raise NotFoundError(message, counters={"deletedCount": 0})
