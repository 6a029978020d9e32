"""
Event-to-Activity Extractor
learning_scores/scoring/event_extractor.py

An xAPI statement emitted by an H5P activity carries the module context id
as the last path segment of `object.id`, e.g.

    https://lms.example.org/xapi/activity/412   →  context 412

The context is resolved to an activity id through the ContextResolver.
"""

import json
from typing import List, Sequence

import structlog
from pydantic import ValidationError

from learning_scores.core.exceptions import MalformedEventPayloadError
from learning_scores.core.interfaces import ContextResolver
from learning_scores.models.xapi import StatementBatch, XAPIStatement

logger = structlog.get_logger(__name__)


def parse_statements(payload: str) -> List[XAPIStatement]:
    """Parse a raw xAPI JSON payload (array of statements)."""
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise MalformedEventPayloadError(f"xAPI payload is not valid JSON: {e.msg}") from e
    # A single statement object is accepted as a batch of one
    if isinstance(data, dict):
        data = [data]
    try:
        return StatementBatch.validate_python(data)
    except ValidationError as e:
        raise MalformedEventPayloadError(
            "xAPI payload must be a list of statements with object.id",
            details={"errors": [".".join(str(p) for p in err["loc"]) for err in e.errors()]},
        ) from e


def context_id_from_statement(statement: XAPIStatement) -> int:
    """Last `/`-separated segment of object.id as a context id."""
    segment = statement.object.id.split("/")[-1]
    # ASCII digits only; int() would also take "9_02", " 7" and non-Latin digits
    if not segment.isascii() or not segment.isdigit():
        raise MalformedEventPayloadError(
            f"object.id '{statement.object.id}' does not end in a context id",
            details={"object_id": statement.object.id},
        )
    return int(segment)


def extract_activity_ids(
    statements: Sequence[XAPIStatement],
    contexts: ContextResolver,
) -> List[int]:
    """
    Distinct activity ids referenced by the statements, in first-seen order.
    """
    activity_ids: List[int] = []
    for statement in statements:
        context_id = context_id_from_statement(statement)
        activity_id = contexts.resolve_context(context_id)
        if activity_id not in activity_ids:
            activity_ids.append(activity_id)

    logger.debug("activity_ids_extracted", statements=len(statements), activity_ids=activity_ids)
    return activity_ids
