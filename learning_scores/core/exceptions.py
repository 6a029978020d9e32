"""
Custom Exceptions - Learning Scores
learning_scores/core/exceptions.py

Error taxonomy for score derivation plus repository errors.
"""

from typing import Optional


class RepositoryException(Exception):
    """Base exception for repository operations."""

    pass


class EntityNotFoundException(RepositoryException):
    """Entity not found in database."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} not found")


class DatabaseConnectionException(RepositoryException):
    """Database connection failure."""

    def __init__(self, message: str = "Database connection failed"):
        self.message = message
        super().__init__(message)


# =============================================================================
# SCORING ERRORS
# =============================================================================


class ScoringException(Exception):
    """Base exception for score derivation."""

    error_code = "SCORING_ERROR"

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ScoreConfigurationError(ScoringException):
    """The activity is not set up for scoring."""

    error_code = "SCORE_CONFIGURATION_ERROR"


class ScoreItemNotFoundError(ScoreConfigurationError):
    """No score item exists for the activity."""

    error_code = "SCORE_ITEM_NOT_FOUND"

    def __init__(self, activity_id: int):
        self.activity_id = activity_id
        super().__init__(
            f"No score item found for activity {activity_id}, "
            "probably this course does not support scoring",
            details={"activity_id": activity_id},
        )


class InvalidScoreItemError(ScoreConfigurationError):
    """Stored score item violates score_min <= score_max."""

    error_code = "SCORE_ITEM_INVALID"


class UnsupportedActivityTypeError(ScoreConfigurationError):
    error_code = "ACTIVITY_TYPE_UNSUPPORTED"

    def __init__(self, activity_id: int, modname: str):
        self.activity_id = activity_id
        self.modname = modname
        super().__init__(
            f"Activity {activity_id} has unsupported type '{modname}'",
            details={"activity_id": activity_id, "modname": modname},
        )


class ActorNotAuthorizedError(ScoringException):
    """Actor has no enrolment in the activity's course."""

    error_code = "ACTOR_NOT_AUTHORIZED"

    def __init__(self, actor_id: int, course_id: int):
        self.actor_id = actor_id
        self.course_id = course_id
        super().__init__(
            f"User {actor_id} is not enrolled in course {course_id}",
            details={"actor_id": actor_id, "course_id": course_id},
        )


class InputValidationError(ScoringException):
    """The caller sent something that cannot be scored."""

    error_code = "INVALID_REQUEST"


class CourseModuleFormatError(InputValidationError):
    error_code = "COURSE_MODULE_FORMAT_NOT_VALID"


class MalformedEventPayloadError(InputValidationError):
    error_code = "MALFORMED_EVENT_PAYLOAD"


class NotPrimitiveActivityError(InputValidationError):
    error_code = "NOT_A_PRIMITIVE_ACTIVITY"

    def __init__(self, activity_id: int, modname: str):
        self.activity_id = activity_id
        super().__init__(
            f"Activity {activity_id} ({modname}) is not a known primitive learning element",
            details={"activity_id": activity_id, "modname": modname},
        )


class DataConsistencyError(ScoringException):
    """An external collaborator returned data that cannot be correct."""

    error_code = "DATA_CONSISTENCY_FAULT"


class GradeItemCardinalityError(DataConsistencyError):
    error_code = "GRADE_ITEM_CARDINALITY"

    def __init__(self, activity_id: int, count: int):
        self.activity_id = activity_id
        self.count = count
        super().__init__(
            f"Wrong number of grade items found for activity {activity_id}: expected 1, got {count}",
            details={"activity_id": activity_id, "grade_items": count},
        )


class ValueOutOfRangeError(DataConsistencyError):
    error_code = "VALUE_OUT_OF_RANGE"

    def __init__(self, value: float, min_value: float, max_value: float):
        self.value = value
        self.min_value = min_value
        self.max_value = max_value
        super().__init__(
            f"Value {value} is not in range [{min_value}, {max_value}]",
            details={"value": value, "min": min_value, "max": max_value},
        )


class EventIngestionError(ScoringException):
    """Forwarding achievement events to the record store failed."""

    error_code = "EVENT_INGESTION_FAILED"


class ScoringAfterCommitError(ScoringException):
    """Score computation failed after an external side effect already succeeded."""

    error_code = "SCORING_FAILED_AFTER_COMMIT"

    def __init__(self, side_effect: str, cause: Exception):
        self.side_effect = side_effect
        self.cause = cause
        super().__init__(
            f"Failed to compute scores, but {side_effect} already succeeded: {cause}",
            details={
                "side_effect": side_effect,
                "side_effect_committed": True,
                "cause": type(cause).__name__,
                "cause_message": str(cause),
            },
        )
