"""
Scoring Service - Learning Scores
learning_scores/services/scoring_service.py

Operations exposed to callers:

  get_score(activity_id, actor_id)                                  → float
  set_primitive_completion_and_score(activity_id, is_completed, actor_id) → float
  process_graded_event_batch(payload, actor_id)                     → [ActivityScore]

The last two perform an external side effect (completion update / event
ingestion) before scoring. If scoring then fails, the failure is wrapped in
ScoringAfterCommitError so the caller knows the side effect stands.
"""

from typing import Dict, List, Sequence

import structlog

from learning_scores.core.exceptions import (
    ActorNotAuthorizedError,
    EntityNotFoundException,
    InputValidationError,
    NotPrimitiveActivityError,
    ScoringAfterCommitError,
)
from learning_scores.core.interfaces import ContextResolver, EventIngestion, ScoringCollaborators
from learning_scores.models.activity import CourseModule
from learning_scores.models.enumerations import (
    ACHIEVEMENT_SOURCES,
    AchievementSource,
    ActivityType,
    CompletionState,
)
from learning_scores.models.score import ActivityScore
from learning_scores.scoring.activity_score import ActivityScoreResolver
from learning_scores.scoring.batch_scores import get_achieved_scores
from learning_scores.scoring.event_extractor import extract_activity_ids, parse_statements

logger = structlog.get_logger(__name__)


def is_primitive_learning_element(course_module: CourseModule) -> bool:
    """True for activity types whose achievement is tracked by completion only."""
    try:
        activity_type = ActivityType(course_module.modname)
    except ValueError:
        return False
    return ACHIEVEMENT_SOURCES[activity_type] is AchievementSource.COMPLETION


class ScoringService:
    """Entry points for score lookups and achievement events."""

    def __init__(
        self,
        collaborators: ScoringCollaborators,
        contexts: ContextResolver,
        events: EventIngestion,
    ):
        self.collaborators = collaborators
        self.contexts = contexts
        self.events = events

    def _get_course_module(self, activity_id: int) -> CourseModule:
        course_module = self.collaborators.activities.get_course_module(activity_id)
        if course_module is None:
            raise EntityNotFoundException("Activity", str(activity_id))
        return course_module

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_score(self, activity_id: int, actor_id: int) -> float:
        course_module = self._get_course_module(activity_id)
        return ActivityScoreResolver(course_module, actor_id, self.collaborators).get_score()

    def get_achieved_scores(self, activity_ids: Sequence[int], actor_id: int) -> Dict[int, float]:
        return get_achieved_scores(activity_ids, actor_id, self.collaborators)

    # ------------------------------------------------------------------
    # Side effect first, then score
    # ------------------------------------------------------------------

    def set_primitive_completion_and_score(
        self,
        activity_id: int,
        is_completed: bool,
        actor_id: int,
    ) -> float:
        """
        Mark a primitive activity complete/incomplete, then return its score.

        Raises:
            InputValidationError: activity does not exist.
            ActorNotAuthorizedError: actor is not enrolled in the course.
            NotPrimitiveActivityError: activity is graded or of unknown type.
            ScoringAfterCommitError: completion was stored but scoring failed.
        """
        course_module = self.collaborators.activities.get_course_module(activity_id)
        if course_module is None:
            raise InputValidationError(
                "failed_to_get_course_module",
                details={"activity_id": activity_id},
            )

        if not self.collaborators.authorization.is_authorized(actor_id, course_module.course_id):
            raise ActorNotAuthorizedError(actor_id, course_module.course_id)

        # Graded activities manage completion through the gradebook
        if not is_primitive_learning_element(course_module):
            logger.warning(
                "not_a_primitive_learning_element",
                activity_id=activity_id,
                modname=course_module.modname,
            )
            raise NotPrimitiveActivityError(activity_id, course_module.modname)

        new_state = CompletionState.COMPLETE if is_completed else CompletionState.INCOMPLETE
        self.collaborators.completions.set_completion_state(course_module, actor_id, new_state)

        try:
            return ActivityScoreResolver(course_module, actor_id, self.collaborators).get_score()
        except Exception as e:
            logger.error(
                "score_failed_after_completion_update",
                activity_id=activity_id,
                actor_id=actor_id,
                error=str(e),
            )
            raise ScoringAfterCommitError("completion update", e) from e

    def process_graded_event_batch(self, payload: str, actor_id: int) -> List[ActivityScore]:
        """
        Forward an xAPI batch to the record store, then score every activity it references.

        The payload is parsed before forwarding so a malformed batch is
        rejected without side effects.

        Raises:
            MalformedEventPayloadError: payload is not a statement batch.
            EventIngestionError: forwarding failed, nothing committed.
            ScoringAfterCommitError: statements were recorded but scoring failed.
        """
        statements = parse_statements(payload)
        self.events.post_statements(payload)

        try:
            activity_ids = extract_activity_ids(statements, self.contexts)
            scores = get_achieved_scores(activity_ids, actor_id, self.collaborators)
        except Exception as e:
            logger.error(
                "scores_failed_after_event_ingestion",
                actor_id=actor_id,
                statements=len(statements),
                error=str(e),
            )
            raise ScoringAfterCommitError("event ingestion", e) from e

        return [
            ActivityScore(activity_id=activity_id, score=score)
            for activity_id, score in scores.items()
        ]
