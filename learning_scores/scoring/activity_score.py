"""
Activity Score Resolver
learning_scores/scoring/activity_score.py

Scores one activity for one actor:

  1. Look up the activity's ScoreItem (score_min, score_max)
  2. Pick the achievement source from the activity type
       graded     → gradebook record → percentage via score_mapper
       completion → completion state → 1.0 if complete else 0.0
  3. score = score_min + (score_max − score_min) × percentage

The activity record and the actor's enrolment are validated once, when the
resolver is built. get_score() only reads and can be called repeatedly.
"""

from typing import Any, Union

import structlog
from pydantic import ValidationError

from learning_scores.core.exceptions import (
    ActorNotAuthorizedError,
    CourseModuleFormatError,
    GradeItemCardinalityError,
    ScoreItemNotFoundError,
    UnsupportedActivityTypeError,
)
from learning_scores.core.interfaces import ScoringCollaborators
from learning_scores.models.activity import (
    AchievementSignal,
    CompletionSignal,
    CourseModule,
    GradedSignal,
    ScoreItem,
)
from learning_scores.models.enumerations import (
    ACHIEVEMENT_SOURCES,
    AchievementSource,
    ActivityType,
    CompletionState,
)
from learning_scores.scoring.score_mapper import calculate_percentage_achieved, calculate_score

logger = structlog.get_logger(__name__)


class ActivityScoreResolver:
    """Calculate the achieved score of one activity for one actor."""

    def __init__(
        self,
        course_module: Union[CourseModule, Any],
        actor_id: int,
        collaborators: ScoringCollaborators,
    ):
        """
        Args:
            course_module: Activity record. Anything that is not already a
                CourseModule (dict, ORM row) is validated into one.
            actor_id: Learner whose achievement is scored.
            collaborators: Stores and subsystems to read from.

        Raises:
            CourseModuleFormatError: the record has no usable type or course.
            ActorNotAuthorizedError: the actor is not enrolled in the course.
        """
        self.course_module = self._validate_course_module(course_module)
        self.actor_id = actor_id
        self._collaborators = collaborators

        if not collaborators.authorization.is_authorized(actor_id, self.course_module.course_id):
            logger.warning(
                "actor_not_enrolled",
                actor_id=actor_id,
                course_id=self.course_module.course_id,
            )
            raise ActorNotAuthorizedError(actor_id, self.course_module.course_id)

    @staticmethod
    def _validate_course_module(course_module: Any) -> CourseModule:
        if isinstance(course_module, CourseModule):
            return course_module
        try:
            return CourseModule.model_validate(course_module, from_attributes=True)
        except ValidationError as e:
            logger.warning("course_module_format_not_valid", errors=e.errors())
            raise CourseModuleFormatError(
                "Course module record has no usable type or course",
                details={"errors": [err.get("loc") for err in e.errors()]},
            ) from e

    @property
    def activity_id(self) -> int:
        return self.course_module.id

    @property
    def achievement_source(self) -> AchievementSource:
        """Achievement source for the activity type."""
        try:
            activity_type = ActivityType(self.course_module.modname)
        except ValueError:
            logger.warning(
                "activity_type_unsupported",
                activity_id=self.activity_id,
                modname=self.course_module.modname,
            )
            raise UnsupportedActivityTypeError(self.activity_id, self.course_module.modname)
        return ACHIEVEMENT_SOURCES[activity_type]

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def get_score(self) -> float:
        """
        Score the activity from its score item and the actor's achievement.

        Raises:
            ScoreItemNotFoundError: activity was never set up for scoring.
            UnsupportedActivityTypeError: activity type has no achievement source.
            GradeItemCardinalityError: gradebook returned != 1 grade item.
            ValueOutOfRangeError: grade outside its own [grade_min, grade_max].
        """
        score_item = self._get_score_item()
        signal = self.fetch_signal()
        percentage = self.achieved_percentage(signal)
        score = calculate_score(score_item.score_min, score_item.score_max, percentage)

        logger.info(
            "activity_score_resolved",
            activity_id=self.activity_id,
            actor_id=self.actor_id,
            source=signal.kind,
            achieved_percentage=percentage,
            score_min=score_item.score_min,
            score_max=score_item.score_max,
            score=score,
        )
        return score

    def _get_score_item(self) -> ScoreItem:
        score_item = self._collaborators.score_items.get_score_item(self.activity_id)
        if score_item is None:
            logger.warning("score_item_not_found", activity_id=self.activity_id)
            raise ScoreItemNotFoundError(self.activity_id)
        return score_item

    def fetch_signal(self) -> AchievementSignal:
        """Read the raw achievement evidence from the matching collaborator."""
        source = self.achievement_source

        if source is AchievementSource.GRADED:
            records = self._collaborators.grades.get_grade_records(self.course_module, self.actor_id)
            if len(records) != 1:
                logger.error(
                    "grade_item_cardinality",
                    fault="data_consistency",
                    activity_id=self.activity_id,
                    grade_items=len(records),
                )
                raise GradeItemCardinalityError(self.activity_id, len(records))
            return GradedSignal.from_record(records[0])

        state = self._collaborators.completions.get_completion_state(self.course_module, self.actor_id)
        return CompletionSignal(state=state)

    def achieved_percentage(self, signal: AchievementSignal) -> float:
        """Convert an achievement signal into a percentage in [0, 1]."""
        if signal.kind == "graded":
            if signal.grade is None:
                logger.debug(
                    "grade_missing_assuming_zero",
                    activity_id=self.activity_id,
                    actor_id=self.actor_id,
                )
                return 0.0
            return calculate_percentage_achieved(signal.grade, signal.grade_max, signal.grade_min)

        return 1.0 if signal.state == CompletionState.COMPLETE else 0.0
