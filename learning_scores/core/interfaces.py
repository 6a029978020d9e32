"""
Collaborator Interfaces - Learning Scores
learning_scores/core/interfaces.py

Everything the scoring core reads from (or delegates writes to) is reached
through these protocols. The Snowflake repositories and the LRS client
implement them in production; tests pass in-memory fakes.
"""

from dataclasses import dataclass
from typing import List, Optional, Protocol

from learning_scores.models.activity import CourseModule, GradeRecord, ScoreItem
from learning_scores.models.enumerations import CompletionState


class ActivityDirectory(Protocol):
    def get_course_module(self, activity_id: int) -> Optional[CourseModule]:
        """Return the activity record, or None if it does not exist."""
        ...


class ScoreItemStore(Protocol):
    def get_score_item(self, activity_id: int) -> Optional[ScoreItem]:
        ...


class CompletionTracker(Protocol):
    def get_completion_state(self, course_module: CourseModule, actor_id: int) -> CompletionState:
        ...

    def set_completion_state(
        self, course_module: CourseModule, actor_id: int, new_state: CompletionState
    ) -> None:
        ...


class GradingSubsystem(Protocol):
    def get_grade_records(self, course_module: CourseModule, actor_id: int) -> List[GradeRecord]:
        """Return every grade item of the activity with the actor's grade."""
        ...


class ContextResolver(Protocol):
    def resolve_context(self, context_id: int) -> int:
        """Map a module context id to its activity id."""
        ...


class AuthorizationCheck(Protocol):
    def is_authorized(self, actor_id: int, course_id: int) -> bool:
        ...


class EventIngestion(Protocol):
    def post_statements(self, payload: str) -> None:
        """Forward a raw xAPI statement batch. Raises on failure."""
        ...


@dataclass
class ScoringCollaborators:
    """Bundle of the collaborators a scoring request reads from."""
    activities: ActivityDirectory
    score_items: ScoreItemStore
    completions: CompletionTracker
    grades: GradingSubsystem
    authorization: AuthorizationCheck
