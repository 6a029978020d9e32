"""
Dependencies - Learning Scores
learning_scores/core/dependencies.py

FastAPI dependency injection for repositories and the scoring service.
"""

from functools import lru_cache

from fastapi import Header

from learning_scores.core.interfaces import ScoringCollaborators
from learning_scores.repositories.completion_repository import CompletionRepository
from learning_scores.repositories.context_repository import ContextRepository
from learning_scores.repositories.course_module_repository import CourseModuleRepository
from learning_scores.repositories.enrolment_repository import EnrolmentRepository
from learning_scores.repositories.grade_repository import GradeRepository
from learning_scores.repositories.score_item_repository import ScoreItemRepository
from learning_scores.services.lrs_client import LRSClient
from learning_scores.services.scoring_service import ScoringService


@lru_cache()
def get_scoring_collaborators() -> ScoringCollaborators:
    """Get cached Snowflake-backed collaborators."""
    return ScoringCollaborators(
        activities=CourseModuleRepository(),
        score_items=ScoreItemRepository(),
        completions=CompletionRepository(),
        grades=GradeRepository(),
        authorization=EnrolmentRepository(),
    )


@lru_cache()
def get_scoring_service() -> ScoringService:
    """Get cached ScoringService instance."""
    return ScoringService(
        collaborators=get_scoring_collaborators(),
        contexts=ContextRepository(),
        events=LRSClient(),
    )


def get_current_actor_id(x_actor_id: int = Header(..., ge=1, description="Id of the calling user")) -> int:
    """Calling actor, passed explicitly by the authenticating gateway."""
    return x_actor_id
