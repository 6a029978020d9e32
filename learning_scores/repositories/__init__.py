"""
Repositories Package - Learning Scores
learning_scores/repositories/__init__.py

Data access layer for Snowflake database operations.
"""

from learning_scores.repositories.base import BaseRepository
from learning_scores.repositories.completion_repository import CompletionRepository
from learning_scores.repositories.context_repository import ContextRepository
from learning_scores.repositories.course_module_repository import CourseModuleRepository
from learning_scores.repositories.enrolment_repository import EnrolmentRepository
from learning_scores.repositories.grade_repository import GradeRepository
from learning_scores.repositories.score_item_repository import ScoreItemRepository

__all__ = [
    "BaseRepository",
    "CompletionRepository",
    "ContextRepository",
    "CourseModuleRepository",
    "EnrolmentRepository",
    "GradeRepository",
    "ScoreItemRepository",
]
