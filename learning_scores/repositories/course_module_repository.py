"""
Course Module Repository - Learning Scores
learning_scores/repositories/course_module_repository.py

Data access for activity records (course modules).
"""

from typing import Optional

from pydantic import ValidationError

from learning_scores.core.exceptions import CourseModuleFormatError
from learning_scores.models.activity import CourseModule
from learning_scores.repositories.base import BaseRepository


class CourseModuleRepository(BaseRepository):
    """Repository for course module lookups."""

    TABLE_NAME = "COURSE_MODULES"

    def get_course_module(self, activity_id: int) -> Optional[CourseModule]:
        """
        Retrieve an activity by id, joined with its module type name.

        Returns:
            CourseModule or None if not found
        """
        sql = """
            SELECT CM.ID, CM.COURSE_ID, CM.INSTANCE_ID, M.NAME AS MODNAME
            FROM COURSE_MODULES CM
            JOIN MODULES M ON M.ID = CM.MODULE_ID
            WHERE CM.ID = %s
        """
        row = self.execute_query(sql, (activity_id,), fetch_one=True)

        if not row:
            return None

        try:
            return CourseModule.model_validate(self.row_to_dict(row))
        except ValidationError as e:
            raise CourseModuleFormatError(
                f"Course module {activity_id} has an invalid format",
                details={"activity_id": activity_id},
            ) from e
