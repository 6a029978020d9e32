"""
Enrolment Repository - Learning Scores
learning_scores/repositories/enrolment_repository.py

Answers whether a user is actively enrolled in a course.
"""

from learning_scores.repositories.base import BaseRepository


class EnrolmentRepository(BaseRepository):
    """Repository for course enrolments."""

    TABLE_NAME = "USER_ENROLMENTS"

    def is_authorized(self, actor_id: int, course_id: int) -> bool:
        """
        Check if a user has an active enrolment in a course.

        Args:
            actor_id: User id
            course_id: Course id

        Returns:
            True if enrolled, False otherwise
        """
        sql = f"""
            SELECT 1 FROM {self.TABLE_NAME}
            WHERE USER_ID = %s AND COURSE_ID = %s AND STATUS = 'active'
            LIMIT 1
        """
        row = self.execute_query(sql, (actor_id, course_id), fetch_one=True)
        return row is not None
