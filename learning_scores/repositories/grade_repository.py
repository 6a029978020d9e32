"""
Grade Repository - Learning Scores
learning_scores/repositories/grade_repository.py

Gradebook reads. One activity normally owns exactly one grade item; the
caller checks the cardinality.

Tables:
  - GRADE_ITEMS  (ID, COURSE_ID, ITEM_MODULE, ITEM_INSTANCE, GRADE_MIN, GRADE_MAX)
  - GRADE_GRADES (ITEM_ID, USER_ID, FINAL_GRADE)   FINAL_GRADE NULL = not attempted
"""

from typing import List

from learning_scores.models.activity import CourseModule, GradeRecord
from learning_scores.repositories.base import BaseRepository


class GradeRepository(BaseRepository):
    """Repository for gradebook items and grades."""

    def get_grade_records(self, course_module: CourseModule, actor_id: int) -> List[GradeRecord]:
        """
        Retrieve every grade item of an activity together with the actor's grade.

        Args:
            course_module: Activity whose grade items are read
            actor_id: Learner

        Returns:
            One GradeRecord per grade item (grade is None if the learner has none)
        """
        sql = """
            SELECT GI.GRADE_MIN, GI.GRADE_MAX, GG.FINAL_GRADE
            FROM GRADE_ITEMS GI
            LEFT JOIN GRADE_GRADES GG
                ON GG.ITEM_ID = GI.ID AND GG.USER_ID = %s
            WHERE GI.COURSE_ID = %s
              AND GI.ITEM_MODULE = %s
              AND GI.ITEM_INSTANCE = %s
            ORDER BY GI.ID
        """
        params = (actor_id, course_module.course_id, course_module.modname, course_module.instance_id)
        rows = self.execute_query(sql, params, fetch_all=True) or []

        return [self._row_to_grade_record(row) for row in rows]

    def _row_to_grade_record(self, row) -> GradeRecord:
        return GradeRecord(
            grade=float(row["FINAL_GRADE"]) if row["FINAL_GRADE"] is not None else None,
            grade_min=float(row["GRADE_MIN"]),
            grade_max=float(row["GRADE_MAX"]),
        )
