"""
Completion Repository - Learning Scores
learning_scores/repositories/completion_repository.py

Completion tracking for activities.

Table COURSE_MODULE_COMPLETION:
  - ACTIVITY_ID       NUMBER NOT NULL
  - USER_ID           NUMBER NOT NULL
  - COMPLETION_STATE  NUMBER NOT NULL  (0 incomplete, 1 complete)
  - UPDATED_AT        TIMESTAMP_NTZ
  - UNIQUE (ACTIVITY_ID, USER_ID)

A missing row means the activity was never completed.
"""

import logging

from learning_scores.models.activity import CourseModule
from learning_scores.models.enumerations import CompletionState
from learning_scores.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class CompletionRepository(BaseRepository):
    """Repository for completion states."""

    TABLE_NAME = "COURSE_MODULE_COMPLETION"

    def get_completion_state(self, course_module: CourseModule, actor_id: int) -> CompletionState:
        sql = f"""
            SELECT COMPLETION_STATE
            FROM {self.TABLE_NAME}
            WHERE ACTIVITY_ID = %s AND USER_ID = %s
        """
        row = self.execute_query(sql, (course_module.id, actor_id), fetch_one=True)

        if not row or row["COMPLETION_STATE"] is None:
            return CompletionState.INCOMPLETE
        if int(row["COMPLETION_STATE"]) == CompletionState.COMPLETE:
            return CompletionState.COMPLETE
        return CompletionState.INCOMPLETE

    def set_completion_state(
        self,
        course_module: CourseModule,
        actor_id: int,
        new_state: CompletionState,
    ) -> None:
        """Upsert the completion state (MERGE by activity + user)."""
        sql = f"""
        MERGE INTO {self.TABLE_NAME} t
        USING (SELECT %s AS activity_id, %s AS user_id) s
        ON t.ACTIVITY_ID = s.activity_id AND t.USER_ID = s.user_id
        WHEN MATCHED THEN UPDATE SET
            COMPLETION_STATE = %s,
            UPDATED_AT = CURRENT_TIMESTAMP()
        WHEN NOT MATCHED THEN INSERT (
            ACTIVITY_ID, USER_ID, COMPLETION_STATE, UPDATED_AT
        ) VALUES (
            %s, %s, %s, CURRENT_TIMESTAMP()
        )
        """
        state = int(new_state)
        params = (
            course_module.id, actor_id,
            # UPDATE values
            state,
            # INSERT values
            course_module.id, actor_id, state,
        )
        self.execute_query(sql, params, commit=True)
        logger.info(
            f"Completion state of activity {course_module.id} for user {actor_id} set to {new_state.name}"
        )
