"""
Score Item Repository - Learning Scores
learning_scores/repositories/score_item_repository.py

Read access to the per-activity scoring configuration.

Table SCORE_ITEMS:
  - ACTIVITY_ID  NUMBER  PRIMARY KEY (one score item per activity)
  - SCORE_MIN    FLOAT   NOT NULL
  - SCORE_MAX    FLOAT   NOT NULL    (SCORE_MIN <= SCORE_MAX)
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from learning_scores.core.exceptions import InvalidScoreItemError
from learning_scores.models.activity import ScoreItem
from learning_scores.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ScoreItemRepository(BaseRepository):
    """Repository for score items."""

    TABLE_NAME = "SCORE_ITEMS"

    def get_score_item(self, activity_id: int) -> Optional[ScoreItem]:
        """
        Retrieve the score item of an activity.

        Args:
            activity_id: Activity (course module) id

        Returns:
            ScoreItem or None if the activity has no score item
        """
        sql = f"""
            SELECT ACTIVITY_ID, SCORE_MIN, SCORE_MAX
            FROM {self.TABLE_NAME}
            WHERE ACTIVITY_ID = %s
        """
        row = self.execute_query(sql, (activity_id,), fetch_one=True)

        if not row:
            return None

        return self._row_to_score_item(row)

    def _row_to_score_item(self, row: Dict[str, Any]) -> ScoreItem:
        data = self.row_to_dict(row)
        try:
            return ScoreItem.model_validate(data)
        except ValidationError as e:
            logger.error(f"Invalid score item for activity {data.get('activity_id')}: {e}")
            raise InvalidScoreItemError(
                f"Score item for activity {data.get('activity_id')} is invalid",
                details={"activity_id": data.get("activity_id")},
            ) from e
