"""
Context Repository - Learning Scores
learning_scores/repositories/context_repository.py

Resolves module contexts to activity ids.
"""

from typing import Optional

from learning_scores.config import get_settings
from learning_scores.core.exceptions import EntityNotFoundException
from learning_scores.repositories.base import BaseRepository


class ContextRepository(BaseRepository):
    """Repository for context lookups."""

    TABLE_NAME = "CONTEXTS"

    def __init__(self, module_context_level: Optional[int] = None):
        self.module_context_level = module_context_level or get_settings().MODULE_CONTEXT_LEVEL

    def resolve_context(self, context_id: int) -> int:
        """
        Activity id of a module context.

        Raises:
            EntityNotFoundException: no module context with that id
        """
        sql = f"""
            SELECT INSTANCE_ID
            FROM {self.TABLE_NAME}
            WHERE ID = %s AND CONTEXT_LEVEL = %s
        """
        row = self.execute_query(sql, (context_id, self.module_context_level), fetch_one=True)

        if not row:
            raise EntityNotFoundException("Context", str(context_id))

        return int(row["INSTANCE_ID"])
