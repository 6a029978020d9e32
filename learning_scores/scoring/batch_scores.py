"""
Batch score aggregation.

Every activity id is looked up and a resolver is built for each before any
score is computed; the first failure aborts the whole batch. No partial
result is ever returned.
"""

from typing import Dict, Iterable, List

import structlog

from learning_scores.core.exceptions import EntityNotFoundException
from learning_scores.core.interfaces import ScoringCollaborators
from learning_scores.scoring.activity_score import ActivityScoreResolver

logger = structlog.get_logger(__name__)


def build_resolvers(
    activity_ids: Iterable[int],
    actor_id: int,
    collaborators: ScoringCollaborators,
) -> List[ActivityScoreResolver]:
    """One resolver per activity id; an unknown id raises EntityNotFoundException."""
    resolvers = []
    for activity_id in activity_ids:
        course_module = collaborators.activities.get_course_module(activity_id)
        if course_module is None:
            raise EntityNotFoundException("Activity", str(activity_id))
        resolvers.append(ActivityScoreResolver(course_module, actor_id, collaborators))
    return resolvers


def get_achieved_scores(
    activity_ids: Iterable[int],
    actor_id: int,
    collaborators: ScoringCollaborators,
) -> Dict[int, float]:
    """
    Achieved score for every given activity id.

    Returns:
        Mapping activity_id → score, in the order of `activity_ids`.
    """
    resolvers = build_resolvers(activity_ids, actor_id, collaborators)
    achieved_scores: Dict[int, float] = {}
    for resolver in resolvers:
        achieved_scores[resolver.activity_id] = resolver.get_score()

    logger.info("batch_scores_resolved", actor_id=actor_id, activities=len(achieved_scores))
    return achieved_scores


resolve_many = get_achieved_scores
