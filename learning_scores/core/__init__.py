"""
Core Package - Learning Scores
learning_scores/core/__init__.py

Core infrastructure: dependencies, exceptions, collaborator interfaces.
Dependencies are imported from learning_scores.core.dependencies directly.
"""

from learning_scores.core.exceptions import (
    ActorNotAuthorizedError,
    DataConsistencyError,
    EntityNotFoundException,
    InputValidationError,
    RepositoryException,
    ScoreConfigurationError,
    ScoringAfterCommitError,
    ScoringException,
)

__all__ = [
    "ActorNotAuthorizedError",
    "DataConsistencyError",
    "EntityNotFoundException",
    "InputValidationError",
    "RepositoryException",
    "ScoreConfigurationError",
    "ScoringAfterCommitError",
    "ScoringException",
]
