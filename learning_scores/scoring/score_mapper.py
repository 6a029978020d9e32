"""
Score Mapper
learning_scores/scoring/score_mapper.py

Linear normalization between a source range and a target range.

Formula:
    percentage = (value − min) / (max − min)
    score      = (max − min) × percentage + min
"""

import math

import structlog

from learning_scores.core.exceptions import DataConsistencyError, ValueOutOfRangeError

logger = structlog.get_logger(__name__)


def calculate_score(min_score: float, max_score: float, percentage_achieved: float) -> float:
    """
    Map an achieved percentage onto [min_score, max_score].

    No bounds validation is done here; callers pass a percentage in [0, 1].

    Examples:
        >>> calculate_score(2.0, 10.0, 0.75)
        8.0
    """
    return (max_score - min_score) * percentage_achieved + min_score


def calculate_percentage_achieved(value: float, max_value: float, min_value: float = 0) -> float:
    """
    Position of `value` inside [min_value, max_value] as a float in [0, 1].

    Raises:
        ValueOutOfRangeError: value is not finite or lies outside the range. Callers substitute
            unattempted (absent) values before calling.
        DataConsistencyError: the range is empty (max_value == min_value).
    """
    if not math.isfinite(value) or not (min_value <= value <= max_value):
        logger.error(
            "value_not_in_range",
            fault="data_consistency",
            value=value,
            min_value=min_value,
            max_value=max_value,
        )
        raise ValueOutOfRangeError(value, min_value, max_value)
    if max_value == min_value:
        logger.error(
            "empty_value_range",
            fault="data_consistency",
            value=value,
            min_value=min_value,
        )
        raise DataConsistencyError(
            f"Cannot compute a percentage over the empty range [{min_value}, {max_value}]",
            details={"min": min_value, "max": max_value},
        )
    return (value - min_value) / (max_value - min_value)
