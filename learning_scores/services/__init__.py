"""
Services module for Learning Scores.
"""

from learning_scores.services.lrs_client import LRSClient
from learning_scores.services.snowflake import get_snowflake_connection

__all__ = [
    "LRSClient",
    "get_snowflake_connection",
]
