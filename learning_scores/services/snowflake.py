import snowflake.connector

from learning_scores.config import get_settings
from learning_scores.core.exceptions import DatabaseConnectionException


def get_snowflake_connection():
    """
    Snowflake connection factory.
    Used by repositories via BaseRepository.get_connection().
    """
    settings = get_settings()
    if not settings.snowflake_configured:
        raise DatabaseConnectionException("Snowflake credentials are not configured")

    return snowflake.connector.connect(
        account=settings.SNOWFLAKE_ACCOUNT,
        user=settings.SNOWFLAKE_USER,
        password=settings.SNOWFLAKE_PASSWORD.get_secret_value(),
        warehouse=settings.SNOWFLAKE_WAREHOUSE,
        database=settings.SNOWFLAKE_DATABASE,
        schema=settings.SNOWFLAKE_SCHEMA,
        role=settings.SNOWFLAKE_ROLE,
    )
