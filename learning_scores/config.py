"""Application configuration with validation."""
from typing import Optional, Literal
from functools import lru_cache
from pydantic import Field, field_validator, model_validator, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from the environment / .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Learning Scores"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"

    # Snowflake (score items, course modules, completion, grades, contexts, enrolments)
    SNOWFLAKE_ACCOUNT: Optional[str] = None
    SNOWFLAKE_USER: Optional[str] = None
    SNOWFLAKE_PASSWORD: Optional[SecretStr] = None
    SNOWFLAKE_DATABASE: Optional[str] = None
    SNOWFLAKE_SCHEMA: Optional[str] = None
    SNOWFLAKE_WAREHOUSE: Optional[str] = None
    SNOWFLAKE_ROLE: Optional[str] = None

    # Learning Record Store (xAPI event ingestion)
    LRS_URL: Optional[str] = None
    LRS_AUTH: Optional[SecretStr] = None
    LRS_TIMEOUT_SECONDS: float = Field(default=10.0, gt=0, le=60)
    XAPI_VERSION: str = "1.0.3"
    XAPI_COMPONENT: str = Field(
        default="h5pactivity",
        description="Component the forwarded xAPI statements are attributed to",
    )

    # Context level of an activity module in the context table
    MODULE_CONTEXT_LEVEL: int = Field(default=70, ge=1)

    @field_validator("LRS_URL")
    @classmethod
    def validate_lrs_url(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not (v.startswith("http://") or v.startswith("https://")):
            raise ValueError(f"Invalid URL format for LRS_URL: {v}")
        return v.rstrip("/") if v else v

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production has the collaborators it needs."""
        if self.APP_ENV == "production":
            if self.DEBUG:
                raise ValueError("DEBUG must be False in production")
            if not self.LRS_URL:
                raise ValueError("LRS_URL is required in production")
            if not self.SNOWFLAKE_ACCOUNT:
                raise ValueError("SNOWFLAKE_ACCOUNT is required in production")
        return self

    @property
    def lrs_configured(self) -> bool:
        return bool(self.LRS_URL)

    @property
    def snowflake_configured(self) -> bool:
        return all([self.SNOWFLAKE_ACCOUNT, self.SNOWFLAKE_USER, self.SNOWFLAKE_PASSWORD])


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
