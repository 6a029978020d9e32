from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import Optional


class ActivityScore(BaseModel):
    """
    Score achieved by an actor for one activity.
    """

    activity_id: int = Field(..., description="Activity (course module) id")
    score: float = Field(..., description="Achieved score within the activity's [score_min, score_max]")


class ScoreResponse(BaseModel):
    """
    Model returned by single-activity score endpoints.
    """

    score: float = Field(..., description="Achieved score")


class PrimitiveCompletionRequest(BaseModel):
    """
    Request to mark a primitive (completion-based) activity.
    """

    activity_id: int = Field(..., ge=1, description="Activity (course module) id")
    is_completed: bool = Field(..., description="true: completed, false: not completed")


class GradedEventBatchRequest(BaseModel):
    """
    Raw xAPI statement batch emitted by an H5P activity.
    """

    xapi: str = Field(..., min_length=1, description="xAPI JSON payload (array of statements)")


class ErrorResponse(BaseModel):
    """
    Standard error response model.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[dict] = Field(default=None, description="Additional error details")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Error occurrence timestamp",
    )
