from pydantic import BaseModel, Field, model_validator
from typing import Annotated, Literal, Optional, Union

from learning_scores.models.enumerations import CompletionState


class CourseModule(BaseModel):
    """
    An activity placed in a course.

    `modname` decides how achievement is measured; `course_id` is the course
    the actor must be enrolled in.
    """

    id: int = Field(..., ge=1, description="Activity (course module) id")
    course_id: int = Field(..., ge=1, description="Owning course")
    instance_id: int = Field(..., ge=0, description="Id of the module instance (e.g. the h5pactivity row)")
    modname: str = Field(..., min_length=1, description="Module type name, e.g. 'h5pactivity' or 'url'")


class ScoreItem(BaseModel):
    """
    Scoring configuration for one activity.
    """

    activity_id: int = Field(..., ge=1)
    score_min: float = Field(..., allow_inf_nan=False, description="Score for 0% achievement")
    score_max: float = Field(..., allow_inf_nan=False, description="Score for 100% achievement")

    @model_validator(mode="after")
    def validate_score_range(self):
        """Ensure score_max >= score_min."""
        if self.score_max < self.score_min:
            raise ValueError("score_max must be >= score_min")
        return self


class GradeRecord(BaseModel):
    """One gradebook item with the actor's grade (None when not attempted)."""

    grade: Optional[float] = None
    grade_min: float = 0.0
    grade_max: float = 100.0


# =============================================================================
# ACHIEVEMENT SIGNALS (tagged by `kind`)
# =============================================================================

class CompletionSignal(BaseModel):
    kind: Literal["completion"] = "completion"
    state: CompletionState


class GradedSignal(BaseModel):
    kind: Literal["graded"] = "graded"
    grade: Optional[float] = None
    grade_min: float
    grade_max: float

    @classmethod
    def from_record(cls, record: GradeRecord) -> "GradedSignal":
        return cls(grade=record.grade, grade_min=record.grade_min, grade_max=record.grade_max)


AchievementSignal = Annotated[
    Union[CompletionSignal, GradedSignal],
    Field(discriminator="kind"),
]
