"""
Scores Router - Learning Scores
learning_scores/routers/scores.py

Endpoints:
  GET  /api/v1/scores/{activity_id}   - score of one activity (calling actor or ?actor_id=)
  POST /api/v1/scores/primitive       - set completion of a primitive activity, return its score
  POST /api/v1/scores/h5p             - forward an xAPI batch, return scores of referenced activities

Register in main.py:
    from learning_scores.routers.scores import router as scores_router
    app.include_router(scores_router)
"""

from datetime import datetime, timezone
from typing import List, Optional

import structlog
from fastapi import APIRouter, Depends, Path, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from learning_scores.config import get_settings
from learning_scores.core.dependencies import get_current_actor_id, get_scoring_service
from learning_scores.core.exceptions import (
    ActorNotAuthorizedError,
    DataConsistencyError,
    EntityNotFoundException,
    EventIngestionError,
    InputValidationError,
    RepositoryException,
    ScoreConfigurationError,
    ScoringAfterCommitError,
    ScoringException,
)
from learning_scores.models.score import (
    ActivityScore,
    ErrorResponse,
    GradedEventBatchRequest,
    PrimitiveCompletionRequest,
    ScoreResponse,
)
from learning_scores.services.scoring_service import ScoringService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix=f"{get_settings().API_V1_PREFIX}/scores", tags=["Scores"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


# =====================================================================
# Exception handlers (registered in main.py)
# =====================================================================

def _status_for(exc: ScoringException) -> int:
    if isinstance(exc, ActorNotAuthorizedError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, InputValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, ScoreConfigurationError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, EventIngestionError):
        return status.HTTP_502_BAD_GATEWAY
    # DataConsistencyError, ScoringAfterCommitError
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_body(error_code: str, message: str, details: Optional[dict] = None) -> dict:
    return {
        "error_code": error_code,
        "message": message,
        "details": details,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def scoring_exception_handler(request: Request, exc: ScoringException):
    status_code = _status_for(exc)
    if isinstance(exc, (DataConsistencyError, ScoringAfterCommitError)):
        logger.error("scoring_fault", path=request.url.path, error_code=exc.error_code, error=exc.message)
    else:
        logger.warning("scoring_rejected", path=request.url.path, error_code=exc.error_code, error=exc.message)
    return JSONResponse(
        status_code=status_code,
        content=_error_body(exc.error_code, exc.message, exc.details),
    )


async def repository_exception_handler(request: Request, exc: RepositoryException):
    if isinstance(exc, EntityNotFoundException):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=_error_body(
                f"{exc.entity_type.upper()}_NOT_FOUND",
                str(exc),
                {"entity_type": exc.entity_type, "entity_id": exc.entity_id},
            ),
        )
    logger.error("repository_error", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=_error_body("REPOSITORY_UNAVAILABLE", str(exc)),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors and "json_invalid" in errors[0].get("type", ""):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body("INVALID_REQUEST", "Malformed JSON request body"),
        )
    details = None
    message = "Request validation failed"
    if errors:
        err = errors[0]
        field = ".".join(str(part) for part in err.get("loc", []) if part != "body")
        message = f"Invalid value for field '{field}'"
        details = {"field": field, "type": err.get("type", "")}
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body("VALIDATION_ERROR", message, details),
    )


# =====================================================================
# Endpoints
# =====================================================================

@router.get(
    "/{activity_id}",
    response_model=ScoreResponse,
    responses=_ERROR_RESPONSES,
    summary="Get the achieved score of one activity",
)
def get_score(
    activity_id: int = Path(..., ge=1, description="Activity (course module) id"),
    actor_id: Optional[int] = Query(default=None, ge=1, description="User to score, defaults to the caller"),
    current_actor_id: int = Depends(get_current_actor_id),
    service: ScoringService = Depends(get_scoring_service),
) -> ScoreResponse:
    score = service.get_score(activity_id, actor_id or current_actor_id)
    return ScoreResponse(score=score)


@router.post(
    "/primitive",
    response_model=ScoreResponse,
    responses=_ERROR_RESPONSES,
    summary="Set completion of a primitive activity and return its score",
)
def score_primitive_learning_element(
    body: PrimitiveCompletionRequest,
    current_actor_id: int = Depends(get_current_actor_id),
    service: ScoringService = Depends(get_scoring_service),
) -> ScoreResponse:
    score = service.set_primitive_completion_and_score(
        body.activity_id,
        body.is_completed,
        current_actor_id,
    )
    return ScoreResponse(score=score)


@router.post(
    "/h5p",
    response_model=List[ActivityScore],
    responses={**_ERROR_RESPONSES, 502: {"model": ErrorResponse}},
    summary="Process an xAPI batch and return scores of the referenced activities",
)
def score_h5p_learning_element(
    body: GradedEventBatchRequest,
    current_actor_id: int = Depends(get_current_actor_id),
    service: ScoringService = Depends(get_scoring_service),
) -> List[ActivityScore]:
    return service.process_graded_event_batch(body.xapi, current_actor_id)
