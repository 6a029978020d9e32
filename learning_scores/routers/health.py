"""
Health Check Router - Learning Scores
learning_scores/routers/health.py

Reports configuration status of the external collaborators.
"""
from fastapi import APIRouter
from pydantic import BaseModel
from typing import Dict
from datetime import datetime, timezone

from learning_scores.config import get_settings

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    dependencies: Dict[str, str]


@router.get("/health", response_model=HealthResponse, summary="Service health")
def health() -> HealthResponse:
    settings = get_settings()
    dependencies = {
        "snowflake": "configured" if settings.snowflake_configured else "not_configured",
        "lrs": "configured" if settings.lrs_configured else "not_configured",
    }
    overall = "healthy" if all(v == "configured" for v in dependencies.values()) else "degraded"
    return HealthResponse(
        status=overall,
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        dependencies=dependencies,
    )
