from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

load_dotenv()

from learning_scores.config import get_settings
from learning_scores.core.exceptions import RepositoryException, ScoringException
from learning_scores.core.logging_config import configure_logging

# IMPORT ROUTERS
from learning_scores.routers.health import router as health_router
from learning_scores.routers.scores import (
    repository_exception_handler,
    router as scores_router,
    scoring_exception_handler,
    validation_exception_handler,
)

settings = get_settings()
configure_logging(settings)


# SWAGGER UI - tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Scores"},
]

# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title=f"{settings.APP_NAME} API",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
)

# REGISTER EXCEPTION HANDLERS
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(ScoringException, scoring_exception_handler)
app.add_exception_handler(RepositoryException, repository_exception_handler)

# REGISTER ROUTERS
app.include_router(health_router)   # Health
app.include_router(scores_router)   # Scores


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    return {
        "service": f"{settings.APP_NAME} API",
        "version": settings.APP_VERSION,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "status": "running"
    }


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "learning_scores.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
