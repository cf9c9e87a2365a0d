"""Main FastAPI application entry point"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from taskflow import __version__
from taskflow.api.auth import router as auth_router
from taskflow.api.errors import register_exception_handlers
from taskflow.api.health import router as health_router
from taskflow.api.organizations import router as organizations_router
from taskflow.api.projects import router as projects_router
from taskflow.api.tasks import router as tasks_router
from taskflow.api.users import router as users_router
from taskflow.config import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

missing = settings.missing_required()
if missing:
    logger.error("Missing required environment variables: %s", ", ".join(missing))
    # Serverless deployments still start so the error shows up in their logs
    if settings.is_development:
        raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")

app = FastAPI(
    title="Taskflow API",
    description="Multi-tenant task and project management API with role-based access control",
    version=__version__,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=3600,
)

register_exception_handlers(app)

# Include routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(organizations_router)
app.include_router(users_router)
app.include_router(projects_router)
app.include_router(tasks_router)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Taskflow API",
        "version": __version__,
        "status": "running",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("taskflow.main:app", host=settings.api_host, port=settings.api_port)
