import logging
import subprocess
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from punch.api.projects import router as projects_router
from punch.core.config import settings
from punch.core.errors import StorageUnavailable

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run Alembic migrations on startup."""
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        logger.info("Running Alembic migrations...")
        try:
            result = subprocess.run(
                ["alembic", "upgrade", "head"],
                capture_output=True,
                text=True,
                cwd=_BACKEND_DIR,
            )
            if result.returncode != 0:
                logger.error("Alembic migration failed:\n%s", result.stderr)
            else:
                logger.info("Migrations applied successfully:\n%s", result.stdout)
        except OSError as exc:
            logger.exception("Failed to run migrations: %s", exc)

    yield

    logger.info("Shutting down Punch backend.")


app = FastAPI(
    title="Punch API",
    description="Punch in, punch out, and report on time usage.",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(projects_router, prefix="/api/projects", tags=["Projects"])


@app.exception_handler(StorageUnavailable)
async def storage_unavailable_handler(_request: Request, exc: StorageUnavailable) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Storage unavailable"},
    )


@app.get("/health", tags=["System"])
async def health_check() -> dict:
    return {"status": "ok"}
