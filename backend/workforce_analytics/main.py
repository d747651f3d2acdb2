import logging
import subprocess
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from workforce_analytics.api.analytics import router as analytics_router
from workforce_analytics.core.config import settings
from workforce_analytics.db.session import engine

logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parent.parent


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Optionally run Alembic migrations on startup; dispose the engine on shutdown."""
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

    await engine.dispose()
    logger.info("Shutting down workforce analytics backend.")


app = FastAPI(
    title="Workforce Analytics API",
    description="Attendance, overtime and leave statistics for an admin-selected range and cohort.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(analytics_router, prefix="/api/analytics", tags=["Analytics"])


@app.get("/health", tags=["System"])
async def health_check() -> dict:
    return {"status": "ok"}
