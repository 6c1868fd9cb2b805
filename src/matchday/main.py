"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from matchday.config import settings
from matchday.api.routes.standings import router as standings_router
from matchday.repositories.game_day_repository import GameDayRepository

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def get_database_path() -> Path:
    """Get the database path from settings, resolving relative paths from the repo root."""
    db_path = Path(settings.database_path)
    if db_path.is_absolute():
        return db_path
    repo_root = Path(__file__).parent.parent.parent
    return repo_root / db_path


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Tests may install their own repository before startup
    if not hasattr(app.state, "repository"):
        app.state.repository = GameDayRepository(get_database_path())
    yield


app = FastAPI(
    title="Matchday",
    description="Game day standings and player leaderboards",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "matchday"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Matchday API",
        "version": "0.1.0",
        "docs": "/docs",
    }


app.include_router(standings_router)
