"""TrinityOS API - FastAPI application entry point."""
import logging
import sqlite3
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_settings
from .database import db_manager
from .routes import sleep, exercise, wellness, diet, nutrition, profile, score, womens_health

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    db_manager.init_schema()
    yield


app = FastAPI(
    title="TrinityOS API",
    description="Wellness tracking and Trinity Score across health, wealth and relations",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS for the mobile web client
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(sqlite3.Error)
async def storage_error_handler(request: Request, exc: sqlite3.Error):
    """Store failures are retryable from the client's point of view."""
    log.error(f"[DB] {request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=503, content={"detail": "Storage unavailable, please try again"})


# Include routers
app.include_router(score.router)
app.include_router(sleep.router)
app.include_router(exercise.router)
app.include_router(wellness.router)
app.include_router(diet.router)
app.include_router(profile.router)
app.include_router(womens_health.router)
app.include_router(nutrition.router)


@app.get("/health")
async def health_check():
    """Health check endpoint for the API."""
    return {"status": "healthy", "service": "trinity-api"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "server.trinity_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
