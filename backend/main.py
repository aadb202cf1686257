"""
BotLedger FastAPI Application

Main entry point for the bot ledger server.
Configures FastAPI with CORS, routes, error handlers and the state store.
"""

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from app.config import get_settings
from app.core.exceptions import ServiceError, StartupError
from app.core.state_store import StateStore
from app.api.routes import bots, config, health, users

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    Handles:
    - Loading bot and user documents on startup (fatal if they cannot be created)
    - Cleanup on shutdown
    """
    # Startup
    print(f"Starting {settings.APP_NAME} v{settings.VERSION}")
    store = StateStore()
    try:
        await store.load()
    except StartupError:
        logger.critical(f"Refusing to serve: data directory {settings.storage.DATA_DIR} is unusable")
        raise
    app.state.store = store
    print(f"Backend running on {settings.server.HOST}:{settings.server.PORT}")

    yield

    # Shutdown
    print("Shutting down server...")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description="Private bot records and point balance kept in flat files",
    lifespan=lifespan,
    debug=settings.DEBUG,
)

# Configure CORS (any origin may call the API)
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.server.CORS_ORIGINS),
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    logger.info(f"Rejected malformed request to {request.url.path}: {detail}")
    return JSONResponse(status_code=400, content={"error": f"Invalid request body: {detail}"})


# Include routers
app.include_router(health.router, tags=["health"])
app.include_router(bots.router)
app.include_router(users.router)
app.include_router(config.router)


@app.get("/")
async def root() -> dict:
    """
    Root endpoint.

    Returns:
        dict: Welcome message and API information.
    """
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.VERSION,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    uvicorn.run(app, host=settings.server.HOST, port=settings.server.PORT)
