import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lunch_menu import scheduler
from lunch_menu.api.routes import router
from lunch_menu.cache import db as cache_db
from lunch_menu.core.config import settings
from lunch_menu.core.errors import AppError, ValidationError
from lunch_menu.core.logs import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Initialize resources on startup, cleanup on shutdown.
    """
    # Startup
    setup_logging()
    logger.info("Initializing Lunch Menu Summarizer...")
    cache_db.menu_cache.init()
    if settings.SCHEDULER_ENABLED:
        scheduler.start_scheduler()

    yield

    # Shutdown
    logger.info("Shutting down Lunch Menu Summarizer...")
    scheduler.stop_scheduler()
    cache_db.menu_cache.close()


app = FastAPI(
    title="Lunch Menu Summarizer",
    description="API for extracting daily lunch menus from Czech restaurant pages",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.to_dict()})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(part) for part in err["loc"] if part != "body"), "message": err["msg"]}
        for err in exc.errors()
    ]
    error = ValidationError(errors=errors)
    logger.warning(f"{request.method} {request.url.path} rejected: {error}")
    return JSONResponse(status_code=error.status_code, content={"error": error.to_dict()})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    error = AppError("Internal server error")
    return JSONResponse(status_code=error.status_code, content={"error": error.to_dict()})


# Include API routes
app.include_router(router)


@app.get("/")
async def root():
    """Root endpoint with basic info"""
    return {
        "service": "Lunch Menu Summarizer",
        "version": "1.0.0",
        "endpoints": {
            "summarize": "POST /summarize",
            "health": "GET /health",
            "cache_stats": "GET /cache/stats",
            "cache_clear": "DELETE /cache/clear",
        },
    }
