"""
Civic Report Hub - FastAPI Application Entry Point

Citizens submit civic-issue reports; municipal staff verify them and
resolve them, optionally issuing a fine that funds a reporter reward.

DESIGN PRINCIPLES:
- One JSON file is the source of truth, rewritten in full on every change
- No response before the change is on disk
- The server refuses to start against an unreadable store
- AI suggestions are optional and never block submission
"""

from contextlib import asynccontextmanager
from pathlib import Path
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from civic_reports.core.settings import settings
from civic_reports.config.store import initialize_store
from civic_reports.routes import ai, health, reports

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Load the report store before serving requests.
    A PersistenceError here is deliberately not caught: startup fails.
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    if settings.AI_ENABLED and not settings.GEMINI_API_KEY:
        logger.warning("⚠️ GEMINI_API_KEY not found in .env file. AI suggestions will use the rule-based fallback.")

    initialize_store()
    yield
    logger.info(f"Shutting down {settings.APP_NAME}")


# Initialize FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Civic issue reporting with a verification and resolution workflow",
    debug=settings.DEBUG,
    lifespan=lifespan,
)


# Global exception handler for anything the routes did not translate
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions and log them with full traceback."""
    logger.error(f"🔥 Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": f"Internal server error: {str(exc)}"}
    )


# Pydantic validation error handler
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log request body validation errors before returning 422."""
    logger.warning(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.errors()}
    )


origins = settings.cors_origins_list
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials="*" not in origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers
app.include_router(health.router)
app.include_router(reports.router)
app.include_router(ai.router)


@app.get("/api")
def root():
    """
    API information.
    """
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "reports": "/api/reports",
    }


def mount_frontend(app: FastAPI, static_dir: str) -> bool:
    """
    Serve a front-end bundle: real files as-is, any other GET gets index.html.
    Must run after every API router is included.
    """
    root_dir = Path(static_dir)
    index_file = root_dir / "index.html"
    if not root_dir.is_dir():
        logger.warning(f"STATIC_DIR {root_dir} does not exist, front end not served")
        return False

    app.mount("/static", StaticFiles(directory=str(root_dir)), name="static")

    @app.get("/{full_path:path}", include_in_schema=False)
    def serve_frontend(full_path: str):
        candidate = (root_dir / full_path).resolve()
        if full_path and candidate.is_file() and root_dir.resolve() in candidate.parents:
            return FileResponse(candidate)
        if index_file.is_file():
            return FileResponse(index_file)
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": "Not Found"})

    logger.info(f"Serving front end from {root_dir.resolve()}")
    return True


if settings.STATIC_DIR:
    mount_frontend(app, settings.STATIC_DIR)


def run():
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
