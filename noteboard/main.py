"""FastAPI application entrypoint."""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from noteboard.config import settings
from noteboard.database import init_db
from noteboard.errors import (
    CryptoIntegrityError,
    MissingVariablesError,
    NotFoundError,
    ValidationError,
)
from noteboard.routers import notes, notifications, scripts, secrets, tasks
from noteboard.utils.crypto import SecretCipher

# ── Logging setup ────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%H:%M:%S",
)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Key first: production refuses to start without one.
    app.state.cipher = SecretCipher.from_settings(settings)
    await init_db()
    logger.info("Noteboard started (%s mode)", "production" if settings.is_production else "development")

    yield


app = FastAPI(
    title="Noteboard",
    description="Notes, tasks, parameterized scripts and encrypted secrets",
    version="0.1.0",
    lifespan=lifespan,
)

if not settings.is_production:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    logger.info("%s %s %d %.0fms", request.method, request.url.path, response.status_code, duration_ms)
    return response


# ── Error handlers ───────────────────────────────────────────────────


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(ValidationError)
async def validation_handler(request: Request, exc: ValidationError):
    content: dict = {"detail": str(exc)}
    if isinstance(exc, MissingVariablesError):
        content["missing"] = exc.names
    return JSONResponse(status_code=400, content=content)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(CryptoIntegrityError)
async def crypto_integrity_handler(request: Request, exc: CryptoIntegrityError):
    logger.error("Integrity check failed on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Secret could not be decrypted"})


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Storage error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Storage error"})


# Mount routers
app.include_router(notes.router, prefix="/api/notes", tags=["notes"])
app.include_router(tasks.router, prefix="/api/tasks", tags=["tasks"])
app.include_router(scripts.router, prefix="/api/scripts", tags=["scripts"])
app.include_router(secrets.router, prefix="/api/secrets", tags=["secrets"])
app.include_router(notifications.router, prefix="/api/notifications", tags=["notifications"])


@app.get("/api/health")
async def health():
    return {
        "status": "ok",
        "service": "noteboard",
        "mode": "production" if settings.is_production else "development",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ── Built frontend (production only) ─────────────────────────────────


def _spa_file(dist: Path, path: str) -> Path:
    """The requested file inside dist, or index.html for client-side routes."""
    candidate = (dist / path.lstrip("/")).resolve()
    try:
        candidate.relative_to(dist.resolve())
    except ValueError:
        return dist / "index.html"
    return candidate if candidate.is_file() else dist / "index.html"


if settings.is_production and (settings.frontend_dist / "index.html").exists():
    logger.info("Serving frontend from %s", settings.frontend_dist)
    if (settings.frontend_dist / "assets").is_dir():
        app.mount("/assets", StaticFiles(directory=settings.frontend_dist / "assets"), name="assets")

    @app.exception_handler(StarletteHTTPException)
    async def spa_fallback(request: Request, exc: StarletteHTTPException):
        # Unmatched GETs outside /api belong to the client-side router.
        path = request.url.path
        if exc.status_code == 404 and request.method == "GET" and not path.startswith("/api"):
            return FileResponse(_spa_file(settings.frontend_dist, path))
        return await http_exception_handler(request, exc)


def run() -> None:
    import uvicorn

    uvicorn.run("noteboard.main:app", host=settings.host, port=settings.port)
