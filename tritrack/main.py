from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from tritrack.api.analytics import router as analytics_router
from tritrack.api.calendar import router as calendar_router
from tritrack.api.dashboard import router as dashboard_router
from tritrack.api.profile import router as profile_router
from tritrack.api.races import router as races_router
from tritrack.api.workouts import router as workouts_router
from tritrack.config.settings import settings
from tritrack.core.errors import NotFoundError, WriteError
from tritrack.core.logger import setup_logger
from tritrack.db.session import init_db

setup_logger(level=settings.log_level, log_file=settings.log_file)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Create missing tables before serving requests."""
    init_db()
    yield
    logger.info("TriTrack shutting down")


app = FastAPI(title="TriTrack", lifespan=lifespan)

app.include_router(dashboard_router)
app.include_router(calendar_router)
app.include_router(analytics_router)
app.include_router(workouts_router)
app.include_router(races_router)
app.include_router(profile_router)

logger.info("FastAPI application initialized")


@app.exception_handler(WriteError)
async def write_error_handler(_request: Request, exc: WriteError):
    """Surface the backend's message so the user can fix the form and retry."""
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
async def not_found_handler(_request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests, tagged with the caller's user ID."""
    user_id = request.headers.get("x-user-id") or settings.dev_user_id or "-"
    with logger.contextualize(user_id=user_id):
        logger.debug(f"Request: {request.method} {request.url.path}")
        response = await call_next(request)
        logger.debug(f"Response: {response.status_code} for {request.method} {request.url.path}")
    return response


@app.get("/health")
def health():
    return {"status": "ok"}
