import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from google.auth.exceptions import GoogleAuthError
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from quickstart_todo.core.config import settings
from quickstart_todo.core.database import Database, StoreUnavailableError
from quickstart_todo.core.logging_setup import setup_logging
from quickstart_todo.routers import health, pages, tasks
from quickstart_todo.routers.pages import STATIC_DIR
from quickstart_todo.services.task_service import ensure_schema

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Project lookup and the first connect block, keep them off the event loop
    database = await run_in_threadpool(Database.from_settings, settings)
    try:
        try:
            await run_in_threadpool(ensure_schema, database.engine)
        except Exception:
            logger.exception("Could not create the tasks table")
            raise
        app.state.database = database
        logger.info("Tasks table ready")
        yield
    finally:
        database.close()


setup_logging(settings.LOG_LEVEL)

app = FastAPI(
    title="Cloud SQL To-Do API",
    version="0.1.0",
    lifespan=lifespan,
)


def _unavailable(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc)
    return JSONResponse(status_code=503, content={"detail": "Database unavailable"})


@app.exception_handler(StoreUnavailableError)
def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
    return _unavailable(request, exc)


@app.exception_handler(GoogleAuthError)
def credentials_error_handler(request: Request, exc: GoogleAuthError):
    return _unavailable(request, exc)


@app.exception_handler(SQLAlchemyError)
def database_error_handler(request: Request, exc: SQLAlchemyError):
    if isinstance(exc, (OperationalError, InterfaceError)):
        return _unavailable(request, exc)
    logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Database error"})


# Routes
app.include_router(health.router, prefix="/health")
app.include_router(tasks.router)
app.include_router(pages.router)
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8080")))
