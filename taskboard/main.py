"""FastAPI application for the task board backend."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskboard.config import Settings, load_cors_origins, load_settings
from taskboard.database import build_engine, create_db_and_tables
from taskboard.errors import ApiError, InternalError, ValidationError
from taskboard.routes.statuses import router as statuses_router
from taskboard.routes.tasks import router as tasks_router
from taskboard.routes.users import router as users_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the store engine and schema on startup; dispose it on shutdown.

    Fails startup with ``ConfigError`` when ``DATABASE_URL`` is unset. An
    engine already placed on ``app.state`` is used as-is.
    """
    engine = getattr(app.state, "engine", None)
    owns_engine = engine is None
    if owns_engine:
        settings = getattr(app.state, "settings", None) or load_settings()
        engine = build_engine(settings)
        app.state.engine = engine
    create_db_and_tables(engine)
    yield
    if owns_engine:
        engine.dispose()
        app.state.engine = None


def _describe_validation_errors(errors) -> str:
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def _error_response(exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Assemble the API: routers, CORS, liveness and error mapping."""
    app = FastAPI(title="Task Board", lifespan=lifespan)
    app.state.settings = settings

    # Registered before CORS so the 500 response still carries CORS headers.
    @app.middleware("http")
    async def unhandled_error_middleware(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return _error_response(InternalError())

    origins = settings.cors_origins if settings else load_cors_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type"],
    )

    app.include_router(tasks_router)
    app.include_router(users_router)
    app.include_router(statuses_router)

    @app.get("/health")
    def health_check():
        """Liveness probe; performs no dependency checks."""
        return {"ok": True}

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.warning(
                "%s %s rejected (%d): %s",
                request.method, request.url.path, exc.status_code, exc.message,
            )
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        error = ValidationError(_describe_validation_errors(exc.errors()))
        logger.warning("%s %s rejected (400): %s", request.method, request.url.path, error.message)
        return _error_response(error)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.state.settings = settings
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
