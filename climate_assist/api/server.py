from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..domain.errors import ClimateAssistError, PersistenceError
from ..infra.config import get_config
from ..infra.llm import get_model_client
from ..observability.logging_utils import (
    init_logging,
    log_event,
    log_warning,
    record_exception,
    trace_scope,
)
from . import advisor_routes, record_routes


_PROJECT_ROOT = Path(__file__).resolve().parents[2]
TRACE_HEADER = "X-Request-ID"


def _error_log_path() -> str:
    cfg = get_config()
    return cfg.error_log_path or str(_PROJECT_ROOT / "api_errors.log")


@asynccontextmanager
async def lifespan(_: FastAPI):
    cfg = get_config()
    init_logging(log_path=cfg.log_path)
    client = get_model_client()
    log_event(
        "server.start",
        llm=client.name,
        persistence=cfg.persistence_backend,
        error_log=_error_log_path(),
    )
    yield


def create_app() -> FastAPI:
    cfg = get_config()
    app = FastAPI(title="Climate Assist", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origin_list(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def _bind_trace_id(request: Request, call_next):
        with trace_scope(request.headers.get(TRACE_HEADER)) as trace_id:
            response = await call_next(request)
            response.headers[TRACE_HEADER] = trace_id
            return response

    @app.exception_handler(ClimateAssistError)
    async def _domain_error_handler(request: Request, exc: ClimateAssistError):
        if isinstance(exc, PersistenceError):
            log_warning(
                "request.persistence_error",
                path=request.url.path,
                error=exc.message,
                detail=exc.detail,
            )
        elif exc.status_code >= 500:
            log_warning("request.failed", path=request.url.path, error=exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def _request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        location = ".".join(str(part) for part in errors[0].get("loc", ())) if errors else ""
        log_event("request.invalid", path=request.url.path, location=location)
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        record_exception(exc, error_log_path=_error_log_path(), path=request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.get("/health")
    async def health():
        return {
            "status": "ok",
            "llm": cfg.llm_provider,
            "persistence": cfg.persistence_backend,
        }

    app.include_router(advisor_routes.router)
    app.include_router(record_routes.router)
    return app


app = create_app()
