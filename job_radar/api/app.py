"""
FastAPI application factory.
"""

from contextlib import asynccontextmanager
from typing import Optional
import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from job_radar.api.routes import jobs, profile
from job_radar.core.models import utcnow
from job_radar.core.store import JobStore
from job_radar.integrations import JobAggregator
from job_radar.utils import Config


logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p not in ("body", "query"))
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": _validation_message(exc)})


async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Server error on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(
    config: Optional[Config] = None,
    store: Optional[JobStore] = None,
    aggregator: Optional[JobAggregator] = None,
) -> FastAPI:
    """
    Build the API.

    Args:
        config: Configuration (default: ~/.job_radar/config.json)
        store: Job store to serve; created from config at startup if omitted
        aggregator: Aggregator used by refresh; built from config if omitted

    Returns:
        FastAPI application
    """
    load_dotenv()
    config = config or Config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.store is None:
            app.state.store = JobStore(config.get_db_path(), config.get_retention_cap())
        yield

    app = FastAPI(title="Job Radar", version="1.0.0", lifespan=lifespan)
    app.state.config = config
    app.state.store = store
    app.state.aggregator = aggregator or JobAggregator.from_config(config)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(jobs.router)
    app.include_router(profile.router)

    @app.get("/health")
    def health():
        return {"status": "ok", "timestamp": utcnow().isoformat()}

    return app
