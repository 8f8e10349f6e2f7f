import time
import uuid
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from keyword_finder.logger import configure_logging, get_logger
from keyword_finder.metrics import ACTIVE_REQUESTS, REQUEST_COUNT, REQUEST_DURATION
from keyword_finder.routes import router
from keyword_finder.settings import settings

configure_logging()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Find Keywords in Text API started",
        port=settings.port,
        allowed_origins=settings.allowed_origins,
    )
    yield
    logger.info("Shutting down Find Keywords in Text API")


app = FastAPI(
    title="Find Keywords in Text",
    description="Fuzzy keyword lookup in free text using Levenshtein distance",
    version=settings.version,
    lifespan=lifespan,
    debug=settings.debug,
)

app.include_router(router)


# Audit log: one entry per request, tagged with a short request id
@app.middleware("http")
async def audit_requests(request: Request, call_next):
    request_id = str(uuid.uuid4())[:8]
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)

    start_time = time.time()
    logger.info(
        "Request started",
        method=request.method,
        path=request.url.path,
        client_ip=request.client.host if request.client else None,
    )

    response = await call_next(request)

    logger.info(
        "Request completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round((time.time() - start_time) * 1000, 2),
    )
    return response


def get_endpoint_path(request: Request) -> str:
    """Route template for metrics labels; unmatched paths share one label"""
    route = request.scope.get("route")
    return getattr(route, "path", None) or "/other"


@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    """Collect Prometheus metrics for all requests"""
    if request.url.path == "/metrics":
        return await call_next(request)

    ACTIVE_REQUESTS.inc()
    method = request.method
    status_code = "500"
    start_time = time.time()

    try:
        response = await call_next(request)
        status_code = str(response.status_code)
        return response
    finally:
        # the route is only known once routing has run
        endpoint = get_endpoint_path(request)
        REQUEST_COUNT.labels(
            method=method, endpoint=endpoint, status_code=status_code
        ).inc()
        REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(
            time.time() - start_time
        )
        ACTIVE_REQUESTS.dec()


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=settings.gzip_minimum_size)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Anything the routes did not turn into a 404 ends up here"""
    logger.error(
        "Unhandled exception occurred",
        error=str(exc),
        error_type=type(exc).__name__,
        url=str(request.url),
        method=request.method,
        exc_info=True,
    )
    return JSONResponse(status_code=500, content={"success": False})


if __name__ == "__main__":
    # For development only - use gunicorn for production
    uvicorn.run(app, host=settings.host, port=settings.port)
