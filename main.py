"""
Bullet Summarizer API

FastAPI application wiring the summarization router, request id tracking,
the error envelope and the health check.

Run with:
    uvicorn main:app --host 0.0.0.0 --port 3001
"""
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import APP_NAME, APP_VERSION, APP_ENV, CORS_ORIGINS, CORS_ALLOW_CREDENTIALS
from core import BaseLLMClient
from logs.logging_config import (
    RequestContext,
    get_llm_logger,
    setup_llm_logging,
)
from schemas import HealthResponse
from summarization import router as summarization_router
from summarization.llm_client import close_session, get_backend_info
from summarization.config import (
    SUMMARIZATION_MIN_TEXT_LENGTH,
    SUMMARIZATION_MAX_TEXT_LENGTH,
    SUMMARIZATION_DEFAULT_LENGTH,
)
from summarization.schemas import LENGTH_PROFILES
from summarization.service import error_response, get_completion_client

logger = get_llm_logger()

_STARTED_AT = time.time()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_llm_logging()
    logger.info(f"[APP] START | name={APP_NAME} | version={APP_VERSION} | env={APP_ENV}")
    logger.info(f"[APP] Completion backend | {get_backend_info()}")
    yield
    await close_session()
    logger.info("[APP] STOP")


app = FastAPI(title="Bullet Summarizer", version=APP_VERSION, lifespan=lifespan)
app.include_router(summarization_router)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=CORS_ALLOW_CREDENTIALS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID", "X-Correlation-ID"],
    expose_headers=["X-Request-ID"],
)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request_id = (
        request.headers.get("x-request-id")
        or request.headers.get("x-correlation-id")
    )
    with RequestContext(request_id) as ctx:
        start_time = time.time()
        response = await call_next(request)
        elapsed_ms = int((time.time() - start_time) * 1000)
        response.headers["X-Request-ID"] = ctx.request_id
        logger.info(f"[HTTP] {request.method} {request.url.path} | status={response.status_code} | elapsed={elapsed_ms}ms")
        return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    logger.warning(f"[HTTP] Request validation failed | path={request.url.path} | errors={len(details)}")
    return error_response(400, "Validation failed", details=details)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        logger.warning(f"[HTTP] Route not found | method={request.method} | path={request.url.path}")
        return error_response(404, "Route not found", details={"path": request.url.path})
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"[HTTP] Unhandled error | path={request.url.path} | error={exc}")
    return error_response(500, str(exc) or "Internal server error")


@app.get("/health", response_model=HealthResponse)
async def health(client: BaseLLMClient = Depends(get_completion_client)):
    """Check connectivity to the completion service."""
    start_time = time.time()

    llm_ok = await client.check_connection()
    status = "healthy" if llm_ok else "degraded"

    body = HealthResponse(
        status=status,
        version=APP_VERSION,
        environment=APP_ENV,
        uptime=round(time.time() - _STARTED_AT, 2),
        services={"llm": "healthy" if llm_ok else "unhealthy"},
        response_time_ms=int((time.time() - start_time) * 1000),
    )
    return JSONResponse(
        status_code=200 if llm_ok else 503,
        content=body.model_dump(mode="json", by_alias=True),
    )


@app.get("/api")
async def api_info():
    """Describe the endpoints and the request limits they enforce."""
    return {
        "success": True,
        "api": {
            "name": APP_NAME,
            "version": APP_VERSION,
            "description": "Summarizes long text into bullet points and a TL;DR",
            "endpoints": {
                "health": {"method": "GET", "path": "/health", "description": "Health check and service status"},
                "summarize": {
                    "method": "POST",
                    "path": summarization_router.prefix,
                    "description": "Summarize text content",
                    "body": {
                        "text": f"string ({SUMMARIZATION_MIN_TEXT_LENGTH}-{SUMMARIZATION_MAX_TEXT_LENGTH} characters)",
                        "length": f"string ({'|'.join(LENGTH_PROFILES)}), default {SUMMARIZATION_DEFAULT_LENGTH}",
                        "requestId": "string (optional)",
                    },
                },
            },
            "limits": {
                "textLength": {
                    "min": SUMMARIZATION_MIN_TEXT_LENGTH,
                    "max": SUMMARIZATION_MAX_TEXT_LENGTH,
                },
            },
        },
    }
