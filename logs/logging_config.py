"""
Logging setup for the summarizer service.

Provides:
- Rotating file handlers for requests, errors and metrics
- Request id propagation through contextvars (works across awaits)
- Structured helpers for LLM request/response/metrics logging
- Context window usage tracking
"""
import json
import logging
import time
import uuid
from contextvars import ContextVar
from dataclasses import dataclass, asdict, field
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Dict, Any

from config import (
    estimate_tokens,
    CONTEXT_WARNING_THRESHOLD,
    CONTEXT_ERROR_THRESHOLD,
)
from .config import (
    LOG_OUTPUT_DIR,
    LOG_TO_FILE,
    LOG_LEVEL,
    LOG_MAX_BYTES,
    LOG_BACKUP_COUNT,
    LOG_PREVIEW_LENGTH,
    LOG_DATE_FORMAT,
    LOG_DETAILED_FORMAT,
    LOG_SIMPLE_FORMAT,
    LOG_JSON_FORMAT,
    LOG_FILE_REQUESTS,
    LOG_FILE_ERRORS,
    LOG_FILE_METRICS,
)

LOG_DIR = Path(LOG_OUTPUT_DIR)

LLM_LOGGER_NAME = "summarizer.llm"
METRICS_LOGGER_NAME = "summarizer.metrics"

_request_id: ContextVar[str] = ContextVar("request_id", default="-")
_configured = False


# =========================
# Log Records
# =========================

@dataclass
class LLMRequestLog:
    """One outgoing completion request."""
    request_id: str
    model: str
    backend: str
    task: str
    prompt_chars: int
    prompt_preview: str
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    timestamp: float = field(default_factory=time.time)


@dataclass
class LLMResponseLog:
    """One completion response (or failure)."""
    request_id: str
    model: str
    backend: str
    status: str
    latency_ms: float
    response_chars: int
    response_preview: str
    tokens_used: Optional[int] = None
    error_message: Optional[str] = None


@dataclass
class LLMMetrics:
    """Metrics line written to the metrics log as JSON."""
    request_id: str
    model: str
    backend: str
    task: str
    latency_ms: float
    prompt_chars: int
    response_chars: int
    status: str
    tokens_used: Optional[int] = None
    context_limit: Optional[int] = None
    estimated_tokens: Optional[int] = None
    context_usage_percent: Optional[float] = None
    timestamp: float = field(default_factory=time.time)


@dataclass
class ContextUsageLog:
    """How much of the model context window a prompt uses."""
    request_id: str
    model: str
    estimated_tokens: int
    context_limit: int
    usage_percent: float
    level: str


# =========================
# Request Context
# =========================

def generate_request_id() -> str:
    return str(uuid.uuid4())


def get_request_id() -> str:
    return _request_id.get()


class RequestContext:
    """
    Context manager binding a request id to every log record emitted inside it.

    Example:
        with RequestContext(request_id):
            logger.info("[SUMMARIZE] START")
    """

    def __init__(self, request_id: Optional[str] = None):
        self.request_id = request_id or generate_request_id()
        self._token = None

    def __enter__(self) -> "RequestContext":
        self._token = _request_id.set(self.request_id)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        _request_id.reset(self._token)


class RequestIdFilter(logging.Filter):
    """Inject the current request id into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = _request_id.get()
        return True


# =========================
# Setup
# =========================

def _file_handler(filename: str, level: int, fmt: str) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        LOG_DIR / filename,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=LOG_DATE_FORMAT))
    handler.addFilter(RequestIdFilter())
    return handler


def setup_llm_logging(level: Optional[str] = None, log_to_file: Optional[bool] = None) -> None:
    """
    Configure root, LLM and metrics loggers. Safe to call more than once.

    Args:
        level: Log level name (defaults to LOG_LEVEL)
        log_to_file: Write rotating log files (defaults to LOG_TO_FILE)
    """
    global _configured
    if _configured:
        return

    log_level = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    to_file = LOG_TO_FILE if log_to_file is None else log_to_file

    root = logging.getLogger()
    root.setLevel(log_level)

    console = logging.StreamHandler()
    console.setLevel(log_level)
    console.setFormatter(logging.Formatter(LOG_SIMPLE_FORMAT, datefmt=LOG_DATE_FORMAT))
    console.addFilter(RequestIdFilter())
    root.addHandler(console)

    metrics_logger = logging.getLogger(METRICS_LOGGER_NAME)
    metrics_logger.setLevel(logging.INFO)
    metrics_logger.propagate = False

    if to_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        root.addHandler(_file_handler(LOG_FILE_REQUESTS, log_level, LOG_DETAILED_FORMAT))
        root.addHandler(_file_handler(LOG_FILE_ERRORS, logging.ERROR, LOG_DETAILED_FORMAT))
        metrics_logger.addHandler(_file_handler(LOG_FILE_METRICS, logging.INFO, LOG_JSON_FORMAT))

    _configured = True
    logging.getLogger(LLM_LOGGER_NAME).debug(
        f"[LOGGING] Configured | level={logging.getLevelName(log_level)} | to_file={to_file} | dir={LOG_DIR}"
    )


def get_llm_logger() -> logging.Logger:
    """Logger used for pipeline and LLM call events."""
    return logging.getLogger(LLM_LOGGER_NAME)


def get_metrics_logger() -> logging.Logger:
    """Logger whose records are JSON metric lines."""
    return logging.getLogger(METRICS_LOGGER_NAME)


# =========================
# Helpers
# =========================

def _preview(text: str) -> str:
    text = text or ""
    if len(text) <= LOG_PREVIEW_LENGTH:
        return text
    return text[:LOG_PREVIEW_LENGTH] + "..."


def log_llm_request(
    model: str,
    backend: str,
    task: str,
    prompt: str,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
) -> str:
    """
    Log an outgoing LLM request.

    Returns:
        A fresh id for this LLM call, used to correlate response and metrics lines.
    """
    llm_request_id = generate_request_id()
    entry = LLMRequestLog(
        request_id=llm_request_id,
        model=model,
        backend=backend,
        task=task,
        prompt_chars=len(prompt),
        prompt_preview=_preview(prompt),
        max_tokens=max_tokens,
        temperature=temperature,
    )
    get_llm_logger().info(
        f"[LLM_REQUEST] id={entry.request_id} | task={task} | model={model} | backend={backend} | "
        f"prompt_chars={entry.prompt_chars} | max_tokens={max_tokens} | temperature={temperature}"
    )
    get_llm_logger().debug(f"[LLM_REQUEST] id={entry.request_id} | preview={entry.prompt_preview!r}")
    return llm_request_id


def log_llm_response(
    request_id: str,
    model: str,
    backend: str,
    response: str,
    latency_ms: float,
    status: str,
    tokens_used: Optional[int] = None,
    error_message: Optional[str] = None,
) -> None:
    """Log the outcome of an LLM call."""
    entry = LLMResponseLog(
        request_id=request_id,
        model=model,
        backend=backend,
        status=status,
        latency_ms=round(latency_ms, 2),
        response_chars=len(response or ""),
        response_preview=_preview(response),
        tokens_used=tokens_used,
        error_message=error_message,
    )
    logger = get_llm_logger()
    if status == "success":
        logger.info(
            f"[LLM_RESPONSE] id={request_id} | SUCCESS | latency={entry.latency_ms}ms | "
            f"response_chars={entry.response_chars} | tokens={tokens_used}"
        )
        logger.debug(f"[LLM_RESPONSE] id={request_id} | preview={entry.response_preview!r}")
    else:
        logger.error(
            f"[LLM_RESPONSE] id={request_id} | {status.upper()} | latency={entry.latency_ms}ms | "
            f"error={error_message}"
        )


def log_metrics(**kwargs: Any) -> None:
    """Write one JSON metrics line. Accepts the fields of LLMMetrics."""
    metrics = LLMMetrics(**kwargs)
    get_metrics_logger().info(json.dumps(asdict(metrics), default=str))


def log_context_usage(
    request_id: str,
    model: str,
    prompt: str,
    context_limit: int,
) -> Dict[str, Any]:
    """
    Estimate how much of the model context the prompt uses and warn near the limit.

    Returns:
        dict with 'estimated_tokens', 'context_limit' and 'usage_percent'
    """
    estimated = estimate_tokens(prompt)
    usage_percent = round((estimated / context_limit) * 100, 2) if context_limit else 0.0

    if usage_percent >= CONTEXT_ERROR_THRESHOLD:
        level = "error"
    elif usage_percent >= CONTEXT_WARNING_THRESHOLD:
        level = "warning"
    else:
        level = "ok"

    entry = ContextUsageLog(
        request_id=request_id,
        model=model,
        estimated_tokens=estimated,
        context_limit=context_limit,
        usage_percent=usage_percent,
        level=level,
    )

    message = (
        f"[CONTEXT] id={request_id} | model={model} | tokens~{entry.estimated_tokens} | "
        f"limit={context_limit} | usage={usage_percent}%"
    )
    logger = get_llm_logger()
    if level == "error":
        logger.error(message)
    elif level == "warning":
        logger.warning(message)
    else:
        logger.debug(message)

    return {
        "estimated_tokens": estimated,
        "context_limit": context_limit,
        "usage_percent": usage_percent,
    }
