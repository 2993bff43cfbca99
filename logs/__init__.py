"""
Logs Module

Provides:
- Logging configuration for the summarizer service and its LLM calls
- Request/Response logging with metrics
- Request id tracking across async calls
"""

from .logging_config import (
    setup_llm_logging,
    get_llm_logger,
    get_metrics_logger,
    log_llm_request,
    log_llm_response,
    log_metrics,
    log_context_usage,
    RequestContext,
    RequestIdFilter,
    get_request_id,
    generate_request_id,
    LOG_DIR,
    ContextUsageLog,
    LLMRequestLog,
    LLMResponseLog,
    LLMMetrics
)

__all__ = [
    "setup_llm_logging",
    "get_llm_logger",
    "get_metrics_logger",
    "log_llm_request",
    "log_llm_response",
    "log_metrics",
    "log_context_usage",
    "RequestContext",
    "RequestIdFilter",
    "get_request_id",
    "generate_request_id",
    "LOG_DIR",
    "ContextUsageLog",
    "LLMRequestLog",
    "LLMResponseLog",
    "LLMMetrics"
]
