import json
import logging

from logs.logging_config import (
    RequestContext,
    get_request_id,
    log_context_usage,
    log_metrics,
    METRICS_LOGGER_NAME,
)


def test_request_context_sets_and_restores_id():
    assert get_request_id() == "-"
    with RequestContext("abc-123") as ctx:
        assert ctx.request_id == "abc-123"
        assert get_request_id() == "abc-123"
    assert get_request_id() == "-"


def test_request_context_generates_id():
    with RequestContext() as ctx:
        assert ctx.request_id
        assert ctx.request_id != "-"


def test_context_usage_reports_percentage():
    stats = log_context_usage(request_id="r1", model="m", prompt="word " * 100, context_limit=1000)
    assert stats["context_limit"] == 1000
    assert stats["estimated_tokens"] > 0
    assert stats["usage_percent"] == round(stats["estimated_tokens"] / 1000 * 100, 2)


def test_metrics_are_json_lines(caplog):
    metrics_logger = logging.getLogger(METRICS_LOGGER_NAME)
    metrics_logger.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.INFO, logger=METRICS_LOGGER_NAME):
            log_metrics(
                request_id="r1", model="m", backend="openai", task="summarize",
                latency_ms=12.5, prompt_chars=10, response_chars=20, status="success",
            )
    finally:
        metrics_logger.removeHandler(caplog.handler)

    record = json.loads(caplog.records[-1].getMessage())
    assert record["request_id"] == "r1"
    assert record["status"] == "success"
    assert record["latency_ms"] == 12.5
