"""
FastAPI router for bullet summarization.

Pipeline Architecture:
Text → Cleaning → Deduplication → Validation → Chunking → Summarization
"""
from typing import Any, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from config import APP_ENV
from core import BaseLLMClient, SummarizerError, TextValidationError
from logs.logging_config import RequestContext, get_llm_logger, get_request_id
from schemas import ErrorBody, ErrorResponse
from .llm_client import get_client
from .schemas import SummarizationResponse, TextSummarizationRequest
from .summarizer import Summarizer, SummarizerConfig, summarize_text

logger = get_llm_logger()

# Built once at startup and shared read-only by every request
SUMMARIZER_CONFIG = SummarizerConfig()

router = APIRouter(prefix="/api/v1/summarize", tags=["Summarization"])


def error_response(status: int, message: str, details: Optional[Any] = None) -> JSONResponse:
    """Build the failure envelope. Internal details are hidden in production."""
    if APP_ENV == "production" and status == 500:
        message = "Internal server error"
        details = None

    body = ErrorResponse(
        error=ErrorBody(
            message=message,
            status=status,
            request_id=get_request_id(),
            details=details,
        )
    )
    return JSONResponse(
        status_code=status,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


# =====================
# Dependencies
# =====================

def get_completion_client() -> BaseLLMClient:
    return get_client()


def get_summarizer(client: BaseLLMClient = Depends(get_completion_client)) -> Summarizer:
    return Summarizer(client, SUMMARIZER_CONFIG)


# =====================
# API Endpoints
# =====================

@router.post(
    "",
    response_model=SummarizationResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        408: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def summarize_endpoint(
    request: TextSummarizationRequest,
    summarizer: Summarizer = Depends(get_summarizer),
):
    """
    Summarize text into 3-7 bullet points and a short TL;DR.

    **Request Body:**
    - `text`: Text to summarize (50-15000 characters)
    - `length`: short, medium or long (default: "medium")
    - `request_id`: Optional correlation id (default: the X-Request-ID header)

    **Returns:**
    - `data.bullets`: Key points
    - `data.tldr`: Short synthesis
    - `data.meta`: tokensUsed, model, length, processingTime (ms),
      originalLength, cleanedLength, chunksProcessed, fallback
    """
    with RequestContext(request.request_id or get_request_id()) as ctx:
        request_id = ctx.request_id
        logger.info(f"[SUMMARIZE_TEXT] START | request_id={request_id} | chars={len(request.text)} | length={request.length}")

        try:
            result = await summarize_text(request.text, request.length, summarizer)

        except TextValidationError as e:
            logger.warning(f"[SUMMARIZE_TEXT] REJECTED | request_id={request_id} | errors={e.errors}")
            return error_response(e.status_code, e.message, details=e.errors)

        except SummarizerError as e:
            logger.error(
                f"[SUMMARIZE_TEXT] ERROR | request_id={request_id} | "
                f"type={type(e).__name__} | status={e.status_code} | error={e.message}"
            )
            return error_response(e.status_code, e.message)

        logger.info(
            f"[SUMMARIZE_TEXT] END | request_id={request_id} | chunks={result.chunks_processed} | "
            f"bullets={len(result.bullets)} | fallback={result.fallback} | elapsed={result.processing_time_ms}ms"
        )
        return SummarizationResponse.from_result(result)
