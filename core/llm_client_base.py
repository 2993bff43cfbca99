"""
Base LLM Client

Completion client shared by the summarization pipeline.

Features:
- Supports OpenAI-compatible chat completion APIs (vLLM, Cerebras, ...) and Ollama
- Connection pooling per instance
- Request/response/metrics logging
- Upstream failures mapped to typed CompletionError subclasses

Usage:
    config = LLMConfig(
        backend="openai",
        base_url="https://api.cerebras.ai",
        api_key="...",
        model="llama-3.3-70b",
        task_name="summarize"
    )

    client = BaseLLMClient(config)
    result = await client.complete(prompt)
"""

import time
import asyncio
import aiohttp
from dataclasses import dataclass
from typing import Optional, Dict, Any, List, Protocol

from config import get_model_context_length
from logs.logging_config import (
    get_llm_logger,
    log_llm_request,
    log_llm_response,
    log_metrics,
    log_context_usage,
)
from .exceptions import (
    CompletionError,
    AuthenticationError,
    RateLimitedError,
    BadRequestError,
    CompletionTimeoutError,
    ServiceUnavailableError,
    NetworkError,
)

logger = get_llm_logger()


@dataclass(frozen=True)
class Prompt:
    """One completion request: chat messages plus sampling parameters."""
    system_message: str
    user_message: str
    temperature: float
    top_p: float
    max_tokens: int
    frequency_penalty: float
    presence_penalty: float

    def to_messages(self) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": self.system_message},
            {"role": "user", "content": self.user_message},
        ]


@dataclass(frozen=True)
class CompletionResult:
    """Raw model output with usage metadata."""
    content: str
    usage_tokens: Optional[int]
    model: str


class CompletionClient(Protocol):
    """Anything that can execute one completion call."""

    async def complete(self, prompt: Prompt) -> CompletionResult:
        ...


@dataclass
class LLMConfig:
    """
    Configuration for an LLM client instance.

    Example:
        config = LLMConfig(
            backend="ollama",
            base_url="http://localhost:11434",
            model="gemma3:4b",
            task_name="summarize"
        )
    """
    # Backend selection: "openai" or "ollama"
    backend: str = "openai"
    base_url: str = "https://api.cerebras.ai"
    api_key: str = ""

    model: str = "llama-3.3-70b"

    # Connection settings
    timeout: int = 30
    pool_limit: int = 50

    # Logging identifier
    task_name: str = "unknown"

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary (API key redacted)."""
        return {
            "backend": self.backend,
            "base_url": self.base_url,
            "api_key_set": bool(self.api_key),
            "model": self.model,
            "timeout": self.timeout,
            "pool_limit": self.pool_limit,
            "task_name": self.task_name,
        }


def _error_for_status(status: int, detail: str) -> CompletionError:
    """Map an upstream HTTP status to the matching CompletionError."""
    if status in (401, 403):
        return AuthenticationError("Invalid API key or authentication failed", upstream_status=status)
    if status == 429:
        return RateLimitedError("Rate limit exceeded. Please try again later.", upstream_status=status)
    if 400 <= status < 500:
        return BadRequestError(f"Invalid request: {detail or 'Bad request'}", upstream_status=status)
    if status >= 500:
        return ServiceUnavailableError(
            "Completion service is currently unavailable. Please try again later.",
            upstream_status=status
        )
    return CompletionError(f"API error: {detail or 'Unknown error'}", upstream_status=status)


class BaseLLMClient:
    """
    LLM client with shared logic for OpenAI-compatible and Ollama backends.

    Each instance owns its aiohttp session, so the service can run
    independent clients with their own connection pools.

    Example:
        client = BaseLLMClient(LLMConfig(backend="ollama", model="gemma3:4b"))
        result = await client.complete(prompt)
        print(result.content, result.usage_tokens)
    """

    def __init__(self, config: LLMConfig):
        self.config = config
        self._session: Optional[aiohttp.ClientSession] = None

        logger.debug(
            f"[{config.task_name.upper()}_LLM] Initialized | "
            f"backend={config.backend} | model={config.model} | "
            f"url={config.base_url}"
        )

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session for this instance."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout)
            connector = aiohttp.TCPConnector(
                limit=self.config.pool_limit,
                limit_per_host=self.config.pool_limit
            )
            headers = {"Content-Type": "application/json"}
            if self.config.api_key:
                headers["Authorization"] = f"Bearer {self.config.api_key}"
            self._session = aiohttp.ClientSession(
                timeout=timeout,
                connector=connector,
                headers=headers
            )
            logger.debug(
                f"[{self.config.task_name.upper()}_LLM] Session created | "
                f"backend={self.config.backend}"
            )
        return self._session

    async def close(self):
        """Close this instance's session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
            logger.debug(f"[{self.config.task_name.upper()}_LLM] Session closed")

    async def complete(self, prompt: Prompt) -> CompletionResult:
        """
        Execute one completion call with full logging.

        Args:
            prompt: Messages and sampling parameters

        Returns:
            CompletionResult with content, token usage and the model that answered

        Raises:
            CompletionError: one of its subclasses, depending on the failure
        """
        model_name = self.config.model
        backend = self.config.backend
        task_name = self.config.task_name
        prompt_text = f"{prompt.system_message}\n\n{prompt.user_message}"

        request_id = log_llm_request(
            model=model_name,
            backend=backend,
            task=task_name,
            prompt=prompt_text,
            temperature=prompt.temperature,
            max_tokens=prompt.max_tokens
        )

        context_stats = log_context_usage(
            request_id=request_id,
            model=model_name,
            prompt=prompt_text,
            context_limit=get_model_context_length(model_name)
        )

        start_time = time.time()

        try:
            if backend == "ollama":
                result = await self._call_ollama(prompt, model_name)
            else:
                result = await self._call_openai(prompt, model_name)

        except CompletionError as e:
            latency_ms = (time.time() - start_time) * 1000
            log_llm_response(
                request_id=request_id,
                model=model_name,
                backend=backend,
                response="",
                latency_ms=latency_ms,
                status="error",
                error_message=str(e)
            )
            log_metrics(
                request_id=request_id,
                model=model_name,
                backend=backend,
                task=task_name,
                latency_ms=round(latency_ms, 2),
                prompt_chars=len(prompt_text),
                response_chars=0,
                status="error",
                context_limit=context_stats["context_limit"],
                estimated_tokens=context_stats["estimated_tokens"],
                context_usage_percent=context_stats["usage_percent"]
            )
            raise

        latency_ms = (time.time() - start_time) * 1000
        log_llm_response(
            request_id=request_id,
            model=result.model,
            backend=backend,
            response=result.content,
            latency_ms=latency_ms,
            status="success",
            tokens_used=result.usage_tokens
        )
        log_metrics(
            request_id=request_id,
            model=result.model,
            backend=backend,
            task=task_name,
            latency_ms=round(latency_ms, 2),
            prompt_chars=len(prompt_text),
            response_chars=len(result.content),
            status="success",
            tokens_used=result.usage_tokens,
            context_limit=context_stats["context_limit"],
            estimated_tokens=context_stats["estimated_tokens"],
            context_usage_percent=context_stats["usage_percent"]
        )
        return result

    async def _post(self, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST a JSON payload and return the decoded body, mapping failures."""
        tag = f"[{self.config.task_name.upper()}_LLM]"
        try:
            session = await self.get_session()
            async with session.post(url, json=payload) as r:
                if r.status >= 400:
                    detail = (await r.text())[:500]
                    logger.error(f"{tag} Upstream error | url={url} | status={r.status} | body={detail!r}")
                    raise _error_for_status(r.status, detail)
                return await r.json(content_type=None)

        except asyncio.TimeoutError:
            logger.error(f"{tag} Timeout after {self.config.timeout}s | url={url}")
            raise CompletionTimeoutError("Request timeout. The API took too long to respond.")

        except aiohttp.ClientConnectorError as e:
            logger.error(f"{tag} Connection failed | url={url} | error={e}")
            raise NetworkError("Unable to connect to the completion service. Please check your connection.")

        except aiohttp.ClientError as e:
            logger.error(f"{tag} Request failed | url={url} | error={e}")
            raise NetworkError(f"Network error: {e}")

        except ValueError as e:
            logger.error(f"{tag} Undecodable response body | url={url} | error={e}")
            raise ServiceUnavailableError("Completion service returned an invalid response body.")

    async def _call_openai(self, prompt: Prompt, model: str) -> CompletionResult:
        """Call an OpenAI-compatible /v1/chat/completions endpoint."""
        url = f"{self.config.base_url.rstrip('/')}/v1/chat/completions"

        payload = {
            "model": model,
            "messages": prompt.to_messages(),
            "stream": False,
            "max_tokens": prompt.max_tokens,
            "temperature": prompt.temperature,
            "top_p": prompt.top_p,
            "frequency_penalty": prompt.frequency_penalty,
            "presence_penalty": prompt.presence_penalty,
        }

        logger.debug(f"[{self.config.task_name.upper()}_LLM] Calling OpenAI-compatible API | url={url} | model={model}")

        data = await self._post(url, payload)
        choices = data.get("choices") or [{}]
        content = ((choices[0] or {}).get("message") or {}).get("content") or ""
        usage = data.get("usage") or {}

        return CompletionResult(
            content=content.strip(),
            usage_tokens=usage.get("total_tokens"),
            model=data.get("model") or model
        )

    async def _call_ollama(self, prompt: Prompt, model: str) -> CompletionResult:
        """Call the Ollama /api/chat endpoint."""
        url = f"{self.config.base_url.rstrip('/')}/api/chat"

        payload = {
            "model": model,
            "messages": prompt.to_messages(),
            "stream": False,
            "options": {
                "temperature": prompt.temperature,
                "top_p": prompt.top_p,
                "num_predict": prompt.max_tokens,
                "frequency_penalty": prompt.frequency_penalty,
                "presence_penalty": prompt.presence_penalty,
            }
        }

        logger.debug(f"[{self.config.task_name.upper()}_LLM] Calling Ollama | url={url} | model={model}")

        data = await self._post(url, payload)
        content = (data.get("message") or {}).get("content") or ""

        tokens = None
        if "eval_count" in data or "prompt_eval_count" in data:
            tokens = data.get("prompt_eval_count", 0) + data.get("eval_count", 0)

        return CompletionResult(
            content=content.strip(),
            usage_tokens=tokens,
            model=data.get("model") or model
        )

    async def check_connection(self) -> bool:
        """
        Make a minimal request to test connectivity.

        Returns:
            True if the service answered, False otherwise
        """
        ping = Prompt(
            system_message="You are a health check.",
            user_message="Hello",
            temperature=0.0,
            top_p=1.0,
            max_tokens=10,
            frequency_penalty=0.0,
            presence_penalty=0.0,
        )
        try:
            await self.complete(ping)
        except CompletionError as e:
            logger.error(f"[{self.config.task_name.upper()}_LLM] Connection test failed | error={e}")
            return False
        logger.info(f"[{self.config.task_name.upper()}_LLM] Connection test successful")
        return True

    def get_backend_info(self) -> Dict[str, Any]:
        """Information about this client's backend configuration."""
        return self.config.to_dict()
