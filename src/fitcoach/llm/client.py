"""
OpenAI chat client with retry and error mapping.

Provides:
- Plain text and JSON-mode completions
- Automatic retry with exponential backoff on rate limits, connection
  errors and retryable status codes
- Mapping of provider errors onto the fitcoach LLM exceptions
"""

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from openai import APIConnectionError, APIError, AsyncOpenAI, RateLimitError

from ..config import Settings, get_settings
from ..exceptions import LLMError, LLMResponseInvalidError, LLMServiceUnavailableError


logger = logging.getLogger(__name__)

T = TypeVar("T")

Message = Dict[str, str]


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        max_retries: int = 2,
        base_delay: float = 1.0,
        max_delay: float = 10.0,
        exponential_base: float = 2.0,
        retryable_status_codes: Optional[set[int]] = None,
    ) -> None:
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base
        self.retryable_status_codes = retryable_status_codes or {429, 500, 502, 503, 504}

    def get_delay(self, attempt: int) -> float:
        """Calculate delay for a given attempt number."""
        delay = self.base_delay * (self.exponential_base ** attempt)
        return min(delay, self.max_delay)


class LLMClient:
    """
    Thin async wrapper over the OpenAI chat completions API.

    Raises LLMServiceUnavailableError at construction when no API key is
    configured, so callers can decide up front whether to use fallbacks.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[AsyncOpenAI] = None,
        retry_config: Optional[RetryConfig] = None,
    ) -> None:
        self._settings = settings or get_settings()

        if client is None:
            if not self._settings.openai_api_key:
                raise LLMServiceUnavailableError(
                    message="OpenAI API key not configured",
                    details={"configuration_missing": "openai_api_key"},
                )
            client = AsyncOpenAI(api_key=self._settings.openai_api_key)

        self.client = client
        self.model = self._settings.llm_model
        self.retry_config = retry_config or RetryConfig()

    async def _execute_with_retry(
        self,
        operation: Callable[[], Awaitable[T]],
        operation_name: str = "LLM request",
    ) -> T:
        """
        Execute an operation with retry logic.

        Raises:
            LLMError: On unrecoverable failure
        """
        for attempt in range(self.retry_config.max_retries + 1):
            last_attempt = attempt >= self.retry_config.max_retries

            try:
                return await operation()

            except RateLimitError as e:
                if last_attempt:
                    raise LLMServiceUnavailableError(message=f"LLM rate limit exceeded: {e}")
                delay = self.retry_config.get_delay(attempt)
                logger.warning(
                    f"{operation_name} rate limited. "
                    f"Retry {attempt + 1}/{self.retry_config.max_retries} in {delay:.1f}s"
                )
                await asyncio.sleep(delay)

            except APIConnectionError as e:
                if last_attempt:
                    raise LLMServiceUnavailableError(
                        message=f"Connection to LLM service failed: {e}",
                    )
                delay = self.retry_config.get_delay(attempt)
                logger.warning(
                    f"{operation_name} connection error. "
                    f"Retry {attempt + 1}/{self.retry_config.max_retries} in {delay:.1f}s: {e}"
                )
                await asyncio.sleep(delay)

            except APIError as e:
                status = getattr(e, "status_code", 500)
                if status not in self.retry_config.retryable_status_codes:
                    raise LLMError(message=f"LLM API error: {e}", details={"status_code": status})
                if last_attempt:
                    raise LLMServiceUnavailableError(
                        message=f"LLM API error after retries: {e}",
                        details={"status_code": status},
                    )
                delay = self.retry_config.get_delay(attempt)
                logger.warning(
                    f"{operation_name} API error (status {status}). "
                    f"Retry {attempt + 1}/{self.retry_config.max_retries} in {delay:.1f}s"
                )
                await asyncio.sleep(delay)

            except asyncio.TimeoutError:
                raise LLMServiceUnavailableError(message=f"{operation_name} timed out")

        raise LLMError(message=f"{operation_name} failed after all retries")

    async def _create(self, messages: List[Message], **kwargs: Any) -> str:
        response = await asyncio.wait_for(
            self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=self._settings.llm_max_tokens,
                temperature=self._settings.llm_temperature,
                **kwargs,
            ),
            timeout=self._settings.llm_timeout,
        )
        content = response.choices[0].message.content
        if content is None:
            raise LLMResponseInvalidError(message="Empty response from LLM")
        return content

    async def completion(self, messages: List[Message]) -> str:
        """
        Get a text completion for a message list.

        Raises:
            LLMError: On failure
        """
        return await self._execute_with_retry(
            lambda: self._create(messages), "completion"
        )

    async def completion_json(self, system: str, user: str) -> Dict[str, Any]:
        """
        Get a JSON-mode completion, parsed.

        The system prompt must mention JSON.

        Raises:
            LLMResponseInvalidError: If the response is not a JSON object
        """
        messages = [
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ]
        content = await self._execute_with_retry(
            lambda: self._create(messages, response_format={"type": "json_object"}),
            "completion_json",
        )
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise LLMResponseInvalidError(
                message=f"Invalid JSON response from LLM: {e}", raw_response=content
            )
        if not isinstance(data, dict):
            raise LLMResponseInvalidError(
                message="LLM JSON response is not an object", raw_response=content
            )
        return data
