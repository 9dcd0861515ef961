"""
OpenAI client wrapper for the RFP reconciler.

Handles:
- Chat completions with a bounded timeout
- JSON-object responses (first {...} block of the reply)
- Retry with exponential backoff for transient failures only
- Classification of failures into config / auth / generic errors
"""

import json
import os
import re
from typing import Any

import openai
from openai import AsyncOpenAI
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..config import PLACEHOLDER_API_KEYS, config
from ..errors import AIConfigError, RemoteResponseError, wrap_openai_error

# Failures worth another attempt; everything else fails fast
TRANSIENT_ERRORS = (
    openai.APITimeoutError,
    openai.APIConnectionError,
    openai.RateLimitError,
    openai.InternalServerError,
)

_JSON_OBJECT = re.compile(r'\{[\s\S]*\}')


def parse_json_object(content: str) -> dict[str, Any]:
    """
    Parse the outermost JSON object in a model reply.

    Raises:
        RemoteResponseError: If the reply holds no parseable JSON object
    """
    match = _JSON_OBJECT.search(content or '')
    if not match:
        raise RemoteResponseError(
            'Remote response contained no JSON object',
            context={'response_prefix': (content or '')[:200]},
        )
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise RemoteResponseError(
            f'Remote response JSON could not be parsed: {e}',
            context={'response_prefix': content[:200]},
        ) from e
    if not isinstance(parsed, dict):
        raise RemoteResponseError('Remote response JSON is not an object')
    return parsed


class OpenAIClient:
    """
    Async OpenAI chat client returning JSON objects.

    Configuration via environment variables:
    - OPENAI_API_KEY: Required API key
    - OPENAI_CHAT_MODEL: Chat model (default: gpt-4.1-mini)
    - OPENAI_TIMEOUT_SECONDS: Per-request timeout (default: 30)
    """

    def __init__(
        self,
        api_key: str | None = None,
        chat_model: str | None = None,
        timeout: float | None = None,
    ):
        """
        Initialize the OpenAI client.

        Args:
            api_key: OpenAI API key (defaults to OPENAI_API_KEY env var)
            chat_model: Model for chat completions (defaults to OPENAI_CHAT_MODEL)
            timeout: Request timeout in seconds (defaults to OPENAI_TIMEOUT_SECONDS)

        Raises:
            AIConfigError: If no usable API key is available
        """
        self.api_key = api_key or os.getenv('OPENAI_API_KEY', '')
        if self.api_key.strip() in PLACEHOLDER_API_KEYS:
            raise AIConfigError('AI_CONFIG_ERROR: OPENAI_API_KEY not configured')

        self.chat_model = chat_model or config.OPENAI_CHAT_MODEL
        self.timeout = timeout or config.OPENAI_TIMEOUT_SECONDS

        # Retries are ours (tenacity), not the SDK's
        self._client = AsyncOpenAI(
            api_key=self.api_key,
            timeout=self.timeout,
            max_retries=0,
        )

    @retry(
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True,
    )
    async def _create(
        self,
        messages: list[dict[str, str]],
        model: str | None,
        temperature: float,
        max_tokens: int | None,
    ) -> str:
        response = await self._client.chat.completions.create(
            model=model or self.chat_model,
            messages=messages,  # type: ignore
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return response.choices[0].message.content or ''

    async def chat_completion(
        self,
        messages: list[dict[str, str]],
        model: str | None = None,
        temperature: float = 0.0,
        max_tokens: int | None = None,
    ) -> str:
        """
        Get a chat completion response.

        Args:
            messages: List of message dicts with 'role' and 'content'
            model: Override the default chat model
            temperature: Sampling temperature (0.0 for deterministic)
            max_tokens: Maximum tokens in response

        Returns:
            The assistant's response text

        Raises:
            RemoteServiceError: Typed by wrap_openai_error
        """
        try:
            return await self._create(messages, model, temperature, max_tokens)
        except openai.OpenAIError as e:
            raise wrap_openai_error(e, context={'model': model or self.chat_model}) from e

    async def chat_completion_json(
        self,
        messages: list[dict[str, str]],
        model: str | None = None,
        temperature: float = 0.0,
    ) -> dict[str, Any]:
        """
        Get a chat completion and parse the JSON object it contains.

        Raises:
            RemoteServiceError: On API failure
            RemoteResponseError: If the reply holds no parseable JSON object
        """
        content = await self.chat_completion(messages, model=model, temperature=temperature)
        return parse_json_object(content)

    async def health_check(self) -> dict[str, bool | str]:
        """
        Verify API connectivity with a minimal request.

        Returns:
            Dict with 'healthy' bool and optional 'error' message
        """
        try:
            await self._client.models.retrieve(self.chat_model)
            return {'healthy': True, 'chat_model': self.chat_model}
        except openai.OpenAIError as e:
            return {'healthy': False, 'error': str(e)}

    async def close(self):
        """Close the client connection."""
        await self._client.close()
