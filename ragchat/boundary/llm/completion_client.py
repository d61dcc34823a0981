"""
Chat completion client for OpenAI-compatible providers.

Sends non-streaming, streaming and vision requests to a /chat/completions
endpoint and normalizes replies to plain text. Provider error bodies that
mention credits or 402 surface as quota errors.

Dependencies: httpx, ragchat.configs, ragchat.boundary.llm.response_decoder
System role: LLM boundary for chat answers and document text extraction
"""

import logging
from collections.abc import AsyncIterator
from typing import Any

import httpx

from ragchat.boundary.llm.response_decoder import extract_text
from ragchat.configs.llm import OpenAISettings, OpenRouterSettings
from ragchat.core.exceptions import (
    ExtractionError,
    UpstreamError,
    UpstreamQuotaExceededError,
)

logger = logging.getLogger(__name__)

COMPLETIONS_PATH = "/chat/completions"
QUOTA_MARKERS = ("credits", "402")
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1500


class ChatCompletionClient:
    """
    Async client for one OpenAI-compatible provider.

    Holds a single httpx.AsyncClient; call aclose() on shutdown.
    """

    def __init__(
        self,
        provider: str,
        base_url: str,
        api_key: str,
        default_model: str,
        extra_headers: dict[str, str] | None = None,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize chat completion client.

        Args:
            provider: Provider name used in logs and errors ("openai", "openrouter")
            base_url: API base URL (without /chat/completions)
            api_key: Bearer token
            default_model: Model used when a call names none
            extra_headers: Provider-specific headers (attribution etc.)
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests)
        """
        self.provider = provider
        self.default_model = default_model

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
            **(extra_headers or {}),
        }
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    def _raise_upstream_error(self, status_code: int, body: str) -> None:
        logger.error(
            f"{__name__}:_raise_upstream_error - {self.provider} API error ({status_code})",
            extra={"provider": self.provider, "status_code": status_code, "body": body[:500]},
        )
        if any(marker in body for marker in QUOTA_MARKERS):
            raise UpstreamQuotaExceededError(
                f"Not enough credits on {self.provider} account to complete this request",
                status_code=status_code,
                body=body,
                provider=self.provider,
            )
        raise UpstreamError(
            f"{self.provider} API error: {status_code}",
            status_code=status_code,
            body=body,
            provider=self.provider,
        )

    async def _post(self, payload: dict[str, Any]) -> str:
        try:
            response = await self._client.post(COMPLETIONS_PATH, json=payload)
        except httpx.HTTPError as e:
            raise UpstreamError(
                f"{self.provider} request failed: {type(e).__name__}",
                provider=self.provider,
                details={"error": str(e)},
            ) from e

        if not response.is_success:
            self._raise_upstream_error(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as e:
            raise ExtractionError(
                f"{self.provider} returned a non-JSON response",
                details={"response_preview": response.text[:300]},
            ) from e

        return extract_text(data)

    async def complete(
        self,
        messages: list[dict[str, Any]],
        model: str | None = None,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> str:
        """
        Create a non-streaming chat completion.

        Args:
            messages: Chat messages ({role, content})
            model: Model ID (client default if None)
            temperature: Sampling temperature
            max_tokens: Reply token limit

        Returns:
            str: Normalized reply text

        Raises:
            UpstreamQuotaExceededError: Provider rejected the call for credits
            UpstreamError: Provider returned a non-success status
            ExtractionError: Reply contained no text
        """
        model = model or self.default_model
        logger.info(f"{__name__}:complete - Creating {self.provider} chat completion with model: {model}")
        return await self._post({
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "stream": False,
        })

    async def stream(
        self,
        messages: list[dict[str, Any]],
        model: str | None = None,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> AsyncIterator[bytes]:
        """
        Open a streaming chat completion.

        The status is checked before returning, so provider errors raise
        here rather than midway through the stream.

        Args:
            messages: Chat messages ({role, content})
            model: Model ID (client default if None)
            temperature: Sampling temperature
            max_tokens: Reply token limit

        Returns:
            AsyncIterator[bytes]: Provider SSE bytes, decompressed but otherwise unmodified

        Raises:
            UpstreamQuotaExceededError: Provider rejected the call for credits
            UpstreamError: Provider returned a non-success status
        """
        model = model or self.default_model
        logger.info(f"{__name__}:stream - Creating streaming {self.provider} chat completion with model: {model}")

        request = self._client.build_request(
            "POST",
            COMPLETIONS_PATH,
            json={
                "model": model,
                "messages": messages,
                "temperature": temperature,
                "max_tokens": max_tokens,
                "stream": True,
            },
        )
        try:
            response = await self._client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise UpstreamError(
                f"{self.provider} request failed: {type(e).__name__}",
                provider=self.provider,
                details={"error": str(e)},
            ) from e

        if not response.is_success:
            body = (await response.aread()).decode("utf-8", errors="replace")
            await response.aclose()
            self._raise_upstream_error(response.status_code, body)

        return self._iter_bytes(response)

    @staticmethod
    async def _iter_bytes(response: httpx.Response) -> AsyncIterator[bytes]:
        # Content-Encoding is undone here; the SSE payload itself passes through as sent.
        try:
            async for chunk in response.aiter_bytes():
                yield chunk
        finally:
            await response.aclose()

    async def send_vision_request(
        self,
        data_uri: str,
        prompt: str,
        model: str | None = None,
        max_tokens: int = 2000,
    ) -> str:
        """
        Ask a vision model to read an image or document.

        Args:
            data_uri: base64 data URI of the file (data:<type>;base64,...)
            prompt: Instruction text sent alongside the image
            model: Vision model ID (client default if None)
            max_tokens: Reply token limit

        Returns:
            str: Extracted text

        Raises:
            UpstreamQuotaExceededError: Provider rejected the call for credits
            UpstreamError: Provider returned a non-success status
            ExtractionError: Reply contained no text
        """
        model = model or self.default_model
        logger.info(f"{__name__}:send_vision_request - Sending vision request with model: {model}")
        return await self._post({
            "model": model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": prompt},
                        {"type": "image_url", "image_url": {"url": data_uri}},
                    ],
                }
            ],
            "max_tokens": max_tokens,
        })


def create_openai_client(
    settings: OpenAISettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ChatCompletionClient:
    """Build a client for the OpenAI chat completions API."""
    return ChatCompletionClient(
        provider="openai",
        base_url=settings.base_url,
        api_key=settings.api_key,
        default_model=settings.chat_model,
        timeout=settings.request_timeout,
        transport=transport,
    )


def create_openrouter_client(
    settings: OpenRouterSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ChatCompletionClient:
    """Build a client for OpenRouter with its attribution headers."""
    return ChatCompletionClient(
        provider="openrouter",
        base_url=settings.base_url,
        api_key=settings.api_key,
        default_model=settings.chat_model,
        extra_headers={
            "HTTP-Referer": settings.app_url,
            "X-Title": settings.app_title,
        },
        timeout=settings.request_timeout,
        transport=transport,
    )
