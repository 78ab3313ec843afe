# Copyright 2025 KTTC AI (https://github.com/kttc-ai)
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Transports that carry provider requests and return raw payloads.

A transport only moves JSON: adapters build the request body and decode
the response. Every transport maps its own failures onto the
:class:`~tspectrum.providers.base.ProviderError` family.

Implementations:
- OpenAITransport: OpenAI chat completions via the official SDK
- AnthropicTransport: Anthropic messages via the official SDK
- RESTTransport: plain JSON-over-HTTP via aiohttp (Gemini, Google Translate)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import aiohttp
import anthropic
import openai

from .base import (
    ProviderAuthenticationError,
    ProviderError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)

logger = logging.getLogger(__name__)

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
GOOGLE_TRANSLATE_API_BASE = "https://translation.googleapis.com/language/translate/v2"


class BaseTransport(ABC):
    """Abstract transport returning a provider's raw JSON payload."""

    @abstractmethod
    async def send(self, payload: dict[str, Any], endpoint: str | None = None) -> dict[str, Any]:
        """Send one request.

        Args:
            payload: JSON request body built by the adapter
            endpoint: Optional endpoint path relative to the transport base

        Returns:
            Raw response payload

        Raises:
            ProviderAuthenticationError: If credentials are rejected
            ProviderRateLimitError: If the provider throttles the call
            ProviderTimeoutError: If the request times out
            ProviderError: For other transport errors
        """
        pass

    async def close(self) -> None:
        """Release network resources (no-op by default)."""
        return None


class OpenAITransport(BaseTransport):
    """OpenAI chat completions transport.

    Uses the official OpenAI Python SDK (v1.0+) and returns the response
    as a plain dict.

    Example:
        >>> transport = OpenAITransport(api_key="sk-...")
        >>> payload = await transport.send({"model": "gpt-4o", "messages": [...]})
        >>> payload["choices"][0]["message"]["content"]
    """

    def __init__(self, api_key: str, timeout: float = 30.0):
        """Initialize OpenAI transport.

        Args:
            api_key: OpenAI API key
            timeout: Request timeout in seconds
        """
        self.client = openai.AsyncOpenAI(api_key=api_key, timeout=timeout)
        self.timeout = timeout

    async def send(self, payload: dict[str, Any], endpoint: str | None = None) -> dict[str, Any]:
        try:
            response = await self.client.chat.completions.create(**payload)
            return response.model_dump()

        except openai.AuthenticationError as e:
            raise ProviderAuthenticationError(f"OpenAI authentication failed: {e}") from e
        except openai.RateLimitError as e:
            raise ProviderRateLimitError(f"OpenAI rate limit exceeded: {e}") from e
        except openai.APITimeoutError as e:
            raise ProviderTimeoutError(f"OpenAI request timed out: {e}") from e
        except openai.APIError as e:
            raise ProviderError(f"OpenAI API error: {e}") from e

    async def close(self) -> None:
        await self.client.close()


class AnthropicTransport(BaseTransport):
    """Anthropic messages transport.

    Uses the official Anthropic Python SDK and returns the response as a
    plain dict.
    """

    def __init__(self, api_key: str, timeout: float = 30.0):
        """Initialize Anthropic transport.

        Args:
            api_key: Anthropic API key
            timeout: Request timeout in seconds
        """
        self.client = anthropic.AsyncAnthropic(api_key=api_key, timeout=timeout)
        self.timeout = timeout

    async def send(self, payload: dict[str, Any], endpoint: str | None = None) -> dict[str, Any]:
        try:
            response = await self.client.messages.create(**payload)
            return response.model_dump()

        except anthropic.AuthenticationError as e:
            raise ProviderAuthenticationError(f"Anthropic authentication failed: {e}") from e
        except anthropic.RateLimitError as e:
            raise ProviderRateLimitError(f"Anthropic rate limit exceeded: {e}") from e
        except anthropic.APITimeoutError as e:
            raise ProviderTimeoutError(f"Anthropic request timed out: {e}") from e
        except anthropic.APIError as e:
            raise ProviderError(f"Anthropic API error: {e}") from e

    async def close(self) -> None:
        await self.client.close()


class RESTTransport(BaseTransport):
    """JSON-over-HTTP transport using aiohttp.

    Keeps one lazily created session per transport; call :meth:`close`
    when done.
    """

    def __init__(
        self,
        name: str,
        base_url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
        timeout: float = 30.0,
    ):
        """Initialize REST transport.

        Args:
            name: Provider name used in error messages
            base_url: Base URL; endpoints are appended with a slash
            headers: Headers sent with every request
            params: Query parameters sent with every request
            timeout: Total request timeout in seconds
        """
        self.name = name
        self.base_url = base_url.rstrip("/")
        self.headers = {"Content-Type": "application/json", **(headers or {})}
        self.params = dict(params or {})
        self.timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers=self.headers,
            )
        return self._session

    async def close(self) -> None:
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    def _url(self, endpoint: str | None) -> str:
        if not endpoint:
            return self.base_url
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    async def _check_response_status(self, response: aiohttp.ClientResponse) -> None:
        """Check HTTP response status and raise appropriate exceptions.

        Args:
            response: The aiohttp response object

        Raises:
            ProviderAuthenticationError: If status is 401 or 403
            ProviderRateLimitError: If status is 429
            ProviderError: For other error status codes
        """
        if response.status in (401, 403):
            raise ProviderAuthenticationError(f"{self.name} authentication failed")
        if response.status == 429:
            raise ProviderRateLimitError(f"{self.name} rate limit exceeded")
        if response.status >= 400:
            error_text = await response.text()
            raise ProviderError(f"{self.name} API error ({response.status}): {error_text}")

    async def send(self, payload: dict[str, Any], endpoint: str | None = None) -> dict[str, Any]:
        session = await self._get_session()

        try:
            async with session.post(
                self._url(endpoint), json=payload, params=self.params
            ) as response:
                await self._check_response_status(response)
                data = await response.json()

        except TimeoutError as e:
            raise ProviderTimeoutError(f"{self.name} request timed out: {e}") from e
        except aiohttp.ContentTypeError as e:
            raise ProviderError(f"{self.name} returned a non-JSON response: {e}") from e
        except aiohttp.ClientError as e:
            raise ProviderError(f"{self.name} connection error: {e}") from e
        except ValueError as e:
            raise ProviderError(f"{self.name} returned malformed JSON: {e}") from e

        if not isinstance(data, dict):
            raise ProviderError(
                f"{self.name} returned unexpected payload type: {type(data).__name__}"
            )
        return data


class GeminiTransport(RESTTransport):
    """Google Generative Language REST transport (Gemini)."""

    def __init__(self, api_key: str, timeout: float = 30.0):
        super().__init__(
            name="Gemini",
            base_url=GEMINI_API_BASE,
            headers={"x-goog-api-key": api_key},
            timeout=timeout,
        )


class GoogleTranslateTransport(RESTTransport):
    """Google Cloud Translation v2 REST transport.

    Endpoints: ``detect`` for language detection, none for translation.
    """

    def __init__(self, api_key: str, timeout: float = 30.0):
        super().__init__(
            name="Google Translate",
            base_url=GOOGLE_TRANSLATE_API_BASE,
            params={"key": api_key},
            timeout=timeout,
        )
