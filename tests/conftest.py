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

"""Shared pytest fixtures for tspectrum tests.

Provides scripted mock transports and adapters, payload builders for every
provider response shape, and common utilities.
"""

from __future__ import annotations

import asyncio
import json
from datetime import date
from typing import Any

import pytest
from typer.testing import CliRunner

from tspectrum.core.models import Domain
from tspectrum.providers.base import BaseProviderAdapter, ProviderError
from tspectrum.providers.normalization import ResponseShape
from tspectrum.providers.transport import BaseTransport
from tspectrum.utils.config import reset_settings

# ============================================================================
# Payload builders
# ============================================================================


def chat_payload(text: str) -> dict[str, Any]:
    """Chat-completion response carrying ``text``."""
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


def candidates_payload(text: str) -> dict[str, Any]:
    """Multi-candidate response carrying ``text`` in the first candidate."""
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def message_payload(text: str) -> dict[str, Any]:
    """Message-blocks response carrying ``text`` in the first block."""
    return {"content": [{"type": "text", "text": text}]}


def mt_payload(text: str) -> dict[str, Any]:
    """Machine-translation response."""
    return {"data": {"translations": [{"translatedText": text}]}}


def detect_payload(language: str) -> dict[str, Any]:
    """Language detection response."""
    return {"data": {"detections": [[{"language": language, "confidence": 0.98}]]}}


def judge_payload(scores: list[dict[str, Any]]) -> dict[str, Any]:
    """Chat-completion response carrying a batched judge answer."""
    return chat_payload(json.dumps({"scores": scores}))


# ============================================================================
# Mock transports and adapters
# ============================================================================


class MockTransport(BaseTransport):
    """Transport that replays scripted payloads without network calls.

    Each queued item is either a payload dict (returned) or an exception
    (raised). When the queue is empty, ``default`` is used.
    """

    def __init__(self, responses: list[Any] | None = None, default: Any = None):
        self.responses = list(responses or [])
        self.default = default
        self.calls: list[tuple[dict[str, Any], str | None]] = []
        self.closed = False

    async def send(self, payload: dict[str, Any], endpoint: str | None = None) -> dict[str, Any]:
        self.calls.append((payload, endpoint))
        item = self.responses.pop(0) if self.responses else self.default
        if isinstance(item, BaseException):
            raise item
        if item is None:
            raise ProviderError("MockTransport has no scripted response")
        return item

    async def close(self) -> None:
        self.closed = True


class MockAdapter(BaseProviderAdapter):
    """Adapter returning a fixed translation or raising a fixed error."""

    response_shape = ResponseShape.CHAT_COMPLETION

    def __init__(
        self,
        provider_id: str,
        text: str | None = "translated",
        error: BaseException | None = None,
        delay: float = 0.0,
        transport: BaseTransport | None = None,
    ):
        super().__init__(provider_id, transport or MockTransport())
        self.text = text
        self.error = error
        self.delay = delay
        self.calls: list[tuple[str, Domain | None]] = []

    async def _request_translation(self, text: str, domain: Domain | None) -> str:
        self.calls.append((text, domain))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.text or ""


@pytest.fixture
def mock_transport_class() -> type[MockTransport]:
    """Provide MockTransport class for tests that script their own responses."""
    return MockTransport


@pytest.fixture
def mock_adapter_class() -> type[MockAdapter]:
    """Provide MockAdapter class for tests that need custom adapters."""
    return MockAdapter


@pytest.fixture
def paid_adapters() -> list[MockAdapter]:
    """Three succeeding paid-tier adapters."""
    return [
        MockAdapter("gpt-4o", text="The weather is nice today."),
        MockAdapter("Gemini 2.5 Flash", text="Today the weather is lovely."),
        MockAdapter("Claude Sonnet 4.5", text="It's a beautiful day."),
    ]


@pytest.fixture
def free_adapters() -> list[MockAdapter]:
    """Two succeeding free-tier adapters."""
    return [
        MockAdapter("gpt-4o-mini", text="The weather is good today."),
        MockAdapter("Google Translate (NMT)", text="Today's weather is good."),
    ]


@pytest.fixture
def sample_korean_text() -> str:
    """Provide a short Korean source text."""
    return "오늘은 날씨가 좋네요."


@pytest.fixture
def fixed_today() -> date:
    """A fixed local date for quota tests."""
    return date(2025, 3, 14)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide Typer CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Any:
    """Keep tests independent of the developer's environment and .env file."""
    for key in ("OPENAI_API_KEY", "ANTHROPIC_API_KEY", "GOOGLE_API_KEY", "JUDGE_MODE"):
        monkeypatch.delenv(f"TSPECTRUM_{key}", raising=False)
    reset_settings()
    yield
    reset_settings()


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Modify test collection to auto-mark tests based on location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
