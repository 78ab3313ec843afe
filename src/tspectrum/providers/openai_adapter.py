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

"""OpenAI chat-completion adapter.

Sends the shared instruction as the system message and the source text as
the user message, then reads the single nested content field.
"""

from __future__ import annotations

from typing import Any

from tspectrum.core.models import Domain

from .base import DEFAULT_LANGUAGE_PAIR, BaseProviderAdapter, LanguagePair
from .normalization import ResponseShape, normalize_response
from .transport import BaseTransport


class OpenAIAdapter(BaseProviderAdapter):
    """Chat-completion style adapter (GPT-4o, GPT-4o mini, ...).

    Example:
        >>> adapter = OpenAIAdapter(transport=OpenAITransport(api_key="sk-..."), model="gpt-4o")
        >>> attempt = await adapter.translate("안녕하세요")
        >>> attempt.translated_text
        'Hello'
    """

    response_shape = ResponseShape.CHAT_COMPLETION

    def __init__(
        self,
        transport: BaseTransport,
        model: str = "gpt-4o",
        provider_id: str | None = None,
        language_pair: LanguagePair = DEFAULT_LANGUAGE_PAIR,
    ):
        """Initialize OpenAI adapter.

        Args:
            transport: Chat-completion transport
            model: Model name (e.g., "gpt-4o", "gpt-4o-mini")
            provider_id: Result label; defaults to the model name
            language_pair: Languages to translate between
        """
        super().__init__(provider_id or model, transport, language_pair)
        self.model = model

    def build_payload(self, text: str, domain: Domain | None) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": self.instruction(domain)},
                {"role": "user", "content": text},
            ],
        }

    async def _request_translation(self, text: str, domain: Domain | None) -> str:
        payload = await self.transport.send(self.build_payload(text, domain))
        return normalize_response(self.response_shape, payload)
