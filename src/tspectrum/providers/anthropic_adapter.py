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

"""Anthropic message-style adapter.

Claude returns content as a list of blocks; the translation is the text
of the first block, trimmed.
"""

from __future__ import annotations

from typing import Any

from tspectrum.core.models import Domain

from .base import DEFAULT_LANGUAGE_PAIR, BaseProviderAdapter, LanguagePair
from .normalization import ResponseShape, normalize_response
from .transport import BaseTransport


class AnthropicAdapter(BaseProviderAdapter):
    """Message-style single block adapter (Claude)."""

    response_shape = ResponseShape.MESSAGE_BLOCKS

    def __init__(
        self,
        transport: BaseTransport,
        model: str = "claude-sonnet-4-5-20250929",
        provider_id: str = "Claude Sonnet 4.5",
        max_tokens: int = 1024,
        language_pair: LanguagePair = DEFAULT_LANGUAGE_PAIR,
    ):
        """Initialize Anthropic adapter.

        Args:
            transport: Messages transport
            model: Model name
            provider_id: Result label
            max_tokens: Maximum tokens to generate
            language_pair: Languages to translate between
        """
        super().__init__(provider_id, transport, language_pair)
        self.model = model
        self.max_tokens = max_tokens

    def build_payload(self, text: str, domain: Domain | None) -> dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "system": self.instruction(domain),
            "messages": [{"role": "user", "content": text}],
        }

    async def _request_translation(self, text: str, domain: Domain | None) -> str:
        payload = await self.transport.send(self.build_payload(text, domain))
        return normalize_response(self.response_shape, payload)
