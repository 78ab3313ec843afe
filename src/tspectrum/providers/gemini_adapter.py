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

"""Gemini generative multi-candidate adapter.

Gemini takes the instruction and the text in a single user part and
answers with a list of candidates. The first candidate's text frequently
carries framing (asides, quotes, a preamble line), which the candidate
normalizer strips.
"""

from __future__ import annotations

from typing import Any

from tspectrum.core.models import Domain

from .base import DEFAULT_LANGUAGE_PAIR, BaseProviderAdapter, LanguagePair
from .normalization import ResponseShape, normalize_response
from .transport import BaseTransport


class GeminiAdapter(BaseProviderAdapter):
    """Generative multi-candidate adapter (Gemini)."""

    response_shape = ResponseShape.CANDIDATES

    def __init__(
        self,
        transport: BaseTransport,
        model: str = "gemini-2.5-flash",
        provider_id: str = "Gemini 2.5 Flash",
        language_pair: LanguagePair = DEFAULT_LANGUAGE_PAIR,
    ):
        """Initialize Gemini adapter.

        Args:
            transport: Generative Language REST transport
            model: Model name, part of the endpoint path
            provider_id: Result label
            language_pair: Languages to translate between
        """
        super().__init__(provider_id, transport, language_pair)
        self.model = model

    @property
    def endpoint(self) -> str:
        return f"models/{self.model}:generateContent"

    def build_payload(self, text: str, domain: Domain | None) -> dict[str, Any]:
        return {"contents": [{"parts": [{"text": f"{self.instruction(domain)}\n\n{text}"}]}]}

    async def _request_translation(self, text: str, domain: Domain | None) -> str:
        body = self.build_payload(text, domain)
        payload = await self.transport.send(body, endpoint=self.endpoint)
        return normalize_response(self.response_shape, payload)
