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

"""Google Translate (NMT) adapter.

Deterministic machine translation has no instruction prompt, so the
language direction is decided here with two sequential calls: detect the
source language, then translate to the other language of the pair.
Languages outside the pair are forced to a fixed fallback target.
"""

from __future__ import annotations

import logging

from tspectrum.core.models import Domain

from .base import DEFAULT_LANGUAGE_PAIR, BaseProviderAdapter, LanguagePair
from .normalization import ResponseShape, extract_detected_language, normalize_response
from .transport import BaseTransport

logger = logging.getLogger(__name__)


class GoogleTranslateAdapter(BaseProviderAdapter):
    """Deterministic machine-translation adapter.

    Domain hints are accepted for interface compatibility and ignored.
    """

    response_shape = ResponseShape.MACHINE_TRANSLATION

    def __init__(
        self,
        transport: BaseTransport,
        provider_id: str = "Google Translate (NMT)",
        language_pair: LanguagePair = DEFAULT_LANGUAGE_PAIR,
        fallback_target: str | None = None,
    ):
        """Initialize Google Translate adapter.

        Args:
            transport: Translation v2 REST transport
            provider_id: Result label
            language_pair: Languages to translate between
            fallback_target: Target for languages outside the pair
                (default: language A of the pair)
        """
        super().__init__(provider_id, transport, language_pair)
        self.fallback_target = fallback_target or language_pair.code_a

    async def detect_language(self, text: str) -> str:
        payload = await self.transport.send({"q": text}, endpoint="detect")
        return extract_detected_language(payload)

    def choose_target(self, detected: str) -> str:
        """Pick the target language for a detected source language."""
        target = self.language_pair.target_for(detected)
        if target is None:
            logger.warning(
                f"[{self.provider_id}] Detected language '{detected}' is outside "
                f"{self.language_pair.code_a}/{self.language_pair.code_b}; "
                f"forcing target '{self.fallback_target}'"
            )
            return self.fallback_target
        return target

    async def _request_translation(self, text: str, domain: Domain | None) -> str:
        detected = await self.detect_language(text)
        target = self.choose_target(detected)
        payload = await self.transport.send({"q": text, "target": target, "format": "text"})
        return normalize_response(self.response_shape, payload)
