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

"""Base abstract class for provider adapters.

Defines the interface that all translation providers must implement,
the shared translation instruction, and the provider error family.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from tspectrum.core.domains import domain_clause
from tspectrum.core.errors import TSpectrumError
from tspectrum.core.models import Domain, ProviderAttempt

if TYPE_CHECKING:
    from tspectrum.providers.normalization import ResponseShape
    from tspectrum.providers.transport import BaseTransport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LanguagePair:
    """The two languages a comparison service translates between.

    Attributes:
        name_a: Display name of language A (used in prompts)
        code_a: ISO code of language A (used by machine translation)
        name_b: Display name of language B
        code_b: ISO code of language B
    """

    name_a: str = "Korean"
    code_a: str = "ko"
    name_b: str = "English"
    code_b: str = "en"

    def target_for(self, detected_code: str) -> str | None:
        """Target code for a detected source code, or None if outside the pair."""
        base = detected_code.lower().split("-")[0].split("_")[0]
        if base == self.code_a:
            return self.code_b
        if base == self.code_b:
            return self.code_a
        return None


DEFAULT_LANGUAGE_PAIR = LanguagePair()


def build_instruction(language_pair: LanguagePair, domain: Domain | None = None) -> str:
    """Build the shared translation instruction.

    Args:
        language_pair: Languages to translate between
        domain: Optional domain; adds one clause when recognized

    Returns:
        Instruction text for generative providers
    """
    instruction = (
        "You are a professional translator. Detect the language of the input text. "
        f"If it is {language_pair.name_a}, translate it to {language_pair.name_b}. "
        f"If it is {language_pair.name_b}, translate it to {language_pair.name_a}."
    )
    clause = domain_clause(domain)
    if clause:
        instruction = f"{instruction} {clause}"
    return instruction


class BaseProviderAdapter(ABC):
    """Abstract base class for provider adapters.

    An adapter builds provider requests, sends them through a transport and
    interprets the raw payload. :meth:`translate` never raises provider
    errors: they are captured into a failed :class:`ProviderAttempt`.

    Attributes:
        provider_id: Label of this provider in result sets
        response_shape: Response variant this adapter decodes
    """

    response_shape: ClassVar[ResponseShape]

    def __init__(
        self,
        provider_id: str,
        transport: BaseTransport,
        language_pair: LanguagePair = DEFAULT_LANGUAGE_PAIR,
    ):
        """Initialize adapter.

        Args:
            provider_id: Label of this provider (unique within a run)
            transport: Transport used to reach the provider
            language_pair: Languages to translate between
        """
        self.provider_id = provider_id
        self.transport = transport
        self.language_pair = language_pair

    def instruction(self, domain: Domain | None = None) -> str:
        """Translation instruction for this adapter."""
        return build_instruction(self.language_pair, domain)

    @abstractmethod
    async def _request_translation(self, text: str, domain: Domain | None) -> str:
        """Call the provider and return the normalized translation.

        Args:
            text: Source text
            domain: Optional domain hint

        Returns:
            Normalized translated text

        Raises:
            ProviderError: On any network, auth or response error
        """
        pass

    async def translate(self, text: str, domain: Domain | None = None) -> ProviderAttempt:
        """Translate text, capturing provider failures.

        Args:
            text: Source text
            domain: Optional domain hint

        Returns:
            ProviderAttempt with either translated text or a failure reason
        """
        try:
            translated = await self._request_translation(text, domain)
            if not translated or not translated.strip():
                raise ProviderResponseError(f"{self.provider_id} returned an empty translation")
            return ProviderAttempt.succeeded(self.provider_id, translated.strip())

        except ProviderError as e:
            logger.error(f"Provider '{self.provider_id}' failed: {e}")
            return ProviderAttempt.failed(self.provider_id, str(e))

    async def close(self) -> None:
        """Release transport resources."""
        await self.transport.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(provider_id={self.provider_id!r})"


class ProviderError(TSpectrumError):
    """Base exception for provider-related errors."""

    pass


class ProviderTimeoutError(ProviderError):
    """Raised when a provider request times out."""

    pass


class ProviderRateLimitError(ProviderError):
    """Raised when hitting rate limits."""

    pass


class ProviderAuthenticationError(ProviderError):
    """Raised when authentication fails."""

    pass


class ProviderResponseError(ProviderError):
    """Raised when a provider payload cannot be interpreted."""

    pass
