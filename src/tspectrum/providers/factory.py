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

"""Build the per-tier adapter sets and the judge from settings.

Paid tier: three generative providers (OpenAI, Gemini, Anthropic).
Free tier: one generative provider (OpenAI, smaller model) plus Google
Translate NMT. Missing credentials raise immediately.
"""

from __future__ import annotations

from collections.abc import Iterable

from tspectrum.core.models import ServiceTier
from tspectrum.scoring.spectrum import SpectrumJudge
from tspectrum.utils.config import Settings

from .anthropic_adapter import AnthropicAdapter
from .base import BaseProviderAdapter, LanguagePair
from .gemini_adapter import GeminiAdapter
from .google_translate_adapter import GoogleTranslateAdapter
from .openai_adapter import OpenAIAdapter
from .transport import (
    AnthropicTransport,
    BaseTransport,
    GeminiTransport,
    GoogleTranslateTransport,
    OpenAITransport,
)


def language_pair_from(settings: Settings) -> LanguagePair:
    return LanguagePair(
        name_a=settings.language_a,
        code_a=settings.language_a_code,
        name_b=settings.language_b,
        code_b=settings.language_b_code,
    )


class TransportPool:
    """Creates each provider transport once and shares it between adapters."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._transports: dict[str, BaseTransport] = {}

    def get(self, name: str) -> BaseTransport:
        """Get or create the transport for a provider name.

        Raises:
            ConfigurationError: If the provider has no credentials
        """
        if name not in self._transports:
            self._transports[name] = self._create(name)
        return self._transports[name]

    def _create(self, name: str) -> BaseTransport:
        timeout = self.settings.request_timeout
        if name == "openai":
            creds = self.settings.get_provider_credentials("openai")
            return OpenAITransport(api_key=creds["api_key"], timeout=timeout)
        if name == "anthropic":
            creds = self.settings.get_provider_credentials("anthropic")
            return AnthropicTransport(api_key=creds["api_key"], timeout=timeout)
        if name == "gemini":
            creds = self.settings.get_provider_credentials("google")
            return GeminiTransport(api_key=creds["api_key"], timeout=timeout)
        if name == "google_translate":
            creds = self.settings.get_provider_credentials("google")
            return GoogleTranslateTransport(api_key=creds["api_key"], timeout=timeout)
        raise ValueError(f"Unknown transport: {name}")


def build_adapters(
    settings: Settings,
    tiers: Iterable[ServiceTier] = tuple(ServiceTier),
    pool: TransportPool | None = None,
) -> dict[ServiceTier, list[BaseProviderAdapter]]:
    """Build adapters for the requested tiers.

    Args:
        settings: Application settings
        tiers: Tiers to build adapters for
        pool: Transport pool to draw from (default: a new pool)

    Returns:
        Adapter list per tier, in result order

    Raises:
        ConfigurationError: If a needed credential is missing
    """
    pool = pool or TransportPool(settings)
    pair = language_pair_from(settings)
    adapters: dict[ServiceTier, list[BaseProviderAdapter]] = {}

    for tier in tiers:
        if tier is ServiceTier.PAID:
            adapters[tier] = [
                OpenAIAdapter(
                    pool.get("openai"), model=settings.openai_paid_model, language_pair=pair
                ),
                GeminiAdapter(pool.get("gemini"), model=settings.gemini_model, language_pair=pair),
                AnthropicAdapter(
                    pool.get("anthropic"), model=settings.anthropic_model, language_pair=pair
                ),
            ]
        else:
            adapters[tier] = [
                OpenAIAdapter(
                    pool.get("openai"), model=settings.openai_free_model, language_pair=pair
                ),
                GoogleTranslateAdapter(pool.get("google_translate"), language_pair=pair),
            ]
    return adapters


def build_judge(settings: Settings, pool: TransportPool | None = None) -> SpectrumJudge:
    """Build the spectrum judge on the OpenAI transport.

    Raises:
        ConfigurationError: If the OpenAI key is missing
    """
    pool = pool or TransportPool(settings)
    return SpectrumJudge(transport=pool.get("openai"), model=settings.judge_model)
