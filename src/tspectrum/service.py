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

"""Request-level facade in front of the orchestrator.

Applies the cheap checks before any provider is called, in this order:
empty text, size limit, daily quota. Then resolves the domain (paid
callers only) and runs the comparison.
"""

from __future__ import annotations

import logging
from typing import Any

from tspectrum.core.domains import resolve_domain
from tspectrum.core.errors import InputTooLargeError
from tspectrum.core.models import CallerIdentity, ResultSet, ServiceTier, TranslationRequest
from tspectrum.orchestrator import TranslationOrchestrator
from tspectrum.quota import QuotaTracker

logger = logging.getLogger(__name__)

DEFAULT_MAX_TEXT_CHARS = 5000


class TranslationService:
    """Admission checks plus one orchestrated comparison run.

    Example:
        >>> service = TranslationService(orchestrator, QuotaTracker(job_counts=jobs))
        >>> caller = CallerIdentity(address="203.0.113.7")
        >>> result = await service.compare("Hello world", caller)
    """

    def __init__(
        self,
        orchestrator: TranslationOrchestrator,
        quota: QuotaTracker,
        max_text_chars: int = DEFAULT_MAX_TEXT_CHARS,
    ):
        self.orchestrator = orchestrator
        self.quota = quota
        self.max_text_chars = max_text_chars

    async def compare(
        self,
        text: str,
        caller: CallerIdentity,
        domain: Any = None,
    ) -> ResultSet:
        """Check admission and run a comparison.

        Args:
            text: Source text
            caller: Resolved caller identity
            domain: Domain key or localized label; ignored for free callers

        Returns:
            Full ResultSet, failed attempts included

        Raises:
            ValueError: If the text is empty
            InputTooLargeError: If the text exceeds the character limit
            QuotaExceededError: If the caller reached the daily ceiling
        """
        if not text or not text.strip():
            raise ValueError("Source text must not be empty")
        if len(text) > self.max_text_chars:
            raise InputTooLargeError(len(text), self.max_text_chars)

        await self.quota.admit(caller)

        resolved = resolve_domain(domain) if caller.tier is ServiceTier.PAID else None
        request = TranslationRequest(source_text=text, tier=caller.tier, domain=resolved)

        result = await self.orchestrator.run(request)
        if result.all_failed:
            logger.error(f"Every provider failed for {caller.account_id or caller.address}")
        return result
