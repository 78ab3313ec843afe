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

"""Tier-aware orchestration of provider adapters and scoring.

Coordinates one comparison run:
- Select the adapter set for the caller's tier
- Call every adapter concurrently and wait for all of them to settle
- Compute the complexity score for every attempt with text
- On the paid tier, score all successful attempts with one judge call
  and merge the judgments back by provider id

Provider and judge failures are recorded in the result set and never
raised to the caller.

Example:
    >>> orchestrator = TranslationOrchestrator(
    ...     adapters={ServiceTier.PAID: paid_adapters, ServiceTier.FREE: free_adapters},
    ...     judge=SpectrumJudge(transport=judge_transport),
    ... )
    >>> request = TranslationRequest(source_text="안녕하세요", tier="paid")
    >>> result = await orchestrator.run(request)
    >>> [a.provider_id for a in result.successful()]
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sequence
from typing import Literal

from tspectrum.core.complexity import complexity_score
from tspectrum.core.errors import ConfigurationError
from tspectrum.core.models import (
    Domain,
    ProviderAttempt,
    ResultSet,
    ScoredAttempt,
    ServiceTier,
    SpectrumJudgment,
    TranslationRequest,
)
from tspectrum.providers.base import BaseProviderAdapter
from tspectrum.scoring.spectrum import SpectrumJudge
from tspectrum.utils.concurrency import settle_all

logger = logging.getLogger(__name__)

JudgeMode = Literal["batch", "per_attempt"]


class TranslationOrchestrator:
    """Runs the adapters of a tier and reconciles scores onto their results.

    Attributes:
        adapters: Adapter list per tier; list order is result order
        judge: Spectrum judge for the paid tier (None disables judging)
        judge_mode: "batch" (one call per run) or "per_attempt" (legacy)
    """

    def __init__(
        self,
        adapters: Mapping[ServiceTier, Sequence[BaseProviderAdapter]],
        judge: SpectrumJudge | None = None,
        judge_mode: JudgeMode = "batch",
    ):
        """Initialize orchestrator.

        Args:
            adapters: Adapters per tier
            judge: Spectrum judge used on the paid tier
            judge_mode: Judging strategy

        Raises:
            ConfigurationError: If no tier is given, a tier has no adapters, ids
                repeat within a tier, or the judge mode is unknown
        """
        if not adapters:
            raise ConfigurationError("No tiers configured")
        for tier, tier_adapters in adapters.items():
            if not tier_adapters:
                raise ConfigurationError(f"No adapters configured for the {tier.value} tier")
            ids = [a.provider_id for a in tier_adapters]
            if len(ids) != len(set(ids)):
                raise ConfigurationError(f"Duplicate provider ids in the {tier.value} tier: {ids}")
        if judge_mode not in ("batch", "per_attempt"):
            raise ConfigurationError(f"Unknown judge mode: {judge_mode}")

        self.adapters = {ServiceTier(tier): list(items) for tier, items in adapters.items()}
        self.judge = judge
        self.judge_mode = judge_mode

    def adapters_for(self, tier: ServiceTier) -> list[BaseProviderAdapter]:
        """Adapters used for a tier, in result order.

        Raises:
            ConfigurationError: If the tier was not configured
        """
        if tier not in self.adapters:
            raise ConfigurationError(f"No adapters configured for the {tier.value} tier")
        return self.adapters[tier]

    async def run(self, request: TranslationRequest) -> ResultSet:
        """Run one comparison.

        Args:
            request: Source text, tier and optional domain

        Returns:
            ResultSet with one entry per adapter of the tier, failed
            attempts included
        """
        start_time = time.monotonic()
        adapters = self.adapters_for(request.tier)
        # Domains only shape paid-tier prompts and judging
        domain = request.domain if request.tier is ServiceTier.PAID else None

        logger.info(
            f"Comparison run ({request.tier.value}) with {len(adapters)} providers: "
            f"{[a.provider_id for a in adapters]}"
        )

        attempts = await self._collect_attempts(adapters, request.source_text, domain)

        judgments: dict[str, SpectrumJudgment] = {}
        successful = [a for a in attempts if a.ok]
        if request.tier is ServiceTier.PAID:
            if self.judge is None:
                logger.warning("Spectrum judging skipped: no judge configured")
            elif not successful:
                logger.warning("Spectrum judging skipped: every provider failed")
            else:
                judgments = await self._judge(request.source_text, successful, domain)
        else:
            logger.debug(f"Spectrum judging not offered on the {request.tier.value} tier")

        result = ResultSet(
            tier=request.tier,
            attempts=[self._score(a, judgments.get(a.provider_id)) for a in attempts],
        )

        logger.info(
            f"Comparison run finished in {time.monotonic() - start_time:.2f}s: "
            f"{len(result.successful())}/{len(result)} succeeded, "
            f"{len(judgments)} spectrum scores"
        )
        return result

    async def _collect_attempts(
        self,
        adapters: Sequence[BaseProviderAdapter],
        text: str,
        domain: Domain | None,
    ) -> list[ProviderAttempt]:
        outcomes = await settle_all(adapter.translate(text, domain) for adapter in adapters)

        attempts: list[ProviderAttempt] = []
        for adapter, outcome in zip(adapters, outcomes):
            if outcome.ok and outcome.value is not None:
                attempts.append(outcome.value)
            else:
                logger.error(
                    f"Provider '{adapter.provider_id}' raised unexpectedly: {outcome.error!r}"
                )
                attempts.append(ProviderAttempt.failed(adapter.provider_id, str(outcome.error)))
        return attempts

    async def _judge(
        self,
        text: str,
        attempts: list[ProviderAttempt],
        domain: Domain | None,
    ) -> dict[str, SpectrumJudgment]:
        assert self.judge is not None
        if self.judge_mode == "per_attempt":
            return await self.judge.score_each(text, attempts, domain)
        return await self.judge.score_batch(text, attempts, domain)

    @staticmethod
    def _score(attempt: ProviderAttempt, judgment: SpectrumJudgment | None) -> ScoredAttempt:
        if not attempt.ok:
            return ScoredAttempt.from_attempt(attempt)
        return ScoredAttempt.from_attempt(
            attempt,
            complexity_score=complexity_score(attempt.translated_text),
            spectrum_score=judgment.score if judgment else None,
            spectrum_feedback=judgment.feedback if judgment else None,
        )

    async def close(self) -> None:
        """Close every transport used by the adapters and the judge."""
        transports = {id(a.transport): a.transport for t in self.adapters.values() for a in t}
        if self.judge is not None:
            transports[id(self.judge.transport)] = self.judge.transport
        for transport in transports.values():
            await transport.close()
