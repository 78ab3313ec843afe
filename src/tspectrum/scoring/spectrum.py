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

"""Spectrum judge: LLM-scored "literal vs. free" translation style.

One batched call scores every successful attempt of a run against a
domain rubric (1.0 = fully literal, 10.0 = fully free). A per-attempt
variant (one call per translation) is kept as a fallback path.

The judge never fails a run: transport errors and unparsable answers
are logged and produce an empty score mapping.

Example:
    >>> judge = SpectrumJudge(transport=OpenAITransport(api_key="sk-..."))
    >>> scores = await judge.score_batch(original, attempts, Domain.LAW)
    >>> scores["gpt-4o"].score
    2.5
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any, cast

from pydantic import ValidationError

from tspectrum.core.domains import DOMAIN_RUBRICS, GENERAL_RUBRIC, validate_domain_table
from tspectrum.core.errors import ConfigurationError, JudgeError
from tspectrum.core.models import Domain, ProviderAttempt, SpectrumJudgment
from tspectrum.providers.base import ProviderError
from tspectrum.providers.normalization import extract_chat_completion_text
from tspectrum.providers.transport import BaseTransport
from tspectrum.utils.concurrency import settle_all

logger = logging.getLogger(__name__)

# Scores at or below this value read as literal
LITERAL_THRESHOLD = 5.0

SCALE_INSTRUCTION = """Score each translation from 1.0 to 10.0.
1.0 = 100% Literal (strict, word-for-word, follows the source structure)
10.0 = 100% Free (natural, meaning-first, follows target-language conventions)"""


def spectrum_feedback(score: float | None) -> str | None:
    """Deterministic feedback phrase derived from a spectrum score.

    Args:
        score: Spectrum score (1.0-10.0) or None

    Returns:
        Literal-leaning phrasing for scores <= 5.0, free-leaning phrasing
        above, None when there is no score
    """
    if score is None:
        return None
    style = "literal" if score <= LITERAL_THRESHOLD else "free"
    return (
        f"A spectrum score of {score:.1f} means the translation is closer to a {style} translation."
    )


class SpectrumJudge:
    """Scores translation style with one judge model call per run.

    Attributes:
        transport: Chat-completion transport for the judge model
        model: Judge model name
        rubrics: Validated rubric per domain
        general_rubric: Rubric used when no domain is set
    """

    def __init__(
        self,
        transport: BaseTransport,
        model: str = "gpt-4o",
        rubrics: Mapping[Domain, str] | None = None,
        general_rubric: str = GENERAL_RUBRIC,
        temperature: float = 0.0,
    ):
        """Initialize spectrum judge.

        Args:
            transport: Chat-completion transport
            model: Judge model name
            rubrics: Rubric per domain (default: built-in table)
            general_rubric: Rubric when no domain applies
            temperature: Sampling temperature for the judge

        Raises:
            ConfigurationError: If a rubric entry is missing or empty
        """
        self.transport = transport
        self.model = model
        self.rubrics = validate_domain_table(
            DOMAIN_RUBRICS if rubrics is None else rubrics, "spectrum rubric table"
        )
        if not general_rubric or not general_rubric.strip():
            raise ConfigurationError("general spectrum rubric must not be empty")
        self.general_rubric = general_rubric
        self.temperature = temperature

    def domain_instruction(self, domain: Domain | None) -> str:
        """Rubric block for the prompt."""
        if domain is None:
            return f"{self.general_rubric}\n{SCALE_INSTRUCTION}"
        rubric = self.rubrics[domain]
        return f"The text is from the domain: {domain.value}.\n{rubric}\n{SCALE_INSTRUCTION}"

    def build_batch_prompt(
        self,
        original_text: str,
        attempts: Sequence[ProviderAttempt],
        domain: Domain | None = None,
    ) -> str:
        """Build one prompt listing every candidate translation.

        Args:
            original_text: Source text
            attempts: Successful attempts to score
            domain: Optional domain

        Returns:
            Prompt text
        """
        blocks = "\n".join(
            f"---\n[Model: {a.provider_id}]\n{a.translated_text}\n---" for a in attempts
        )
        example = ",\n".join(
            f'    {{ "model_name": "{a.provider_id}", "spectrum_score": X.X, '
            f'"spectrum_feedback": "one short sentence" }}'
            for a in attempts
        )
        return f"""You are an evaluator for a translation service.
{self.domain_instruction(domain)}

Analyze the style of the [Translations] provided below, compared to the [Original Text].
Respond ONLY with a single JSON object in the format:
{{
  "scores": [
{example}
  ]
}}
Ensure 'model_name' matches the models provided in the [Translations] block exactly.

[Original Text]:
{original_text}

[Translations]:
{blocks}
"""

    def build_single_prompt(
        self,
        original_text: str,
        translated_text: str,
        domain: Domain | None = None,
    ) -> str:
        """Build the legacy one-translation prompt."""
        return f"""You are an evaluator for a translation service.
{self.domain_instruction(domain)}

Analyze the style of the [Translated Text] compared to the [Original Text].
Is the translation a "Literal Translation" (strict, word-for-word, prioritizes source structure)
or a "Free Translation" (creative, prioritizes target nuance and meaning)?

Respond ONLY with a JSON object in the format:
{{
  "spectrum_score": X.X,
  "spectrum_feedback": "Your feedback text here"
}}
where 'spectrum_feedback' is a short analysis based on the score.

[Original Text]:
{original_text}

[Translated Text]:
{translated_text}
"""

    async def _ask(self, prompt: str) -> str:
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
            "response_format": {"type": "json_object"},
        }
        response = await self.transport.send(payload)
        return extract_chat_completion_text(response)

    async def score_batch(
        self,
        original_text: str,
        attempts: Sequence[ProviderAttempt],
        domain: Domain | None = None,
    ) -> dict[str, SpectrumJudgment]:
        """Score all successful attempts with a single judge call.

        Args:
            original_text: Source text
            attempts: Attempts to score; those without text are ignored
            domain: Optional domain

        Returns:
            Judgment per provider id; empty when the judge call fails or
            its answer cannot be parsed
        """
        candidates = [a for a in attempts if a.ok]
        if not original_text or not candidates:
            return {}

        prompt = self.build_batch_prompt(original_text, candidates, domain)
        expected = [a.provider_id for a in candidates]

        try:
            raw = await self._ask(prompt)
        except ProviderError as e:
            logger.error(f"Spectrum judge call failed: {e}")
            return {}

        try:
            judgments = self.parse_batch_response(raw, expected)
        except JudgeError as e:
            logger.error(f"Spectrum judge answer could not be parsed: {e}")
            return {}

        missing = [pid for pid in expected if pid not in judgments]
        if missing:
            logger.warning(f"Spectrum judge returned no score for: {', '.join(missing)}")
        return judgments

    async def score_single(
        self,
        original_text: str,
        attempt: ProviderAttempt,
        domain: Domain | None = None,
    ) -> SpectrumJudgment | None:
        """Score one attempt with its own judge call (legacy path).

        Returns:
            Judgment, or None on any judge failure
        """
        if not original_text or attempt.translated_text is None:
            return None

        prompt = self.build_single_prompt(original_text, attempt.translated_text, domain)

        try:
            raw = await self._ask(prompt)
            return self.parse_single_response(raw, attempt.provider_id)
        except ProviderError as e:
            logger.error(f"Spectrum judge call failed for '{attempt.provider_id}': {e}")
        except JudgeError as e:
            logger.error(f"Spectrum judge answer for '{attempt.provider_id}' unusable: {e}")
        return None

    async def score_each(
        self,
        original_text: str,
        attempts: Sequence[ProviderAttempt],
        domain: Domain | None = None,
    ) -> dict[str, SpectrumJudgment]:
        """Score attempts with one concurrent judge call each.

        Returns the same mapping as :meth:`score_batch`.
        """
        candidates = [a for a in attempts if a.ok]
        outcomes = await settle_all(
            self.score_single(original_text, a, domain) for a in candidates
        )

        judgments: dict[str, SpectrumJudgment] = {}
        for attempt, outcome in zip(candidates, outcomes):
            if not outcome.ok:
                logger.error(f"Spectrum scoring of '{attempt.provider_id}' raised: {outcome.error}")
            elif outcome.value is not None:
                judgments[attempt.provider_id] = outcome.value
        return judgments

    def parse_batch_response(
        self, raw: str, expected_ids: Sequence[str]
    ) -> dict[str, SpectrumJudgment]:
        """Parse the batched judge answer.

        Entries for unknown provider ids or with an out-of-range score are
        dropped; the first entry wins for duplicated ids.

        Raises:
            JudgeError: If the answer is not a JSON object with a 'scores' list
        """
        data = self._parse_json_response(raw)
        scores = data.get("scores")
        if not isinstance(scores, list):
            raise JudgeError("Answer JSON has no 'scores' list")

        expected = set(expected_ids)
        judgments: dict[str, SpectrumJudgment] = {}
        for entry in scores:
            if not isinstance(entry, dict):
                logger.warning(f"Ignoring malformed score entry: {entry!r}")
                continue
            provider_id = entry.get("model_name")
            if (
                not isinstance(provider_id, str)
                or provider_id not in expected
                or provider_id in judgments
            ):
                logger.warning(f"Ignoring score for unexpected model: {provider_id!r}")
                continue
            judgment = self._to_judgment(provider_id, entry)
            if judgment is not None:
                judgments[provider_id] = judgment
        return judgments

    def parse_single_response(self, raw: str, provider_id: str) -> SpectrumJudgment:
        """Parse a legacy single-translation answer.

        Raises:
            JudgeError: If the answer has no usable score
        """
        data = self._parse_json_response(raw)
        judgment = self._to_judgment(provider_id, data)
        if judgment is None:
            raise JudgeError(f"Answer has no valid spectrum_score: {raw[:200]}")
        return judgment

    def _to_judgment(self, provider_id: str, entry: dict[str, Any]) -> SpectrumJudgment | None:
        score = entry.get("spectrum_score")
        feedback = entry.get("spectrum_feedback")
        if isinstance(score, bool):
            logger.warning(f"Ignoring boolean spectrum score for '{provider_id}': {score!r}")
            return None
        try:
            value = float(score)  # type: ignore[arg-type]
            if not isinstance(feedback, str) or not feedback.strip():
                feedback = spectrum_feedback(value)
            return SpectrumJudgment(provider_id=provider_id, score=value, feedback=feedback)
        except (TypeError, ValueError, ValidationError):
            logger.warning(f"Ignoring invalid spectrum score for '{provider_id}': {score!r}")
            return None

    def _parse_json_response(self, response: str) -> dict[str, Any]:
        """Parse JSON response from the judge.

        Args:
            response: Raw response text

        Returns:
            Parsed JSON dictionary

        Raises:
            JudgeError: If parsing fails
        """
        try:
            data = json.loads(response)
        except json.JSONDecodeError:
            # Try to extract JSON from markdown code blocks
            json_match = re.search(r"```(?:json)?\s*(\{.*?\})\s*```", response, re.DOTALL)
            if not json_match:
                # Try to find JSON object in response
                json_match = re.search(r"(\{.*\})", response, re.DOTALL)
            if not json_match:
                raise JudgeError(f"No valid JSON found in response: {response[:200]}") from None
            try:
                data = json.loads(json_match.group(1))
            except json.JSONDecodeError as e:
                raise JudgeError(f"Failed to parse extracted JSON: {e}") from e

        if not isinstance(data, dict):
            raise JudgeError(f"Expected a JSON object, got {type(data).__name__}")
        return cast(dict[str, Any], data)
