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

"""Core data models for translation comparison runs.

This module defines the fundamental data structures used throughout the engine:
- Service tiers and subject-matter domains
- Translation requests and per-provider attempts
- Scored attempts and the result set handed to persistence
- Quota bookkeeping records
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Spectrum scale bounds: 1.0 = fully literal, 10.0 = fully free
SPECTRUM_MIN = 1.0
SPECTRUM_MAX = 10.0


class ServiceTier(str, Enum):
    """Service level of the caller.

    Decides which adapters run and whether spectrum judging happens.
    """

    FREE = "free"
    PAID = "paid"


class Domain(str, Enum):
    """Subject-matter categories that bias prompting and judging."""

    ENGINEERING = "engineering"
    SOCIAL_SCIENCE = "social_science"
    ART = "art"
    MEDICAL = "medical"
    LAW = "law"
    NATURE_SCIENCE = "nature_science"
    HUMANITIES = "humanities"
    LITERATURE = "literature"

    @classmethod
    def parse(cls, value: Any) -> Domain | None:
        """Convert a raw key to a Domain, degrading unknown keys to None."""
        if value is None or isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        key = value.strip().lower()
        if not key or key == "null":
            return None
        try:
            return cls(key)
        except ValueError:
            return None


# Adapters per tier; fixes the ResultSet length
TIER_ADAPTER_COUNTS: dict[ServiceTier, int] = {
    ServiceTier.PAID: 3,
    ServiceTier.FREE: 2,
}


class TranslationRequest(BaseModel):
    """A piece of text to translate and compare.

    Immutable once dispatched to the orchestrator.
    """

    source_text: str = Field(..., description="Text to translate (already extracted)")
    tier: ServiceTier = Field(default=ServiceTier.FREE, description="Caller service tier")
    domain: Domain | None = Field(default=None, description="Optional subject-matter domain")

    model_config = ConfigDict(frozen=True)

    @field_validator("domain", mode="before")
    @classmethod
    def _degrade_unknown_domain(cls, value: Any) -> Domain | None:
        return Domain.parse(value)


class ProviderAttempt(BaseModel):
    """Outcome of one adapter call.

    Exactly one of ``translated_text`` and ``failure_reason`` is set.
    """

    provider_id: str = Field(..., min_length=1, description="Unique provider label within a run")
    translated_text: str | None = Field(default=None, description="Normalized translation")
    failure_reason: str | None = Field(default=None, description="Captured error message")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> ProviderAttempt:
        if (self.translated_text is None) == (self.failure_reason is None):
            raise ValueError("exactly one of translated_text and failure_reason must be set")
        return self

    @classmethod
    def succeeded(cls, provider_id: str, translated_text: str) -> ProviderAttempt:
        return cls(provider_id=provider_id, translated_text=translated_text)

    @classmethod
    def failed(cls, provider_id: str, reason: str) -> ProviderAttempt:
        return cls(provider_id=provider_id, failure_reason=reason or "unknown error")

    @property
    def ok(self) -> bool:
        """Whether the attempt produced text."""
        return self.translated_text is not None


class ScoredAttempt(ProviderAttempt):
    """Provider attempt enriched with complexity and spectrum scores.

    Scores are None when the attempt failed or the score was not computed.
    """

    complexity_score: float | None = Field(default=None, description="Average characters per word")
    spectrum_score: float | None = Field(
        default=None,
        ge=SPECTRUM_MIN,
        le=SPECTRUM_MAX,
        description="Judged style: 1.0 literal to 10.0 free",
    )
    spectrum_feedback: str | None = Field(default=None, description="Short spectrum explanation")

    @model_validator(mode="after")
    def _failed_attempts_are_unscored(self) -> ScoredAttempt:
        if self.translated_text is None and (
            self.complexity_score is not None
            or self.spectrum_score is not None
            or self.spectrum_feedback is not None
        ):
            raise ValueError("failed attempts cannot carry scores")
        return self

    @classmethod
    def from_attempt(cls, attempt: ProviderAttempt, **scores: Any) -> ScoredAttempt:
        base = attempt.model_dump(include={"provider_id", "translated_text", "failure_reason"})
        return cls(**base, **scores)


class SpectrumJudgment(BaseModel):
    """One judge verdict for a single provider's translation."""

    provider_id: str
    score: float = Field(..., ge=SPECTRUM_MIN, le=SPECTRUM_MAX)
    feedback: str


class ResultSet(BaseModel):
    """Ordered collection of scored attempts for one run.

    Failed attempts are kept so callers can audit them; use
    :meth:`successful` for user-facing output.
    """

    tier: ServiceTier
    attempts: list[ScoredAttempt] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_provider_ids(self) -> ResultSet:
        ids = [a.provider_id for a in self.attempts]
        if len(ids) != len(set(ids)):
            raise ValueError(f"provider ids must be unique within a result set: {ids}")
        return self

    def __len__(self) -> int:
        return len(self.attempts)

    def get(self, provider_id: str) -> ScoredAttempt | None:
        """Get the attempt for a provider id, if present."""
        for attempt in self.attempts:
            if attempt.provider_id == provider_id:
                return attempt
        return None

    def successful(self) -> list[ScoredAttempt]:
        """Attempts that produced a translation."""
        return [a for a in self.attempts if a.ok]

    def failed(self) -> list[ScoredAttempt]:
        """Attempts that failed, with their failure reasons."""
        return [a for a in self.attempts if not a.ok]

    @property
    def all_failed(self) -> bool:
        return not self.successful()

    def to_records(self) -> list[dict[str, Any]]:
        """Rows for the persistence layer, one per successful attempt.

        Returns:
            List of dicts keyed like the analysis result table columns
        """
        return [
            {
                "model_name": a.provider_id,
                "translated_text": a.translated_text,
                "complexity_score": a.complexity_score,
                "spectrum_score": a.spectrum_score,
                "spectrum_feedback": a.spectrum_feedback,
            }
            for a in self.successful()
        ]


class QuotaRecord(BaseModel):
    """Per-identity call counter for one local day."""

    identity: str
    window_date: date
    count: int = Field(default=0, ge=0)


class CallerIdentity(BaseModel):
    """Who is asking, as resolved by the (external) request layer.

    Anonymous callers carry only a network address; authenticated callers
    carry an account id and their tier.
    """

    address: str | None = None
    account_id: str | None = None
    tier: ServiceTier = ServiceTier.FREE

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _has_identity(self) -> CallerIdentity:
        if self.address is None and self.account_id is None:
            raise ValueError("caller needs an address or an account id")
        if self.account_id is None and self.tier is ServiceTier.PAID:
            raise ValueError("anonymous callers cannot be on the paid tier")
        return self

    @property
    def is_authenticated(self) -> bool:
        return self.account_id is not None
