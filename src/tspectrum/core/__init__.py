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

"""Core data models, domain tables and the complexity metric."""

from tspectrum.core.complexity import complexity_score
from tspectrum.core.domains import (
    DOMAIN_CLAUSES,
    DOMAIN_RUBRICS,
    GENERAL_RUBRIC,
    domain_clause,
    resolve_domain,
    validate_domain_table,
)
from tspectrum.core.errors import (
    ConfigurationError,
    InputTooLargeError,
    JudgeError,
    QuotaExceededError,
    TSpectrumError,
)
from tspectrum.core.models import (
    TIER_ADAPTER_COUNTS,
    CallerIdentity,
    Domain,
    ProviderAttempt,
    QuotaRecord,
    ResultSet,
    ScoredAttempt,
    ServiceTier,
    SpectrumJudgment,
    TranslationRequest,
)

__all__ = [
    "CallerIdentity",
    "ConfigurationError",
    "DOMAIN_CLAUSES",
    "DOMAIN_RUBRICS",
    "Domain",
    "GENERAL_RUBRIC",
    "InputTooLargeError",
    "JudgeError",
    "ProviderAttempt",
    "QuotaExceededError",
    "QuotaRecord",
    "ResultSet",
    "ScoredAttempt",
    "ServiceTier",
    "SpectrumJudgment",
    "TIER_ADAPTER_COUNTS",
    "TSpectrumError",
    "TranslationRequest",
    "complexity_score",
    "domain_clause",
    "resolve_domain",
    "validate_domain_table",
]
