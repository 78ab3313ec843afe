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

"""
tspectrum - Translation Orchestration & Evaluation Engine

Fans a text out to several translation providers concurrently, normalizes
their answers, and scores every translation for lexical complexity and
literal-vs-free style.
"""

__version__ = "0.1.0"

from tspectrum.core.complexity import complexity_score
from tspectrum.core.models import (
    CallerIdentity,
    Domain,
    ProviderAttempt,
    ResultSet,
    ScoredAttempt,
    ServiceTier,
    TranslationRequest,
)
from tspectrum.orchestrator import TranslationOrchestrator
from tspectrum.quota import QuotaTracker
from tspectrum.scoring import SpectrumJudge
from tspectrum.service import TranslationService

__all__ = [
    "CallerIdentity",
    "Domain",
    "ProviderAttempt",
    "QuotaTracker",
    "ResultSet",
    "ScoredAttempt",
    "ServiceTier",
    "SpectrumJudge",
    "TranslationOrchestrator",
    "TranslationRequest",
    "TranslationService",
    "__version__",
    "complexity_score",
]
