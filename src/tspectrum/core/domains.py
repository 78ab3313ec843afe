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

"""Static per-domain tables.

Two tables hang off :class:`~tspectrum.core.models.Domain`:

- ``DOMAIN_CLAUSES``: one sentence appended to the translation instruction
- ``DOMAIN_RUBRICS``: the judging convention handed to the spectrum judge

Both are validated with :func:`validate_domain_table`; a table missing a
domain or holding an empty entry is a configuration error.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from tspectrum.core.errors import ConfigurationError
from tspectrum.core.models import Domain

DOMAIN_CLAUSES: dict[Domain, str] = {
    Domain.ENGINEERING: (
        "The text comes from an engineering context: keep technical terms precise and consistent."
    ),
    Domain.SOCIAL_SCIENCE: (
        "The text comes from the social sciences: preserve the concepts exactly "
        "while keeping the phrasing readable."
    ),
    Domain.ART: (
        "The text comes from the arts: favour expressive, natural wording that carries the nuance."
    ),
    Domain.MEDICAL: (
        "The text comes from a medical context: use standard medical terminology "
        "and never soften or alter clinical meaning."
    ),
    Domain.LAW: (
        "The text comes from a legal context: keep strict legal terminology and sentence structure."
    ),
    Domain.NATURE_SCIENCE: (
        "The text comes from the natural sciences: "
        "technical accuracy of terms and units is critical."
    ),
    Domain.HUMANITIES: (
        "The text comes from the humanities: produce fluent, natural prose that keeps "
        "the author's meaning and style."
    ),
    Domain.LITERATURE: (
        "The text is literary: capture the tone, style and emotional nuance, "
        "adapting idioms where a literal rendering would read unnaturally."
    ),
}

GENERAL_RUBRIC = "The text is general. Evaluate it based on standard translation conventions."

DOMAIN_RUBRICS: dict[Domain, str] = {
    Domain.ENGINEERING: (
        "In engineering domain, prioritize technical accuracy and precise terminology. "
        "Literal translation is generally preferred for clarity."
    ),
    Domain.SOCIAL_SCIENCE: (
        "In social sciences, maintain conceptual accuracy, but allow natural phrasing "
        "for readability."
    ),
    Domain.ART: (
        "In arts domain, prioritize expressive, natural translation. "
        "Free translation is acceptable to convey nuance."
    ),
    Domain.MEDICAL: (
        "In medical domain, prioritize accuracy and safety. "
        "Literal translation is strongly preferred."
    ),
    Domain.LAW: (
        "In legal domain, maintain strict legal terminology. Literal translation is required."
    ),
    Domain.NATURE_SCIENCE: (
        "In natural sciences, technical accuracy is critical. "
        "Literal translation is generally preferred."
    ),
    Domain.HUMANITIES: (
        "In humanities, natural and fluent translation is important. "
        "Free translation is acceptable to convey meaning and style."
    ),
    Domain.LITERATURE: (
        "In literary works (novels/poems/plays), prioritize capturing the original's artistic "
        "style, tone, and emotional nuance. Natural, fluent, and expressive translation is "
        "paramount. Free translation and the creative adaptation of idioms are essential to "
        "convey the cultural context and authorial intent, even if it deviates from a literal "
        "translation."
    ),
}

# Labels shown by the web front end, mapped back to domain keys
LOCALIZED_DOMAIN_LABELS: dict[str, Domain | None] = {
    "선택 안 함": None,
    "공학": Domain.ENGINEERING,
    "사회과학": Domain.SOCIAL_SCIENCE,
    "예술": Domain.ART,
    "의료": Domain.MEDICAL,
    "법률": Domain.LAW,
    "자연과학": Domain.NATURE_SCIENCE,
    "인문학": Domain.HUMANITIES,
    "문학": Domain.LITERATURE,
}


def resolve_domain(value: Any) -> Domain | None:
    """Resolve a domain key or a localized label.

    Unrecognized values degrade silently to None.

    Example:
        >>> resolve_domain("medical")
        <Domain.MEDICAL: 'medical'>
        >>> resolve_domain("의료")
        <Domain.MEDICAL: 'medical'>
        >>> resolve_domain("astrology") is None
        True
    """
    if isinstance(value, str) and value.strip() in LOCALIZED_DOMAIN_LABELS:
        return LOCALIZED_DOMAIN_LABELS[value.strip()]
    return Domain.parse(value)


def validate_domain_table(table: Mapping[Domain, str], name: str) -> dict[Domain, str]:
    """Check that a per-domain table covers every domain with non-empty text.

    Args:
        table: Mapping to validate
        name: Table name used in the error message

    Returns:
        A plain dict copy of the table

    Raises:
        ConfigurationError: If a domain is missing or an entry is blank
    """
    missing = [d.value for d in Domain if d not in table]
    if missing:
        raise ConfigurationError(f"{name} is missing entries for: {', '.join(missing)}")

    blank = [d.value for d, text in table.items() if not isinstance(text, str) or not text.strip()]
    if blank:
        raise ConfigurationError(f"{name} has empty entries for: {', '.join(blank)}")

    return dict(table)


def domain_clause(domain: Domain | None) -> str:
    """Instruction clause for a domain, or an empty string."""
    if domain is None:
        return ""
    return DOMAIN_CLAUSES.get(domain, "")
