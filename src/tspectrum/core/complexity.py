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

"""Lexical complexity metric: average characters per word.

Lower values mean terser wording. The score is pure and deterministic,
so it is computed for every successful attempt regardless of tier.
"""

from __future__ import annotations


def _strip_punctuation(text: str) -> str:
    # Keep letters, digits and whitespace in any script
    return "".join(ch for ch in text if ch.isalnum() or ch.isspace())


def complexity_score(text: str | None) -> float | None:
    """Compute average characters per word of a translation.

    Args:
        text: Translated text

    Returns:
        None for empty or whitespace-only input, 0.0 when no words remain
        after removing punctuation, else the mean word length rounded to
        two decimals

    Example:
        >>> complexity_score("The quick fox.")
        3.67
        >>> complexity_score("a bb ccc")
        2.0
    """
    if not text or not text.strip():
        return None

    words = _strip_punctuation(text).split()
    if not words:
        return 0.0

    char_count = sum(len(word) for word in words)
    return round(char_count / len(words), 2)
