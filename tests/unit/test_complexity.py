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

"""Unit and property-based tests for the complexity metric."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tspectrum.core.complexity import complexity_score


@pytest.mark.unit
class TestComplexityScore:
    """Test complexity_score examples and edge cases."""

    def test_mean_word_length(self) -> None:
        assert complexity_score("a bb ccc") == 2.0

    def test_rounded_to_two_decimals(self) -> None:
        # 3 + 5 + 3 characters over 3 words
        assert complexity_score("The quick fox.") == 3.67

    def test_punctuation_is_not_counted(self) -> None:
        assert complexity_score("Hello, world!") == 5.0
        assert complexity_score("don't") == 4.0

    def test_korean_text(self) -> None:
        assert complexity_score("안녕하세요 세계") == 3.5

    @pytest.mark.parametrize("text", [None, "", "   ", "\n\t"])
    def test_empty_text_has_no_score(self, text: str | None) -> None:
        assert complexity_score(text) is None

    def test_punctuation_only_scores_zero(self) -> None:
        assert complexity_score("!!! ... ???") == 0.0

    def test_multiple_whitespace_runs(self) -> None:
        assert complexity_score("  one   two\nthree  ") == complexity_score("one two three")


@pytest.mark.unit
class TestComplexityProperties:
    """Property-based tests for complexity_score."""

    @given(words=st.lists(st.text(alphabet="abcdefghij", min_size=1, max_size=12), min_size=1))
    @settings(max_examples=100)
    def test_equals_mean_word_length(self, words: list[str]) -> None:
        expected = round(sum(len(w) for w in words) / len(words), 2)
        assert complexity_score(" ".join(words)) == expected

    @given(text=st.text(max_size=200))
    @settings(max_examples=200)
    def test_score_is_none_zero_or_at_least_one(self, text: str) -> None:
        score = complexity_score(text)
        if not text.strip():
            assert score is None
        else:
            assert score is not None
            assert score == 0.0 or score >= 1.0

    @given(text=st.text(max_size=200))
    def test_deterministic(self, text: str) -> None:
        assert complexity_score(text) == complexity_score(text)
