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

"""Unit tests for provider response normalization."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tests.conftest import (
    candidates_payload,
    chat_payload,
    detect_payload,
    message_payload,
    mt_payload,
)
from tspectrum.providers.base import ProviderResponseError
from tspectrum.providers.normalization import (
    NORMALIZERS,
    ResponseShape,
    extract_candidates_text,
    extract_chat_completion_text,
    extract_detected_language,
    extract_machine_translation_text,
    extract_message_blocks_text,
    normalize_response,
    strip_conversational_wrapping,
)


@pytest.mark.unit
class TestStripConversationalWrapping:
    """Test removal of conversational framing."""

    def test_parenthetical_aside_then_quoted_run(self) -> None:
        assert strip_conversational_wrapping('(this is a translation)\n"Hello world"') == "Hello world"

    def test_preamble_line_is_dropped(self) -> None:
        assert strip_conversational_wrapping("Here is the translation:\nHello") == "Hello"

    def test_emphasized_run(self) -> None:
        assert strip_conversational_wrapping("Translation: *Bonjour le monde*") == "Bonjour le monde"

    def test_wrapping_parentheses_are_removed(self) -> None:
        assert strip_conversational_wrapping("(Hola mundo)") == "Hola mundo"

    def test_quoted_run_inside_parentheses(self) -> None:
        assert strip_conversational_wrapping('("Hola mundo")') == "Hola mundo"

    def test_plain_text_is_only_trimmed(self) -> None:
        assert strip_conversational_wrapping("  Hello world  ") == "Hello world"

    def test_empty_quoted_run_falls_back_to_line_break(self) -> None:
        assert strip_conversational_wrapping('""\nHello') == "Hello"

    def test_first_quoted_run_wins(self) -> None:
        assert strip_conversational_wrapping('"First" and "Second"') == "First"

    @given(text=st.text(alphabet="abcdefghijklmnopqrstuvwxyz ,.", max_size=80))
    def test_idempotent_on_clean_text(self, text: str) -> None:
        once = strip_conversational_wrapping(text)
        assert strip_conversational_wrapping(once) == once


@pytest.mark.unit
class TestChatCompletion:
    """Test choices[0].message.content extraction."""

    def test_extract(self) -> None:
        assert extract_chat_completion_text(chat_payload("  Hello  ")) == "Hello"

    def test_missing_choices(self) -> None:
        with pytest.raises(ProviderResponseError, match="chat completion"):
            extract_chat_completion_text({"choices": []})

    def test_null_content(self) -> None:
        with pytest.raises(ProviderResponseError, match="no text"):
            extract_chat_completion_text({"choices": [{"message": {"content": None}}]})

    def test_blank_content(self) -> None:
        with pytest.raises(ProviderResponseError, match="empty"):
            extract_chat_completion_text(chat_payload("   "))


@pytest.mark.unit
class TestCandidates:
    """Test candidates[0].content.parts[0].text extraction."""

    def test_extract_strips_framing(self) -> None:
        payload = candidates_payload('(this is a translation)\n"Hello world"')
        assert extract_candidates_text(payload) == "Hello world"

    def test_blocked_prompt(self) -> None:
        payload = {"candidates": [], "promptFeedback": {"blockReason": "SAFETY"}}
        with pytest.raises(ProviderResponseError, match="blocked"):
            extract_candidates_text(payload)

    @pytest.mark.parametrize("feedback", ["SAFETY", ["SAFETY"], 3])
    def test_non_object_prompt_feedback(self, feedback: object) -> None:
        payload = {"candidates": [], "promptFeedback": feedback}
        with pytest.raises(ProviderResponseError, match="no candidates"):
            extract_candidates_text(payload)

    def test_no_candidates(self) -> None:
        with pytest.raises(ProviderResponseError, match="no candidates"):
            extract_candidates_text({})

    def test_malformed_candidate(self) -> None:
        with pytest.raises(ProviderResponseError, match="candidate"):
            extract_candidates_text({"candidates": [{"content": {}}]})


@pytest.mark.unit
class TestMessageBlocks:
    """Test content[0].text extraction."""

    def test_extract(self) -> None:
        assert extract_message_blocks_text(message_payload("Hello\n")) == "Hello"

    def test_empty_content(self) -> None:
        with pytest.raises(ProviderResponseError):
            extract_message_blocks_text({"content": []})

    def test_non_dict_block(self) -> None:
        with pytest.raises(ProviderResponseError, match="Unexpected content block"):
            extract_message_blocks_text({"content": ["Hello"]})


@pytest.mark.unit
class TestMachineTranslation:
    """Test data.translations[0].translatedText extraction."""

    def test_extract(self) -> None:
        assert extract_machine_translation_text(mt_payload("안녕하세요")) == "안녕하세요"

    def test_missing_data(self) -> None:
        with pytest.raises(ProviderResponseError):
            extract_machine_translation_text({"error": "quota"})

    def test_detected_language(self) -> None:
        assert extract_detected_language(detect_payload("ko")) == "ko"

    def test_detected_language_missing(self) -> None:
        with pytest.raises(ProviderResponseError):
            extract_detected_language({"data": {"detections": [[]]}})


@pytest.mark.unit
class TestNormalizeResponse:
    """Test shape dispatch."""

    def test_every_shape_has_a_normalizer(self) -> None:
        assert set(NORMALIZERS) == set(ResponseShape)

    @pytest.mark.parametrize(
        ("shape", "payload"),
        [
            (ResponseShape.CHAT_COMPLETION, chat_payload("Hello")),
            (ResponseShape.CANDIDATES, candidates_payload("Hello")),
            (ResponseShape.MESSAGE_BLOCKS, message_payload("Hello")),
            (ResponseShape.MACHINE_TRANSLATION, mt_payload("Hello")),
        ],
    )
    def test_dispatch(self, shape: ResponseShape, payload: dict) -> None:
        assert normalize_response(shape, payload) == "Hello"

    def test_wrong_shape_raises(self) -> None:
        with pytest.raises(ProviderResponseError):
            normalize_response(ResponseShape.MESSAGE_BLOCKS, chat_payload("Hello"))
