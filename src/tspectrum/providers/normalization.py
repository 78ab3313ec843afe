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

"""Response normalization for provider payloads.

Providers answer in one of a closed set of shapes. Each shape has exactly
one extraction function, registered in ``NORMALIZERS`` and selected by the
adapter's declared :class:`ResponseShape`, never by inspecting the payload.

Generative models often wrap the translation in conversational framing
("Here is the translation:", a parenthetical aside, quotes or emphasis).
:func:`strip_conversational_wrapping` removes that framing.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from enum import Enum
from typing import Any

from .base import ProviderResponseError


class ResponseShape(str, Enum):
    """Known provider response variants."""

    CHAT_COMPLETION = "chat_completion"  # choices[0].message.content
    CANDIDATES = "candidates"  # candidates[0].content.parts[0].text
    MESSAGE_BLOCKS = "message_blocks"  # content[0].text
    MACHINE_TRANSLATION = "machine_translation"  # data.translations[0].translatedText


# First run opened by a quote or asterisk and closed by a quote or asterisk.
# Non-greedy and single-line.
QUOTED_RUN_PATTERN = re.compile(r'[*"](.*?)["*]')


def strip_conversational_wrapping(text: str) -> str:
    """Remove framing a generative model put around its translation.

    Steps, in this order:
    1. A parenthetical aside wrapping the whole text is unwrapped (its first
       quoted or emphasized run is kept if it has one).
    2. If a quoted or emphasized run exists, it is the translation.
    3. Otherwise a line break marks a preamble: everything up to and
       including the first line break is dropped.

    Text with no wrapping parentheses, no quote or asterisk run and no line
    break is returned trimmed and otherwise unchanged.

    Example:
        >>> strip_conversational_wrapping('(this is a translation)\\n"Hello world"')
        'Hello world'
        >>> strip_conversational_wrapping("Here is the translation:\\nHello")
        'Hello'
    """
    result = text.strip()

    if result.startswith("(") and result.endswith(")"):
        inner = QUOTED_RUN_PATTERN.search(result)
        if inner and inner.group(1):
            result = inner.group(1).strip()
        else:
            result = result[1:-1].strip()

    match = QUOTED_RUN_PATTERN.search(result)
    if match and match.group(1):
        return match.group(1).strip()

    line_break = result.find("\n")
    if line_break > -1:
        return result[line_break + 1 :].strip()
    return result


def _require_text(value: Any, shape: ResponseShape) -> str:
    if not isinstance(value, str):
        raise ProviderResponseError(f"{shape.value} response has no text field")
    if not value.strip():
        raise ProviderResponseError(f"{shape.value} response text is empty")
    return value.strip()


def extract_chat_completion_text(payload: dict[str, Any]) -> str:
    """Read ``choices[0].message.content``."""
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise ProviderResponseError(f"Failed to parse chat completion response: {e!r}") from e
    return _require_text(content, ResponseShape.CHAT_COMPLETION)


def extract_candidates_text(payload: dict[str, Any]) -> str:
    """Read ``candidates[0].content.parts[0].text`` and strip framing."""
    candidates = payload.get("candidates") or []
    if not candidates:
        feedback = payload.get("promptFeedback")
        if isinstance(feedback, dict) and feedback.get("blockReason"):
            raise ProviderResponseError(f"Request blocked: {feedback['blockReason']}")
        raise ProviderResponseError("Response has no candidates")

    try:
        text = candidates[0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise ProviderResponseError(f"Failed to parse candidate response: {e!r}") from e

    cleaned = strip_conversational_wrapping(_require_text(text, ResponseShape.CANDIDATES))
    return _require_text(cleaned, ResponseShape.CANDIDATES)


def extract_message_blocks_text(payload: dict[str, Any]) -> str:
    """Read the first content block's ``text``."""
    try:
        block = payload["content"][0]
    except (KeyError, IndexError, TypeError) as e:
        raise ProviderResponseError(f"Failed to parse message response: {e!r}") from e
    if not isinstance(block, dict):
        raise ProviderResponseError(f"Unexpected content block: {type(block).__name__}")
    return _require_text(block.get("text"), ResponseShape.MESSAGE_BLOCKS)


def extract_machine_translation_text(payload: dict[str, Any]) -> str:
    """Read ``data.translations[0].translatedText``."""
    try:
        text = payload["data"]["translations"][0]["translatedText"]
    except (KeyError, IndexError, TypeError) as e:
        raise ProviderResponseError(f"Failed to parse translation response: {e!r}") from e
    return _require_text(text, ResponseShape.MACHINE_TRANSLATION)


def extract_detected_language(payload: dict[str, Any]) -> str:
    """Read ``data.detections[0][0].language`` from a detection response."""
    try:
        language = payload["data"]["detections"][0][0]["language"]
    except (KeyError, IndexError, TypeError) as e:
        raise ProviderResponseError(f"Failed to parse detection response: {e!r}") from e
    if not isinstance(language, str) or not language:
        raise ProviderResponseError("Detection response has no language")
    return language


NORMALIZERS: dict[ResponseShape, Callable[[dict[str, Any]], str]] = {
    ResponseShape.CHAT_COMPLETION: extract_chat_completion_text,
    ResponseShape.CANDIDATES: extract_candidates_text,
    ResponseShape.MESSAGE_BLOCKS: extract_message_blocks_text,
    ResponseShape.MACHINE_TRANSLATION: extract_machine_translation_text,
}


def normalize_response(shape: ResponseShape, payload: dict[str, Any]) -> str:
    """Extract the translation from a payload of the given shape.

    Raises:
        ProviderResponseError: If the payload does not match the shape
    """
    return NORMALIZERS[shape](payload)
