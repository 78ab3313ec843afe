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

"""Provider adapters and transports.

Four adapter variants, one per response shape:
- OpenAIAdapter: chat completion
- GeminiAdapter: generative multi-candidate, with framing removal
- AnthropicAdapter: message-style single block
- GoogleTranslateAdapter: deterministic machine translation (detect, then translate)
"""

from .anthropic_adapter import AnthropicAdapter
from .base import (
    DEFAULT_LANGUAGE_PAIR,
    BaseProviderAdapter,
    LanguagePair,
    ProviderAuthenticationError,
    ProviderError,
    ProviderRateLimitError,
    ProviderResponseError,
    ProviderTimeoutError,
    build_instruction,
)
from .gemini_adapter import GeminiAdapter
from .google_translate_adapter import GoogleTranslateAdapter
from .normalization import ResponseShape, normalize_response, strip_conversational_wrapping
from .openai_adapter import OpenAIAdapter
from .transport import (
    AnthropicTransport,
    BaseTransport,
    GeminiTransport,
    GoogleTranslateTransport,
    OpenAITransport,
    RESTTransport,
)

__all__ = [
    "AnthropicAdapter",
    "AnthropicTransport",
    "BaseProviderAdapter",
    "BaseTransport",
    "DEFAULT_LANGUAGE_PAIR",
    "GeminiAdapter",
    "GeminiTransport",
    "GoogleTranslateAdapter",
    "GoogleTranslateTransport",
    "LanguagePair",
    "OpenAIAdapter",
    "OpenAITransport",
    "ProviderAuthenticationError",
    "ProviderError",
    "ProviderRateLimitError",
    "ProviderResponseError",
    "ProviderTimeoutError",
    "RESTTransport",
    "ResponseShape",
    "build_instruction",
    "normalize_response",
    "strip_conversational_wrapping",
]
