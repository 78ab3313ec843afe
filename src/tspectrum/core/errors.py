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

"""Exception hierarchy shared by the engine.

Provider-level errors live in :mod:`tspectrum.providers.base` next to the
adapters that capture them.
"""

from __future__ import annotations


class TSpectrumError(Exception):
    """Base exception for all tspectrum errors."""

    pass


class ConfigurationError(TSpectrumError, ValueError):
    """Raised for missing credentials or malformed static tables.

    Never retried and never swallowed: the process is misconfigured.
    """

    pass


class JudgeError(TSpectrumError):
    """Raised when the spectrum judge returns an unusable answer."""

    pass


class QuotaExceededError(TSpectrumError):
    """Raised when a caller already reached the daily call ceiling."""

    def __init__(self, identity: str, limit: int):
        self.identity = identity
        self.limit = limit
        super().__init__(f"Daily limit of {limit} requests reached for {identity}")


class InputTooLargeError(TSpectrumError):
    """Raised when source text exceeds the configured character limit."""

    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(f"Source text has {length} characters (limit: {limit})")
