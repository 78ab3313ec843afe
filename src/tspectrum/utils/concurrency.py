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

"""Structured concurrent join.

:func:`settle_all` runs awaitables concurrently and waits for every one of
them to finish, success or failure, before returning. Results come back in
submission order, so callers can rely on it for stable output ordering.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Settled(Generic[T]):
    """Outcome of one awaitable: a value or the exception it raised.

    Attributes:
        value: Result when the awaitable succeeded
        error: Exception when it failed
    """

    value: T | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def settle_all(awaitables: Iterable[Awaitable[T]]) -> list[Settled[T]]:
    """Run awaitables concurrently and collect every outcome.

    No failure cancels or short-circuits its siblings. Cancellation of the
    caller still propagates.

    Args:
        awaitables: Coroutines or futures to run

    Returns:
        One Settled per awaitable, in submission order

    Example:
        >>> outcomes = await settle_all([fetch("a"), fetch("b")])
        >>> [o.value for o in outcomes if o.ok]
    """
    results = await asyncio.gather(*awaitables, return_exceptions=True)

    settled: list[Settled[T]] = []
    for result in results:
        if isinstance(result, asyncio.CancelledError):
            raise result
        if isinstance(result, BaseException):
            settled.append(Settled(error=result))
        else:
            settled.append(Settled(value=result))
    return settled
