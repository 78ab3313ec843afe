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

"""Daily request quotas for anonymous and free-tier callers.

Two counting strategies share one ceiling:

- Anonymous callers are keyed by network address in a
  :class:`QuotaStateStore`; admission increments the stored count (or
  resets it to 1 on a new local day).
- Free-tier accounts are counted from durable storage through a
  :class:`JobCountSource`; the accepted jobs are themselves the count.

Both paths are check-then-act and not atomic: concurrent requests from
one identity can be admitted slightly past the ceiling. Day rollover is
detected lazily on the next access; no expiry job exists.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import date

from tspectrum.core.errors import ConfigurationError, QuotaExceededError
from tspectrum.core.models import CallerIdentity, QuotaRecord, ServiceTier

logger = logging.getLogger(__name__)

DEFAULT_DAILY_LIMIT = 5


class QuotaStateStore(ABC):
    """Per-identity counters for the current local day."""

    @abstractmethod
    def get(self, identity: str) -> QuotaRecord | None:
        """Stored record for an identity, possibly from an earlier day."""
        pass

    @abstractmethod
    def increment_or_reset(self, identity: str, today: date) -> QuotaRecord:
        """Increment today's count, or start at 1 if the record is stale or missing."""
        pass


class InMemoryQuotaStore(QuotaStateStore):
    """Process-local quota store backed by a dict.

    Counts are lost on restart and not shared between processes.
    """

    def __init__(self) -> None:
        self._records: dict[str, QuotaRecord] = {}

    def get(self, identity: str) -> QuotaRecord | None:
        return self._records.get(identity)

    def increment_or_reset(self, identity: str, today: date) -> QuotaRecord:
        current = self._records.get(identity)
        if current is None or current.window_date != today:
            record = QuotaRecord(identity=identity, window_date=today, count=1)
        else:
            record = QuotaRecord(identity=identity, window_date=today, count=current.count + 1)
        self._records[identity] = record
        return record

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)


class JobCountSource(ABC):
    """Durable storage answering how many jobs an account ran on a day."""

    @abstractmethod
    async def count_jobs_on(self, account_id: str, day: date) -> int:
        pass


class QuotaTracker:
    """Enforces the daily ceiling before any provider is called.

    Attributes:
        store: Counter store for anonymous callers
        job_counts: Durable job counter for free-tier accounts
        daily_limit: Maximum admitted requests per identity per day
    """

    def __init__(
        self,
        store: QuotaStateStore | None = None,
        job_counts: JobCountSource | None = None,
        daily_limit: int = DEFAULT_DAILY_LIMIT,
        today: Callable[[], date] = date.today,
    ):
        """Initialize quota tracker.

        Args:
            store: Anonymous counter store (default: in-memory)
            job_counts: Durable job counter; required for admit_account
            daily_limit: Daily ceiling
            today: Clock returning the current local date
        """
        if daily_limit <= 0:
            raise ValueError(f"daily_limit must be positive, got {daily_limit}")
        self.store = store if store is not None else InMemoryQuotaStore()
        self.job_counts = job_counts
        self.daily_limit = daily_limit
        self._today = today

    def used_today(self, identity: str) -> int:
        """Admitted anonymous requests for an identity today."""
        record = self.store.get(identity)
        if record is None or record.window_date != self._today():
            return 0
        return record.count

    def admit_anonymous(self, address: str) -> QuotaRecord:
        """Admit an unauthenticated caller or reject it.

        The counter is incremented at admission, regardless of how the
        request later turns out.

        Args:
            address: Caller network address

        Returns:
            Updated quota record

        Raises:
            QuotaExceededError: If the address reached today's ceiling
        """
        today = self._today()
        if self.used_today(address) >= self.daily_limit:
            logger.warning(f"Quota exceeded for address {address}")
            raise QuotaExceededError(address, self.daily_limit)
        return self.store.increment_or_reset(address, today)

    async def admit_account(self, account_id: str) -> int:
        """Admit a free-tier account or reject it.

        Args:
            account_id: Account identifier

        Returns:
            Number of jobs the account already ran today

        Raises:
            QuotaExceededError: If the account reached today's ceiling
        """
        if self.job_counts is None:
            raise ConfigurationError("QuotaTracker has no job count source for account quotas")
        used = await self.job_counts.count_jobs_on(account_id, self._today())
        if used >= self.daily_limit:
            logger.warning(f"Quota exceeded for account {account_id}")
            raise QuotaExceededError(account_id, self.daily_limit)
        return used

    async def admit(self, caller: CallerIdentity) -> None:
        """Admit a caller according to who they are.

        Paid accounts are not limited.

        Raises:
            QuotaExceededError: If the caller reached today's ceiling
        """
        if caller.is_authenticated:
            if caller.tier is ServiceTier.PAID:
                return
            assert caller.account_id is not None
            await self.admit_account(caller.account_id)
        else:
            assert caller.address is not None
            self.admit_anonymous(caller.address)
