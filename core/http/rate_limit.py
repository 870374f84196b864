"""
Rate limiting utilities for external API calls.

One :class:`RateLimiter` is owned by each client and shared by every request
made through it. Budgets are leaky buckets from aiolimiter, one per API
category, plus an implicit category covering all APIs.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass

from aiolimiter import AsyncLimiter

logger = logging.getLogger(__name__)

ALL_APIS = "all"


@dataclass(frozen=True)
class RateBudget:
    """Allow ``max_rate`` calls per ``time_period`` seconds."""

    max_rate: float
    time_period: float = 60.0

    def __post_init__(self) -> None:
        # A bucket smaller than one call could never admit anything
        if self.max_rate < 1 or self.time_period <= 0:
            msg = f"Invalid rate budget: {self.max_rate}/{self.time_period}s"
            raise ValueError(msg)

    @property
    def drip_interval(self) -> float:
        return self.time_period / self.max_rate


class RateLimiter:
    """
    Multi-category gate in front of every outbound call.

    ``acquire`` suspends until each requested category (and the all-APIs
    category) has spare budget, then debits all of them together. Callers
    asking for the same set of categories queue first come, first served;
    callers with a different set never wait behind them, so a throttled
    category cannot hold up another one that still has budget.
    Categories without a budget are not throttled.
    """

    def __init__(
        self,
        budgets: Mapping[Hashable, RateBudget] | None = None,
        *,
        all_category: Hashable = ALL_APIS,
    ) -> None:
        self._budgets = dict(budgets or {})
        self._limiters = {
            category: AsyncLimiter(budget.max_rate, budget.time_period)
            for category, budget in self._budgets.items()
        }
        self._all_category = all_category
        # One FIFO queue per distinct set of throttled categories
        self._queues: dict[frozenset[Hashable], asyncio.Lock] = {}

    @property
    def budgets(self) -> dict[Hashable, RateBudget]:
        return dict(self._budgets)

    def _categories(self, categories: Iterable[Hashable]) -> list[Hashable]:
        wanted = {self._all_category, *categories}
        return [category for category in self._limiters if category in wanted]

    def has_capacity(self, categories: Iterable[Hashable]) -> bool:
        """Return True when ``acquire`` would not have to wait right now."""
        return all(
            self._limiters[category].has_capacity()
            for category in self._categories(categories)
        )

    async def acquire(self, categories: Iterable[Hashable]) -> None:
        selected = self._categories(categories)
        if not selected:
            return

        queue = self._queues.setdefault(frozenset(selected), asyncio.Lock())
        async with queue:
            while True:
                blocked = [
                    category
                    for category in selected
                    if not self._limiters[category].has_capacity()
                ]
                if not blocked:
                    break
                delay = max(self._budgets[category].drip_interval for category in blocked)
                logger.debug(
                    "Rate limit reached for %s. Waiting %.2f seconds.",
                    ", ".join(str(category) for category in blocked),
                    delay,
                )
                await asyncio.sleep(delay)

            # Every limiter has capacity, so none of these awaits suspends
            # and no other task can take the budget between check and debit.
            for category in selected:
                await self._limiters[category].acquire()
