"""Per-account mutual exclusion for in-process operations."""

import asyncio
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncGenerator, Dict, Optional


class AccountLockRegistry:
    """
    Hands out one asyncio.Lock per account id.

    Operations touching several accounts lock them in ascending id order,
    so two transfers in opposite directions cannot deadlock. Operations on
    unrelated accounts never wait on each other.

    A lock lives only while some operation holds or waits for it; the last
    one out removes it, so ids that never resolve to an account leave
    nothing behind.
    """

    def __init__(self):
        self._locks: Dict[int, asyncio.Lock] = {}
        self._users: Dict[int, int] = {}

    def lock_for(self, account_id: int) -> Optional[asyncio.Lock]:
        return self._locks.get(account_id)

    def _checkout(self, account_id: int) -> asyncio.Lock:
        lock = self._locks.get(account_id)
        if lock is None:
            lock = self._locks[account_id] = asyncio.Lock()
        self._users[account_id] = self._users.get(account_id, 0) + 1
        return lock

    def _checkin(self, account_id: int) -> None:
        remaining = self._users[account_id] - 1
        if remaining:
            self._users[account_id] = remaining
        else:
            del self._users[account_id]
            del self._locks[account_id]

    @asynccontextmanager
    async def hold(self, *account_ids: Optional[int]) -> AsyncGenerator[None, None]:
        """
        Hold the locks of all given accounts for the duration of the block.

        None ids (system side of a movement) and duplicates are ignored.
        """
        ordered = sorted({a for a in account_ids if a is not None})
        locks = [self._checkout(account_id) for account_id in ordered]
        try:
            async with AsyncExitStack() as stack:
                for lock in locks:
                    await stack.enter_async_context(lock)
                yield
        finally:
            for account_id in ordered:
                self._checkin(account_id)

    def __len__(self) -> int:
        return len(self._locks)
