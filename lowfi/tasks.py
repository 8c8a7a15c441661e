"""Ownership of the player's background tasks."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any


class Tasks:
    """Keeps the background tasks together with the player's message queue."""

    def __init__(self, tx: asyncio.Queue) -> None:
        self.tx = tx
        self.handles: list[asyncio.Task] = []

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        """Start ``coro`` as a task and keep hold of it."""
        task = asyncio.get_running_loop().create_task(coro)
        self.handles.append(task)
        return task

    async def wait(self) -> Any:
        """Wait for the first task to finish, returning its result or raising its error.

        With no tasks running this never returns.
        """
        if not self.handles:
            await asyncio.get_running_loop().create_future()
        done, _ = await asyncio.wait(self.handles, return_when=asyncio.FIRST_COMPLETED)
        finished = next(task for task in self.handles if task in done)
        return finished.result()

    def cancel(self) -> None:
        """Ask every task to stop."""
        for task in self.handles:
            task.cancel()