"""Utilities for running and monitoring background asyncio tasks."""
from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Callable

from ftptube.core.request_context import request_context

Logger = logging.Logger


def monitor_task(task: asyncio.Task, *, name: str, logger: Logger) -> asyncio.Task:
    """Attach a callback to log unexpected task termination."""

    def _callback(finished: asyncio.Task) -> None:
        with contextlib.suppress(asyncio.CancelledError):
            exc = finished.exception()
            if exc is None:
                return
            logger.error("Background task %s crashed: %s", name, exc, exc_info=exc)

    task.add_done_callback(_callback)
    return task


class PeriodicTask:
    """Call a synchronous function every ``interval`` seconds until stopped."""

    def __init__(self, func: Callable[[], object], *, interval: float, name: str, logger: Logger) -> None:
        self._func = func
        self._interval = interval
        self._name = name
        self._logger = logger
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        if self._interval <= 0:
            self._logger.info("%s disabled (interval=%s)", self._name, self._interval)
            return
        task = asyncio.create_task(self._run(), name=self._name)
        self._task = monitor_task(task, name=self._name, logger=self._logger)

    async def stop(self) -> None:
        if not self._task:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def _run(self) -> None:
        with request_context(f"bg:{self._name}"):
            while True:
                await asyncio.sleep(self._interval)
                try:
                    self._func()
                except Exception:  # noqa: BLE001
                    self._logger.exception("%s iteration failed", self._name)
