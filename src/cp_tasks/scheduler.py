"""In-process daily job scheduler.

Each job is an asyncio task that sleeps until its UTC hour, runs, and goes
back to sleep. A failing run is logged; the loop keeps going.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta

from src.cp_common.datetime_utils import utc_now

logger = logging.getLogger(__name__)

Job = Callable[[], Awaitable[None]]


def seconds_until_hour(now: datetime, hour: int) -> float:
    """Seconds from ``now`` to the next ``hour``:00 UTC, in (0, 86400]."""
    target = now.replace(hour=hour, minute=0, second=0, microsecond=0)
    if target <= now:
        target += timedelta(days=1)
    return (target - now).total_seconds()


class Scheduler:
    def __init__(self) -> None:
        self._jobs: list[tuple[str, int, Job]] = []
        self._tasks: list[asyncio.Task[None]] = []

    def add_daily(self, name: str, hour_utc: int, job: Job) -> None:
        self._jobs.append((name, hour_utc, job))

    @property
    def running(self) -> bool:
        return any(not t.done() for t in self._tasks)

    def start(self) -> None:
        for name, hour, job in self._jobs:
            self._tasks.append(asyncio.create_task(self._loop(name, hour, job), name=name))
        logger.info("Scheduler started with %d jobs", len(self._jobs))

    async def stop(self) -> None:
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks.clear()
        logger.info("Scheduler stopped")

    async def _loop(self, name: str, hour: int, job: Job) -> None:
        while True:
            await asyncio.sleep(seconds_until_hour(utc_now(), hour))
            await run_job(name, job)


async def run_job(name: str, job: Job) -> None:
    logger.info("Job %s starting", name)
    try:
        await job()
    except asyncio.CancelledError:
        raise
    except Exception:
        logger.exception("Job %s failed", name)
    else:
        logger.info("Job %s finished", name)
