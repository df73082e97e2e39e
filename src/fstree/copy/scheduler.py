"""Bounded work-queue scheduler driving a recursive tree copy."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

from fstree.copy.handlers import copy_entry
from fstree.copy.types import CopyJob, CopyOptions, EntryPair
from fstree.errors import CopyTreeError
from fstree.infrastructure.logger import logger

CopyFn = Callable[[CopyJob, EntryPair], Awaitable[None]]


class CopyScheduler:
    """Dispatches queued entry pairs with at most `cap` tasks in flight.

    Once any task fails nothing more is dequeued; tasks already running are
    allowed to finish, then `job.done` fails with every recorded error.
    Pairs still queued at that point are dropped.
    """

    def __init__(self, cap: int, copy_fn: CopyFn = copy_entry) -> None:
        if cap < 1:
            raise ValueError(f"cap must be positive, got {cap}")
        loop = asyncio.get_running_loop()
        self.job = CopyJob(cap=cap, done=loop.create_future())
        self._copy_fn = copy_fn
        self._tasks: set[asyncio.Task[None]] = set()

    def submit(self, pair: EntryPair) -> asyncio.Future[None]:
        self.job.queue.append(pair)
        self._run()
        return self.job.done

    def _run(self) -> None:
        job = self.job

        if job.errors or not job.queue:
            # Nothing more to start; finish once outstanding work settles.
            if job.in_flight > 0:
                return
            self._finish()
            return

        while job.queue and job.in_flight < job.cap:
            pair = job.queue.popleft()
            job.in_flight += 1
            job.dispatched += 1
            job.peak_in_flight = max(job.peak_in_flight, job.in_flight)
            logger.debug("Dispatching entry", source=pair.source, in_flight=job.in_flight)
            task = asyncio.create_task(self._copy_one(pair))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    async def _copy_one(self, pair: EntryPair) -> None:
        job = self.job
        try:
            await self._copy_fn(job, pair)
        except Exception as exc:
            logger.warning("Copy task failed", source=pair.source, error=str(exc))
            job.errors.append(exc)
        finally:
            job.in_flight -= 1
            self._run()

    def _finish(self) -> None:
        job = self.job
        if job.done.done():
            return

        if not job.errors:
            logger.debug("Copy job finished", dispatched=job.dispatched, peak_in_flight=job.peak_in_flight)
            job.done.set_result(None)
            return

        logger.debug(
            "Copy job failed",
            errors=len(job.errors),
            abandoned=len(job.queue),
            dispatched=job.dispatched,
        )
        job.done.set_exception(CopyTreeError(job.errors))


def start_copy_tree(src: str, dst: str, options: CopyOptions | None = None) -> CopyJob:
    """Start copying src to dst on the running loop and return the job.

    `job.done` resolves to None on success or fails with CopyTreeError.
    """
    options = options or CopyOptions()
    scheduler = CopyScheduler(options.max_workers)
    scheduler.submit(EntryPair(src, dst))
    return scheduler.job


async def copy_tree(src: str, dst: str, options: CopyOptions | None = None) -> None:
    """Recursively copy src to dst, like `cp -R`.

    Only regular files, directories and symlinks are supported. The copy fails
    if dst already exists, and a failed copy leaves whatever it managed to
    write in place.
    """
    logger.info("Copying tree", src=src, dst=dst)
    job = start_copy_tree(src, dst, options)
    await job.done
    logger.info("Tree copied", src=src, dst=dst, entries=job.dispatched)
