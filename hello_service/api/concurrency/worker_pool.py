"""
hello_service.api.concurrency.worker_pool

Purpose:
    Bounded worker pool and admission gate.

Design Notes:
    - BoundedWorkerPool wraps ThreadPoolExecutor(max_workers=max_size). The stdlib
      executor queues without limit, so admission is capped by a semaphore sized
      max_size + queue_capacity. Submissions beyond that are rejected immediately
      (TaskRejectedError) and logged: reject-and-log, never unbounded growth.
    - Threads are created lazily up to max_size and reused while idle; core_size is
      kept for sizing validation and reporting.
    - Tasks run inside a copy of the submitter's contextvars context, so the
      correlation id follows the task and never sticks to the worker thread.
    - AdmissionGate is the same bounded-slot idea for inbound requests.

Created:
    2026-10-13
"""

from __future__ import annotations

import contextvars
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, TypeVar

from hello_service.api.errors import TaskRejectedError
from hello_service.api.observability.metrics import record_rejection
from hello_service.shared.models.app_config import WorkerPoolConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AdmissionGate:
    """Non-blocking counting gate. try_acquire() never waits."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must be >= 0")
        self._capacity = capacity
        self._in_flight = 0
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def in_flight(self) -> int:
        with self._lock:
            return self._in_flight

    def try_acquire(self) -> bool:
        with self._lock:
            if self._in_flight >= self._capacity:
                return False
            self._in_flight += 1
            return True

    def release(self) -> None:
        with self._lock:
            if self._in_flight <= 0:
                raise RuntimeError("AdmissionGate released more times than acquired")
            self._in_flight -= 1


class BoundedWorkerPool:
    def __init__(
        self,
        core_size: int = 2,
        max_size: int = 10,
        queue_capacity: int = 100,
        name: str = "worker-pool",
    ) -> None:
        if core_size < 1:
            raise ValueError("core_size must be >= 1")
        if max_size < core_size:
            raise ValueError(f"max_size ({max_size}) must be >= core_size ({core_size})")
        if queue_capacity < 0:
            raise ValueError("queue_capacity must be >= 0")

        self.core_size = core_size
        self.max_size = max_size
        self.queue_capacity = queue_capacity
        self.name = name

        self._gate = AdmissionGate(max_size + queue_capacity)
        self._executor = ThreadPoolExecutor(max_workers=max_size, thread_name_prefix=name)

        logger.info(
            "%s: started core=%d max=%d queue=%d capacity=%d",
            name,
            core_size,
            max_size,
            queue_capacity,
            self.capacity,
        )

    @classmethod
    def from_config(cls, config: WorkerPoolConfig, name: str = "worker-pool") -> "BoundedWorkerPool":
        return cls(
            core_size=config.core_size,
            max_size=config.max_size,
            queue_capacity=config.queue_capacity,
            name=name,
        )

    @property
    def capacity(self) -> int:
        return self._gate.capacity

    @property
    def in_flight(self) -> int:
        return self._gate.in_flight

    def submit(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> Future[T]:
        """
        Submit fn for execution.

        Raises:
            TaskRejectedError when max_size + queue_capacity tasks are already admitted.
        """
        if not self._gate.try_acquire():
            logger.warning(
                "%s: task rejected (in_flight=%d capacity=%d): %r",
                self.name,
                self._gate.in_flight,
                self.capacity,
                fn,
            )
            record_rejection("task")
            raise TaskRejectedError(self.name, self.capacity)

        ctx = contextvars.copy_context()

        def _run() -> T:
            try:
                return ctx.run(fn, *args, **kwargs)
            finally:
                # Released before the future resolves so waiters observe the free slot.
                self._gate.release()

        try:
            future = self._executor.submit(_run)
        except RuntimeError:
            # Executor already shut down.
            self._gate.release()
            raise

        future.add_done_callback(self._release_if_cancelled)
        return future

    def _release_if_cancelled(self, future: Future) -> None:
        # A task cancelled before it started never reaches _run's finally.
        if future.cancelled():
            self._gate.release()

    def shutdown(self, wait: bool = True, cancel_pending: bool = False) -> None:
        logger.info("%s: shutting down (wait=%s in_flight=%d)", self.name, wait, self.in_flight)
        self._executor.shutdown(wait=wait, cancel_futures=cancel_pending)
