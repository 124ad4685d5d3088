"""Lightweight thread-pool execution for read-only catalog work."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Optional
import threading

import psutil

from carolus.backend.common.errors import TaskError
from carolus.backend.common.logging import get_logger

log = get_logger(__name__)


def default_worker_count() -> int:
    return psutil.cpu_count(logical=True) or 1


@dataclass
class TaskSpec:
    fn: Callable[..., Any]
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = field(default_factory=dict)
    name: str = "task"


class TaskRunner:
    """Tiny in-process task runner; tasks must not mutate shared state."""

    def __init__(self, max_workers: Optional[int] = None, *, context: Optional[str] = None):
        self._context = context or "task_runner"
        workers = max(1, max_workers or default_worker_count())
        self._executor = ThreadPoolExecutor(
            max_workers=workers,
            thread_name_prefix="carolus-task",
        )
        self._closed = False
        self._lock = threading.Lock()
        log.debug("task_runner_start", extra={"context": self._context, "workers": workers})

    def submit(self, spec: TaskSpec) -> Future:
        with self._lock:
            if self._closed:
                raise TaskError("TaskRunner is closed")

            def _wrapped():
                log.debug("task_start", extra={"task": spec.name})
                result = spec.fn(*spec.args, **spec.kwargs)
                log.debug("task_done", extra={"task": spec.name})
                return result

            return self._executor.submit(_wrapped)

    def close(self, wait: bool = True) -> None:
        with self._lock:
            if not self._closed:
                self._executor.shutdown(wait=wait, cancel_futures=not wait)
                self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close(wait=True)
