"""
Parallel Executor for onboarding agent runs.

Launches independent sub-tasks on the running event loop and joins them
with an all-settled barrier: every task is awaited to completion, failure
or timeout before results are handed back, and one task failing never
cancels its siblings. Results come back in submission order regardless of
which task settled first.
"""

import asyncio
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional


class RunStatus(Enum):
    """Sub-task execution status."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass
class SubTask:
    """
    A unit of work for parallel execution.

    executor_func is called with no arguments and may return a value or an
    awaitable.
    """
    id: str
    description: str
    executor_func: Callable[[], Any]
    status: RunStatus = RunStatus.PENDING
    result: Optional[Any] = None
    error: Optional[BaseException] = None
    start_time: Optional[float] = None
    end_time: Optional[float] = None

    @property
    def succeeded(self) -> bool:
        return self.status == RunStatus.COMPLETED


class ParallelExecutor:
    """
    Runs sub-tasks concurrently and waits for all of them to settle.

    Features:
    - Bounded concurrency (default 4)
    - Optional per-task timeout
    - Failure isolation: exceptions are captured on the SubTask
    """

    def __init__(self, max_concurrent: int = 4, timeout: Optional[float] = None):
        """
        Initialize parallel executor.

        Args:
            max_concurrent: Maximum sub-tasks running at once
            timeout: Per-task timeout in seconds (None waits indefinitely)
        """
        if max_concurrent < 1:
            raise ValueError(f"max_concurrent must be >= 1 (got {max_concurrent})")

        self.max_concurrent = max_concurrent
        self.timeout = timeout

        # Statistics
        self._total_tasks = 0
        self._successful_tasks = 0
        self._failed_task_count = 0
        self._total_execution_time = 0.0

    async def execute(self, tasks: List[SubTask]) -> List[SubTask]:
        """
        Execute all tasks and wait until every one has settled.

        Args:
            tasks: Sub-tasks to run; ids must be unique

        Returns:
            The same SubTask objects, in submission order, with status,
            result or error filled in

        Raises:
            ValueError: If two tasks share an id
        """
        ids = [t.id for t in tasks]
        if len(ids) != len(set(ids)):
            raise ValueError("Sub-task ids must be unique")

        if not tasks:
            return []

        start_time = time.time()
        semaphore = asyncio.Semaphore(self.max_concurrent)

        futures = [asyncio.create_task(self._run_task(task, semaphore)) for task in tasks]
        try:
            await asyncio.wait(futures)
        finally:
            self._total_execution_time += time.time() - start_time

        for task in tasks:
            self._total_tasks += 1
            if task.succeeded:
                self._successful_tasks += 1
            else:
                self._failed_task_count += 1

        return tasks

    async def _run_task(self, task: SubTask, semaphore: asyncio.Semaphore):
        """Run one sub-task, capturing its outcome instead of raising."""
        async with semaphore:
            task.status = RunStatus.RUNNING
            task.start_time = time.time()
            try:
                if self.timeout is not None:
                    task.result = await asyncio.wait_for(self._call(task), timeout=self.timeout)
                else:
                    task.result = await self._call(task)
                task.status = RunStatus.COMPLETED

            except asyncio.TimeoutError:
                task.status = RunStatus.TIMED_OUT
                task.error = TimeoutError(f"Task {task.id} timed out after {self.timeout}s")

            except Exception as e:
                task.status = RunStatus.FAILED
                task.error = e

            finally:
                task.end_time = time.time()

    async def _call(self, task: SubTask) -> Any:
        """Handle both sync and async callables."""
        result = task.executor_func()
        if asyncio.iscoroutine(result) or isinstance(result, asyncio.Future):
            return await result
        return result

    def get_statistics(self) -> Dict[str, Any]:
        """Get execution statistics across all execute() calls."""
        return {
            "total_tasks": self._total_tasks,
            "successful": self._successful_tasks,
            "failed": self._failed_task_count,
            "completion_rate": self._successful_tasks / self._total_tasks if self._total_tasks > 0 else 0,
            "total_execution_time": self._total_execution_time,
            "max_concurrent": self.max_concurrent,
        }
