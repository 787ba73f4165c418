"""
Async processing utilities for AquaPreset.

Moves blocking file reads off the event loop and runs many sidecar
imports concurrently with bounded fan-out.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Awaitable, Callable, List, Optional

logger = logging.getLogger(__name__)


class AsyncProcessor:
    """
    Async processing manager for file ingestion.

    Blocking I/O runs in a thread pool; parsing stays on the caller's side.
    Results of `concurrent_map` come back in input order, with exceptions
    returned in place rather than raised.
    """

    def __init__(self, max_workers: Optional[int] = None):
        """
        Initialize the async processor.

        Args:
            max_workers: Maximum thread pool workers (default: executor default)
        """
        self.thread_pool = ThreadPoolExecutor(max_workers=max_workers)
        self._shutdown = False

        logger.debug(f"AsyncProcessor initialized: max_workers={max_workers}")

    async def run_in_thread(self, func: Callable, *args, **kwargs) -> Any:
        """
        Run a blocking function in the thread pool.

        Args:
            func: Function to execute
            *args: Function arguments
            **kwargs: Function keyword arguments

        Returns:
            Function result
        """
        if self._shutdown:
            raise RuntimeError("AsyncProcessor is shutting down")

        loop = asyncio.get_running_loop()
        logger.debug(f"Running {getattr(func, '__name__', func)} in thread pool")
        return await loop.run_in_executor(
            self.thread_pool,
            partial(func, *args, **kwargs)
        )

    async def concurrent_map(self, func: Callable[[Any], Awaitable[Any]], items: List[Any],
                             max_concurrent: int = 10) -> List[Any]:
        """
        Apply a coroutine function to items with controlled concurrency.

        Args:
            func: Coroutine function to apply
            items: Items to process
            max_concurrent: Maximum concurrent operations

        Returns:
            List of results (or exceptions) in same order as input
        """
        if not items:
            return []

        semaphore = asyncio.Semaphore(max(1, max_concurrent))

        async def process_item(item):
            async with semaphore:
                return await func(item)

        tasks = [process_item(item) for item in items]
        return await asyncio.gather(*tasks, return_exceptions=True)

    def shutdown(self, wait: bool = True):
        """
        Shutdown the thread pool.

        Args:
            wait: Wait for running reads to complete
        """
        self._shutdown = True
        self.thread_pool.shutdown(wait=wait)
        logger.debug("AsyncProcessor shutdown complete")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()
        return False
