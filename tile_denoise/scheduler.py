"""Fork-join execution of per-tile work.

Tiles are data-independent, so every tile is submitted to a fixed-size
thread pool and the caller blocks until all of them are done. OpenCV
releases the GIL while filtering, which lets the threads run in parallel.
Results come back in tile order regardless of completion order.
"""

import logging
import os
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import TypeVar

from tile_denoise.errors import TileProcessingFailure
from tile_denoise.models.core_models import Region

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SKIPPED = object()


def default_worker_count() -> int:
    """Number of worker threads used when no count is configured."""
    return os.cpu_count() or 1


class TilePool:
    """Fixed-size worker pool with a single submit-all-then-join primitive.

    Attributes:
        max_workers: Number of worker threads.
    """

    def __init__(self, max_workers: int | None = None):
        """Initialize the pool size.

        Args:
            max_workers: Worker thread count, None for the CPU count.

        Raises:
            ValueError: If max_workers is smaller than 1.
        """
        if max_workers is None:
            max_workers = default_worker_count()
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.max_workers = max_workers

    def run_all(
        self, regions: Sequence[Region], process: Callable[[Region], T]
    ) -> list[T]:
        """Run ``process`` once per region and wait for all of them.

        Args:
            regions: Tiles to process.
            process: Callable applied to each tile in a worker thread.

        Returns:
            The return values of ``process`` in the order of ``regions``.

        Raises:
            TileProcessingFailure: If any invocation raised. Tasks that had
                not started are cancelled and running ones are joined first.
        """
        if not regions:
            return []

        with ThreadPoolExecutor(
            max_workers=min(self.max_workers, len(regions)),
            thread_name_prefix="tile",
        ) as executor:
            failed = threading.Event()

            def guarded(region: Region):
                # Tasks picked up after a failure do no work
                if failed.is_set():
                    return _SKIPPED
                try:
                    return process(region)
                except Exception:
                    failed.set()
                    raise

            futures: list[Future] = [
                executor.submit(guarded, region) for region in regions
            ]
            done, _ = wait(futures, return_when=FIRST_EXCEPTION)
            if any(f.exception() is not None for f in done):
                for future in futures:
                    future.cancel()
            wait(futures)

        results: list[T] = []
        for region, future in zip(regions, futures):
            if future.cancelled():
                continue
            error = future.exception()
            if error is not None:
                logger.error(f"Tile ({region.col}, {region.row}) failed: {error}")
                raise TileProcessingFailure(
                    f"processing tile ({region.col}, {region.row}) failed: {error}",
                    region=region,
                ) from error
            result = future.result()
            if result is not _SKIPPED:
                results.append(result)

        return results


def run_all(
    regions: Sequence[Region],
    process: Callable[[Region], T],
    max_workers: int | None = None,
) -> list[T]:
    """Process all regions on a fresh pool, see :meth:`TilePool.run_all`."""
    return TilePool(max_workers).run_all(regions, process)
