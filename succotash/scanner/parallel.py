"""
Parallel processing module for the scanner package.

Fans image analysis out over a thread pool with progress tracking and
callback support.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Optional, Callable, Any

from ..config import DEFAULT_WORKERS
from ..models import ImageRecord
from .analysis import analyze_image
from .dependencies import HAS_TQDM, _tqdm_class


def analyze_images_parallel(
    filepaths: list[str],
    max_workers: int = DEFAULT_WORKERS,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    show_progress: bool = True,
    logger: Optional[logging.Logger] = None,
) -> list[ImageRecord]:
    """
    Analyze multiple images in parallel.

    Results are collected as they complete and returned in the order of
    `filepaths`.

    Args:
        filepaths: List of image paths to analyze
        max_workers: Number of parallel workers
        progress_callback: Optional callback(current, total) for progress updates
        show_progress: Whether to show tqdm progress bar
        logger: Optional logger for status messages

    Returns:
        List of ImageRecord objects, one per path
    """
    if not filepaths:
        return []

    total = len(filepaths)
    results: list[Optional[ImageRecord]] = [None] * total

    pbar: Optional[Any] = None
    if HAS_TQDM and show_progress and _tqdm_class is not None:
        pbar = _tqdm_class(
            total=total,
            desc="Analyzing images",
            unit="img",
            ncols=80,
        )

    # Batch progress callbacks to reduce overhead (every 1000 files or 1 second)
    last_callback_time = time.time()
    callback_batch_size = 1000
    callback_interval = 1.0  # seconds

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        futures = {
            executor.submit(analyze_image, path): index
            for index, path in enumerate(filepaths)
        }

        for done, future in enumerate(as_completed(futures), 1):
            index = futures[future]
            try:
                results[index] = future.result()
            except Exception as e:
                # analyze_image records expected failures itself
                if logger:
                    logger.error(f"Unexpected error analyzing {filepaths[index]}: {e}")
                results[index] = ImageRecord(path=filepaths[index], error=str(e))

            if pbar is not None:
                pbar.update(1)

            if progress_callback:
                current_time = time.time()
                should_callback = (
                    done % callback_batch_size == 0 or
                    current_time - last_callback_time >= callback_interval or
                    done == total
                )
                if should_callback:
                    progress_callback(done, total)
                    last_callback_time = current_time

    if pbar is not None:
        pbar.close()

    if logger:
        failed = sum(1 for r in results if r is not None and r.error)
        logger.debug(f"Analyzed {total:,} files ({failed:,} failed)")

    return [r for r in results if r is not None]


__all__ = ['analyze_images_parallel']
