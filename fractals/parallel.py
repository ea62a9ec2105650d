"""Order-preserving data-parallel map over flat numpy arrays."""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional

import numpy as np

MIN_CHUNK_SIZE = 1024


def _chunk_bounds(length: int, workers: int, chunk_size: Optional[int]) -> list[tuple[int, int]]:
    if chunk_size is None:
        chunk_size = max(MIN_CHUNK_SIZE, -(-length // workers))
    return [(start, min(start + chunk_size, length)) for start in range(0, length, chunk_size)]


def parallel_map(
    func: Callable[[Any], Any],
    values: np.ndarray,
    dtype: Any = None,
    *,
    workers: Optional[int] = None,
    chunk_size: Optional[int] = None,
    vectorized: bool = False,
) -> np.ndarray:
    """Apply ``func`` to every element of ``values`` and keep the input order.

    ``func`` must be pure: each output depends only on its own input. The
    array is split into contiguous chunks that are dispatched to a thread
    pool; ``executor.map`` yields them back in submission order, so
    ``result[i]`` always corresponds to ``values[i]``.

    With ``vectorized=True`` ``func`` receives a whole chunk and must return
    an array of the same length, which lets numpy or TensorFlow kernels do the
    elementwise work outside the GIL; only this mode gains real concurrency.
    Otherwise ``func`` is called once per element and the results are
    collected with ``dtype``; those calls hold the GIL, so the chunks
    effectively run one after another.
    """

    values = np.asarray(values)
    workers = workers or os.cpu_count() or 1

    def run_chunk(bounds: tuple[int, int]) -> np.ndarray:
        chunk = values[bounds[0]:bounds[1]]
        if vectorized:
            return np.asarray(func(chunk), dtype=dtype)
        return np.array([func(value) for value in chunk], dtype=dtype)

    if values.size == 0:
        return run_chunk((0, 0))

    bounds = _chunk_bounds(values.shape[0], workers, chunk_size)
    if workers == 1 or len(bounds) == 1:
        results = [run_chunk(b) for b in bounds]
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(run_chunk, bounds))
    return np.concatenate(results)
