"""Summing the even integers of a sequence, serially or in parallel chunks."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor

DEFAULT_CHUNK_SIZE = 1000


def sum_even_integers(numbers: Iterable[int]) -> int:
    """Return the sum of all even integers in ``numbers``."""
    return sum(n for n in numbers if n % 2 == 0)


def sum_even_integers_parallel(
    numbers: Sequence[int], chunk_size: int = DEFAULT_CHUNK_SIZE
) -> int:
    """Return the sum of the even integers, summing chunks on worker threads."""
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    chunks = [numbers[start:start + chunk_size] for start in range(0, len(numbers), chunk_size)]
    if not chunks:
        return 0
    with ThreadPoolExecutor() as pool:
        return sum(pool.map(sum_even_integers, chunks))