"""
Reservoir ("tape") sampling over a stream of unknown-until-consumed length.

Algorithm (single forward pass, O(sample_size) memory):
    1. Fill a buffer with the first ``sample_size`` items, in arrival order.
    2. For the item at 1-based position i > sample_size, draw j uniformly
       from [1, i]; if j <= sample_size, overwrite buffer slot j - 1.

Every item of a population of N has probability sample_size / N of ending
up in the buffer, independent of arrival order. The generator is always
injected, never global, so a fixed seed and a fixed input give a fixed
result.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from itertools import islice
from typing import TypeVar

import numpy as np

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SEED_MASK = (1 << 64) - 1


def reservoir_sample(
    source: Iterable[T],
    population_size: int,
    sample_size: int,
    rng: np.random.Generator,
) -> list[T]:
    """
    Draw a uniform sample without replacement from a stream.

    At most ``population_size`` items are consumed from ``source``. If the
    source runs out earlier, sampling covers only what it produced and the
    result is correspondingly shorter.

    Args:
        source: Items to sample from (consumed lazily)
        population_size: Number of items the source is expected to produce
        sample_size: Number of items to keep
        rng: Seeded generator used for every random draw

    Returns:
        ``min(population_size, sample_size)`` items (fewer if the source
        under-delivers), in buffer slot order

    Raises:
        ValueError: If population_size or sample_size is negative
    """
    if population_size < 0:
        raise ValueError(f"population_size must be >= 0, got {population_size}")
    if sample_size < 0:
        raise ValueError(f"sample_size must be >= 0, got {sample_size}")

    if sample_size == 0:
        return []

    reservoir: list[T] = []
    seen = 0
    for item in islice(source, population_size):
        seen += 1
        if seen <= sample_size:
            reservoir.append(item)
            continue
        j = int(rng.integers(1, seen, endpoint=True))
        if j <= sample_size:
            reservoir[j - 1] = item

    if seen < population_size:
        logger.debug(
            f"Source produced {seen} items, expected population of {population_size}"
        )
    return reservoir


class ReservoirSampler:
    """Reservoir sampling with a fixed seed.

    Each call to ``sample`` uses a fresh generator seeded identically, so
    sampling the same input twice returns the same items.

    Usage:
        sampler = ReservoirSampler(seed=42)
        sample = sampler.sample(pager, population_size=total_hits, sample_size=1000)
    """

    def __init__(self, seed: int) -> None:
        self.seed = seed

    def make_rng(self) -> np.random.Generator:
        """Create a generator seeded with this sampler's seed."""
        # numpy only accepts non-negative seeds; negative ones map to their 64-bit pattern
        return np.random.default_rng(self.seed & _SEED_MASK)

    def sample(self, source: Iterable[T], population_size: int, sample_size: int) -> list[T]:
        """Sample ``source``; see :func:`reservoir_sample`."""
        return reservoir_sample(source, population_size, sample_size, self.make_rng())
