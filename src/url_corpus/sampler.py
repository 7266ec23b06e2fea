"""
Weighted sampling without replacement.

All randomness flows through an explicit `numpy.random.Generator` so a run
seeded with the same value draws the same records.
"""

from __future__ import annotations
import math
from typing import Optional, Sequence, TypeVar

from numpy.random import Generator, default_rng

T = TypeVar("T")

# Largest die the full-geo roll uses
MAX_DIE_SIDES = 2**62


def make_rng(seed: Optional[int] = None) -> Generator:
    """Return a fresh Generator; unseeded when `seed` is None."""
    return default_rng(seed)


def sample_count(total: int, pct: float, pool_size: int) -> int:
    """
    Number of distinct records to draw for one weighted bucket.

    Parameters
    ----------
    total : int
        Total URLs requested for the run (or the remaining budget).
    pct : float
        Fraction of `total` assigned to this bucket.
    pool_size : int
        Number of records available.

    Returns
    -------
    int
        ceil(total * pct) clamped to [1, min(total, pool_size)], or 0 when the
        pool is empty or `total` is not positive.
    """
    if pool_size <= 0 or total <= 0:
        return 0
    raw = math.ceil(total * pct)
    return max(1, min(raw, total, pool_size))


def sample(pool: Sequence[T], n: int, rng: Generator) -> list[T]:
    """
    Draw `n` pairwise-distinct entries of `pool`.

    Raises
    ------
    ValueError
        If `n` exceeds the pool size.
    """
    if n <= 0 or not pool:
        return []
    if n > len(pool):
        raise ValueError(f"Cannot draw {n} distinct records from a pool of {len(pool)}")
    idx = rng.choice(len(pool), size=n, replace=False)
    return [pool[int(i)] for i in idx]


def sample_by_pct(pool: Sequence[T], total: int, pct: float, rng: Generator) -> list[T]:
    """Draw `sample_count(total, pct, len(pool))` distinct records from `pool`."""
    return sample(pool, sample_count(total, pct, len(pool)), rng)


def choose_one(pool: Sequence[T], rng: Generator) -> Optional[T]:
    """Uniform single draw; None for an empty pool."""
    if not pool:
        return None
    return pool[int(rng.integers(len(pool)))]


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def full_geo_upper_bound(pct_full_geo: float) -> int:
    """
    Upper bound of the die rolled for each city URL.

    round(1 / pct) with halves rounded up, so the long-run full-geo share is
    1 / bound: only an approximation of `pct` (0.3 gives 1/3, 0.4 gives 1/3).
    Returns 0 when `pct_full_geo` is 0, meaning never. Tiny shares are capped
    at MAX_DIE_SIDES so the roll stays within int64.
    """
    if pct_full_geo <= 0:
        return 0
    sides = 1 / pct_full_geo
    if sides >= MAX_DIE_SIDES:
        return MAX_DIE_SIDES
    return max(1, _round_half_up(sides))


def is_full_geo(pct_full_geo: float, rng: Generator) -> bool:
    """Roll a die in [1, full_geo_upper_bound(pct)] and report whether it shows 1."""
    bound = full_geo_upper_bound(pct_full_geo)
    if bound == 0:
        return False
    return int(rng.integers(1, bound, endpoint=True)) == 1
