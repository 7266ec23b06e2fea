"""
Sampler tests: bucket sizing, distinct draws and the full-geo die.
"""
import math

import pytest
from numpy.random import default_rng

from url_corpus.sampler import (  # type: ignore
    MAX_DIE_SIDES,
    choose_one,
    full_geo_upper_bound,
    is_full_geo,
    sample,
    sample_by_pct,
    sample_count,
)


@pytest.mark.parametrize(
    "total,pct,pool_size,expected",
    [
        (10, 0.5, 100, 5),
        (10, 0.0, 100, 1),   # floored at 1
        (10, 0.01, 100, 1),
        (10, 1.0, 3, 3),     # capped by the pool
        (4, 1.0, 100, 4),    # capped by the total
        (7, 0.5, 100, 4),    # ceil(3.5)
        (1, 0.25, 1, 1),
    ],
)
def test_sample_count_examples(total, pct, pool_size, expected):
    assert sample_count(total, pct, pool_size) == expected


def test_sample_count_matches_clamped_ceiling():
    for total in (1, 2, 5, 13, 100):
        for pct in (0.0, 0.1, 0.25, 0.5, 0.75, 1.0):
            for pool_size in (1, 2, 7, 50, 1000):
                n = sample_count(total, pct, pool_size)
                assert 1 <= n <= min(total, pool_size)
                assert n == max(1, min(pool_size, total, math.ceil(total * pct)))


@pytest.mark.parametrize("total,pct", [(10, 0.5), (1, 1.0), (0, 0.5)])
def test_sample_count_empty_pool_is_zero(total, pct):
    assert sample_count(total, pct, 0) == 0


@pytest.mark.parametrize("total", [0, -5])
def test_sample_count_non_positive_total_is_zero(total):
    assert sample_count(total, 0.5, 10) == 0


def test_sample_returns_distinct_members_of_pool():
    pool = [f"rec-{i}" for i in range(50)]
    rng = default_rng(0)
    for n in (1, 5, 20, 50):
        drawn = sample(pool, n, rng)
        assert len(drawn) == n
        assert len(set(drawn)) == n
        assert set(drawn) <= set(pool)


def test_sample_whole_pool_is_a_permutation():
    pool = ["a", "b", "c", "d"]
    drawn = sample(pool, 4, default_rng(3))
    assert sorted(drawn) == pool


def test_sample_zero_and_empty():
    assert sample(["a", "b"], 0, default_rng(1)) == []
    assert sample([], 3, default_rng(1)) == []


def test_sample_more_than_pool_raises():
    with pytest.raises(ValueError):
        sample(["a", "b"], 3, default_rng(1))


def test_sample_is_reproducible_with_same_seed():
    pool = list(range(100))
    assert sample(pool, 10, default_rng(7)) == sample(pool, 10, default_rng(7))


def test_sample_by_pct_sizes_from_total():
    pool = [str(i) for i in range(20)]
    drawn = sample_by_pct(pool, 10, 0.5, default_rng(5))
    assert len(drawn) == 5
    assert len(set(drawn)) == 5


def test_successive_draws_are_independent():
    # Two buckets over the same pool may overlap; neither sees the other
    pool = ["a", "b", "c"]
    rng = default_rng(11)
    first = sample_by_pct(pool, 3, 1.0, rng)
    second = sample_by_pct(pool, 3, 1.0, rng)
    assert sorted(first) == sorted(second) == pool


def test_choose_one():
    assert choose_one([], default_rng(0)) is None
    assert choose_one(["only"], default_rng(0)) == "only"
    pool = ["x", "y", "z"]
    assert choose_one(pool, default_rng(2)) in pool


@pytest.mark.parametrize(
    "pct,bound",
    [(1.0, 1), (0.7, 1), (0.5, 2), (0.3, 3), (0.25, 4), (0.1, 10), (0.0, 0)],
)
def test_full_geo_upper_bound(pct, bound):
    assert full_geo_upper_bound(pct) == bound


def test_is_full_geo_extremes():
    rng = default_rng(4)
    assert all(is_full_geo(1.0, rng) for _ in range(200))
    assert not any(is_full_geo(0.0, rng) for _ in range(200))


def test_is_full_geo_long_run_share():
    rng = default_rng(123)
    hits = sum(is_full_geo(0.5, rng) for _ in range(4000))
    assert 0.45 < hits / 4000 < 0.55

    # 0.3 rolls a three-sided die: the share tracks 1/3, not 0.3
    hits = sum(is_full_geo(0.3, rng) for _ in range(6000))
    assert abs(hits / 6000 - 1 / 3) < 0.03


@pytest.mark.parametrize("pct", [1e-20, 5e-324])
def test_tiny_full_geo_share_is_capped(pct):
    assert full_geo_upper_bound(pct) == MAX_DIE_SIDES
    rng = default_rng(9)
    # A one-in-2**62 roll; the point is that it does not raise
    assert sum(is_full_geo(pct, rng) for _ in range(100)) <= 1
