"""
Unit tests for allocation_controller/database/pool_sizer.
"""

import math

import pytest

from allocation_controller import InvalidAllocationError, PoolSizeRecommendation, size_pool


def test_reference_sizing():
    result = size_pool(100, 3)
    assert result == PoolSizeRecommendation(min_size=90, recommended=360, max_size=540)
    assert result.to_dict() == {"min": 90, "recommended": 360, "max": 540}


def test_default_queries_per_user_is_three():
    assert size_pool(100) == size_pool(100, 3)


def test_spike_buffer_rounds_up():
    # 7 * 3 * 1.2 = 25.2
    result = size_pool(7)
    assert result.recommended == 26
    assert result.min_size == 7
    assert result.max_size == 39


def test_zero_users_keeps_safety_floor():
    result = size_pool(0)
    assert result.min_size == 5
    assert result.recommended == 5
    assert result.max_size == 5


def test_small_workload_lifts_envelope_to_floor():
    result = size_pool(1)
    assert result.min_size == 5
    assert result.recommended >= 5
    assert result.max_size >= result.recommended


@pytest.mark.parametrize("users", [0, 1, 2, 3, 10, 37, 100, 999, 10000])
@pytest.mark.parametrize("queries", [0.1, 0.5, 1, 2.5, 3, 7.3])
def test_envelope_ordering(users, queries):
    result = size_pool(users, queries)
    assert result.min_size >= 5
    assert result.min_size <= result.recommended <= result.max_size
    assert all(isinstance(v, int) for v in result.to_dict().values())


def test_strict_mode_rejects_bad_inputs():
    with pytest.raises(InvalidAllocationError):
        size_pool(-1, strict=True)
    with pytest.raises(InvalidAllocationError):
        size_pool(10, 0, strict=True)


def test_lenient_mode_does_not_raise_on_zero_rate():
    result = size_pool(10, 0)
    assert result.min_size == 5


@pytest.mark.parametrize("users,queries", [
    (math.nan, 3),
    (math.inf, 3),
    (10, math.nan),
    (10, math.inf),
])
def test_strict_mode_rejects_non_finite_inputs(users, queries):
    with pytest.raises(InvalidAllocationError):
        size_pool(users, queries, strict=True)


@pytest.mark.parametrize("users,queries", [
    (math.nan, 3),
    (10, math.nan),
    (10, math.inf),
    (0, math.inf),
])
def test_non_finite_demand_raises_in_lenient_mode(users, queries):
    with pytest.raises(InvalidAllocationError):
        size_pool(users, queries)
