"""
Unit tests for allocation_controller/cache/allocator.
"""

import pytest

from allocation_controller import DEFAULT_CACHE_WEIGHTS, InvalidAllocationError, allocate_cache

CANONICAL = [
    "user_sessions",
    "feed_cache",
    "query_cache",
    "static_assets",
    "api_responses",
    "search_index",
    "other",
]


def test_weights_sum_to_one():
    assert sum(DEFAULT_CACHE_WEIGHTS.values()) == pytest.approx(1.0)


def test_known_and_unknown_categories():
    plan = allocate_cache(1000, ["feed_cache", "unknown_type"])
    assert plan == {
        "feed_cache": pytest.approx(175.0),
        "unknown_type": pytest.approx(35.0),
    }


@pytest.mark.parametrize("total", [1, 512, 1000, 4096.5, 65536])
def test_canonical_categories_use_whole_budget(total):
    plan = allocate_cache(total, CANONICAL)
    assert set(plan) == set(CANONICAL)
    assert sum(plan.values()) == pytest.approx(total * 0.7)


def test_order_of_categories_is_irrelevant():
    assert allocate_cache(2048, CANONICAL) == allocate_cache(2048, list(reversed(CANONICAL)))


def test_duplicates_collapse_to_one_entry():
    plan = allocate_cache(1000, ["query_cache", "query_cache"])
    assert plan == {"query_cache": pytest.approx(140.0)}


def test_empty_category_list_gives_empty_plan():
    assert allocate_cache(1000, []) == {}


def test_multiple_unknown_categories_can_over_commit():
    names = [f"custom_{i}" for i in range(25)]
    plan = allocate_cache(1000, names)
    assert all(v == pytest.approx(35.0) for v in plan.values())
    assert sum(plan.values()) > 700


def test_normalize_keeps_plan_within_budget():
    names = [f"custom_{i}" for i in range(25)] + ["feed_cache"]
    plan = allocate_cache(1000, names, normalize=True)
    assert sum(plan.values()) == pytest.approx(700.0)
    # relative weights survive normalization
    assert plan["feed_cache"] == pytest.approx(plan["custom_0"] * 5)


def test_normalize_is_noop_for_canonical_set():
    assert allocate_cache(1000, CANONICAL, normalize=True) == pytest.approx(allocate_cache(1000, CANONICAL))


def test_strict_mode_rejects_non_positive_budget():
    with pytest.raises(InvalidAllocationError):
        allocate_cache(0, CANONICAL, strict=True)
    assert allocate_cache(0, ["feed_cache"]) == {"feed_cache": 0.0}
