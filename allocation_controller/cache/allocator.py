#!/usr/bin/env python3
"""
🚀 Cache Memory Allocator
Partitions a memory budget across named cache categories.

30% of the budget is reserved for the application itself; the rest is
split by a fixed weight table. Unrecognized categories get the ``other``
weight each, so several unknown names can over-commit the budget unless
normalize=True is requested.
"""

from typing import Dict, Sequence

import structlog

from ..core.exceptions import InvalidAllocationError

logger = structlog.get_logger(__name__)

APPLICATION_RESERVE_RATIO = 0.3

# Fractions of the cache budget, summing to 1.0
DEFAULT_CACHE_WEIGHTS: Dict[str, float] = {
    "user_sessions": 0.15,
    "feed_cache": 0.25,
    "query_cache": 0.20,
    "static_assets": 0.10,
    "api_responses": 0.15,
    "search_index": 0.10,
    "other": 0.05,
}

FALLBACK_CATEGORY = "other"


def allocate_cache(total_memory_mb: float,
                   cache_types: Sequence[str],
                   normalize: bool = False,
                   strict: bool = False) -> Dict[str, float]:
    """
    Split a memory budget across cache categories.

    Args:
        total_memory_mb: Total memory available to the process, in MB
        cache_types: Category names; duplicates collapse into one entry
        normalize: Rescale the weights of the requested categories to sum
            to 1 so the plan never exceeds the cache budget
        strict: Reject a non-positive budget

    Returns:
        Dict[str, float]: cache category -> budget in MB
    """
    if strict and not total_memory_mb > 0:
        raise InvalidAllocationError(f"total_memory_mb must be positive, got {total_memory_mb}")

    available = total_memory_mb * (1 - APPLICATION_RESERVE_RATIO)
    weights = {
        name: DEFAULT_CACHE_WEIGHTS.get(name, DEFAULT_CACHE_WEIGHTS[FALLBACK_CATEGORY])
        for name in cache_types
    }

    if normalize and weights:
        weight_total = sum(weights.values())
        weights = {name: weight / weight_total for name, weight in weights.items()}

    plan = {name: available * weight for name, weight in weights.items()}

    allocated = sum(plan.values())
    if allocated > available * (1 + 1e-9):
        unknown = sorted(name for name in weights if name not in DEFAULT_CACHE_WEIGHTS)
        logger.warning(
            f"⚠️ Cache plan over-commits budget: {allocated:.1f}MB allocated of {available:.1f}MB available",
            unknown_categories=unknown,
        )
    else:
        logger.debug(f"Cache plan: {allocated:.1f}MB of {available:.1f}MB across {len(plan)} categories")

    return plan
