#!/usr/bin/env python3
"""
🗄️ Database Connection Pool Sizing
Maps expected concurrency to a pool size envelope (min/recommended/max).

- 20% spike buffer on top of the base estimate
- min pool is a quarter of the recommended size, never below 5
- max pool leaves 50% burst headroom over the recommended size
"""

import math
from dataclasses import dataclass
from typing import Dict

import structlog

from ..core.exceptions import InvalidAllocationError

logger = structlog.get_logger(__name__)

SPIKE_BUFFER = 1.2
MIN_POOL_RATIO = 0.25
MAX_POOL_RATIO = 1.5
MIN_POOL_FLOOR = 5
DEFAULT_QUERIES_PER_USER = 3

# Products are rounded before ceil so float noise never adds a connection
_PRECISION = 9


@dataclass(frozen=True)
class PoolSizeRecommendation:
    """Connection pool envelope, min_size <= recommended <= max_size"""
    min_size: int
    recommended: int
    max_size: int

    def to_dict(self) -> Dict[str, int]:
        return {"min": self.min_size, "recommended": self.recommended, "max": self.max_size}


def _ceil(value: float) -> int:
    return math.ceil(round(value, _PRECISION))


def size_pool(concurrent_users: int,
              avg_queries_per_user: float = DEFAULT_QUERIES_PER_USER,
              strict: bool = False) -> PoolSizeRecommendation:
    """
    Size a database connection pool for the expected concurrency.

    Args:
        concurrent_users: Expected concurrent users, non-negative
        avg_queries_per_user: Average in-flight queries per user, positive
        strict: Reject out-of-domain inputs instead of computing with them

    Returns:
        PoolSizeRecommendation
    """
    if strict:
        if not concurrent_users >= 0 or not math.isfinite(concurrent_users):
            raise InvalidAllocationError(f"concurrent_users must be a finite non-negative number, got {concurrent_users}")
        if not avg_queries_per_user > 0 or not math.isfinite(avg_queries_per_user):
            raise InvalidAllocationError(f"avg_queries_per_user must be a finite positive number, got {avg_queries_per_user}")

    demand = concurrent_users * avg_queries_per_user * SPIKE_BUFFER
    # No integer envelope exists for NaN or infinite demand, in either mode
    if not math.isfinite(demand):
        raise InvalidAllocationError(
            f"Cannot size a pool for {concurrent_users} users x {avg_queries_per_user} queries"
        )
    recommended = _ceil(demand)
    min_size = max(MIN_POOL_FLOOR, _ceil(recommended * MIN_POOL_RATIO))
    max_size = _ceil(recommended * MAX_POOL_RATIO)

    # Small workloads: the floor on min_size lifts the whole envelope
    recommended = max(recommended, min_size)
    max_size = max(max_size, recommended)

    logger.debug(
        f"Pool sizing for {concurrent_users} users x {avg_queries_per_user} queries: "
        f"min={min_size} recommended={recommended} max={max_size}"
    )
    return PoolSizeRecommendation(min_size=min_size, recommended=recommended, max_size=max_size)
