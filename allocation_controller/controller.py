#!/usr/bin/env python3
"""
🚀 Resource Allocation Controller
Entry point for a monitoring loop: keeps the rolling metrics window,
runs the decision engine on every tick and serves the pool sizing and
cache budgeting advisors from configuration.

The controller only advises. Executing a decision (adding or removing
instances) belongs to the orchestrator that calls it.
"""

import time
from typing import Any, Dict, Optional, Sequence

import structlog

from .cache.allocator import allocate_cache
from .core.config import ControllerConfig
from .database.pool_sizer import PoolSizeRecommendation, size_pool
from .monitoring.metrics import (
    BOTTLENECKS_TOTAL,
    CACHE_BUDGET_MB,
    DECISION_LATENCY,
    DECISIONS_TOTAL,
    POOL_SIZE,
    UTILIZATION_LEVEL,
)
from .scaling.decision_engine import decide
from .scaling.history import MetricsHistory
from .scaling.models import AllocationDecision, ResourceMetrics, ScalingAction
from .scaling.validation import validate_metrics

logger = structlog.get_logger(__name__)


class ResourceAllocationController:
    """Stateful wrapper around the pure advisors"""

    def __init__(self, config: Optional[ControllerConfig] = None):
        self.config = config or ControllerConfig()
        self.options = self.config.scaling_options()
        self.history = MetricsHistory(window_size=self.config.HISTORY_WINDOW_SIZE)
        self.last_decision: Optional[AllocationDecision] = None

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "ResourceAllocationController":
        """Load configuration from the environment, set up logging and build a controller"""
        config = ControllerConfig.from_env(env_file=env_file)
        config.setup_logging()
        logger.info(
            f"🚀 Allocation controller starting: window={config.HISTORY_WINDOW_SIZE}, "
            f"strict={config.STRICT_VALIDATION}, metrics={config.METRICS_ENABLED}"
        )
        return cls(config)

    def reload(self, config: ControllerConfig) -> None:
        """Swap configuration, keeping the most recent snapshots"""
        options = config.scaling_options()
        history = MetricsHistory(window_size=config.HISTORY_WINDOW_SIZE)
        for metrics in self.history:
            history.append(metrics)

        self.config = config
        self.options = options
        self.history = history
        logger.info(
            f"🔄 Configuration reloaded: scale up > {options.scale_up_threshold:.1f}%, "
            f"scale down < {options.scale_down_threshold:.1f}%, "
            f"instances {options.min_instances}-{options.max_instances}"
        )

    # ========================================
    # SCALING
    # ========================================
    def evaluate(self, metrics: ResourceMetrics,
                 current_instances: Optional[int] = None) -> AllocationDecision:
        """Record a snapshot and produce a decision against the rolling window"""
        if self.config.STRICT_VALIDATION:
            metrics = validate_metrics(metrics)

        start_time = time.perf_counter()
        self.history.append(metrics)
        decision = decide(metrics, self.history.snapshot(), self.options, current_instances)
        elapsed = time.perf_counter() - start_time

        if self.config.METRICS_ENABLED:
            DECISION_LATENCY.observe(elapsed)
            DECISIONS_TOTAL.labels(action=decision.action.value, priority=decision.priority.value).inc()
            UTILIZATION_LEVEL.set(decision.assessment.level.rank)
            for bottleneck in decision.assessment.bottlenecks:
                BOTTLENECKS_TOTAL.labels(bottleneck=bottleneck).inc()

        if decision.action == ScalingAction.MAINTAIN:
            logger.info(f"✅ {decision.reason}")
        else:
            logger.warning(
                f"🚨 Recommended {decision.action.value} [{decision.priority.value}]: {decision.reason}",
                target_instances=decision.target_instances,
            )

        self.last_decision = decision
        return decision

    # ========================================
    # ADVISORS
    # ========================================
    def size_connection_pool(self, concurrent_users: Optional[int] = None,
                             avg_queries_per_user: Optional[float] = None) -> PoolSizeRecommendation:
        if concurrent_users is None:
            concurrent_users = self.config.POOL_CONCURRENT_USERS
        if avg_queries_per_user is None:
            avg_queries_per_user = self.config.POOL_AVG_QUERIES_PER_USER

        recommendation = size_pool(
            concurrent_users, avg_queries_per_user, strict=self.config.STRICT_VALIDATION
        )

        if self.config.METRICS_ENABLED:
            for bound, value in recommendation.to_dict().items():
                POOL_SIZE.labels(bound=bound).set(value)

        logger.info(
            f"🗄️ Connection pool for {concurrent_users} users: "
            f"{recommendation.min_size}/{recommendation.recommended}/{recommendation.max_size}"
        )
        return recommendation

    def plan_cache(self, total_memory_mb: Optional[float] = None,
                   cache_types: Optional[Sequence[str]] = None) -> Dict[str, float]:
        if total_memory_mb is None:
            total_memory_mb = self.config.CACHE_TOTAL_MEMORY_MB
        if cache_types is None:
            cache_types = self.config.CACHE_TYPES

        plan = allocate_cache(
            total_memory_mb,
            cache_types,
            normalize=self.config.CACHE_NORMALIZE_WEIGHTS,
            strict=self.config.STRICT_VALIDATION,
        )

        if self.config.METRICS_ENABLED:
            for cache_type, budget in plan.items():
                CACHE_BUDGET_MB.labels(cache_type=cache_type).set(budget)

        logger.info(f"💾 Cache plan for {total_memory_mb:.1f}MB across {len(plan)} categories")
        return plan

    # ========================================
    # STATUS
    # ========================================
    def get_status(self) -> Dict[str, Any]:
        return {
            "history": self.history.get_stats(),
            "last_decision": self.last_decision.to_dict() if self.last_decision else None,
            "options": {
                "scale_up_threshold": self.options.scale_up_threshold,
                "scale_down_threshold": self.options.scale_down_threshold,
                "min_instances": self.options.min_instances,
                "max_instances": self.options.max_instances,
                "connection_capacity": self.options.connection_capacity,
            },
        }
