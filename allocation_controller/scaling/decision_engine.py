#!/usr/bin/env python3
"""
🚀 Scaling Decision Engine
Turns the current snapshot plus a window of prior snapshots into one
advisory AllocationDecision.

Rules form a priority cascade, evaluated in order, first match wins:
critical -> high/sustained -> low/sustained -> imbalance -> default.
The engine never calls out to an orchestrator; executing the action is
the caller's job.
"""

import statistics
from dataclasses import dataclass
from typing import Optional, Sequence

import structlog

from ..core.exceptions import ConfigurationError
from .assessor import assess
from .models import (
    DEFAULT_CONNECTION_CAPACITY,
    AllocationDecision,
    DecisionPriority,
    ResourceMetrics,
    ScalingAction,
    UtilizationAssessment,
    UtilizationLevel,
)

logger = structlog.get_logger(__name__)

# Average memory must stay below this for a sustained scale-down
SCALE_DOWN_MEMORY_CEILING = 40.0

# Queue buildup with spare CPU points at uneven load distribution
IMBALANCE_QUEUE_THRESHOLD = 100
IMBALANCE_CPU_CEILING = 60.0


# ========================================
# CONFIGURATION
# ========================================
@dataclass(frozen=True)
class ScalingOptions:
    """Thresholds and instance bounds for the decision cascade"""
    scale_up_threshold: float = 75.0
    scale_down_threshold: float = 25.0
    min_instances: int = 1
    max_instances: int = 10
    connection_capacity: float = DEFAULT_CONNECTION_CAPACITY

    # Replicas to add or remove when a target instance count is requested
    scale_up_step: int = 1
    critical_scale_up_step: int = 2
    scale_down_step: int = 1

    def __post_init__(self):
        if self.min_instances < 1:
            raise ConfigurationError(f"min_instances must be at least 1, got {self.min_instances}")
        if self.min_instances > self.max_instances:
            raise ConfigurationError(
                f"min_instances ({self.min_instances}) exceeds max_instances ({self.max_instances})"
            )
        if self.scale_down_threshold > self.scale_up_threshold:
            raise ConfigurationError(
                f"scale_down_threshold ({self.scale_down_threshold}) exceeds "
                f"scale_up_threshold ({self.scale_up_threshold})"
            )
        if self.connection_capacity <= 0:
            raise ConfigurationError(f"connection_capacity must be positive, got {self.connection_capacity}")


# ========================================
# DECISION ENGINE
# ========================================
def decide(current: ResourceMetrics,
           historical: Sequence[ResourceMetrics],
           options: Optional[ScalingOptions] = None,
           current_instances: Optional[int] = None) -> AllocationDecision:
    """
    Produce a scaling recommendation for the current snapshot.

    Args:
        current: Latest metrics snapshot
        historical: Prior snapshots; an empty window behaves as if the
            current sample were the whole history
        options: Thresholds and bounds, defaults when omitted
        current_instances: Running instance count. When given, the decision
            carries a target instance count clamped to the configured bounds

    Returns:
        AllocationDecision: exactly one action with reason and recommendations
    """
    options = options or ScalingOptions()
    assessment = assess(current, connection_capacity=options.connection_capacity)

    if historical:
        avg_cpu = statistics.fmean(m.cpu for m in historical)
        avg_memory = statistics.fmean(m.memory for m in historical)
    else:
        avg_cpu = current.cpu
        avg_memory = current.memory

    action, priority, reason, recommendations = _run_cascade(
        current, assessment, avg_cpu, avg_memory, options
    )

    target_instances = None
    if current_instances is not None:
        target_instances = _target_instances(action, priority, current_instances, options)
        bound_note = _bound_note(action, current_instances, target_instances, options)
        if bound_note:
            recommendations.append(bound_note)

    logger.debug(
        f"Scaling decision: {action.value} ({priority.value}) - {reason}",
        utilization_level=assessment.level.value,
        avg_cpu=avg_cpu,
        avg_memory=avg_memory,
    )

    return AllocationDecision(
        action=action,
        reason=reason,
        priority=priority,
        recommendations=recommendations,
        assessment=assessment,
        avg_cpu=avg_cpu,
        avg_memory=avg_memory,
        target_instances=target_instances,
    )


def _run_cascade(current: ResourceMetrics,
                 assessment: UtilizationAssessment,
                 avg_cpu: float,
                 avg_memory: float,
                 options: ScalingOptions):
    level = assessment.level
    bottlenecks = list(assessment.bottlenecks)

    # 1. Critical
    if level == UtilizationLevel.CRITICAL:
        return (
            ScalingAction.SCALE_UP,
            DecisionPriority.CRITICAL,
            f"Critical resource utilization detected: {', '.join(bottlenecks)}",
            [
                "Scale up immediately by adding instances horizontally",
                "Warm caches on new instances before routing traffic to them",
                "Review recent deployments for performance regressions",
                *bottlenecks,
            ],
        )

    # 2. High or sustained high CPU
    if level == UtilizationLevel.HIGH or avg_cpu > options.scale_up_threshold:
        return (
            ScalingAction.SCALE_UP,
            DecisionPriority.HIGH,
            f"High resource utilization: CPU at {current.cpu:.1f}%, memory at {current.memory:.1f}%",
            [
                "Add 1-2 instances to absorb the current load",
                "Enable auto-scaling if it is not already active",
                "Monitor request queue length closely",
                "Consider rate limiting non-critical endpoints",
                *bottlenecks,
            ],
        )

    # 3. Low and sustained low
    if (level == UtilizationLevel.LOW
            and avg_cpu < options.scale_down_threshold
            and avg_memory < SCALE_DOWN_MEMORY_CEILING):
        return (
            ScalingAction.SCALE_DOWN,
            DecisionPriority.LOW,
            f"Low resource utilization: CPU at {current.cpu:.1f}%, memory at {current.memory:.1f}%",
            [
                "Reduce instance count to lower infrastructure cost",
                f"Keep at least {options.min_instances} instance(s) running for availability",
                "Scale down one step at a time and watch latency after each step",
            ],
        )

    # 4. Imbalance
    if current.queue_length > IMBALANCE_QUEUE_THRESHOLD and current.cpu < IMBALANCE_CPU_CEILING:
        return (
            ScalingAction.REBALANCE,
            DecisionPriority.MEDIUM,
            f"Queue buildup ({float(current.queue_length):.1f} requests) despite spare CPU capacity "
            f"({current.cpu:.1f}%) suggests uneven load distribution",
            [
                "Rebalance traffic across instances",
                "Check connection pooling configuration",
                "Review load balancer configuration",
                "Verify session affinity is not pinning traffic to a few instances",
            ],
        )

    # 5. Default
    return (
        ScalingAction.MAINTAIN,
        DecisionPriority.LOW,
        "Resource utilization within normal parameters",
        [
            "Continue monitoring resource metrics",
            "Review utilization trends regularly",
            "Optimize slow queries and caching to preserve headroom",
        ],
    )


def _target_instances(action: ScalingAction,
                      priority: DecisionPriority,
                      current_instances: int,
                      options: ScalingOptions) -> int:
    # Bounds can stop a move but never reverse it
    if action == ScalingAction.SCALE_UP:
        step = options.critical_scale_up_step if priority == DecisionPriority.CRITICAL else options.scale_up_step
        return max(current_instances, min(options.max_instances, current_instances + step))
    if action == ScalingAction.SCALE_DOWN:
        return min(current_instances, max(options.min_instances, current_instances - options.scale_down_step))
    return current_instances


def _bound_note(action: ScalingAction,
                current_instances: int,
                target_instances: int,
                options: ScalingOptions) -> Optional[str]:
    if action == ScalingAction.SCALE_UP and target_instances <= current_instances:
        return f"Instance count at or above configured maximum ({options.max_instances}); scale-up cannot be applied"
    if action == ScalingAction.SCALE_DOWN and target_instances >= current_instances:
        return f"Instance count at or below configured minimum ({options.min_instances}); scale-down cannot be applied"
    return None
