"""
Utilization assessment for a single metrics snapshot.

Rules run in a fixed order (CPU, memory, connections, queue). Every rule
can only raise the level, except CPU-low which is the only source of
``low`` and is overridden by any later finding.
"""

import structlog

from ..core.exceptions import ConfigurationError
from .models import (
    DEFAULT_CONNECTION_CAPACITY,
    ResourceMetrics,
    UtilizationAssessment,
    UtilizationLevel,
)

logger = structlog.get_logger(__name__)

# All thresholds are exclusive: a value equal to the threshold does not fire
CPU_CRITICAL_THRESHOLD = 90.0
CPU_HIGH_THRESHOLD = 75.0
CPU_LOW_THRESHOLD = 20.0
MEMORY_CRITICAL_THRESHOLD = 90.0
MEMORY_HIGH_THRESHOLD = 80.0
CONNECTION_CRITICAL_THRESHOLD = 90.0
CONNECTION_HIGH_THRESHOLD = 75.0
QUEUE_BACKLOG_THRESHOLD = 500


def assess(metrics: ResourceMetrics,
           connection_capacity: float = DEFAULT_CONNECTION_CAPACITY) -> UtilizationAssessment:
    """Classify a snapshot into a utilization level and a list of bottlenecks"""
    if not connection_capacity > 0:
        raise ConfigurationError(f"connection_capacity must be positive, got {connection_capacity}")

    level = UtilizationLevel.NORMAL
    bottlenecks = []

    # CPU
    if metrics.cpu > CPU_CRITICAL_THRESHOLD:
        bottlenecks.append("CPU at critical level")
        level = UtilizationLevel.CRITICAL
    elif metrics.cpu > CPU_HIGH_THRESHOLD:
        bottlenecks.append("CPU utilization high")
        level = level.escalate(UtilizationLevel.HIGH)
    elif metrics.cpu < CPU_LOW_THRESHOLD:
        level = UtilizationLevel.LOW

    # Memory
    if metrics.memory > MEMORY_CRITICAL_THRESHOLD:
        bottlenecks.append("Memory at critical level")
        level = UtilizationLevel.CRITICAL
    elif metrics.memory > MEMORY_HIGH_THRESHOLD:
        bottlenecks.append("Memory utilization high")
        level = level.escalate(UtilizationLevel.HIGH)

    # Connections, as percent of nominal capacity
    connection_utilization = metrics.active_connections / connection_capacity * 100
    if connection_utilization > CONNECTION_CRITICAL_THRESHOLD:
        bottlenecks.append("Connection capacity at critical level")
        level = UtilizationLevel.CRITICAL
    elif connection_utilization > CONNECTION_HIGH_THRESHOLD:
        bottlenecks.append("Connection count high")
        level = level.escalate(UtilizationLevel.HIGH)

    # Request queue
    if metrics.queue_length > QUEUE_BACKLOG_THRESHOLD:
        bottlenecks.append("Request queue backing up")
        level = level.escalate(UtilizationLevel.HIGH)

    logger.debug(f"Assessed utilization level={level.value} bottlenecks={bottlenecks}")
    return UtilizationAssessment(level=level, bottlenecks=bottlenecks)
