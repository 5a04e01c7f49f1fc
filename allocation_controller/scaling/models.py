"""
Data models for load assessment and scaling decisions.

ResourceMetrics is the snapshot handed over by the metrics collector;
UtilizationAssessment and AllocationDecision are derived from it.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

# Nominal connection capacity used when none is configured
DEFAULT_CONNECTION_CAPACITY = 1000

# ========================================
# ENUMS
# ========================================
class UtilizationLevel(Enum):
    """Ordinal severity of a metrics snapshot"""
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _LEVEL_RANKS[self]

    def escalate(self, other: "UtilizationLevel") -> "UtilizationLevel":
        """Return the more severe of the two levels"""
        return other if other.rank > self.rank else self


_LEVEL_RANKS = {
    UtilizationLevel.LOW: 0,
    UtilizationLevel.NORMAL: 1,
    UtilizationLevel.HIGH: 2,
    UtilizationLevel.CRITICAL: 3,
}


class ScalingAction(Enum):
    """Recommended horizontal scaling action"""
    SCALE_UP = "scale_up"
    SCALE_DOWN = "scale_down"
    REBALANCE = "rebalance"
    MAINTAIN = "maintain"


class DecisionPriority(Enum):
    """Urgency attached to a decision"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# ========================================
# DATA MODELS
# ========================================
_CAMEL_CASE_KEYS = {
    "diskIO": "disk_io",
    "networkIO": "network_io",
    "activeConnections": "active_connections",
    "queueLength": "queue_length",
}


@dataclass(frozen=True)
class ResourceMetrics:
    """Point-in-time infrastructure metrics snapshot"""
    cpu: float = 0.0                # percent of CPU capacity
    memory: float = 0.0             # percent of memory capacity
    disk_io: float = 0.0            # operations per second
    network_io: float = 0.0         # MB per second
    active_connections: int = 0
    queue_length: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ResourceMetrics":
        """Build a snapshot from collector output, snake_case or camelCase keys"""
        values = {}
        for key, value in data.items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name in cls.__dataclass_fields__:
                values[name] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class UtilizationAssessment:
    """Severity classification of one snapshot"""
    level: UtilizationLevel
    bottlenecks: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class AllocationDecision:
    """Scaling recommendation with its justification"""
    action: ScalingAction
    reason: str
    priority: DecisionPriority
    recommendations: List[str]
    assessment: Optional[UtilizationAssessment] = None
    avg_cpu: Optional[float] = None
    avg_memory: Optional[float] = None
    target_instances: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action": self.action.value,
            "reason": self.reason,
            "priority": self.priority.value,
            "recommendations": list(self.recommendations),
            "level": self.assessment.level.value if self.assessment else None,
            "bottlenecks": list(self.assessment.bottlenecks) if self.assessment else [],
            "avg_cpu": self.avg_cpu,
            "avg_memory": self.avg_memory,
            "target_instances": self.target_instances,
        }
