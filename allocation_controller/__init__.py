"""
Adaptive resource allocation controller.

Classifies infrastructure load, recommends horizontal scaling actions,
sizes database connection pools and partitions cache memory budgets.
"""

from .cache.allocator import DEFAULT_CACHE_WEIGHTS, allocate_cache
from .controller import ResourceAllocationController
from .core.config import ControllerConfig
from .core.exceptions import (
    AllocationControllerError,
    ConfigurationError,
    InvalidAllocationError,
    InvalidMetricsError,
)
from .core.logging_config import configure_logging
from .database.pool_sizer import PoolSizeRecommendation, size_pool
from .scaling.assessor import assess
from .scaling.decision_engine import ScalingOptions, decide
from .scaling.history import MetricsHistory
from .scaling.models import (
    AllocationDecision,
    DecisionPriority,
    ResourceMetrics,
    ScalingAction,
    UtilizationAssessment,
    UtilizationLevel,
)
from .scaling.validation import validate_metrics

__version__ = "1.0.0"

__all__ = [
    "AllocationControllerError",
    "AllocationDecision",
    "ConfigurationError",
    "ControllerConfig",
    "DEFAULT_CACHE_WEIGHTS",
    "DecisionPriority",
    "InvalidAllocationError",
    "InvalidMetricsError",
    "MetricsHistory",
    "PoolSizeRecommendation",
    "ResourceAllocationController",
    "ResourceMetrics",
    "ScalingAction",
    "ScalingOptions",
    "UtilizationAssessment",
    "UtilizationLevel",
    "allocate_cache",
    "assess",
    "configure_logging",
    "decide",
    "size_pool",
    "validate_metrics",
]
