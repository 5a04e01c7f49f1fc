"""
Strict validation for metrics snapshots.

The decision engine tolerates any input and lets bad values fall through
its comparisons. Callers that prefer to reject bad data up front run
snapshots through validate_metrics first.
"""

from pydantic import BaseModel, Field, ValidationError

from ..core.exceptions import InvalidMetricsError
from .models import ResourceMetrics


class MetricsSnapshot(BaseModel):
    """Validated form of ResourceMetrics"""
    cpu: float = Field(..., ge=0, le=100, allow_inf_nan=False, description="CPU utilization percent")
    memory: float = Field(..., ge=0, le=100, allow_inf_nan=False, description="Memory utilization percent")
    disk_io: float = Field(0.0, ge=0, allow_inf_nan=False, description="Disk operations per second")
    network_io: float = Field(0.0, ge=0, allow_inf_nan=False, description="Network throughput in MB/s")
    active_connections: int = Field(0, ge=0, description="Live connections")
    queue_length: int = Field(0, ge=0, description="Requests awaiting service")


def validate_metrics(metrics: ResourceMetrics) -> ResourceMetrics:
    """
    Check a snapshot against its documented domains.

    Raises:
        InvalidMetricsError: with the pydantic error list attached
    """
    try:
        snapshot = MetricsSnapshot(**metrics.to_dict())
    except ValidationError as e:
        errors = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        raise InvalidMetricsError(f"Invalid metrics snapshot: {errors}", errors=errors) from e
    return ResourceMetrics(**snapshot.model_dump())
