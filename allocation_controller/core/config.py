#!/usr/bin/env python3
"""
⚙️ Allocation Controller Configuration

Defaults live on the dataclass; deployments override them through
environment variables (or a .env file) prefixed with ALLOCATION_, e.g.
ALLOCATION_SCALE_UP_THRESHOLD=80 or ALLOCATION_CACHE_TYPES=feed_cache,query_cache.
"""

import os
from dataclasses import dataclass, field, fields
from typing import Any, List, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .logging_config import configure_logging
from ..cache.allocator import DEFAULT_CACHE_WEIGHTS
from ..scaling.decision_engine import ScalingOptions

ENV_PREFIX = "ALLOCATION_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class ControllerConfig:
    """Resource allocation controller configuration"""

    # Scaling thresholds
    SCALE_UP_THRESHOLD: float = 75.0       # Sustained average CPU % that triggers scale up
    SCALE_DOWN_THRESHOLD: float = 25.0     # Sustained average CPU % that allows scale down

    # Instance bounds
    MIN_INSTANCES: int = 1
    MAX_INSTANCES: int = 10

    # Nominal connection capacity behind active_connections
    CONNECTION_CAPACITY: int = 1000

    # Rolling history
    HISTORY_WINDOW_SIZE: int = 60          # Snapshots kept for averaging

    # Reject out-of-range metrics instead of tolerating them
    STRICT_VALIDATION: bool = False

    # Connection pool sizing
    POOL_CONCURRENT_USERS: int = 100
    POOL_AVG_QUERIES_PER_USER: float = 3.0

    # Cache budgeting
    CACHE_TOTAL_MEMORY_MB: float = 1024.0
    CACHE_TYPES: List[str] = field(default_factory=lambda: list(DEFAULT_CACHE_WEIGHTS))
    CACHE_NORMALIZE_WEIGHTS: bool = False

    # Monitoring and logging
    METRICS_ENABLED: bool = True
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, env_file: Optional[str] = None) -> "ControllerConfig":
        """Build a config from defaults overridden by prefixed environment variables"""
        load_dotenv(env_file)

        overrides = {}
        for config_field in fields(cls):
            raw = os.getenv(f"{prefix}{config_field.name}")
            if raw is None:
                continue
            overrides[config_field.name] = _parse_value(config_field.name, raw, config_field.type)
        return cls(**overrides)

    def setup_logging(self) -> None:
        """Apply LOG_LEVEL and LOG_JSON to the process-wide structlog setup"""
        configure_logging(level=self.LOG_LEVEL, json_logs=self.LOG_JSON)

    def scaling_options(self) -> ScalingOptions:
        return ScalingOptions(
            scale_up_threshold=self.SCALE_UP_THRESHOLD,
            scale_down_threshold=self.SCALE_DOWN_THRESHOLD,
            min_instances=self.MIN_INSTANCES,
            max_instances=self.MAX_INSTANCES,
            connection_capacity=self.CONNECTION_CAPACITY,
        )


def _parse_value(name: str, raw: str, field_type: Any) -> Any:
    value = raw.strip()
    try:
        if field_type in (bool, "bool"):
            lowered = value.lower()
            if lowered in _TRUE_VALUES:
                return True
            if lowered in _FALSE_VALUES:
                return False
            raise ValueError(f"not a boolean: {raw!r}")
        if field_type in (int, "int"):
            return int(value)
        if field_type in (float, "float"):
            return float(value)
        if field_type in (List[str], "List[str]"):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value
    except ValueError as e:
        raise ConfigurationError(f"Invalid value for {ENV_PREFIX}{name}: {e}") from e
