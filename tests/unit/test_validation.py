"""
Unit tests for allocation_controller/scaling/validation.
"""

import math

import pytest

from allocation_controller import InvalidMetricsError, ResourceMetrics, validate_metrics


def test_valid_snapshot_passes_through():
    metrics = ResourceMetrics(cpu=55.5, memory=40, disk_io=10, network_io=2.5,
                              active_connections=12, queue_length=3)
    assert validate_metrics(metrics) == metrics


@pytest.mark.parametrize("overrides,field", [
    ({"cpu": -1}, "cpu"),
    ({"cpu": 100.5}, "cpu"),
    ({"memory": math.nan}, "memory"),
    ({"disk_io": -3}, "disk_io"),
    ({"network_io": math.inf}, "network_io"),
    ({"active_connections": -1}, "active_connections"),
    ({"queue_length": -10}, "queue_length"),
])
def test_out_of_domain_values_rejected(overrides, field):
    values = dict(cpu=50, memory=50)
    values.update(overrides)

    with pytest.raises(InvalidMetricsError) as exc_info:
        validate_metrics(ResourceMetrics(**values))

    assert [err["field"] for err in exc_info.value.errors] == [field]


def test_from_dict_accepts_camel_case_keys():
    metrics = ResourceMetrics.from_dict({
        "cpu": 42,
        "memory": 61,
        "diskIO": 300,
        "networkIO": 12.5,
        "activeConnections": 250,
        "queueLength": 8,
        "hostname": "ignored",
    })
    assert metrics == ResourceMetrics(cpu=42, memory=61, disk_io=300, network_io=12.5,
                                      active_connections=250, queue_length=8)


def test_from_dict_defaults_missing_fields():
    metrics = ResourceMetrics.from_dict({"cpu": 10})
    assert metrics.memory == 0.0
    assert metrics.queue_length == 0
    assert metrics.to_dict()["cpu"] == 10
