import os

import pytest

from allocation_controller import ControllerConfig, ResourceMetrics


@pytest.fixture
def normal_metrics():
    """Snapshot that trips no rule"""
    return ResourceMetrics(cpu=50.0, memory=50.0, disk_io=120.0, network_io=4.5,
                           active_connections=100, queue_length=10)


@pytest.fixture
def idle_history():
    """Five quiet samples averaging cpu=18, memory=25"""
    return [
        ResourceMetrics(cpu=cpu, memory=memory)
        for cpu, memory in [(16, 24), (17, 25), (18, 25), (19, 26), (20, 25)]
    ]


@pytest.fixture
def config():
    """Default config with Prometheus recording disabled"""
    return ControllerConfig(METRICS_ENABLED=False)


@pytest.fixture
def clean_env(monkeypatch):
    """
    Isolate ALLOCATION_* variables: drop any set in the shell, and remove
    whatever a .env file loaded during the test.
    """
    for key in list(os.environ):
        if key.startswith("ALLOCATION_"):
            monkeypatch.delenv(key)
    yield monkeypatch
    for key in list(os.environ):
        if key.startswith("ALLOCATION_"):
            del os.environ[key]
