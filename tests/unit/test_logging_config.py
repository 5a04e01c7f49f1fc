"""
Unit tests for allocation_controller/core/logging_config.
"""

import json
import logging

import pytest
import structlog

from allocation_controller import ControllerConfig, ResourceAllocationController, configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    root_level = logging.getLogger().level
    yield
    structlog.reset_defaults()
    logging.getLogger().setLevel(root_level)


def test_json_renderer_emits_structured_event(caplog):
    configure_logging(level="INFO", json_logs=True)

    with caplog.at_level(logging.INFO):
        structlog.get_logger("allocation_controller.test").info("pool sized", recommended=360)

    payload = json.loads(caplog.records[-1].getMessage())
    assert payload["event"] == "pool sized"
    assert payload["recommended"] == 360
    assert payload["level"] == "info"
    assert payload["logger"] == "allocation_controller.test"
    assert "timestamp" in payload


def test_level_filtering(caplog):
    configure_logging(level="WARNING", json_logs=False)

    with caplog.at_level(logging.WARNING):
        logger = structlog.get_logger("allocation_controller.test")
        logger.info("dropped")
        logger.warning("kept")

    messages = [record.getMessage() for record in caplog.records]
    assert not any("dropped" in m for m in messages)
    assert any("kept" in m for m in messages)


def test_config_applies_log_settings():
    ControllerConfig(LOG_LEVEL="ERROR", LOG_JSON=False).setup_logging()

    assert logging.getLogger().level == logging.ERROR
    assert isinstance(structlog.get_config()["processors"][-1], structlog.dev.ConsoleRenderer)


def test_controller_from_env_configures_logging(clean_env, tmp_path):
    clean_env.setenv("ALLOCATION_LOG_LEVEL", "warning")
    clean_env.setenv("ALLOCATION_LOG_JSON", "true")
    clean_env.setenv("ALLOCATION_METRICS_ENABLED", "false")

    controller = ResourceAllocationController.from_env(env_file=str(tmp_path / "missing.env"))

    assert controller.config.LOG_LEVEL == "warning"
    assert controller.config.METRICS_ENABLED is False
    assert logging.getLogger().level == logging.WARNING
    assert isinstance(structlog.get_config()["processors"][-1], structlog.processors.JSONRenderer)
