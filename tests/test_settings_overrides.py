from __future__ import annotations

import logging

import pytest

from logging_config import ContextualFormatter, build_logging_config
from settings import DEFAULT_W1_PATH, get_settings

_ENV_NAMES = (
    "HOST",
    "PORT",
    "W1_PATH",
    "IIO_DEVICE",
    "POLL_INTERVAL",
    "SENSOR_MAP",
    "HA_URL",
    "HA_TOKEN",
    "HA_TIMEOUT",
    "LOG_LEVEL",
)


@pytest.fixture()
def clean_env(monkeypatch):
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


def test_defaults(clean_env) -> None:
    settings = get_settings()

    assert settings.host == "0.0.0.0"
    assert settings.port == 8080
    assert settings.w1_path == DEFAULT_W1_PATH
    assert settings.iio_device is None
    assert settings.poll_interval == 10
    assert settings.sensor_map == ""
    assert settings.ha_url is None
    assert settings.ha_token is None
    assert settings.ha_timeout == 5.0
    assert settings.log_level == "INFO"


def test_environment_overrides_apply(clean_env, tmp_path) -> None:
    clean_env.setenv("PORT", "9000")
    clean_env.setenv("W1_PATH", str(tmp_path))
    clean_env.setenv("IIO_DEVICE", " /sys/bus/iio/devices/iio:device1 ")
    clean_env.setenv("POLL_INTERVAL", "30")
    clean_env.setenv("SENSOR_MAP", "28-aaa:hot_water_middle")
    clean_env.setenv("HA_URL", "http://ha.local:8123")
    clean_env.setenv("HA_TOKEN", "secret")
    clean_env.setenv("HA_TIMEOUT", "2.5")
    clean_env.setenv("LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.port == 9000
    assert settings.w1_path == str(tmp_path)
    assert settings.iio_device == "/sys/bus/iio/devices/iio:device1"
    assert settings.poll_interval == 30
    assert settings.sensor_map == "28-aaa:hot_water_middle"
    assert settings.ha_url == "http://ha.local:8123"
    assert settings.ha_token == "secret"
    assert settings.ha_timeout == 2.5
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["", "   ", "abc", "0", "-5"])
def test_invalid_numbers_fall_back_to_defaults(clean_env, raw) -> None:
    clean_env.setenv("POLL_INTERVAL", raw)
    clean_env.setenv("PORT", raw)
    clean_env.setenv("HA_TIMEOUT", raw)

    settings = get_settings()

    assert settings.poll_interval == 10
    assert settings.port == 8080
    assert settings.ha_timeout == 5.0


def test_blank_optional_values_are_none(clean_env) -> None:
    clean_env.setenv("IIO_DEVICE", "  ")
    clean_env.setenv("HA_URL", "")

    settings = get_settings()

    assert settings.iio_device is None
    assert settings.ha_url is None


def test_contextual_formatter_appends_extra_fields() -> None:
    formatter = ContextualFormatter(fmt="%(levelname)s %(message)s")
    record = logging.LogRecord("devices.onewire", logging.WARNING, __file__, 1, "CRC check failed", None, None)
    record.path = "/sys/devices/w1_bus_master1/28-aaa/w1_slave"
    record.reason = "crc"
    record.failures = None

    output = formatter.format(record)

    assert output == (
        "WARNING CRC check failed | path=/sys/devices/w1_bus_master1/28-aaa/w1_slave reason=crc"
    )


def test_logging_config_routes_server_loggers_to_root() -> None:
    config = build_logging_config("DEBUG")

    assert config["root"] == {"handlers": ["default"], "level": "DEBUG"}
    assert config["loggers"]["uvicorn.access"]["propagate"] is True
