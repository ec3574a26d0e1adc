from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_HOST_ENV = "HOST"
_PORT_ENV = "PORT"
_W1_PATH_ENV = "W1_PATH"
_IIO_DEVICE_ENV = "IIO_DEVICE"
_POLL_INTERVAL_ENV = "POLL_INTERVAL"
_SENSOR_MAP_ENV = "SENSOR_MAP"
_HA_URL_ENV = "HA_URL"
_HA_TOKEN_ENV = "HA_TOKEN"
_HA_TIMEOUT_ENV = "HA_TIMEOUT"
_LOG_LEVEL_ENV = "LOG_LEVEL"

DEFAULT_W1_PATH = "/sys/devices/w1_bus_master1"


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    w1_path: str
    iio_device: Optional[str]
    poll_interval: int
    sensor_map: str
    ha_url: Optional[str]
    ha_token: Optional[str]
    ha_timeout: float
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_positive_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_positive_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        host=_read_str_env(_HOST_ENV, "0.0.0.0"),
        port=_read_positive_int(_PORT_ENV, 8080),
        w1_path=_read_str_env(_W1_PATH_ENV, DEFAULT_W1_PATH),
        iio_device=_read_optional_env(_IIO_DEVICE_ENV, None),
        poll_interval=_read_positive_int(_POLL_INTERVAL_ENV, 10),
        sensor_map=_read_str_env(_SENSOR_MAP_ENV, ""),
        ha_url=_read_optional_env(_HA_URL_ENV, None),
        ha_token=_read_optional_env(_HA_TOKEN_ENV, None),
        ha_timeout=_read_positive_float(_HA_TIMEOUT_ENV, 5.0),
        log_level=_read_log_level("INFO"),
    )
