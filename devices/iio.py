"""DHT22 temperature and humidity through the IIO sysfs interface."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from devices.units import scale_milli
from models.records import SensorReading

logger = logging.getLogger(__name__)

TEMPERATURE_FILE = "in_temp_input"
HUMIDITY_FILE = "in_humidityrelative_input"

TEMPERATURE_SENSOR_ID = "utility_room_temperature"
HUMIDITY_SENSOR_ID = "utility_room_humidity"

DEFAULT_CANDIDATES = (
    "/sys/bus/iio/devices/iio:device0",
    "/sys/bus/iio/devices/iio:device1",
)


def read_iio_value(path: str | Path) -> Optional[str]:
    """Read a milli-unit integer and return it scaled with one decimal."""
    try:
        raw = Path(path).read_text(encoding="ascii", errors="replace").strip()
    except OSError as exc:
        logger.warning("Cannot read %s: %s", path, exc, extra={"path": str(path)})
        return None
    try:
        milli_value = int(raw)
    except ValueError:
        logger.warning(
            "Invalid IIO value %r", raw, extra={"path": str(path), "reason": "not an integer"}
        )
        return None
    value = scale_milli(milli_value, 1)
    if value is None:
        logger.warning(
            "Invalid IIO value %r", raw, extra={"path": str(path), "reason": "out of range"}
        )
    return value


def read_dht22(device_dir: str | Path) -> List[SensorReading]:
    if not device_dir:
        return []

    base = Path(device_dir)
    readings: List[SensorReading] = []
    for filename, sensor_id in (
        (TEMPERATURE_FILE, TEMPERATURE_SENSOR_ID),
        (HUMIDITY_FILE, HUMIDITY_SENSOR_ID),
    ):
        value = read_iio_value(base / filename)
        if value is not None:
            readings.append(SensorReading(sensor_id=sensor_id, value=value))
    return readings


def find_iio_device(candidates: Iterable[str] = DEFAULT_CANDIDATES) -> str:
    """Return the first candidate exposing a temperature channel, or ``""``."""
    for candidate in candidates:
        if (Path(candidate) / TEMPERATURE_FILE).exists():
            logger.info("Found IIO device", extra={"path": candidate})
            return candidate
    logger.info("No IIO device found, DHT22 readings disabled")
    return ""
