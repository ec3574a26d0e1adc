"""DS18B20 readings from the 1-Wire sysfs interface.

Each device shows up as ``<base>/28-<serial>/w1_slave``, which holds two lines:

    72 01 4b 46 7f ff 0e 10 57 : crc=57 YES
    72 01 4b 46 7f ff 0e 10 57 t=23125

The first line ends with the CRC verdict, the second with the temperature in
millidegrees Celsius.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional

from devices.registry import SensorRegistry
from devices.units import scale_milli
from models.records import SensorReading

logger = logging.getLogger(__name__)

DEVICE_PREFIX = "28-"
SLAVE_FILE = "w1_slave"
CRC_OK_MARKER = "YES"

_TEMPERATURE_RE = re.compile(r"t=(-?\d+)\s*$", re.MULTILINE)


def parse_w1_slave(content: str) -> Optional[str]:
    """Return the temperature in degrees with 3 decimals, or ``None`` if unusable."""
    if CRC_OK_MARKER not in content:
        return None
    match = _TEMPERATURE_RE.search(content)
    if match is None:
        return None
    try:
        millidegrees = int(match.group(1))
    except ValueError:
        # Longer than the interpreter's int conversion limit.
        return None
    return scale_milli(millidegrees, 3)


def list_devices(base_path: str | Path) -> List[Path]:
    base = Path(base_path)
    try:
        entries = list(base.iterdir())
    except OSError as exc:
        logger.error(
            "Cannot list 1-Wire devices: %s", exc, extra={"path": str(base)}
        )
        return []
    devices = [
        entry
        for entry in entries
        if entry.name.startswith(DEVICE_PREFIX) and entry.is_dir()
    ]
    return sorted(devices, key=lambda entry: entry.name)


def read_ds18b20(base_path: str | Path, registry: SensorRegistry) -> List[SensorReading]:
    readings: List[SensorReading] = []
    for index, device_dir in enumerate(list_devices(base_path)):
        path = device_dir / SLAVE_FILE
        try:
            content = path.read_text(encoding="ascii", errors="replace")
        except OSError as exc:
            logger.warning("Cannot read %s: %s", path, exc, extra={"path": str(path)})
            continue

        if CRC_OK_MARKER not in content:
            logger.warning(
                "CRC check failed",
                extra={"address": device_dir.name, "reason": "crc"},
            )
            continue

        value = parse_w1_slave(content)
        if value is None:
            found = _TEMPERATURE_RE.search(content) is not None
            logger.warning(
                "Invalid temperature" if found else "No temperature found",
                extra={
                    "address": device_dir.name,
                    "reason": "out of range" if found else "missing t= field",
                },
            )
            continue

        readings.append(
            SensorReading(sensor_id=registry.resolve(device_dir.name, index), value=value)
        )
    return readings
