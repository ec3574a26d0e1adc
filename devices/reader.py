from __future__ import annotations

from pathlib import Path

from devices.iio import read_dht22
from devices.onewire import read_ds18b20
from devices.registry import SensorRegistry
from models.records import Snapshot


def read_all(w1_path: str | Path, iio_path: str | Path, registry: SensorRegistry) -> Snapshot:
    """Read every sensor once: 1-Wire devices first, then the IIO channels."""
    return tuple(read_ds18b20(w1_path, registry)) + tuple(read_dht22(iio_path))
