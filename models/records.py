"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class SensorReading:
    """The latest value of one sensor, kept as a fixed-precision decimal string."""

    sensor_id: str
    value: str


Snapshot = Tuple[SensorReading, ...]
