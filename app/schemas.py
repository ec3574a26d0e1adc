"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List

from pydantic import BaseModel, Field

from models.records import SensorReading


class HealthStatus(str, Enum):
    """Whether the cache holds any readings yet."""

    ok = "ok"
    no_data = "no_data"


class SensorOut(BaseModel):
    """One cached reading as exposed to HTTP clients."""

    id: str = Field(..., min_length=1, description="Logical sensor identifier.")
    value: str = Field(..., description="Fixed-precision decimal string.")

    @classmethod
    def from_reading(cls, reading: SensorReading) -> "SensorOut":
        return cls(id=reading.sensor_id, value=reading.value)


class SensorsResponse(BaseModel):
    sensors: List[SensorOut] = Field(default_factory=list)

    @classmethod
    def from_snapshot(cls, snapshot: Iterable[SensorReading]) -> "SensorsResponse":
        return cls(sensors=[SensorOut.from_reading(reading) for reading in snapshot])


class HealthResponse(BaseModel):
    status: HealthStatus
    sensors: int = Field(..., ge=0, description="Number of readings in the cache.")
