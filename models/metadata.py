"""Home Assistant identity and display metadata for known sensors."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True, slots=True)
class SensorMeta:
    entity_id: str
    friendly_name: str
    unit: str
    device_class: str


SENSOR_METADATA: Mapping[str, SensorMeta] = MappingProxyType(
    {
        "hot_water_middle": SensorMeta(
            entity_id="sensor.warmwasser_mitte",
            friendly_name="Warmwasser Mitte",
            unit="°C",
            device_class="temperature",
        ),
        "heating_supply": SensorMeta(
            entity_id="sensor.heizung_vorlauf",
            friendly_name="Heizung Vorlauf",
            unit="°C",
            device_class="temperature",
        ),
        "hot_water_bottom": SensorMeta(
            entity_id="sensor.warmwasser_unten",
            friendly_name="Warmwasser Unten",
            unit="°C",
            device_class="temperature",
        ),
        "heating_return": SensorMeta(
            entity_id="sensor.heizung_rucklauf",
            friendly_name="Heizung Rücklauf",
            unit="°C",
            device_class="temperature",
        ),
        "utility_room_temperature": SensorMeta(
            entity_id="sensor.technikraum_temperatur",
            friendly_name="Technikraum Temperatur",
            unit="°C",
            device_class="temperature",
        ),
        "utility_room_humidity": SensorMeta(
            entity_id="sensor.technikraum_luftfeuchtigkeit",
            friendly_name="Technikraum Luftfeuchtigkeit",
            unit="%",
            device_class="humidity",
        ),
    }
)
