"""Resolution of 1-Wire device addresses to logical sensor identifiers."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Mapping, Optional

logger = logging.getLogger(__name__)


def parse_sensor_map(raw: str) -> Dict[str, str]:
    """Parse ``addr1:id1,addr2:id2,...`` into an address-to-ID dictionary."""
    mapping: Dict[str, str] = {}
    if not raw or not raw.strip():
        return mapping

    for entry in raw.split(","):
        if not entry.strip():
            continue
        address, sep, sensor_id = entry.partition(":")
        address = address.strip()
        sensor_id = sensor_id.strip()
        if not sep or not address or not sensor_id:
            logger.warning("Ignoring malformed sensor map entry %r", entry.strip())
            continue
        mapping[address] = sensor_id
    return mapping


class SensorRegistry:
    """Read-only address-to-ID lookup with positional fallback."""

    def __init__(self, mapping: Optional[Mapping[str, str]] = None) -> None:
        self._mapping: Mapping[str, str] = MappingProxyType(dict(mapping or {}))

    @classmethod
    def from_string(cls, raw: str) -> "SensorRegistry":
        return cls(parse_sensor_map(raw))

    @property
    def mapping(self) -> Mapping[str, str]:
        return self._mapping

    def resolve(self, address: str, index: int) -> str:
        return self._mapping.get(address, str(index))

    def __len__(self) -> int:
        return len(self._mapping)
