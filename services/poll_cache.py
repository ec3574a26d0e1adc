"""Latest-snapshot cache shared by the poll loop and the HTTP handlers."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Callable, Optional

from devices.iio import DEFAULT_CANDIDATES, find_iio_device
from devices.reader import read_all
from devices.registry import SensorRegistry
from models.records import Snapshot
from settings import get_settings

logger = logging.getLogger(__name__)

Reader = Callable[[str, str, SensorRegistry], Snapshot]


class PollCache:
    """Holds the most recent complete snapshot.

    ``refresh`` builds a new tuple and swaps it in with a single attribute
    assignment, so ``snapshot`` never needs a lock and never sees a partial
    cycle. The writer lock only keeps overlapping refreshes sequential.
    """

    def __init__(
        self,
        w1_path: str | Path,
        iio_path: str | Path,
        registry: Optional[SensorRegistry] = None,
        reader: Reader = read_all,
    ) -> None:
        self.w1_path = str(w1_path)
        self.iio_path = str(iio_path) if iio_path else ""
        self.registry = registry or SensorRegistry()
        self._reader = reader
        self._snapshot: Snapshot = ()
        self._refresh_lock = Lock()

    def refresh(self) -> Snapshot:
        with self._refresh_lock:
            snapshot = tuple(self._reader(self.w1_path, self.iio_path, self.registry))
            self._snapshot = snapshot
        logger.info("Polled sensors", extra={"sensor_count": len(snapshot)})
        return snapshot

    def snapshot(self) -> Snapshot:
        return self._snapshot


@lru_cache
def build_default_cache() -> PollCache:
    """Factory that wires the cache from settings and probes for the IIO device once."""
    settings = get_settings()
    candidates = (settings.iio_device,) if settings.iio_device else DEFAULT_CANDIDATES
    registry = SensorRegistry.from_string(settings.sensor_map)
    if len(registry):
        logger.info("Loaded sensor map with %d entries", len(registry))
    return PollCache(
        w1_path=settings.w1_path,
        iio_path=find_iio_device(candidates),
        registry=registry,
    )
