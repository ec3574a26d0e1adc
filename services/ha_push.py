"""Best-effort forwarding of sensor snapshots to Home Assistant."""

from __future__ import annotations

import logging
import math
import re
from functools import lru_cache
from threading import Lock
from typing import Any, Dict, Iterable, Mapping, Optional

import httpx

from models.metadata import SENSOR_METADATA, SensorMeta
from models.records import SensorReading
from settings import get_settings

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0
STATE_CLASS = "measurement"
_SUCCESS_STATUSES = frozenset({200, 201})
_LOG_EVERY = 10
# Plain decimal only; float() alone would also take "1_000" and padded text.
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


class PushError(Exception):
    """Raised when a single sensor could not be delivered."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class HomeAssistantPusher:
    """Posts each known sensor to ``/api/states/<entity_id>``.

    Only one ``push`` runs at a time per instance; a call that arrives while
    another is in flight returns immediately without any network I/O.
    ``failures`` counts consecutive failed sensor pushes and is only touched
    while the busy lock is held.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        metadata: Mapping[str, SensorMeta] = SENSOR_METADATA,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.metadata = metadata
        self.failures = 0
        self._busy = Lock()
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
        )

    def close(self) -> None:
        self._client.close()

    @property
    def busy(self) -> bool:
        return self._busy.locked()

    def push(self, snapshot: Iterable[SensorReading]) -> int:
        """Push every reading that has metadata; return how many succeeded."""
        if not self._busy.acquire(blocking=False):
            logger.info("Push still in progress, skipping")
            return 0
        try:
            return self._push_all(snapshot)
        finally:
            self._busy.release()

    def _push_all(self, snapshot: Iterable[SensorReading]) -> int:
        pushed = 0
        for reading in snapshot:
            meta = self.metadata.get(reading.sensor_id)
            if meta is None:
                continue
            try:
                self._push_reading(reading, meta)
            except PushError as exc:
                self.failures += 1
                if self.failures == 1 or self.failures % _LOG_EVERY == 0:
                    logger.warning(
                        "Push failed: %s",
                        exc,
                        extra={
                            "entity_id": meta.entity_id,
                            "failures": self.failures,
                            "status_code": exc.status_code,
                        },
                    )
                continue
            pushed += 1

        if pushed:
            if self.failures:
                logger.info("Push recovered after %d failures", self.failures)
            self.failures = 0
        logger.debug("Pushed sensors", extra={"sensor_count": pushed})
        return pushed

    def _push_reading(self, reading: SensorReading, meta: SensorMeta) -> None:
        payload = build_payload(reading, meta)
        try:
            response = self._client.post(f"/api/states/{meta.entity_id}", json=payload)
        except httpx.HTTPError as exc:
            raise PushError(f"request to {meta.entity_id} failed: {exc}") from exc

        if response.status_code not in _SUCCESS_STATUSES:
            raise PushError(
                f"unexpected status {response.status_code} for {meta.entity_id}",
                status_code=response.status_code,
            )


def format_state(value: str) -> str:
    if not _DECIMAL_RE.fullmatch(value):
        raise PushError(f"cannot parse value {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise PushError(f"value {value!r} is not finite")
    return f"{number:.1f}"


def build_payload(reading: SensorReading, meta: SensorMeta) -> Dict[str, Any]:
    return {
        "state": format_state(reading.value),
        "attributes": {
            "friendly_name": meta.friendly_name,
            "unit_of_measurement": meta.unit,
            "device_class": meta.device_class,
            "state_class": STATE_CLASS,
        },
    }


@lru_cache
def build_default_pusher() -> Optional[HomeAssistantPusher]:
    """Return a configured pusher, or ``None`` when forwarding is disabled."""
    settings = get_settings()
    if settings.ha_url and settings.ha_token:
        logger.info("Home Assistant push enabled for %s", settings.ha_url)
        return HomeAssistantPusher(
            base_url=settings.ha_url,
            token=settings.ha_token,
            timeout=settings.ha_timeout,
        )
    if settings.ha_url or settings.ha_token:
        logger.warning("HA_URL and HA_TOKEN must both be set; Home Assistant push disabled")
    return None
