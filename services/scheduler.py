"""Timer loop that refreshes the cache and hands snapshots to the pusher."""

from __future__ import annotations

import logging
from functools import lru_cache
from threading import Event, Thread
from typing import Optional

from models.records import Snapshot
from services.ha_push import HomeAssistantPusher, build_default_pusher
from services.poll_cache import PollCache, build_default_cache
from settings import get_settings

logger = logging.getLogger(__name__)


class PollScheduler:
    """Drives ``PollCache.refresh`` on a fixed interval from one thread.

    Pushes run on their own threads and are never awaited, so a slow push
    target cannot delay the next tick. Push threads are not daemons: on
    shutdown an in-flight push finishes or times out on its own, and
    ``shutdown`` closes the pusher once the last one has ended.
    """

    def __init__(
        self,
        cache: PollCache,
        pusher: Optional[HomeAssistantPusher] = None,
        interval: float = 10.0,
    ) -> None:
        self.cache = cache
        self.pusher = pusher
        self.interval = interval
        self._stop = Event()
        self._thread: Optional[Thread] = None
        self._push_thread: Optional[Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self.tick()
        self._thread = Thread(target=self._run, name="sensor-poll", daemon=True)
        self._thread.start()
        logger.info("Polling every %ss", self.interval)

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        self._stop.set()
        thread = self._thread
        if thread is not None:
            thread.join(timeout)
        self._thread = None

    def shutdown(self, push_timeout: Optional[float] = 5.0) -> None:
        """Stop polling, give the last push a moment to finish, then close the pusher."""
        self.stop()
        if self.pusher is None:
            return
        push_thread = self._push_thread
        if push_thread is not None:
            push_thread.join(push_timeout)
            if push_thread.is_alive():
                logger.warning("Push still running at shutdown; leaving its client open")
                return
        self.pusher.close()

    def tick(self) -> Snapshot:
        snapshot = self.cache.refresh()
        if self.pusher is not None:
            self._push_thread = self._spawn_push(self.pusher, snapshot)
        return snapshot

    @staticmethod
    def _spawn_push(pusher: HomeAssistantPusher, snapshot: Snapshot) -> Thread:
        thread = Thread(target=pusher.push, args=(snapshot,), name="ha-push")
        thread.start()
        return thread

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.tick()
            except Exception:  # noqa: BLE001 - keep the timer alive across bad cycles
                logger.exception("Poll cycle failed")


@lru_cache
def build_default_scheduler() -> PollScheduler:
    settings = get_settings()
    return PollScheduler(
        cache=build_default_cache(),
        pusher=build_default_pusher(),
        interval=float(settings.poll_interval),
    )
