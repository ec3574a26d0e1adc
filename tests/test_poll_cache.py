from __future__ import annotations

import threading

from devices.registry import SensorRegistry
from models.records import SensorReading
from services.poll_cache import PollCache, build_default_cache
from settings import get_settings
from tests.sysfs import SENSOR_MAP


def test_snapshot_is_empty_before_first_refresh(w1_bus) -> None:
    cache = PollCache(w1_bus, "")

    assert cache.snapshot() == ()


def test_refresh_replaces_snapshot(w1_bus, iio_device) -> None:
    cache = PollCache(w1_bus, iio_device, SensorRegistry(SENSOR_MAP))

    returned = cache.refresh()

    assert cache.snapshot() is returned
    assert len(returned) == 6
    assert returned[0] == SensorReading(sensor_id="hot_water_middle", value="48.750")
    assert returned[-1] == SensorReading(sensor_id="utility_room_humidity", value="49.3")


def test_refresh_drops_sensors_that_disappear(w1_bus) -> None:
    cache = PollCache(w1_bus, "")
    cache.refresh()
    (w1_bus / "28-000000000004" / "w1_slave").unlink()

    assert len(cache.refresh()) == 3
    assert len(cache.snapshot()) == 3


def test_readers_never_observe_partial_snapshots() -> None:
    first = tuple(SensorReading(sensor_id=str(i), value="1.000") for i in range(50))
    second = tuple(SensorReading(sensor_id=str(i), value="2.000") for i in range(50))
    toggle = {"next": first}

    def reader(_w1, _iio, _registry):
        snapshot = toggle["next"]
        toggle["next"] = second if snapshot is first else first
        # Build the result one item at a time, as a real device scan does.
        return [reading for reading in snapshot]

    cache = PollCache("unused", "", reader=reader)
    cache.refresh()
    stop = threading.Event()
    torn: list[tuple] = []

    def watch() -> None:
        while not stop.is_set():
            values = {reading.value for reading in cache.snapshot()}
            if len(values) != 1:
                torn.append(tuple(values))

    watchers = [threading.Thread(target=watch) for _ in range(4)]
    for watcher in watchers:
        watcher.start()
    for _ in range(500):
        cache.refresh()
    stop.set()
    for watcher in watchers:
        watcher.join(timeout=5)

    assert torn == []
    assert len(cache.snapshot()) == 50


def test_build_default_cache_uses_settings(monkeypatch, w1_bus, iio_device) -> None:
    monkeypatch.setenv("W1_PATH", str(w1_bus))
    monkeypatch.setenv("IIO_DEVICE", str(iio_device))
    monkeypatch.setenv("SENSOR_MAP", "28-000000000002:heating_supply")
    get_settings.cache_clear()
    build_default_cache.cache_clear()

    try:
        cache = build_default_cache()
        assert cache is build_default_cache()
        assert cache.iio_path == str(iio_device)
        ids = [reading.sensor_id for reading in cache.refresh()]
        assert ids == ["0", "heating_supply", "2", "3", "utility_room_temperature", "utility_room_humidity"]
    finally:
        build_default_cache.cache_clear()
        get_settings.cache_clear()


def test_build_default_cache_disables_missing_iio(monkeypatch, tmp_path, w1_bus) -> None:
    monkeypatch.setenv("W1_PATH", str(w1_bus))
    monkeypatch.setenv("IIO_DEVICE", str(tmp_path / "absent"))
    get_settings.cache_clear()
    build_default_cache.cache_clear()

    try:
        cache = build_default_cache()
        assert cache.iio_path == ""
        assert len(cache.refresh()) == 4
    finally:
        build_default_cache.cache_clear()
        get_settings.cache_clear()
