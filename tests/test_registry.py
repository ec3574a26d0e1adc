from __future__ import annotations

import pytest

from devices.registry import SensorRegistry, parse_sensor_map


def test_parse_sensor_map() -> None:
    mapping = parse_sensor_map("28-aaa:hot_water_middle,28-bbb:heating_supply")

    assert mapping == {"28-aaa": "hot_water_middle", "28-bbb": "heating_supply"}


def test_parse_empty_string() -> None:
    assert parse_sensor_map("") == {}
    assert parse_sensor_map("   ") == {}


def test_parse_trims_whitespace_and_skips_malformed_entries() -> None:
    mapping = parse_sensor_map(" 28-aaa : one , bogus, :two, 28-ccc:, ,28-ddd:four")

    assert mapping == {"28-aaa": "one", "28-ddd": "four"}


def test_parse_last_duplicate_wins() -> None:
    assert parse_sensor_map("28-aaa:first,28-aaa:second") == {"28-aaa": "second"}


def test_resolve_falls_back_to_index() -> None:
    registry = SensorRegistry.from_string("28-aaa:hot_water_middle")

    assert registry.resolve("28-aaa", 7) == "hot_water_middle"
    assert registry.resolve("28-zzz", 3) == "3"
    assert len(registry) == 1


def test_registry_is_read_only() -> None:
    source = {"28-aaa": "one"}
    registry = SensorRegistry(source)
    source["28-bbb"] = "two"

    assert registry.resolve("28-bbb", 0) == "0"
    with pytest.raises(TypeError):
        registry.mapping["28-ccc"] = "three"  # type: ignore[index]
