from __future__ import annotations

from pathlib import Path

import pytest

from tests.sysfs import build_iio_device, build_w1_bus


@pytest.fixture()
def w1_bus(tmp_path) -> Path:
    return build_w1_bus(tmp_path / "w1_bus_master1")


@pytest.fixture()
def iio_device(tmp_path) -> Path:
    return build_iio_device(tmp_path / "iio:device0")
