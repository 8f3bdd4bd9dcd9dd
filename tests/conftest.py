import pytest
from common.fake_cluster import FakeClock

from ecsroll.core import Time


@pytest.fixture
def clock(monkeypatch) -> FakeClock:
    fake_clock = FakeClock()
    monkeypatch.setattr(Time, "now", fake_clock.now)
    monkeypatch.setattr(Time, "sleep", fake_clock.sleep)
    return fake_clock
