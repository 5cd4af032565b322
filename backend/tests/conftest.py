import pytest

from fakes import FakeClock
from rate_limiter import SlidingWindowLimiter


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def window(clock):
    return SlidingWindowLimiter(max_calls=30, window_seconds=60.0, clock=clock)
