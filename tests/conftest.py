import datetime as dt

import pytest


class FakeClock:
    """Manually advanced stand-in for ``datetime.now``."""

    def __init__(self, start=dt.datetime(2024, 3, 1, 9, 30, 0)):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += dt.timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()
