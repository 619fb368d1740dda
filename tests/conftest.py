import datetime
import pytest


class Clock:
    def __init__(self, now: datetime.datetime) -> None:
        self.now = now

    def __call__(self) -> datetime.datetime:
        return self.now

    def advance(self, milliseconds: int) -> None:
        self.now += datetime.timedelta(milliseconds=milliseconds)


@pytest.fixture
def now() -> datetime.datetime:
    return datetime.datetime(2024, 1, 1, 12, 0, 0, tzinfo=datetime.timezone.utc)


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch, now: datetime.datetime) -> Clock:
    clock = Clock(now)
    monkeypatch.setattr("sessioncookie.cookies.utcnow", clock)
    return clock
