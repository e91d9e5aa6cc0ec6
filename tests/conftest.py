import pytest

from notificationtimeout.tray import MessageTray


class FakeSettings:
    """In-memory settings store with a "changed" signal."""

    def __init__(self, **values):
        self.values = {"timeout": 1000, "always-normal": True, "ignore-idle": True}
        self.values.update({k.replace("_", "-"): v for k, v in values.items()})
        self.handlers = {}
        self._next_id = 1
        self.closed = False

    def get_boolean(self, key):
        return self.values[key]

    def get_int(self, key):
        return self.values[key]

    def connect(self, signal, cb):
        assert signal == "changed"
        handler_id = self._next_id
        self._next_id += 1
        self.handlers[handler_id] = cb
        return handler_id

    def disconnect(self, handler_id):
        del self.handlers[handler_id]

    def close(self):
        self.closed = True

    def set(self, key, value):
        self.values[key] = value
        for cb in list(self.handlers.values()):
            cb(self, key)


class ManualClock:

    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


@pytest.fixture
def settings():
    return FakeSettings()


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def idle():
    # ms since the last input, tests change idle["time"]
    return {"time": 0}


@pytest.fixture
def tray(clock, idle):
    return MessageTray(clock=clock, idle_time=lambda: idle["time"], idle_threshold=1000)
