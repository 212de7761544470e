import pytest

from chatroom.utils.config import Settings, StorageSettings


class FakeEmitter:
    """Records Socket.IO emits instead of sending them"""

    def __init__(self, fail_for=()):
        self.events = []
        self.fail_for = set(fail_for)

    async def emit(self, event, data=None, to=None, **kwargs):
        if to in self.fail_for:
            raise ConnectionError(f"{to} is gone")
        self.events.append((event, data, to))

    def received(self, sid):
        return [(event, data) for event, data, to in self.events if to == sid]


@pytest.fixture
def settings(tmp_path):
    return Settings(storage=StorageSettings(data_dir=str(tmp_path / "data")))


@pytest.fixture
def emitter():
    return FakeEmitter()
