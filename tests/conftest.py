import os

import pytest


class FakeChannel:
    """In-memory host channel recording listeners and commands."""

    def __init__(self):
        self.state = {}
        self.get_state_error = None
        self.listen_error = None
        self.invoke_error = None
        self.handlers = {}
        self.invoked = []
        self.unlisten_calls = 0

    def get_state(self):
        if self.get_state_error is not None:
            raise self.get_state_error
        return self.state

    def listen(self, event, handler):
        if self.listen_error is not None:
            raise self.listen_error
        self.handlers.setdefault(event, []).append(handler)

        def _unlisten():
            self.unlisten_calls += 1
            self.handlers[event].remove(handler)

        return _unlisten

    def emit(self, event, payload):
        for handler in list(self.handlers.get(event, [])):
            handler(payload)

    def invoke(self, command):
        if self.invoke_error is not None:
            raise self.invoke_error
        self.invoked.append(command)


class FakeWindow:
    def __init__(self):
        self.visible = False
        self.show_calls = 0
        self.hide_calls = 0

    def show(self):
        self.visible = True
        self.show_calls += 1

    def hide(self):
        self.visible = False
        self.hide_calls += 1

    def isVisible(self):
        return self.visible


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture()
def channel():
    return FakeChannel()


@pytest.fixture()
def window():
    return FakeWindow()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture(scope="session")
def qt_app():
    # widgets need a full QApplication; no display in CI
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
