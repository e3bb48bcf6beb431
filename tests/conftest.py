"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from ringecs import ComponentStore, MessageBus, World, WorldSettings


class Recorder:
    """Callable subscriber that remembers every call it receives."""

    def __init__(self, label: str = "recorder", log: list | None = None):
        self.label = label
        self.calls: list[tuple] = []
        self.log = log

    def __call__(self, *args, **kwargs):
        self.calls.append(args)
        if self.log is not None:
            self.log.append((self.label, args))

    def __repr__(self) -> str:
        return f"<Recorder {self.label}>"


@pytest.fixture
def world():
    """Fresh World instance with default settings."""
    return World(WorldSettings())


@pytest.fixture
def bus():
    """Fresh MessageBus."""
    return MessageBus()


@pytest.fixture
def store(bus):
    """ComponentStore publishing on the bus fixture."""
    return ComponentStore(bus)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def event_log():
    """Shared list that ordered recorders append (label, args) to."""
    return []


@pytest.fixture
def make_recorder(event_log):
    def factory(label: str) -> Recorder:
        return Recorder(label, event_log)

    return factory
