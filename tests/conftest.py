"""Shared fixtures: fake database driver and connections."""

import asyncio
from typing import Any, Dict, List, Optional, Tuple

import pytest

TEST_URI = "mongodb://localhost:27017"


class FakeConnection:
    """Stand-in for a driver connection handle."""

    def __init__(self, name: str = "conn"):
        self.name = name
        self.closed = False

    async def close(self) -> None:
        self.closed = True


class FakeConnector:
    """Async driver ``connect(uri, options)`` that records its calls.

    Each call consumes the next outcome: an exception is raised, anything
    else is returned. With no outcomes left a fresh FakeConnection is
    returned. When ``gate`` is set, calls block until it is released.
    """

    def __init__(self, outcomes: Optional[List[Any]] = None, delay: float = 0.0):
        self.outcomes = list(outcomes or [])
        self.delay = delay
        self.gate: Optional[asyncio.Event] = None
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def __call__(self, uri: str, options: Dict[str, Any]):
        self.calls.append((uri, options))
        if self.gate is not None:
            await self.gate.wait()
        if self.delay:
            await asyncio.sleep(self.delay)
        outcome = self.outcomes.pop(0) if self.outcomes else FakeConnection()
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def fake_connector():
    return FakeConnector()


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Keep cached settings from leaking between tests."""
    from devevent.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
