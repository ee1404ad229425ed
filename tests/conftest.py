"""Shared fixtures for waypoint tests."""

import pytest

from waypoint.dom import Element
from waypoint.events import EventBus, SubscribeAdapter
from waypoint.history import MemoryHistory
from waypoint.router import Router
from waypoint.session import Session
from waypoint.testing import FakeController, RecordingRenderer
from waypoint.views.base import ViewContext


@pytest.fixture
def root() -> Element:
    return Element("div", {"id": "root"})


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def subscriber(bus: EventBus) -> SubscribeAdapter:
    return SubscribeAdapter(bus)


@pytest.fixture
def history() -> MemoryHistory:
    return MemoryHistory("/")


@pytest.fixture
def router(root: Element, history: MemoryHistory) -> Router:
    return Router(root, history)


@pytest.fixture
def controller(bus: EventBus) -> FakeController:
    return FakeController(bus)


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def session() -> Session:
    return Session()


@pytest.fixture
def context(renderer: RecordingRenderer, session: Session) -> ViewContext:
    return ViewContext(renderer=renderer, session=session)
