"""Test utilities for waypoint applications.

A scripted controller that answers through the event bus, a renderer
that records every template it draws, and assertions for the teardown
guarantees every view must honour::

    from waypoint.testing import FakeController, RecordingRenderer, assert_torn_down
"""

from collections.abc import Mapping
from typing import Any

from waypoint.dom import Element
from waypoint.events import (
    AVATAR_UPDATED,
    LEADERBOARD_LOADED,
    LOGGED_IN,
    LOGGED_OUT,
    PROFILE_UPDATED,
    SIGNED_UP,
    USER_LOADED,
    EventBus,
)
from waypoint.templating import Renderer, TemplateRenderer
from waypoint.views.base import ViewState

OPERATION_EVENTS: dict[str, str] = {
    "get_user": USER_LOADED,
    "login": LOGGED_IN,
    "sign_up": SIGNED_UP,
    "logout": LOGGED_OUT,
    "update_profile": PROFILE_UPDATED,
    "upload_avatar": AVATAR_UPDATED,
    "get_leaderboard": LEADERBOARD_LOADED,
}

_NO_RESPONSE = object()


class FakeController:
    """Implements every controller operation; records calls, answers on the bus.

    ``responses`` maps an operation name to the value published on its
    event right away (as if the remote call completed synchronously).
    Operations without a response publish nothing; call :meth:`complete`
    later to simulate a slow reply.
    """

    def __init__(self, bus: EventBus, responses: Mapping[str, Any] | None = None) -> None:
        self.bus = bus
        self.responses: dict[str, Any] = dict(responses or {})
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def called(self, operation: str) -> list[tuple[Any, ...]]:
        """Arguments of every call to *operation*, in call order."""
        return [args for name, args in self.calls if name == operation]

    def complete(self, operation: str, value: Any) -> None:
        """Publish *value* on *operation*'s event."""
        self.bus.publish(OPERATION_EVENTS[operation], value=value)

    def _call(self, operation: str, *args: Any) -> None:
        self.calls.append((operation, args))
        response = self.responses.get(operation, _NO_RESPONSE)
        if response is not _NO_RESPONSE:
            self.complete(operation, response(*args) if callable(response) else response)

    def get_user(self) -> None:
        self._call("get_user")

    def login(self, login: str, password: str) -> None:
        self._call("login", login, password)

    def sign_up(self, login: str, email: str, password: str, repeat_password: str) -> None:
        self._call("sign_up", login, email, password, repeat_password)

    def logout(self) -> None:
        self._call("logout")

    def update_profile(self, login: str, password: str, repeat_password: str) -> None:
        self._call("update_profile", login, password, repeat_password)

    def upload_avatar(self, file_input: Any) -> None:
        self._call("upload_avatar", file_input)

    def get_leaderboard(self, page: int) -> None:
        self._call("get_leaderboard", page)


class RecordingRenderer:
    """Delegates to a real renderer and keeps ``(template_name, context)`` pairs."""

    def __init__(self, renderer: Renderer | None = None) -> None:
        self._renderer = renderer if renderer is not None else TemplateRenderer.from_config()
        self.calls: list[tuple[str, dict[str, Any]]] = []

    @property
    def last(self) -> tuple[str, dict[str, Any]]:
        assert self.calls, "Nothing has been rendered"
        return self.calls[-1]

    def render(self, template_name: str, context: Mapping[str, Any]) -> str:
        self.calls.append((template_name, dict(context)))
        return self._renderer.render(template_name, context)


def fill_form(root: Element, **values: str) -> Element:
    """Set form control values under *root* and return the form.

    Use underscores for names as they appear in the template
    (``repeat_password="x"``).
    """
    forms = root.find_all("form")
    assert forms, "No <form> rendered"
    form = forms[0]
    controls = form.elements
    for name, value in values.items():
        assert name in controls, f"Form has no control named {name!r}"
        controls[name].value = value
    return form


def assert_torn_down(view: Any, root: Element, bus: EventBus | None = None) -> None:
    """Assert *view* is deinitialized and left nothing behind."""
    assert view.state is ViewState.DEINITIALIZED, f"View is {view.state.value}"
    assert root.inner_html == "", f"Root still has markup: {root.inner_html[:200]}"
    lifecycle = view.lifecycle
    assert lifecycle.listener_count == 0, f"{lifecycle.listener_count} DOM listeners left"
    assert lifecycle.subscription_count == 0, (
        f"{lifecycle.subscription_count} bus subscriptions left"
    )
    if bus is not None:
        assert bus.subscriber_count() == 0, f"Bus still has {bus.subscriber_count()} subscribers"
