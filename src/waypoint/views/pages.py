"""Menu and about screens."""

from collections.abc import Mapping
from typing import Any

from waypoint.controllers import UserController
from waypoint.dom import Node
from waypoint.events import USER_LOADED, SubscribeAdapter
from waypoint.views.base import Lifecycle, Navigator, ViewContext, ViewState, require


class IndexView:
    """The main menu. Shows sign-in links until the user is known."""

    name = "index"
    template = "menu.html"

    def __init__(
        self,
        root_el: Node,
        router: Navigator,
        controller: UserController | None = None,
        subscriber: SubscribeAdapter | None = None,
        *,
        context: ViewContext | None = None,
    ) -> None:
        self.lifecycle = Lifecycle(self.name, root_el, router, subscriber)
        self._controller = controller
        self._context = context or ViewContext()

    @property
    def state(self) -> ViewState:
        return self.lifecycle.state

    def prerender(self) -> None:
        self._draw(None)

    def render(self, state: Mapping[str, Any], event_name: str, value: Any) -> None:
        self._draw(value or None)

    def init(self) -> None:
        controller = require(self._controller, "controller", self.name)
        self.lifecycle.begin()
        self.prerender()
        self.lifecycle.subscribe(USER_LOADED, self.render)
        controller.get_user()

    def deinit(self) -> None:
        self.lifecycle.release()

    def _draw(self, user: Any) -> None:
        self.lifecycle.draw(self._context.render(self.template, {"is_authorized": user}))


class AboutView:
    """Static information screen; needs neither a controller nor the bus."""

    name = "about"
    template = "about.html"

    def __init__(
        self,
        root_el: Node,
        router: Navigator,
        controller: Any = None,
        subscriber: SubscribeAdapter | None = None,
        *,
        context: ViewContext | None = None,
    ) -> None:
        self.lifecycle = Lifecycle(self.name, root_el, router, subscriber)
        self._context = context or ViewContext()

    @property
    def state(self) -> ViewState:
        return self.lifecycle.state

    def init(self) -> None:
        self.lifecycle.begin()
        self.lifecycle.draw(self._context.render(self.template, {}))

    def deinit(self) -> None:
        self.lifecycle.release()
