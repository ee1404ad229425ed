"""Profile and logout screens."""

from collections.abc import Mapping
from typing import Any

from waypoint.controllers import AuthController, UserController
from waypoint.dom import Node
from waypoint.events import LOGGED_OUT, USER_LOADED, SubscribeAdapter, is_success
from waypoint.session import User
from waypoint.views.base import Lifecycle, Navigator, ViewContext, ViewState, require


class ProfileView:
    """Shows the current user; anonymous visitors are sent back to ``/``."""

    name = "profile"
    template = "profile.html"

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

    def init(self) -> None:
        controller = require(self._controller, "controller", self.name)
        self.lifecycle.begin()
        self.lifecycle.subscribe(USER_LOADED, self.render)
        controller.get_user()

    def render(self, state: Mapping[str, Any], event_name: str, value: Any) -> None:
        if not value:
            self.lifecycle.router.route_to("/")
            return

        user = User.from_value(value)
        self.lifecycle.draw(
            self._context.render(
                self.template,
                {
                    "login": user.login,
                    "email": user.email,
                    "avatar_path": user.avatar or self._context.config.default_avatar,
                    "score": user.score,
                },
            )
        )

    def deinit(self) -> None:
        self.lifecycle.release()


class LogoutView:
    """Signs the user out and returns to the menu. Renders nothing itself."""

    name = "logout"
    template = None

    def __init__(
        self,
        root_el: Node,
        router: Navigator,
        controller: AuthController | None = None,
        subscriber: SubscribeAdapter | None = None,
        *,
        context: ViewContext | None = None,
    ) -> None:
        self.lifecycle = Lifecycle(self.name, root_el, router, subscriber)
        self._controller = controller

    @property
    def state(self) -> ViewState:
        return self.lifecycle.state

    def init(self) -> None:
        controller = require(self._controller, "controller", self.name)
        self.lifecycle.begin()
        self.lifecycle.subscribe(LOGGED_OUT, self.render)
        controller.logout()

    def render(self, state: Mapping[str, Any], event_name: str, value: Any) -> None:
        if is_success(value):
            self.lifecycle.router.route_to("/")

    def deinit(self) -> None:
        self.lifecycle.release()
