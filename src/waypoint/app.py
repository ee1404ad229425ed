"""Application shell: the standard screens wired to controllers and the bus.

Usage::

    root = Element("div", {"id": "root"})
    app = App(root, Controllers.single(api_controller))
    app.start()              # renders the screen for history.location
    app.router.route_to("/leaderboard")
    ...
    app.stop()

Setup order mirrors a browser page load: register routes, start the
router (first render), then install link interception.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from waypoint.anchors import AnchorInterceptor, init_anchors_routing
from waypoint.config import AppConfig
from waypoint.controllers import Controllers
from waypoint.dom import Node
from waypoint.errors import ConfigurationError
from waypoint.events import (
    LOGGED_OUT,
    USER_LOADED,
    EventBus,
    SubscribeAdapter,
    Subscription,
    is_success,
)
from waypoint.history import History, MemoryHistory
from waypoint.router import Router
from waypoint.session import Session, User
from waypoint.templating import Renderer, TemplateRenderer
from waypoint.views import (
    LOGIN_FORM,
    SIGNUP_FORM,
    AboutView,
    FormView,
    IndexView,
    LeaderboardView,
    LogoutView,
    ProfileView,
    SettingsView,
    ViewContext,
    view_factory,
)

logger = logging.getLogger("waypoint.app")


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """One row of the standard navigation surface."""

    path: str
    view: type
    controller: str | None  # attribute of Controllers, None = no controller
    template: str | None
    options: Mapping[str, Any]


STANDARD_ROUTES: tuple[RouteEntry, ...] = (
    RouteEntry("/", IndexView, "user", IndexView.template, {}),
    RouteEntry("/login", FormView, "auth", LOGIN_FORM.template, {"spec": LOGIN_FORM}),
    RouteEntry("/profile", ProfileView, "user", ProfileView.template, {}),
    RouteEntry("/settings", SettingsView, "profile", SettingsView.template, {}),
    RouteEntry("/signup", FormView, "auth", SIGNUP_FORM.template, {"spec": SIGNUP_FORM}),
    RouteEntry("/leaderboard", LeaderboardView, "leaderboard", LeaderboardView.template, {}),
    RouteEntry("/about", AboutView, None, AboutView.template, {}),
    RouteEntry("/logout", LogoutView, "auth", None, {}),
)


class App:
    """Builds and runs the router for the standard screens.

    The session is kept in step with the bus: a ``UserLoaded`` event that
    carries a user signs it in, a successful ``LoggedOut`` clears it.
    """

    __slots__ = (
        "_interceptor",
        "_session_subscriptions",
        "_started",
        "bus",
        "config",
        "context",
        "controllers",
        "root",
        "router",
        "session",
    )

    def __init__(
        self,
        root_el: Node,
        controllers: Controllers,
        *,
        history: History | None = None,
        config: AppConfig | None = None,
        renderer: Renderer | None = None,
        bus: EventBus | None = None,
        session: Session | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self.root = root_el
        self.controllers = controllers
        self.bus = bus if bus is not None else EventBus()
        self.session = session if session is not None else Session()
        if renderer is None:
            renderer = TemplateRenderer.from_config(self.config)
        self.context = ViewContext(
            renderer=renderer,
            session=self.session,
            config=self.config,
        )
        self.router = Router(root_el, history if history is not None else MemoryHistory())
        self._interceptor: AnchorInterceptor | None = None
        self._session_subscriptions: list[Subscription] = []
        self._started = False

    @property
    def subscriber(self) -> SubscribeAdapter:
        return SubscribeAdapter(self.bus)

    @property
    def interceptor(self) -> AnchorInterceptor | None:
        return self._interceptor

    def register_routes(self) -> None:
        """Add every standard route to the router and set the default."""
        subscriber = self.subscriber
        for entry in STANDARD_ROUTES:
            controller = getattr(self.controllers, entry.controller) if entry.controller else None
            self.router.add_route(
                entry.path,
                view_factory(
                    entry.view, controller, subscriber, context=self.context, **entry.options
                ),
            )
        self.router.set_default_route(self.config.default_route)

    def start(self) -> None:
        if self._started:
            msg = "App has already been started."
            raise ConfigurationError(msg)
        self._started = True
        self._session_subscriptions = [
            self.bus.subscribe(USER_LOADED, self._sync_user),
            self.bus.subscribe(LOGGED_OUT, self._sync_logout),
        ]
        self.register_routes()
        self.router.init()
        self._interceptor = init_anchors_routing(self.root, self.router, self.config)
        logger.debug(
            "Started with %d routes at %s", len(self.router.routes), self.router.current_path
        )

    def load_user(self, user: User | Mapping[str, Any]) -> None:
        """Adopt a user loaded outside the views and return to the menu."""
        self.session.sign_in(User.from_value(user))
        self.router.route_to("/")

    def stop(self) -> None:
        if self._interceptor is not None:
            self._interceptor.detach()
            self._interceptor = None
        self.router.close()
        for subscription in self._session_subscriptions:
            self.bus.unsubscribe(subscription.event_name, subscription)
        self._session_subscriptions = []

    def _sync_user(self, state: Mapping[str, Any], event_name: str, value: Any) -> None:
        if value:
            self.session.sign_in(User.from_value(value))
        else:
            self.session.clear()

    def _sync_logout(self, state: Mapping[str, Any], event_name: str, value: Any) -> None:
        if is_success(value):
            self.session.clear()
