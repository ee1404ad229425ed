"""Path-to-view router with history synchronization.

Routes are registered during setup; the table is fixed once ``init()``
runs. Exactly one view is active at a time. Every navigation, whether
from a link, a redirect issued by a view, or the browser's back/forward
buttons, goes through the same steps:

1. resolve the path (unmatched paths fall back to the default route)
2. ``deinit()`` the active view
3. build the new view with its factory
4. ``init()`` the new view
5. record the navigation in history (not for back/forward)

Navigations requested while another one is running (a view redirecting
from inside ``init()`` or ``render()``) are queued and run once the
current one finishes, so two views are never alive at the same time.
"""

import logging
from collections import deque
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from urllib.parse import urlsplit

from waypoint.dom import Node
from waypoint.errors import ConfigurationError
from waypoint.history import History, MemoryHistory
from waypoint.views.base import View, ViewFactory

logger = logging.getLogger("waypoint.router")


class HistoryAction(Enum):
    """How a navigation is recorded in history."""

    PUSH = "push"  # link clicks and redirects
    REPLACE = "replace"  # the initial navigation
    NONE = "none"  # back/forward: the browser already moved


def normalize_path(path: str) -> str:
    """Strip query and fragment, ensure a leading slash, drop a trailing one.

    Examples::

        "/login?next=/"  -> "/login"
        "/leaderboard/"  -> "/leaderboard"
        ""               -> "/"
    """
    bare = urlsplit(path).path.strip()
    if not bare.startswith("/"):
        bare = "/" + bare
    if len(bare) > 1:
        bare = bare.rstrip("/") or "/"
    return bare


class Router:
    """Owns the route table, the active view, and navigation state.

    Usage::

        router = Router(root, history)
        router.add_route("/", view_factory(IndexView, controller, subscriber))
        router.add_route("/about", view_factory(AboutView))
        router.set_default_route("/")
        router.init()
        router.route_to("/about")
    """

    __slots__ = (
        "_active_view",
        "_closed",
        "_current_path",
        "_default_route",
        "_history",
        "_initialized",
        "_navigating",
        "_on_popstate",
        "_queue",
        "_root",
        "_routes",
    )

    def __init__(self, root_el: Node, history: History | None = None) -> None:
        self._root = root_el
        self._history: History = history if history is not None else MemoryHistory()
        self._routes: dict[str, ViewFactory] = {}
        self._default_route: str | None = None
        self._active_view: View | None = None
        self._current_path: str | None = None
        self._initialized = False
        self._closed = False
        self._navigating = False
        self._queue: deque[tuple[str, HistoryAction]] = deque()
        self._on_popstate = self._popstate

    # -- Setup -----------------------------------------------------------------

    def add_route(self, path: str, factory: ViewFactory) -> None:
        """Map *path* to *factory*. Must be called before ``init()``."""
        if self._initialized:
            msg = f"Cannot add route {path!r} after the router has started."
            raise ConfigurationError(msg)
        self._routes[normalize_path(path)] = factory

    def set_default_route(self, path: str) -> None:
        """Use *path* for every navigation that matches no route.

        The path may be registered before or after this call, but must be
        registered by the time a fallback is needed.
        """
        self._default_route = normalize_path(path)

    # -- Introspection ---------------------------------------------------------

    @property
    def routes(self) -> Mapping[str, ViewFactory]:
        return MappingProxyType(self._routes)

    @property
    def default_route(self) -> str | None:
        return self._default_route

    @property
    def active_view(self) -> View | None:
        return self._active_view

    @property
    def current_path(self) -> str | None:
        return self._current_path

    @property
    def history(self) -> History:
        return self._history

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def resolve(self, path: str) -> tuple[str, ViewFactory]:
        """Return the route path and factory that *path* activates."""
        normalized = normalize_path(path)
        factory = self._routes.get(normalized)
        if factory is not None:
            return normalized, factory

        if self._default_route is None:
            msg = f"No route matches {path!r} and no default route is set."
            raise ConfigurationError(msg)
        factory = self._routes.get(self._default_route)
        if factory is None:
            msg = f"Default route {self._default_route!r} is not registered."
            raise ConfigurationError(msg)
        logger.debug("No route matches %s, falling back to %s", path, self._default_route)
        return self._default_route, factory

    # -- Navigation ------------------------------------------------------------

    def init(self) -> None:
        """Activate the view for the current location and follow back/forward."""
        if self._initialized:
            msg = "Router has already been started."
            raise ConfigurationError(msg)
        self._initialized = True
        self._history.add_popstate_listener(self._on_popstate)
        self._navigate(self._history.location, HistoryAction.REPLACE)

    def route_to(self, path: str) -> None:
        """Navigate to *path* and push a history entry for it."""
        self._navigate(path, HistoryAction.PUSH)

    def close(self) -> None:
        """Tear down the active view and stop following history. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self._queue.clear()
        if self._initialized:
            self._history.remove_popstate_listener(self._on_popstate)
        self._teardown_active()
        self._current_path = None

    def _popstate(self, path: str) -> None:
        self._navigate(path, HistoryAction.NONE)

    def _navigate(self, path: str, action: HistoryAction) -> None:
        if self._closed:
            logger.debug("Ignoring navigation to %s on a closed router", path)
            return

        self._queue.append((path, action))
        if self._navigating:
            logger.debug("Queued navigation to %s", path)
            return

        self._navigating = True
        try:
            while self._queue:
                self._activate(*self._queue.popleft())
        finally:
            self._navigating = False
            self._queue.clear()

    def _activate(self, path: str, action: HistoryAction) -> None:
        route_path, factory = self.resolve(path)

        self._teardown_active()
        self._current_path = None
        view = factory(self._root, self)
        self._active_view = view
        self._current_path = route_path
        logger.debug("Activating %s for %s", type(view).__name__, route_path)

        try:
            view.init()
        except Exception:
            logger.exception("Failed to initialize %s for %s", type(view).__name__, route_path)
            self._teardown_active()
            self._current_path = None
            return

        if action is HistoryAction.PUSH:
            self._history.push_state(route_path)
        elif action is HistoryAction.REPLACE:
            self._history.replace_state(route_path)

    def _teardown_active(self) -> None:
        view, self._active_view = self._active_view, None
        if view is None:
            return
        try:
            view.deinit()
        except Exception:
            logger.exception("Failed to deinitialize %s", type(view).__name__)
