"""View contract and the lifecycle bookkeeping every view composes.

A view is created fresh for each navigation, initialized once, and
deinitialized once. :class:`Lifecycle` owns everything a view registers
while it is alive (DOM listeners, event-bus subscriptions, rendered
markup) and undoes all of it in :meth:`Lifecycle.release`, so no
listener or subscription outlives the view that created it.

States::

    CONSTRUCTED --init()--> INITIALIZED --deinit()--> DEINITIALIZED
         |                                                 ^
         +--------------------deinit()---------------------+
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from functools import cache
from typing import Any, Protocol, runtime_checkable

from waypoint.config import AppConfig
from waypoint.dom import Listener, Node
from waypoint.errors import ConfigurationError, LifecycleError, ViewConstructionError
from waypoint.events import Handler, SubscribeAdapter, Subscription
from waypoint.session import Session
from waypoint.templating import Renderer, TemplateRenderer

logger = logging.getLogger("waypoint.views")


class ViewState(Enum):
    CONSTRUCTED = "constructed"
    INITIALIZED = "initialized"
    DEINITIALIZED = "deinitialized"


@runtime_checkable
class Navigator(Protocol):
    """What a view needs from the router."""

    def route_to(self, path: str) -> None: ...


@runtime_checkable
class View(Protocol):
    """A screen bound to a path.

    ``render(state, event_name, value)`` is optional: views that listen
    to the event bus expose it as their subscription callback.
    """

    name: str

    @property
    def state(self) -> ViewState: ...

    def init(self) -> None: ...

    def deinit(self) -> None: ...


type ViewFactory = Callable[[Node, Navigator], View]


@cache
def _default_renderer() -> TemplateRenderer:
    return TemplateRenderer.from_config(AppConfig())


@dataclass(frozen=True, slots=True)
class ViewContext:
    """Per-application collaborators shared by every view.

    Replaces ambient globals: the session (current user), the template
    renderer and the app configuration are handed to each view
    explicitly through the view factory.
    """

    renderer: Renderer = field(default_factory=_default_renderer)
    session: Session = field(default_factory=Session)
    config: AppConfig = field(default_factory=AppConfig)

    def render(self, template_name: str, context: Mapping[str, Any]) -> str:
        return self.renderer.render(template_name, context)


def require[T](dependency: T | None, what: str, view_name: str) -> T:
    """Return *dependency*, or fail because the view cannot work without it."""
    if dependency is None:
        msg = f"{view_name} view needs a {what}."
        raise ConfigurationError(msg)
    return dependency


def check_view_arguments(root_el: Any, router: Any) -> None:
    """Reject a root element or router that lacks the needed capabilities."""
    if not isinstance(root_el, Node):
        msg = f"root_el must be a DOM Node, got {type(root_el).__name__}."
        raise ViewConstructionError(msg)
    if not isinstance(router, Navigator):
        msg = f"router must provide route_to(), got {type(router).__name__}."
        raise ViewConstructionError(msg)


class Lifecycle:
    """Registration ledger for one view instance.

    Everything registered through :meth:`listen` and :meth:`subscribe`
    is undone by :meth:`release`, in reverse order, even if ``init()``
    stopped half way.
    """

    __slots__ = (
        "_listeners",
        "_subscriber",
        "_subscriptions",
        "root",
        "router",
        "state",
        "view_name",
    )

    def __init__(
        self,
        view_name: str,
        root_el: Node,
        router: Navigator,
        subscriber: SubscribeAdapter | None = None,
    ) -> None:
        check_view_arguments(root_el, router)
        self.view_name = view_name
        self.root = root_el
        self.router = router
        self.state = ViewState.CONSTRUCTED
        self._subscriber = subscriber
        self._listeners: list[tuple[Node, str, Listener]] = []
        self._subscriptions: list[Subscription] = []

    @property
    def active(self) -> bool:
        return self.state is ViewState.INITIALIZED

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    @property
    def subscription_count(self) -> int:
        return len(self._subscriptions)

    def begin(self) -> None:
        """Enter INITIALIZED. ``init()`` may run only once per instance."""
        if self.state is not ViewState.CONSTRUCTED:
            msg = f"{self.view_name} view cannot be initialized from state {self.state.value!r}."
            raise LifecycleError(msg)
        self.state = ViewState.INITIALIZED

    def draw(self, markup: str) -> None:
        self.root.inner_html = markup

    # -- DOM listeners --------------------------------------------------------

    def listen(self, element: Node, event_type: str, listener: Listener) -> None:
        element.add_event_listener(event_type, listener)
        self._listeners.append((element, event_type, listener))

    def unlisten(self, element: Node, event_type: str, listener: Listener) -> None:
        for index, (el, kind, registered) in enumerate(self._listeners):
            if el is element and kind == event_type and registered is listener:
                del self._listeners[index]
                element.remove_event_listener(event_type, listener)
                return

    # -- Event bus ------------------------------------------------------------

    def subscribe(self, event_name: str, handler: Handler) -> Subscription:
        """Subscribe *handler*; deliveries stop as soon as the view is deinitialized.

        The bus snapshots its subscriber list per publish, so an event that
        was already being delivered when this view was torn down can still
        reach the wrapper; the wrapper drops it.
        """
        if self._subscriber is None:
            msg = f"{self.view_name} view subscribes to {event_name!r} but has no event bus."
            raise ConfigurationError(msg)

        def deliver(state: Mapping[str, Any], name: str, value: Any) -> None:
            if not self.active:
                logger.debug("Dropped %s for %s view (%s)", name, self.view_name, self.state.value)
                return
            handler(state, name, value)

        subscription = self._subscriber.subscribe(event_name, deliver)
        self._subscriptions.append(subscription)
        return subscription

    # -- Teardown -------------------------------------------------------------

    def release(self) -> None:
        """Undo every registration and clear the root. Never raises."""
        while self._listeners:
            element, event_type, listener = self._listeners.pop()
            try:
                element.remove_event_listener(event_type, listener)
            except Exception:
                logger.exception(
                    "Failed to detach %s listener of %s view", event_type, self.view_name
                )

        subscriber = self._subscriber
        while self._subscriptions and subscriber is not None:
            subscription = self._subscriptions.pop()
            try:
                subscriber.unsubscribe(subscription.event_name, subscription)
            except Exception:
                logger.exception(
                    "Failed to unsubscribe %s view from %s", self.view_name, subscription.event_name
                )

        try:
            self.root.inner_html = ""
        except Exception:
            logger.exception("Failed to clear root of %s view", self.view_name)

        self.state = ViewState.DEINITIALIZED
