"""Waypoint — navigation and view lifecycle for single-page applications.

Maps URL paths to views, creates and tears them down on every
navigation, keeps link clicks inside the application, and connects
views to business logic through a publish/subscribe bus.

Basic usage::

    from waypoint import App, Controllers, Element

    root = Element("div", {"id": "root"})
    app = App(root, Controllers.single(controller))
    app.start()
"""

__version__ = "0.1.0"
__all__ = [
    "AnchorInterceptor",
    "App",
    "AppConfig",
    "ConfigurationError",
    "Controllers",
    "DomEvent",
    "Element",
    "EventBus",
    "LifecycleError",
    "MemoryHistory",
    "Router",
    "Session",
    "SubscribeAdapter",
    "User",
    "ViewConstructionError",
    "WaypointError",
    "init_anchors_routing",
    "view_factory",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypoint`` fast (kida and bs4 load on first use).
    """
    if name == "App":
        from waypoint.app import App

        return App

    if name == "AppConfig":
        from waypoint.config import AppConfig

        return AppConfig

    if name == "Controllers":
        from waypoint.controllers import Controllers

        return Controllers

    if name in ("DomEvent", "Element"):
        from waypoint import dom as _dom

        return getattr(_dom, name)

    if name in ("EventBus", "SubscribeAdapter"):
        from waypoint import events as _events

        return getattr(_events, name)

    if name == "MemoryHistory":
        from waypoint.history import MemoryHistory

        return MemoryHistory

    if name == "Router":
        from waypoint.router import Router

        return Router

    if name in ("AnchorInterceptor", "init_anchors_routing"):
        from waypoint import anchors as _anchors

        return getattr(_anchors, name)

    if name in ("Session", "User"):
        from waypoint import session as _session

        return getattr(_session, name)

    if name == "view_factory":
        from waypoint.views.factory import view_factory

        return view_factory

    if name in ("ConfigurationError", "LifecycleError", "ViewConstructionError", "WaypointError"):
        from waypoint import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
