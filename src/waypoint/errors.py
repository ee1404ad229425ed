"""Waypoint exception hierarchy.

Shared across Router, views, and the app shell so every module raises
and catches the same types.
"""


class WaypointError(Exception):
    """Base for all waypoint-specific errors."""


class ConfigurationError(WaypointError):
    """Raised when application setup is invalid.

    Typically raised while the route table is being built or when the
    router starts. There is nothing useful to render after one of these.
    """


class ViewConstructionError(ConfigurationError, TypeError):
    """A view was constructed with a root element or router of the wrong kind.

    Subclasses ``TypeError`` so callers that only care about the
    type mismatch can catch it without importing waypoint.
    """


class LifecycleError(WaypointError):
    """A view lifecycle method was called out of order (e.g. ``init()`` twice)."""
