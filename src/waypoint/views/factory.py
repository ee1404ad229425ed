"""Turn a view class plus its collaborators into a router-ready factory.

The router only knows how to call ``factory(root_el, router)``. Each view
also needs a controller, the event bus, its context, and sometimes a
form description; :func:`view_factory` binds those at registration time::

    router.add_route("/login", view_factory(FormView, auth, subscriber, spec=LOGIN_FORM))
"""

from typing import Any

from waypoint.dom import Node
from waypoint.views.base import Navigator, View, ViewFactory


def view_factory(view_cls: type, *extras: Any, **options: Any) -> ViewFactory:
    """Bind *extras* and *options* after the navigation-time arguments.

    The returned factory calls ``view_cls(root_el, router, *extras, **options)``.
    Constructor errors (e.g. ``ViewConstructionError``) propagate unchanged.
    """

    def factory(root_el: Node, router: Navigator) -> View:
        return view_cls(root_el, router, *extras, **options)

    factory.__name__ = f"{view_cls.__name__}_factory"
    factory.__qualname__ = factory.__name__
    factory.view_class = view_cls  # type: ignore[attr-defined]
    factory.options = dict(options)  # type: ignore[attr-defined]
    return factory
