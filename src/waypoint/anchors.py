"""Keep link navigation inside the application.

One delegated click listener on the application root turns clicks on
in-app anchors into ``router.route_to(path)`` calls instead of full page
loads. Left alone (the browser handles them):

- clicks that do not land on or inside an ``<a>``
- clicks a view already handled (``default_prevented``)
- anchors marked external (``data-external`` by default) or ``target="_blank"``
- links with a scheme or host (``https://…``, ``mailto:…``, ``//cdn…``)
"""

import logging
from urllib.parse import urlsplit

from waypoint.config import AppConfig
from waypoint.dom import DomEvent, Element, Node
from waypoint.views.base import Navigator

logger = logging.getLogger("waypoint.anchors")


class AnchorInterceptor:
    """Delegated click handler that routes in-app links through the router."""

    __slots__ = ("_attached", "_on_click", "external_marker", "link_attribute", "root", "router")

    def __init__(
        self,
        root_el: Node,
        router: Navigator,
        *,
        link_attribute: str = "href",
        external_marker: str = "data-external",
    ) -> None:
        self.root = root_el
        self.router = router
        self.link_attribute = link_attribute
        self.external_marker = external_marker
        self._attached = False
        self._on_click = self.handle_click

    @property
    def attached(self) -> bool:
        return self._attached

    def attach(self) -> None:
        if self._attached:
            return
        self.root.add_event_listener("click", self._on_click)
        self._attached = True

    def detach(self) -> None:
        if not self._attached:
            return
        self.root.remove_event_listener("click", self._on_click)
        self._attached = False

    def in_app_path(self, anchor: Element) -> str | None:
        """The path *anchor* navigates to, or None if it should leave the app."""
        if anchor.has_attribute(self.external_marker):
            return None
        if anchor.get_attribute("target") == "_blank":
            return None
        link = anchor.get_attribute(self.link_attribute)
        if not link:
            return None
        parts = urlsplit(link)
        if parts.scheme or parts.netloc:
            return None
        return link

    def handle_click(self, event: DomEvent) -> None:
        if event.default_prevented or event.target is None:
            return
        anchor = event.target.closest("a")
        if anchor is None:
            return
        path = self.in_app_path(anchor)
        if path is None:
            return
        event.prevent_default()
        logger.debug("Intercepted link to %s", path)
        self.router.route_to(path)


def init_anchors_routing(
    root_el: Node,
    router: Navigator,
    config: AppConfig | None = None,
) -> AnchorInterceptor:
    """Attach an :class:`AnchorInterceptor` to *root_el* and return it."""
    config = config or AppConfig()
    interceptor = AnchorInterceptor(
        root_el,
        router,
        link_attribute=config.link_attribute,
        external_marker=config.external_marker,
    )
    interceptor.attach()
    return interceptor
