"""Tests for waypoint.anchors — in-app link interception."""

import pytest

from waypoint.anchors import AnchorInterceptor, init_anchors_routing
from waypoint.config import AppConfig
from waypoint.dom import DomEvent, Element


class Navigator:
    def __init__(self) -> None:
        self.paths: list[str] = []

    def route_to(self, path: str) -> None:
        self.paths.append(path)


@pytest.fixture
def nav() -> Navigator:
    return Navigator()


def _link(root: Element, markup: str) -> Element:
    root.inner_html = markup
    return root.find_all("a")[0]


class TestInterception:
    def test_routes_in_app_link(self, root: Element, nav: Navigator) -> None:
        init_anchors_routing(root, nav)
        link = _link(root, '<a href="/about">About</a>')

        event = link.click()

        assert nav.paths == ["/about"]
        assert event.default_prevented

    def test_click_inside_anchor(self, root: Element, nav: Navigator) -> None:
        init_anchors_routing(root, nav)
        root.inner_html = '<a href="/login"><span id="label">Log in</span></a>'

        root.get_element_by_id("label").click()

        assert nav.paths == ["/login"]

    def test_non_anchor_click_ignored(self, root: Element, nav: Navigator) -> None:
        init_anchors_routing(root, nav)
        root.inner_html = '<button id="b">x</button>'

        event = root.get_element_by_id("b").click()

        assert nav.paths == []
        assert not event.default_prevented

    @pytest.mark.parametrize(
        "markup",
        [
            '<a href="https://example.com/">x</a>',
            '<a href="mailto:me@example.com">x</a>',
            '<a href="//cdn.example.com/a.js">x</a>',
            '<a href="/docs" data-external>x</a>',
            '<a href="/docs" target="_blank">x</a>',
            "<a>no href</a>",
        ],
    )
    def test_left_to_browser(self, root: Element, nav: Navigator, markup: str) -> None:
        init_anchors_routing(root, nav)
        link = _link(root, markup)

        event = link.click()

        assert nav.paths == []
        assert not event.default_prevented

    def test_default_prevented_clicks_ignored(self, root: Element, nav: Navigator) -> None:
        init_anchors_routing(root, nav)
        link = _link(root, '<a href="/about">About</a>')
        link.add_event_listener("click", lambda e: e.prevent_default())

        link.click()

        assert nav.paths == []

    def test_relative_link_passed_through(self, root: Element, nav: Navigator) -> None:
        init_anchors_routing(root, nav)
        _link(root, '<a href="leaderboard">x</a>').click()
        assert nav.paths == ["leaderboard"]


class TestAttachment:
    def test_attach_is_idempotent(self, root: Element, nav: Navigator) -> None:
        interceptor = AnchorInterceptor(root, nav)
        interceptor.attach()
        interceptor.attach()
        assert root.listener_count("click") == 1
        assert interceptor.attached

    def test_detach(self, root: Element, nav: Navigator) -> None:
        interceptor = init_anchors_routing(root, nav)
        interceptor.detach()
        interceptor.detach()

        _link(root, '<a href="/about">About</a>').click()

        assert nav.paths == []
        assert root.listener_count() == 0

    def test_survives_rerender(self, root: Element, nav: Navigator) -> None:
        init_anchors_routing(root, nav)
        root.inner_html = '<a href="/one">1</a>'
        root.inner_html = '<a href="/two">2</a>'

        root.find_all("a")[0].click()

        assert nav.paths == ["/two"]


class TestConfiguration:
    def test_custom_attributes(self, root: Element, nav: Navigator) -> None:
        config = AppConfig(link_attribute="data-route", external_marker="data-outbound")
        init_anchors_routing(root, nav, config)

        _link(root, '<a href="#" data-route="/about">x</a>').click()
        _link(root, '<a data-route="/help" data-outbound>x</a>').click()

        assert nav.paths == ["/about"]

    def test_in_app_path(self, root: Element, nav: Navigator) -> None:
        interceptor = AnchorInterceptor(root, nav)
        anchor = Element("a", {"href": "/settings"})
        assert interceptor.in_app_path(anchor) == "/settings"
        assert interceptor.in_app_path(Element("a", {"href": "http://x"})) is None

    def test_handle_click_without_target(self, root: Element, nav: Navigator) -> None:
        AnchorInterceptor(root, nav).handle_click(DomEvent("click"))
        assert nav.paths == []
