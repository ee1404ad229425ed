"""Paginated leaderboard.

Page links are handled by the view itself: a click on the pagination bar
asks the controller for that page and the view re-renders when
``LeaderboardLoaded`` arrives. The router is not involved and the URL
stays ``/leaderboard``.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from waypoint.controllers import LeaderboardController
from waypoint.dom import DomEvent, Node
from waypoint.events import LEADERBOARD_LOADED, SubscribeAdapter
from waypoint.views.base import Lifecycle, Navigator, ViewContext, ViewState, require


def _get(value: Any, *keys: str, default: Any = None) -> Any:
    for key in keys:
        if isinstance(value, Mapping):
            if key in value:
                return value[key]
        elif hasattr(value, key):
            return getattr(value, key)
    return default


@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
    login: str
    score: int = 0

    @classmethod
    def from_value(cls, value: Any) -> "LeaderboardEntry":
        if isinstance(value, LeaderboardEntry):
            return value
        return cls(
            login=str(_get(value, "login", default="")),
            score=int(_get(value, "score", default=0) or 0),
        )


@dataclass(frozen=True, slots=True)
class LeaderboardPage:
    """One page of the leaderboard as delivered by ``LeaderboardLoaded``.

    Accepts ``{"users": [...], "pageCount": 3, "currentPage": 1}`` and the
    snake_case spelling of the same keys.
    """

    users: tuple[LeaderboardEntry, ...] = ()
    page_count: int = 0
    current_page: int = 0

    @classmethod
    def from_value(cls, value: Any) -> "LeaderboardPage":
        if isinstance(value, LeaderboardPage):
            return value
        if not value:
            return cls()
        users = _get(value, "users", default=()) or ()
        return cls(
            users=tuple(LeaderboardEntry.from_value(user) for user in users),
            page_count=int(_get(value, "pageCount", "page_count", default=0) or 0),
            current_page=int(_get(value, "currentPage", "current_page", default=0) or 0),
        )


EMPTY_PAGE = LeaderboardPage()


class LeaderboardView:
    name = "leaderboard"
    template = "leaderboard.html"

    def __init__(
        self,
        root_el: Node,
        router: Navigator,
        controller: LeaderboardController | None = None,
        subscriber: SubscribeAdapter | None = None,
        *,
        context: ViewContext | None = None,
    ) -> None:
        self.lifecycle = Lifecycle(self.name, root_el, router, subscriber)
        self._controller = controller
        self._context = context or ViewContext()
        self._pagination: Node | None = None
        self._on_page_click = self._page_click
        self.page = EMPTY_PAGE

    @property
    def state(self) -> ViewState:
        return self.lifecycle.state

    def prerender(self) -> None:
        self.render({}, "", EMPTY_PAGE)

    def init(self) -> None:
        controller = require(self._controller, "controller", self.name)
        self.lifecycle.begin()
        self.prerender()
        self.lifecycle.subscribe(LEADERBOARD_LOADED, self.render)
        controller.get_leaderboard(1)

    def render(self, state: Mapping[str, Any], event_name: str, value: Any) -> None:
        page = LeaderboardPage.from_value(value)
        config = self._context.config
        self.lifecycle.draw(
            self._context.render(
                self.template,
                {
                    "users": page.users,
                    "page_count": page.page_count,
                    "current_page": page.current_page,
                    "pages": list(range(1, page.page_count + 1)),
                    "size": config.leaderboard_page_size,
                    "pagination_id": config.pagination_id,
                },
            )
        )
        self.page = page
        self._bind_pagination()

    def deinit(self) -> None:
        self.lifecycle.release()
        self._pagination = None

    def _bind_pagination(self) -> None:
        """Move the click listener onto the freshly rendered pagination bar."""
        if self._pagination is not None:
            self.lifecycle.unlisten(self._pagination, "click", self._on_page_click)
            self._pagination = None

        pagination = self.lifecycle.root.get_element_by_id(self._context.config.pagination_id)
        if pagination is not None:
            self.lifecycle.listen(pagination, "click", self._on_page_click)
            self._pagination = pagination

    def _page_click(self, event: DomEvent) -> None:
        event.prevent_default()
        link = event.target.closest("a") if event.target is not None else None
        if link is None:
            return
        raw = link.get_attribute("data-page") or link.get_attribute("href")
        try:
            page = int(raw or "")
        except ValueError:
            return
        self._controller.get_leaderboard(page)
