"""Browser history integration.

The router writes history through :class:`History` and learns about
back/forward navigation through pop-state listeners. :class:`MemoryHistory`
keeps the entry stack in memory, which is all a headless run needs.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol, runtime_checkable

logger = logging.getLogger("waypoint.history")

type PopStateListener = Callable[[str], None]


@runtime_checkable
class History(Protocol):
    """The subset of the browser history API the router uses."""

    @property
    def location(self) -> str: ...

    def push_state(self, path: str) -> None: ...

    def replace_state(self, path: str) -> None: ...

    def add_popstate_listener(self, listener: PopStateListener) -> None: ...

    def remove_popstate_listener(self, listener: PopStateListener) -> None: ...


class MemoryHistory:
    """An entry stack with a cursor, like a browser tab's session history.

    ``push_state`` drops any forward entries. ``back``/``forward``/``go``
    move the cursor and notify pop-state listeners with the new path;
    ``push_state``/``replace_state`` never notify.
    """

    __slots__ = ("_entries", "_index", "_listeners")

    def __init__(self, initial_path: str = "/") -> None:
        self._entries: list[str] = [initial_path]
        self._index = 0
        self._listeners: list[PopStateListener] = []

    @property
    def location(self) -> str:
        return self._entries[self._index]

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def index(self) -> int:
        return self._index

    def __len__(self) -> int:
        return len(self._entries)

    def push_state(self, path: str) -> None:
        del self._entries[self._index + 1 :]
        self._entries.append(path)
        self._index += 1

    def replace_state(self, path: str) -> None:
        self._entries[self._index] = path

    def back(self) -> None:
        self.go(-1)

    def forward(self) -> None:
        self.go(1)

    def go(self, delta: int) -> None:
        """Move the cursor by *delta*; out-of-range moves are ignored."""
        target = self._index + delta
        if delta == 0 or not 0 <= target < len(self._entries):
            return
        self._index = target
        logger.debug("popstate -> %s", self.location)
        for listener in tuple(self._listeners):
            listener(self.location)

    def add_popstate_listener(self, listener: PopStateListener) -> None:
        self._listeners.append(listener)

    def remove_popstate_listener(self, listener: PopStateListener) -> None:
        for index, registered in enumerate(self._listeners):
            if registered is listener:
                del self._listeners[index]
                return

    def listener_count(self) -> int:
        return len(self._listeners)
