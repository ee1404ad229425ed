"""Named-event publish/subscribe bus.

Controllers publish the outcome of asynchronous work here; views subscribe
during ``init()`` and unsubscribe during ``deinit()``. Delivery is
synchronous, on the caller's thread, in subscription order.

Usage::

    bus = EventBus()

    def on_logged_in(state, event_name, value):
        ...

    sub = bus.subscribe(LOGGED_IN, on_logged_in)
    bus.publish(LOGGED_IN, value=SUCCESS)
    bus.unsubscribe(LOGGED_IN, sub)

Subscription and unsubscription match by identity. Subscribing the same
handler twice registers it twice; the bus never deduplicates, so a missed
``unsubscribe`` shows up in ``subscriber_count()``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

logger = logging.getLogger("waypoint.events")

type Handler = Callable[[Mapping[str, Any], str, Any], None]

# Event names published by controllers
USER_LOADED = "UserLoaded"
LOGGED_IN = "LoggedIn"
LOGGED_OUT = "LoggedOut"
SIGNED_UP = "SignedUp"
PROFILE_UPDATED = "ProfileUpdated"
AVATAR_UPDATED = "AvatarUpdated"
LEADERBOARD_LOADED = "LeaderboardLoaded"

# Value carried by an event when the operation succeeded
SUCCESS = "success"
GENERIC_ERROR = "Something went wrong. Please try again."

_EMPTY_STATE: Mapping[str, Any] = MappingProxyType({})


def is_success(value: Any) -> bool:
    """True when an event value is the success sentinel."""
    return isinstance(value, str) and value == SUCCESS


@dataclass(frozen=True, slots=True)
class FieldError:
    """A validation failure reported by a controller.

    Controllers publish ``{"errorField": "login", "error": "Taken"}``;
    :meth:`from_value` also accepts objects exposing ``error_field`` and
    ``error`` attributes, and bare strings (form-level errors).
    """

    field: str
    message: str

    @classmethod
    def from_value(cls, value: Any, default_field: str = "form") -> FieldError:
        """Normalize a failure payload. A missing message becomes :data:`GENERIC_ERROR`."""
        if isinstance(value, FieldError):
            return value
        if isinstance(value, Mapping):
            field_name = value.get("errorField") or value.get("error_field") or default_field
            return cls(field=str(field_name), message=_message(value.get("error")))
        if isinstance(value, str):
            return cls(field=default_field, message=_message(value))
        field_name = getattr(value, "error_field", None) or default_field
        return cls(field=str(field_name), message=_message(getattr(value, "error", value)))


def _message(raw: Any) -> str:
    if raw is None or raw == "":
        return GENERIC_ERROR
    return str(raw)


@dataclass(frozen=True, slots=True, eq=False)
class Subscription:
    """Handle returned by :meth:`EventBus.subscribe`.

    Pass it back to :meth:`EventBus.unsubscribe`. Compared by identity,
    so two subscriptions of the same handler stay distinct.
    """

    event_name: str
    handler: Handler


class EventBus:
    """Synchronous publish/subscribe registry keyed by event name.

    Publishing iterates over a snapshot of the subscriber list, so a
    handler that subscribes or unsubscribes while being notified does not
    change who receives the event being delivered.
    """

    __slots__ = ("_subscribers",)

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Subscription]] = {}

    def subscribe(self, event_name: str, handler: Handler) -> Subscription:
        """Append *handler* to the subscribers of *event_name*."""
        subscription = Subscription(event_name, handler)
        self._subscribers.setdefault(event_name, []).append(subscription)
        logger.debug("Subscribed to %s (%d live)", event_name, len(self._subscribers[event_name]))
        return subscription

    def unsubscribe(self, event_name: str, handle: Subscription | Handler) -> None:
        """Remove the first subscription matching *handle* by identity.

        *handle* is either the :class:`Subscription` returned by
        :meth:`subscribe` or the handler itself. Absent handles are ignored.
        """
        subscriptions = self._subscribers.get(event_name)
        if not subscriptions:
            return
        for index, subscription in enumerate(subscriptions):
            if subscription is handle or subscription.handler is handle:
                del subscriptions[index]
                break
        else:
            return
        if not subscriptions:
            del self._subscribers[event_name]
        logger.debug("Unsubscribed from %s", event_name)

    def publish(
        self,
        event_name: str,
        state: Mapping[str, Any] | None = None,
        value: Any = None,
    ) -> None:
        """Deliver ``(state, event_name, value)`` to every current subscriber.

        Unknown event names are a no-op. A handler that raises is logged
        and delivery continues with the next one. ``state`` is passed
        through untouched.
        """
        subscriptions = tuple(self._subscribers.get(event_name, ()))
        if not subscriptions:
            logger.debug("No subscribers for %s", event_name)
            return

        state = _EMPTY_STATE if state is None else state
        for subscription in subscriptions:
            try:
                subscription.handler(state, event_name, value)
            except Exception:
                logger.exception("Handler for %s failed", event_name)

    def subscriber_count(self, event_name: str | None = None) -> int:
        """Live subscriptions for *event_name*, or across all events."""
        if event_name is not None:
            return len(self._subscribers.get(event_name, ()))
        return sum(len(subs) for subs in self._subscribers.values())

    def event_names(self) -> Iterator[str]:
        """Event names with at least one live subscription."""
        return iter(tuple(self._subscribers))

    def clear(self, event_name: str | None = None) -> None:
        """Drop subscribers for *event_name*, or for every event."""
        if event_name is None:
            self._subscribers.clear()
        else:
            self._subscribers.pop(event_name, None)


class SubscribeAdapter:
    """The part of an :class:`EventBus` a view is allowed to use.

    Views receive this instead of the bus itself: they can listen, but
    publishing stays with controllers.
    """

    __slots__ = ("_bus",)

    def __init__(self, bus: EventBus) -> None:
        self._bus = bus

    def subscribe(self, event_name: str, handler: Handler) -> Subscription:
        return self._bus.subscribe(event_name, handler)

    def unsubscribe(self, event_name: str, handle: Subscription | Handler) -> None:
        self._bus.unsubscribe(event_name, handle)
