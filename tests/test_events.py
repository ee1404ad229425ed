"""Tests for waypoint.events — EventBus, SubscribeAdapter, payload types."""

import logging

import pytest

from waypoint.events import (
    GENERIC_ERROR,
    LOGGED_IN,
    SUCCESS,
    USER_LOADED,
    EventBus,
    FieldError,
    SubscribeAdapter,
    Subscription,
    is_success,
)


class Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple[object, str, object]] = []

    def __call__(self, state, event_name, value) -> None:
        self.calls.append((state, event_name, value))


class TestPublish:
    def test_delivers_state_name_value(self) -> None:
        bus = EventBus()
        rec = Recorder()
        bus.subscribe(LOGGED_IN, rec)

        bus.publish(LOGGED_IN, {"k": 1}, SUCCESS)

        assert rec.calls == [({"k": 1}, LOGGED_IN, SUCCESS)]

    def test_state_defaults_to_empty_mapping(self) -> None:
        bus = EventBus()
        rec = Recorder()
        bus.subscribe(LOGGED_IN, rec)

        bus.publish(LOGGED_IN, value=SUCCESS)

        state, _, _ = rec.calls[0]
        assert dict(state) == {}

    def test_subscription_order(self) -> None:
        bus = EventBus()
        order: list[str] = []
        bus.subscribe("E", lambda s, n, v: order.append("a"))
        bus.subscribe("E", lambda s, n, v: order.append("b"))
        bus.subscribe("E", lambda s, n, v: order.append("c"))

        bus.publish("E")

        assert order == ["a", "b", "c"]

    def test_unknown_event_is_noop(self) -> None:
        bus = EventBus()
        bus.publish("NobodyListens", value=SUCCESS)
        assert bus.subscriber_count() == 0

    def test_only_matching_event(self) -> None:
        bus = EventBus()
        rec = Recorder()
        bus.subscribe(USER_LOADED, rec)

        bus.publish(LOGGED_IN, value=SUCCESS)

        assert rec.calls == []

    def test_failing_handler_does_not_stop_delivery(self, caplog: pytest.LogCaptureFixture) -> None:
        bus = EventBus()
        rec = Recorder()

        def boom(state, event_name, value) -> None:
            raise RuntimeError("boom")

        bus.subscribe("E", boom)
        bus.subscribe("E", rec)

        with caplog.at_level(logging.ERROR, logger="waypoint.events"):
            bus.publish("E", value=1)

        assert len(rec.calls) == 1
        assert "Handler for E failed" in caplog.text


class TestSnapshotDelivery:
    def test_subscribe_during_publish_waits_for_next_pass(self) -> None:
        bus = EventBus()
        late = Recorder()

        def subscribe_late(state, event_name, value) -> None:
            bus.subscribe("E", late)

        bus.subscribe("E", subscribe_late)
        bus.publish("E", value=1)
        assert late.calls == []

        bus.publish("E", value=2)
        assert [v for _, _, v in late.calls] == [2]

    def test_unsubscribe_during_publish_keeps_current_pass(self) -> None:
        bus = EventBus()
        second = Recorder()
        handle: list[Subscription] = []

        def drop_second(state, event_name, value) -> None:
            bus.unsubscribe("E", handle[0])

        bus.subscribe("E", drop_second)
        handle.append(bus.subscribe("E", second))

        bus.publish("E", value=1)
        assert len(second.calls) == 1

        bus.publish("E", value=2)
        assert len(second.calls) == 1


class TestSubscribeUnsubscribe:
    def test_duplicates_accumulate(self) -> None:
        bus = EventBus()
        rec = Recorder()
        bus.subscribe("E", rec)
        bus.subscribe("E", rec)

        bus.publish("E")

        assert bus.subscriber_count("E") == 2
        assert len(rec.calls) == 2

    def test_unsubscribe_by_handle(self) -> None:
        bus = EventBus()
        rec = Recorder()
        sub = bus.subscribe("E", rec)

        bus.unsubscribe("E", sub)
        bus.publish("E")

        assert rec.calls == []
        assert bus.subscriber_count("E") == 0

    def test_unsubscribe_by_handler_removes_first_only(self) -> None:
        bus = EventBus()
        rec = Recorder()
        bus.subscribe("E", rec)
        bus.subscribe("E", rec)

        bus.unsubscribe("E", rec)

        assert bus.subscriber_count("E") == 1

    def test_unsubscribe_uses_identity_not_equality(self) -> None:
        class AlwaysEqual:
            def __eq__(self, other: object) -> bool:
                return True

            __hash__ = object.__hash__

            def __call__(self, state, event_name, value) -> None:
                pass

        bus = EventBus()
        bus.subscribe("E", AlwaysEqual())

        bus.unsubscribe("E", AlwaysEqual())

        assert bus.subscriber_count("E") == 1

    def test_unsubscribe_absent_is_noop(self) -> None:
        bus = EventBus()
        bus.unsubscribe("E", Recorder())
        bus.subscribe("E", Recorder())
        bus.unsubscribe("E", Recorder())
        assert bus.subscriber_count("E") == 1

    def test_count_never_negative(self) -> None:
        bus = EventBus()
        rec = Recorder()
        sub = bus.subscribe("E", rec)
        bus.unsubscribe("E", sub)
        bus.unsubscribe("E", sub)
        bus.unsubscribe("E", rec)
        assert bus.subscriber_count("E") == 0

    def test_handles_are_distinct(self) -> None:
        bus = EventBus()
        rec = Recorder()
        first = bus.subscribe("E", rec)
        second = bus.subscribe("E", rec)

        bus.unsubscribe("E", second)
        bus.unsubscribe("E", second)

        assert bus.subscriber_count("E") == 1
        assert first is not second

    def test_event_names_and_clear(self) -> None:
        bus = EventBus()
        bus.subscribe("A", Recorder())
        bus.subscribe("B", Recorder())
        assert sorted(bus.event_names()) == ["A", "B"]

        bus.clear("A")
        assert list(bus.event_names()) == ["B"]

        bus.clear()
        assert bus.subscriber_count() == 0


class TestSubscribeAdapter:
    def test_forwards_to_bus(self) -> None:
        bus = EventBus()
        adapter = SubscribeAdapter(bus)
        rec = Recorder()

        sub = adapter.subscribe("E", rec)
        bus.publish("E", value=1)
        adapter.unsubscribe("E", sub)
        bus.publish("E", value=2)

        assert [v for _, _, v in rec.calls] == [1]

    def test_cannot_publish(self) -> None:
        adapter = SubscribeAdapter(EventBus())
        assert not hasattr(adapter, "publish")


class TestPayloads:
    def test_is_success(self) -> None:
        assert is_success("success")
        assert not is_success({"errorField": "login", "error": "x"})
        assert not is_success(None)

    def test_field_error_from_mapping(self) -> None:
        err = FieldError.from_value({"errorField": "login", "error": "Taken"})
        assert err == FieldError(field="login", message="Taken")

    def test_field_error_from_snake_case_mapping(self) -> None:
        err = FieldError.from_value({"error_field": "email", "error": "Invalid"})
        assert err.field == "email"

    def test_field_error_from_string(self) -> None:
        err = FieldError.from_value("Server unavailable")
        assert err == FieldError(field="form", message="Server unavailable")

    def test_field_error_from_object(self) -> None:
        class Failure:
            error_field = "password"
            error = "Too short"

        assert FieldError.from_value(Failure()) == FieldError("password", "Too short")

    def test_field_error_default_field(self) -> None:
        err = FieldError.from_value({"error": "Too big"}, default_field="avatar")
        assert err.field == "avatar"

    def test_field_error_without_message(self) -> None:
        assert FieldError.from_value(None) == FieldError("form", GENERIC_ERROR)
        assert FieldError.from_value({"errorField": "login", "error": None}) == FieldError(
            "login", GENERIC_ERROR
        )
        assert FieldError.from_value("").message == GENERIC_ERROR
