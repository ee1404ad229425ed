"""Form screens: login, sign-up and account settings.

Login and sign-up follow the same state machine and differ only in data,
so both are a :class:`FormView` driven by a :class:`FormSpec`:

    submit -> clear errors -> controller.<action>(*fields)
    <event> "success"      -> navigate to success_path
    <event> field error    -> show it on the submitted form

Settings waits for up to two independent completions (profile and
avatar) and is tracked with :class:`PendingOperations`.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from waypoint.dom import DomEvent, Element, Node
from waypoint.events import (
    AVATAR_UPDATED,
    LOGGED_IN,
    PROFILE_UPDATED,
    SIGNED_UP,
    FieldError,
    SubscribeAdapter,
    is_success,
)
from waypoint.forms import clear_errors, show_field_error
from waypoint.views.base import Lifecycle, Navigator, ViewContext, ViewState, require

logger = logging.getLogger("waypoint.views")


@dataclass(frozen=True, slots=True)
class FormSpec:
    """Everything that distinguishes one simple form screen from another."""

    name: str
    template: str
    event: str
    action: str
    fields: tuple[str, ...]
    success_path: str = "/"


LOGIN_FORM = FormSpec(
    name="login",
    template="login.html",
    event=LOGGED_IN,
    action="login",
    fields=("login", "password"),
)

SIGNUP_FORM = FormSpec(
    name="signup",
    template="signup.html",
    event=SIGNED_UP,
    action="sign_up",
    fields=("login", "email", "password", "repeat_password"),
)


def _submitted_form(event: DomEvent) -> Element | None:
    target = event.target
    if target is None:
        return None
    return target.closest("form") or target


def _field_value(form: Element, name: str) -> str:
    control = form.elements.get(name)
    return control.value if control is not None else ""


class FormView:
    """A form that submits to one controller operation and awaits one event."""

    template: str

    def __init__(
        self,
        root_el: Node,
        router: Navigator,
        controller: Any = None,
        subscriber: SubscribeAdapter | None = None,
        *,
        spec: FormSpec,
        context: ViewContext | None = None,
    ) -> None:
        self.lifecycle = Lifecycle(spec.name, root_el, router, subscriber)
        self.spec = spec
        self.name = spec.name
        self.template = spec.template
        self._controller = controller
        self._context = context or ViewContext()
        self._form: Element | None = None
        self._action: Any = None
        self._on_submit = self._submit

    @property
    def state(self) -> ViewState:
        return self.lifecycle.state

    @property
    def form(self) -> Element | None:
        """The form of the last submission, where errors are shown."""
        return self._form

    def init(self) -> None:
        self._action = getattr(require(self._controller, "controller", self.name), self.spec.action)
        self.lifecycle.begin()
        self.lifecycle.draw(self._context.render(self.template, {}))
        self.lifecycle.listen(self.lifecycle.root, "submit", self._on_submit)
        self.lifecycle.subscribe(self.spec.event, self.render)

    def render(self, state: Mapping[str, Any], event_name: str, value: Any) -> None:
        if is_success(value):
            self.lifecycle.router.route_to(self.spec.success_path)
            return

        form = self._form or _first_form(self.lifecycle.root)
        if form is None:
            logger.warning("%s: no form to show %r on", self.name, value)
            return
        show_field_error(form, FieldError.from_value(value))

    def deinit(self) -> None:
        self.lifecycle.release()
        self._form = None

    def _submit(self, event: DomEvent) -> None:
        event.prevent_default()
        form = _submitted_form(event)
        if form is None:
            return
        self._form = form
        clear_errors(form)
        self._action(*(_field_value(form, name) for name in self.spec.fields))


class PendingOperations:
    """Completion tracker for operations that finish independently, in any order."""

    __slots__ = ("_failed", "_waiting")

    def __init__(self) -> None:
        self._waiting: set[str] = set()
        self._failed: set[str] = set()

    def expect(self, *names: str) -> None:
        """Start a new round waiting for *names*; earlier results are forgotten."""
        self._waiting = set(names)
        self._failed.clear()

    def resolve(self, name: str, *, ok: bool) -> None:
        self._waiting.discard(name)
        if ok:
            self._failed.discard(name)
        else:
            self._failed.add(name)

    def is_waiting(self, name: str) -> bool:
        return name in self._waiting

    @property
    def waiting(self) -> frozenset[str]:
        return frozenset(self._waiting)

    @property
    def failed(self) -> frozenset[str]:
        return frozenset(self._failed)

    @property
    def settled(self) -> bool:
        return not self._waiting

    @property
    def succeeded(self) -> bool:
        return self.settled and not self._failed


class SettingsView:
    """Profile and avatar update form.

    Every submit waits for ``ProfileUpdated``; choosing an avatar file also
    waits for ``AvatarUpdated``. The view leaves for ``/`` only after every
    awaited operation succeeded. Failures are shown on the form field the
    controller names, and the view stays put.
    """

    name = "settings"
    template = "settings.html"

    def __init__(
        self,
        root_el: Node,
        router: Navigator,
        controller: Any = None,
        subscriber: SubscribeAdapter | None = None,
        *,
        context: ViewContext | None = None,
    ) -> None:
        self.lifecycle = Lifecycle(self.name, root_el, router, subscriber)
        self._controller = controller
        self._context = context or ViewContext()
        self._form: Element | None = None
        self.pending = PendingOperations()
        self._on_submit = self._submit

    @property
    def state(self) -> ViewState:
        return self.lifecycle.state

    @property
    def form(self) -> Element | None:
        return self._form

    def init(self) -> None:
        require(self._controller, "controller", self.name)
        self.lifecycle.begin()
        login = self._context.session.login or ""
        self.lifecycle.draw(self._context.render(self.template, {"login": login}))
        self.lifecycle.listen(self.lifecycle.root, "submit", self._on_submit)
        self.lifecycle.subscribe(PROFILE_UPDATED, self.render)
        self.lifecycle.subscribe(AVATAR_UPDATED, self.render)

    def render(self, state: Mapping[str, Any], event_name: str, value: Any) -> None:
        if not self.pending.is_waiting(event_name):
            logger.debug("settings: ignoring unexpected %s", event_name)
            return

        ok = is_success(value)
        self.pending.resolve(event_name, ok=ok)
        if not ok:
            default_field = "avatar" if event_name == AVATAR_UPDATED else "form"
            form = self._form or _first_form(self.lifecycle.root)
            if form is not None:
                show_field_error(form, FieldError.from_value(value, default_field))
            return

        if self.pending.succeeded:
            self.lifecycle.router.route_to("/")

    def deinit(self) -> None:
        self.lifecycle.release()
        self._form = None

    def _submit(self, event: DomEvent) -> None:
        event.prevent_default()
        form = _submitted_form(event)
        if form is None:
            return
        self._form = form
        clear_errors(form)

        login = _field_value(form, "login")
        if login == self._context.session.login:
            login = ""
        password = _field_value(form, "password")
        repeat_password = _field_value(form, "repeat_password")
        avatar = form.elements.get("avatar")
        upload = avatar is not None and bool(avatar.value)

        # Both flags are set before either call: a controller may publish synchronously
        if upload:
            self.pending.expect(PROFILE_UPDATED, AVATAR_UPDATED)
        else:
            self.pending.expect(PROFILE_UPDATED)
        self._controller.update_profile(login, password, repeat_password)
        if upload:
            self._controller.upload_avatar(avatar)


def _first_form(root: Node) -> Element | None:
    find_all = getattr(root, "find_all", None)
    if find_all is None:
        return None
    forms = find_all("form")
    return forms[0] if forms else None
