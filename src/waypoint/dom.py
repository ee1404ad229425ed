"""Headless DOM: the capability set views and the router rely on.

Views only need a handful of DOM operations: assign markup to an
element, look elements up by id, register and remove event listeners,
read attributes and form values, and cancel an event's default action.
:class:`Node` names that capability set as a protocol; :class:`Element`
is an in-memory implementation good enough to drive the whole engine
without a browser (tests, server-side prerendering, the CLI).

Markup assigned to :attr:`Element.inner_html` is parsed with
BeautifulSoup into a tree of :class:`Element` objects, so delegated
listeners on an ancestor see clicks and submits dispatched on descendants,
the way they would in a browser.
"""

from __future__ import annotations

import html
from collections.abc import Callable, Iterator
from typing import Protocol, runtime_checkable

from bs4 import BeautifulSoup, Comment, Doctype, NavigableString, Tag

type Listener = Callable[[DomEvent], None]

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)

FORM_CONTROLS = frozenset({"input", "select", "textarea", "button"})


@runtime_checkable
class Node(Protocol):
    """What a view needs from its root container."""

    inner_html: str

    def add_event_listener(self, event_type: str, listener: Listener) -> None: ...

    def remove_event_listener(self, event_type: str, listener: Listener) -> None: ...

    def get_element_by_id(self, element_id: str) -> Element | None: ...


class DomEvent:
    """A dispatched DOM event.

    ``target`` is the element the event was dispatched on;
    ``current_target`` is the element whose listener is running.
    """

    __slots__ = (
        "bubbles",
        "current_target",
        "default_prevented",
        "propagation_stopped",
        "target",
        "type",
    )

    def __init__(self, event_type: str, *, bubbles: bool = True) -> None:
        self.type = event_type
        self.bubbles = bubbles
        self.target: Element | None = None
        self.current_target: Element | None = None
        self.default_prevented = False
        self.propagation_stopped = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True

    def __repr__(self) -> str:
        target = self.target.tag_name if self.target is not None else None
        return f"DomEvent({self.type!r}, target={target!r})"


class Element:
    """An in-memory HTML element.

    Children are either :class:`Element` instances or text strings.
    Listeners are kept per event type, in registration order, and are
    removed by identity.
    """

    __slots__ = ("_listeners", "attributes", "children", "parent", "tag_name")

    def __init__(
        self,
        tag_name: str = "div",
        attributes: dict[str, str] | None = None,
        children: list[Element | str] | None = None,
    ) -> None:
        self.tag_name = tag_name.lower()
        self.attributes: dict[str, str] = dict(attributes or {})
        self.parent: Element | None = None
        self.children: list[Element | str] = []
        self._listeners: dict[str, list[Listener]] = {}
        for child in children or ():
            self.append(child)

    def __repr__(self) -> str:
        element_id = self.attributes.get("id")
        suffix = f"#{element_id}" if element_id else ""
        return f"<Element {self.tag_name}{suffix}>"

    # -- Tree ----------------------------------------------------------------

    def append(self, child: Element | str) -> None:
        if isinstance(child, Element):
            child.parent = self
        self.children.append(child)

    def iter_descendants(self) -> Iterator[Element]:
        """Depth-first, document-order walk of descendant elements."""
        for child in self.children:
            if isinstance(child, Element):
                yield child
                yield from child.iter_descendants()

    def get_element_by_id(self, element_id: str) -> Element | None:
        for element in self.iter_descendants():
            if element.attributes.get("id") == element_id:
                return element
        return None

    def find_all(self, tag_name: str | None = None, **attributes: str) -> list[Element]:
        """Descendants matching *tag_name* and every given attribute value.

        Attribute names use underscores for dashes (``data_error_for``); a
        trailing underscore is dropped (``class_``).
        """
        wanted = {name.rstrip("_").replace("_", "-"): value for name, value in attributes.items()}
        return [
            element
            for element in self.iter_descendants()
            if (tag_name is None or element.tag_name == tag_name)
            and all(element.attributes.get(k) == v for k, v in wanted.items())
        ]

    def closest(self, tag_name: str) -> Element | None:
        """This element or the nearest ancestor with *tag_name*."""
        node: Element | None = self
        while node is not None:
            if node.tag_name == tag_name:
                return node
            node = node.parent
        return None

    # -- Attributes ----------------------------------------------------------

    @property
    def id(self) -> str | None:
        return self.attributes.get("id")

    def get_attribute(self, name: str) -> str | None:
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        self.attributes[name] = str(value)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def remove_attribute(self, name: str) -> None:
        self.attributes.pop(name, None)

    # -- Content -------------------------------------------------------------

    @property
    def inner_html(self) -> str:
        return "".join(_serialize(child) for child in self.children)

    @inner_html.setter
    def inner_html(self, markup: str) -> None:
        for child in self.children:
            if isinstance(child, Element):
                child.parent = None
        self.children = []
        if markup:
            for child in parse_fragment(markup):
                self.append(child)

    @property
    def outer_html(self) -> str:
        return _serialize(self)

    @property
    def text_content(self) -> str:
        return "".join(
            child if isinstance(child, str) else child.text_content for child in self.children
        )

    @text_content.setter
    def text_content(self, text: str) -> None:
        self.inner_html = ""
        if text:
            self.children = [text]

    # -- Forms ---------------------------------------------------------------

    @property
    def value(self) -> str:
        if self.tag_name == "textarea":
            return self.text_content
        return self.attributes.get("value", "")

    @value.setter
    def value(self, value: str) -> None:
        if self.tag_name == "textarea":
            self.text_content = value
        else:
            self.attributes["value"] = value

    @property
    def elements(self) -> dict[str, Element]:
        """Named form controls below this element, first one wins per name."""
        controls: dict[str, Element] = {}
        for element in self.iter_descendants():
            name = element.attributes.get("name")
            if element.tag_name in FORM_CONTROLS and name and name not in controls:
                controls[name] = element
        return controls

    # -- Events --------------------------------------------------------------

    def add_event_listener(self, event_type: str, listener: Listener) -> None:
        self._listeners.setdefault(event_type, []).append(listener)

    def remove_event_listener(self, event_type: str, listener: Listener) -> None:
        listeners = self._listeners.get(event_type)
        if not listeners:
            return
        for index, registered in enumerate(listeners):
            if registered is listener:
                del listeners[index]
                break
        if not listeners:
            del self._listeners[event_type]

    def listener_count(self, event_type: str | None = None) -> int:
        if event_type is not None:
            return len(self._listeners.get(event_type, ()))
        return sum(len(listeners) for listeners in self._listeners.values())

    def dispatch_event(self, event: DomEvent) -> bool:
        """Run listeners on this element, then on each ancestor while bubbling.

        Returns False when a listener called ``prevent_default()``.
        """
        event.target = self
        # The propagation path is fixed before any listener runs
        path: list[Element] = [self]
        ancestor = self.parent
        while event.bubbles and ancestor is not None:
            path.append(ancestor)
            ancestor = ancestor.parent
        for node in path:
            event.current_target = node
            for listener in tuple(node._listeners.get(event.type, ())):
                listener(event)
            if event.propagation_stopped:
                break
        event.current_target = None
        return not event.default_prevented

    def click(self) -> DomEvent:
        event = DomEvent("click")
        self.dispatch_event(event)
        return event

    def submit(self) -> DomEvent:
        event = DomEvent("submit")
        self.dispatch_event(event)
        return event


# ---------------------------------------------------------------------------
# Markup <-> tree
# ---------------------------------------------------------------------------


def parse_fragment(markup: str) -> list[Element | str]:
    """Parse an HTML fragment into detached elements and text nodes."""
    soup = BeautifulSoup(markup, "html.parser")
    return [node for node in (_convert(child) for child in soup.contents) if node is not None]


def _convert(node: object) -> Element | str | None:
    if isinstance(node, (Comment, Doctype)):
        return None
    if isinstance(node, NavigableString):
        return str(node)
    if isinstance(node, Tag):
        attributes = {
            name: " ".join(value) if isinstance(value, list) else str(value)
            for name, value in node.attrs.items()
        }
        element = Element(node.name, attributes)
        for child in node.contents:
            converted = _convert(child)
            if converted is not None:
                element.append(converted)
        return element
    return None


def _serialize(node: Element | str) -> str:
    if isinstance(node, str):
        return html.escape(node, quote=False)
    attrs = "".join(
        f' {name}="{html.escape(value, quote=True)}"' for name, value in node.attributes.items()
    )
    if node.tag_name in VOID_ELEMENTS:
        return f"<{node.tag_name}{attrs}>"
    inner = "".join(_serialize(child) for child in node.children)
    return f"<{node.tag_name}{attrs}>{inner}</{node.tag_name}>"
