"""Tests for waypoint.dom — headless elements, markup parsing, event dispatch."""

from waypoint.dom import DomEvent, Element, Node, parse_fragment


class TestMarkup:
    def test_inner_html_round_trips_simple_markup(self) -> None:
        root = Element()
        root.inner_html = '<p class="lead">Hello <b>world</b></p>'
        assert root.inner_html == '<p class="lead">Hello <b>world</b></p>'

    def test_parses_into_elements(self) -> None:
        root = Element()
        root.inner_html = '<ul id="list"><li>a</li><li>b</li></ul>'

        ul = root.get_element_by_id("list")
        assert ul is not None
        assert [li.text_content for li in ul.find_all("li")] == ["a", "b"]
        assert ul.parent is root

    def test_clearing_detaches_children(self) -> None:
        root = Element()
        root.inner_html = "<span>x</span>"
        span = root.find_all("span")[0]

        root.inner_html = ""

        assert root.children == []
        assert span.parent is None

    def test_void_elements(self) -> None:
        root = Element()
        root.inner_html = '<input name="login" value="bob"><br>'
        assert root.inner_html == '<input name="login" value="bob"><br>'

    def test_text_is_escaped(self) -> None:
        el = Element("span")
        el.text_content = "<script>"
        assert el.inner_html == "&lt;script&gt;"

    def test_comments_dropped(self) -> None:
        nodes = parse_fragment("<!-- hi --><p>x</p>")
        assert len(nodes) == 1
        assert isinstance(nodes[0], Element)

    def test_multi_valued_class_joined(self) -> None:
        root = Element()
        root.inner_html = '<a class="btn primary">x</a>'
        assert root.find_all("a")[0].get_attribute("class") == "btn primary"


class TestLookup:
    def test_find_all_by_attribute(self) -> None:
        root = Element()
        root.inner_html = (
            '<span data-error-for="login"></span><span data-error-for="password"></span>'
        )
        assert len(root.find_all("span", data_error_for="login")) == 1

    def test_closest(self) -> None:
        root = Element()
        root.inner_html = '<a href="/x"><span id="inner">go</span></a>'
        inner = root.get_element_by_id("inner")
        assert inner is not None
        anchor = inner.closest("a")
        assert anchor is not None
        assert anchor.get_attribute("href") == "/x"
        assert inner.closest("form") is None

    def test_form_elements_and_values(self) -> None:
        root = Element()
        root.inner_html = (
            '<form><input name="login" value="bob"><textarea name="bio">hi</textarea></form>'
        )
        form = root.find_all("form")[0]
        assert form.elements["login"].value == "bob"
        assert form.elements["bio"].value == "hi"

        form.elements["login"].value = "alice"
        assert form.elements["login"].get_attribute("value") == "alice"


class TestEvents:
    def test_bubbles_to_ancestors(self) -> None:
        root = Element("section")
        root.inner_html = '<div><button id="b">x</button></div>'
        seen: list[str] = []
        root.add_event_listener("click", lambda e: seen.append(e.current_target.tag_name))

        button = root.get_element_by_id("b")
        assert button is not None
        button.click()

        assert seen == ["section"]

    def test_target_is_origin(self) -> None:
        root = Element()
        root.inner_html = '<button id="b">x</button>'
        targets: list[Element | None] = []
        root.add_event_listener("click", lambda e: targets.append(e.target))

        button = root.get_element_by_id("b")
        button.click()

        assert targets == [button]

    def test_path_fixed_before_listeners_run(self) -> None:
        page = Element("section")
        page.inner_html = '<div id="content"><button id="b">x</button></div>'
        content = page.get_element_by_id("content")
        button = page.get_element_by_id("b")
        seen: list[str] = []
        button.add_event_listener("click", lambda e: setattr(content, "inner_html", "<p>new</p>"))
        page.add_event_listener("click", lambda e: seen.append(e.current_target.tag_name))

        button.click()

        assert button.parent is None
        assert seen == ["section"]

    def test_stop_propagation(self) -> None:
        root = Element()
        root.inner_html = '<button id="b">x</button>'
        button = root.get_element_by_id("b")
        seen: list[str] = []
        button.add_event_listener("click", lambda e: e.stop_propagation())
        root.add_event_listener("click", lambda e: seen.append("root"))

        button.click()

        assert seen == []

    def test_prevent_default(self) -> None:
        el = Element()
        el.add_event_listener("submit", lambda e: e.prevent_default())
        event = DomEvent("submit")
        assert el.dispatch_event(event) is False
        assert event.default_prevented

    def test_remove_listener_by_identity(self) -> None:
        el = Element()

        def listener(event: DomEvent) -> None:
            pass

        el.add_event_listener("click", listener)
        el.add_event_listener("click", listener)
        el.remove_event_listener("click", listener)
        assert el.listener_count("click") == 1
        el.remove_event_listener("click", listener)
        assert el.listener_count() == 0

    def test_remove_unknown_listener_is_noop(self) -> None:
        el = Element()
        el.remove_event_listener("click", lambda e: None)
        assert el.listener_count() == 0


class TestNodeProtocol:
    def test_element_is_node(self) -> None:
        assert isinstance(Element(), Node)

    def test_other_objects_are_not(self) -> None:
        assert not isinstance(object(), Node)
        assert not isinstance("<div>", Node)
