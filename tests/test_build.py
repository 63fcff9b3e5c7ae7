"""Tests for perch.build: recursive structure builder."""

import pytest

from perch.build import build
from perch.errors import ConfigurationError, RoutingConflictError, TagSerializationError
from perch.tags import TagCodec
from perch.testing import Element


def _codec() -> TagCodec:
    return TagCodec("my_mod")


class TestConstruction:
    def test_builds_in_order(self) -> None:
        screen = Element(type="screen")
        build(screen, [{"type": "frame", "name": "a"}, {"type": "frame", "name": "b"}], codec=_codec())
        assert [c.name for c in screen.children] == ["a", "b"]

    def test_constructor_fields_only(self) -> None:
        screen = Element(type="screen")
        build(
            screen,
            [{"type": "button", "caption": "OK", "ref": ["ok"], "style_mods": {"width": 40}}],
            codec=_codec(),
        )
        assert screen.children[0].fields == {"type": "button", "caption": "OK"}

    def test_tags_reset(self) -> None:
        screen = Element(type="screen")
        build(screen, [{"type": "frame"}], codec=_codec())
        assert screen.children[0].tags == {}

    def test_style_and_elem_mods(self) -> None:
        screen = Element(type="screen")
        refs = build(
            screen,
            [
                {
                    "type": "label",
                    "ref": ["label"],
                    "style_mods": {"font_color": [1, 0, 0], "width": 120},
                    "elem_mods": {"caption": "Hello", "enabled": False},
                }
            ],
            codec=_codec(),
        )
        label = refs["label"]
        assert label.style.font_color == [1, 0, 0]
        assert label.style.width == 120
        assert label.caption == "Hello"
        assert label.enabled is False

    def test_nested_children(self) -> None:
        screen = Element(type="screen")
        build(
            screen,
            [{"type": "frame", "children": [{"type": "flow", "children": [{"type": "button"}]}]}],
            codec=_codec(),
        )
        frame = screen.children[0]
        flow = frame.children[0]
        assert flow.parent is frame
        assert flow.children[0].type == "button"

    def test_host_failure_aborts(self) -> None:
        screen = Element(type="screen", fail_on=frozenset({"bogus"}))
        with pytest.raises(ValueError, match="bogus"):
            build(
                screen,
                [{"type": "frame"}, {"type": "bogus"}, {"type": "frame", "name": "never"}],
                codec=_codec(),
            )
        assert [c.type for c in screen.children] == ["frame"]


class TestTags:
    def test_tags_replace_namespace(self) -> None:
        codec = _codec()
        screen = Element(type="screen")
        refs = build(screen, [{"type": "frame", "tags": {"page": 1}, "ref": ["f"]}], codec=codec)
        assert refs["f"].tags == {"my_mod": {"page": 1}}

    def test_handlers_merge_with_tags(self) -> None:
        codec = _codec()
        screen = Element(type="screen")
        refs = build(
            screen,
            [
                {
                    "type": "button",
                    "tags": {"page": 1},
                    "handlers": {"on_click": "close_window"},
                    "ref": ["b"],
                }
            ],
            codec=codec,
        )
        assert codec.get(refs["b"]) == {"page": 1, "routing": {"on_click": "close_window"}}

    def test_actions_stored_under_routing(self) -> None:
        codec = _codec()
        screen = Element(type="screen")
        refs = build(
            screen,
            [{"type": "button", "actions": {"on_click": {"action": "close", "id": 3}}, "ref": ["b"]}],
            codec=codec,
        )
        assert codec.get(refs["b"]) == {"routing": {"on_click": {"action": "close", "id": 3}}}

    def test_custom_routing_key(self) -> None:
        codec = _codec()
        screen = Element(type="screen")
        refs = build(
            screen,
            [{"type": "button", "handlers": {"on_click": "h"}, "ref": ["b"]}],
            codec=codec,
            routing_key="flib",
        )
        assert codec.get(refs["b"]) == {"flib": {"on_click": "h"}}

    def test_disjoint_handlers_and_actions_combine(self) -> None:
        codec = _codec()
        screen = Element(type="screen")
        refs = build(
            screen,
            [
                {
                    "type": "textfield",
                    "handlers": {"on_text_changed": "filter_list"},
                    "actions": {"on_confirmed": "submit"},
                    "ref": ["t"],
                }
            ],
            codec=codec,
        )
        assert codec.get(refs["t"])["routing"] == {
            "on_text_changed": "filter_list",
            "on_confirmed": "submit",
        }

    def test_conflicting_handlers_and_actions_rejected(self) -> None:
        screen = Element(type="screen")
        with pytest.raises(RoutingConflictError) as exc_info:
            build(
                screen,
                [{"type": "button", "handlers": {"on_click": "h"}, "actions": {"on_click": "a"}}],
                codec=_codec(),
            )
        assert exc_info.value.categories == ("on_click",)
        assert screen.children == []

    def test_unserializable_tags_create_nothing(self) -> None:
        screen = Element(type="screen")
        with pytest.raises(TagSerializationError):
            build(screen, [{"type": "frame", "tags": {"callback": print}}], codec=_codec())
        assert screen.children == []

    def test_unserializable_actions_create_nothing(self) -> None:
        screen = Element(type="screen")
        with pytest.raises(TagSerializationError):
            build(screen, [{"type": "button", "actions": {"on_click": object()}}], codec=_codec())
        assert screen.children == []


class TestRefs:
    def test_shared_prefix_paths(self) -> None:
        screen = Element(type="screen")
        refs = build(
            screen,
            [
                {
                    "type": "frame",
                    "caption": "Inventory",
                    "ref": ["window", "frame"],
                    "children": [
                        {
                            "type": "button",
                            "caption": "Close",
                            "handlers": {"on_click": "close_window"},
                            "ref": ["window", "close_button"],
                        },
                    ],
                },
            ],
            codec=_codec(),
        )
        frame = screen.children[0]
        assert refs == {"window": {"frame": frame, "close_button": frame.children[0]}}

    def test_ref_path_yields_element(self) -> None:
        screen = Element(type="screen")
        refs = build(
            screen,
            [
                {
                    "type": "frame",
                    "ref": ["window"],
                    "children": [
                        {"type": "button", "ref": ["buttons", "close"]},
                        {"type": "button", "ref": ["buttons", "pin"]},
                    ],
                }
            ],
            codec=_codec(),
        )
        frame = screen.children[0]
        assert refs["window"] is frame
        assert refs["buttons"]["close"] is frame.children[0]
        assert refs["buttons"]["pin"] is frame.children[1]

    def test_string_ref(self) -> None:
        screen = Element(type="screen")
        refs = build(screen, [{"type": "frame", "ref": "window"}], codec=_codec())
        assert refs == {"window": screen.children[0]}

    def test_one_table_per_call(self) -> None:
        screen = Element(type="screen")
        refs = build(
            screen,
            [{"type": "frame", "ref": ["a"]}, {"type": "frame", "ref": ["b"]}],
            codec=_codec(),
        )
        assert set(refs) == {"a", "b"}

    def test_duplicate_path_last_wins(self) -> None:
        screen = Element(type="screen")
        refs = build(
            screen,
            [{"type": "frame", "ref": ["x"]}, {"type": "flow", "ref": ["x"]}],
            codec=_codec(),
        )
        assert refs["x"] is screen.children[1]

    def test_empty_path_rejected(self) -> None:
        screen = Element(type="screen")
        with pytest.raises(ConfigurationError, match="Empty"):
            build(screen, [{"type": "frame", "ref": []}], codec=_codec())

    def test_path_through_element_rejected(self) -> None:
        screen = Element(type="screen")
        with pytest.raises(ConfigurationError, match="already holds"):
            build(
                screen,
                [{"type": "frame", "ref": ["window"]}, {"type": "button", "ref": ["window", "close"]}],
                codec=_codec(),
            )


class TestTabs:
    def test_pairs_in_declaration_order(self) -> None:
        screen = Element(type="screen")
        refs = build(
            screen,
            [
                {
                    "type": "tabbed-pane",
                    "ref": ["pane"],
                    "tabs": [
                        {
                            "tab": {"type": "tab", "caption": f"Tab {i}"},
                            "content": {"type": "flow", "name": f"content_{i}"},
                        }
                        for i in range(3)
                    ],
                }
            ],
            codec=_codec(),
        )
        pane = refs["pane"]
        assert len(pane.tabs) == 3
        assert [p.tab.caption for p in pane.tabs] == ["Tab 0", "Tab 1", "Tab 2"]
        assert [p.content.name for p in pane.tabs] == ["content_0", "content_1", "content_2"]

    def test_tab_and_content_parented_to_pane(self) -> None:
        screen = Element(type="screen")
        refs = build(
            screen,
            [
                {
                    "type": "tabbed-pane",
                    "ref": ["pane"],
                    "tabs": [
                        {
                            "tab": {"type": "tab", "ref": ["tab"]},
                            "content": {"type": "flow", "ref": ["content"]},
                        }
                    ],
                }
            ],
            codec=_codec(),
        )
        pane = refs["pane"]
        assert refs["tab"].parent is pane
        assert refs["content"].parent is pane
        assert pane.children == [refs["tab"], refs["content"]]
