"""In-memory host for tests and demos.

Implements the ``perch.host`` protocols with plain Python objects. Tags
behave like a real host's metadata blob: every read returns a deep copy
and only a whole-value assignment changes what is stored, so code that
mutates a snapshot without writing it back is caught by tests.

Usage::

    from perch.testing import Element, EventBus

    bus = EventBus()
    screen = Element(type="screen")
    gui = Gui(GuiConfig(namespace="demo"), bus)
    refs = gui.build(screen, [...])
    bus.fire(bus.events["on_gui_click"], refs["button"])
"""

import copy
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

# A GUI-flavoured event taxonomy, plus a few non-GUI events that
# must never be hooked.
DEFAULT_EVENTS: dict[str, int] = {
    "on_tick": 0,
    "on_player_created": 1,
    "on_gui_click": 2,
    "on_gui_confirmed": 3,
    "on_gui_checked_state_changed": 4,
    "on_gui_selection_state_changed": 5,
    "on_gui_text_changed": 6,
    "on_gui_value_changed": 7,
    "on_gui_opened": 8,
    "on_gui_closed": 9,
    "on_gui_selected_tab_changed": 10,
    "on_runtime_mod_setting_changed": 11,
}


# Element attributes owned by the host itself, never set from fields
_HOST_ATTRS = frozenset({"style", "tags", "children", "tabs", "parent", "fields"})


class Style:
    """Free-form style record; any field may be assigned."""

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"Style({fields})"


@dataclass(frozen=True, slots=True)
class TabPair:
    tab: "Element | None"
    content: "Element | None"


class Element:
    """A host element: constructor fields become attributes.

    ``fail_on`` makes ``add`` raise for children of the given ``type``,
    standing in for a host that rejects a construction request.
    """

    def __init__(self, *, fail_on: frozenset[str] = frozenset(), **fields: Any) -> None:
        self.fields = fields
        self.style = Style()
        self.parent: Element | None = None
        self._children: list[Element] = []
        self._tabs: list[TabPair] = []
        self._tags: dict[str, Any] | None = None
        self._fail_on = fail_on
        for key, value in fields.items():
            if key not in _HOST_ATTRS:
                setattr(self, key, value)

    @property
    def tags(self) -> dict[str, Any]:
        if self._tags is None:
            # Fresh elements carry leftover metadata until reset
            return {"__uninitialized__": True}
        return copy.deepcopy(self._tags)

    @tags.setter
    def tags(self, value: dict[str, Any]) -> None:
        self._tags = copy.deepcopy(value)

    @property
    def children(self) -> list["Element"]:
        return list(self._children)

    @property
    def tabs(self) -> list[TabPair]:
        return list(self._tabs)

    def add(self, **fields: Any) -> "Element":
        kind = fields.get("type")
        if kind in self._fail_on:
            msg = f"Host rejected element of type {kind!r}"
            raise ValueError(msg)
        child = Element(fail_on=self._fail_on, **fields)
        child.parent = self
        self._children.append(child)
        return child

    def add_tab(self, tab: "Element", content: "Element") -> None:
        self._tabs.append(TabPair(tab=tab, content=content))

    def __repr__(self) -> str:
        kind = self.fields.get("type", "element")
        name = self.fields.get("name")
        return f"<Element {kind} {name!r}>" if name else f"<Element {kind}>"


@dataclass(frozen=True, slots=True)
class GuiEvent:
    """An event record as the host delivers it."""

    event_id: int
    element: Element | None = None
    extra: dict[str, Any] = field(default_factory=dict)


class EventBus:
    """Event enumeration plus subscription, one callback per event id.

    Like most hosts, subscribing again to the same id replaces the
    previous callback.
    """

    def __init__(self, events: dict[str, int] | None = None) -> None:
        self.events: dict[str, int] = dict(DEFAULT_EVENTS if events is None else events)
        self.subscriptions: dict[int, Callable[[Any], Any]] = {}
        self.subscribe_calls = 0

    def subscribe(self, event_id: int, callback: Callable[[Any], Any]) -> None:
        self.subscriptions[event_id] = callback
        self.subscribe_calls += 1

    def fire(self, event_id: int, element: Element | None = None, **extra: Any) -> Any:
        """Deliver an event to its subscriber and return the callback's result."""
        event = GuiEvent(event_id=event_id, element=element, extra=extra)
        callback = self.subscriptions.get(event_id)
        if callback is None:
            return None
        return callback(event)
