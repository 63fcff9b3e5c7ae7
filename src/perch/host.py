"""Host protocols: the element and event APIs perch drives.

Perch never creates hosts. It calls into whatever runtime owns the UI
tree through these shapes. No base class required: the framework checks
the shape, not the lineage.

``perch.testing`` provides an in-memory implementation of every
protocol here.
"""

from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol


class Element(Protocol):
    """A host-owned UI node.

    ``tags`` is atomic: reading returns a snapshot, and changes only reach
    the host when the whole value is assigned back. Element properties
    (``elem_mods``) and style fields (``style_mods``) are plain attribute
    assignments on the element and on ``element.style``.
    """

    tags: dict[str, Any]

    @property
    def style(self) -> Any: ...

    @property
    def children(self) -> Sequence["Element"]: ...

    @property
    def tabs(self) -> Sequence["TabPair"]: ...

    def add(self, **fields: Any) -> "Element": ...

    def add_tab(self, tab: "Element", content: "Element") -> None: ...


class TabPair(Protocol):
    """One tab/content association registered on a tabbed element."""

    @property
    def tab(self) -> Element | None: ...

    @property
    def content(self) -> Element | None: ...


class GuiEvent(Protocol):
    """An event record delivered by the host.

    ``event_id`` is the numeric identifier the host subscribed under.
    ``element`` is the element that fired it, or ``None``.
    """

    @property
    def event_id(self) -> int: ...

    @property
    def element(self) -> Element | None: ...


class EventHost(Protocol):
    """The host's event enumeration and subscription API."""

    @property
    def events(self) -> Mapping[str, int]: ...

    def subscribe(self, event_id: int, callback: Callable[[Any], Any]) -> None: ...
