"""Event router: resolve host GUI events through tag-encoded routing.

Routing is a two-level lookup. The element's tags map an event category
to a value (``{namespace: {routing_key: {category: value}}}``); in
dispatch mode the value is a handler *name* resolved through the
``HandlerRegistry``, in action mode the value is a payload returned to
the caller as-is.

The category is derived from the host's event enumeration: the numeric
id is reverse-mapped to its name and the strip token is removed, so
``on_gui_click`` routes under ``on_click``.

Every missing link (no element, no namespace, no routing, no entry for
the category, no registered handler) is an expected state after a
restart or for unrouted elements. Dispatch reports it as ``False`` and
action lookup as ``None``; neither raises.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from perch.host import EventHost, GuiEvent
from perch.registry import HandlerRegistry
from perch.tags import TagCodec

logger = logging.getLogger("perch.events")


class _DispatchFanout:
    """The one dispatch callback subscribed on a host.

    Hosts keep a single callback per event id, so every router hooked on
    the same host shares this object. Each router resolves the event in
    its own namespace; the event counts as handled if any handler ran.
    """

    __slots__ = ("host", "routers")

    def __init__(self, host: EventHost) -> None:
        self.host = host
        self.routers: list[EventRouter] = []

    def __call__(self, event: GuiEvent) -> bool:
        handled = False
        for router in self.routers:
            handled = router.dispatch(event) or handled
        return handled


# Process-wide, keyed by id(host); the entry keeps its host alive
_fanouts: dict[int, _DispatchFanout] = {}


def dispatch_fanout(host: EventHost) -> _DispatchFanout:
    """Return the shared dispatch callback for ``host``, creating it once."""
    fanout = _fanouts.get(id(host))
    if fanout is None or fanout.host is not host:
        fanout = _DispatchFanout(host)
        _fanouts[id(host)] = fanout
    return fanout


class EventRouter:
    """Resolve events to handlers (dispatch mode) or payloads (action mode).

    Usage::

        router = EventRouter(codec, handlers, host.events)
        router.hook_dispatch(host)

        # or, action mode
        def on_gui_event(event):
            action = router.get_action(event)
            if action is not None:
                ...
        router.hook_action(host, on_gui_event)
    """

    __slots__ = (
        "_categories",
        "category_filter",
        "category_strip",
        "codec",
        "event_names",
        "registry",
        "routing_key",
    )

    def __init__(
        self,
        codec: TagCodec,
        registry: HandlerRegistry,
        event_names: Mapping[str, int],
        *,
        routing_key: str = "routing",
        category_filter: str = "gui",
        category_strip: str = "_gui",
    ) -> None:
        self.codec = codec
        self.registry = registry
        self.event_names = event_names
        self.routing_key = routing_key
        self.category_filter = category_filter
        self.category_strip = category_strip
        self._categories: dict[int, str] = {
            event_id: name.replace(category_strip, "") for name, event_id in event_names.items()
        }

    # -- Resolution --

    def category_of(self, event_id: int) -> str:
        """Return the routing category for a numeric event id, or ``""``."""
        return self._categories.get(event_id, "")

    def _resolve(self, event: GuiEvent) -> Any | None:
        """Return the routed value for ``event``, or ``None`` at any missing link."""
        elem = getattr(event, "element", None)
        if elem is None:
            logger.debug("Event %s has no element", getattr(event, "event_id", "?"))
            return None

        routing = self.codec.get(elem).get(self.routing_key)
        if not routing or not isinstance(routing, Mapping):
            logger.debug("Element has no %r routing", self.codec.namespace)
            return None

        category = self.category_of(event.event_id)
        value = routing.get(category)
        if value is None:
            logger.debug("No route for category %r", category)
        return value

    def dispatch(self, event: GuiEvent) -> bool:
        """Call the handler routed for ``event``. Returns whether one ran.

        Exceptions raised by the handler propagate to the host.
        """
        name = self._resolve(event)
        if name is None:
            return False
        if not isinstance(name, str):
            logger.debug("Route for event %s is an action payload, not a handler name", event.event_id)
            return False

        handler = self.registry.get(name)
        if handler is None:
            logger.debug("Handler %r is not registered", name)
            return False

        handler(event)
        return True

    def get_action(self, event: GuiEvent) -> Any | None:
        """Return the payload routed for ``event``, or ``None``. Never mutates."""
        return self._resolve(event)

    # -- Subscription --

    def gui_event_ids(self) -> list[int]:
        """Ids of every host event whose name contains the filter token."""
        return [
            event_id for name, event_id in self.event_names.items() if self.category_filter in name
        ]

    def hook_gui_events(self, host: EventHost, callback: Callable[[Any], Any]) -> None:
        """Subscribe ``callback`` to every GUI event the host enumerates."""
        for event_id in self.gui_event_ids():
            host.subscribe(event_id, callback)

    def hook_dispatch(self, host: EventHost) -> None:
        """Wire ``dispatch`` to every GUI event. Later calls are no-ops.

        Routers hooked on the same host share one subscription, so several
        namespaces can dispatch side by side; each is tried in hook order.
        """
        fanout = dispatch_fanout(host)
        if self in fanout.routers:
            logger.debug("Dispatch already hooked for %r", self.codec.namespace)
            return
        fanout.routers.append(self)
        self.hook_gui_events(host, fanout)

    def hook_action(self, host: EventHost, func: Callable[[Any], Any]) -> None:
        """Wire a caller function to every GUI event for action-mode handling."""
        self.hook_gui_events(host, func)
