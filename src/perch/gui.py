"""Gui: one namespace owner bound to a host.

Bundles a ``GuiConfig`` with the tag codec, event router, and handler
registry so callers work with a single object::

    from perch import Gui, GuiConfig

    gui = Gui(GuiConfig(namespace="my_mod"), host)

    gui.register_handlers({"close_window": close_window})
    gui.hook_dispatch()

    refs = gui.build(screen, [
        {"type": "button", "handlers": {"on_click": "close_window"},
         "ref": ["close"]},
    ])
    gui.update(refs["close"], {"elem_mods": {"caption": "Bye"}})

Registration must run on every process start, before events arrive.
Elements built in an earlier process keep working once it has.
"""

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from perch._internal.types import RefTable, Tags
from perch.build import build as build_tree
from perch.config import GuiConfig
from perch.events import EventRouter
from perch.host import Element, EventHost, GuiEvent
from perch.registry import HandlerRegistry
from perch.registry import handlers as default_registry
from perch.structure import StructureDescription, UpdateDescription
from perch.tags import TagCodec
from perch.update import update as update_tree


class Gui:
    """Facade over builder, updater, tag codec, and event router."""

    __slots__ = ("codec", "config", "host", "registry", "router")

    def __init__(
        self,
        config: GuiConfig,
        host: EventHost,
        *,
        registry: HandlerRegistry | None = None,
    ) -> None:
        self.config = config
        self.host = host
        self.registry = registry if registry is not None else default_registry
        self.codec = TagCodec(config.namespace, check_serializable=config.check_serializable)
        self.router = EventRouter(
            self.codec,
            self.registry,
            host.events,
            routing_key=config.routing_key,
            category_filter=config.category_filter,
            category_strip=config.category_strip,
        )

    # -- Handlers --

    def register_handlers(self, table: Any) -> None:
        self.registry.register(table)

    def hook_dispatch(self) -> None:
        self.router.hook_dispatch(self.host)

    def dispatch(self, event: GuiEvent) -> bool:
        return self.router.dispatch(event)

    # -- Actions --

    def hook_action(self, func: Callable[[Any], Any]) -> None:
        self.router.hook_action(self.host, func)

    def get_action(self, event: GuiEvent) -> Any | None:
        return self.router.get_action(event)

    # -- Building and updating --

    def build(self, parent: Element, structures: Sequence[StructureDescription]) -> RefTable:
        return build_tree(
            parent, structures, codec=self.codec, routing_key=self.config.routing_key
        )

    def update(self, elem: Element, updates: UpdateDescription) -> None:
        update_tree(elem, updates)

    # -- Tags --

    def get_tags(self, elem: Element) -> Tags:
        return self.codec.get(elem)

    def set_tags(self, elem: Element, tags: Mapping[str, Any]) -> None:
        self.codec.set(elem, tags)

    def delete_tags(self, elem: Element) -> None:
        self.codec.delete(elem)

    def merge_tags(self, elem: Element, patch: Mapping[str, Any]) -> None:
        self.codec.merge(elem, patch)
