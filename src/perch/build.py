"""Structure tree builder: instantiate elements from declarative descriptions.

Each description is built depth-first under its parent. Routing data
(``handlers`` / ``actions``) is written into the element's tags through
the codec, so it outlives the process; ``ref`` paths collect the created
elements into one nested reference table per ``build`` call.

Usage::

    refs = build(screen, [
        {
            "type": "frame",
            "caption": "Inventory",
            "ref": ["window", "frame"],
            "children": [
                {"type": "button", "caption": "Close",
                 "handlers": {"on_click": "close_window"},
                 "ref": ["window", "close_button"]},
            ],
        },
    ], codec=TagCodec("my_mod"))

    refs["window"]["frame"]         # the frame element
    refs["window"]["close_button"]  # the button element

A path may not run through a key that already holds an element, so
``["window"]`` and ``["window", "close_button"]`` cannot be combined.

Host errors raised while creating or modifying elements propagate
unchanged and abort the rest of the build; elements already created
stay wherever the host put them.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from perch._internal.types import RefTable
from perch.errors import ConfigurationError, RoutingConflictError
from perch.host import Element
from perch.structure import StructureDescription, constructor_fields
from perch.tags import TagCodec

logger = logging.getLogger("perch.build")


def build(
    parent: Element,
    structures: Sequence[StructureDescription],
    *,
    codec: TagCodec,
    routing_key: str = "routing",
) -> RefTable:
    """Build every structure under ``parent`` in order.

    Returns the reference table shared by all nodes of this call.
    """
    refs: RefTable = {}
    for structure in structures:
        _build_node(parent, structure, refs, codec, routing_key)
    return refs


def _build_node(
    parent: Element,
    structure: StructureDescription,
    refs: RefTable,
    codec: TagCodec,
    routing_key: str,
) -> Element:
    handlers = structure.get("handlers")
    actions = structure.get("actions")
    if handlers and actions:
        overlap = sorted(set(handlers) & set(actions))
        if overlap:
            raise RoutingConflictError(categories=tuple(overlap))

    tags = structure.get("tags")
    routing: dict[str, Any] = {}
    if handlers:
        routing.update(handlers)
    if actions:
        routing.update(actions)
    # Validated before the host creates anything
    if tags is not None:
        codec.validate(tags)
    if routing:
        codec.validate({routing_key: routing})

    elem = parent.add(**constructor_fields(structure))
    # Construction leaves tags undefined; start from a clean slate
    elem.tags = {}
    logger.debug("Built %s under %s", _describe(structure), type(parent).__name__)

    style_mods = structure.get("style_mods")
    if style_mods:
        style = elem.style
        for key, value in style_mods.items():
            setattr(style, key, value)

    elem_mods = structure.get("elem_mods")
    if elem_mods:
        for key, value in elem_mods.items():
            setattr(elem, key, value)

    if tags is not None:
        codec.set(elem, tags)

    if routing:
        codec.merge(elem, {routing_key: routing})

    ref = structure.get("ref")
    if ref is not None:
        _store_ref(refs, ref, elem)

    for child in structure.get("children") or ():
        _build_node(elem, child, refs, codec, routing_key)

    for pair in structure.get("tabs") or ():
        tab = _build_node(elem, pair["tab"], refs, codec, routing_key)
        content = _build_node(elem, pair["content"], refs, codec, routing_key)
        elem.add_tab(tab, content)

    return elem


def _store_ref(refs: RefTable, ref: Sequence[str] | str, elem: Element) -> None:
    """Store ``elem`` at the end of ``ref``, creating nested dicts on the way."""
    path = (ref,) if isinstance(ref, str) else tuple(ref)
    if not path:
        msg = "Empty ref path."
        raise ConfigurationError(msg)

    node = refs
    for key in path[:-1]:
        nxt = node.setdefault(key, {})
        if not isinstance(nxt, dict):
            msg = f"Ref path {list(path)!r} passes through {key!r}, which already holds an element."
            raise ConfigurationError(msg)
        node = nxt
    node[path[-1]] = elem


def _describe(structure: Mapping[str, Any]) -> str:
    kind = structure.get("type", "element")
    name = structure.get("name")
    return f"{kind} {name!r}" if name else str(kind)
