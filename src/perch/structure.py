"""Typed shapes for structure and update descriptions.

Descriptions are plain dicts so they can be written inline, loaded from
data files, or generated. These TypedDicts only document the reserved
keys; any other key in a structure is a constructor field passed to
``parent.add(**fields)``.
"""

from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypedDict


class TabStructure(TypedDict):
    """A tab element and its content element, built as siblings."""

    tab: "StructureDescription"
    content: "StructureDescription"


class StructureDescription(TypedDict, total=False):
    """Declarative description of one element and its subtree."""

    style_mods: Mapping[str, Any]
    elem_mods: Mapping[str, Any]
    tags: Mapping[str, Any]
    handlers: Mapping[str, str]
    actions: Mapping[str, Any]
    ref: Sequence[str] | str
    children: Sequence["StructureDescription"]
    tabs: Sequence[TabStructure]


class TabUpdate(TypedDict, total=False):
    tab: "UpdateDescription"
    content: "UpdateDescription"


class UpdateDescription(TypedDict, total=False):
    """Partial changes for a live subtree, matched by position."""

    cb: Callable[[Any], Any]
    style_mods: Mapping[str, Any]
    elem_mods: Mapping[str, Any]
    children: Sequence["UpdateDescription | None"]
    tabs: Sequence["TabUpdate | None"]


# Keys consumed by the builder; never forwarded to the host constructor
RESERVED_KEYS: frozenset[str] = frozenset(
    {
        "style_mods",
        "elem_mods",
        "tags",
        "handlers",
        "actions",
        "ref",
        "children",
        "tabs",
    }
)


def constructor_fields(structure: Mapping[str, Any]) -> dict[str, Any]:
    """Return the keys of ``structure`` meant for the host constructor."""
    return {k: v for k, v in structure.items() if k not in RESERVED_KEYS}


__all__ = [
    "RESERVED_KEYS",
    "StructureDescription",
    "TabStructure",
    "TabUpdate",
    "UpdateDescription",
    "constructor_fields",
]
