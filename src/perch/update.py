"""Tree updater: apply partial descriptions onto a live tree by position.

Updates are matched to live elements by index, not by name, and any
drift between description and tree is tolerated: entries past the last
live child or tab, ``None`` entries, and missing ``tab`` / ``content``
on either side are skipped without error.

Tags, handlers, and actions are not updated here; use the tag codec
directly for those.
"""

from collections.abc import Mapping
from typing import Any

from perch.host import Element
from perch.structure import UpdateDescription


def update(elem: Element, updates: UpdateDescription) -> None:
    """Apply ``updates`` to ``elem`` and recurse into children and tabs."""
    cb = updates.get("cb")
    if cb is not None:
        cb(elem)

    style_mods = updates.get("style_mods")
    if style_mods:
        style = elem.style
        for key, value in style_mods.items():
            setattr(style, key, value)

    elem_mods = updates.get("elem_mods")
    if elem_mods:
        for key, value in elem_mods.items():
            setattr(elem, key, value)

    child_updates = updates.get("children")
    if child_updates:
        children = elem.children
        for child, child_update in zip(children, child_updates):
            if child_update:
                update(child, child_update)

    tab_updates = updates.get("tabs")
    if tab_updates:
        for pair, pair_update in zip(elem.tabs, tab_updates):
            if not pair_update:
                continue
            _update_side(pair.tab, pair_update.get("tab"))
            _update_side(pair.content, pair_update.get("content"))


def _update_side(live: Element | None, side_update: Mapping[str, Any] | None) -> None:
    if live is not None and side_update:
        update(live, side_update)
