"""Tag codec: whole-value access to one namespace inside element tags.

The host exposes ``element.tags`` only as an atomic value, so every
operation reads the full dict, changes the namespace entry, and assigns
the full dict back. Content is restricted to JSON-serializable values:
tags are the only state that survives a process restart.

Usage::

    codec = TagCodec("my_mod")
    codec.merge(elem, {"page": 2})
    codec.get(elem)  # {"page": 2, ...}
"""

import json
from collections.abc import Mapping
from typing import Any

from perch._internal.types import Tags
from perch.errors import TagSerializationError
from perch.host import Element


class TagCodec:
    """Read, replace, delete, and shallow-merge one namespace's tags."""

    __slots__ = ("check_serializable", "namespace")

    def __init__(self, namespace: str, *, check_serializable: bool = True) -> None:
        self.namespace = namespace
        self.check_serializable = check_serializable

    def get(self, elem: Element) -> Tags:
        """Return the namespace content, or ``{}`` if absent. Never writes."""
        return elem.tags.get(self.namespace) or {}

    def set(self, elem: Element, tags: Mapping[str, Any]) -> None:
        """Replace the whole namespace content."""
        content = dict(tags)
        self.validate(content)
        elem_tags = elem.tags
        elem_tags[self.namespace] = content
        elem.tags = elem_tags

    def delete(self, elem: Element) -> None:
        """Remove the namespace. No-op if it is absent."""
        elem_tags = elem.tags
        if self.namespace not in elem_tags:
            return
        del elem_tags[self.namespace]
        elem.tags = elem_tags

    def merge(self, elem: Element, patch: Mapping[str, Any]) -> None:
        """Overwrite each key of ``patch`` in the namespace, creating it if needed.

        One level deep: nested values are replaced wholesale, not merged.
        """
        self.validate(patch)
        elem_tags = elem.tags
        existing = elem_tags.setdefault(self.namespace, {})
        existing.update(patch)
        elem.tags = elem_tags

    def validate(self, content: Mapping[str, Any]) -> None:
        """Raise ``TagSerializationError`` if ``content`` cannot be persisted."""
        if not self.check_serializable:
            return
        try:
            json.dumps(dict(content))
        except (TypeError, ValueError) as exc:
            msg = f"Tags for namespace {self.namespace!r} are not serializable: {exc}"
            raise TagSerializationError(msg) from exc
