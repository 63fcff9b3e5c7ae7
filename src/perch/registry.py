"""Handler registry: process-wide name → callable table.

Callables cannot be persisted, so element tags only ever store handler
*names*. The table is rebuilt on every process start by calling
``register_handlers`` before any event is dispatched; until then every
name simply resolves to ``None``.

Usage::

    from perch.registry import register_handlers

    def close_window(event):
        ...

    register_handlers({"close_window": close_window})

    # or a wrapper exposing ``handlers`` (module, class, or mapping)
    register_handlers({"handlers": {"close_window": close_window}})

Single-threaded by contract: the host delivers one event at a time and
registration happens at startup, so no lock is taken.
"""

import logging
from collections.abc import Mapping
from typing import Any

from perch._internal.types import Handler
from perch.errors import ConfigurationError

logger = logging.getLogger("perch.registry")


def _unwrap(table: Any) -> Mapping[str, Any]:
    """Return the flat name → callable mapping from either accepted form."""
    if isinstance(table, Mapping):
        nested = table.get("handlers")
        if isinstance(nested, Mapping):
            return nested
        return table
    nested = getattr(table, "handlers", None)
    if isinstance(nested, Mapping):
        return nested
    msg = (
        f"Cannot register handlers from {type(table).__name__}: expected a mapping "
        "or an object with a 'handlers' mapping."
    )
    raise ConfigurationError(msg)


class HandlerRegistry:
    """Append-only handler table. Later registrations overwrite by name."""

    __slots__ = ("_handlers",)

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}

    def register(self, table: Any) -> None:
        """Add every handler in ``table``. Idempotent for the same table."""
        entries = _unwrap(table)
        for name, func in entries.items():
            if not callable(func):
                msg = f"Handler {name!r} is not callable (got {type(func).__name__})."
                raise ConfigurationError(msg)
        self._handlers.update(entries)
        logger.debug("Registered %d handler(s): %s", len(entries), ", ".join(entries))

    def get(self, name: str) -> Handler | None:
        """Look up a handler by name. Returns ``None`` if not registered."""
        return self._handlers.get(name)

    def __len__(self) -> int:
        return len(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers


# Process-wide default table
handlers = HandlerRegistry()


def register_handlers(table: Any) -> None:
    """Register into the process-wide registry."""
    handlers.register(table)
