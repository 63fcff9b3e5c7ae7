"""Perch exception hierarchy.

Shared across the builder, codec, registry, and router so every module
raises and catches the same types. Missing routing is never an error:
it is reported as ``False`` / ``None`` by the router.
"""

from dataclasses import dataclass


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when configuration or a structure description is invalid.

    Typically surfaces at startup (``GuiConfig``, handler registration)
    or at build time (malformed ``ref`` paths).
    """


@dataclass(frozen=True, slots=True)
class RoutingConflictError(ConfigurationError):
    """``handlers`` and ``actions`` both claim the same event category.

    Both protocols share one routing slot per category, so a node that
    sets both for one category could only ever keep one of them.
    """

    categories: tuple[str, ...]

    def __str__(self) -> str:
        names = ", ".join(repr(c) for c in self.categories)
        return f"handlers and actions both route categories: {names}"


class TagSerializationError(PerchError):
    """Tag content is not JSON-serializable and would not survive a restart."""
