"""Gui configuration.

GuiConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass

from perch.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class GuiConfig:
    """Configuration for one namespace owner. Immutable after creation.

    Only ``namespace`` is required. Override the rest if the host names
    its events differently::

        config = GuiConfig(namespace="my_mod", category_strip="_ui")
    """

    # Key inside each element's tags owned by this Gui
    namespace: str

    # Routing submap key inside the namespace
    routing_key: str = "routing"

    # Event names containing this token are GUI events
    category_filter: str = "gui"

    # Removed from event names to derive the routing category
    category_strip: str = "_gui"

    # Reject tag content that json cannot encode
    check_serializable: bool = True

    def __post_init__(self) -> None:
        if not self.namespace:
            msg = "GuiConfig.namespace must be a non-empty string."
            raise ConfigurationError(msg)
        if not self.routing_key:
            msg = "GuiConfig.routing_key must be a non-empty string."
            raise ConfigurationError(msg)
