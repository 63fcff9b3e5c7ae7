"""Perch: declarative GUI trees with restart-proof event routing.

Builds host UI elements from plain-dict descriptions, patches live trees
by position, and routes GUI events through handler names stored in each
element's tags, so routing survives a process restart.

Basic usage::

    from perch import Gui, GuiConfig

    gui = Gui(GuiConfig(namespace="my_mod"), host)
    gui.register_handlers({"close_window": close_window})
    gui.hook_dispatch()

    refs = gui.build(screen, [
        {"type": "frame", "ref": ["window"], "children": [
            {"type": "button", "handlers": {"on_click": "close_window"}},
        ]},
    ])
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "EventRouter",
    "Gui",
    "GuiConfig",
    "HandlerRegistry",
    "PerchError",
    "RoutingConflictError",
    "TagCodec",
    "TagSerializationError",
    "register_handlers",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name == "Gui":
        from perch.gui import Gui

        return Gui

    if name == "GuiConfig":
        from perch.config import GuiConfig

        return GuiConfig

    if name == "EventRouter":
        from perch.events import EventRouter

        return EventRouter

    if name == "TagCodec":
        from perch.tags import TagCodec

        return TagCodec

    if name in ("HandlerRegistry", "register_handlers"):
        from perch import registry as _registry

        return getattr(_registry, name)

    if name in ("ConfigurationError", "PerchError", "RoutingConflictError", "TagSerializationError"):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
