"""Shared type aliases used across perch modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Event handler: receives the full host event record
Handler: TypeAlias = Callable[[Any], Any]

# Whole-value tag content; must stay JSON-serializable
Tags: TypeAlias = dict[str, Any]

# Nested mapping of ref keys to elements, produced by one build call
RefTable: TypeAlias = dict[str, Any]
