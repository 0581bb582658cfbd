"""Shared type aliases used across glint modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: takes a Context, sync or async, may return a Response
Handler: TypeAlias = Callable[..., Any]

# Lifecycle hook: no arguments, sync or async
Hook: TypeAlias = Callable[[], Any]
