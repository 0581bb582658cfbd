"""Invoke helper — call sync or async callables uniformly.

Route handlers and lifecycle hooks can be ``def`` or ``async def``.
The sync/async check lives here and nowhere else.

Usage::

    from glint._internal.invoke import invoke

    result = await invoke(handler, ctx)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it is awaitable."""
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
