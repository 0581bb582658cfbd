"""Per-request context handed to every route handler.

A ``Context`` bundles the inbound ``Request``, the outbound response
sink, the (always empty) route parameters, and a cancellation event
that push streams watch. One is created per dispatched request and
dropped when the handler returns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import anyio

from glint.http.request import Request
from glint.http.writer import AnyWriter

if TYPE_CHECKING:
    from glint.http.forms import FormData


@dataclass(slots=True)
class Context:
    """The request/response bundle passed to handlers and update callbacks.

    Must be created inside a running event loop (``cancelled`` is an
    ``anyio.Event``).
    """

    request: Request
    writer: AnyWriter
    params: dict[str, str] = field(default_factory=dict)
    cancelled: anyio.Event = field(default_factory=anyio.Event)
    form: FormData | None = None

    @property
    def method(self) -> str:
        return self.request.method

    @property
    def path(self) -> str:
        return self.request.path

    def cancel(self) -> None:
        """Signal that the connection is gone; streaming handlers stop."""
        self.cancelled.set()
