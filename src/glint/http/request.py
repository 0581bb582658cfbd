"""Immutable HTTP request.

Frozen metadata with async body access.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from glint._internal.asgi import Receive
from glint.http.multidict import Headers, QueryParams

if TYPE_CHECKING:
    from glint.http.forms import FormData


async def _no_body() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata (method, path, headers, query) is frozen at creation. The
    body is read asynchronously via ``.body()``, ``.text()`` or
    ``.form()`` and cached after the first read.

    ``disconnected`` is flipped when the ASGI server reports
    ``http.disconnect`` while the body is being consumed or while
    ``wait_disconnect()`` is pending.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    http_version: str = "1.1"
    client: tuple[str, int] | None = None

    # Private: ASGI receive callable for body streaming
    _receive: Receive = _no_body

    # Private: mutable cache for body, parsed form data and disconnect state
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def disconnected(self) -> bool:
        return self._cache.get("_disconnected", False)

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body.

        Result is cached — the ASGI receive is consumed once, then
        the same bytes are returned on subsequent calls.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            if message.get("type") == "http.disconnect":
                self._cache["_disconnected"] = True
                break
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def text(self) -> str:
        raw = await self.body()
        return raw.decode("utf-8")

    async def form(self) -> FormData:
        """Parse the body as form data (URL-encoded or multipart).

        Result is cached. Raises ``ValueError`` if the content type is
        not a form encoding.
        """
        if "_form" in self._cache:
            return self._cache["_form"]

        from glint.http.forms import parse_form_data

        ct = self.content_type or "application/x-www-form-urlencoded"
        raw = await self.body()
        result = await parse_form_data(raw, ct)
        self._cache["_form"] = result
        return result

    async def wait_disconnect(self) -> None:
        """Block until the client disconnects.

        Drains any unread body first so the next ASGI message is the
        disconnect notification.
        """
        if "_body" not in self._cache:
            await self.body()
        while not self.disconnected:
            message = await self._receive()
            if message.get("type") == "http.disconnect":
                self._cache["_disconnected"] = True

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: dict[str, Any], receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        client = scope.get("client")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=Headers(scope.get("headers", ())),
            query=QueryParams(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            _receive=receive,
        )
