"""Response sinks — where handlers write their output.

``ResponseWriter`` translates writes into ASGI ``http.response.*``
messages and supports incremental flushing, which push streams require.
``BufferedResponseWriter`` keeps everything in memory and hands back a
``Response``; it cannot flush, so a push stream refuses to run on it.

Both share the same surface::

    ctx.writer.set_header("cache-control", "no-cache")
    await ctx.writer.write_head(200)
    await ctx.writer.write("data: hello\\n\\n")
    await ctx.writer.flush()   # ResponseWriter only
"""

from typing import Protocol, runtime_checkable

from glint._internal.asgi import Send
from glint.http.response import Response


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    return not (100 <= status < 200 or status in {204, 304})


def _encode(data: str | bytes) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else data


@runtime_checkable
class Flusher(Protocol):
    """A sink that can push buffered bytes to the client immediately."""

    async def flush(self) -> None: ...


class _BaseWriter:
    """Header bookkeeping shared by both writers."""

    __slots__ = ("_finished", "_headers", "_status")

    def __init__(self) -> None:
        self._headers: list[tuple[str, str]] = []
        self._status: int | None = None
        self._finished = False

    @property
    def headers_sent(self) -> bool:
        return self._status is not None

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def status(self) -> int | None:
        return self._status

    def set_header(self, name: str, value: str) -> None:
        """Set (replace) a response header. Must precede ``write_head``."""
        if self.headers_sent:
            msg = f"Cannot set header {name!r}: headers already sent"
            raise RuntimeError(msg)
        name_lower = name.lower()
        self._headers = [(k, v) for k, v in self._headers if k != name_lower]
        self._headers.append((name_lower, value))

    def _check_open(self) -> None:
        if self._finished:
            msg = "Response already finished"
            raise RuntimeError(msg)

    def abandon(self) -> None:
        """Mark the response done without sending anything else.

        Used once the client is known to be gone.
        """
        self._finished = True


class ResponseWriter(_BaseWriter):
    """Streaming ASGI response sink.

    ``write`` appends to an internal buffer; ``flush`` sends it as an
    ``http.response.body`` message with ``more_body=True``; ``finish``
    sends what is left and closes the response.
    """

    __slots__ = ("_buffer", "_send")

    def __init__(self, send: Send) -> None:
        super().__init__()
        self._send = send
        self._buffer = bytearray()

    async def write_head(self, status: int = 200) -> None:
        self._check_open()
        if self.headers_sent:
            msg = "Headers already sent"
            raise RuntimeError(msg)
        self._status = status
        await self._send(
            {
                "type": "http.response.start",
                "status": status,
                "headers": [
                    (name.encode("latin-1"), value.encode("latin-1"))
                    for name, value in self._headers
                ],
            }
        )

    async def write(self, data: str | bytes) -> None:
        self._check_open()
        if not self.headers_sent:
            await self.write_head(200)
        self._buffer.extend(_encode(data))

    async def flush(self) -> None:
        self._check_open()
        if not self.headers_sent:
            await self.write_head(200)
        if not self._buffer:
            return
        chunk = bytes(self._buffer)
        self._buffer.clear()
        await self._send({"type": "http.response.body", "body": chunk, "more_body": True})

    async def send_response(self, response: Response) -> None:
        """Write a complete ``Response`` and finish."""
        self._check_open()
        body = response.body_bytes if _body_allowed(response.status) else b""
        self.set_header("content-type", response.content_type)
        for name, value in response.headers:
            self.set_header(name, value)
        self.set_header("content-length", str(len(body)))
        await self.write_head(response.status)
        self._buffer.extend(body)
        await self.finish()

    async def finish(self) -> None:
        """Send any buffered bytes and close the response. Idempotent."""
        if self._finished:
            return
        if not self.headers_sent:
            await self.write_head(200)
        chunk = bytes(self._buffer)
        self._buffer.clear()
        self._finished = True
        await self._send({"type": "http.response.body", "body": chunk, "more_body": False})


class BufferedResponseWriter(_BaseWriter):
    """In-memory response sink. Does not implement ``Flusher``."""

    __slots__ = ("_body",)

    def __init__(self) -> None:
        super().__init__()
        self._body = bytearray()

    async def write_head(self, status: int = 200) -> None:
        self._check_open()
        if self.headers_sent:
            msg = "Headers already sent"
            raise RuntimeError(msg)
        self._status = status

    async def write(self, data: str | bytes) -> None:
        self._check_open()
        if not self.headers_sent:
            self._status = 200
        self._body.extend(_encode(data))

    async def send_response(self, response: Response) -> None:
        self._check_open()
        self.set_header("content-type", response.content_type)
        for name, value in response.headers:
            self.set_header(name, value)
        self._status = response.status
        if _body_allowed(response.status):
            self._body.extend(response.body_bytes)
        self._finished = True

    async def finish(self) -> None:
        if not self.headers_sent:
            self._status = 200
        self._finished = True

    def to_response(self) -> Response:
        """Build a ``Response`` from everything written so far."""
        content_type = "text/html; charset=utf-8"
        extra: list[tuple[str, str]] = []
        for name, value in self._headers:
            if name == "content-type":
                content_type = value
            else:
                extra.append((name, value))
        return Response(
            body=bytes(self._body),
            status=self._status or 200,
            content_type=content_type,
            headers=tuple(extra),
        )


AnyWriter = ResponseWriter | BufferedResponseWriter
