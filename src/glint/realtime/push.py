"""Server push — stream a component's rendered markup on a timer.

``push_stream(component)`` builds a route handler that turns the response
into a ``text/event-stream`` and re-renders the component every tick
until the client goes away::

    app.handle("GET", "/sse/counter", push_stream(counter))

Lifecycle of one connection::

    OPEN     headers sent (after the sink is checked for flush support)
    TICKING  timer armed; each tick writes one frame and flushes
    CLOSED   cancellation observed or the loop ended; timer released once

Cancellation comes from three places: the ASGI ``http.disconnect``
message (watched by a task running beside the loop), ``ctx.cancel()``,
and task cancellation at server shutdown. A tick that fires after
cancellation has been signalled is dropped, and nothing is written once
the stream is closed.
"""

import enum
import logging
from collections.abc import Callable

import anyio

from glint._internal.types import Handler
from glint.components.component import Component
from glint.context import Context
from glint.errors import RenderError, StreamingUnsupportedError
from glint.http.writer import Flusher
from glint.realtime.events import SSEEvent
from glint.realtime.ticker import Ticker

logger = logging.getLogger("glint.realtime")

DEFAULT_INTERVAL = 1.0

SSE_HEADERS: tuple[tuple[str, str], ...] = (
    ("content-type", "text/event-stream"),
    ("cache-control", "no-cache"),
    ("connection", "keep-alive"),
    ("x-accel-buffering", "no"),
)

TickerFactory = Callable[[float], Ticker]


class StreamState(enum.Enum):
    OPEN = "open"
    TICKING = "ticking"
    CLOSED = "closed"


def render_frame(component: Component) -> str:
    """Render *component* into one SSE frame.

    A render failure becomes an ``Error:`` frame instead of an exception,
    so one bad tick does not end the stream.
    """
    try:
        html = component.render()
    except RenderError as exc:
        logger.warning("Push render failed for %r: %s", component.name, exc)
        return SSEEvent(data=f"Error: {exc}").encode()
    return SSEEvent(data=html).encode()


class PushStream:
    """One live push connection for one component.

    ``frames`` counts the frames written; ``state`` follows the
    OPEN → TICKING → CLOSED lifecycle.
    """

    __slots__ = ("component", "ctx", "frames", "interval", "state", "ticker_factory")

    def __init__(
        self,
        component: Component,
        ctx: Context,
        *,
        interval: float = DEFAULT_INTERVAL,
        ticker_factory: TickerFactory = Ticker,
    ) -> None:
        self.component = component
        self.ctx = ctx
        self.interval = interval
        self.ticker_factory = ticker_factory
        self.frames = 0
        self.state: StreamState | None = None

    async def run(self) -> None:
        writer = self.ctx.writer
        if not isinstance(writer, Flusher):
            logger.error(
                "Streaming not supported by %s for %s", type(writer).__name__, self.ctx.path
            )
            raise StreamingUnsupportedError

        for name, value in SSE_HEADERS:
            writer.set_header(name, value)
        await writer.write_head(200)
        await writer.flush()
        self.state = StreamState.OPEN
        logger.debug("Push stream opened for %r", self.component.name)

        ticker = self.ticker_factory(self.interval)
        try:
            async with anyio.create_task_group() as tg:
                tg.start_soon(self._watch_disconnect)
                self.state = StreamState.TICKING
                try:
                    await self._tick_loop(ticker)
                finally:
                    tg.cancel_scope.cancel()
        finally:
            ticker.stop()
            self.state = StreamState.CLOSED
            if self.ctx.cancelled.is_set():
                writer.abandon()
            logger.debug(
                "Push stream closed for %r after %d frame(s)", self.component.name, self.frames
            )

    async def _tick_loop(self, ticker: Ticker) -> None:
        writer = self.ctx.writer
        cancelled = self.ctx.cancelled
        while True:
            fired = await ticker.wait(cancelled)
            if not fired or cancelled.is_set():
                return
            frame = render_frame(self.component)
            try:
                await writer.write(frame)
                await writer.flush()  # type: ignore[union-attr]
            except OSError:
                logger.debug("Push write failed for %r; client gone", self.component.name)
                self.ctx.cancel()
                return
            self.frames += 1

    async def _watch_disconnect(self) -> None:
        await self.ctx.request.wait_disconnect()
        self.ctx.cancel()


def push_stream(
    component: Component,
    *,
    interval: float = DEFAULT_INTERVAL,
    ticker_factory: TickerFactory = Ticker,
) -> Handler:
    """Build a GET handler that pushes *component* every *interval* seconds."""

    async def handler(ctx: Context) -> None:
        stream = PushStream(component, ctx, interval=interval, ticker_factory=ticker_factory)
        await stream.run()

    return handler
