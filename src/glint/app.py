"""glint application: route table, component registry, ASGI entry point.

Usage::

    from glint import App, Component

    app = App()
    counter = Component("counter", '<div id="counter">{{ count }}</div>', {"count": 0}, bump)
    app.mount(counter, page="/")
    app.run()

Thread safety:
    Routes and components may be registered at any time. Both tables
    share one lock; lookups take it only for the dictionary access, so
    handlers never run under it.
"""

import inspect
import logging
import threading
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from kida import Environment

from glint._internal.asgi import Receive, Scope, Send
from glint._internal.invoke import invoke
from glint._internal.types import Handler, Hook
from glint.components.component import Component
from glint.config import AppConfig
from glint.context import Context
from glint.errors import ComponentNotFound, ConfigurationError, HTTPError
from glint.handlers import DEFAULT_LAYOUT, page_handler, update_handler
from glint.http.request import Request
from glint.http.response import Response
from glint.http.writer import AnyWriter, BufferedResponseWriter, ResponseWriter
from glint.realtime.push import push_stream
from glint.routing.router import Router
from glint.server.errors import http_error_response, internal_error_response
from glint.templating.integration import create_environment

logger = logging.getLogger("glint.server")


class App:
    """The glint application.

    Owns the exact-match route table and the component registry, and is
    itself the ASGI callable handed to the server.
    """

    __slots__ = (
        "_components",
        "_kida_env",
        "_lock",
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._router = Router()
        self._components: dict[str, Component] = {}
        self._lock = threading.Lock()
        self._startup_hooks: list[Hook] = []
        self._shutdown_hooks: list[Hook] = []
        self._kida_env: Environment = create_environment(self.config)

    # -- Route registration --

    def handle(self, method: str, path: str, handler: Handler) -> None:
        """Register *handler* for an exact *method* and *path*.

        Registering the same pair again replaces the earlier handler.
        """
        self._router.add(method, path, handler)
        logger.debug("Registered %s %s -> %s", method.upper(), path, _handler_name(handler))

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            path: Literal URL path. No parameters or wildcards.
            methods: HTTP methods. Defaults to ``["GET"]``.
        """

        def decorator(func: Handler) -> Handler:
            for method in methods or ["GET"]:
                self.handle(method, path, func)
            return func

        return decorator

    @property
    def routes(self) -> list[tuple[str, str]]:
        """Registered ``(method, path)`` pairs."""
        return [(route.method, route.path) for route in self._router.routes]

    # -- Component registry --

    def register_component(self, component: Component) -> None:
        """Add *component* to the registry under its name.

        A later component with the same name replaces the earlier one.
        Raises ``ConfigurationError`` if the component has no string name.
        """
        name = getattr(component, "name", None)
        if not isinstance(name, str) or not name:
            msg = f"Cannot register {component!r}: component name must be a non-empty string"
            raise ConfigurationError(msg)
        with self._lock:
            self._components[name] = component
        logger.debug("Registered component %r", name)

    def component(self, name: str) -> Component:
        """Return the component registered as *name*."""
        with self._lock:
            try:
                return self._components[name]
            except KeyError:
                raise ComponentNotFound(name) from None

    @property
    def components(self) -> Mapping[str, Component]:
        """Read-only snapshot of the registry."""
        with self._lock:
            return MappingProxyType(dict(self._components))

    def mount(
        self,
        component: Component,
        *,
        page: str | None = None,
        layout: str = DEFAULT_LAYOUT,
    ) -> None:
        """Register *component* and wire its standard routes.

        - ``POST {update_prefix}/{name}`` runs the update callback
        - ``GET {stream_prefix}/{name}`` pushes renders every ``push_interval``
        - ``GET {page}`` serves *layout* around the component, if *page* is given
        """
        self.register_component(component)
        update_url = f"{self.config.update_prefix}/{component.name}"
        stream_url = f"{self.config.stream_prefix}/{component.name}"
        self.handle("POST", update_url, update_handler(component))
        self.handle(
            "GET",
            stream_url,
            push_stream(component, interval=self.config.push_interval),
        )
        if page is not None:
            self.handle(
                "GET",
                page,
                page_handler(
                    component,
                    layout,
                    update_url=update_url,
                    stream_url=stream_url,
                    env=self._kida_env,
                ),
            )

    @property
    def kida_env(self) -> Environment:
        """The app's kida environment, built from ``AppConfig``."""
        return self._kida_env

    # -- Lifecycle hooks --

    def on_startup(self, func: Hook) -> Hook:
        """Register a hook run once when the server starts (sync or async)."""
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Hook) -> Hook:
        """Register a hook run once when the server stops (sync or async)."""
        self._shutdown_hooks.append(func)
        return func

    async def startup(self) -> None:
        for hook in self._startup_hooks:
            await invoke(hook)

    async def shutdown(self) -> None:
        for hook in self._shutdown_hooks:
            await invoke(hook)

    # -- Dispatch --

    async def dispatch(self, request: Request, writer: AnyWriter) -> None:
        """Route *request* to exactly one handler, or answer with an error.

        1. No route for the method: 405. 2. No route for the path under
        that method: 404. 3. Otherwise a fresh ``Context`` is built and
        the handler runs. Handler failures become error responses here;
        nothing raised by a handler escapes this method.
        """
        try:
            match = self._router.match(request.method, request.path)
        except HTTPError as exc:
            await self._write(writer, http_error_response(exc, request), request)
            return

        ctx = Context(request=request, writer=writer, params=dict(match.path_params))
        try:
            result = await invoke(match.route.handler, ctx)
            response = _coerce_result(result)
        except HTTPError as exc:
            response = http_error_response(exc, request)
        except Exception as exc:
            response = internal_error_response(exc, request, debug=self.config.debug)

        await self._write(writer, response, request)

    async def _write(self, writer: AnyWriter, response: Response | None, request: Request) -> None:
        try:
            if response is not None:
                if writer.headers_sent or writer.finished:
                    logger.error(
                        "Dropping %d response for %s %s: output already started",
                        response.status,
                        request.method,
                        request.path,
                    )
                else:
                    await writer.send_response(response)
            await writer.finish()
        except OSError:
            logger.debug("Client went away during %s %s", request.method, request.path)

    async def handle_buffered(self, request: Request) -> Response:
        """Dispatch *request* in-process and return the buffered response.

        The buffered sink cannot flush, so push-stream routes answer 500.
        """
        writer = BufferedResponseWriter()
        await self.dispatch(request, writer)
        return writer.to_response()

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the app with pounce until interrupted."""
        from glint.server.serve import run_server

        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            workers=self.config.workers,
            reload=self.config.debug,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        request = Request.from_asgi(dict(scope), receive)
        await self.dispatch(request, ResponseWriter(send))

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    logger.exception("Startup hook failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return


def _coerce_result(result: Any) -> Response | None:
    """Turn a handler's return value into a Response (or None if it wrote directly)."""
    if result is None or isinstance(result, Response):
        return result
    if isinstance(result, str | bytes):
        return Response(body=result)
    msg = f"Handler returned unsupported type {type(result).__name__}"
    raise TypeError(msg)


def _handler_name(handler: Handler) -> str:
    if inspect.isfunction(handler) or inspect.ismethod(handler):
        return handler.__qualname__
    return type(handler).__name__
