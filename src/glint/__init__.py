"""glint — live server-rendered components over Server-Sent Events.

Named, stateful HTML fragments rendered from kida templates, mutated by
POSTed update callbacks, and pushed to the browser on a timer.

Basic usage::

    from glint import App, Component

    def bump(component, ctx):
        component.set_state("count", component.get("count", 0) + 1)

    counter = Component("counter", '<div id="counter">{{ count }}</div>', {"count": 0}, bump)

    app = App()
    app.mount(counter, page="/")
    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "CallbackFault",
    "Component",
    "ComponentNotFound",
    "ConfigurationError",
    "Context",
    "GlintError",
    "HTTPError",
    "MethodNotAllowed",
    "NotFound",
    "RenderError",
    "Request",
    "Response",
    "SSEEvent",
    "StreamingUnsupportedError",
    "page_handler",
    "push_stream",
    "update_handler",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import glint`` fast while providing a flat top-level namespace.
    """
    if name == "App":
        from glint.app import App

        return App

    if name == "AppConfig":
        from glint.config import AppConfig

        return AppConfig

    if name == "Component":
        from glint.components.component import Component

        return Component

    if name == "Context":
        from glint.context import Context

        return Context

    if name == "Request":
        from glint.http.request import Request

        return Request

    if name == "Response":
        from glint.http.response import Response

        return Response

    if name == "SSEEvent":
        from glint.realtime.events import SSEEvent

        return SSEEvent

    if name == "push_stream":
        from glint.realtime.push import push_stream

        return push_stream

    if name in ("page_handler", "update_handler"):
        from glint import handlers as _handlers

        return getattr(_handlers, name)

    if name in (
        "CallbackFault",
        "ComponentNotFound",
        "ConfigurationError",
        "GlintError",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
        "RenderError",
        "StreamingUnsupportedError",
    ):
        from glint import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
