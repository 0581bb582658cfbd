"""glint exception hierarchy.

Shared across the component, dispatcher, handler, and push-stream layers
so every module raises and catches the same types.
"""

from dataclasses import dataclass


class GlintError(Exception):
    """Base for all glint-specific errors."""


class ConfigurationError(GlintError):
    """Raised when app setup violates a registration contract."""


class ReservedKeyError(GlintError, ValueError):
    """Raised when a caller tries to write the reserved ``name`` state key."""

    def __init__(self, key: str) -> None:
        super().__init__(f"State key {key!r} is reserved for the component name")
        self.key = key


class ComponentNotFound(GlintError, LookupError):  # noqa: N818
    """No component is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No component registered as {name!r}")
        self.name = name


@dataclass(frozen=True, slots=True)
class HTTPError(GlintError):
    """An error that maps directly to an HTTP status code.

    Raised by the router or by handlers. ``App.dispatch`` catches these
    and writes a response with the matching status.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route is registered for this path under the method."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — no route at all is registered for this HTTP method.

    When the allowed methods are known they are sent in an ``Allow``
    header.
    """

    def __init__(self, allowed: frozenset[str] = frozenset(), detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        headers = (("Allow", allow_value),) if allow_value else ()
        super().__init__(
            status=405,
            detail=detail or "Method Not Allowed",
            headers=headers,
        )


class RenderError(GlintError):
    """A component template could not be compiled or evaluated."""

    def __init__(self, component: str, message: str) -> None:
        super().__init__(f"{component}: {message}")
        self.component = component
        self.message = message


class CallbackFault(GlintError):
    """An update callback raised while mutating component state."""

    def __init__(self, component: str, cause: BaseException) -> None:
        super().__init__(f"{component}: update callback failed: {type(cause).__name__}: {cause}")
        self.component = component
        self.cause = cause


class StreamingUnsupportedError(HTTPError):
    """500 — the response sink cannot flush incrementally.

    Fatal for the one connection that hit it.
    """

    def __init__(self, detail: str = "Streaming not supported") -> None:
        super().__init__(status=500, detail=detail)
