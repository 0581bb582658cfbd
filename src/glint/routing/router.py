"""Exact-match route table.

A two-level ``method -> path -> Route`` mapping. Paths are literal
strings; there are no parameters, wildcards or trailing-slash rewrites.
Registration is allowed at any time and is serialized by a lock; a
later registration for the same method and path replaces the earlier
one.
"""

import threading

from glint._internal.types import Handler
from glint.errors import MethodNotAllowed, NotFound
from glint.routing.route import Route, RouteMatch


class Router:
    """Exact-match router.

    Usage::

        router = Router()
        router.add("GET", "/", index)
        match = router.match("GET", "/")
        match.route.handler
    """

    __slots__ = ("_lock", "_routes")

    def __init__(self) -> None:
        self._routes: dict[str, dict[str, Route]] = {}
        self._lock = threading.Lock()

    def add(self, method: str, path: str, handler: Handler) -> Route:
        """Register (or replace) the handler for *method* and *path*."""
        route = Route(method=method.upper(), path=path, handler=handler)
        with self._lock:
            self._routes.setdefault(route.method, {})[path] = route
        return route

    @property
    def routes(self) -> list[Route]:
        """All registered routes, grouped by method in registration order."""
        with self._lock:
            return [route for by_path in self._routes.values() for route in by_path.values()]

    def match(self, method: str, path: str) -> RouteMatch:
        """Look up the route for *method* and *path*.

        Raises ``MethodNotAllowed`` if nothing is registered for the
        method at all, and ``NotFound`` if the method is known but the
        path is not.
        """
        method = method.upper()
        with self._lock:
            by_path = self._routes.get(method)
            if by_path is None:
                allowed = frozenset(m for m, paths in self._routes.items() if path in paths)
                raise MethodNotAllowed(allowed)
            route = by_path.get(path)
        if route is None:
            raise NotFound(f"No route matches {method} {path!r}")
        return RouteMatch(route=route)
