"""Tests for glint.routing.router — exact-match route table."""

import threading

import pytest

from glint.errors import MethodNotAllowed, NotFound
from glint.routing.router import Router


def _handler() -> str:
    return "ok"


def _other() -> str:
    return "other"


class TestRouterMatch:
    def test_exact_match(self) -> None:
        r = Router()
        r.add("GET", "/", _handler)
        match = r.match("GET", "/")
        assert match.route.handler is _handler
        assert match.route.method == "GET"
        assert match.path_params == {}

    def test_method_is_case_insensitive(self) -> None:
        r = Router()
        r.add("post", "/update/counter", _handler)
        assert r.match("POST", "/update/counter").route.method == "POST"
        assert r.match("post", "/update/counter").route.handler is _handler

    def test_path_is_literal(self) -> None:
        r = Router()
        r.add("GET", "/sse/counter", _handler)
        with pytest.raises(NotFound):
            r.match("GET", "/sse/counter/")
        with pytest.raises(NotFound):
            r.match("GET", "/sse/Counter")

    def test_same_path_different_methods(self) -> None:
        r = Router()
        r.add("GET", "/items", _handler)
        r.add("POST", "/items", _other)
        assert r.match("GET", "/items").route.handler is _handler
        assert r.match("POST", "/items").route.handler is _other


class TestRouterErrors:
    def test_unknown_method_is_405(self) -> None:
        r = Router()
        r.add("GET", "/", _handler)
        with pytest.raises(MethodNotAllowed) as exc_info:
            r.match("DELETE", "/")
        assert exc_info.value.status == 405
        assert exc_info.value.headers == (("Allow", "GET"),)

    def test_unknown_method_for_unknown_path_has_no_allow(self) -> None:
        r = Router()
        r.add("GET", "/", _handler)
        with pytest.raises(MethodNotAllowed) as exc_info:
            r.match("PUT", "/nowhere")
        assert exc_info.value.headers == ()

    def test_allow_lists_every_method_for_path(self) -> None:
        r = Router()
        r.add("GET", "/items", _handler)
        r.add("POST", "/items", _handler)
        with pytest.raises(MethodNotAllowed) as exc_info:
            r.match("PATCH", "/items")
        assert exc_info.value.headers == (("Allow", "GET, POST"),)

    def test_known_method_unknown_path_is_404(self) -> None:
        r = Router()
        r.add("GET", "/", _handler)
        r.add("POST", "/update/counter", _handler)
        with pytest.raises(NotFound) as exc_info:
            r.match("GET", "/update/counter")
        assert exc_info.value.status == 404

    def test_empty_router_is_405(self) -> None:
        with pytest.raises(MethodNotAllowed):
            Router().match("GET", "/")


class TestRouterRegistration:
    def test_later_registration_replaces(self) -> None:
        r = Router()
        r.add("GET", "/", _handler)
        r.add("GET", "/", _other)
        assert r.match("GET", "/").route.handler is _other
        assert len(r.routes) == 1

    def test_routes_listing(self) -> None:
        r = Router()
        r.add("GET", "/", _handler)
        r.add("POST", "/update/counter", _handler)
        assert [(route.method, route.path) for route in r.routes] == [
            ("GET", "/"),
            ("POST", "/update/counter"),
        ]

    def test_concurrent_registration(self) -> None:
        r = Router()

        def register(start: int) -> None:
            for i in range(start, start + 100):
                r.add("GET", f"/p/{i}", _handler)

        threads = [threading.Thread(target=register, args=(n * 100,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(r.routes) == 400
        assert r.match("GET", "/p/399").route.handler is _handler
