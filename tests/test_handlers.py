"""Tests for glint.handlers — update and page handler factories."""

from typing import Any

from glint.components import Component
from glint.context import Context
from glint.handlers import page_handler, update_handler
from glint.http.multidict import Headers
from glint.http.request import Request
from glint.http.writer import BufferedResponseWriter

COUNTER_TEMPLATE = '<div id="counter">Count: {{ count }}</div>'
FORM_CT = b"application/x-www-form-urlencoded"


def _increment(component: Component, ctx: Context) -> None:
    component.set_state("count", component.get("count", 0) + 1)


def _ctx(method: str = "POST", path: str = "/update/counter", body: bytes = b"") -> Context:
    async def receive() -> dict[str, Any]:
        return {"type": "http.request", "body": body, "more_body": False}

    headers = Headers(((b"content-type", FORM_CT),)) if body else Headers()
    return Context(
        request=Request(method=method, path=path, headers=headers, _receive=receive),
        writer=BufferedResponseWriter(),
    )


class TestUpdateHandler:
    async def test_post_runs_callback(self) -> None:
        counter = Component("counter", COUNTER_TEMPLATE, {"count": 0}, _increment)
        response = await update_handler(counter)(_ctx())

        assert response.status == 200
        assert response.text == "OK"
        assert counter.get("count") == 1

    async def test_non_post_is_405_without_callback(self) -> None:
        calls: list[str] = []

        def record(component: Component, ctx: Context) -> None:
            calls.append(ctx.method)

        counter = Component("counter", COUNTER_TEMPLATE, {"count": 0}, record)
        handler = update_handler(counter)
        for method in ("GET", "PUT", "DELETE"):
            response = await handler(_ctx(method=method))
            assert response.status == 405
            assert response.text == "Method not allowed"
            assert response.header("Allow") == "POST"

        assert calls == []

    async def test_callback_fault_is_500_and_contained(self) -> None:
        attempts = 0

        def flaky(component: Component, ctx: Context) -> None:
            nonlocal attempts
            attempts += 1
            if attempts == 1:
                msg = "first call fails"
                raise RuntimeError(msg)
            _increment(component, ctx)

        counter = Component("counter", COUNTER_TEMPLATE, {"count": 0}, flaky)
        handler = update_handler(counter)

        failed = await handler(_ctx())
        assert failed.status == 500
        assert failed.text == "Server error"

        ok = await handler(_ctx())
        assert ok.status == 200
        assert counter.get("count") == 1

    async def test_fault_is_logged(self, caplog) -> None:
        def boom(component: Component, ctx: Context) -> None:
            msg = "kaboom"
            raise ValueError(msg)

        counter = Component("counter", COUNTER_TEMPLATE, {"count": 0}, boom)
        with caplog.at_level("ERROR", logger="glint.server"):
            await update_handler(counter)(_ctx())

        assert "update callback failed" in caplog.text
        assert "kaboom" in caplog.text

    async def test_form_is_preloaded_for_sync_callbacks(self) -> None:
        def add(component: Component, ctx: Context) -> None:
            assert ctx.form is not None
            component.set_state("text", ctx.form.get("text", ""))

        todo = Component("todo", "<p>{{ text }}</p>", {"text": ""}, add)
        response = await update_handler(todo)(_ctx(body=b"text=Buy+milk"))

        assert response.status == 200
        assert todo.get("text") == "Buy milk"

    async def test_no_form_without_form_body(self) -> None:
        seen: list[object] = []

        def record(component: Component, ctx: Context) -> None:
            seen.append(ctx.form)

        await update_handler(Component("c", "<p></p>", on_update=record))(_ctx())
        assert seen == [None]


class TestPageHandler:
    async def test_wraps_rendered_component(self) -> None:
        counter = Component("counter", COUNTER_TEMPLATE, {"count": 7})
        handler = page_handler(counter, stream_url="/sse/counter", update_url="/update/counter")
        response = handler(_ctx(method="GET", path="/"))

        assert response.status == 200
        assert response.content_type.startswith("text/html")
        assert '<div id="counter">Count: 7</div>' in response.text
        assert "/sse/counter" in response.text
        assert "<!DOCTYPE html>" in response.text

    async def test_custom_layout(self) -> None:
        counter = Component("counter", COUNTER_TEMPLATE, {"count": 1})
        layout = "<main data-post='{{ update_url }}'>{{ content }}</main>"
        response = page_handler(counter, layout, update_url="/update/counter")(
            _ctx(method="GET", path="/")
        )
        assert response.text == (
            "<main data-post='/update/counter'><div id=\"counter\">Count: 1</div></main>"
        )

    async def test_render_error_is_500(self) -> None:
        broken = Component("broken", "{{ Count ")
        response = page_handler(broken)(_ctx(method="GET", path="/"))

        assert response.status == 500
        assert response.text == "Failed to render component"
