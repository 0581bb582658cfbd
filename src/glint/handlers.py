"""Route handler factories that wrap a component.

``update_handler`` turns POSTs into component updates, ``page_handler``
serves a full HTML page around a component's current markup. Push
streams live in ``glint.realtime.push``.
"""

import logging

from kida import Environment

from glint._internal.types import Handler
from glint.components.component import Component
from glint.context import Context
from glint.errors import CallbackFault, RenderError
from glint.http.forms import is_form_content_type
from glint.http.response import Response, text_response
from glint.templating.integration import default_environment, mark_safe

logger = logging.getLogger("glint.server")

DEFAULT_LAYOUT = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>{{ name }}</title></head>
<body>
{{ content }}
<script>
  document.addEventListener("submit", (e) => {
    const form = e.target;
    if (!form.matches("form[data-glint-update]")) return;
    e.preventDefault();
    const body = new URLSearchParams(new FormData(form, e.submitter));
    fetch(form.action, { method: "POST", body });
  });
  const source = new EventSource("{{ stream_url }}");
  source.onmessage = (e) => {
    document.getElementById("{{ name }}").outerHTML = e.data;
  };
</script>
</body>
</html>
"""
"""Page shell used by ``page_handler``.

Context: ``content`` (rendered component, not escaped), ``name``,
``update_url``, ``stream_url``. The component's root element is expected
to carry ``id="{{ name }}"`` so pushed frames can replace it.
"""


def update_handler(component: Component) -> Handler:
    """Build a POST handler that runs ``component.update(ctx)``.

    Non-POST requests get a 405 and never reach the callback. Form bodies
    are read up front into ``ctx.form`` so synchronous callbacks can use
    them. Anything the callback raises is logged and answered with a 500;
    it never propagates to the dispatcher.
    """

    async def handler(ctx: Context) -> Response:
        if ctx.method != "POST":
            return text_response("Method not allowed", status=405).with_header("Allow", "POST")

        if ctx.form is None and is_form_content_type(ctx.request.content_type):
            ctx.form = await ctx.request.form()

        try:
            await component.update(ctx)
        except Exception as exc:
            fault = CallbackFault(component.name, exc)
            logger.exception("%s", fault)
            return text_response("Server error", status=500)

        logger.debug("Updated %r via %s %s", component.name, ctx.method, ctx.path)
        return text_response("OK")

    return handler


def page_handler(
    component: Component,
    layout: str = DEFAULT_LAYOUT,
    *,
    update_url: str = "",
    stream_url: str = "",
    env: Environment | None = None,
) -> Handler:
    """Build a GET handler serving *layout* around the rendered component.

    A ``RenderError`` aborts this one response with a 500.
    """
    environment = env or default_environment()
    page = environment.from_string(layout)

    def handler(ctx: Context) -> Response:
        try:
            html = component.render()
        except RenderError:
            logger.exception("Page render failed for %s", ctx.path)
            return text_response("Failed to render component", status=500)
        body = page.render(
            {
                "content": mark_safe(html),
                "name": component.name,
                "update_url": update_url,
                "stream_url": stream_url,
            }
        )
        return Response(body=body)

    return handler
