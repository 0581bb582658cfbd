"""Error responses for the dispatcher.

Maps ``HTTPError`` exceptions and unexpected failures to ``Response``
objects. Every failure that reaches here is contained to the request
that raised it.
"""

import logging
import traceback

from glint.errors import HTTPError
from glint.http.request import Request
from glint.http.response import Response, text_response

logger = logging.getLogger("glint.server")


def http_error_response(exc: HTTPError, request: Request) -> Response:
    """Plain-text response carrying the error's status and headers."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)
    resp = text_response(exc.detail or f"Error {exc.status}", status=exc.status)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


def internal_error_response(exc: Exception, request: Request, *, debug: bool) -> Response:
    """500 response for an unexpected exception. Logs the traceback."""
    logger.exception("500 %s %s", request.method, request.path)
    if debug:
        detail = "".join(traceback.format_exception(exc))
        return text_response(f"Internal Server Error\n\n{detail}", status=500)
    return text_response("Internal Server Error", status=500)
