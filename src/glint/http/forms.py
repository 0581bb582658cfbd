"""Form data parsing — URL-encoded and multipart.

URL-encoded bodies use stdlib ``urllib.parse``. ``multipart/form-data``
needs ``python-multipart`` (``pip install glint[forms]``). Uploaded file
parts are kept as raw bytes on ``FormData.files``.
"""

from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qs

from glint.http.multidict import MultiDict

FORM_CONTENT_TYPES = frozenset({"application/x-www-form-urlencoded", "multipart/form-data"})


def is_form_content_type(content_type: str | None) -> bool:
    """True if *content_type* names a form encoding glint can parse."""
    if not content_type:
        return False
    return content_type.lower().split(";")[0].strip() in FORM_CONTENT_TYPES


class FormData(MultiDict):
    """Parsed form fields, plus raw uploaded file contents on ``files``.

    Usage::

        form = await request.form()
        text = form.get("text", "")
    """

    __slots__ = ("_files",)

    def __init__(
        self,
        data: Mapping[str, list[str]] | None = None,
        files: Mapping[str, bytes] | None = None,
    ) -> None:
        super().__init__(data)
        object.__setattr__(self, "_files", dict(files or {}))

    @property
    def files(self) -> Mapping[str, bytes]:
        return self._files


async def parse_form_data(body: bytes, content_type: str) -> FormData:
    """Parse a form body into ``FormData``.

    Raises:
        ConfigurationError: If multipart parsing is needed but
            ``python-multipart`` is not installed.
        ValueError: If the content type is not a supported form encoding.
    """
    ct_lower = content_type.lower().split(";")[0].strip()

    if ct_lower == "application/x-www-form-urlencoded":
        return FormData(parse_qs(body.decode("utf-8"), keep_blank_values=True))

    if ct_lower == "multipart/form-data":
        return _parse_multipart(body, content_type)

    msg = f"Unsupported form content type: {content_type!r}"
    raise ValueError(msg)


def _parse_multipart(body: bytes, content_type: str) -> FormData:
    from glint.errors import ConfigurationError

    try:
        from multipart.multipart import MultipartParser, parse_options_header
    except ImportError:
        msg = (
            "Multipart form parsing requires the 'python-multipart' package. "
            "Install it with: pip install glint[forms]"
        )
        raise ConfigurationError(msg) from None

    _, options = parse_options_header(content_type.encode("latin-1"))
    boundary = options.get(b"boundary")
    if boundary is None:
        msg = "Multipart form data missing boundary parameter"
        raise ValueError(msg)

    data: dict[str, list[str]] = {}
    files: dict[str, bytes] = {}

    current_data = bytearray()
    current_field: str | None = None
    current_is_file = False
    pending_header = ""

    def on_part_begin() -> None:
        nonlocal current_data, current_field, current_is_file
        current_data = bytearray()
        current_field = None
        current_is_file = False

    def on_part_data(chunk: bytes, start: int, end: int) -> None:
        current_data.extend(chunk[start:end])

    def on_part_end() -> None:
        if current_field is None:
            return
        if current_is_file:
            files[current_field] = bytes(current_data)
        else:
            value = current_data.decode("utf-8", errors="replace")
            data.setdefault(current_field, []).append(value)

    def on_header_field(chunk: bytes, start: int, end: int) -> None:
        nonlocal pending_header
        pending_header = chunk[start:end].decode("latin-1").lower()

    def on_header_value(chunk: bytes, start: int, end: int) -> None:
        nonlocal current_field, current_is_file
        if pending_header != "content-disposition":
            return
        _, params = parse_options_header(chunk[start:end])
        name = params.get(b"name")
        if name is not None:
            current_field = name.decode("utf-8")
        current_is_file = b"filename" in params

    callbacks: dict[str, Any] = {
        "on_part_begin": on_part_begin,
        "on_part_data": on_part_data,
        "on_part_end": on_part_end,
        "on_header_field": on_header_field,
        "on_header_value": on_header_value,
    }

    parser = MultipartParser(boundary, callbacks)
    parser.write(body)
    parser.finalize()

    return FormData(data, files)
