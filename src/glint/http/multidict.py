"""Read-only multi-valued string mappings.

Headers, query parameters and form fields all map a key to one or more
string values. ``MultiDict`` holds them as ``key -> [values]``; indexing
returns the first value and ``get_list`` returns every value.
"""

from collections.abc import Iterable, Iterator, Mapping
from urllib.parse import parse_qs


class MultiDict(Mapping[str, str]):
    """Immutable ``str -> [str, ...]`` mapping."""

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, list[str]] | None = None) -> None:
        object.__setattr__(self, "_data", {k: list(v) for k, v in (data or {}).items()})

    def _key(self, key: str) -> str:
        return key

    def __getitem__(self, key: str) -> str:
        values = self._data.get(self._key(key))
        if not values:
            raise KeyError(key)
        return values[0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._key(key) in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self)!r})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(self._key(key))
        return values[0] if values else default

    def get_list(self, key: str) -> list[str]:
        """Return every value for *key* (checkboxes, repeated headers)."""
        return list(self._data.get(self._key(key), []))


class Headers(MultiDict):
    """Case-insensitive request headers built from ASGI byte pairs.

    Keys are lower-cased; values are decoded as latin-1.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: Iterable[tuple[bytes, bytes]] = ()) -> None:
        raw = tuple(raw)
        grouped: dict[str, list[str]] = {}
        for name, value in raw:
            grouped.setdefault(name.decode("latin-1").lower(), []).append(value.decode("latin-1"))
        super().__init__(grouped)
        object.__setattr__(self, "_raw", raw)

    def _key(self, key: str) -> str:
        return key.lower()

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        return self._raw


class QueryParams(MultiDict):
    """Parsed query string. Blank values are kept."""

    __slots__ = ()

    def __init__(self, query_string: bytes = b"") -> None:
        super().__init__(parse_qs(query_string.decode("latin-1"), keep_blank_values=True))
