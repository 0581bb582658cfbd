"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Route:
    """One entry in the route table: an exact method + literal path."""

    method: str
    path: str
    handler: Callable[..., Any]


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful lookup.

    ``path_params`` is always empty: paths are matched literally.
    """

    route: Route
    path_params: dict[str, str] = field(default_factory=dict)
