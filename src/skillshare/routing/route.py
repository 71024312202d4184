"""Route table entries and match results."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Route:
    """One row of the route table: a path template, its methods, its handler."""

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    name: str | None = None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """The route that answered a request and its decoded ``{name}`` captures."""

    route: Route
    path_params: dict[str, str]
