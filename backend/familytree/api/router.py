"""Router that serves every route with and without a trailing slash."""

from typing import Any, Callable

from fastapi import APIRouter
from fastapi.types import DecoratedCallable


class TrailingSlashRouter(APIRouter):
    """APIRouter that registers ``/path`` and ``/path/`` for each route.

    The app runs with ``redirect_slashes=False`` so clients never get a 307 on
    a POST. The alternate form is hidden from the OpenAPI schema.
    """

    def api_route(
        self, path: str, *, include_in_schema: bool = True, **kwargs: Any
    ) -> Callable[[DecoratedCallable], DecoratedCallable]:
        """Register the route under both slash variants."""
        if path.endswith("/") and path != "/":
            alternate_path = path[:-1]
        else:
            alternate_path = path + "/"

        add_primary = super().api_route(path, include_in_schema=include_in_schema, **kwargs)
        add_alternate = super().api_route(alternate_path, include_in_schema=False, **kwargs)

        def decorator(func: DecoratedCallable) -> DecoratedCallable:
            add_alternate(func)
            return add_primary(func)

        return decorator
