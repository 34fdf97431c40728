"""Lower path operations into FastAPI route entries and stub handlers.

Only GET and POST are lowered. PUT and DELETE operations are parsed but
reported back as unhandled so the caller can surface them.

Handlers are fixed-shape placeholders: parameters, request bodies and
response schemas are not wired into their signatures yet.
"""

from typing import Mapping, Optional

from pydantic import BaseModel

from openapi_scaffold.generator.dto import docstring_literal
from openapi_scaffold.generator.naming import Namespace, handler_name
from openapi_scaffold.parser.base import Operation, PathItem

LOWERED_METHODS = ("get", "post")


class RouteEntry(BaseModel):
    """Associates an HTTP method and path template with a handler."""

    method: str
    path: str
    handler: str
    summary: Optional[str] = None

    def render_registration(self, app_name: str = "app") -> str:
        return f"{app_name}.add_api_route({self.path!r}, {self.handler}, methods=[{self.method.upper()!r}])"

    def render_handler(self) -> str:
        lines = [f"async def {self.handler}() -> None:"]
        if self.summary:
            lines.append(f"    {docstring_literal(self.summary)}")
        lines.append('    raise HTTPException(status_code=501, detail="Not implemented")')
        return "\n".join(lines) + "\n"


class UnhandledOperation(BaseModel):
    method: str
    path: str

    def __str__(self):
        return f"{self.method.upper()} {self.path}"


class RouteSet(BaseModel):
    routes: list[RouteEntry] = []
    unhandled: list[UnhandledOperation] = []


def emit_routes(paths: Mapping[str, PathItem], namespace: Namespace | None = None) -> RouteSet:
    """Build route entries for every GET/POST operation, sorted by path.

    Handler names are claimed in ``namespace``; two operations that end up
    with the same handler name raise IdentifierCollisionError.
    """
    namespace = namespace or Namespace("handler names")
    route_set = RouteSet()
    for path in sorted(paths):
        for method, operation in paths[path].operations():
            if method not in LOWERED_METHODS:
                route_set.unhandled.append(UnhandledOperation(method=method, path=path))
                continue
            route_set.routes.append(emit_route(method, path, operation, namespace))
    return route_set


def emit_route(method: str, path: str, operation: Operation, namespace: Namespace) -> RouteEntry:
    name = handler_name(method, path, operation.operation_id)
    origin = f"{method.upper()} {path}"
    if operation.operation_id:
        origin += f" (operationId {operation.operation_id!r})"
    namespace.claim(name, origin)
    return RouteEntry(method=method, path=path, handler=name, summary=operation.summary)
