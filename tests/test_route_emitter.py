import pytest

from openapi_scaffold.errors import IdentifierCollisionError
from openapi_scaffold.generator.routes import RouteEntry, emit_routes
from openapi_scaffold.parser.base import PathItem

OK = {"responses": {"200": {"description": "OK"}}}


def _paths(raw: dict) -> dict:
    return {path: PathItem.model_validate(item) for path, item in raw.items()}


class TestEmitRoutes:
    def test_operation_id_names_handler(self):
        route_set = emit_routes(_paths({"/tasks": {"get": {"operationId": "listTasks", **OK}}}))
        [route] = route_set.routes
        assert (route.method, route.path, route.handler) == ("get", "/tasks", "listTasks")

    def test_synthesized_handler_name(self):
        route_set = emit_routes(_paths({"/tasks/{id}": {"post": OK}}))
        assert route_set.routes[0].handler == "handle_post__tasks__id_"

    def test_get_before_post_and_paths_sorted(self):
        route_set = emit_routes(_paths({
            "/b": {"post": OK, "get": OK},
            "/a": {"post": OK},
        }))
        assert [(r.method, r.path) for r in route_set.routes] == [
            ("post", "/a"),
            ("get", "/b"),
            ("post", "/b"),
        ]

    def test_put_and_delete_reported_unhandled(self):
        route_set = emit_routes(_paths({"/tasks/{id}": {"put": OK, "delete": OK, "get": OK}}))
        assert [r.method for r in route_set.routes] == ["get"]
        assert [str(op) for op in route_set.unhandled] == ["PUT /tasks/{id}", "DELETE /tasks/{id}"]

    def test_synthesized_collision(self):
        with pytest.raises(IdentifierCollisionError) as exc:
            emit_routes(_paths({"/a-b": {"get": OK}, "/a_b": {"get": OK}}))
        assert exc.value.identifier == "handle_get__a_b"

    def test_duplicate_operation_id_collides(self):
        with pytest.raises(IdentifierCollisionError):
            emit_routes(_paths({
                "/a": {"get": {"operationId": "fetch", **OK}},
                "/b": {"get": {"operationId": "fetch", **OK}},
            }))

    def test_different_methods_do_not_collide(self):
        route_set = emit_routes(_paths({"/a-b": {"get": OK}, "/a_b": {"post": OK}}))
        assert len(route_set.routes) == 2

    def test_no_paths(self):
        route_set = emit_routes({})
        assert route_set.routes == []
        assert route_set.unhandled == []


class TestRouteEntryRender:
    def test_registration(self):
        route = RouteEntry(method="get", path="/tasks", handler="listTasks")
        assert route.render_registration() == "app.add_api_route('/tasks', listTasks, methods=['GET'])"

    def test_stub_handler(self):
        route = RouteEntry(method="get", path="/tasks", handler="listTasks")
        assert route.render_handler() == (
            "async def listTasks() -> None:\n"
            '    raise HTTPException(status_code=501, detail="Not implemented")\n'
        )

    def test_summary_becomes_docstring(self):
        route = RouteEntry(method="post", path="/tasks", handler="createTask", summary="Create a task")
        assert '    """Create a task"""\n' in route.render_handler()
