"""Turn spec-supplied names into valid, collision-checked Python identifiers.

    sanitize("list-tasks")  -> "list_tasks"
    sanitize("/tasks/{id}") -> "_tasks__id_"
    sanitize("2fa")         -> "_2fa"
    sanitize("class")       -> "class_"
"""

import keyword
import re

from openapi_scaffold.errors import IdentifierCollisionError

_INVALID_CHARS = re.compile(r"[^0-9A-Za-z_]")


def sanitize(raw: str) -> str:
    """Replace every character that is not alphanumeric or '_' with '_'."""
    name = _INVALID_CHARS.sub("_", raw)
    if not name or name[0].isdigit():
        name = "_" + name
    if keyword.iskeyword(name):
        name += "_"
    return name


def handler_name(method: str, path: str, operation_id: str | None = None) -> str:
    """Name of the stub handler for an operation.

    The operationId wins when present; otherwise the name is synthesized
    from the method and the path.
    """
    if operation_id:
        return sanitize(operation_id)
    return f"handle_{method.lower()}_{_INVALID_CHARS.sub('_', path)}"


class Namespace:
    """Set of identifiers that must stay distinct, e.g. one module's globals."""

    def __init__(self, label: str, reserved: tuple[str, ...] = ()):
        self.label = label
        self._owners: dict[str, str] = {}
        for name in reserved:
            self._owners[name] = f"<reserved {name}>"

    def claim(self, identifier: str, raw: str) -> str:
        """Register identifier as produced from raw.

        Claiming the same identifier twice for the same raw name is a no-op;
        a different raw name is a collision.
        """
        owner = self._owners.get(identifier)
        if owner is not None and owner != raw:
            raise IdentifierCollisionError(identifier, owner, raw, self.label)
        self._owners[identifier] = raw
        return identifier

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._owners
