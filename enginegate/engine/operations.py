"""Whitelist of engine operations the gateway may forward."""

ALLOWED_OPERATIONS: frozenset[str] = frozenset({
    "scene-create",
    "node-add",
    "node-edit",
    "node-remove",
    "sprite-load",
    "mesh-library-export",
    "scene-save",
    "uid-get",
    "resources-resave",
})

# UID support landed in Godot 4.4
_GODOT_44_OPERATIONS = frozenset({"uid-get", "resources-resave"})


def is_valid_operation(operation: str) -> bool:
    """Exact, case-sensitive whitelist check."""
    return isinstance(operation, str) and operation in ALLOWED_OPERATIONS


def requires_godot_44(operation: str) -> bool:
    return is_valid_operation(operation) and operation in _GODOT_44_OPERATIONS
