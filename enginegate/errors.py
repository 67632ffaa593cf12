"""Exceptions raised by the execution gateway."""


class GatewayError(Exception):
    """Base exception for all gateway errors."""
    pass


class InvalidOperationError(GatewayError, ValueError):
    """Raised when an operation is not in the whitelist. No process is spawned."""

    def __init__(self, operation: object):
        self.operation = operation
        super().__init__(f"Invalid operation: {operation!r}. Operation not in whitelist.")


class InvalidPathError(GatewayError, ValueError):
    """Raised when a path fails traversal validation. No process is spawned."""

    def __init__(self, path: object):
        self.path = path
        super().__init__(f"Invalid path: {path!r}. Path traversal or encoding not allowed.")


class SpawnError(GatewayError, OSError):
    """Raised when the engine binary cannot be launched."""

    def __init__(self, binary: str, reason: str):
        self.binary = binary
        super().__init__(f"Failed to launch {binary}: {reason}")
