"""Security utilities: path traversal protection for engine project paths."""

from enginegate.errors import InvalidPathError

# Checked against the raw string, lowercased. Never decode before matching:
# decoding first reopens the single and double encoding bypasses.
_ENCODED_TRAVERSAL_MARKERS = (
    "%2e%2e",        # ..
    "%252e%252e",    # double-encoded ..
    "%2e.",          # mixed
    ".%2e",          # mixed
    "%5c%2e%2e%5c",  # \..\
)


def validate_path(path: str) -> bool:
    """Return True if path is free of traversal markers, literal or encoded.

    Any occurrence of ``..`` is rejected, not just whole segments, so
    ``.../etc`` and ``a...b`` fail too. Dotted filenames and a leading ``./``
    are accepted.
    """
    if not isinstance(path, str) or not path:
        return False

    if "\0" in path:
        return False

    if ".." in path or "..\\" in path:
        return False

    lowered = path.lower()
    for marker in _ENCODED_TRAVERSAL_MARKERS:
        if marker in lowered:
            return False

    return True


def normalize_path(path: str) -> str:
    """Convert separators for the engine. Only valid for already-validated paths."""
    if not validate_path(path):
        raise InvalidPathError(path)
    return path.replace("\\", "/")
