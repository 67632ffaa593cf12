"""Parameter key normalization: camelCase keys in, snake_case keys out."""

import re
from typing import Any

_UPPER_RE = re.compile(r"[A-Z]")


def camel_to_snake(key: str) -> str:
    return _UPPER_RE.sub(lambda m: "_" + m.group(0).lower(), key)


def normalize_keys(tree: Any) -> Any:
    """Return a copy of tree with every mapping key converted to snake_case.

    Recurses through dicts and lists. Values are never touched, list order is
    kept, and the input is not mutated. Values are not sanitized here; safety
    for values comes from passing them as a single argv item.
    """
    if isinstance(tree, dict):
        return {
            (camel_to_snake(k) if isinstance(k, str) else k): normalize_keys(v)
            for k, v in tree.items()
        }
    if isinstance(tree, list):
        return [normalize_keys(item) for item in tree]
    return tree
