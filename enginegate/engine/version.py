"""Engine version parsing and lookup."""

import re

from enginegate.engine.process import ProcessInvoker

_VERSION_RE = re.compile(r"^(\d+)\.(\d+)")


def parse_version(version: str) -> tuple[int, int] | None:
    """Extract (major, minor) from strings like '4.4.1.stable.official'."""
    if not isinstance(version, str):
        return None
    match = _VERSION_RE.match(version)
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def is_version_at_least(version: str, major: int, minor: int) -> bool:
    parsed = parse_version(version)
    if parsed is None:
        return False
    return parsed >= (major, minor)


def is_godot_44_or_later(version: str) -> bool:
    return is_version_at_least(version, 4, 4)


async def get_engine_version(engine_path: str, invoker: ProcessInvoker | None = None) -> str:
    """Run `<engine> --version` and return its trimmed stdout."""
    invoker = invoker or ProcessInvoker()
    result = await invoker.invoke(engine_path, ["--version"])
    return result.stdout.strip()
