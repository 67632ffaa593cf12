"""enginegate - command line entry point."""

import asyncio
import json
import sys
from typing import Any

from loguru import logger

from enginegate.config import Config, load_config
from enginegate.engine.gateway import ExecutionGateway
from enginegate.engine.operations import ALLOWED_OPERATIONS
from enginegate.engine.version import get_engine_version, is_godot_44_or_later
from enginegate.errors import InvalidOperationError, InvalidPathError, SpawnError
from enginegate.utils.logger import setup_logging
from enginegate.utils.security import validate_path

EXIT_OK = 0
EXIT_SPAWN_FAILED = 1
EXIT_REJECTED = 2

_VALUE_FLAGS = {"--params", "--engine", "--config"}


def _print_main_usage() -> None:
    print("Usage:")
    print("  enginegate run <operation> <project_path> [--params JSON] [--engine PATH] [--config PATH] [--debug]")
    print("  enginegate version [--engine PATH] [--config PATH]")
    print("  enginegate check-path <path>")
    print("  enginegate help")
    print()
    print("Operations: " + ", ".join(sorted(ALLOWED_OPERATIONS)))


def _parse_flags(args: list[str]) -> tuple[list[str], dict[str, Any]]:
    """Split args into positionals and --flag options. Raises ValueError on a dangling flag."""
    positional: list[str] = []
    options: dict[str, Any] = {"debug": False}
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in _VALUE_FLAGS:
            if i + 1 >= len(args):
                raise ValueError(f"{arg} requires a value")
            options[arg[2:]] = args[i + 1]
            i += 2
            continue
        if arg == "--debug":
            options["debug"] = True
        else:
            positional.append(arg)
        i += 1
    return positional, options


def _parse_params(raw: str | None) -> dict[str, Any]:
    if not raw:
        return {}
    params = json.loads(raw)
    if not isinstance(params, dict):
        raise ValueError("--params must be a JSON object")
    return params


def _load(options: dict[str, Any]) -> Config:
    config = load_config(options.get("config") or "config.yaml")
    if options.get("debug"):
        config.engine.debug_mode = True
    setup_logging("DEBUG" if config.engine.debug_mode else config.logging.level)
    return config


def _run_operation(args: list[str]) -> int:
    try:
        positional, options = _parse_flags(args)
        params = _parse_params(options.get("params"))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_REJECTED
    if len(positional) != 2:
        _print_main_usage()
        return EXIT_REJECTED

    operation, project_path = positional
    config = _load(options)
    engine_path = options.get("engine") or config.engine.path
    gateway = ExecutionGateway.from_config(config)

    try:
        result = asyncio.run(gateway.execute(operation, params, project_path, engine_path))
    except (InvalidOperationError, InvalidPathError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_REJECTED
    except SpawnError as e:
        logger.error(str(e))
        return EXIT_SPAWN_FAILED

    if result.stdout:
        sys.stdout.write(result.stdout)
    if result.stderr:
        sys.stderr.write(result.stderr)
    return EXIT_OK


def _show_version(args: list[str]) -> int:
    try:
        _, options = _parse_flags(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_REJECTED

    config = _load(options)
    engine_path = options.get("engine") or config.engine.path
    try:
        version = asyncio.run(get_engine_version(engine_path))
    except SpawnError as e:
        logger.error(str(e))
        return EXIT_SPAWN_FAILED

    print(version)
    print(f"4.4 or later: {'yes' if is_godot_44_or_later(version) else 'no'}")
    return EXIT_OK


def _check_path(args: list[str]) -> int:
    if len(args) != 1:
        print("Usage: enginegate check-path <path>")
        return EXIT_REJECTED
    if validate_path(args[0]):
        print("ok")
        return EXIT_OK
    print("rejected")
    return EXIT_REJECTED


def run(args: list[str]) -> int:
    if not args or args[0] in {"-h", "--help", "help"}:
        _print_main_usage()
        return EXIT_OK if args else EXIT_REJECTED

    command, rest = args[0], args[1:]
    if command == "run":
        return _run_operation(rest)
    if command == "version":
        return _show_version(rest)
    if command == "check-path":
        return _check_path(rest)

    print(f"Unknown command: {command}", file=sys.stderr)
    _print_main_usage()
    return EXIT_REJECTED


def main():
    """CLI entry point."""
    raise SystemExit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
