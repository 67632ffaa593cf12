"""Execution gateway: the single entry point for running engine operations."""

import json
import shlex
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

from enginegate.engine.operations import is_valid_operation
from enginegate.engine.parameters import normalize_keys
from enginegate.engine.process import ProcessInvoker, ProcessResult
from enginegate.errors import InvalidOperationError, InvalidPathError
from enginegate.utils.security import normalize_path, validate_path

if TYPE_CHECKING:
    from enginegate.config import Config

OPERATIONS_SCRIPT_PATH = Path(__file__).resolve().parent.parent / "scripts" / "godot_operations.gd"

DEBUG_FLAG = "--debug-godot"


class ExecutionGateway:
    """Whitelist check, path validation, key normalization, then one engine run."""

    def __init__(
        self,
        debug_mode: bool = False,
        script_path: str | Path | None = None,
        invoker: ProcessInvoker | None = None,
    ):
        self.debug_mode = debug_mode
        self.script_path = str(script_path or OPERATIONS_SCRIPT_PATH)
        self.invoker = invoker or ProcessInvoker()

    @classmethod
    def from_config(cls, config: "Config", invoker: ProcessInvoker | None = None) -> "ExecutionGateway":
        return cls(
            debug_mode=config.engine.debug_mode,
            script_path=config.resolved_script_path(),
            invoker=invoker,
        )

    def build_arguments(self, operation: str, parameters: dict[str, Any] | None, project_path: str) -> list[str]:
        """Validate inputs and return the engine argument vector.

        Raises InvalidOperationError or InvalidPathError before anything is
        spawned.
        """
        if not is_valid_operation(operation):
            logger.warning(f"Rejected operation not in whitelist: {operation!r}")
            raise InvalidOperationError(operation)

        if not validate_path(project_path):
            logger.warning(f"Rejected project path: {project_path!r}")
            raise InvalidPathError(project_path)
        normalized_project_path = normalize_path(project_path)

        logger.debug(f"Original operation params: {parameters!r}")
        snake_case_params = normalize_keys(parameters or {})
        params_json = json.dumps(snake_case_params, separators=(",", ":"), ensure_ascii=False)
        logger.debug(f"Converted snake_case params: {params_json}")

        args = [
            "--headless",
            "--path",
            normalized_project_path,
            "--script",
            self.script_path,
            operation,
            params_json,
        ]
        if self.debug_mode:
            args.append(DEBUG_FLAG)
        return args

    async def execute(
        self,
        operation: str,
        parameters: dict[str, Any] | None,
        project_path: str,
        engine_path: str,
    ) -> ProcessResult:
        logger.debug(f"Executing operation: {operation} in project: {project_path}")
        args = self.build_arguments(operation, parameters, project_path)
        # shlex.join is for the log line only; the invoker gets the list.
        logger.debug(f"Executing: {shlex.join([engine_path, *args])}")
        return await self.invoker.invoke(engine_path, args)
