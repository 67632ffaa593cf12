"""Engine process invocation with an explicit argument vector."""

import asyncio
import codecs
import shlex
from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from enginegate.errors import SpawnError

_CHUNK_SIZE = 4096


@dataclass(frozen=True)
class ProcessResult:
    """Captured output of one engine run. returncode is informational only."""
    stdout: str
    stderr: str
    returncode: int | None = None


def _check_argv(argv: Sequence[str]) -> list[str]:
    # A bare string would be split into characters or handed to a shell.
    if isinstance(argv, (str, bytes, bytearray)):
        raise TypeError("argv must be a sequence of discrete arguments, not a single string")
    args = list(argv)
    for arg in args:
        if not isinstance(arg, str):
            raise TypeError(f"argv items must be str, got {type(arg).__name__}")
    return args


async def _drain(stream: asyncio.StreamReader | None, chunks: list[str]) -> None:
    if stream is None:
        return
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    while True:
        data = await stream.read(_CHUNK_SIZE)
        if not data:
            break
        chunks.append(decoder.decode(data))
    chunks.append(decoder.decode(b"", final=True))


class ProcessInvoker:
    """Spawn a binary directly (no shell) and collect its output.

    A non-zero exit is not a failure: the engine reports operation errors on
    stdout/stderr. Only launch failures raise. There is no timeout, and
    cancelling the caller does not terminate the child.
    """

    async def invoke(self, binary: str, argv: Sequence[str]) -> ProcessResult:
        args = _check_argv(argv)
        if not isinstance(binary, str) or not binary:
            raise TypeError("binary must be a non-empty str")

        try:
            process = await asyncio.create_subprocess_exec(
                binary,
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise SpawnError(binary, "executable not found") from e
        except PermissionError as e:
            raise SpawnError(binary, "permission denied") from e
        except OSError as e:
            raise SpawnError(binary, str(e)) from e

        logger.debug(f"Spawned pid {process.pid}: {shlex.join([binary, *args])}")

        out_chunks: list[str] = []
        err_chunks: list[str] = []
        await asyncio.gather(
            _drain(process.stdout, out_chunks),
            _drain(process.stderr, err_chunks),
        )
        returncode = await process.wait()

        if returncode != 0:
            logger.debug(f"Process {process.pid} exited with code {returncode}")

        return ProcessResult(
            stdout="".join(out_chunks),
            stderr="".join(err_chunks),
            returncode=returncode,
        )
