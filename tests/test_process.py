import json
import os
import sys
from pathlib import Path

import pytest

from enginegate.engine.process import ProcessInvoker
from enginegate.errors import SpawnError

ECHO_ARGV = "import json, sys; print(json.dumps(sys.argv[1:]))"


@pytest.mark.asyncio
async def test_invoke_passes_arguments_verbatim() -> None:
    hostile = ["; echo pwned", "$(whoami)", "`id`", "a b c", "|cat /etc/passwd", '{"k":"v"}']
    result = await ProcessInvoker().invoke(sys.executable, ["-c", ECHO_ARGV, *hostile])

    assert json.loads(result.stdout) == hostile
    assert result.returncode == 0


@pytest.mark.asyncio
async def test_invoke_captures_stdout_and_stderr_separately() -> None:
    code = "import sys; sys.stdout.write('out-line\\n'); sys.stderr.write('err-line\\n')"
    result = await ProcessInvoker().invoke(sys.executable, ["-c", code])

    assert result.stdout == "out-line\n"
    assert result.stderr == "err-line\n"


@pytest.mark.asyncio
async def test_invoke_non_zero_exit_still_returns_output() -> None:
    code = "import sys; print('Failed to load scene'); sys.stderr.write('ERROR\\n'); sys.exit(3)"
    result = await ProcessInvoker().invoke(sys.executable, ["-c", code])

    assert "Failed to load scene" in result.stdout
    assert "ERROR" in result.stderr
    assert result.returncode == 3


@pytest.mark.asyncio
async def test_invoke_collects_large_output_from_both_streams() -> None:
    code = (
        "import sys\n"
        "for _ in range(50):\n"
        "    sys.stdout.write('o' * 4000)\n"
        "    sys.stderr.write('e' * 4000)\n"
    )
    result = await ProcessInvoker().invoke(sys.executable, ["-c", code])

    assert result.stdout == "o" * 200000
    assert result.stderr == "e" * 200000


@pytest.mark.asyncio
async def test_invoke_decodes_utf8_output() -> None:
    code = "import sys; sys.stdout.buffer.write('h\u00e9llo \u2713'.encode('utf-8'))"
    result = await ProcessInvoker().invoke(sys.executable, ["-c", code])

    assert result.stdout == "h\u00e9llo \u2713"


@pytest.mark.asyncio
async def test_invoke_missing_binary_raises_spawn_error(tmp_path: Path) -> None:
    with pytest.raises(SpawnError) as exc_info:
        await ProcessInvoker().invoke(str(tmp_path / "no-such-engine"), ["--version"])
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)


@pytest.mark.asyncio
@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
async def test_invoke_non_executable_raises_spawn_error(tmp_path: Path) -> None:
    binary = tmp_path / "engine"
    binary.write_text("#!/bin/sh\necho hi\n")
    os.chmod(binary, 0o644)

    with pytest.raises(SpawnError):
        await ProcessInvoker().invoke(str(binary), [])


@pytest.mark.asyncio
async def test_invoke_refuses_single_string_argv() -> None:
    with pytest.raises(TypeError):
        await ProcessInvoker().invoke(sys.executable, "-c print(1)")  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_invoke_refuses_non_string_items() -> None:
    with pytest.raises(TypeError):
        await ProcessInvoker().invoke(sys.executable, ["-c", 1])  # type: ignore[list-item]
