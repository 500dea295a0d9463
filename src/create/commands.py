from __future__ import annotations

import asyncio
import logging
import shlex
import shutil
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    args: tuple[str, ...]
    exit_code: int
    stdout: str
    stderr: str


class CommandError(RuntimeError):
    def __init__(
        self,
        message: str,
        *,
        args: tuple[str, ...] = (),
        exit_code: int | None = None,
        stderr: str = "",
    ):
        super().__init__(message)
        self.command_args = args
        self.exit_code = exit_code
        self.stderr = stderr


def _tail(text: str, *, max_chars: int) -> str:
    text = (text or "").strip()
    if len(text) <= max_chars:
        return text
    return "..." + text[-max_chars:]


def format_command(args: list[str] | tuple[str, ...]) -> str:
    return " ".join(shlex.quote(a) for a in args)


class AsyncCommandRunner:
    """Runs a command to completion; non-zero exit raises CommandError.

    No timeout is applied: a hanging command hangs the caller.
    """

    def __init__(self, *, max_error_chars: int = 2000) -> None:
        self._max_error_chars = int(max_error_chars)

    async def run(self, args: list[str], *, cwd: str | None = None) -> CommandResult:
        cmd = tuple(str(a) for a in args)
        if not cmd:
            raise CommandError("Empty command")
        not_found = f"Command not found: {cmd[0]}. Is it installed and on your PATH?"
        # which() honors PATHEXT, so `npm` resolves to npm.cmd on Windows.
        executable = shutil.which(cmd[0])
        if executable is None:
            raise CommandError(not_found, args=cmd)
        logger.debug("Running %s via %s (cwd=%s)", format_command(cmd), executable, cwd)
        try:
            proc = await asyncio.create_subprocess_exec(
                executable,
                *cmd[1:],
                cwd=cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise CommandError(not_found, args=cmd) from exc
        stdout, stderr = await proc.communicate()
        result = CommandResult(
            args=cmd,
            exit_code=int(proc.returncode or 0),
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
        )
        if result.exit_code != 0:
            detail = _tail(result.stderr or result.stdout, max_chars=self._max_error_chars)
            message = f"`{format_command(cmd)}` failed with exit code {result.exit_code}"
            if detail:
                message += f":\n{detail}"
            raise CommandError(
                message, args=cmd, exit_code=result.exit_code, stderr=result.stderr
            )
        return result
