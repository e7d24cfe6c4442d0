"""Run external tools in the foreground and classify their failures."""

import subprocess
from pathlib import Path

from diffmk.errors import AlreadyReported, CommandFailed, ToolFailed

# File descriptor of our own stderr; diff-only children write there
STDERR_FD = 2


def exit_code(returncode: int | None) -> int:
    """Map a subprocess return code to a process exit code.

    Signal-terminated children report a negative code; those become 1.
    """
    if returncode is None or returncode < 0:
        return 1
    return returncode


def run_tool(
    cmd: list[str],
    *,
    cwd: Path | None = None,
    inherit_output: bool = False,
) -> subprocess.CompletedProcess:
    """Run a tool to completion.

    Args:
        cmd: Command line, executable first.
        cwd: Working directory for the tool.
        inherit_output: Send the tool's output straight to our stderr
            instead of capturing it. Used when nobody reads our stdout.

    Returns:
        The completed process (returncode 0).

    Raises:
        CommandFailed: The tool could not be started.
        ToolFailed: Quiet mode and the tool exited non-zero; carries stderr.
        AlreadyReported: Inherited mode and the tool exited non-zero.
    """
    if inherit_output:
        stdout, stderr = STDERR_FD, None
    else:
        stdout, stderr = subprocess.DEVNULL, subprocess.PIPE

    try:
        result = subprocess.run(cmd, cwd=cwd, stdout=stdout, stderr=stderr)
    except OSError as e:
        raise CommandFailed(cmd, str(e)) from e

    if result.returncode != 0:
        if inherit_output:
            raise AlreadyReported(exit_code(result.returncode))
        raise ToolFailed(result.stderr or b"", exit_code(result.returncode))
    return result
