"""Errors raised while orchestrating latexmk and latexdiff-vc.

Every failure that should end the run derives from DiffmkError. The CLI
reports it with ``error.report()`` and exits with ``error.returncode``.
"""

import sys
from pathlib import Path


class DiffmkError(Exception):
    """Fatal error; reported to stderr, exit code 1."""

    returncode = 1

    def report(self, file=None):
        print(f"Error: {self}", file=file or sys.stderr)


class FileOperationError(DiffmkError):
    """A filesystem operation (mkdir, canonicalize, copy, rename) failed."""

    def __init__(self, action: str, *paths: Path, reason: str = ""):
        self.action = action
        self.paths = paths
        targets = " -> ".join(str(p) for p in paths)
        message = f"failed to {action} {targets}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class CurrentDirFailed(DiffmkError):
    """The current working directory could not be determined."""

    def __init__(self, reason: str):
        super().__init__(f"failed to get current directory: {reason}")


class CommandFailed(DiffmkError):
    """An external tool could not be started (not found, not executable)."""

    def __init__(self, cmd: list[str], reason: str):
        self.cmd = cmd
        super().__init__(f"failed to run {cmd[0]}: {reason}")


class StreamError(DiffmkError):
    """Reading the build tool's output or writing our own stdout failed."""

    def __init__(self, reason: str):
        super().__init__(f"IO error: {reason}")


class ToolFailed(DiffmkError):
    """An external tool exited non-zero; carries its captured stderr."""

    def __init__(self, stderr: bytes, returncode: int = 1):
        super().__init__(stderr.decode("utf-8", errors="replace"))
        self.stderr = stderr
        self.tool_returncode = returncode

    def report(self, file=None):
        # Raw bytes: LaTeX logs are not guaranteed to be valid UTF-8
        stream = file or sys.stderr
        stream.flush()
        buffer = getattr(stream, "buffer", None)
        if buffer is not None:
            buffer.write(self.stderr)
            buffer.flush()
        else:
            stream.write(str(self))


class AlreadyReported(DiffmkError):
    """The failing tool wrote straight to our stderr; nothing left to print."""

    def __init__(self, returncode: int = 1):
        super().__init__(f"exited with status {returncode}")
        self.tool_returncode = returncode

    def report(self, file=None):
        pass
