"""Top-level control flow: build, classify, then maybe diff.

Paths, decided after scanning the primary latexmk output:

    nothing typeset         -> pass output through, wait, deliver PDF
    typeset, --async-diff   -> spawn a detached `diffmk --diff-only ...`, then
                               the same as above
    typeset                 -> forward output on a thread while the diff
                               pipeline runs here, then wait and deliver

A diff-only invocation (the detached child) runs only the diff pipeline.
"""

import subprocess
import sys
from dataclasses import dataclass, field
from typing import BinaryIO

from diffmk.diff_pipeline import run_diff_pipeline
from diffmk.errors import CommandFailed, DiffmkError, StreamError, ToolFailed
from diffmk.latexmk import Latexmk
from diffmk.param import Param
from diffmk.process import exit_code
from diffmk.scanner import forward_output, scan_output, start_forwarding

DIFF_ONLY_FLAG = "--diff-only"


def _default_command() -> list[str]:
    return [sys.executable, "-m", "diffmk"]


def _default_argv() -> list[str]:
    return sys.argv[1:]


@dataclass
class HostContext:
    """Process-wide state the dispatcher needs, injectable for tests.

    command: how to re-invoke this program.
    argv: the arguments this invocation was started with.
    stdout: binary sink for latexmk's output (default sys.stdout.buffer).
    detached: the diff-only child, once started. Never waited on.
    """
    command: list[str] = field(default_factory=_default_command)
    argv: list[str] = field(default_factory=_default_argv)
    stdout: BinaryIO | None = None
    detached: subprocess.Popen | None = None

    @property
    def sink(self) -> BinaryIO:
        return self.stdout if self.stdout is not None else sys.stdout.buffer

    def spawn_detached(self) -> subprocess.Popen:
        """Start a diff-only copy of this program and do not wait for it."""
        cmd = [*self.command, DIFF_ONLY_FLAG, *self.argv]
        try:
            self.detached = subprocess.Popen(cmd, start_new_session=True)
        except OSError as e:
            raise CommandFailed(cmd, str(e)) from e
        return self.detached


def dispatch(param: Param, host: HostContext | None = None) -> int:
    """Run one invocation and return its exit code.

    Raises:
        DiffmkError: Fatal failures (spawn, IO, relocation), including
            those of the diff pipeline, and any diff pipeline failure on
            the diff-only path.
    """
    if host is None:
        host = HostContext()

    if param.diff_only:
        run_diff_pipeline(param, inherit_output=True)
        return 0

    latexmk = param.latexmk_runner()
    sink = host.sink
    with latexmk.spawn() as process:
        try:
            typeset = scan_output(process.stdout, sink)
        except OSError as e:
            raise StreamError(str(e)) from e

        if typeset and not param.async_diff:
            return _finish_with_diff(param, latexmk, process, sink)

        if typeset:
            host.spawn_detached()
        return _finish_without_diff(param, latexmk, process, sink)


def _finish_without_diff(param: Param, latexmk: Latexmk, process: subprocess.Popen, sink: BinaryIO) -> int:
    try:
        forward_output(process.stdout, sink)
    except OSError as e:
        raise StreamError(str(e)) from e

    returncode = process.wait()
    if returncode == 0:
        latexmk.relocate()
    if param.latexmk_opts.synctex:
        # No "Output written on" line means LaTeX Workshop skips its SyncTeX refresh
        print(
            f"Output written on dummy.pdf (for LaTeX Workshop's SyncTeX refresh on {param.docfile!r}).",
            flush=True,
        )
    return exit_code(returncode)


def _finish_with_diff(param: Param, latexmk: Latexmk, process: subprocess.Popen, sink: BinaryIO) -> int:
    # Primary writes <doc>.*, the diff pipeline <doc><postfix>.*; no overlap
    forwarder = start_forwarding(process.stdout, sink)
    diff_error = None
    try:
        run_diff_pipeline(param)
    except DiffmkError as e:
        diff_error = e

    returncode = process.wait()
    forwarder.join()
    if returncode != 0:
        return exit_code(returncode)
    latexmk.relocate()
    if diff_error is None:
        return exit_code(returncode)
    # Only a diff tool reporting failure leaves the build's exit code alone
    if not isinstance(diff_error, ToolFailed):
        raise diff_error
    diff_error.report()
    return exit_code(returncode)
