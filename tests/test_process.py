"""Tests for process.py"""

import subprocess
import sys
import unittest
from unittest.mock import MagicMock, patch

from diffmk.errors import AlreadyReported, CommandFailed, ToolFailed
from diffmk.process import STDERR_FD, exit_code, run_tool


class TestExitCode(unittest.TestCase):
    def test_passes_through_codes(self):
        self.assertEqual(exit_code(0), 0)
        self.assertEqual(exit_code(12), 12)

    def test_signal_and_unknown_become_one(self):
        self.assertEqual(exit_code(-9), 1)
        self.assertEqual(exit_code(None), 1)


class TestRunTool(unittest.TestCase):
    @patch("diffmk.process.subprocess.run")
    def test_quiet_mode_discards_stdout_captures_stderr(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stderr=b"")

        run_tool(["latexdiff-vc", "main.tex"], cwd="/doc")

        kwargs = mock_run.call_args.kwargs
        self.assertEqual(kwargs["stdout"], subprocess.DEVNULL)
        self.assertEqual(kwargs["stderr"], subprocess.PIPE)
        self.assertEqual(kwargs["cwd"], "/doc")

    @patch("diffmk.process.subprocess.run")
    def test_quiet_failure_carries_stderr(self, mock_run):
        mock_run.return_value = MagicMock(returncode=128, stderr=b"fatal: no such revision\n")

        with self.assertRaises(ToolFailed) as ctx:
            run_tool(["latexdiff-vc"])

        self.assertEqual(ctx.exception.stderr, b"fatal: no such revision\n")
        self.assertEqual(ctx.exception.tool_returncode, 128)
        self.assertEqual(ctx.exception.returncode, 1)

    @patch("diffmk.process.subprocess.run")
    def test_inherited_mode_points_stdout_at_stderr(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0)

        run_tool(["latexmk"], inherit_output=True)

        kwargs = mock_run.call_args.kwargs
        self.assertEqual(kwargs["stdout"], STDERR_FD)
        self.assertIsNone(kwargs["stderr"])

    @patch("diffmk.process.subprocess.run")
    def test_inherited_failure_is_already_reported(self, mock_run):
        mock_run.return_value = MagicMock(returncode=2)

        with self.assertRaises(AlreadyReported):
            run_tool(["latexmk"], inherit_output=True)

    def test_missing_executable(self):
        with self.assertRaises(CommandFailed) as ctx:
            run_tool(["/nonexistent/latexdiff-vc"])

        self.assertEqual(ctx.exception.cmd, ["/nonexistent/latexdiff-vc"])

    def test_real_failure_captures_stderr(self):
        cmd = [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"]

        with self.assertRaises(ToolFailed) as ctx:
            run_tool(cmd)

        self.assertEqual(ctx.exception.stderr, b"boom")
        self.assertEqual(ctx.exception.tool_returncode, 3)


if __name__ == "__main__":
    unittest.main()
