"""Build a LaTeX document with latexmk and, when it changed, a latexdiff PDF.

Usage:
    diffmk <doc> [--tmpdir DIR] [-o OUTDIR] [--async-diff] [latexmk/latexdiff options]

Examples:
    diffmk paper/main                        # paper/main.pdf + paper/diff/main-diff.pdf
    diffmk paper/main --synctex --git        # SyncTeX, diff against the last git commit
    diffmk paper/main -r v1.0                # diff against tag v1.0
    diffmk paper/main --async-diff           # return after the build, diff in background
    diffmk paper/main --tmpdir paper/build -o out

Environment:
    DIFFMK_LATEXMK        latexmk executable (default: latexmk)
    DIFFMK_LATEXDIFF_VC   latexdiff-vc executable (default: latexdiff-vc)
"""

import argparse
import sys
from pathlib import Path

from diffmk import latexdiff, latexdiff_vc, latexmk
from diffmk.dispatch import HostContext, dispatch
from diffmk.errors import DiffmkError
from diffmk.param import Param


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diffmk",
        description="Run latexmk, then typeset a latexdiff-vc diff when the document was rebuilt",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "doc",
        type=Path,
        help='LaTeX document path without extension (e.g. "paper/main" for "paper/main.tex")',
    )
    parser.add_argument(
        "--tmpdir",
        type=Path,
        help="Directory for temporary files (.aux, .log, etc.); must be on the same filesystem as the document (default: <doc_dir>/.temp)",
    )
    parser.add_argument(
        "-o", "--outdir",
        type=Path,
        help="Output directory for the final PDF (default: the document directory)",
    )
    parser.add_argument(
        "--latexmk",
        type=Path,
        help="Path to latexmk executable (default: $DIFFMK_LATEXMK or latexmk)",
    )
    parser.add_argument(
        "--latexdiff-vc",
        type=Path,
        help="Path to latexdiff-vc executable (default: $DIFFMK_LATEXDIFF_VC or latexdiff-vc)",
    )
    # Set only by the detached child that --async-diff spawns
    parser.add_argument("--diff-only", action="store_true", help=argparse.SUPPRESS)
    parser.add_argument(
        "--async-diff",
        action="store_true",
        help="Generate the diff in a detached background process",
    )
    parser.add_argument(
        "-d", "--diff-name",
        help="Name of subdirectory for diff output (default: diff)",
    )
    parser.add_argument(
        "--diff-postfix",
        help="Suffix added to the diff filename, e.g. --diff-postfix=-changes (default: -<diff-name>)",
    )

    latexmk.add_arguments(parser)
    latexdiff.add_arguments(parser)
    latexdiff_vc.add_arguments(parser)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.diff_postfix == "":
        parser.error("--diff-postfix must not be empty (diff files would overwrite the document's)")
    if args.diff_name == "":
        parser.error("--diff-name must not be empty")

    host = HostContext() if argv is None else HostContext(argv=list(argv))
    try:
        param = Param.from_args(args)
        return dispatch(param, host)
    except DiffmkError as e:
        e.report()
        return e.returncode


if __name__ == "__main__":
    sys.exit(main())
