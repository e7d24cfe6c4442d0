"""latexdiff-vc invocation.

latexdiff-vc matches the document against version-control metadata by
relative path, so it always runs inside the document's directory and is
given only relative paths.
"""

import argparse
from dataclasses import dataclass, field, fields
from pathlib import Path

from diffmk import file_utils
from diffmk.latexdiff import LatexdiffOpts
from diffmk.process import run_tool


@dataclass(frozen=True)
class LatexdiffVcOpts:
    """Version-control options for latexdiff-vc."""
    git: bool = False
    svn: bool = False
    hg: bool = False
    cvs: bool = False
    rcs: bool = False
    revision: list[str] = field(default_factory=list)
    flatten: bool = False
    flatten_keep_intermediate: bool = False

    @classmethod
    def from_namespace(cls, args: argparse.Namespace) -> "LatexdiffVcOpts":
        values = {f.name: getattr(args, f.name) for f in fields(cls)}
        values["revision"] = list(values["revision"] or [])
        return cls(**values)

    def args(self) -> list[str]:
        args = []
        for vcs in ("git", "svn", "hg", "cvs", "rcs"):
            if getattr(self, vcs):
                args.append(f"--{vcs}")
                break

        # Bare --revision compares the working copy against the last commit
        if not self.revision:
            args.append("--revision")
        for rev in self.revision:
            args.extend(["--revision", rev])

        if self.flatten:
            args.append("--flatten")
        elif self.flatten_keep_intermediate:
            args.append("--flatten=keep-intermediate")
        return args


def add_arguments(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("latexdiff-vc options")

    vcs = group.add_mutually_exclusive_group()
    vcs.add_argument("--git", action="store_true", help="Use Git for version control operations")
    vcs.add_argument("--svn", action="store_true", help="Use Subversion (SVN) for version control operations")
    vcs.add_argument("--hg", action="store_true", help="Use Mercurial (Hg) for version control operations")
    vcs.add_argument("--cvs", action="store_true", help="Use CVS for version control operations")
    vcs.add_argument("--rcs", action="store_true", help="Use RCS for version control operations")

    group.add_argument(
        "-r", "--revision",
        action="append",
        default=[],
        help="Revision to compare against; repeat for two revisions (default: last commit vs working copy)",
    )

    flat = group.add_mutually_exclusive_group()
    flat.add_argument("--flatten", action="store_true", help="Flatten document by expanding \\input and \\include")
    flat.add_argument(
        "--flatten-keep-intermediate",
        action="store_true",
        help="Flatten document and keep intermediate files for debugging",
    )


@dataclass(frozen=True)
class LatexdiffVc:
    """One latexdiff-vc run producing dir/diff_dir_name/docfile.tex."""
    executable: Path
    dir: Path
    docfile: str
    diff_dir_name: str
    diff_docfile: str
    tmpdir: Path
    verbose: bool
    opts: LatexdiffVcOpts
    latexdiff_opts: LatexdiffOpts

    @property
    def output_tex(self) -> Path:
        """Where latexdiff-vc writes the marked-up source."""
        return self.dir / self.diff_dir_name / f"{self.docfile}.tex"

    @property
    def diff_tex(self) -> Path:
        return self.tmpdir / f"{self.diff_docfile}.tex"

    def command(self) -> list[str]:
        return [
            str(self.executable),
            *self.opts.args(),
            *self.latexdiff_opts.args(self.verbose),
            "--force",
            "-d", self.diff_dir_name,
            f"{self.docfile}.tex",
        ]

    def run(self, inherit_output: bool = False) -> None:
        run_tool(self.command(), cwd=self.dir, inherit_output=inherit_output)

    def relocate_tex(self) -> None:
        """Move the generated source into tmpdir under the postfixed name."""
        file_utils.create_dir_all(self.tmpdir)
        file_utils.rename(self.output_tex, self.diff_tex)
